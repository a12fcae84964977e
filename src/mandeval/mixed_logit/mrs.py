"""Lives-saved equivalents (marginal rates of substitution) for mandate features."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from mandeval.mixed_logit.coefficients import CoefficientTable, is_level, lookup_stratum

MAX_ROWS = 3


@dataclass(frozen=True)
class MRSRow:
    attribute: str
    value: float
    interpretation: str


def _interpret(change: str, mrs: float) -> str:
    if mrs >= 0:
        return (
            f"{change} is as demanding in acceptability terms as losing about "
            f"{mrs:.1f} expected lives saved per 100,000 people."
        )
    return (
        f"{change} increases acceptability, similar to gaining about "
        f"{abs(mrs):.1f} expected lives saved per 100,000 people."
    )


def lives_saved_equivalents(config, table: CoefficientTable) -> Optional[List[MRSRow]]:
    """MRS of each non-baseline design level against lives saved, from mean coefficients.

    Positive values reduce acceptability. None when the stratum or the lives
    coefficient is unavailable.
    """
    stratum = lookup_stratum(table, config.country, config.outbreak)
    if stratum is None:
        return None
    coefs = stratum.mean
    beta_lives = coefs.lives
    if not beta_lives:
        return None

    # (attribute label, change phrase, coefficient)
    changes = []
    if config.scope == "all":
        changes.append(
            (
                "Scope: high-risk occupations -> all occupations & public spaces",
                "Extending the mandate to all occupations and public spaces",
                coefs.scope_all,
            )
        )
    if config.exemptions == "medical_religious":
        changes.append(
            (
                "Exemptions: medical only -> medical + religious",
                "Moving to medical + religious exemptions",
                coefs.exemptions_moderate,
            )
        )
    elif config.exemptions == "medical_religious_personal":
        changes.append(
            (
                "Exemptions: medical only -> medical + religious + personal belief",
                "Allowing medical, religious and personal belief exemptions",
                coefs.exemptions_broad,
            )
        )
    if is_level(config.coverage, 0.7):
        changes.append(
            (
                "Coverage threshold: 50% -> 70% vaccinated",
                "Raising the lifting threshold to 70%",
                coefs.coverage_70,
            )
        )
    elif is_level(config.coverage, 0.9):
        changes.append(
            (
                "Coverage threshold: 50% -> 90% vaccinated",
                "Raising the lifting threshold to 90%",
                coefs.coverage_90,
            )
        )

    rows: List[MRSRow] = []
    for attribute, phrase, beta in changes:
        if beta is None:
            continue
        mrs = -beta / beta_lives
        rows.append(MRSRow(attribute, mrs, _interpret(phrase, mrs)))
    return rows[:MAX_ROWS]
