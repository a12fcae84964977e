"""
Predicted public support for a mandate from the mixed logit model.

Two alternatives are offered to each simulated respondent: the mandate as
configured, and no mandate (opt out). With random coefficients
beta_r = mean + sd * z_r, the probability respondent r prefers the mandate is
the binary logit

    p_r = 1 / (1 + exp(-(U_mandate,r - U_opt_out,r)))

and predicted support is the average of p_r over the draw panel.

Missing strata and non-finite results come back as None ("support
unknown"); callers must not read that as zero support.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np

from mandeval.mixed_logit.coefficients import (
    COEFFICIENT_NAMES,
    CoefficientTable,
    Stratum,
    is_level,
    lookup_stratum,
)
from mandeval.mixed_logit.draws import RandomDrawPanel

logger = logging.getLogger(__name__)

# Bound on each utility so exp(-(u_m - u_o)) stays finite in float64
UTILITY_CLAMP = 40.0

_IDX = {name: i for i, name in enumerate(COEFFICIENT_NAMES)}


def mandate_utilities(config, betas: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Per-draw utilities (U_mandate, U_opt_out) for betas of shape (R, K).

    Attribute levels not recognised fall through to the baseline level.
    """
    betas = np.atleast_2d(betas)
    u_mandate = betas[:, _IDX["asc_mandate"]].copy()
    u_opt_out = betas[:, _IDX["asc_opt_out"]].copy()

    if config.scope == "all":
        u_mandate += betas[:, _IDX["scope_all"]]

    if config.exemptions == "medical_religious":
        u_mandate += betas[:, _IDX["exemptions_moderate"]]
    elif config.exemptions == "medical_religious_personal":
        u_mandate += betas[:, _IDX["exemptions_broad"]]

    if is_level(config.coverage, 0.7):
        u_mandate += betas[:, _IDX["coverage_70"]]
    elif is_level(config.coverage, 0.9):
        u_mandate += betas[:, _IDX["coverage_90"]]

    u_mandate += betas[:, _IDX["lives"]] * float(config.lives_per_100k or 0.0)
    return u_mandate, u_opt_out


def choice_probabilities(u_mandate: np.ndarray, u_opt_out: np.ndarray) -> np.ndarray:
    """Binary logit P(mandate) per draw, utilities clamped to +/- UTILITY_CLAMP."""
    u_m = np.clip(u_mandate, -UTILITY_CLAMP, UTILITY_CLAMP)
    u_o = np.clip(u_opt_out, -UTILITY_CLAMP, UTILITY_CLAMP)
    return 1.0 / (1.0 + np.exp(-(u_m - u_o)))


def _finite_share(p: np.ndarray) -> Optional[float]:
    share = float(np.mean(p))
    if not math.isfinite(share):
        return None
    return min(max(share, 0.0), 1.0)


def simulate_support(
    config, stratum: Stratum, panel: RandomDrawPanel
) -> Optional[float]:
    """Monte Carlo average of P(mandate) over the panel for one stratum."""
    mean = stratum.mean.as_array(fill=np.nan)
    sd = stratum.sd_array()
    z = panel.aligned(COEFFICIENT_NAMES)  # (R, K)

    betas = mean[np.newaxis, :] + sd[np.newaxis, :] * z
    with np.errstate(invalid="ignore"):
        u_mandate, u_opt_out = mandate_utilities(config, betas)
        p = choice_probabilities(u_mandate, u_opt_out)
    return _finite_share(p)


def estimate_support(
    config, table: CoefficientTable, panel: RandomDrawPanel
) -> Optional[float]:
    """Predicted share preferring the mandate over no mandate, or None if unknown."""
    if config is None:
        return None

    stratum = lookup_stratum(table, config.country, config.outbreak)
    if stratum is None:
        logger.debug(
            "No coefficients for stratum (%s, %s); support unknown",
            config.country,
            config.outbreak,
        )
        return None

    support = simulate_support(config, stratum, panel)
    if support is None:
        logger.debug("Non-finite support for %s; treating as unknown", config)
    return support


def plain_logit_support(config, stratum: Stratum) -> Optional[float]:
    """Mean-coefficient logit, i.e. the mixed logit with zero heterogeneity."""
    mean = stratum.mean.as_array(fill=np.nan)
    with np.errstate(invalid="ignore"):
        u_mandate, u_opt_out = mandate_utilities(config, mean[np.newaxis, :])
        p = choice_probabilities(u_mandate, u_opt_out)
    return _finite_share(p)


class SupportEstimator:
    """Coefficient table and draw panel bound together for repeated estimates."""

    def __init__(self, table: CoefficientTable, panel: RandomDrawPanel):
        self.table = table
        self.panel = panel

    def estimate(self, config) -> Optional[float]:
        return estimate_support(config, self.table, self.panel)

    def has_stratum(self, country: str, outbreak: str) -> bool:
        return lookup_stratum(self.table, country, outbreak) is not None
