"""Benefit-cost aggregation for a mandate configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

from mandeval.config.mandate import CostInputs, MandateConfig, Settings

LIVES_BASE = 100_000


@dataclass(frozen=True)
class DerivedMetrics:
    lives_total: float
    benefit: float
    cost_total: float
    net_benefit: float
    bcr: Optional[float]
    # None means the model could not produce a support estimate
    support: Optional[float]

    @property
    def support_pct(self) -> Optional[float]:
        return None if self.support is None else self.support * 100.0

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "DerivedMetrics":
        return cls(**{k: d.get(k) for k in cls.__dataclass_fields__})


def compute_derived(
    settings: Settings,
    config: MandateConfig,
    costs: CostInputs | None,
    support: Optional[float],
) -> DerivedMetrics:
    """Lives saved, monetised benefit, net benefit and BCR for one configuration."""
    lives_total = config.lives_per_100k / LIVES_BASE * settings.population
    benefit = lives_total * settings.vsl_value
    cost_total = costs.total if costs is not None else 0.0

    return DerivedMetrics(
        lives_total=lives_total,
        benefit=benefit,
        cost_total=cost_total,
        net_benefit=benefit - cost_total,
        bcr=benefit / cost_total if cost_total > 0 else None,
        support=support,
    )


def support_status(support: Optional[float]) -> tuple[str, str]:
    """(label, level) where level is one of neutral/bad/med/good."""
    if support is None:
        return "Support: –", "neutral"
    pct = support * 100.0
    if pct < 50:
        return "Support: Low", "bad"
    if pct < 70:
        return "Support: Medium", "med"
    return "Support: High", "good"


def bcr_status(bcr: Optional[float]) -> tuple[str, str]:
    if bcr is None:
        return "BCR: Not defined", "neutral"
    if bcr < 0.8:
        return "BCR: Unfavourable", "bad"
    if bcr < 1.0:
        return "BCR: Uncertain", "med"
    return "BCR: Favourable", "good"
