from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields

SCOPES = ("high_risk", "all")
EXEMPTIONS = ("medical", "medical_religious", "medical_religious_personal")
COVERAGE_LEVELS = (0.5, 0.7, 0.9)
DRAW_SOURCES = ("mulberry32", "numpy")

# Seed of the default published panel
DEFAULT_SEED = 123456789


def _from_args(cls, args):
    kwargs = {}
    for f in fields(cls):
        arg_val = getattr(args, f.name, None)
        kwargs[f.name] = f.default if arg_val is None else arg_val
    return cls(**kwargs)


@dataclass
class DrawConfig:
    """Simulation draws for the mixed logit integration."""

    n_draws: int = 1000
    seed: int = DEFAULT_SEED
    # False -> fresh OS entropy each session; estimates only statistically reproducible
    seeded: bool = True
    source: str = "mulberry32"
    vectorised: bool = False

    def __post_init__(self) -> None:
        if self.n_draws <= 0:
            raise ValueError("n_draws must be a positive integer")
        if self.seed < 0:
            raise ValueError("seed must be non-negative")
        if self.source not in DRAW_SOURCES:
            raise ValueError(f"source must be one of {set(DRAW_SOURCES)}")
        if self.vectorised and self.source != "numpy":
            raise ValueError("vectorised draws require source='numpy'")

    @property
    def mode(self) -> str:
        return "seeded" if self.seeded else "unseeded"

    @classmethod
    def from_args(cls, args):
        """Create a DrawConfig from argparse.Namespace."""
        return _from_args(cls, args)


@dataclass(frozen=True)
class MandateConfig:
    """A single mandate design as entered by the user."""

    country: str = "AU"
    outbreak: str = "mild"
    scope: str = "high_risk"
    exemptions: str = "medical"
    coverage: float = 0.5
    lives_per_100k: float = 0.0

    def __post_init__(self) -> None:
        self._validate_strings()
        self._validate_choices()
        if self.lives_per_100k < 0:
            raise ValueError("lives_per_100k must be non-negative")

    def _validate_strings(self) -> None:
        for name in ("country", "outbreak"):
            val = getattr(self, name)
            if not isinstance(val, str) or not val.strip():
                raise ValueError(f"{name} must be a non-empty string")

    def _validate_choices(self) -> None:
        if self.scope not in SCOPES:
            raise ValueError(f"scope must be one of {set(SCOPES)}")
        if self.exemptions not in EXEMPTIONS:
            raise ValueError(f"exemptions must be one of {set(EXEMPTIONS)}")
        if self.coverage not in COVERAGE_LEVELS:
            raise ValueError(f"coverage must be one of {set(COVERAGE_LEVELS)}")

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_args(cls, args):
        """Create a MandateConfig from argparse.Namespace."""
        return _from_args(cls, args)


@dataclass
class Settings:
    """Analysis settings shared by every scenario."""

    horizon_years: float = 1.0
    population: float = 1_000_000
    currency_label: str = "local currency units"
    vsl_metric: str = "vsl"
    vsl_value: float = 5_000_000

    def __post_init__(self) -> None:
        if self.horizon_years <= 0:
            raise ValueError("horizon_years must be positive")
        for name in ("population", "vsl_value"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
        if not self.currency_label or not self.currency_label.strip():
            raise ValueError("currency_label must be a non-empty string")
        if self.vsl_metric not in {"vsl", "vsly"}:
            raise ValueError("vsl_metric must be one of {'vsl', 'vsly'}")

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_args(cls, args):
        """Create a Settings object from argparse.Namespace."""
        return _from_args(cls, args)


COST_LABELS = {
    "it_systems": "Digital systems & infrastructure",
    "communications": "Communications & public information",
    "enforcement": "Enforcement & compliance",
    "compensation": "Adverse-event monitoring & compensation",
    "admin": "Administration & programme management",
    "other": "Other mandate-specific costs",
}


@dataclass
class CostInputs:
    """Implementation costs over the analysis horizon."""

    it_systems: float = 0.0
    communications: float = 0.0
    enforcement: float = 0.0
    compensation: float = 0.0
    admin: float = 0.0
    other: float = 0.0

    def __post_init__(self) -> None:
        for f in fields(self):
            if getattr(self, f.name) < 0:
                raise ValueError(f"{f.name} must be non-negative")

    @property
    def total(self) -> float:
        return float(sum(getattr(self, f.name) for f in fields(self)))

    def main_component(self) -> tuple[str, float] | None:
        """Largest cost line as (label, value), or None when nothing is entered."""
        if self.total <= 0:
            return None
        name = max((f.name for f in fields(self)), key=lambda n: getattr(self, n))
        return COST_LABELS[name], float(getattr(self, name))

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_args(cls, args):
        """Create CostInputs from argparse.Namespace."""
        return _from_args(cls, args)


@dataclass
class Config:
    draws: DrawConfig = field(default_factory=DrawConfig)
    mandate: MandateConfig = field(default_factory=MandateConfig)
    settings: Settings = field(default_factory=Settings)
    costs: CostInputs = field(default_factory=CostInputs)

    @classmethod
    def from_args(cls, args):
        """Build the full configuration from parsed CLI arguments."""
        return cls(
            draws=DrawConfig.from_args(args),
            mandate=MandateConfig.from_args(args),
            settings=Settings.from_args(args),
            costs=CostInputs.from_args(args),
        )
