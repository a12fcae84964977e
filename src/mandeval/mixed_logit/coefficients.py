"""
Mixed logit coefficient tables for the vaccine-mandate preference study.

One stratum per (country, outbreak) pair. Each stratum carries a set of
coefficient means and a set of standard deviations of the normally
distributed random parameters. The values are estimates from the fitted
discrete choice model and must not be edited without re-estimating it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

import numpy as np

COEFFICIENT_NAMES: Tuple[str, ...] = (
    "asc_mandate",
    "asc_opt_out",
    "scope_all",
    "exemptions_moderate",
    "exemptions_broad",
    "coverage_70",
    "coverage_90",
    "lives",
)

StratumKey = Tuple[str, str]


def is_level(value, level: float) -> bool:
    """True when a numeric attribute value sits on the given design level."""
    try:
        return math.isclose(float(value), level)
    except (TypeError, ValueError):
        return False


@dataclass(frozen=True)
class CoefficientSet:
    """Utility coefficients for one stratum, in `COEFFICIENT_NAMES` order.

    A value of None marks a missing entry.
    """

    asc_mandate: Optional[float] = None
    asc_opt_out: Optional[float] = None
    scope_all: Optional[float] = None
    exemptions_moderate: Optional[float] = None
    exemptions_broad: Optional[float] = None
    coverage_70: Optional[float] = None
    coverage_90: Optional[float] = None
    lives: Optional[float] = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, float]) -> "CoefficientSet":
        unknown = set(mapping) - set(COEFFICIENT_NAMES)
        if unknown:
            raise KeyError(f"unknown coefficient names: {sorted(unknown)}")
        return cls(**{k: float(v) for k, v in mapping.items() if v is not None})

    def as_array(self, fill: float = 0.0) -> np.ndarray:
        """Return the coefficients as a float64 vector, missing entries -> fill."""
        vals = [getattr(self, name) for name in COEFFICIENT_NAMES]
        return np.array([fill if v is None else v for v in vals], dtype=np.float64)

    def to_dict(self) -> Dict[str, Optional[float]]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class Stratum:
    """Mean and standard-deviation sets for one (country, outbreak) pair."""

    mean: CoefficientSet
    sd: Optional[CoefficientSet] = None

    def sd_array(self) -> np.ndarray:
        # no sd set at all -> no simulated dispersion
        if self.sd is None:
            return np.zeros(len(COEFFICIENT_NAMES), dtype=np.float64)
        return self.sd.as_array(fill=0.0)


CoefficientTable = Mapping[StratumKey, Stratum]


def build_table(
    means: Mapping[str, Mapping[str, Mapping[str, float]]],
    sds: Mapping[str, Mapping[str, Mapping[str, float]]] | None = None,
) -> CoefficientTable:
    """Build a read-only table from nested {country: {outbreak: {name: value}}}."""
    sds = sds or {}
    table: Dict[StratumKey, Stratum] = {}
    for country, by_outbreak in means.items():
        for outbreak, coefs in by_outbreak.items():
            sd_coefs = sds.get(country, {}).get(outbreak)
            table[(country, outbreak)] = Stratum(
                mean=CoefficientSet.from_mapping(coefs),
                sd=None if sd_coefs is None else CoefficientSet.from_mapping(sd_coefs),
            )
    return MappingProxyType(table)


def lookup_stratum(
    table: CoefficientTable, country: str, outbreak: str
) -> Optional[Stratum]:
    return table.get((country, outbreak))


MXL_MEANS = {
    "AU": {
        "mild": {
            "asc_mandate": 0.464,
            "asc_opt_out": -0.572,
            "scope_all": -0.319,
            "exemptions_moderate": -0.157,
            "exemptions_broad": -0.267,
            "coverage_70": 0.171,
            "coverage_90": 0.158,
            "lives": 0.072,
        },
        "severe": {
            "asc_mandate": 0.535,
            "asc_opt_out": -0.694,
            "scope_all": 0.190,
            "exemptions_moderate": -0.181,
            "exemptions_broad": -0.305,
            "coverage_70": 0.371,
            "coverage_90": 0.398,
            "lives": 0.079,
        },
    },
    "IT": {
        "mild": {
            "asc_mandate": 0.625,
            "asc_opt_out": -0.238,
            "scope_all": -0.276,
            "exemptions_moderate": -0.176,
            "exemptions_broad": -0.289,
            "coverage_70": 0.185,
            "coverage_90": 0.148,
            "lives": 0.039,
        },
        "severe": {
            "asc_mandate": 0.799,
            "asc_opt_out": -0.463,
            "scope_all": 0.174,
            "exemptions_moderate": -0.178,
            "exemptions_broad": -0.207,
            "coverage_70": 0.305,
            "coverage_90": 0.515,
            "lives": 0.045,
        },
    },
    "FR": {
        "mild": {
            "asc_mandate": 0.899,
            "asc_opt_out": 0.307,
            "scope_all": -0.160,
            "exemptions_moderate": -0.121,
            "exemptions_broad": -0.124,
            "coverage_70": 0.232,
            "coverage_90": 0.264,
            "lives": 0.049,
        },
        "severe": {
            "asc_mandate": 0.884,
            "asc_opt_out": 0.083,
            "scope_all": -0.019,
            "exemptions_moderate": -0.192,
            "exemptions_broad": -0.247,
            "coverage_70": 0.267,
            "coverage_90": 0.398,
            "lives": 0.052,
        },
    },
}

MXL_SDS = {
    "AU": {
        "mild": {
            "asc_mandate": 1.104,
            "asc_opt_out": 5.340,
            "scope_all": 1.731,
            "exemptions_moderate": 0.443,
            "exemptions_broad": 1.254,
            "coverage_70": 0.698,
            "coverage_90": 1.689,
            "lives": 0.101,
        },
        "severe": {
            "asc_mandate": 1.019,
            "asc_opt_out": 5.021,
            "scope_all": 1.756,
            "exemptions_moderate": 0.722,
            "exemptions_broad": 1.252,
            "coverage_70": 0.641,
            "coverage_90": 1.548,
            "lives": 0.103,
        },
    },
    "IT": {
        "mild": {
            "asc_mandate": 1.560,
            "asc_opt_out": 4.748,
            "scope_all": 1.601,
            "exemptions_moderate": 0.718,
            "exemptions_broad": 1.033,
            "coverage_70": 0.615,
            "coverage_90": 1.231,
            "lives": 0.080,
        },
        "severe": {
            "asc_mandate": 1.518,
            "asc_opt_out": 4.194,
            "scope_all": 1.448,
            "exemptions_moderate": 0.575,
            "exemptions_broad": 1.082,
            "coverage_70": 0.745,
            "coverage_90": 1.259,
            "lives": 0.082,
        },
    },
    "FR": {
        "mild": {
            "asc_mandate": 1.560,
            "asc_opt_out": 4.138,
            "scope_all": 1.258,
            "exemptions_moderate": 0.818,
            "exemptions_broad": 0.972,
            "coverage_70": 0.550,
            "coverage_90": 1.193,
            "lives": 0.081,
        },
        "severe": {
            "asc_mandate": 1.601,
            "asc_opt_out": 3.244,
            "scope_all": 1.403,
            "exemptions_moderate": 0.690,
            "exemptions_broad": 1.050,
            "coverage_70": 0.548,
            "coverage_90": 1.145,
            "lives": 0.085,
        },
    },
}

DEFAULT_COEFFICIENTS: CoefficientTable = build_table(MXL_MEANS, MXL_SDS)
