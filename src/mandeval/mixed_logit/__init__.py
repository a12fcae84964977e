"""Mixed logit engine: coefficient tables, draw panels and support estimates."""

from mandeval.mixed_logit.coefficients import (
    COEFFICIENT_NAMES,
    DEFAULT_COEFFICIENTS,
    CoefficientSet,
    CoefficientTable,
    Stratum,
    build_table,
    lookup_stratum,
)
from mandeval.mixed_logit.draws import (
    RandomDrawPanel,
    batch_draw_panel,
    generate_draw_panel,
    make_draw_panel,
    mulberry32,
    numpy_uniform_source,
    standard_normal,
)
from mandeval.mixed_logit.estimator import (
    UTILITY_CLAMP,
    SupportEstimator,
    estimate_support,
    plain_logit_support,
)
from mandeval.mixed_logit.mrs import MRSRow, lives_saved_equivalents

__all__ = [
    # Coefficients
    "COEFFICIENT_NAMES",
    "DEFAULT_COEFFICIENTS",
    "CoefficientSet",
    "CoefficientTable",
    "Stratum",
    "build_table",
    "lookup_stratum",
    # Draws
    "RandomDrawPanel",
    "batch_draw_panel",
    "generate_draw_panel",
    "make_draw_panel",
    "mulberry32",
    "numpy_uniform_source",
    "standard_normal",
    # Estimation
    "UTILITY_CLAMP",
    "SupportEstimator",
    "estimate_support",
    "plain_logit_support",
    "MRSRow",
    "lives_saved_equivalents",
]
