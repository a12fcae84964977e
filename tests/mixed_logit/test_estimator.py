import math
from dataclasses import replace
from types import SimpleNamespace

import numpy as np
import pytest

from mandeval.config.mandate import COVERAGE_LEVELS, EXEMPTIONS, SCOPES, DEFAULT_SEED
from mandeval.mixed_logit.coefficients import (
    COEFFICIENT_NAMES,
    DEFAULT_COEFFICIENTS,
    MXL_MEANS,
    build_table,
    lookup_stratum,
)
from mandeval.mixed_logit.draws import generate_draw_panel, mulberry32
from mandeval.mixed_logit.estimator import (
    SupportEstimator,
    choice_probabilities,
    estimate_support,
    mandate_utilities,
    plain_logit_support,
)

unit = pytest.mark.unit
integration = pytest.mark.integration


def _logistic(x: float) -> float:
    return 1.0 / (1.0 + math.exp(-x))


@unit
def test_baseline_zero_heterogeneity_matches_closed_form(zero_sd_table, panel, base_config):
    """AU/mild at baseline: diff = 0.464 - (-0.572) = 1.036 -> ~0.738."""
    p = estimate_support(base_config, zero_sd_table, panel)
    assert p == pytest.approx(_logistic(1.036), rel=1e-12)
    assert p == pytest.approx(0.738, abs=1e-3)


@unit
def test_scope_all_lowers_support_in_au_mild(zero_sd_table, panel, base_config):
    """Adding scope_all = -0.319 gives diff 0.717 -> ~0.672."""
    cfg = replace(base_config, scope="all")
    p = estimate_support(cfg, zero_sd_table, panel)
    assert p == pytest.approx(0.672, abs=1e-3)
    assert p < estimate_support(base_config, zero_sd_table, panel)


@unit
def test_coverage_90_raises_support_in_au_mild(zero_sd_table, panel, base_config):
    """Adding coverage_90 = 0.158 gives diff 1.194 -> ~0.767."""
    cfg = replace(base_config, coverage=0.9)
    p = estimate_support(cfg, zero_sd_table, panel)
    assert p == pytest.approx(0.767, abs=1e-3)
    assert p > estimate_support(base_config, zero_sd_table, panel)


@unit
def test_zero_heterogeneity_equals_plain_logit(zero_sd_table, panel):
    """With every sd at zero the Monte Carlo average is the plain logit."""
    for (country, outbreak), stratum in zero_sd_table.items():
        cfg = SimpleNamespace(
            country=country,
            outbreak=outbreak,
            scope="all",
            exemptions="medical_religious_personal",
            coverage=0.7,
            lives_per_100k=12.5,
        )
        mixed = estimate_support(cfg, zero_sd_table, panel)
        assert mixed == pytest.approx(plain_logit_support(cfg, stratum), rel=1e-12)


@unit
def test_missing_stratum_returns_none(panel, base_config):
    """Unknown (country, outbreak) pairs are 'unknown', never 0 or an exception."""
    assert estimate_support(replace(base_config, country="DE"), DEFAULT_COEFFICIENTS, panel) is None
    assert (
        estimate_support(replace(base_config, outbreak="moderate"), DEFAULT_COEFFICIENTS, panel)
        is None
    )
    assert estimate_support(None, DEFAULT_COEFFICIENTS, panel) is None


@unit
def test_estimates_are_deterministic_for_fixed_seed(base_config):
    """Separately built panels from the same seed give bit-identical support."""
    cfg = replace(base_config, scope="all", coverage=0.7, lives_per_100k=8.0)
    p1 = generate_draw_panel(1000, uniform=mulberry32(DEFAULT_SEED), seed=DEFAULT_SEED)
    p2 = generate_draw_panel(1000, uniform=mulberry32(DEFAULT_SEED), seed=DEFAULT_SEED)
    assert estimate_support(cfg, DEFAULT_COEFFICIENTS, p1) == estimate_support(
        cfg, DEFAULT_COEFFICIENTS, p2
    )


@unit
def test_support_in_unit_interval_for_all_strata(panel):
    for country, outbreak in DEFAULT_COEFFICIENTS:
        for scope in SCOPES:
            for exemptions in EXEMPTIONS:
                for coverage in COVERAGE_LEVELS:
                    for lives in (0.0, 5.0, 50.0):
                        cfg = SimpleNamespace(
                            country=country,
                            outbreak=outbreak,
                            scope=scope,
                            exemptions=exemptions,
                            coverage=coverage,
                            lives_per_100k=lives,
                        )
                        p = estimate_support(cfg, DEFAULT_COEFFICIENTS, panel)
                        assert p is not None
                        assert 0.0 <= p <= 1.0


@unit
def test_support_increases_with_lives_saved(panel, base_config):
    """Every stratum has a positive mean lives coefficient."""
    for country, outbreak in DEFAULT_COEFFICIENTS:
        cfg = replace(base_config, country=country, outbreak=outbreak)
        supports = [
            estimate_support(replace(cfg, lives_per_100k=lives), DEFAULT_COEFFICIENTS, panel)
            for lives in (0.0, 2.0, 5.0, 10.0, 20.0)
        ]
        assert all(b > a for a, b in zip(supports, supports[1:]))


@unit
def test_support_strictly_monotone_without_heterogeneity(zero_sd_table, panel, base_config):
    lives = np.linspace(0.0, 100.0, 11)
    supports = [
        estimate_support(replace(base_config, lives_per_100k=float(x)), zero_sd_table, panel)
        for x in lives
    ]
    assert all(b > a for a, b in zip(supports, supports[1:]))


@unit
def test_heterogeneity_changes_the_estimate(panel, zero_sd_table, base_config):
    mixed = estimate_support(base_config, DEFAULT_COEFFICIENTS, panel)
    plain = estimate_support(base_config, zero_sd_table, panel)
    assert mixed != pytest.approx(plain, abs=1e-3)


@unit
def test_missing_sd_set_means_no_dispersion(panel, zero_sd_table, base_config):
    """A stratum without any sd entries behaves like zero heterogeneity."""
    no_sd = build_table(MXL_MEANS)
    assert lookup_stratum(no_sd, "AU", "mild").sd is None
    assert estimate_support(base_config, no_sd, panel) == pytest.approx(
        estimate_support(base_config, zero_sd_table, panel), rel=1e-12
    )


@unit
def test_missing_sd_entry_defaults_to_zero(panel, base_config):
    """Only the listed sd contributes dispersion; omitted names count as zero."""
    partial = build_table(
        {"AU": {"mild": MXL_MEANS["AU"]["mild"]}},
        {"AU": {"mild": {"asc_opt_out": 5.340}}},
    )
    explicit = build_table(
        {"AU": {"mild": MXL_MEANS["AU"]["mild"]}},
        {
            "AU": {
                "mild": {
                    name: (5.340 if name == "asc_opt_out" else 0.0)
                    for name in COEFFICIENT_NAMES
                }
            }
        },
    )
    assert estimate_support(base_config, partial, panel) == estimate_support(
        base_config, explicit, panel
    )


@unit
def test_missing_mean_is_unknown(panel, base_config):
    means = dict(MXL_MEANS["AU"]["mild"])
    del means["asc_mandate"]
    table = build_table({"AU": {"mild": means}})
    assert estimate_support(base_config, table, panel) is None


@unit
def test_extreme_utilities_are_clamped(panel, base_config):
    """Huge coefficients saturate the probability instead of overflowing."""
    huge = dict(MXL_MEANS["AU"]["mild"], asc_mandate=1e6, asc_opt_out=-1e6)
    table = build_table({"AU": {"mild": huge}})
    p = estimate_support(base_config, table, panel)
    assert p is not None
    assert p == pytest.approx(1.0)

    tiny = dict(MXL_MEANS["AU"]["mild"], asc_mandate=-1e308, asc_opt_out=1e308)
    p = estimate_support(base_config, build_table({"AU": {"mild": tiny}}), panel)
    assert p is not None
    assert p == pytest.approx(0.0, abs=1e-30)


@unit
def test_choice_probabilities_clamp_each_utility():
    p = choice_probabilities(np.array([1e4, 0.0]), np.array([0.0, -1e4]))
    assert p[0] == pytest.approx(_logistic(40.0))
    assert p[1] == pytest.approx(_logistic(40.0))
    assert np.all(np.isfinite(p))


@unit
def test_unrecognised_levels_fall_back_to_baseline(panel, base_config):
    baseline = estimate_support(base_config, DEFAULT_COEFFICIENTS, panel)
    odd = SimpleNamespace(
        country="AU",
        outbreak="mild",
        scope="some",
        exemptions="none",
        coverage=0.6,
        lives_per_100k=0.0,
    )
    assert estimate_support(odd, DEFAULT_COEFFICIENTS, panel) == baseline


@unit
def test_mandate_utilities_adds_selected_levels_only():
    betas = np.arange(1, len(COEFFICIENT_NAMES) + 1, dtype=float)[np.newaxis, :]
    # asc_mandate=1, asc_opt_out=2, scope_all=3, ex_mod=4, ex_broad=5,
    # cov70=6, cov90=7, lives=8
    cfg = SimpleNamespace(
        scope="all",
        exemptions="medical_religious_personal",
        coverage=0.7,
        lives_per_100k=2.0,
    )
    u_m, u_o = mandate_utilities(cfg, betas)
    assert u_m[0] == pytest.approx(1 + 3 + 5 + 6 + 8 * 2.0)
    assert u_o[0] == pytest.approx(2.0)


@integration
def test_support_estimator_wraps_table_and_panel(panel, base_config):
    est = SupportEstimator(DEFAULT_COEFFICIENTS, panel)
    assert est.has_stratum("FR", "severe")
    assert not est.has_stratum("FR", "moderate")
    assert est.estimate(base_config) == estimate_support(base_config, DEFAULT_COEFFICIENTS, panel)


@unit
def test_near_level_coverage_counts_as_that_level(panel, base_config):
    exact = estimate_support(replace(base_config, coverage=0.7), DEFAULT_COEFFICIENTS, panel)
    noisy = SimpleNamespace(**{**base_config.to_dict(), "coverage": 0.7000000001})
    assert estimate_support(noisy, DEFAULT_COEFFICIENTS, panel) == pytest.approx(exact)
