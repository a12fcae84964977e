"""Shared fixtures for the mandate support model tests."""

import pytest

from mandeval.config.mandate import DEFAULT_SEED, MandateConfig
from mandeval.mixed_logit.coefficients import (
    COEFFICIENT_NAMES,
    MXL_MEANS,
    build_table,
)
from mandeval.mixed_logit.draws import generate_draw_panel, mulberry32


def _zero_sds():
    return {
        country: {
            outbreak: {name: 0.0 for name in COEFFICIENT_NAMES}
            for outbreak in by_outbreak
        }
        for country, by_outbreak in MXL_MEANS.items()
    }


@pytest.fixture(scope="session")
def panel():
    """The default seeded 1000-draw panel."""
    return generate_draw_panel(
        1000, uniform=mulberry32(DEFAULT_SEED), seed=DEFAULT_SEED
    )


@pytest.fixture(scope="session")
def small_panel():
    return generate_draw_panel(200, uniform=mulberry32(7), seed=7)


@pytest.fixture
def zero_sd_table():
    """Fitted means with every standard deviation set to zero."""
    return build_table(MXL_MEANS, _zero_sds())


@pytest.fixture
def base_config():
    """AU / mild, all attributes at their baseline levels, no lives saved."""
    return MandateConfig(
        country="AU",
        outbreak="mild",
        scope="high_risk",
        exemptions="medical",
        coverage=0.5,
        lives_per_100k=0.0,
    )
