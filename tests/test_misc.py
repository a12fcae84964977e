import math

import numpy as np
import pytest

from mandeval import misc

unit = pytest.mark.unit


@unit
@pytest.mark.parametrize(
    "value, expected",
    [
        (1_234_567, "EUR 1.23 M"),
        (2_500, "EUR 2.5 K"),
        (3e9, "EUR 3.00 B"),
        (999, "EUR 999"),
        (-2_000_000, "EUR -2.00 M"),
        ("abc", "EUR 0"),
        (math.inf, "EUR ?"),
    ],
)
def test_format_currency(value, expected):
    assert misc.format_currency(value, "EUR") == expected


@unit
def test_format_short_currency():
    assert misc.format_short_currency(1_500_000) == "1.5M"
    assert misc.format_short_currency(2_000) == "2.0K"
    assert misc.format_short_currency(4.2e9) == "4.2B"
    assert misc.format_short_currency(12) == "12"
    assert misc.format_short_currency(float("nan")) == "?"


@unit
def test_percent_and_support_keep_unknown_distinct_from_zero():
    assert misc.format_percent(73.456) == "73.5%"
    assert misc.format_percent(None) == misc.MISSING
    assert misc.format_percent(float("nan")) == misc.MISSING
    assert misc.format_support(None) == misc.MISSING
    assert misc.format_support(0.0) == "0.0%"
    assert misc.format_support(np.float64(0.738)) == "73.8%"


@unit
def test_format_bcr():
    assert misc.format_bcr(None) == "not defined"
    assert misc.format_bcr(1.234) == "1.23"


@unit
def test_labels_fall_back_to_codes():
    assert misc.country_label("IT") == "Italy"
    assert misc.country_label("DE") == "DE"
    assert misc.country_label(None) == misc.MISSING
    assert misc.outbreak_label("severe") == "Severe outbreak"
    assert misc.scope_label("all") == "All occupations & public spaces"
    assert misc.exemptions_label("medical_religious") == "Medical + religious"


@unit
def test_coverage_label():
    assert misc.coverage_label(0.7) == "70% population vaccinated"
    assert misc.coverage_label("0.9") == "90% population vaccinated"
    assert misc.coverage_label(0.6) == "0.6"
