from types import SimpleNamespace

import pytest

from mandeval.config import Config, CostInputs, DrawConfig, MandateConfig, Settings, get_args
from mandeval.config.mandate import DEFAULT_SEED

unit = pytest.mark.unit
integration = pytest.mark.integration


@unit
def test_draw_config_defaults_are_seeded_mulberry32():
    cfg = DrawConfig()
    assert cfg.n_draws == 1000
    assert cfg.seed == DEFAULT_SEED
    assert cfg.source == "mulberry32"
    assert cfg.mode == "seeded"
    assert DrawConfig(seeded=False).mode == "unseeded"


@unit
@pytest.mark.parametrize(
    "kwargs",
    [
        {"n_draws": 0},
        {"seed": -1},
        {"source": "sobol"},
        {"vectorised": True},
    ],
)
def test_draw_config_rejects_invalid_values(kwargs):
    with pytest.raises(ValueError):
        DrawConfig(**kwargs)


@unit
def test_mandate_config_from_args_overrides_and_defaults():
    """Provided args override defaults; None falls back to dataclass defaults."""
    args = SimpleNamespace(
        country="IT",
        outbreak=None,
        scope="all",
        exemptions=None,
        coverage=0.9,
        lives_per_100k=None,
    )

    cfg = MandateConfig.from_args(args)

    assert cfg.country == "IT"
    assert cfg.scope == "all"
    assert cfg.coverage == 0.9
    assert cfg.outbreak == MandateConfig().outbreak
    assert cfg.exemptions == MandateConfig().exemptions
    assert cfg.lives_per_100k == MandateConfig().lives_per_100k


@unit
@pytest.mark.parametrize(
    "kwargs",
    [
        {"country": ""},
        {"outbreak": "  "},
        {"scope": "everyone"},
        {"exemptions": "none"},
        {"coverage": 0.6},
        {"lives_per_100k": -1.0},
    ],
)
def test_mandate_config_rejects_invalid_values(kwargs):
    with pytest.raises(ValueError):
        MandateConfig(**kwargs)


@unit
def test_mandate_config_allows_countries_without_coefficients():
    assert MandateConfig(country="DE").country == "DE"


@unit
@pytest.mark.parametrize(
    "kwargs",
    [
        {"horizon_years": 0},
        {"population": -1},
        {"vsl_value": -5.0},
        {"currency_label": " "},
        {"vsl_metric": "qaly"},
    ],
)
def test_settings_rejects_invalid_values(kwargs):
    with pytest.raises(ValueError):
        Settings(**kwargs)


@unit
def test_cost_inputs_total_and_main_component():
    costs = CostInputs(it_systems=1.0, enforcement=5.0, admin=2.5)
    assert costs.total == pytest.approx(8.5)
    assert costs.main_component() == ("Enforcement & compliance", 5.0)
    assert CostInputs().main_component() is None
    with pytest.raises(ValueError):
        CostInputs(other=-1.0)


@integration
def test_config_from_cli_args():
    args = get_args(
        [
            "--country",
            "FR",
            "--outbreak",
            "severe",
            "--coverage",
            "0.7",
            "--n_draws",
            "500",
            "--source",
            "numpy",
            "--vectorised",
            "--vsl_value",
            "1e6",
            "--admin",
            "250000",
        ]
    )
    cfg = Config.from_args(args)

    assert cfg.mandate.country == "FR"
    assert cfg.mandate.outbreak == "severe"
    assert cfg.mandate.coverage == 0.7
    assert cfg.draws.n_draws == 500
    assert cfg.draws.vectorised is True
    assert cfg.draws.seeded is True
    assert cfg.settings.vsl_value == 1e6
    assert cfg.costs.admin == 250000
    assert cfg.costs.total == 250000
    assert args.export_dir == "results"


@integration
def test_unseeded_flag_switches_mode():
    cfg = Config.from_args(get_args(["--unseeded"]))
    assert cfg.draws.seeded is False
    assert cfg.draws.vectorised is False


@unit
def test_category_help_exits(capsys):
    with pytest.raises(SystemExit) as exc:
        get_args(["--help", "draws"])
    assert exc.value.code == 0
    assert "--n_draws" in capsys.readouterr().out


@unit
def test_briefing_option_choices():
    assert get_args([]).briefing is None
    assert get_args(["--briefing", "prompt"]).briefing == "prompt"
    with pytest.raises(SystemExit):
        get_args(["--briefing", "memo"])
