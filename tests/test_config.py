import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from solarkit.sizing import EstimatorConfig, SizingConfig, load_config

EXAMPLES = Path(__file__).parent.parent / "examples"


def test_defaults_match_reference_constants():
    cfg = EstimatorConfig()
    assert cfg.sizing.yield_factor == 4.0
    assert cfg.sizing.safety_margin == pytest.approx(1.10)
    assert cfg.sizing.supported_panel_wattages == (450, 535, 550, 600)
    assert cfg.sizing.area_per_kw_sqft == 100.0
    assert cfg.heuristics.savings_ratio == 0.8
    assert cfg.heuristics.tariff_per_kwh == 7.0
    assert cfg.heuristics.emission_factor == 0.9
    assert cfg.heuristics.product_savings_ratio == 0.85
    assert cfg.catalog.emi_divisor == 30.0


def test_load_example_config():
    cfg = load_config(str(EXAMPLES / "estimator_config.json"))
    assert cfg == EstimatorConfig()


def test_partial_config_keeps_defaults(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"sizing": {"yield_factor": 4.5}, "heuristics": {"tariff_per_kwh": 8}}))
    cfg = load_config(str(path))
    assert cfg.sizing.yield_factor == 4.5
    assert cfg.sizing.safety_margin == pytest.approx(1.10)
    assert cfg.heuristics.tariff_per_kwh == 8


def test_no_path_gives_defaults():
    assert load_config(None) == EstimatorConfig()


def test_missing_file():
    with pytest.raises(FileNotFoundError):
        load_config("/nonexistent/cfg.json")


@pytest.mark.parametrize(
    "overrides",
    [
        {"yield_factor": 0},
        {"safety_margin": 0.9},
        {"panel_wattage": -550},
        {"supported_panel_wattages": []},
    ],
)
def test_invalid_sizing_config(overrides):
    with pytest.raises(ValidationError):
        SizingConfig(**overrides)
