import json
from pathlib import Path

import pytest

from Net_Games.config import DEFAULT_SEED, SimulatorConfig, load_config, read_mapping


def test_defaults():
    cfg = SimulatorConfig()
    assert cfg.bootstrap_steps == 5000
    assert cfg.window_steps == 200
    assert cfg.max_windows == 1000
    assert cfg.termination_threshold == 0.001
    assert cfg.trace_path is None
    assert cfg.suffix_size == 4
    assert cfg.seed == DEFAULT_SEED


@pytest.mark.parametrize(
    "field,value",
    [
        ("bootstrap_steps", -1),
        ("window_steps", 0),
        ("max_windows", 0),
        ("termination_threshold", -0.1),
        ("state_interval", -2),
        ("suffix_size", 0),
    ],
)
def test_invalid_values_rejected(field, value):
    with pytest.raises(ValueError):
        SimulatorConfig(**{field: value})


def test_from_mapping_coerces_and_rejects_unknown():
    cfg = SimulatorConfig.from_mapping(
        {"window_steps": "50", "termination_threshold": "0.5", "trace_path": "t.jsonl"}
    )
    assert cfg.window_steps == 50
    assert cfg.termination_threshold == 0.5
    assert cfg.trace_path == Path("t.jsonl")
    with pytest.raises(ValueError, match="window"):
        SimulatorConfig.from_mapping({"windows": 3})


def test_replace_returns_new_config():
    cfg = SimulatorConfig()
    other = cfg.replace(max_windows=3)
    assert other.max_windows == 3
    assert cfg.max_windows == 1000
    assert other.to_dict()["trace_path"] is None


def test_load_config_formats(tmp_path):
    yml = tmp_path / "run.yaml"
    yml.write_text("simulator:\n  window_steps: 12\n  seed: 3\n")
    assert load_config(yml).window_steps == 12

    js = tmp_path / "run.json"
    js.write_text(json.dumps({"max_windows": 4}))
    assert load_config(js).max_windows == 4

    toml = tmp_path / "run.toml"
    toml.write_text("[simulator]\nbootstrap_steps = 0\n")
    assert load_config(toml).bootstrap_steps == 0


def test_read_mapping_errors(tmp_path):
    bad = tmp_path / "run.ini"
    bad.write_text("x=1")
    with pytest.raises(ValueError):
        read_mapping(bad)
    lst = tmp_path / "run.json"
    lst.write_text("[1, 2]")
    with pytest.raises(ValueError):
        read_mapping(lst)
