import json

import pytest

from holdem_equity.config import DEFAULT_SAMPLES, SimulationConfig, load_config
from holdem_equity.errors import ConfigError
from holdem_equity.helpers.abstraction import Street


def test_default_budget_grows_with_street():
    cfg = SimulationConfig()
    assert cfg.samples_for(Street.PREFLOP) == 15_000
    assert cfg.samples_for(Street.FLOP) == 25_000
    assert cfg.samples_for(Street.TURN) == 35_000
    assert cfg.samples_for(Street.RIVER) == 50_000
    assert cfg.workers == 1
    assert cfg.time_limit is None

def test_partial_samples_keep_defaults():
    cfg = SimulationConfig(samples={"turn": 10})
    assert cfg.samples_for(Street.TURN) == 10
    assert cfg.samples_for(Street.RIVER) == DEFAULT_SAMPLES[Street.RIVER]

def test_with_samples_sets_every_street():
    cfg = SimulationConfig().with_samples(123)
    assert all(cfg.samples_for(s) == 123 for s in Street)

@pytest.mark.parametrize("kwargs", [
    {"samples": {"FLOP": 0}},
    {"samples": {"FLOP": -5}},
    {"samples": {"FLOP": 2.5}},
    {"samples": {"SHOWDOWN": 10}},
    {"batch_size": 0},
    {"workers": 0},
    {"time_limit": 0},
    {"time_limit": "soon"},
])
def test_invalid_config_rejected(kwargs):
    with pytest.raises(ConfigError):
        SimulationConfig(**kwargs)

def test_from_dict_accepts_single_sample_count():
    cfg = SimulationConfig.from_dict({"samples": 500, "workers": 3})
    assert all(cfg.samples_for(s) == 500 for s in Street)
    assert cfg.workers == 3

def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ConfigError):
        SimulationConfig.from_dict({"sample": 10})

def test_to_dict_roundtrips_through_from_dict():
    cfg = SimulationConfig(samples={"RIVER": 7}, batch_size=50, time_limit=1.5)
    assert SimulationConfig.from_dict(cfg.to_dict()) == cfg

def test_load_config_from_json(tmp_path):
    p = tmp_path / "equity.json"
    p.write_text(json.dumps({"samples": {"PREFLOP": 100, "RIVER": 200}, "batch_size": 25}))
    cfg = load_config(p)
    assert cfg.samples_for(Street.PREFLOP) == 100
    assert cfg.samples_for(Street.RIVER) == 200
    assert cfg.batch_size == 25

def test_load_config_errors(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.json")
    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    with pytest.raises(ConfigError):
        load_config(bad)
    arr = tmp_path / "arr.json"
    arr.write_text("[1, 2]")
    with pytest.raises(ConfigError):
        load_config(arr)
