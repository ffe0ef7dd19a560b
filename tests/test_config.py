import warnings

import numpy as np
import pytest
import yaml

from radar_sim.config import SimConfig, config_from_dict, config_to_dict, load_config, with_overrides
from radar_sim.errors import ConfigurationError, NyquistWarning


def test_default_derived_quantities() -> None:
    cfg = SimConfig()
    assert cfg.pulse_samples == 200
    assert cfg.rx_length == 800
    assert cfg.delay_samples == 100
    assert np.isclose(cfg.range_bin, 15.0)
    assert np.isclose(cfg.range_resolution, 75.0)
    assert np.isclose(cfg.max_range, 12000.0)
    assert cfg.nyquist_ok


def test_default_config_does_not_warn() -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        SimConfig()


def test_nyquist_violation_warns_but_is_accepted() -> None:
    with pytest.warns(NyquistWarning):
        cfg = SimConfig(carrier_freq=4e6, chirp_bandwidth=2e6)
    assert not cfg.nyquist_ok


@pytest.mark.parametrize(
    "kwargs",
    [
        {"sampling_rate": 0.0},
        {"pulse_width": -1e-6},
        {"pulse_width": 1e-9},
        {"chirp_bandwidth": 0.0},
        {"noise_std": -0.1},
        {"target_reflection": float("inf")},
        {"target_range": -5.0},
        {"rx_factor": 0},
    ],
)
def test_invalid_values_rejected(kwargs) -> None:
    with pytest.raises(ConfigurationError):
        SimConfig(**kwargs)


def test_with_overrides_replaces_fields() -> None:
    base = SimConfig(seed=1)
    out = with_overrides(base, {"target.range": "3000", "channel.noise_std": 0, "seed": 9})
    assert out.target_range == 3000.0
    assert out.noise_std == 0.0
    assert out.seed == 9
    assert out.delay_samples == 200
    # base left untouched
    assert base.target_range == 1500.0 and base.seed == 1


def test_with_overrides_rejects_unknown_and_invalid() -> None:
    with pytest.raises(ConfigurationError):
        with_overrides(SimConfig(), {"target.velocity": 10.0})
    with pytest.raises(ConfigurationError):
        with_overrides(SimConfig(), {"radar.sampling_rate": "fast"})
    with pytest.raises(ConfigurationError):
        with_overrides(SimConfig(), {"channel.noise_std": -1.0})


def test_config_from_dict_and_back() -> None:
    cfg = config_from_dict({"seed": 7, "target": {"range": 3000}, "channel": {"noise_std": 0}})
    assert cfg.seed == 7
    assert cfg.target_range == 3000.0
    assert cfg.noise_std == 0.0
    assert cfg.sampling_rate == 10e6
    assert config_from_dict(config_to_dict(cfg)) == cfg


def test_config_from_dict_bad_value() -> None:
    with pytest.raises(ConfigurationError):
        config_from_dict({"radar": {"sampling_rate": "fast"}})
    with pytest.raises(ConfigurationError):
        config_from_dict({"radar": [1, 2]})


def test_load_config_yaml(tmp_path) -> None:
    path = tmp_path / "cfg.yaml"
    path.write_text(yaml.dump({"radar": {"pulse_width": 10e-6}, "target": {"reflection": 0.5}}))
    cfg = load_config(path)
    assert cfg.pulse_samples == 100
    assert cfg.rx_length == 400
    assert cfg.target_reflection == 0.5
    assert load_config(None) == SimConfig()
