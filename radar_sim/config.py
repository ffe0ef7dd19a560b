"""Simulation parameters.

`SimConfig` is an immutable record shared read-only by every stage of
the pipeline.  It is normally built from a YAML file with the layout
below; missing keys fall back to the reference configuration (a 20 us,
1-3 MHz chirp sampled at 10 MHz and a target at 1500 m).

```yaml
name: default
seed: null
radar:
  sampling_rate: 10.0e+6
  pulse_width: 20.0e-6
  carrier_freq: 1.0e+6
  chirp_bandwidth: 2.0e+6
  rx_factor: 4
target:
  range: 1500.0
  reflection: 0.8
channel:
  noise_std: 0.1
  speed_of_light: 3.0e+8
display:
  refresh_ms: 100
```

The chirp must stay below the Nyquist frequency,
`carrier_freq + chirp_bandwidth < sampling_rate / 2`.  This is checked
but not enforced: a violating configuration emits a `NyquistWarning`
and the simulation proceeds with aliased output.
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

import yaml

from .dsp.axes import sample_count
from .dsp.channel import delay_samples
from .errors import ConfigurationError, NyquistWarning


@dataclass(frozen=True)
class SimConfig:
    """Radar, target and channel parameters.

    Attributes
    ----------
    sampling_rate : float
        ADC sampling rate in Hz.
    pulse_width : float
        Transmit pulse duration in seconds.
    carrier_freq : float
        Chirp start frequency in Hz.
    chirp_bandwidth : float
        Swept bandwidth in Hz.
    speed_of_light : float
        Propagation speed in m/s.
    target_range : float
        Range of the point target in metres.
    target_reflection : float
        Echo amplitude factor in (0, 1].
    noise_std : float
        Standard deviation of the receiver noise.
    rx_factor : int
        Receive window length as a multiple of the pulse length.
    seed : int, optional
        Noise seed.  `None` gives a different realisation per process.
    refresh_ms : int
        Display refresh interval in milliseconds.
    """

    sampling_rate: float = 10e6
    pulse_width: float = 20e-6
    carrier_freq: float = 1e6
    chirp_bandwidth: float = 2e6
    speed_of_light: float = 3e8
    target_range: float = 1500.0
    target_reflection: float = 0.8
    noise_std: float = 0.1
    rx_factor: int = 4
    seed: Optional[int] = None
    refresh_ms: int = 100

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise `ConfigurationError` for unusable values; warn on Nyquist."""
        for name in ("sampling_rate", "pulse_width", "chirp_bandwidth", "speed_of_light"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")
        if not math.isfinite(self.carrier_freq) or self.carrier_freq < 0:
            raise ConfigurationError(f"carrier_freq must be non-negative, got {self.carrier_freq}")
        if not math.isfinite(self.target_range) or self.target_range < 0:
            raise ConfigurationError(f"target_range must be non-negative, got {self.target_range}")
        if not math.isfinite(self.target_reflection):
            raise ConfigurationError(f"target_reflection must be finite, got {self.target_reflection}")
        if not math.isfinite(self.noise_std) or self.noise_std < 0:
            raise ConfigurationError(f"noise_std must be non-negative, got {self.noise_std}")
        if self.rx_factor < 1:
            raise ConfigurationError(f"rx_factor must be at least 1, got {self.rx_factor}")
        if self.refresh_ms <= 0:
            raise ConfigurationError(f"refresh_ms must be positive, got {self.refresh_ms}")
        if self.pulse_samples < 1:
            raise ConfigurationError(
                f"pulse_width * sampling_rate must give at least one sample, got {self.pulse_samples}"
            )
        if not self.nyquist_ok:
            warnings.warn(
                f"carrier_freq + chirp_bandwidth = {self.carrier_freq + self.chirp_bandwidth:g} Hz "
                f"is not below fs/2 = {self.sampling_rate / 2:g} Hz; the chirp will alias",
                NyquistWarning,
                stacklevel=3,
            )

    @property
    def pulse_samples(self) -> int:
        """Pulse length `P = floor(pulse_width * fs)`."""
        return sample_count(self.pulse_width, self.sampling_rate)

    @property
    def rx_length(self) -> int:
        """Receive window length `R = rx_factor * P`."""
        return self.rx_factor * self.pulse_samples

    @property
    def delay_samples(self) -> int:
        """Round-trip delay of the target echo in samples."""
        return delay_samples(self.target_range, self.sampling_rate, self.speed_of_light)

    @property
    def range_bin(self) -> float:
        """Range step between consecutive samples, `c / (2 fs)`."""
        return self.speed_of_light / (2.0 * self.sampling_rate)

    @property
    def range_resolution(self) -> float:
        """Ideal chirp range resolution `c / (2 B)`."""
        return self.speed_of_light / (2.0 * self.chirp_bandwidth)

    @property
    def max_range(self) -> float:
        """Range covered by the receive window."""
        return self.rx_length * self.range_bin

    @property
    def nyquist_ok(self) -> bool:
        return self.carrier_freq + self.chirp_bandwidth < self.sampling_rate / 2.0


# Mapping from (section, key) in the YAML layout to SimConfig fields.
_FIELDS = {
    ("radar", "sampling_rate"): ("sampling_rate", float),
    ("radar", "pulse_width"): ("pulse_width", float),
    ("radar", "carrier_freq"): ("carrier_freq", float),
    ("radar", "chirp_bandwidth"): ("chirp_bandwidth", float),
    ("radar", "rx_factor"): ("rx_factor", int),
    ("target", "range"): ("target_range", float),
    ("target", "reflection"): ("target_reflection", float),
    ("channel", "noise_std"): ("noise_std", float),
    ("channel", "speed_of_light"): ("speed_of_light", float),
    ("display", "refresh_ms"): ("refresh_ms", int),
}


def field_for_key(key: str) -> Tuple[str, Callable[[Any], Any]]:
    """Return the `SimConfig` field and converter for a dotted YAML key.

    `"target.range"` maps to `("target_range", float)`; `"seed"` is also
    accepted.  Any other key raises `ConfigurationError`.
    """
    if key == "seed":
        return "seed", int
    parts = tuple(key.split("."))
    if parts not in _FIELDS:
        known = ", ".join(sorted(".".join(k) for k in _FIELDS))
        raise ConfigurationError(f"unknown configuration key '{key}'; expected one of: {known}, seed")
    return _FIELDS[parts]


def with_overrides(config: SimConfig, overrides: Dict[str, Any]) -> SimConfig:
    """Return a copy of `config` with dotted YAML keys replaced.

    The result is validated again, so an override that produces an
    unusable configuration raises `ConfigurationError`.
    """
    kwargs: Dict[str, Any] = {}
    for key, value in overrides.items():
        field_name, cast = field_for_key(key)
        try:
            kwargs[field_name] = None if value is None and field_name == "seed" else cast(value)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"{key}: cannot convert {value!r}") from exc
    return replace(config, **kwargs)


def config_from_dict(cfg: Dict[str, Any] | None) -> SimConfig:
    """Build a `SimConfig` from a parsed YAML dictionary.

    Unknown sections and keys are ignored so that run-level settings
    (`name`, `ticks`, ...) can live in the same file.
    """
    cfg = cfg or {}
    kwargs: Dict[str, Any] = {}
    for (section, key), (field_name, cast) in _FIELDS.items():
        sub = cfg.get(section) or {}
        if not isinstance(sub, dict):
            raise ConfigurationError(f"section '{section}' must be a mapping")
        if sub.get(key) is not None:
            try:
                kwargs[field_name] = cast(sub[key])
            except (TypeError, ValueError) as exc:
                raise ConfigurationError(f"{section}.{key}: cannot convert {sub[key]!r}") from exc
    if cfg.get("seed") is not None:
        kwargs["seed"] = int(cfg["seed"])
    return SimConfig(**kwargs)


def config_to_dict(config: SimConfig, name: str = "default") -> Dict[str, Any]:
    """Return the YAML layout for `config`; inverse of `config_from_dict`."""
    out: Dict[str, Any] = {"name": name, "seed": config.seed}
    for (section, key), (field_name, _) in _FIELDS.items():
        out.setdefault(section, {})[key] = getattr(config, field_name)
    return out


def load_config(path: str | Path | None = None) -> SimConfig:
    """Load a YAML configuration file.  `None` returns the defaults."""
    if path is None:
        return SimConfig()
    with open(path, "r") as f:
        cfg = yaml.safe_load(f)
    return config_from_dict(cfg)
