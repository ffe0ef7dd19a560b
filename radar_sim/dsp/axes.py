"""Sample counts and plotting axes.

The transmit pulse and the receive window are described by sample
vectors; this module provides the matching time axes (in
microseconds) and the range axis (in metres) that the presentation
layer pairs them with.  Index `i` of the range axis corresponds to a
round trip of `i / fs` seconds, i.e. a range of `i * c / (2 * fs)`.
"""

from __future__ import annotations

import math

import numpy as np

from ..errors import ConfigurationError

# Products such as 20e-6 * 10e6 land a few ulps below the intended integer.
_FLOOR_ULPS = 4


def floor_samples(value: float) -> int:
    """Floor a sample count, tolerating binary rounding just below an integer.

    A value within `_FLOOR_ULPS` units in the last place below an integer
    is taken as that integer; anything further below is floored as usual.
    """
    if not math.isfinite(value):
        raise ConfigurationError(f"sample count must be finite, got {value}")
    upper = math.ceil(value)
    if upper - value <= _FLOOR_ULPS * math.ulp(upper):
        return int(upper)
    return int(math.floor(value))


def sample_count(duration: float, fs: float) -> int:
    """Return the number of samples covering `duration` seconds at `fs`."""
    if fs <= 0:
        raise ConfigurationError("sampling rate must be positive")
    return floor_samples(duration * fs)


def time_axis_us(n_samples: int, fs: float) -> np.ndarray:
    """Return sample times in microseconds, `t[i] = i / fs * 1e6`."""
    if n_samples <= 0:
        raise ConfigurationError("n_samples must be positive")
    if fs <= 0:
        raise ConfigurationError("sampling rate must be positive")
    return np.arange(n_samples, dtype=np.float64) / fs * 1e6


def range_axis_m(n_samples: int, fs: float, speed_of_light: float) -> np.ndarray:
    """Return the range in metres of each lag, `r[i] = (i / fs) * c / 2`.

    The step between consecutive entries is the range bin `c / (2 fs)`.
    """
    if n_samples <= 0:
        raise ConfigurationError("n_samples must be positive")
    if fs <= 0:
        raise ConfigurationError("sampling rate must be positive")
    if speed_of_light <= 0:
        raise ConfigurationError("speed_of_light must be positive")
    return (np.arange(n_samples, dtype=np.float64) / fs) * speed_of_light / 2.0
