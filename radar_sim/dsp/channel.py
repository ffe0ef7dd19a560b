"""Echo channel for a single point target.

The receive window is `rx_length` samples long and starts at the
instant of transmission.  A target at range `d` returns a copy of the
transmit pulse scaled by its reflection coefficient and delayed by the
round trip `2 d / c`, quantised down to a whole number of samples.
White Gaussian noise is then added to every sample.

Fractional delays are not modelled, so the range granularity of the
echo is one range bin `c / (2 fs)` whatever the chirp bandwidth.
"""

from __future__ import annotations

import math
import sys
from typing import Optional

import numpy as np

from ..errors import ConfigurationError
from .axes import floor_samples

SPEED_OF_LIGHT = 3e8


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Return the Gaussian source used by `simulate_rx`.

    A `None` seed draws fresh entropy from the operating system, so
    each process sees a different noise realisation.
    """
    return np.random.default_rng(seed)


def delay_samples(target_range: float, fs: float, speed_of_light: float = SPEED_OF_LIGHT) -> int:
    """Return the round-trip delay `floor((2 d / c) * fs)` in samples.

    Delays too large to represent saturate at `sys.maxsize`, which lies
    beyond any receive window.
    """
    if fs <= 0:
        raise ConfigurationError("sampling rate must be positive")
    if speed_of_light <= 0:
        raise ConfigurationError("speed_of_light must be positive")
    if not math.isfinite(target_range) or target_range < 0:
        raise ConfigurationError(f"target_range must be finite and non-negative, got {target_range}")
    samples = (target_range / speed_of_light) * fs * 2.0
    if not math.isfinite(samples) or samples >= sys.maxsize:
        return sys.maxsize
    return floor_samples(samples)


def simulate_rx(
    tx: np.ndarray,
    rx_length: int,
    fs: float,
    target_range: float,
    reflection: float,
    noise_std: float,
    rng: np.random.Generator,
    speed_of_light: float = SPEED_OF_LIGHT,
) -> np.ndarray:
    """Simulate one receive window.

    Parameters
    ----------
    tx : np.ndarray
        Transmit pulse of length `P`.
    rx_length : int
        Receive window length `R` in samples.
    fs : float
        Sampling rate in Hz.
    target_range : float
        Target range in metres.
    reflection : float
        Echo amplitude factor.
    noise_std : float
        Standard deviation of the additive noise.  The generator is
        advanced by `rx_length` draws even when this is zero.
    rng : np.random.Generator
        Source of standard-normal samples.
    speed_of_light : float, optional
        Propagation speed in m/s.

    Returns
    -------
    np.ndarray
        Fresh float64 array of length `rx_length`.  If the delay is at
        least `rx_length` samples the array holds noise only.
    """
    tx = np.asarray(tx, dtype=np.float64)
    if tx.ndim != 1:
        raise ConfigurationError("tx must be a 1D array")
    if rx_length <= 0:
        raise ConfigurationError("rx_length must be positive")
    if noise_std < 0 or not math.isfinite(noise_std):
        raise ConfigurationError(f"noise_std must be finite and non-negative, got {noise_std}")
    if not math.isfinite(reflection):
        raise ConfigurationError(f"reflection must be finite, got {reflection}")
    delay = delay_samples(target_range, fs, speed_of_light)

    rx = np.zeros(rx_length, dtype=np.float64)
    if delay < rx_length:
        # Echo samples falling past the end of the window are dropped.
        n = min(tx.size, rx_length - delay)
        rx[delay:delay + n] += tx[:n] * reflection
    rx += noise_std * rng.standard_normal(rx_length)
    return rx
