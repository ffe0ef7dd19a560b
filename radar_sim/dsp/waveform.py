"""Linear frequency modulated (LFM) transmit pulse synthesis.

The pulse is a real sine whose phase is quadratic in time,

    phi(t) = 2 pi (f0 t + k t^2 / 2),    k = B / tau,

so that the instantaneous frequency `f0 + k t` sweeps linearly from the
carrier `f0` at `t = 0` to `f0 + B` at the end of the pulse `t = tau`.
The envelope is rectangular; no taper is applied.
"""

from __future__ import annotations

import numpy as np
from scipy import signal

from ..errors import ConfigurationError


def chirp_rate(n_samples: int, fs: float, bandwidth: float) -> float:
    """Return the chirp rate `k = B / tau` in Hz per second."""
    if n_samples <= 0:
        raise ConfigurationError("n_samples must be positive")
    if fs <= 0:
        raise ConfigurationError("sampling rate must be positive")
    tau = n_samples / fs
    return bandwidth / tau


def generate_chirp(n_samples: int, fs: float, f0: float, bandwidth: float) -> np.ndarray:
    """Generate a real LFM chirp.

    Parameters
    ----------
    n_samples : int
        Pulse length `P` in samples.  Must be positive.
    fs : float
        Sampling rate in Hz.  Must be positive.
    f0 : float
        Start (carrier) frequency in Hz.
    bandwidth : float
        Swept bandwidth `B` in Hz.

    Returns
    -------
    np.ndarray
        Float64 array of length `n_samples` with values in [-1, 1].
        The first sample is always `sin(0) = 0`.
    """
    k = chirp_rate(n_samples, fs, bandwidth)
    t = np.arange(n_samples, dtype=np.float64) / fs
    phase = 2.0 * np.pi * (f0 * t + 0.5 * k * t ** 2)
    return np.sin(phase)


def instantaneous_frequency(t: np.ndarray | float, f0: float, k: float) -> np.ndarray:
    """Analytic instantaneous frequency `f0 + k t` of the chirp in Hz."""
    return f0 + k * np.asarray(t, dtype=np.float64)


def estimate_instantaneous_frequency(pulse: np.ndarray, fs: float) -> np.ndarray:
    """Measure the instantaneous frequency of a real pulse.

    The analytic signal is formed with a Hilbert transform and the
    derivative of its unwrapped phase is converted to Hz.  The result
    has one entry fewer than `pulse`; entry `i` is the frequency
    between samples `i` and `i + 1`.  Values within a few samples of
    either end of the pulse are affected by the transform's edge
    effects.
    """
    pulse = np.asarray(pulse, dtype=np.float64)
    if pulse.ndim != 1 or pulse.size < 2:
        raise ConfigurationError("pulse must be a 1D array with at least two samples")
    if fs <= 0:
        raise ConfigurationError("sampling rate must be positive")
    analytic = signal.hilbert(pulse)
    phase = np.unwrap(np.angle(analytic))
    return np.diff(phase) * fs / (2.0 * np.pi)
