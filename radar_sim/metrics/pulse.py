"""Quality metrics for compressed pulses.

These helpers quantify what the compressed envelope shows: how far the
peak stands above the noise floor, how high the range sidelobes are
and how far the detected range is from the true one.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..config import SimConfig


def pulse_energy(tx: np.ndarray) -> float:
    """Return `sum(tx**2)`, the ideal compressed peak for unit reflection."""
    tx = np.asarray(tx, dtype=np.float64)
    return float(np.sum(tx ** 2))


def snr_db(compressed: np.ndarray, peak_index: int, n_bins: Optional[int] = None, eps: float = 1e-12) -> float:
    """Peak-to-median ratio of a compressed envelope in dB.

    Parameters
    ----------
    compressed : np.ndarray
        Magnitude envelope.
    peak_index : int
        Index of the peak.
    n_bins : int, optional
        Only the first `n_bins` entries form the reference population
        (the part paired with the range axis).  Defaults to all entries.
    eps : float, optional
        Added to both terms to keep the ratio finite for silent input.
    """
    compressed = np.asarray(compressed, dtype=np.float64)
    ref = compressed if n_bins is None else compressed[:n_bins]
    floor = float(np.median(ref))
    return float(20.0 * np.log10((compressed[peak_index] + eps) / (floor + eps)))


def peak_sidelobe_ratio(compressed: np.ndarray, peak_index: int, mainlobe: int, eps: float = 1e-12) -> float:
    """Highest sidelobe relative to the peak, in dB (negative for a clean peak).

    Cells within `mainlobe` samples of the peak are excluded.
    """
    compressed = np.asarray(compressed, dtype=np.float64)
    if mainlobe < 0:
        raise ValueError("mainlobe must be non-negative")
    side = np.concatenate(
        [compressed[: max(peak_index - mainlobe, 0)], compressed[peak_index + mainlobe + 1:]]
    )
    if side.size == 0:
        return float("-inf")
    return float(20.0 * np.log10((np.max(side) + eps) / (compressed[peak_index] + eps)))


def mainlobe_halfwidth(config: SimConfig) -> int:
    """Samples from the compressed peak to the first envelope null, `ceil(fs / B)`."""
    return int(np.ceil(config.sampling_rate / config.chirp_bandwidth))


def range_error(range_m: float, config: SimConfig) -> float:
    """Detected minus true target range, in metres."""
    return float(range_m - config.target_range)


def processing_gain_db(pulse_len: int) -> float:
    """Ideal matched-filter SNR gain for a pulse of `pulse_len` samples, `10 log10(P)`."""
    if pulse_len <= 0:
        raise ValueError("pulse_len must be positive")
    return float(10.0 * np.log10(pulse_len))


def input_snr_db(tx: np.ndarray, reflection: float, noise_std: float) -> float:
    """Per-sample echo power over noise power at the receiver input, in dB."""
    if noise_std == 0:
        return float("inf")
    tx = np.asarray(tx, dtype=np.float64)
    signal_power = reflection ** 2 * float(np.mean(tx ** 2))
    return float(10.0 * np.log10(signal_power / noise_std ** 2))


def noise_power(compressed: np.ndarray, delay: int, pulse_len: int, n_bins: int) -> float:
    """Mean squared envelope over lags free of the echo.

    Only lags whose correlation window lies fully inside the receive
    window (`i <= n_bins - pulse_len`) and that are at least `pulse_len`
    samples from `delay` are used.  Returns NaN when no such lag exists.
    """
    compressed = np.asarray(compressed, dtype=np.float64)
    lags = np.arange(max(n_bins - pulse_len + 1, 0))
    keep = np.abs(lags - min(delay, n_bins + pulse_len)) >= pulse_len
    if not np.any(keep):
        return float("nan")
    return float(np.mean(compressed[lags[keep]] ** 2))
