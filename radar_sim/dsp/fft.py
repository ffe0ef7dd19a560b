"""FFT utilities for frequency-domain correlation.

Linear correlation of a pulse of length `P` with a receive window of
length `R` is computed as a cyclic correlation over `N` points.  Any
`N >= P + R - 1` avoids wrap-around; the simulator uses the smallest
power of two that is at least `2 R`, which satisfies that bound since
`P <= R`.  Transforms use numpy's standard normalisation, under which
`ifft(fft(x)) == x` up to rounding.
"""

from __future__ import annotations

import numpy as np

from ..errors import BackendError, ConfigurationError


def fft_size(rx_length: int) -> int:
    """Return the smallest power of two `N` with `N >= 2 * rx_length`."""
    if rx_length <= 0:
        raise ConfigurationError("rx_length must be positive")
    return 1 << (2 * rx_length - 1).bit_length()


def padded_spectrum(x: np.ndarray, n_fft: int) -> np.ndarray:
    """Zero-pad `x` to `n_fft` samples and return its forward FFT.

    Parameters
    ----------
    x : np.ndarray
        One-dimensional real signal no longer than `n_fft`.
    n_fft : int
        Transform length.

    Returns
    -------
    np.ndarray
        Complex spectrum of length `n_fft`.
    """
    x = np.asarray(x, dtype=np.float64)
    if x.ndim != 1:
        raise ConfigurationError("signal must be a 1D array")
    if x.size > n_fft:
        raise ConfigurationError(f"signal of length {x.size} does not fit in {n_fft} FFT points")
    try:
        return np.fft.fft(x, n=n_fft)
    except (ValueError, MemoryError) as exc:
        raise BackendError(f"forward FFT of length {n_fft} failed") from exc


def inverse(spectrum: np.ndarray) -> np.ndarray:
    """Inverse FFT with a finiteness check on the result."""
    try:
        out = np.fft.ifft(spectrum)
    except (ValueError, MemoryError) as exc:
        raise BackendError(f"inverse FFT of length {len(spectrum)} failed") from exc
    if not np.all(np.isfinite(out)):
        raise BackendError("inverse FFT produced non-finite values")
    return out
