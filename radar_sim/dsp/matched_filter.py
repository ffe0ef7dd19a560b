"""Matched-filter pulse compression.

The receive window is correlated against the transmit pulse in the
frequency domain: both are zero-padded to `N` points, transformed,
multiplied with the *conjugate* of the pulse spectrum and transformed
back.  Conjugation turns the product into a correlation rather than a
convolution.  For real signals it is equivalent to convolving with the
time-reversed pulse.

Entry `i` of the result is the correlation at lag `i` samples, which
maps to the range `i * c / (2 fs)`.  No taper is applied, so range
sidelobes around -13 dB are expected.
"""

from __future__ import annotations

import numpy as np

from ..errors import ConfigurationError
from .fft import fft_size, inverse, padded_spectrum


def _check(tx: np.ndarray, rx: np.ndarray) -> None:
    if tx.ndim != 1 or rx.ndim != 1:
        raise ConfigurationError("tx and rx must be 1D arrays")
    if tx.size == 0:
        raise ConfigurationError("tx must not be empty")
    if rx.size == 0:
        raise ConfigurationError("rx must not be empty")
    if tx.size > rx.size:
        raise ConfigurationError("tx must not be longer than rx")


def correlate(tx: np.ndarray, rx: np.ndarray) -> np.ndarray:
    """Return the complex cross-correlation of `rx` with `tx`.

    Parameters
    ----------
    tx : np.ndarray
        Reference (transmit) pulse of length `P`.
    rx : np.ndarray
        Receive window of length `R >= P`.  A pulse longer than the
        window raises `ConfigurationError`: the padded length is sized
        from `R` alone, so such a pulse would wrap around the cyclic
        correlation.

    Returns
    -------
    np.ndarray
        Complex array of length `fft_size(R)`.  For real inputs the
        imaginary part is rounding noise.  The result is linear in `rx`.
    """
    tx = np.asarray(tx, dtype=np.float64)
    rx = np.asarray(rx, dtype=np.float64)
    _check(tx, rx)
    n_fft = fft_size(rx.size)
    tx_spec = padded_spectrum(tx, n_fft)
    rx_spec = padded_spectrum(rx, n_fft)
    return inverse(rx_spec * np.conj(tx_spec))


def compress(tx: np.ndarray, rx: np.ndarray) -> np.ndarray:
    """Pulse-compress `rx` and return the magnitude envelope.

    The returned array has length `fft_size(len(rx))`; only its first
    `len(rx)` entries line up with the range axis.  The peak is expected
    at the echo delay in samples and its height is the reflection
    coefficient times the pulse energy.

    Raises `ConfigurationError` if either input is empty or if `tx` is
    longer than `rx`, and `BackendError` if the transform yields
    non-finite values.
    """
    return np.abs(correlate(tx, rx))
