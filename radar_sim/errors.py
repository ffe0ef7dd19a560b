"""Exception and warning types raised by the simulator.

Two kinds of failure are distinguished.  A `ConfigurationError` means
the caller handed the pipeline parameters it cannot work with (a
non-positive length or sampling rate, a negative noise level, a
non-finite reflection coefficient); the run cannot meaningfully
continue.  A `BackendError` means the FFT layer failed or produced
non-finite values; it is propagated unchanged and no fallback output
is substituted.

A target beyond the receive window is *not* an error: it simply
produces a receive vector without a visible echo.
"""

from __future__ import annotations


class RadarSimError(Exception):
    """Base class for all simulator errors."""


class ConfigurationError(RadarSimError, ValueError):
    """Invalid simulation parameters."""


class BackendError(RadarSimError, RuntimeError):
    """The FFT backend failed or returned non-finite output."""


class NyquistWarning(UserWarning):
    """Carrier plus chirp bandwidth reaches or exceeds half the sampling rate.

    Results degrade through aliasing but remain computable, so this is
    a warning rather than an error.
    """
