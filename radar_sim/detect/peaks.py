"""Peak picking on the compressed envelope.

The simulator has a single target, so detection reduces to locating
the strongest lag within the receive window and reading its range off
the range axis.  Entries of the envelope past the end of the range
axis (the zero-padded tail of the correlation) are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..metrics.pulse import snr_db


@dataclass(frozen=True)
class Detection:
    """Strongest return in a compressed envelope.

    Attributes
    ----------
    index : int
        Lag of the peak in samples.
    range_m : float
        Range of the peak in metres.
    magnitude : float
        Envelope value at the peak.
    snr_db : float
        Peak over the median envelope value, in dB.
    """

    index: int
    range_m: float
    magnitude: float
    snr_db: float


def find_peak(compressed: np.ndarray, range_axis: np.ndarray) -> Detection:
    """Return the strongest return within the span of `range_axis`."""
    compressed = np.asarray(compressed, dtype=np.float64)
    n = min(len(compressed), len(range_axis))
    if n == 0:
        raise ValueError("compressed signal and range axis must not be empty")
    window = compressed[:n]
    idx = int(np.argmax(window))
    return Detection(
        index=idx,
        range_m=float(range_axis[idx]),
        magnitude=float(window[idx]),
        snr_db=snr_db(window, idx),
    )
