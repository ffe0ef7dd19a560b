"""Signal processing core of the simulator.

Modules in this package implement chirp synthesis, the point-target
echo channel, FFT helpers and matched-filter pulse compression, plus
the time and range axes the results are plotted against.  Everything
here is synchronous and free of display code, so it can be used
headless.
"""

from . import axes, waveform, channel, fft, matched_filter

__all__ = ["axes", "waveform", "channel", "fft", "matched_filter"]
