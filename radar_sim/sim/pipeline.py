"""Simulation engine: one transmit pulse, a fresh echo every tick.

`RadarSimulator` builds the transmit pulse and the plotting axes once,
then on every `tick` simulates a new receive window and compresses it.
The two results are published together as one immutable `Frame`: the
`latest` reference is only replaced once both arrays exist, so a
reader never sees the receive signal of one tick next to the
compressed signal of another.

Before the first tick `latest` holds an all-zero frame, which lets a
display render its receive and compressed views straight away.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np

from ..config import SimConfig
from ..dsp.axes import range_axis_m, time_axis_us
from ..dsp.channel import make_rng, simulate_rx
from ..dsp.fft import fft_size
from ..dsp.matched_filter import compress
from ..dsp.waveform import generate_chirp


def _readonly(x: np.ndarray) -> np.ndarray:
    x.flags.writeable = False
    return x


@dataclass(frozen=True)
class Frame:
    """Output of one tick.

    Attributes
    ----------
    index : int
        Tick number, starting at 1.  The blank frame has index 0.
    rx : np.ndarray
        Receive window of length `R`.
    compressed : np.ndarray
        Compressed envelope of length `fft_size(R)`.
    """

    index: int
    rx: np.ndarray
    compressed: np.ndarray


class RadarSimulator:
    """Pulse-compression pipeline bound to a configuration.

    Parameters
    ----------
    config : SimConfig
        Simulation parameters.
    rng : np.random.Generator, optional
        Noise source.  Defaults to `make_rng(config.seed)`.
    """

    def __init__(self, config: SimConfig, rng: Optional[np.random.Generator] = None) -> None:
        self.config = config
        self.rng = rng if rng is not None else make_rng(config.seed)
        fs = config.sampling_rate
        n_pulse = config.pulse_samples
        n_rx = config.rx_length
        self.tx_pulse = _readonly(
            generate_chirp(n_pulse, fs, config.carrier_freq, config.chirp_bandwidth)
        )
        self.time_tx_us = _readonly(time_axis_us(n_pulse, fs))
        self.time_rx_us = _readonly(time_axis_us(n_rx, fs))
        self.range_m = _readonly(range_axis_m(n_rx, fs, config.speed_of_light))
        self.latest = Frame(
            index=0,
            rx=_readonly(np.zeros(n_rx)),
            compressed=_readonly(np.zeros(fft_size(n_rx))),
        )

    @property
    def ticks(self) -> int:
        """Number of ticks completed so far."""
        return self.latest.index

    def tick(self) -> Frame:
        """Simulate and compress one receive window, then publish it."""
        cfg = self.config
        rx = simulate_rx(
            self.tx_pulse,
            cfg.rx_length,
            cfg.sampling_rate,
            cfg.target_range,
            cfg.target_reflection,
            cfg.noise_std,
            self.rng,
            speed_of_light=cfg.speed_of_light,
        )
        compressed = compress(self.tx_pulse, rx)
        frame = Frame(index=self.latest.index + 1, rx=_readonly(rx), compressed=_readonly(compressed))
        self.latest = frame
        return frame

    def run(self, n_ticks: int) -> Iterator[Frame]:
        """Yield `n_ticks` consecutive frames."""
        for _ in range(n_ticks):
            yield self.tick()
