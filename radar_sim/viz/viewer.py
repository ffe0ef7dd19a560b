"""Interactive viewer cycling through the pipeline's signals.

Four views are available: the transmit pulse, the received signal, the
pulse compression output and all three overlaid.  The left and right
arrow keys step through them; a timer ticks the simulator every
`refresh_ms` milliseconds and redraws the current view.

`view_series` decides what each view shows and is free of any plotting
calls, so it can be exercised headless.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import List, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.animation import FuncAnimation

from ..config import load_config
from ..dsp.channel import make_rng
from ..sim.pipeline import RadarSimulator

TRANSMIT, RECEIVED, COMPRESSED, COMBINED = range(4)
N_VIEWS = 4

_TIME_LABEL = "Time (µs)"
_RANGE_LABEL = "Range (m)"


@dataclass
class ViewSpec:
    """Title, axis labels and `(label, x, y)` series of one view."""

    title: str
    xlabel: str
    ylabel: str
    series: List[Tuple[str, np.ndarray, np.ndarray]]


def next_view(view: int, key: Optional[str]) -> int:
    """Return the view selected by pressing `key` while `view` is shown."""
    if key == "right":
        return (view + 1) % N_VIEWS
    if key == "left":
        return (view + N_VIEWS - 1) % N_VIEWS
    return view


def view_series(view: int, sim: RadarSimulator) -> ViewSpec:
    """Describe what `view` shows for the simulator's latest frame.

    The compressed envelope is longer than the receive window; only its
    first `R` entries are paired with the range axis.
    """
    frame = sim.latest
    n = len(sim.range_m)
    tx = ("Transmit Pulse", sim.time_tx_us, sim.tx_pulse)
    rx = ("Received Signal", sim.time_rx_us, frame.rx)
    comp = ("Compressed Pulse", sim.range_m, frame.compressed[:n])
    if view == TRANSMIT:
        return ViewSpec("Radar Visualization - Transmit Pulse", _TIME_LABEL, "Amplitude", [tx])
    if view == RECEIVED:
        return ViewSpec("Radar Visualization - Received Signal (Echo + Noise)", _TIME_LABEL, "Amplitude", [rx])
    if view == COMPRESSED:
        return ViewSpec("Radar Visualization - Pulse Compression Output", _RANGE_LABEL, "Amplitude", [comp])
    if view == COMBINED:
        return ViewSpec(
            "Radar Visualization - Combined Signals",
            f"{_TIME_LABEL} / {_RANGE_LABEL}",
            "Amplitude",
            [tx, rx, comp],
        )
    raise ValueError(f"Unknown view: {view}")


def draw_view(ax, spec: ViewSpec) -> None:
    """Render `spec` onto a matplotlib axes, replacing its content."""
    ax.clear()
    for label, x, y in spec.series:
        ax.plot(x, y, label=label, linewidth=0.8, marker=".", markersize=2)
    ax.set_title(spec.title)
    ax.set_xlabel(spec.xlabel)
    ax.set_ylabel(spec.ylabel)
    ax.grid(True, linestyle="--", linewidth=0.6, alpha=0.3)
    ax.legend(loc="upper right")


class LiveViewer:
    """Window showing one view at a time, refreshed by a timer.

    Parameters
    ----------
    sim : RadarSimulator
        Simulator ticked on every refresh.
    view : int, optional
        Initial view, the transmit pulse by default.
    """

    def __init__(self, sim: RadarSimulator, view: int = TRANSMIT) -> None:
        self.sim = sim
        self.view = view
        self.fig, self.ax = plt.subplots(figsize=(9, 5), dpi=100)
        self.fig.canvas.mpl_connect("key_press_event", self._on_key)
        self.anim: Optional[FuncAnimation] = None
        self.redraw()

    def redraw(self) -> None:
        draw_view(self.ax, view_series(self.view, self.sim))
        self.fig.canvas.draw_idle()

    def _on_key(self, event) -> None:
        view = next_view(self.view, event.key)
        if view != self.view:
            self.view = view
            self.redraw()

    def _update(self, _frame: int) -> None:
        self.sim.tick()
        self.redraw()

    def show(self) -> None:
        """Start the refresh timer and block until the window is closed."""
        self.anim = FuncAnimation(
            self.fig,
            self._update,
            interval=self.sim.config.refresh_ms,
            cache_frame_data=False,
        )
        plt.show()


def main() -> None:
    parser = argparse.ArgumentParser(description="Live pulse-compression radar viewer")
    parser.add_argument("--config", type=str, default=None, help="Path to YAML configuration file")
    parser.add_argument("--seed", type=int, default=None, help="Noise seed (random if omitted)")
    parser.add_argument("--snapshot", type=str, default=None, help="Save all four views to this PNG and exit")
    args = parser.parse_args()
    cfg = load_config(args.config)
    rng = make_rng(args.seed) if args.seed is not None else None
    sim = RadarSimulator(cfg, rng=rng)
    if args.snapshot is not None:
        from .snapshot import save_snapshot
        sim.tick()
        save_snapshot(sim, args.snapshot)
        return
    print("Use the left/right arrow keys to cycle views; close the window to exit.")
    LiveViewer(sim).show()


if __name__ == "__main__":
    main()
