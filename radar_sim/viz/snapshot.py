"""Headless rendering of all four views into one image."""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt

from ..sim.pipeline import RadarSimulator
from .viewer import N_VIEWS, draw_view, view_series


def save_snapshot(sim: RadarSimulator, out_path: str | Path, dpi: int = 120) -> Path:
    """Save a 2x2 grid of the transmit, received, compressed and combined views."""
    fig, axes = plt.subplots(2, 2, figsize=(14, 8), dpi=dpi)
    for view, ax in zip(range(N_VIEWS), axes.ravel()):
        draw_view(ax, view_series(view, sim))
        ax.title.set_fontsize(10)
    fig.suptitle(f"Tick {sim.ticks}", fontsize=11)
    fig.tight_layout()
    out_path = Path(out_path)
    fig.savefig(out_path, facecolor=fig.get_facecolor())
    plt.close(fig)
    print(f"Snapshot saved to {out_path}")
    return out_path
