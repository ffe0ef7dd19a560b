"""Simulation engine, headless runner and parameter sweeps."""

from .pipeline import Frame, RadarSimulator
from .runner import run_simulation
from .sweep import run_sweep

__all__ = ["Frame", "RadarSimulator", "run_simulation", "run_sweep"]
