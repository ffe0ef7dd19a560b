"""Metrics computed on transmit pulses and compressed envelopes."""

from . import pulse

__all__ = ["pulse"]
