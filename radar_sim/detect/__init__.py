"""Target detection on compressed envelopes."""

from . import peaks

__all__ = ["peaks"]
