"""Display of the simulator's signals: live viewer and static snapshots."""

from . import viewer, snapshot

__all__ = ["viewer", "snapshot"]
