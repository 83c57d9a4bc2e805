"""State/store layer.

Holds the most recently published extended signal snapshot for a device.
Only the refresh scheduler writes to it.
"""

from pymodem.state.store import PublishHook, SnapshotStore

__all__ = ["PublishHook", "SnapshotStore"]
