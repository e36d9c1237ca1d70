"""Snapshot loaders."""

from .snapshot_loader import SnapshotLoadError, load_snapshot, load_snapshot_dict

__all__ = [
    "SnapshotLoadError",
    "load_snapshot",
    "load_snapshot_dict",
]
