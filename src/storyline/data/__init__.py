"""
Input data for the story classifier.

- models: pydantic record models and the InputSnapshot aggregate
- loaders: reading exported snapshots from disk
"""

from .models import InputSnapshot
from .loaders import SnapshotLoadError, load_snapshot, load_snapshot_dict

__all__ = [
    "InputSnapshot",
    "SnapshotLoadError",
    "load_snapshot",
    "load_snapshot_dict",
]
