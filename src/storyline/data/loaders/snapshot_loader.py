"""
Snapshot loader.

Reads an exported snapshot (one JSON object holding the seven record
collections) into an InputSnapshot. The export is whatever the backing
store's paginated reads produced, so store-side collection names are
accepted alongside the model field names.
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

from loguru import logger

from ..models import InputSnapshot


class SnapshotLoadError(Exception):
    """Snapshot file exists but cannot be turned into an InputSnapshot."""


def load_snapshot_dict(raw: Any) -> InputSnapshot:
    """Build a snapshot from an already-decoded JSON object."""
    if not isinstance(raw, dict):
        raise SnapshotLoadError(
            f"Snapshot must be a JSON object, got {type(raw).__name__}"
        )
    snapshot = InputSnapshot.from_dict(raw)
    logger.debug(f"Snapshot counts: {snapshot.counts()}")
    return snapshot


def load_snapshot(path: Union[str, Path]) -> InputSnapshot:
    """
    Load a snapshot JSON file.

    Args:
        path: JSON file with any of the collections ``signals``,
            ``investigations``, ``relationships``, ``entities``,
            ``disbursements``, ``screenings``, ``graph_nodes``

    Returns:
        InputSnapshot (invalid rows skipped with a warning)

    Raises:
        FileNotFoundError: path does not exist
        SnapshotLoadError: file is not JSON or not a JSON object
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Snapshot file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw: Dict[str, Any] = json.load(f)
    except json.JSONDecodeError as e:
        raise SnapshotLoadError(f"Invalid JSON in {path}: {e}") from e

    snapshot = load_snapshot_dict(raw)
    logger.info(f"Loaded snapshot from {path} ({sum(snapshot.counts().values())} records)")
    return snapshot
