"""
Tests for loading snapshot exports from disk.
"""

import json

import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from storyline.data.loaders import SnapshotLoadError, load_snapshot, load_snapshot_dict


class TestLoadSnapshot:
    """Test JSON snapshot loading."""

    def _write(self, tmp_path, payload):
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps(payload) if not isinstance(payload, str) else payload)
        return path

    def test_loads_collections(self, tmp_path, acme_rows):
        snapshot = load_snapshot(self._write(tmp_path, acme_rows))
        assert len(snapshot.entities) == 3
        assert len(snapshot.disbursements) == 3
        assert snapshot.disbursements[0].amount == 20_000

    def test_store_keys_accepted(self, tmp_path):
        snapshot = load_snapshot(self._write(tmp_path, {
            "fec_disbursements": [{"entity_id": "e1", "disbursement_amount": "99.5"}],
            "kb_nodes": [{"entity_id": "e1", "bridge_score": "0.4"}],
        }))
        assert snapshot.disbursements[0].amount == 99.5
        assert snapshot.graph_nodes[0].bridge_score == 0.4

    def test_invalid_rows_skipped(self, tmp_path):
        snapshot = load_snapshot(self._write(tmp_path, {
            "entities": [{"id": "e1"}, {"canonical_name": "no id"}, 42],
        }))
        assert [e.id for e in snapshot.entities] == ["e1"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_snapshot(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        with pytest.raises(SnapshotLoadError):
            load_snapshot(self._write(tmp_path, "{not json"))

    def test_top_level_must_be_object(self, tmp_path):
        with pytest.raises(SnapshotLoadError):
            load_snapshot(self._write(tmp_path, [1, 2, 3]))

    def test_load_dict(self):
        snapshot = load_snapshot_dict({"signals": [{"signal_type": "CROSS_CAMPAIGN"}]})
        assert snapshot.signals[0].signal_type == "CROSS_CAMPAIGN"
        with pytest.raises(SnapshotLoadError):
            load_snapshot_dict(None)
