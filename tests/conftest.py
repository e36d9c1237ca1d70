"""
Shared fixtures for the classifier tests.
"""

import os
import sys

import pytest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from storyline.classifier.detectors import DetectionContext
from storyline.classifier.resolver import EntityNameResolver
from storyline.config import ClassifierConfig
from storyline.data.models import InputSnapshot


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer shell settings out of config loading."""
    for var in ("STORYLINE_ENV", "STORYLINE_CONFIG", "STORYLINE_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def make_context():
    """Factory: raw collections -> DetectionContext."""
    def _make(config=None, prior=(), **collections):
        snapshot = InputSnapshot.from_dict(collections)
        return DetectionContext(
            snapshot=snapshot,
            resolver=EntityNameResolver(snapshot.entities),
            config=config or ClassifierConfig(),
            prior_stories=tuple(prior),
        )
    return _make


@pytest.fixture
def acme_rows():
    """Three politicians paying ACME CONSULTING $20k each."""
    return {
        "entities": [
            {"id": "e1", "canonical_name": "Alice Adams", "entity_type": "politician"},
            {"id": "e2", "canonical_name": "Bob Brown", "entity_type": "politician"},
            {"id": "e3", "canonical_name": "Carol Chen", "entity_type": "politician"},
        ],
        "disbursements": [
            {"id": "d1", "entity_id": "e1", "committee_name": "Adams for Senate",
             "recipient_name": "Acme Consulting", "amount": 20000, "date": "2024-01-15"},
            {"id": "d2", "entity_id": "e2", "committee_name": "Brown PAC",
             "recipient_name": "ACME CONSULTING ", "amount": 20000, "date": "2024-03-02"},
            {"id": "d3", "entity_id": "e3", "committee_name": "Chen Victory Fund",
             "recipient_name": "acme consulting", "amount": 20000, "date": "2024-02-20"},
        ],
    }
