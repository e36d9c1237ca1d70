"""
Fallback story for a snapshot with data but no pattern above threshold.
"""

from typing import Optional

from ..models import Severity, Story, StoryEvidence, StoryPattern
from ..narrative_templates import render_headline, render_narrative
from .base import DetectionContext


def build_data_loaded_story(ctx: DetectionContext) -> Optional[Story]:
    """
    Informational DATA_LOADED story, or None when there is nothing to summarize.

    This never counts as a pattern match; the pipeline only calls it when
    every detector came back empty.
    """
    snapshot = ctx.snapshot
    if not snapshot.has_raw_data:
        return None

    total = sum(d.amount for d in snapshot.attributable_disbursements)
    total_label = ctx.money(total)
    entity_count = len(snapshot.entities)
    disbursement_count = len(snapshot.disbursements)
    signal_count = len(snapshot.signals)

    return Story(
        id="data-loaded",
        pattern=StoryPattern.DATA_LOADED,
        severity=Severity.INFO,
        headline=render_headline(StoryPattern.DATA_LOADED),
        narrative=render_narrative(
            StoryPattern.DATA_LOADED,
            entity_count=entity_count,
            disbursement_count=disbursement_count,
            total=total_label,
            signal_count=signal_count,
        ),
        entities=[],
        evidence=[
            StoryEvidence(type="Entities", description=f"{entity_count} entities"),
            StoryEvidence(
                type="Disbursements",
                description=f"{disbursement_count} payments, {total_label} total",
            ),
            StoryEvidence(type="Signals", description=f"{signal_count} signals"),
        ],
        total_money=total,
        date="",
        network_size=0,
        source_count=1,
    )
