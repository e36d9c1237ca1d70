"""
High-volume pass-through: an entity routing large volumes through intermediaries.
"""

from typing import Dict, List

from loguru import logger

from ...data.models import HighVolumeDetail, Signal
from ..models import Severity, Story, StoryEntity, StoryEvidence, StoryPattern
from ..narrative_templates import render_headline, render_narrative
from .base import DetectionContext, unique_in_order


def _detail(sig: Signal) -> HighVolumeDetail:
    detail = sig.detail
    return detail if isinstance(detail, HighVolumeDetail) else HighVolumeDetail()


def detect_high_volume_pass_through(ctx: DetectionContext) -> List[Story]:
    cfg = ctx.config.high_volume
    by_entity: Dict[str, List[Signal]] = {}

    for sig in ctx.snapshot.signals_of_type(cfg.signal_type):
        if not sig.entity_id:
            logger.debug(f"Skipping {cfg.signal_type} signal {sig.id or '?'} without entity")
            continue
        by_entity.setdefault(sig.entity_id, []).append(sig)

    stories: List[Story] = []
    for eid, sigs in by_entity.items():
        details = [_detail(s) for s in sigs]
        total = sum(d.total_amount for d in details)
        if total < cfg.min_total:
            continue
        payment_count = sum(d.payment_count for d in details)
        vendors = unique_in_order(d.vendor_name for d in details)
        name = ctx.name(eid)
        total_label = ctx.money(total)
        listed = vendors[:cfg.listed_vendors]

        stories.append(Story(
            id=f"highvol-{eid}",
            pattern=StoryPattern.HIGH_VOLUME_PASS_THROUGH,
            severity=Severity.HIGH if total >= cfg.high_total else Severity.MEDIUM,
            headline=render_headline(
                StoryPattern.HIGH_VOLUME_PASS_THROUGH, name=name, payment_count=payment_count, total=total_label,
            ),
            narrative=render_narrative(
                StoryPattern.HIGH_VOLUME_PASS_THROUGH,
                name=name,
                payment_count=payment_count,
                total=total_label,
                vendors=", ".join(listed),
            ),
            entities=[
                StoryEntity(id=eid, name=name, role="High-volume disburser"),
                *[StoryEntity(id="", name=v, role="Payment recipient") for v in listed],
            ],
            evidence=[
                StoryEvidence(
                    type="High Volume Signal",
                    description=d.description or f"{d.payment_count} payments",
                )
                for d in details
            ],
            total_money=total,
            date=sigs[0].detected_at,
            network_size=len(vendors) + 1,
            source_count=1,
        ))

    logger.debug(f"High-volume pass-through: {len(stories)} stories")
    return stories
