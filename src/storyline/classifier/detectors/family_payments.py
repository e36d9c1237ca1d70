"""
Family payments: campaign funds flowing to a spouse or family-connected recipient.
"""

from typing import Dict, List

from loguru import logger

from ...data.models import Signal, SpousePaymentDetail
from ..models import Severity, Story, StoryEntity, StoryEvidence, StoryPattern
from ..narrative_templates import render_headline, render_narrative
from .base import DetectionContext, unique_in_order


def _detail(sig: Signal) -> SpousePaymentDetail:
    detail = sig.detail
    return detail if isinstance(detail, SpousePaymentDetail) else SpousePaymentDetail()


def detect_family_payments(ctx: DetectionContext) -> List[Story]:
    cfg = ctx.config.family_payments
    by_entity: Dict[str, List[Signal]] = {}

    for sig in ctx.snapshot.signals_of_type(cfg.signal_type):
        if not sig.entity_id:
            logger.debug(f"Skipping {cfg.signal_type} signal {sig.id or '?'} without entity")
            continue
        by_entity.setdefault(sig.entity_id, []).append(sig)

    stories: List[Story] = []
    for eid, sigs in by_entity.items():
        details = [_detail(s) for s in sigs]
        total = sum(d.amount for d in details)
        name = ctx.name(eid)
        recipients = unique_in_order(d.recipient_name for d in details)
        total_label = ctx.money(total)

        stories.append(Story(
            id=f"family-{eid}",
            pattern=StoryPattern.FAMILY_PAYMENTS,
            severity=Severity.HIGH if total >= cfg.high_total else Severity.MEDIUM,
            headline=render_headline(StoryPattern.FAMILY_PAYMENTS, name=name, total=total_label),
            narrative=render_narrative(
                StoryPattern.FAMILY_PAYMENTS,
                payment_count=len(sigs),
                name=name,
                recipients=", ".join(recipients),
                total=total_label,
            ),
            entities=[
                StoryEntity(id=eid, name=name, role="Politician making payments"),
                *[StoryEntity(id="", name=r, role="Family-connected recipient") for r in recipients],
            ],
            evidence=[
                StoryEvidence(
                    type="FEC Spouse Payment",
                    description=d.description or f"Payment to {d.recipient_name}",
                )
                for d in details
            ],
            total_money=total,
            date=sigs[0].detected_at,
            network_size=len(recipients) + 1,
            source_count=1,
        ))

    logger.debug(f"Family payments: {len(stories)} stories")
    return stories
