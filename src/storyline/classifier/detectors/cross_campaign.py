"""
Cross-campaign networks: several politicians paying the same vendor.

Consumes the upstream CROSS_CAMPAIGN signals and groups them by vendor.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from loguru import logger

from ...data.models import CrossCampaignDetail, Signal
from ..models import Severity, Story, StoryEntity, StoryEvidence, StoryPattern
from ..narrative_templates import render_headline, render_narrative
from .base import DetectionContext


@dataclass
class _VendorNetwork:
    vendor: str
    signals: List[Signal] = field(default_factory=list)
    details: List[CrossCampaignDetail] = field(default_factory=list)
    entity_ids: Dict[str, None] = field(default_factory=dict)
    total_amount: float = 0.0


def detect_cross_campaign_networks(ctx: DetectionContext) -> List[Story]:
    cfg = ctx.config.cross_campaign
    networks: Dict[str, _VendorNetwork] = {}

    for sig in ctx.snapshot.signals_of_type(cfg.signal_type):
        detail = sig.detail
        if not isinstance(detail, CrossCampaignDetail):
            detail = CrossCampaignDetail()
        net = networks.setdefault(detail.vendor_name, _VendorNetwork(vendor=detail.vendor_name))
        net.signals.append(sig)
        net.details.append(detail)
        if sig.entity_id:
            net.entity_ids[sig.entity_id] = None
        net.total_amount += detail.money

    stories: List[Story] = []
    for vendor, net in networks.items():
        if len(net.entity_ids) < cfg.min_entities:
            continue
        entity_ids = list(net.entity_ids)
        entity_count = len(entity_ids)

        stories.append(Story(
            id=f"crosscampaign-{vendor[:20]}",
            pattern=StoryPattern.CROSS_CAMPAIGN_NETWORK,
            severity=Severity.HIGH if entity_count >= cfg.high_entities else Severity.MEDIUM,
            headline=render_headline(
                StoryPattern.CROSS_CAMPAIGN_NETWORK, entity_count=entity_count, vendor=vendor,
            ),
            narrative=render_narrative(
                StoryPattern.CROSS_CAMPAIGN_NETWORK,
                entity_names=", ".join(ctx.name(eid) for eid in entity_ids),
                vendor=vendor,
                total=ctx.money(net.total_amount),
            ),
            entities=[
                StoryEntity(id=eid, name=ctx.name(eid), role="Campaign paying shared vendor")
                for eid in entity_ids
            ],
            evidence=[
                StoryEvidence(
                    type="Cross-Campaign Signal",
                    description=detail.description or f"{ctx.name(sig.entity_id)} → {vendor}",
                )
                for sig, detail in zip(net.signals, net.details)
            ],
            total_money=net.total_amount,
            date=net.signals[0].detected_at,
            network_size=entity_count,
            source_count=1,
        ))

    logger.debug(f"Cross-campaign networks: {len(stories)} stories")
    return stories
