"""
Vendor siphoning: one vendor paid by many campaigns (fan-in).

Disbursements are grouped by normalized recipient name. A vendor qualifies
through entity-level grouping when enough distinct politicians paid it, and
otherwise through committee-level grouping, which still works when the
disbursements were never linked to an entity.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from loguru import logger

from ...data.models import Disbursement
from ..models import Severity, Story, StoryEntity, StoryEvidence, StoryPattern
from ..narrative_templates import render_headline, render_narrative
from .base import DetectionContext


@dataclass
class _Payer:
    name: str
    amount: float = 0.0
    committee: str = ""


@dataclass
class _VendorActivity:
    total: float = 0.0
    entities: Dict[str, _Payer] = field(default_factory=dict)
    committees: Dict[str, _Payer] = field(default_factory=dict)
    disbursements: List[Disbursement] = field(default_factory=list)

    @property
    def latest_date(self) -> str:
        return max((d.date for d in self.disbursements), default="")


def _collect(ctx: DetectionContext) -> Dict[str, _VendorActivity]:
    cfg = ctx.config.vendor_siphoning
    vendors: Dict[str, _VendorActivity] = {}

    for d in ctx.snapshot.attributable_disbursements:
        vendor = d.vendor_key
        if not vendor or len(vendor) < cfg.min_vendor_length or vendor in cfg.generic_vendor_names:
            continue

        activity = vendors.setdefault(vendor, _VendorActivity())
        activity.total += d.amount
        activity.disbursements.append(d)

        key = d.committee_key
        committee = activity.committees.setdefault(key, _Payer(name=d.committee_name or key))
        committee.amount += d.amount

        if d.entity_id:
            payer = activity.entities.setdefault(d.entity_id, _Payer(name=ctx.name(d.entity_id)))
            payer.amount += d.amount
            if d.committee_name:
                payer.committee = d.committee_name

    return vendors


def _severity(payer_count: int, total: float, ctx: DetectionContext) -> Severity:
    cfg = ctx.config.vendor_siphoning
    if payer_count >= cfg.critical_payers:
        return Severity.CRITICAL
    if total >= cfg.high_total:
        return Severity.HIGH
    return Severity.MEDIUM


def detect_vendor_siphoning(ctx: DetectionContext) -> List[Story]:
    """Emit one story per vendor paid by enough distinct payers."""
    cfg = ctx.config.vendor_siphoning
    stories: List[Story] = []

    for vendor, activity in _collect(ctx).items():
        use_entities = len(activity.entities) >= cfg.min_payers and activity.total >= cfg.min_entity_total
        use_committees = (
            not use_entities
            and len(activity.committees) >= cfg.min_payers
            and activity.total >= cfg.min_committee_total
        )
        if not (use_entities or use_committees):
            continue

        payers = activity.entities if use_entities else activity.committees
        ranked = sorted(payers.items(), key=lambda item: item[1].amount, reverse=True)
        top = ranked[:cfg.narrated_payers]

        if use_entities:
            key = "vendor_siphoning_entities"
            top_payers = ", ".join(
                f"{p.name} ({ctx.money(p.amount)} via {p.committee or 'unknown committee'})" for _, p in top
            )
            refs = [
                StoryEntity(
                    id=payer_id,
                    name=p.name,
                    role=f"Paid {ctx.money(p.amount)} via {p.committee or 'unknown committee'}",
                )
                for payer_id, p in ranked
            ]
            network_label = "distinct political campaigns involved"
        else:
            key = "vendor_siphoning_committees"
            top_payers = ", ".join(f"{p.name} ({ctx.money(p.amount)})" for _, p in top)
            refs = [
                StoryEntity(id=committee_id, name=p.name, role=f"Paid {ctx.money(p.amount)}")
                for committee_id, p in ranked
            ]
            network_label = "distinct committees involved"

        payer_count = len(payers)
        total_label = ctx.money(activity.total)
        stories.append(Story(
            id=f"siphon-{vendor[:20]}",
            pattern=StoryPattern.VENDOR_SIPHONING,
            severity=_severity(payer_count, activity.total, ctx),
            headline=render_headline(key, vendor=vendor, payer_count=payer_count),
            narrative=render_narrative(
                key, vendor=vendor, total=total_label, payer_count=payer_count, top_payers=top_payers,
            ),
            entities=refs,
            evidence=[
                StoryEvidence(
                    type="FEC Disbursements",
                    description=f"{len(activity.disbursements)} payments totaling {total_label}",
                ),
                StoryEvidence(type="Network Size", description=f"{payer_count} {network_label}"),
            ],
            total_money=activity.total,
            date=activity.latest_date,
            network_size=payer_count,
            source_count=1,
        ))

    logger.debug(f"Vendor siphoning: {len(stories)} stories")
    return stories
