"""
Investigation findings: investigations with multiple notable findings.

This detector depends on everything emitted before it. An investigated
entity that already appears in a story of another pattern is skipped, since
that story is the more specific one. It must therefore run as the last
pipeline stage.
"""

from typing import Iterable, List

from loguru import logger

from ..formatting import format_source_label
from ..models import Severity, Story, StoryEntity, StoryEvidence, StoryPattern
from ..narrative_templates import render_headline, render_narrative
from .base import DetectionContext, unique_in_order


def _already_covered(entity_id: str, stories: Iterable[Story]) -> bool:
    return any(
        s.pattern != StoryPattern.INVESTIGATION_FINDINGS and s.references(entity_id)
        for s in stories
    )


def _severity(finding_count: int, ctx: DetectionContext) -> Severity:
    cfg = ctx.config.investigation
    if finding_count >= cfg.high_findings:
        return Severity.HIGH
    if finding_count >= cfg.medium_findings:
        return Severity.MEDIUM
    return Severity.INFO


def detect_investigation_findings(ctx: DetectionContext) -> List[Story]:
    cfg = ctx.config.investigation
    money_by_entity = ctx.snapshot.disbursement_totals()
    stories: List[Story] = []
    suppressed = 0

    for inv in ctx.snapshot.investigations:
        findings = inv.findings
        if len(findings) < cfg.min_findings:
            continue
        if _already_covered(inv.entity_id, ctx.prior_stories):
            suppressed += 1
            continue

        name = inv.entity_name or ctx.name(inv.entity_id)
        sources = unique_in_order(f.source for f in findings)
        thesis = f'Investigation thesis: "{inv.thesis}". ' if inv.thesis else ""
        role = "Under active investigation" if inv.status == "active" else (inv.status or "Investigation subject")

        stories.append(Story(
            id=f"inv-{inv.id}",
            pattern=StoryPattern.INVESTIGATION_FINDINGS,
            severity=_severity(len(findings), ctx),
            headline=render_headline(
                StoryPattern.INVESTIGATION_FINDINGS,
                name=name, finding_count=len(findings), source_count=len(sources),
            ),
            narrative=render_narrative(
                StoryPattern.INVESTIGATION_FINDINGS,
                name=name,
                sources_queried=len(inv.sources_queried),
                finding_count=len(findings),
                source_labels=", ".join(format_source_label(s) for s in sources),
                thesis=thesis,
                key_findings=". ".join(f.summary for f in findings[:cfg.narrated_findings]),
            ),
            entities=[StoryEntity(id=inv.entity_id, name=name, role=role)],
            evidence=[
                StoryEvidence(type=format_source_label(f.source), description=f.summary)
                for f in findings
            ],
            total_money=money_by_entity.get(inv.entity_id, 0.0) if inv.entity_id else 0.0,
            date=inv.entered_at,
            network_size=1,
            source_count=len(sources),
        ))

    if suppressed:
        logger.debug(f"Investigation findings: {suppressed} investigation(s) covered by other stories")
    logger.debug(f"Investigation findings: {len(stories)} stories")
    return stories
