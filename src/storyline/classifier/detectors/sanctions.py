"""
Sanctions and watchlist screening flags.

Screenings are keyed by the screened display name (free text), not by
entity id, so the story's single entity reference is unresolved.
"""

from typing import Dict, List

from loguru import logger

from ...data.models import Screening
from ..models import Severity, Story, StoryEntity, StoryEvidence, StoryPattern
from ..narrative_templates import render_headline, render_narrative
from .base import DetectionContext, unique_in_order


def detect_sanctions_flags(ctx: DetectionContext) -> List[Story]:
    cfg = ctx.config.sanctions
    by_name: Dict[str, List[Screening]] = {}
    for s in ctx.snapshot.screenings:
        by_name.setdefault(s.subject, []).append(s)

    stories: List[Story] = []
    for name, results in by_name.items():
        lists = unique_in_order(r.list_label for r in results)
        sanctioned = any(marker in l for l in lists for marker in cfg.critical_markers)
        matches = "; ".join(
            f'"{r.screened_name}" ({r.match_type} on {r.list_label})'
            for r in results[:cfg.narrated_matches]
        )

        stories.append(Story(
            id=f"sanctions-{name[:20]}",
            pattern=StoryPattern.SANCTIONS_FLAG,
            severity=Severity.CRITICAL if sanctioned else Severity.HIGH,
            headline=render_headline(StoryPattern.SANCTIONS_FLAG, name=name, list_count=len(lists)),
            narrative=render_narrative(
                StoryPattern.SANCTIONS_FLAG,
                name=name,
                match_count=len(results),
                lists=", ".join(lists),
                matches=matches,
            ),
            entities=[StoryEntity(id="", name=name, role="Screened entity")],
            evidence=[
                StoryEvidence(type=r.list_label, description=f'Matched "{r.screened_name}" ({r.match_type})')
                for r in results
            ],
            total_money=0.0,
            date=results[0].created_at,
            network_size=1,
            source_count=len(lists),
        ))

    logger.debug(f"Sanctions flags: {len(stories)} stories")
    return stories
