"""
Revolving door: former government officials lobbying for an investigated entity.

Reads lobbying-disclosure findings attached to investigations. The pattern
carries no monetary signal, so these stories always report zero money.
"""

from typing import List

from loguru import logger

from ..models import Severity, Story, StoryEntity, StoryEvidence, StoryPattern
from ..narrative_templates import render_headline, render_narrative
from .base import DetectionContext


def detect_revolving_door(ctx: DetectionContext) -> List[Story]:
    cfg = ctx.config.revolving_door
    stories: List[Story] = []

    for inv in ctx.snapshot.investigations:
        for finding in inv.findings:
            if finding.source not in cfg.source_aliases:
                continue
            detail = finding.revolving_door
            if detail is None or not detail.revolving_door_lobbyists:
                continue

            lobbyists = detail.revolving_door_lobbyists
            name = inv.entity_name or ctx.name(inv.entity_id)
            narrated = lobbyists[:cfg.narrated_lobbyists]

            stories.append(Story(
                id=f"revolving-{inv.entity_id}-{lobbyists[0].name[:10]}",
                pattern=StoryPattern.REVOLVING_DOOR,
                severity=Severity.HIGH if len(lobbyists) >= cfg.high_lobbyists else Severity.MEDIUM,
                headline=render_headline(
                    StoryPattern.REVOLVING_DOOR, lobbyist_count=len(lobbyists), name=name,
                ),
                narrative=render_narrative(
                    StoryPattern.REVOLVING_DOOR,
                    lobbyist_count=len(lobbyists),
                    name=name,
                    former_positions=". ".join(
                        f'{l.name} formerly served as "{l.covered_position}"' for l in narrated
                    ),
                ),
                entities=[
                    StoryEntity(id=inv.entity_id, name=name, role="Lobbying registrant/client"),
                    *[
                        StoryEntity(id="", name=l.name, role=f"Former: {l.covered_position}")
                        for l in lobbyists[:cfg.listed_lobbyists]
                    ],
                ],
                evidence=[
                    StoryEvidence(type="Senate LDA Filing", description=finding.summary),
                    *[
                        StoryEvidence(
                            type="Revolving Door",
                            description=f'{l.name}, previously "{l.covered_position}"',
                        )
                        for l in narrated
                    ],
                ],
                total_money=0.0,
                date=inv.entered_at,
                network_size=len(lobbyists) + 1,
                source_count=1,
            ))

    logger.debug(f"Revolving door: {len(stories)} stories")
    return stories
