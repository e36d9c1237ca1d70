"""
Dark-money clusters: relationship-connected entity groups.

Connected components of the active relationship graph with at least three
members become clusters. Each cluster is centered on its hub, the member with
the highest externally computed bridge score.
"""

from typing import Dict, List, Tuple

from loguru import logger

from ..formatting import humanize_label
from ..graph import RelationshipGraph
from ..models import Severity, Story, StoryEntity, StoryEvidence, StoryPattern
from ..narrative_templates import render_headline, render_narrative
from .base import DetectionContext, unique_in_order


def bridge_scores(ctx: DetectionContext) -> Dict[str, float]:
    """Positive bridge scores by entity id (later nodes win on duplicates)."""
    scores: Dict[str, float] = {}
    for node in ctx.snapshot.graph_nodes:
        if node.entity_id and node.bridge_score > 0:
            scores[node.entity_id] = node.bridge_score
    return scores


def select_hub(members: List[str], scores: Dict[str, float]) -> Tuple[str, float]:
    """Member with the highest score; ties go to the earliest member."""
    hub = members[0]
    best = scores.get(hub, 0.0)
    for member in members[1:]:
        score = scores.get(member, 0.0)
        if score > best:
            hub, best = member, score
    return hub, best


def _severity(size: int, money: float, ctx: DetectionContext) -> Severity:
    cfg = ctx.config.cluster
    if size >= cfg.high_cluster_size and money >= cfg.high_money:
        return Severity.HIGH
    if size >= cfg.min_cluster_size:
        return Severity.MEDIUM
    return Severity.INFO


def detect_dark_money_clusters(ctx: DetectionContext) -> List[Story]:
    cfg = ctx.config.cluster
    relationships = ctx.snapshot.active_relationships
    if len(relationships) < cfg.min_relationships:
        return []

    graph = RelationshipGraph.from_relationships(relationships)
    clusters = graph.connected_components(min_size=cfg.min_cluster_size)
    logger.debug(f"Relationship graph {graph.get_stats()}: {len(clusters)} cluster(s)")
    if not clusters:
        return []

    scores = bridge_scores(ctx)
    money_by_entity = ctx.snapshot.disbursement_totals()

    stories: List[Story] = []
    for members in clusters:
        size = len(members)
        cluster_money = sum(money_by_entity.get(m, 0.0) for m in members)
        hub, max_bridge = select_hub(members, scores)
        hub_name = ctx.name(hub)

        edges = graph.edges_within(members)
        rel_types = unique_in_order(humanize_label(r.relationship_type) for r in edges)
        rel_types_label = ", ".join(rel_types)

        evidence = [
            StoryEvidence(type="Graph Analysis", description=f"{size} entities in connected component"),
            StoryEvidence(
                type="Relationships",
                description=f"{len(edges)} active relationships: {rel_types_label}",
            ),
        ]
        if max_bridge > 0:
            evidence.append(StoryEvidence(
                type="Bridge Score",
                description=f"Hub bridge score: {max_bridge:.2f}; connects disparate network segments",
            ))

        stories.append(Story(
            id=f"cluster-{hub}",
            pattern=StoryPattern.DARK_MONEY_CLUSTER,
            severity=_severity(size, cluster_money, ctx),
            headline=render_headline(StoryPattern.DARK_MONEY_CLUSTER, size=size, hub=hub_name),
            narrative=render_narrative(
                StoryPattern.DARK_MONEY_CLUSTER,
                size=size,
                relationship_count=len(edges),
                relationship_types=rel_types_label,
                hub=hub_name,
                bridge_score=max_bridge,
                total=ctx.money(cluster_money),
                members=", ".join(ctx.name(m) for m in members),
            ),
            entities=[
                StoryEntity(
                    id=m,
                    name=ctx.name(m),
                    role=f"Hub (bridge score: {scores.get(m, 0.0):.2f})" if m == hub else "Connected entity",
                )
                for m in members
            ],
            evidence=evidence,
            total_money=cluster_money,
            date="",
            network_size=size,
            source_count=len(rel_types),
        ))

    logger.debug(f"Dark-money clusters: {len(stories)} stories")
    return stories
