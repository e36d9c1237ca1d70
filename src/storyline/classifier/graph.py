"""
Relationship graph for cluster detection.

Undirected view over active relationship edges with connected-component
analysis. Traversal uses an explicit work-list so memory stays bounded on
large graphs (no recursion).
"""

from typing import Dict, Iterable, List, Set

from loguru import logger

from ..data.models import Relationship


class RelationshipGraph:
    """
    Undirected entity graph.

    Node order and neighbor order follow edge insertion order, which makes
    component membership order (and therefore hub tie-breaks) deterministic.
    """

    def __init__(self):
        # node -> ordered neighbor set (dict keys keep insertion order)
        self._adjacency: Dict[str, Dict[str, None]] = {}
        self._edges: List[Relationship] = []

    @classmethod
    def from_relationships(cls, relationships: Iterable[Relationship]) -> "RelationshipGraph":
        graph = cls()
        skipped = 0
        for rel in relationships:
            if not rel.is_usable:
                skipped += 1
                continue
            graph.add_relationship(rel)
        if skipped:
            logger.debug(f"Skipped {skipped} inactive or incomplete relationship(s)")
        return graph

    def add_relationship(self, rel: Relationship):
        """Link both endpoints regardless of edge direction."""
        a, b = rel.source_entity_id, rel.target_entity_id
        self._adjacency.setdefault(a, {})
        self._adjacency.setdefault(b, {})
        self._adjacency[a][b] = None
        self._adjacency[b][a] = None
        self._edges.append(rel)

    @property
    def nodes(self) -> List[str]:
        return list(self._adjacency)

    @property
    def edges(self) -> List[Relationship]:
        return list(self._edges)

    def neighbors(self, entity_id: str) -> List[str]:
        return list(self._adjacency.get(entity_id, {}))

    def connected_components(self, min_size: int = 1) -> List[List[str]]:
        """
        Connected components in discovery order.

        Args:
            min_size: Drop components with fewer members than this

        Returns:
            List of components, each a list of entity ids in traversal order
        """
        visited: Set[str] = set()
        components: List[List[str]] = []

        for start in self._adjacency:
            if start in visited:
                continue
            component: List[str] = []
            stack = [start]
            while stack:
                current = stack.pop()
                if current in visited:
                    continue
                visited.add(current)
                component.append(current)
                for neighbor in self._adjacency[current]:
                    if neighbor not in visited:
                        stack.append(neighbor)
            if len(component) >= min_size:
                components.append(component)

        return components

    def edges_within(self, members: Iterable[str]) -> List[Relationship]:
        """Edges with both endpoints inside ``members``."""
        member_set = set(members)
        return [
            rel for rel in self._edges
            if rel.source_entity_id in member_set and rel.target_entity_id in member_set
        ]

    def get_stats(self) -> Dict[str, int]:
        return {
            "nodes": len(self._adjacency),
            "edges": len(self._edges),
        }
