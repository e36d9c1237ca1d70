"""
Immutable input snapshot for one classification run.
"""

from typing import Any, Dict, List, Mapping, Tuple, Type

from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError

from .disbursement import Disbursement
from .entity import Entity, GraphNode, Relationship
from .investigation import Investigation
from .screening import Screening
from .signal import Signal


# Collection name -> (row model, keys the source store uses for it)
COLLECTIONS: Dict[str, Tuple[Type[BaseModel], Tuple[str, ...]]] = {
    "signals": (Signal, ("signals",)),
    "investigations": (Investigation, ("investigations", "mmix_entries")),
    "relationships": (Relationship, ("relationships",)),
    "entities": (Entity, ("entities",)),
    "disbursements": (Disbursement, ("disbursements", "fec_disbursements")),
    "screenings": (Screening, ("screenings", "screening_results")),
    "graph_nodes": (GraphNode, ("graph_nodes", "kbNodes", "kb_nodes")),
}


def _parse_rows(name: str, model: Type[BaseModel], rows: Any) -> List[BaseModel]:
    if rows is None:
        return []
    if not isinstance(rows, (list, tuple)):
        logger.warning(f"Expected a list for '{name}', got {type(rows).__name__}; ignoring")
        return []

    parsed = []
    for i, row in enumerate(rows):
        if isinstance(row, model):
            parsed.append(row)
            continue
        if not isinstance(row, Mapping):
            logger.warning(f"Skipping {name}[{i}]: not an object")
            continue
        try:
            parsed.append(model.model_validate(dict(row)))
        except ValidationError as e:
            logger.warning(f"Skipping {name}[{i}]: {e.error_count()} validation error(s)")
    return parsed


class InputSnapshot(BaseModel):
    """
    Everything one classification run looks at.

    Built once by the caller (typically from an already-paginated read of the
    backing store) and never mutated by the classifier.
    """
    model_config = ConfigDict(frozen=True)

    signals: Tuple[Signal, ...] = ()
    investigations: Tuple[Investigation, ...] = ()
    relationships: Tuple[Relationship, ...] = ()
    entities: Tuple[Entity, ...] = ()
    disbursements: Tuple[Disbursement, ...] = ()
    screenings: Tuple[Screening, ...] = ()
    graph_nodes: Tuple[GraphNode, ...] = ()

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "InputSnapshot":
        """
        Build a snapshot from raw row dicts.

        Accepts the store's own collection keys (``fec_disbursements``,
        ``kbNodes``, ...) as well as the field names. Rows that fail
        validation are skipped with a warning rather than failing the run.
        """
        collections: Dict[str, List[BaseModel]] = {}
        for name, (model, keys) in COLLECTIONS.items():
            rows: List[BaseModel] = []
            for key in keys:
                if key in raw:
                    rows.extend(_parse_rows(key, model, raw[key]))
            collections[name] = rows
        return cls(**collections)

    @property
    def has_raw_data(self) -> bool:
        """Whether any of the collections the fallback story summarizes is non-empty."""
        return bool(self.disbursements or self.entities or self.signals)

    @property
    def active_relationships(self) -> Tuple[Relationship, ...]:
        return tuple(r for r in self.relationships if r.is_usable)

    @property
    def attributable_disbursements(self) -> Tuple[Disbursement, ...]:
        return tuple(d for d in self.disbursements if d.is_attributable)

    def signals_of_type(self, signal_type: str) -> Tuple[Signal, ...]:
        return tuple(s for s in self.signals if s.signal_type == signal_type)

    def disbursement_totals(self) -> Dict[str, float]:
        """Total attributable disbursement amount per paying entity id."""
        totals: Dict[str, float] = {}
        for d in self.attributable_disbursements:
            if not d.entity_id:
                continue
            totals[d.entity_id] = totals.get(d.entity_id, 0.0) + d.amount
        return totals

    def counts(self) -> Dict[str, int]:
        return {
            "signals": len(self.signals),
            "investigations": len(self.investigations),
            "relationships": len(self.relationships),
            "entities": len(self.entities),
            "disbursements": len(self.disbursements),
            "screenings": len(self.screenings),
            "graph_nodes": len(self.graph_nodes),
        }
