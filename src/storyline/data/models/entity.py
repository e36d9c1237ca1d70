"""
Entity, relationship and graph-node records.

Entities are resolved upstream; the classifier only reads their display
names. Relationships are undirected for clustering purposes and only the
currently active ones take part.
"""

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import safe_float, safe_text, text_list


class Entity(BaseModel):
    """Resolved entity (politician, committee, company, ...)"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique identifier")
    canonical_name: str = ""
    normalized_name: str = ""
    entity_type: str = ""
    aliases: List[str] = Field(default_factory=list)

    @field_validator("id", "canonical_name", "normalized_name", "entity_type", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return safe_text(value)

    @field_validator("aliases", mode="before")
    @classmethod
    def _aliases(cls, value: Any) -> List[str]:
        return text_list(value)


class Relationship(BaseModel):
    """Edge between two entities"""
    model_config = ConfigDict(frozen=True)

    id: str = ""
    source_entity_id: str = ""
    target_entity_id: str = ""
    relationship_type: str = "related_to"
    is_current: bool = True

    @field_validator("id", "source_entity_id", "target_entity_id", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return safe_text(value)

    @field_validator("relationship_type", mode="before")
    @classmethod
    def _type(cls, value: Any) -> str:
        return safe_text(value) or "related_to"

    @field_validator("is_current", mode="before")
    @classmethod
    def _current(cls, value: Any) -> bool:
        # Rows without the flag come from queries that already filtered on it
        if value is None:
            return True
        if isinstance(value, str):
            return value.strip().lower() not in ("false", "0", "no", "")
        return bool(value)

    @property
    def is_usable(self) -> bool:
        """Active and with both endpoints present."""
        return self.is_current and bool(self.source_entity_id) and bool(self.target_entity_id)


class GraphNode(BaseModel):
    """Per-entity graph metrics computed by the knowledge-base builder."""
    model_config = ConfigDict(frozen=True)

    entity_id: str = ""
    bridge_score: float = 0.0

    @field_validator("entity_id", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return safe_text(value)

    @field_validator("bridge_score", mode="before")
    @classmethod
    def _score(cls, value: Any) -> float:
        return safe_float(value)
