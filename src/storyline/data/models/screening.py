"""
Watchlist screening match (OFAC SDN, PEP lists, OpenSanctions, ...).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from .common import safe_text


class Screening(BaseModel):
    """One watchlist hit for a screened display name."""
    model_config = ConfigDict(frozen=True)

    id: str = ""
    entity_name: str = ""    # screened display name (free text, not an entity id)
    screened_name: str = ""  # name as it appears on the list
    list_name: str = ""
    source: str = ""
    match_type: str = ""
    created_at: str = ""

    @field_validator(
        "id", "entity_name", "screened_name", "list_name", "source",
        "match_type", "created_at", mode="before",
    )
    @classmethod
    def _text(cls, value: Any) -> str:
        return safe_text(value)

    @property
    def subject(self) -> str:
        return self.entity_name or "unknown"

    @property
    def list_label(self) -> str:
        return self.list_name or self.source
