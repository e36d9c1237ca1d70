"""
Investigation queue entries and their findings.

Findings carry an optional free-form ``detail`` mapping. The only shape the
classifier interprets is the lobbying-disclosure payload listing lobbyists
who previously held government positions.
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .common import safe_int, safe_text, text_list


class Lobbyist(BaseModel):
    """Registered lobbyist with a prior covered government position."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    covered_position: str = ""

    @field_validator("name", "covered_position", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return safe_text(value)


class RevolvingDoorDetail(BaseModel):
    """Detail payload of a lobbying-disclosure finding."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    revolving_door_lobbyists: Tuple[Lobbyist, ...] = ()

    @field_validator("revolving_door_lobbyists", mode="before")
    @classmethod
    def _lobbyists(cls, value: Any) -> List[Any]:
        if not isinstance(value, (list, tuple)):
            return []
        # Every entry counts toward the lobbyist total; malformed ones read as blank
        return [v if isinstance(v, (dict, Lobbyist)) else {} for v in value]


class Finding(BaseModel):
    """One notable result returned by a source during an investigation."""
    model_config = ConfigDict(frozen=True)

    source: str = ""
    summary: str = ""
    detail: Optional[Dict[str, Any]] = None

    @field_validator("source", "summary", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return safe_text(value)

    @field_validator("detail", mode="before")
    @classmethod
    def _detail(cls, value: Any) -> Optional[Dict[str, Any]]:
        return value if isinstance(value, dict) else None

    @property
    def revolving_door(self) -> Optional[RevolvingDoorDetail]:
        """Typed lobbying payload, or None when the detail has no lobbyist list."""
        if not self.detail or "revolving_door_lobbyists" not in self.detail:
            return None
        try:
            return RevolvingDoorDetail.model_validate(self.detail)
        except ValidationError:
            return None


class Investigation(BaseModel):
    """Entity-scoped investigation with its ordered findings."""
    model_config = ConfigDict(frozen=True)

    id: str = ""
    entity_id: str = ""
    entity_name: str = ""
    status: str = ""  # active | investigating | expired
    priority: int = 0
    thesis: str = ""
    signal_ids: List[str] = Field(default_factory=list)
    sources_queried: List[str] = Field(default_factory=list)
    sources_remaining: List[str] = Field(default_factory=list)
    findings: Tuple[Finding, ...] = ()
    entered_at: str = ""
    expires_at: str = ""
    updated_at: str = ""

    @field_validator(
        "id", "entity_id", "entity_name", "status", "thesis",
        "entered_at", "expires_at", "updated_at", mode="before",
    )
    @classmethod
    def _text(cls, value: Any) -> str:
        return safe_text(value)

    @field_validator("priority", mode="before")
    @classmethod
    def _priority(cls, value: Any) -> int:
        return safe_int(value)

    @field_validator("signal_ids", "sources_queried", "sources_remaining", mode="before")
    @classmethod
    def _lists(cls, value: Any) -> List[str]:
        return text_list(value)

    @field_validator("findings", mode="before")
    @classmethod
    def _findings(cls, value: Any) -> List[Any]:
        if not isinstance(value, (list, tuple)):
            return []
        return [f for f in value if isinstance(f, (dict, Finding))]
