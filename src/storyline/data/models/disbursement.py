"""
Campaign disbursement record (FEC Schedule B style).
"""

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .common import optional_text, safe_amount, safe_text


class Disbursement(BaseModel):
    """A payment from a committee (optionally linked to an entity) to a recipient."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = ""
    sub_id: str = ""
    entity_id: Optional[str] = None
    committee_id: str = ""
    committee_name: str = ""
    candidate_name: str = ""
    recipient_name: str = ""
    amount: float = Field(0.0, validation_alias=AliasChoices("amount", "disbursement_amount"))
    date: str = Field("", validation_alias=AliasChoices("date", "disbursement_date"))
    description: str = Field(
        "", validation_alias=AliasChoices("description", "disbursement_description")
    )

    @field_validator(
        "id", "sub_id", "committee_id", "committee_name", "candidate_name",
        "recipient_name", "date", "description", mode="before",
    )
    @classmethod
    def _text(cls, value: Any) -> str:
        return safe_text(value)

    @field_validator("entity_id", mode="before")
    @classmethod
    def _entity(cls, value: Any) -> Optional[str]:
        return optional_text(value)

    @field_validator("amount", mode="before")
    @classmethod
    def _money(cls, value: Any) -> float:
        return safe_amount(value)

    @property
    def is_attributable(self) -> bool:
        """True when the payer can be identified by entity or committee."""
        return bool(self.entity_id) or bool(self.committee_id.strip()) or bool(self.committee_name.strip())

    @property
    def committee_key(self) -> str:
        # Trimmed only; casing/punctuation variants stay distinct committees
        return (self.committee_id or self.committee_name or "").strip() or "unknown"

    @property
    def vendor_key(self) -> str:
        return self.recipient_name.upper().strip()
