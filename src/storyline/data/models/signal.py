"""
Signal records and their typed detail payloads.

A signal's ``details`` mapping is shaped differently per ``signal_type``.
Rather than probing the mapping ad hoc, each known type has a detail model;
anything else (or a payload that does not validate) becomes an
``UnrecognizedDetail`` that keeps the raw mapping around.
"""

from typing import Any, Dict, Type, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .common import safe_amount, safe_float, safe_int, safe_text


CROSS_CAMPAIGN = "CROSS_CAMPAIGN"
FEC_SPOUSE_PAYMENT = "FEC_SPOUSE_PAYMENT"
FEC_HIGH_VOLUME = "FEC_HIGH_VOLUME"


class _Detail(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class CrossCampaignDetail(_Detail):
    """A vendor paid by more than one campaign."""
    vendor: str = ""
    recipient: str = ""
    total_amount: float = 0.0
    amount: float = 0.0
    description: str = ""

    @field_validator("vendor", "recipient", "description", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return safe_text(value)

    @field_validator("total_amount", "amount", mode="before")
    @classmethod
    def _money(cls, value: Any) -> float:
        return safe_amount(value)

    @property
    def vendor_name(self) -> str:
        return self.vendor or self.recipient or "unknown"

    @property
    def money(self) -> float:
        return self.total_amount or self.amount


class SpousePaymentDetail(_Detail):
    """Campaign payment to a spouse or family-connected recipient."""
    recipient: str = ""
    amount: float = 0.0
    description: str = ""

    @field_validator("recipient", "description", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return safe_text(value)

    @field_validator("amount", mode="before")
    @classmethod
    def _money(cls, value: Any) -> float:
        return safe_amount(value)

    @property
    def recipient_name(self) -> str:
        return self.recipient or "unknown"


class HighVolumeDetail(_Detail):
    """Bulk disbursement activity summary for one entity/vendor pair."""
    vendor: str = ""
    recipient: str = ""
    total_amount: float = 0.0
    payment_count: int = 0
    description: str = ""

    @field_validator("vendor", "recipient", "description", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return safe_text(value)

    @field_validator("total_amount", mode="before")
    @classmethod
    def _money(cls, value: Any) -> float:
        return safe_amount(value)

    @field_validator("payment_count", mode="before")
    @classmethod
    def _count(cls, value: Any) -> int:
        return max(0, safe_int(value))

    @property
    def vendor_name(self) -> str:
        return self.vendor or self.recipient or "unknown"


class UnrecognizedDetail(_Detail):
    """Payload of an unknown signal type or one that failed validation."""
    raw: Dict[str, Any] = Field(default_factory=dict)


SignalDetail = Union[CrossCampaignDetail, SpousePaymentDetail, HighVolumeDetail, UnrecognizedDetail]

DETAIL_MODELS: Dict[str, Type[_Detail]] = {
    CROSS_CAMPAIGN: CrossCampaignDetail,
    FEC_SPOUSE_PAYMENT: SpousePaymentDetail,
    FEC_HIGH_VOLUME: HighVolumeDetail,
}


def parse_signal_detail(signal_type: str, details: Dict[str, Any]) -> SignalDetail:
    """Parse a raw details mapping into the typed variant for ``signal_type``."""
    model = DETAIL_MODELS.get(signal_type)
    if model is None:
        return UnrecognizedDetail(raw=dict(details))
    try:
        return model.model_validate(details)
    except ValidationError as e:
        logger.warning(f"Unrecognized {signal_type} detail shape: {e.error_count()} error(s)")
        return UnrecognizedDetail(raw=dict(details))


class Signal(BaseModel):
    """Typed event flagged by an upstream detector."""
    model_config = ConfigDict(frozen=True)

    id: str = ""
    signal_type: str = ""
    entity_id: str = ""
    source_api: str = ""
    strength: float = 0.0
    detected_at: str = ""
    details: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("id", "signal_type", "entity_id", "source_api", "detected_at", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return safe_text(value)

    @field_validator("strength", mode="before")
    @classmethod
    def _strength(cls, value: Any) -> float:
        return safe_float(value)

    @field_validator("details", mode="before")
    @classmethod
    def _details(cls, value: Any) -> Dict[str, Any]:
        return value if isinstance(value, dict) else {}

    @property
    def detail(self) -> SignalDetail:
        return parse_signal_detail(self.signal_type, self.details)
