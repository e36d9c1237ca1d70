"""
Story model - the classifier's sole output type.

A Story is one synthesized narrative describing a detected pattern, with a
severity tier, a money total and an evidence trail. Stories are freshly
allocated per run; their ids are derived from pattern + subject so repeated
runs over the same snapshot reproduce them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class Severity(str, Enum):
    """Story severity tiers, most severe first."""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    INFO = "info"

    @property
    def rank(self) -> int:
        return SEVERITY_ORDER[self]


SEVERITY_ORDER = {
    Severity.CRITICAL: 0,
    Severity.HIGH: 1,
    Severity.MEDIUM: 2,
    Severity.INFO: 3,
}


class StoryPattern(str, Enum):
    """Pattern typologies a story can describe."""
    VENDOR_SIPHONING = "VENDOR_SIPHONING"              # one vendor paid by many campaigns
    CROSS_CAMPAIGN_NETWORK = "CROSS_CAMPAIGN_NETWORK"  # campaigns sharing a vendor
    REVOLVING_DOOR = "REVOLVING_DOOR"                  # former officials now lobbying
    FAMILY_PAYMENTS = "FAMILY_PAYMENTS"                # campaign funds to family
    SANCTIONS_FLAG = "SANCTIONS_FLAG"                  # watchlist matches
    HIGH_VOLUME_PASS_THROUGH = "HIGH_VOLUME_PASS_THROUGH"
    DARK_MONEY_CLUSTER = "DARK_MONEY_CLUSTER"          # relationship-graph clusters
    INVESTIGATION_FINDINGS = "INVESTIGATION_FINDINGS"
    DATA_LOADED = "DATA_LOADED"                        # fallback, not a pattern match


PATTERN_LABELS = {
    StoryPattern.VENDOR_SIPHONING: "Vendor Siphoning",
    StoryPattern.CROSS_CAMPAIGN_NETWORK: "Cross-Campaign",
    StoryPattern.REVOLVING_DOOR: "Revolving Door",
    StoryPattern.FAMILY_PAYMENTS: "Family Payments",
    StoryPattern.SANCTIONS_FLAG: "Sanctions Alert",
    StoryPattern.HIGH_VOLUME_PASS_THROUGH: "High Volume",
    StoryPattern.DARK_MONEY_CLUSTER: "Network Cluster",
    StoryPattern.INVESTIGATION_FINDINGS: "Investigation",
    StoryPattern.DATA_LOADED: "Data Status",
}

SEVERITY_LABELS = {
    Severity.CRITICAL: "CRITICAL",
    Severity.HIGH: "HIGH",
    Severity.MEDIUM: "MEDIUM",
    Severity.INFO: "INFO",
}


@dataclass
class StoryEntity:
    """Entity referenced by a story. ``id`` is empty for unresolved names."""
    id: str
    name: str
    role: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "role": self.role}


@dataclass
class StoryEvidence:
    type: str
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "description": self.description}


@dataclass
class Story:
    """
    One classified story.

    Invariants enforced on construction: total_money is never negative and
    an entity reference with a non-empty id appears at most once.
    """

    id: str
    pattern: StoryPattern
    severity: Severity
    headline: str
    narrative: str
    entities: List[StoryEntity] = field(default_factory=list)
    evidence: List[StoryEvidence] = field(default_factory=list)
    total_money: float = 0.0
    date: str = ""
    network_size: int = 0
    source_count: int = 0

    def __post_init__(self):
        self.pattern = StoryPattern(self.pattern)
        self.severity = Severity(self.severity)
        self.total_money = max(0.0, float(self.total_money or 0.0))

        seen = set()
        unique = []
        for ref in self.entities:
            if ref.id:
                if ref.id in seen:
                    continue
                seen.add(ref.id)
            unique.append(ref)
        self.entities = unique

    def references(self, entity_id: str) -> bool:
        """Whether this story names the given (non-empty) entity id."""
        return bool(entity_id) and any(ref.id == entity_id for ref in self.entities)

    @property
    def entity_ids(self) -> List[str]:
        return [ref.id for ref in self.entities if ref.id]

    @property
    def sort_key(self):
        return (self.severity.rank, -self.total_money)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "pattern": self.pattern.value,
            "severity": self.severity.value,
            "headline": self.headline,
            "narrative": self.narrative,
            "entities": [ref.to_dict() for ref in self.entities],
            "evidence": [item.to_dict() for item in self.evidence],
            "total_money": self.total_money,
            "date": self.date,
            "network_size": self.network_size,
            "source_count": self.source_count,
        }

    def to_summary_dict(self) -> Dict[str, Any]:
        """Compact summary for a story index."""
        return {
            "id": self.id,
            "pattern": self.pattern.value,
            "pattern_label": PATTERN_LABELS[self.pattern],
            "severity": SEVERITY_LABELS[self.severity],
            "headline": self.headline,
            "total_money": round(self.total_money, 2),
            "date": self.date,
            "entity_count": len(self.entities),
            "evidence_count": len(self.evidence),
            "network_size": self.network_size,
            "source_count": self.source_count,
        }
