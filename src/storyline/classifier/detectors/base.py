"""
Shared detector plumbing.

A detector is a pure function ``(DetectionContext) -> List[Story]``. The
context bundles the snapshot, the name resolver, the configuration and the
stories emitted by earlier pipeline stages.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from ...config.config import ClassifierConfig
from ...data.models import InputSnapshot
from ..formatting import format_money
from ..models import Story
from ..resolver import EntityNameResolver


@dataclass(frozen=True)
class DetectionContext:
    snapshot: InputSnapshot
    resolver: EntityNameResolver
    config: ClassifierConfig
    prior_stories: Tuple[Story, ...] = ()

    def money(self, amount: float) -> str:
        return format_money(amount, self.config.money)

    def name(self, entity_id: Optional[str]) -> str:
        return self.resolver(entity_id)

    def with_prior(self, stories: List[Story]) -> "DetectionContext":
        return DetectionContext(
            snapshot=self.snapshot,
            resolver=self.resolver,
            config=self.config,
            prior_stories=tuple(stories),
        )


Detector = Callable[[DetectionContext], List[Story]]


def unique_in_order(values) -> List:
    """Distinct values, first-seen order."""
    return list(dict.fromkeys(values))
