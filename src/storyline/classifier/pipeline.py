"""
Story classification pipeline.

Runs the detectors as explicit stages over one immutable snapshot:

1. ``patterns`` - the seven independent detectors. They only read the
   snapshot, so their relative order does not matter beyond making the
   output deterministic.
2. ``investigations`` - the investigation-findings detector, which receives
   every story emitted by stage 1 and suppresses entities already covered.

Each stage receives the snapshot plus the stories accumulated so far. A
detector that raises is logged and contributes nothing; the other detectors'
output is kept. After the stages, the fallback story is added if nothing
matched and the result is ranked by severity, then money.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger

from ..config.config import ClassifierConfig
from ..data.models import InputSnapshot
from .detectors import (
    DetectionContext,
    Detector,
    build_data_loaded_story,
    detect_cross_campaign_networks,
    detect_dark_money_clusters,
    detect_family_payments,
    detect_high_volume_pass_through,
    detect_investigation_findings,
    detect_revolving_door,
    detect_sanctions_flags,
    detect_vendor_siphoning,
)
from .models import Story
from .resolver import EntityNameResolver


@dataclass
class PipelineStage:
    """A group of detectors that all see the same stories-so-far."""
    name: str
    detectors: List[Tuple[str, Detector]]


DEFAULT_STAGES: List[PipelineStage] = [
    PipelineStage(
        name="patterns",
        detectors=[
            ("vendor_siphoning", detect_vendor_siphoning),
            ("cross_campaign", detect_cross_campaign_networks),
            ("revolving_door", detect_revolving_door),
            ("family_payments", detect_family_payments),
            ("sanctions", detect_sanctions_flags),
            ("high_volume", detect_high_volume_pass_through),
            ("dark_money", detect_dark_money_clusters),
        ],
    ),
    PipelineStage(
        name="investigations",
        detectors=[("investigation_findings", detect_investigation_findings)],
    ),
]


@dataclass
class ClassificationResult:
    """Ranked stories plus bookkeeping about how the run went."""
    stories: List[Story]
    detector_counts: Dict[str, int] = field(default_factory=dict)
    failed_detectors: List[str] = field(default_factory=list)
    used_fallback: bool = False

    @property
    def pattern_counts(self) -> Dict[str, int]:
        return dict(Counter(s.pattern.value for s in self.stories))


def rank_stories(stories: Sequence[Story]) -> List[Story]:
    """
    Stable sort: severity (critical first), then total money descending.

    Stories equal on both keys keep their detection order.
    """
    return sorted(stories, key=lambda s: s.sort_key)


def ensure_unique_ids(stories: List[Story]) -> List[Story]:
    """Suffix repeated ids (-2, -3, ...) in emission order."""
    seen: Dict[str, int] = {}
    for story in stories:
        base = story.id
        if base not in seen:
            seen[base] = 1
            continue
        n = seen[base]
        candidate = f"{base}-{n + 1}"
        while candidate in seen:
            n += 1
            candidate = f"{base}-{n + 1}"
        seen[base] = n + 1
        seen[candidate] = 1
        logger.debug(f"Duplicate story id {base!r} renamed to {candidate!r}")
        story.id = candidate
    return stories


class StoryClassifier:
    """
    Turns an InputSnapshot into a ranked list of stories.

    The classifier holds configuration only; every run is independent.
    """

    def __init__(
        self,
        config: Optional[ClassifierConfig] = None,
        stages: Optional[List[PipelineStage]] = None,
    ):
        self.config = config or ClassifierConfig()
        self.config.validate()
        self.stages = stages if stages is not None else DEFAULT_STAGES

    def run(self, snapshot: InputSnapshot) -> ClassificationResult:
        ctx = DetectionContext(
            snapshot=snapshot,
            resolver=EntityNameResolver(snapshot.entities),
            config=self.config,
        )

        stories: List[Story] = []
        counts: Dict[str, int] = {}
        failed: List[str] = []

        for stage in self.stages:
            stage_ctx = ctx.with_prior(stories)
            emitted: List[Story] = []
            for name, detector in stage.detectors:
                try:
                    found = detector(stage_ctx)
                except Exception:
                    logger.exception(f"Detector {name} failed; continuing without its stories")
                    failed.append(name)
                    found = []
                counts[name] = len(found)
                emitted.extend(found)
            stories.extend(emitted)

        used_fallback = False
        if not stories:
            fallback = build_data_loaded_story(ctx)
            if fallback is not None:
                stories.append(fallback)
                used_fallback = True

        ranked = rank_stories(ensure_unique_ids(stories))
        logger.info(
            f"Classified {len(ranked)} stories from {sum(snapshot.counts().values())} records"
            + (f" ({len(failed)} detector(s) failed)" if failed else "")
        )
        return ClassificationResult(
            stories=ranked,
            detector_counts=counts,
            failed_detectors=failed,
            used_fallback=used_fallback,
        )

    def classify(self, snapshot: InputSnapshot) -> List[Story]:
        return self.run(snapshot).stories


def classify_stories(snapshot: InputSnapshot, config: Optional[ClassifierConfig] = None) -> List[Story]:
    """Classify a snapshot with the default pipeline."""
    return StoryClassifier(config).classify(snapshot)
