"""
Story classifier.

Turns an InputSnapshot into a ranked list of Story records:

    from storyline.classifier import classify_stories
    stories = classify_stories(snapshot)

Modules:
- models: Story, StoryEntity, StoryEvidence, Severity, StoryPattern
- detectors: one pure function per pattern
- pipeline: staged orchestration, fallback, ranking
- report: summary statistics and export
"""

from .models import (
    PATTERN_LABELS,
    SEVERITY_LABELS,
    SEVERITY_ORDER,
    Severity,
    Story,
    StoryEntity,
    StoryEvidence,
    StoryPattern,
)
from .formatting import format_money, format_source_label, humanize_label
from .resolver import EntityNameResolver
from .graph import RelationshipGraph
from .pipeline import (
    ClassificationResult,
    PipelineStage,
    StoryClassifier,
    classify_stories,
    rank_stories,
)
from .report import StoryReport, build_report

__all__ = [
    # Models
    "Story",
    "StoryEntity",
    "StoryEvidence",
    "Severity",
    "StoryPattern",
    "SEVERITY_ORDER",
    "PATTERN_LABELS",
    "SEVERITY_LABELS",
    # Helpers
    "format_money",
    "format_source_label",
    "humanize_label",
    "EntityNameResolver",
    "RelationshipGraph",
    # Pipeline
    "StoryClassifier",
    "ClassificationResult",
    "PipelineStage",
    "classify_stories",
    "rank_stories",
    # Reporting
    "StoryReport",
    "build_report",
]
