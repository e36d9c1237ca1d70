"""
Story report: summary statistics and on-disk export for one classification run.

Output layout of ``StoryReport.save(output_dir)``:

    output_dir/
        stories.json       full story records, ranked
        story_index.csv    one summary row per story
        summary.json       counts per severity / pattern, totals
"""

import csv
import json
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from loguru import logger

from .models import SEVERITY_ORDER, Severity, Story, StoryPattern
from .pipeline import ClassificationResult


@dataclass
class StoryReport:
    """Ranked stories plus the run bookkeeping needed to explain them."""
    stories: List[Story]
    failed_detectors: List[str] = field(default_factory=list)
    used_fallback: bool = False
    generated_at: str = field(default_factory=lambda: datetime.now().isoformat())

    @classmethod
    def from_result(cls, result: ClassificationResult) -> "StoryReport":
        return cls(
            stories=list(result.stories),
            failed_detectors=list(result.failed_detectors),
            used_fallback=result.used_fallback,
        )

    # =========================================================================
    # Summary
    # =========================================================================

    @property
    def total_money(self) -> float:
        return sum(s.total_money for s in self.stories)

    @property
    def entity_ids(self) -> List[str]:
        """Distinct referenced entity ids, first-seen order."""
        return list(dict.fromkeys(eid for s in self.stories for eid in s.entity_ids))

    def severity_counts(self) -> Dict[str, int]:
        counts = Counter(s.severity for s in self.stories)
        return {sev.value: counts.get(sev, 0) for sev in sorted(Severity, key=SEVERITY_ORDER.get)}

    def pattern_counts(self) -> Dict[str, int]:
        return dict(Counter(s.pattern.value for s in self.stories))

    def get_summary(self) -> Dict[str, Any]:
        return {
            "generated_at": self.generated_at,
            "story_count": len(self.stories),
            "by_severity": self.severity_counts(),
            "by_pattern": self.pattern_counts(),
            "total_money": round(self.total_money, 2),
            "entity_count": len(self.entity_ids),
            "failed_detectors": list(self.failed_detectors),
            "used_fallback": self.used_fallback,
        }

    def filter_by_pattern(self, pattern: Union[StoryPattern, str]) -> List[Story]:
        """Stories of one pattern, keeping rank order."""
        pattern = StoryPattern(pattern)
        return [s for s in self.stories if s.pattern == pattern]

    # =========================================================================
    # Export
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.get_summary(),
            "stories": [s.to_dict() for s in self.stories],
        }

    def save(self, output_dir: Union[str, Path]) -> Path:
        """Write stories.json, story_index.csv and summary.json."""
        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        with open(output_path / "stories.json", "w", encoding="utf-8") as f:
            json.dump([s.to_dict() for s in self.stories], f, indent=2, default=str)

        index_data = [s.to_summary_dict() for s in self.stories]
        with open(output_path / "story_index.csv", "w", newline="", encoding="utf-8") as f:
            if index_data:
                writer = csv.DictWriter(f, fieldnames=list(index_data[0].keys()))
                writer.writeheader()
                writer.writerows(index_data)

        with open(output_path / "summary.json", "w", encoding="utf-8") as f:
            json.dump(self.get_summary(), f, indent=2, default=str)

        logger.info(f"Saved {len(self.stories)} stories to {output_path}")
        return output_path


def build_report(result: ClassificationResult, pattern: Optional[str] = None) -> StoryReport:
    """Report for a run, optionally narrowed to one pattern."""
    report = StoryReport.from_result(result)
    if pattern:
        report.stories = report.filter_by_pattern(pattern)
    return report
