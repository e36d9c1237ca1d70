#!/usr/bin/env python3
"""
CLI Runner for the story classifier

Loads a snapshot export, classifies it and prints the ranked stories as a
table (or JSON). Optionally saves a full report to disk.
"""

import argparse
import json
import sys
from typing import List, Optional

from dotenv import load_dotenv
from loguru import logger

# Load environment variables from .env file FIRST
load_dotenv()

from .classifier import StoryClassifier, build_report
from .classifier.models import PATTERN_LABELS, SEVERITY_LABELS, StoryPattern
from .classifier.formatting import format_money
from .config import load_config
from .data.loaders import SnapshotLoadError, load_snapshot


def configure_logging(level: str = "INFO"):
    """Route loguru output to stderr at the given level."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Classify an investigative data snapshot into ranked stories",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print ranked stories for a snapshot export
  python -m storyline.runner data/snapshot.json

  # Use staging thresholds and save the report
  python -m storyline.runner data/snapshot.json --environment staging --output reports/latest

  # Only vendor-siphoning stories, as JSON
  python -m storyline.runner data/snapshot.json --pattern VENDOR_SIPHONING --json
"""
    )

    parser.add_argument(
        "snapshot",
        help="Snapshot JSON file"
    )

    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Classifier config YAML (default: $STORYLINE_CONFIG or config/classifier.yaml)"
    )

    parser.add_argument(
        "--environment", "-e",
        default=None,
        help="Config environment block to apply (default: $STORYLINE_ENV)"
    )

    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Directory to save stories.json, story_index.csv and summary.json"
    )

    parser.add_argument(
        "--pattern", "-p",
        choices=[p.value for p in StoryPattern],
        default=None,
        help="Only report stories of this pattern"
    )

    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: from config)"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON instead of a table"
    )

    return parser.parse_args(argv)


def print_report(report):
    summary = report.get_summary()

    print("\n" + "=" * 60)
    print("STORIES")
    print("=" * 60)
    for i, story in enumerate(report.stories, 1):
        print(
            f"{i:3d}. [{SEVERITY_LABELS[story.severity]:<8}] "
            f"{PATTERN_LABELS[story.pattern]:<16} {format_money(story.total_money):>8}  {story.headline}"
        )

    print(f"\nSummary:")
    print(f"  Stories: {summary['story_count']}")
    print(f"  Total Money: {format_money(summary['total_money'])}")
    print(f"  Entities Referenced: {summary['entity_count']}")

    print(f"\nBy Severity:")
    for severity, count in summary["by_severity"].items():
        if count:
            print(f"  {severity}: {count}")

    if summary["failed_detectors"]:
        print(f"\nFailed detectors: {', '.join(summary['failed_detectors'])}")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.log_level:
        configure_logging(args.log_level)

    try:
        config = load_config(args.config, args.environment)
        if not args.log_level:
            configure_logging(config.log_level)

        snapshot = load_snapshot(args.snapshot)
        result = StoryClassifier(config).run(snapshot)
        report = build_report(result, args.pattern)

        if args.json:
            print(json.dumps(report.to_dict(), indent=2, default=str))
        else:
            print_report(report)

        if args.output:
            path = report.save(args.output)
            if not args.json:
                print(f"\nOutput saved to: {path}/")

    except (FileNotFoundError, SnapshotLoadError, ValueError) as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
