#!/usr/bin/env python3
"""
validate_curriculum.py - Check curriculum content before it ships.

Loads a curriculum, builds the lexicon (fatal on duplicate vocabulary or
malformed ids), runs the content checks, and prints a summary. Exits 1 when
any error-level issue is found.

Usage:
  python scripts/validate_curriculum.py
  python scripts/validate_curriculum.py --content data/curriculum.yaml
  python scripts/validate_curriculum.py --content-dir data/modules --stats-output stats.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import yaml
from pydantic import ValidationError

from curriculex.config import IndexSettings
from curriculex.errors import CurriculumIntegrityError
from curriculex.index import CurriculumIndex, Severity, validate_curriculum
from curriculex.telemetry import RecordingTelemetry
from curriculex.utils import load_curriculum, load_curriculum_dir

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Statistics
# -----------------------------------------------------------------------------

def compute_stats(index: CurriculumIndex, issues) -> dict:
    """Summarize the curriculum and its validation result."""
    lexicon = index.get_lexicon()
    curriculum = index.curriculum
    stats = {
        "total_modules": len(curriculum.modules),
        "total_lessons": sum(len(module.lessons) for module in curriculum.modules),
        "total_steps": sum(
            len(lesson.steps) for module in curriculum.modules for lesson in module.lessons
        ),
        "total_vocabulary": len(lexicon.vocabulary_ids),
        "semantic_groups": len(lexicon.semantic_groups),
        "suffix_steps": len(lexicon.suffix_introductions),
        "connectors": sorted({c for tokens in lexicon.connector_introductions.values() for c in tokens}),
        "errors": sum(issue.severity == Severity.ERROR for issue in issues),
        "warnings": sum(issue.severity == Severity.WARNING for issue in issues),
    }
    return stats


# -----------------------------------------------------------------------------
# Main
# -----------------------------------------------------------------------------

def main() -> int:
    settings = IndexSettings.from_env()

    parser = argparse.ArgumentParser(
        description="Validate curriculum content and report learned-state problems",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--content",
        type=Path,
        default=settings.content_path,
        help="Curriculum file (.yaml/.yml/.json)"
    )
    parser.add_argument(
        "--content-dir",
        type=Path,
        default=None,
        help="Directory with one module per file (overrides --content)"
    )
    parser.add_argument(
        "--stats-output",
        type=Path,
        default=None,
        help="Write summary statistics as JSON to this path"
    )
    parser.add_argument(
        "--max-issues",
        type=int,
        default=20,
        help="Maximum number of issues to print per severity"
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level (default from CURRICULEX_LOG_LEVEL)"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s"
    )

    # Load content
    logger.info("Loading curriculum...")
    try:
        if args.content_dir:
            curriculum = load_curriculum_dir(args.content_dir, settings.connector_ids)
        else:
            curriculum = load_curriculum(args.content, settings.connector_ids)
    except (FileNotFoundError, ValueError, yaml.YAMLError, ValidationError, CurriculumIntegrityError) as e:
        logger.error(f"Could not load curriculum: {e}")
        return 1

    # Build the index
    logger.info("Building lexicon...")
    telemetry = RecordingTelemetry()
    index = CurriculumIndex(curriculum, telemetry=telemetry)
    try:
        index.get_lexicon()
    except CurriculumIntegrityError as e:
        logger.error(f"Lexicon build failed: {e}")
        return 1

    # Run checks
    logger.info("Running content checks...")
    issues = validate_curriculum(curriculum, index)
    for severity in (Severity.ERROR, Severity.WARNING):
        selected = [issue for issue in issues if issue.severity == severity]
        log = logger.error if severity == Severity.ERROR else logger.warning
        for issue in selected[:args.max_issues]:
            log(f"  - {issue}")
        if len(selected) > args.max_issues:
            log(f"  ... and {len(selected) - args.max_issues} more")

    stats = compute_stats(index, issues)
    if args.stats_output:
        with open(args.stats_output, "w", encoding="utf-8") as f:
            json.dump(stats, f, indent=2, ensure_ascii=False)
        logger.info(f"Saved stats to: {args.stats_output}")

    # Summary
    logger.info("=" * 50)
    logger.info("VALIDATION COMPLETE")
    logger.info("=" * 50)
    logger.info(f"Modules: {stats['total_modules']}")
    logger.info(f"Lessons: {stats['total_lessons']} ({stats['total_steps']} steps)")
    logger.info(f"Vocabulary: {stats['total_vocabulary']} in {stats['semantic_groups']} semantic groups")
    logger.info(f"Connectors: {', '.join(stats['connectors']) or '-'}")
    if stats["errors"]:
        logger.error(f"Errors: {stats['errors']}")
    if stats["warnings"]:
        logger.warning(f"Warnings: {stats['warnings']}")

    return 1 if stats["errors"] else 0


if __name__ == "__main__":
    sys.exit(main())
