"""
curriculex Index - Runtime components for learned-state queries.

This module provides:
- build_lexicon: One-pass scan of a curriculum into an immutable Lexicon
- resolve_step_introductions: What a single step newly introduces
- LearnedStateCache: Per-lesson learned snapshots
- CurriculumIndex: The query facade external consumers use
- validate_curriculum: Read-only content consistency checks
"""

from curriculex.ordering import (
    parse_ordinal,
    is_module_before,
    is_lesson_before,
    module_sort_key,
    lesson_sort_key,
)

from .lexicon import (
    Lexicon,
    LearnedSnapshot,
    StepIntroduction,
    ModuleOutline,
    LessonOutline,
    EMPTY_SNAPSHOT,
)

from .introductions import resolve_step_introductions

from .builder import build_lexicon

from .learned_state import (
    LearnedStateCache,
    base_learned_state,
    build_learned_snapshots,
)

from .facade import CurriculumIndex

from .validation import (
    Severity,
    ValidationIssue,
    validate_curriculum,
)

__all__ = [
    # Ordering
    "parse_ordinal",
    "is_module_before",
    "is_lesson_before",
    "module_sort_key",
    "lesson_sort_key",
    # Lexicon
    "Lexicon",
    "LearnedSnapshot",
    "StepIntroduction",
    "ModuleOutline",
    "LessonOutline",
    "EMPTY_SNAPSHOT",
    # Resolution and building
    "resolve_step_introductions",
    "build_lexicon",
    "LearnedStateCache",
    "base_learned_state",
    "build_learned_snapshots",
    # Facade
    "CurriculumIndex",
    # Validation
    "Severity",
    "ValidationIssue",
    "validate_curriculum",
]
