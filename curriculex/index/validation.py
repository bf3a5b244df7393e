"""
Curriculum validation - read-only content consistency checks.

Reports issues, never modifies content. Errors are defects that make a step
reference content that does not exist; warnings are authoring problems the
learner will notice (a word used before it was taught, a grammar exercise
shown before its concept was introduced).
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from curriculex.schemas import (
    Curriculum,
    FlashcardStep,
    GrammarFillBlankStep,
    GrammarIntroStep,
)
from curriculex.telemetry import RecordingTelemetry

from .facade import CurriculumIndex


logger = logging.getLogger(__name__)


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
    severity: Severity
    check: str
    module_id: str
    lesson_id: str
    message: str
    step_index: Optional[int] = None

    @property
    def location(self) -> str:
        location = f"{self.module_id}/{self.lesson_id}"
        if self.step_index is not None:
            location += f"#{self.step_index}"
        return location

    def __str__(self) -> str:
        return f"[{self.severity.value}] {self.check} {self.location}: {self.message}"


# -----------------------------------------------------------------------------
# Checks
# -----------------------------------------------------------------------------

def check_origin_lesson_refs(curriculum: Curriculum) -> list[ValidationIssue]:
    """Vocabulary lesson_id must name the lesson that declares the item."""
    issues = []
    for module in curriculum.modules:
        for lesson in module.lessons:
            expected = f"{module.id}-{lesson.id}"
            for item in lesson.vocabulary:
                if item.lesson_id != expected:
                    issues.append(ValidationIssue(
                        severity=Severity.ERROR,
                        check="BAD_ORIGIN_LESSON_REF",
                        module_id=module.id,
                        lesson_id=lesson.id,
                        message=f"Vocabulary {item.id!r} has lesson_id {item.lesson_id!r}, expected {expected!r}",
                    ))
    return issues


def check_vocabulary_references(curriculum: Curriculum, index: CurriculumIndex) -> list[ValidationIssue]:
    """Steps may only use vocabulary that exists and that the learner has seen."""
    issues = []
    lexicon = index.get_lexicon()

    for module in curriculum.modules:
        for lesson in module.lessons:
            review = set(lesson.review_vocabulary)
            for step_index, step in enumerate(lesson.steps):
                if isinstance(step, FlashcardStep):
                    referenced = []  # flashcards introduce rather than use
                else:
                    referenced = step.referenced_vocabulary_ids()
                if not referenced:
                    continue

                known = index.get_learned_state_for_step(
                    module.id, lesson.id, lesson.steps, lexicon, step_index
                )
                for vocab_id in referenced:
                    if vocab_id not in lexicon.vocabulary:
                        issues.append(ValidationIssue(
                            severity=Severity.ERROR,
                            check="UNKNOWN_VOCAB_REF",
                            module_id=module.id,
                            lesson_id=lesson.id,
                            step_index=step_index,
                            message=f"{step.type} step references unknown vocabulary {vocab_id!r}",
                        ))
                    elif not known.knows_vocabulary(vocab_id) and vocab_id not in review:
                        issues.append(ValidationIssue(
                            severity=Severity.WARNING,
                            check="VOCAB_NOT_INTRODUCED",
                            module_id=module.id,
                            lesson_id=lesson.id,
                            step_index=step_index,
                            message=f"{step.type} step uses {vocab_id!r} before it is introduced",
                        ))
    return issues


def check_unknown_flashcards(curriculum: Curriculum, index: CurriculumIndex) -> list[ValidationIssue]:
    """Flashcards must carry a vocabulary id the lexicon knows."""
    issues = []
    lexicon = index.get_lexicon()
    for module in curriculum.modules:
        for lesson in module.lessons:
            for step_index, step in enumerate(lesson.steps):
                if not isinstance(step, FlashcardStep):
                    continue
                if not step.vocabulary_id:
                    issues.append(ValidationIssue(
                        severity=Severity.WARNING,
                        check="FLASHCARD_WITHOUT_VOCAB",
                        module_id=module.id,
                        lesson_id=lesson.id,
                        step_index=step_index,
                        message="Flashcard has no vocabulary_id and introduces nothing",
                    ))
                elif step.vocabulary_id not in lexicon.vocabulary:
                    issues.append(ValidationIssue(
                        severity=Severity.ERROR,
                        check="UNKNOWN_VOCAB_REF",
                        module_id=module.id,
                        lesson_id=lesson.id,
                        step_index=step_index,
                        message=f"Flashcard introduces unknown vocabulary {step.vocabulary_id!r}",
                    ))
    return issues


def check_grammar_order(curriculum: Curriculum) -> list[ValidationIssue]:
    """A grammar-fill-blank concept should be introduced by an earlier grammar-intro."""
    issues = []
    modules = sorted(curriculum.modules, key=lambda module: module.ordinal)
    introduced: set[str] = set()

    for module in modules:
        for lesson in sorted(module.lessons, key=lambda lesson: lesson.ordinal):
            for step_index, step in enumerate(lesson.steps):
                if isinstance(step, GrammarIntroStep):
                    introduced.add(step.concept_id)
                elif isinstance(step, GrammarFillBlankStep) and step.concept_id not in introduced:
                    issues.append(ValidationIssue(
                        severity=Severity.WARNING,
                        check="GRAMMAR_BEFORE_INTRO",
                        module_id=module.id,
                        lesson_id=lesson.id,
                        step_index=step_index,
                        message=f"Grammar concept {step.concept_id!r} is practised before any grammar-intro step",
                    ))
    return issues


def validate_curriculum(
    curriculum: Curriculum,
    index: Optional[CurriculumIndex] = None,
) -> list[ValidationIssue]:
    """
    Run every check against a curriculum.

    Args:
        curriculum: Curriculum to check
        index: Index over the same curriculum (built on demand if omitted)

    Returns:
        All issues found, errors first

    Raises:
        CurriculumIntegrityError: If the lexicon cannot be built at all
    """
    if index is None:
        # Unknown ids are reported as issues here, not as telemetry noise
        index = CurriculumIndex(curriculum, telemetry=RecordingTelemetry())

    issues: list[ValidationIssue] = []
    issues.extend(check_origin_lesson_refs(curriculum))
    issues.extend(check_unknown_flashcards(curriculum, index))
    issues.extend(check_vocabulary_references(curriculum, index))
    issues.extend(check_grammar_order(curriculum))

    issues.sort(key=lambda issue: issue.severity != Severity.ERROR)
    logger.info(
        f"Validation finished: {sum(i.severity == Severity.ERROR for i in issues)} errors, "
        f"{sum(i.severity == Severity.WARNING for i in issues)} warnings"
    )
    return issues
