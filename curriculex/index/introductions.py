"""
Step introduction resolution.

Maps one step (plus its position) to the vocabulary, suffix and connector
tokens it newly introduces. Pure: lexicon lookups only, no mutation.

Introduction rules:
- flashcard: the one vocabulary id it carries. The only kind that
  introduces vocabulary.
- grammar-fill-blank: the suffixes the lexicon recorded for this exact
  (module, lesson, step index).
- grammar-intro: nothing; suffixes are registered by the paired
  grammar-fill-blank step.
- everything else: practice/assessment only, nothing.
"""

from typing import Callable

from curriculex.schemas import StepBase, StepKind

from .lexicon import NO_INTRODUCTION, Lexicon, StepIntroduction


Introducer = Callable[[StepBase, Lexicon, str, str, int], StepIntroduction]


def _flashcard(step, lexicon, module_id, lesson_id, step_index) -> StepIntroduction:
    if not step.vocabulary_id:
        return NO_INTRODUCTION
    return StepIntroduction(vocab_ids=(step.vocabulary_id,))


def _grammar_fill_blank(step, lexicon, module_id, lesson_id, step_index) -> StepIntroduction:
    suffixes = lexicon.suffix_introductions.get((module_id, lesson_id, step_index), ())
    if not suffixes:
        return NO_INTRODUCTION
    return StepIntroduction(suffixes=suffixes)


def _nothing(step, lexicon, module_id, lesson_id, step_index) -> StepIntroduction:
    return NO_INTRODUCTION


_INTRODUCERS: dict[StepKind, Introducer] = {
    StepKind.FLASHCARD: _flashcard,
    StepKind.GRAMMAR_FILL_BLANK: _grammar_fill_blank,
    StepKind.GRAMMAR_INTRO: _nothing,
    StepKind.WELCOME: _nothing,
    StepKind.QUIZ: _nothing,
    StepKind.REVERSE_QUIZ: _nothing,
    StepKind.INPUT: _nothing,
    StepKind.MATCHING: _nothing,
    StepKind.AUDIO_MEANING: _nothing,
    StepKind.AUDIO_SEQUENCE: _nothing,
    StepKind.TEXT_SEQUENCE: _nothing,
    StepKind.STORY_CONVERSATION: _nothing,
    StepKind.FINAL: _nothing,
}

_missing = set(StepKind) - set(_INTRODUCERS)
if _missing:
    raise RuntimeError(f"No introduction rule for step kinds: {sorted(k.value for k in _missing)}")


def resolve_step_introductions(
    step: StepBase,
    lexicon: Lexicon,
    module_id: str,
    lesson_id: str,
    step_index: int,
) -> StepIntroduction:
    """
    Determine what a single step newly introduces.

    Args:
        step: The step being processed
        lexicon: Pre-built curriculum lexicon
        module_id: Module containing the step
        lesson_id: Lesson containing the step
        step_index: 0-based position of the step in its lesson

    Returns:
        StepIntroduction with the vocab ids, suffixes and connectors introduced
    """
    return _INTRODUCERS[step.kind](step, lexicon, module_id, lesson_id, step_index)
