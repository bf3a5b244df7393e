"""
Lexicon builder.

One ordered pass over modules, lessons, lesson vocabulary and lesson steps
produces the global Lexicon. A duplicate vocabulary id anywhere in the
curriculum is a content-authoring error and stops the build.

Complexity: O(total steps + total vocabulary items).
"""

import logging

from curriculex.errors import DuplicateVocabularyError
from curriculex.schemas import Curriculum, GrammarFillBlankStep

from .lexicon import (
    LessonKey,
    LessonOutline,
    Lexicon,
    ModuleOutline,
    StepKey,
    freeze_mapping,
)


logger = logging.getLogger(__name__)


def _append_unique(target: list[str], values) -> None:
    for value in values:
        if value not in target:
            target.append(value)


def build_lexicon(curriculum: Curriculum) -> Lexicon:
    """
    Build the global lexicon for a curriculum snapshot.

    Args:
        curriculum: Validated curriculum tree

    Returns:
        Immutable Lexicon

    Raises:
        DuplicateVocabularyError: If two lessons declare the same vocabulary id
    """
    vocabulary = {}
    owners: dict[str, str] = {}
    vocabulary_ids: list[str] = []
    module_vocabulary: dict[str, tuple[str, ...]] = {}
    lesson_vocabulary: dict[LessonKey, tuple[str, ...]] = {}
    suffix_introductions: dict[StepKey, tuple[str, ...]] = {}
    connector_introductions: dict[LessonKey, tuple[str, ...]] = {}
    semantic_groups: dict[str, list[str]] = {}
    outline: list[ModuleOutline] = []

    for module in curriculum.modules:
        module_ids: list[str] = []
        lesson_outline: list[LessonOutline] = []

        for lesson in module.lessons:
            key = (module.id, lesson.id)
            owner = f"{module.id}/{lesson.id}"
            lesson_ids: list[str] = []
            connectors: list[str] = []

            # Vocabulary declared by this lesson
            for item in lesson.vocabulary:
                if item.id in vocabulary:
                    raise DuplicateVocabularyError(item.id, owners[item.id], owner)
                vocabulary[item.id] = item
                owners[item.id] = owner
                vocabulary_ids.append(item.id)
                module_ids.append(item.id)
                lesson_ids.append(item.id)
                if item.semantic_group:
                    semantic_groups.setdefault(item.semantic_group, []).append(item.id)
                if item.id in curriculum.connector_ids:
                    _append_unique(connectors, [item.id])

            # Grammar introductions from fill-blank steps
            for step_index, step in enumerate(lesson.steps):
                if not isinstance(step, GrammarFillBlankStep):
                    continue
                suffixes = step.suffix_tokens()
                if suffixes:
                    suffix_introductions[(module.id, lesson.id, step_index)] = tuple(suffixes)
                _append_unique(connectors, step.connector_tokens())

            lesson_vocabulary[key] = tuple(lesson_ids)
            connector_introductions[key] = tuple(connectors)
            lesson_outline.append(LessonOutline(id=lesson.id, ordinal=lesson.ordinal))

        module_vocabulary[module.id] = tuple(module_ids)
        outline.append(
            ModuleOutline(id=module.id, ordinal=module.ordinal, lessons=tuple(lesson_outline))
        )

    lexicon = Lexicon(
        vocabulary=freeze_mapping(vocabulary),
        vocabulary_ids=tuple(vocabulary_ids),
        module_vocabulary=freeze_mapping(module_vocabulary),
        lesson_vocabulary=freeze_mapping(lesson_vocabulary),
        suffix_introductions=freeze_mapping(suffix_introductions),
        connector_introductions=freeze_mapping(connector_introductions),
        semantic_groups=freeze_mapping(
            {group: tuple(ids) for group, ids in semantic_groups.items()}
        ),
        outline=tuple(outline),
    )
    logger.info(
        f"Built lexicon: {len(outline)} modules, {len(lesson_vocabulary)} lessons, "
        f"{len(vocabulary_ids)} vocabulary items, {len(suffix_introductions)} suffix steps"
    )
    return lexicon
