"""
Index data structures.

The Lexicon is the precomputed, immutable map of everything the curriculum
introduces. LearnedSnapshot is what a learner knows immediately after one
step. Both are plain frozen dataclasses: they are derived at runtime and
never serialized.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from curriculex.ordering import LESSON_PREFIX, MODULE_PREFIX, parse_ordinal
from curriculex.schemas import VocabularyItem


LessonKey = tuple[str, str]          # (module_id, lesson_id)
StepKey = tuple[str, str, int]       # (module_id, lesson_id, step_index)


def freeze_mapping(data: dict) -> Mapping:
    """Read-only view over a dict the caller no longer holds."""
    return MappingProxyType(data)


@dataclass(frozen=True)
class LessonOutline:
    id: str
    ordinal: int


@dataclass(frozen=True)
class ModuleOutline:
    id: str
    ordinal: int
    lessons: tuple[LessonOutline, ...]


@dataclass(frozen=True)
class Lexicon:
    """
    Global index of vocabulary, suffix and connector introductions.

    Built once per curriculum snapshot by build_lexicon(); immutable
    afterwards and safe for unsynchronized concurrent reads.
    """
    vocabulary: Mapping[str, VocabularyItem]
    vocabulary_ids: tuple[str, ...]
    module_vocabulary: Mapping[str, tuple[str, ...]]
    lesson_vocabulary: Mapping[LessonKey, tuple[str, ...]]
    suffix_introductions: Mapping[StepKey, tuple[str, ...]]
    connector_introductions: Mapping[LessonKey, tuple[str, ...]]
    semantic_groups: Mapping[str, tuple[str, ...]]
    outline: tuple[ModuleOutline, ...]
    _module_ordinals: Mapping[str, int] = field(init=False, repr=False, compare=False)
    _lesson_ordinals: Mapping[LessonKey, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        module_ordinals = {module.id: module.ordinal for module in self.outline}
        lesson_ordinals = {
            (module.id, lesson.id): lesson.ordinal
            for module in self.outline
            for lesson in module.lessons
        }
        object.__setattr__(self, "_module_ordinals", freeze_mapping(module_ordinals))
        object.__setattr__(self, "_lesson_ordinals", freeze_mapping(lesson_ordinals))

    def module_ordinal(self, module_id: str) -> int:
        """Ordinal of a known module; unknown ids are parsed (and fail loudly)."""
        ordinal = self._module_ordinals.get(module_id)
        if ordinal is None:
            return parse_ordinal(module_id, MODULE_PREFIX)
        return ordinal

    def lesson_ordinal(self, module_id: str, lesson_id: str) -> int:
        ordinal = self._lesson_ordinals.get((module_id, lesson_id))
        if ordinal is None:
            return parse_ordinal(lesson_id, LESSON_PREFIX)
        return ordinal

    def find_vocabulary(self, vocab_id: str) -> Optional[VocabularyItem]:
        return self.vocabulary.get(vocab_id)

    def lesson_suffixes(self, module_id: str, lesson_id: str, step_count: int) -> list[str]:
        """All suffixes introduced anywhere in a lesson, in step order."""
        suffixes: list[str] = []
        for step_index in range(step_count):
            for suffix in self.suffix_introductions.get((module_id, lesson_id, step_index), ()):
                if suffix not in suffixes:
                    suffixes.append(suffix)
        return suffixes


@dataclass(frozen=True)
class StepIntroduction:
    """What one step newly introduces."""
    vocab_ids: tuple[str, ...] = ()
    suffixes: tuple[str, ...] = ()
    connectors: tuple[str, ...] = ()

    def is_empty(self) -> bool:
        return not (self.vocab_ids or self.suffixes or self.connectors)


NO_INTRODUCTION = StepIntroduction()


@dataclass(frozen=True)
class LearnedSnapshot:
    """Cumulative knowledge immediately after a given step."""
    vocab_ids: frozenset[str] = frozenset()
    suffixes: frozenset[str] = frozenset()
    connectors: frozenset[str] = frozenset()

    @classmethod
    def empty(cls) -> "LearnedSnapshot":
        return EMPTY_SNAPSHOT

    def issuperset(self, other: "LearnedSnapshot") -> bool:
        return (
            self.vocab_ids >= other.vocab_ids
            and self.suffixes >= other.suffixes
            and self.connectors >= other.connectors
        )

    def knows_vocabulary(self, vocab_id: str) -> bool:
        return vocab_id in self.vocab_ids


EMPTY_SNAPSHOT = LearnedSnapshot()
