"""
CurriculumIndex - the query interface over a curriculum snapshot.

Owned by the application's composition root and passed to whatever needs
learned-state queries (word-bank generators, grammar-option pickers, review
assembly). Provides:
- Lazy, build-once lexicon construction (safe under concurrent first access)
- Per-lesson memoized learned snapshots
- Step-level learned-state queries with index clamping
- Whole-module / whole-lesson vocabulary aggregates
- reset() for content hot-reload, dropping lexicon and lesson caches together
"""

import logging
import threading
from dataclasses import dataclass
from typing import Optional, Sequence

from curriculex.errors import IndexNotInitializedError
from curriculex.schemas import Curriculum, StepBase, VocabularyItem
from curriculex.telemetry import LoggingTelemetry, TelemetrySink

from .builder import build_lexicon
from .learned_state import LearnedStateCache, build_learned_snapshots
from .lexicon import EMPTY_SNAPSHOT, LearnedSnapshot, Lexicon


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Generation:
    """A lexicon and the lesson caches derived from it. Replaced as a unit."""
    lexicon: Lexicon
    lessons: LearnedStateCache


class CurriculumIndex:
    """
    Knowledge-state index over one curriculum snapshot.

    Thread-safe. The lexicon is immutable once built; reads need no locking.
    """

    def __init__(
        self,
        curriculum: Optional[Curriculum] = None,
        *,
        telemetry: Optional[TelemetrySink] = None,
    ):
        """
        Initialize the index.

        Args:
            curriculum: Content snapshot to index (can be supplied later via init())
            telemetry: Sink for non-fatal warnings (default: logging)
        """
        self.telemetry = telemetry or LoggingTelemetry()
        self._curriculum = curriculum
        self._generation: Optional[_Generation] = None
        self._lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def curriculum(self) -> Curriculum:
        if self._curriculum is None:
            raise IndexNotInitializedError("No curriculum installed; call init() first")
        return self._curriculum

    @property
    def is_built(self) -> bool:
        return self._generation is not None

    def init(self, curriculum: Curriculum) -> None:
        """Install a (new) curriculum snapshot and drop all derived state."""
        with self._lock:
            self._curriculum = curriculum
            self._generation = None
        logger.info(f"Installed curriculum with {len(curriculum.modules)} modules")

    def reset(self) -> None:
        """Drop the lexicon and every per-lesson cache in one step."""
        with self._lock:
            self._generation = None

    def _current_generation(self) -> _Generation:
        generation = self._generation
        if generation is not None:
            return generation

        with self._lock:
            if self._generation is None:
                if self._curriculum is None:
                    raise IndexNotInitializedError("No curriculum installed; call init() first")
                lexicon = build_lexicon(self._curriculum)
                self._generation = _Generation(
                    lexicon=lexicon,
                    lessons=LearnedStateCache(lexicon, self.telemetry),
                )
            return self._generation

    def get_lexicon(self) -> Lexicon:
        """
        Get the lexicon, building it on first access.

        Raises:
            IndexNotInitializedError: If no curriculum has been installed
            CurriculumIntegrityError: If the curriculum fails integrity checks
        """
        return self._current_generation().lexicon

    @property
    def lexicon(self) -> Lexicon:
        return self.get_lexicon()

    # -------------------------------------------------------------------------
    # Step-level queries
    # -------------------------------------------------------------------------

    def get_learned_state_for_step(
        self,
        module_id: str,
        lesson_id: str,
        steps: Sequence[StepBase],
        lexicon: Lexicon,
        step_index: int,
    ) -> LearnedSnapshot:
        """
        Get what the learner knows immediately after a given step.

        Args:
            module_id: Current module ID
            lesson_id: Current lesson ID
            steps: The lesson's steps (answered from the per-lesson memo only
                when they match the steps the memo was built from)
            lexicon: Lexicon obtained from get_lexicon()
            step_index: 0-based step index; clamped into [0, len(steps) - 1]

        Returns:
            LearnedSnapshot for the clamped step, or an empty snapshot when
            the lesson has no steps
        """
        if not steps:
            return EMPTY_SNAPSHOT

        clamped = max(0, min(step_index, len(steps) - 1))
        if clamped != step_index:
            self.telemetry.warn(
                "learned_state.step_index_clamped",
                module_id=module_id,
                lesson_id=lesson_id,
                step_index=step_index,
                clamped_to=clamped,
            )

        generation = self._generation
        if generation is not None and generation.lexicon is lexicon:
            snapshots = generation.lessons.get_or_build(module_id, lesson_id, steps)
        else:
            # Lexicon from a dropped generation: answer without caching
            snapshots = build_learned_snapshots(
                module_id, lesson_id, steps, lexicon, self.telemetry
            )
        return snapshots[clamped]

    def learned_state_at(self, module_id: str, lesson_id: str, step_index: int) -> LearnedSnapshot:
        """Learned state for a step of a lesson in the installed curriculum."""
        lexicon = self.get_lexicon()
        steps = self.curriculum.get_lesson_steps(module_id, lesson_id)
        return self.get_learned_state_for_step(module_id, lesson_id, steps, lexicon, step_index)

    def cached_lesson_count(self) -> int:
        generation = self._generation
        return len(generation.lessons) if generation is not None else 0

    # -------------------------------------------------------------------------
    # Aggregate vocabulary queries
    # -------------------------------------------------------------------------

    def _items(self, vocab_ids) -> list[VocabularyItem]:
        vocabulary = self.get_lexicon().vocabulary
        return [vocabulary[vocab_id] for vocab_id in vocab_ids if vocab_id in vocabulary]

    def find_vocabulary(self, vocab_id: str) -> Optional[VocabularyItem]:
        return self.get_lexicon().find_vocabulary(vocab_id)

    def module_vocabulary(self, module_id: str) -> list[VocabularyItem]:
        """All vocabulary declared anywhere in a module, in curriculum order."""
        return self._items(self.get_lexicon().module_vocabulary.get(module_id, ()))

    def lesson_vocabulary(self, module_id: str, lesson_id: str) -> list[VocabularyItem]:
        return self._items(self.get_lexicon().lesson_vocabulary.get((module_id, lesson_id), ()))

    def vocabulary_in_group(self, semantic_group: str) -> list[VocabularyItem]:
        return self._items(self.get_lexicon().semantic_groups.get(semantic_group, ()))

    def review_vocabulary(self, module_id: str, lesson_id: str) -> list[VocabularyItem]:
        """Every vocabulary item declared strictly before the given lesson."""
        return self._vocabulary_up_to(module_id, lesson_id, inclusive=False)

    def vocabulary_through(self, module_id: str, lesson_id: str) -> list[VocabularyItem]:
        """Every vocabulary item declared up to and including the given lesson."""
        return self._vocabulary_up_to(module_id, lesson_id, inclusive=True)

    def _vocabulary_up_to(self, module_id: str, lesson_id: str, inclusive: bool) -> list[VocabularyItem]:
        lexicon = self.get_lexicon()
        module_ordinal = lexicon.module_ordinal(module_id)
        lesson_ordinal = lexicon.lesson_ordinal(module_id, lesson_id)

        ordered_ids: list[str] = []
        for module in sorted(lexicon.outline, key=lambda item: item.ordinal):
            if module.ordinal > module_ordinal:
                continue
            for lesson in sorted(module.lessons, key=lambda item: item.ordinal):
                if module.ordinal == module_ordinal:
                    if module.id != module_id:
                        continue
                    if lesson.ordinal > lesson_ordinal:
                        continue
                    if lesson.ordinal == lesson_ordinal and not inclusive:
                        continue
                ordered_ids.extend(lexicon.lesson_vocabulary.get((module.id, lesson.id), ()))
        return self._items(ordered_ids)
