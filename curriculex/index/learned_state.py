"""
Learned-state snapshots.

For one lesson, builds a dense tuple of LearnedSnapshot, one per step:

1. Base state: everything introduced by modules strictly before this module
   and by lessons strictly before this lesson in the same module. The
   lesson's own vocabulary, suffixes and connectors are never in the base;
   they enter only when a step of the lesson introduces them.
2. Walk the steps in order, union each step's introductions into the
   running state, and freeze a snapshot after every step.

Snapshots are therefore monotonic: snapshot[i] is a superset of
snapshot[i - 1] on every field.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Optional, Sequence

from curriculex.schemas import StepBase
from curriculex.telemetry import LoggingTelemetry, TelemetrySink

from .introductions import resolve_step_introductions
from .lexicon import LearnedSnapshot, LessonKey, Lexicon


logger = logging.getLogger(__name__)


def base_learned_state(module_id: str, lesson_id: str, lexicon: Lexicon) -> LearnedSnapshot:
    """
    Knowledge a learner has before the first step of a lesson.

    Raises:
        OrdinalFormatError: If module_id/lesson_id are unknown to the lexicon
            and do not follow the ordinal naming convention
    """
    module_ordinal = lexicon.module_ordinal(module_id)
    lesson_ordinal = lexicon.lesson_ordinal(module_id, lesson_id)

    earlier: set[LessonKey] = set()
    for module in lexicon.outline:
        if module.ordinal < module_ordinal:
            earlier.update((module.id, lesson.id) for lesson in module.lessons)
        elif module.id == module_id:
            earlier.update(
                (module.id, lesson.id)
                for lesson in module.lessons
                if lesson.ordinal < lesson_ordinal
            )

    vocab_ids: set[str] = set()
    suffixes: set[str] = set()
    connectors: set[str] = set()

    for key in earlier:
        vocab_ids.update(lexicon.lesson_vocabulary.get(key, ()))
        connectors.update(lexicon.connector_introductions.get(key, ()))
    for (suffix_module, suffix_lesson, _), tokens in lexicon.suffix_introductions.items():
        if (suffix_module, suffix_lesson) in earlier:
            suffixes.update(tokens)

    return LearnedSnapshot(
        vocab_ids=frozenset(vocab_ids),
        suffixes=frozenset(suffixes),
        connectors=frozenset(connectors),
    )


def build_learned_snapshots(
    module_id: str,
    lesson_id: str,
    steps: Sequence[StepBase],
    lexicon: Lexicon,
    telemetry: Optional[TelemetrySink] = None,
) -> tuple[LearnedSnapshot, ...]:
    """
    Build one LearnedSnapshot per step of a lesson.

    Unknown vocabulary ids introduced by a step are kept and reported
    through telemetry; a content defect never blocks the lesson.
    """
    telemetry = telemetry or LoggingTelemetry()
    current = base_learned_state(module_id, lesson_id, lexicon)
    snapshots: list[LearnedSnapshot] = []

    for step_index, step in enumerate(steps):
        introduced = resolve_step_introductions(step, lexicon, module_id, lesson_id, step_index)

        for vocab_id in introduced.vocab_ids:
            if vocab_id not in lexicon.vocabulary:
                telemetry.warn(
                    "learned_state.unknown_vocabulary",
                    module_id=module_id,
                    lesson_id=lesson_id,
                    step_index=step_index,
                    vocabulary_id=vocab_id,
                )

        if not introduced.is_empty():
            current = LearnedSnapshot(
                vocab_ids=current.vocab_ids.union(introduced.vocab_ids),
                suffixes=current.suffixes.union(introduced.suffixes),
                connectors=current.connectors.union(introduced.connectors),
            )
        snapshots.append(current)

    logger.debug(f"Built {len(snapshots)} learned snapshots for {module_id}/{lesson_id}")
    return tuple(snapshots)


@dataclass(frozen=True)
class _CacheEntry:
    steps: tuple[StepBase, ...]
    snapshots: tuple[LearnedSnapshot, ...]


class LearnedStateCache:
    """
    Per-lesson memo of learned snapshots, bound to one lexicon.

    Keyed by (module_id, lesson_id). Each entry remembers the steps it was
    built from; a request with different steps is answered without touching
    the entry. Concurrent requests for the same key wait on a per-key lock
    so each lesson is built once.
    """

    def __init__(self, lexicon: Lexicon, telemetry: Optional[TelemetrySink] = None):
        self.lexicon = lexicon
        self.telemetry = telemetry or LoggingTelemetry()
        self._entries: dict[LessonKey, _CacheEntry] = {}
        self._key_locks: dict[LessonKey, threading.Lock] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: LessonKey) -> bool:
        return key in self._entries

    def get(self, module_id: str, lesson_id: str) -> Optional[tuple[LearnedSnapshot, ...]]:
        entry = self._entries.get((module_id, lesson_id))
        return entry.snapshots if entry is not None else None

    def get_or_build(
        self,
        module_id: str,
        lesson_id: str,
        steps: Sequence[StepBase],
    ) -> tuple[LearnedSnapshot, ...]:
        """
        Get the snapshots for a lesson, building and storing them on first use.

        The returned tuple always has one snapshot per element of ``steps``.
        """
        key = (module_id, lesson_id)
        steps = tuple(steps)
        entry = self._entries.get(key)

        if entry is None:
            with self._lock:
                key_lock = self._key_locks.setdefault(key, threading.Lock())

            with key_lock:
                entry = self._entries.get(key)
                if entry is None:
                    entry = _CacheEntry(
                        steps=steps,
                        snapshots=build_learned_snapshots(
                            module_id, lesson_id, steps, self.lexicon, self.telemetry
                        ),
                    )
                    self._entries[key] = entry

        if entry.steps != steps:
            logger.debug(f"Steps for {module_id}/{lesson_id} differ from the cached lesson; building uncached")
            return build_learned_snapshots(
                module_id, lesson_id, steps, self.lexicon, self.telemetry
            )
        return entry.snapshots

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._key_locks.clear()
