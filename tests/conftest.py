"""
Shared fixtures for curriculex tests.

Curricula are built from plain dicts in the authoring format and validated
through the real schemas, so every test exercises the same path as content
loaded from disk.
"""

import pytest

from curriculex.config import DEFAULT_CONTENT_PATH
from curriculex.index import CurriculumIndex
from curriculex.schemas import Curriculum
from curriculex.telemetry import RecordingTelemetry
from curriculex.utils import load_curriculum


class ContentFactory:
    """Small builders for raw curriculum content."""

    def vocab(self, vocab_id, module_id="module1", lesson_id="lesson1", **extra):
        return {
            "id": vocab_id,
            "en": vocab_id.upper(),
            "finglish": vocab_id,
            "lessonId": f"{module_id}-{lesson_id}",
            **extra,
        }

    def flashcard(self, vocab_id=None):
        step = {"type": "flashcard"}
        if vocab_id is not None:
            step["vocabularyId"] = vocab_id
        return step

    def quiz(self, vocab_id=None):
        step = {"type": "quiz", "prompt": "Pick one", "options": ["a", "b"], "correct": 0}
        if vocab_id is not None:
            step["vocabularyId"] = vocab_id
        return step

    def welcome(self):
        return {"type": "welcome", "title": "Welcome"}

    def grammar_intro(self, concept_id="suffix-am"):
        return {"type": "grammar-intro", "conceptId": concept_id}

    def fill_blank(self, suffixes=(), connectors=(), concept_id="suffix-am"):
        return {
            "type": "grammar-fill-blank",
            "conceptId": concept_id,
            "exercises": [
                {
                    "sentence": "___",
                    "suffixOptions": [{"id": f"suffix-{s}", "text": f"-{s}"} for s in suffixes],
                    "wordOptions": [{"id": f"conn-{c}", "text": c} for c in connectors],
                }
            ],
        }

    def lesson(self, module_id, lesson_id, vocab_ids=(), steps=(), **extra):
        return {
            "id": lesson_id,
            "title": f"{module_id} {lesson_id}",
            "vocabulary": [self.vocab(v, module_id, lesson_id) for v in vocab_ids],
            "steps": list(steps),
            **extra,
        }

    def module(self, module_id, lessons):
        return {"id": module_id, "title": module_id, "lessons": list(lessons)}

    def curriculum(self, *modules, **extra) -> Curriculum:
        return Curriculum.model_validate({"modules": list(modules), **extra})


@pytest.fixture
def factory():
    return ContentFactory()


@pytest.fixture
def telemetry():
    return RecordingTelemetry()


@pytest.fixture
def scenario_a_curriculum(factory):
    """One lesson: flashcard(vocabA), quiz, flashcard(vocabB), fill-blank(am)."""
    return factory.curriculum(
        factory.module("module1", [
            factory.lesson(
                "module1", "lesson1",
                vocab_ids=["vocabA", "vocabB"],
                steps=[
                    factory.flashcard("vocabA"),
                    factory.quiz(),
                    factory.flashcard("vocabB"),
                    factory.fill_blank(suffixes=["am"]),
                ],
            ),
        ]),
    )


@pytest.fixture
def two_module_curriculum(factory):
    """Two modules with two lessons each, suffixes and connectors."""
    return factory.curriculum(
        factory.module("module1", [
            factory.lesson(
                "module1", "lesson1",
                vocab_ids=["salam", "khodafez"],
                steps=[
                    factory.flashcard("salam"),
                    factory.flashcard("khodafez"),
                    factory.quiz("salam"),
                ],
            ),
            factory.lesson(
                "module1", "lesson2",
                vocab_ids=["khoob", "va"],
                steps=[
                    factory.flashcard("khoob"),
                    factory.fill_blank(suffixes=["am", "i"], connectors=["vali"]),
                    factory.flashcard("va"),
                ],
            ),
        ]),
        factory.module("module2", [
            factory.lesson(
                "module2", "lesson1",
                vocab_ids=["esm"],
                steps=[
                    factory.welcome(),
                    factory.flashcard("esm"),
                    factory.fill_blank(suffixes=["et"]),
                ],
            ),
            factory.lesson(
                "module2", "lesson2",
                vocab_ids=["chi"],
                steps=[factory.flashcard("chi")],
            ),
        ]),
    )


@pytest.fixture
def index(two_module_curriculum, telemetry):
    return CurriculumIndex(two_module_curriculum, telemetry=telemetry)


@pytest.fixture
def sample_curriculum():
    return load_curriculum(DEFAULT_CONTENT_PATH)
