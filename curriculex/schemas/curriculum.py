"""
Curriculum schemas for curriculex.

Defines Pydantic models for the curriculum tree:
- Vocabulary items (owned by the lesson that declares them)
- Lessons (ordered steps plus declared vocabulary)
- Modules (ordered lessons)
- Curriculum (modules plus the fixed connector set)

Module and lesson ordinals are derived from their identifiers once, at
validation time. Nothing downstream reparses identifier strings.
"""

from typing import Any, Optional

from pydantic import Field, field_validator, model_validator

from curriculex.config import DEFAULT_CONNECTOR_IDS
from curriculex.errors import DuplicateOrdinalError, OrdinalFormatError
from curriculex.ordering import LESSON_PREFIX, MODULE_PREFIX, parse_ordinal

from .steps import ContentModel, LessonStep


def _with_ordinal(data: Any, prefix: str) -> Any:
    """Fill in (or check) the ordinal encoded in data['id']."""
    if not isinstance(data, dict):
        return data
    identifier = data.get("id")
    ordinal = parse_ordinal(identifier, prefix)
    declared = data.get("ordinal")
    if declared is not None and declared != ordinal:
        raise OrdinalFormatError(f"{identifier} (declared ordinal {declared})", prefix)
    return {**data, "ordinal": ordinal}


# -----------------------------------------------------------------------------
# Vocabulary
# -----------------------------------------------------------------------------

class VocabularyItem(ContentModel):
    """One vocabulary word. Globally unique id; owned by its declaring lesson."""
    id: str = Field(..., min_length=1)
    en: str = ""           # English meaning
    fa: str = ""           # Persian script
    finglish: str = ""     # Latin transliteration
    phonetic: str = ""
    lesson_id: str = ""    # origin lesson ref, "module1-lesson2"
    semantic_group: Optional[str] = None
    audio: Optional[str] = None


# -----------------------------------------------------------------------------
# Lessons and modules
# -----------------------------------------------------------------------------

class Lesson(ContentModel):
    id: str
    ordinal: int = Field(..., ge=0)
    title: str = ""
    description: str = ""
    steps: list[LessonStep] = []
    vocabulary: list[VocabularyItem] = []
    review_vocabulary: list[str] = []  # ids from earlier lessons practised here

    @model_validator(mode="before")
    @classmethod
    def derive_ordinal(cls, data: Any) -> Any:
        return _with_ordinal(data, LESSON_PREFIX)

    def vocabulary_ids(self) -> list[str]:
        return [item.id for item in self.vocabulary]


class Module(ContentModel):
    id: str
    ordinal: int = Field(..., ge=0)
    title: str = ""
    description: str = ""
    lessons: list[Lesson] = []

    @model_validator(mode="before")
    @classmethod
    def derive_ordinal(cls, data: Any) -> Any:
        return _with_ordinal(data, MODULE_PREFIX)

    @model_validator(mode="after")
    def lesson_ordinals_unique(self):
        seen: dict[int, str] = {}
        for lesson in self.lessons:
            previous = seen.get(lesson.ordinal)
            if previous is not None:
                raise DuplicateOrdinalError(
                    f"Module {self.id!r} has lessons {previous!r} and {lesson.id!r} "
                    f"with the same ordinal {lesson.ordinal}"
                )
            seen[lesson.ordinal] = lesson.id
        return self

    def get_lesson(self, lesson_id: str) -> Optional[Lesson]:
        for lesson in self.lessons:
            if lesson.id == lesson_id:
                return lesson
        return None


class Curriculum(ContentModel):
    """The full ordered curriculum tree, as supplied by the content store."""
    modules: list[Module]
    connector_ids: frozenset[str] = DEFAULT_CONNECTOR_IDS

    @field_validator("connector_ids", mode="before")
    @classmethod
    def connector_ids_as_set(cls, v):
        if isinstance(v, str):
            return frozenset(part.strip() for part in v.split(",") if part.strip())
        return v

    @model_validator(mode="after")
    def module_ordinals_unique(self):
        seen: dict[int, str] = {}
        for module in self.modules:
            previous = seen.get(module.ordinal)
            if previous is not None:
                raise DuplicateOrdinalError(
                    f"Modules {previous!r} and {module.id!r} share ordinal {module.ordinal}"
                )
            seen[module.ordinal] = module.id
        return self

    def get_module(self, module_id: str) -> Optional[Module]:
        for module in self.modules:
            if module.id == module_id:
                return module
        return None

    def get_lesson(self, module_id: str, lesson_id: str) -> Optional[Lesson]:
        module = self.get_module(module_id)
        if module is None:
            return None
        return module.get_lesson(lesson_id)

    def get_lesson_steps(self, module_id: str, lesson_id: str) -> list:
        lesson = self.get_lesson(module_id, lesson_id)
        return list(lesson.steps) if lesson else []
