"""
Lesson step schemas for curriculex.

Steps form a closed discriminated union over the ``type`` field. Each kind
carries only the fields meaningful to it. Content may use the camelCase keys
of the authoring format (``vocabularyId``, ``suffixOptions``); fields are
snake_case in Python.
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator
from pydantic.alias_generators import to_camel


class ContentModel(BaseModel):
    """Frozen content model accepting camelCase or snake_case keys."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class StepKind(str, Enum):
    WELCOME = "welcome"
    FLASHCARD = "flashcard"
    QUIZ = "quiz"
    REVERSE_QUIZ = "reverse-quiz"
    INPUT = "input"
    MATCHING = "matching"
    AUDIO_MEANING = "audio-meaning"
    AUDIO_SEQUENCE = "audio-sequence"
    TEXT_SEQUENCE = "text-sequence"
    GRAMMAR_INTRO = "grammar-intro"
    GRAMMAR_FILL_BLANK = "grammar-fill-blank"
    STORY_CONVERSATION = "story-conversation"
    FINAL = "final"


# -----------------------------------------------------------------------------
# Shared option / word shapes
# -----------------------------------------------------------------------------

SUFFIX_OPTION_PREFIX = "suffix-"
CONNECTOR_OPTION_PREFIX = "conn-"


class GrammarOption(ContentModel):
    """One selectable option in a grammar exercise, e.g. id="suffix-am"."""
    id: str
    text: str = ""


class FillBlankExercise(ContentModel):
    sentence: str = ""
    correct_answer: Optional[str] = None
    suffix_options: list[GrammarOption] = []
    word_options: list[GrammarOption] = []


class MatchingWord(ContentModel):
    id: str
    text: str
    slot_id: str


class MatchingSlot(ContentModel):
    id: str
    text: str


class FinalWord(ContentModel):
    id: str
    text: str
    translation: str = ""


class StoryChoice(ContentModel):
    id: str
    text: str
    vocabulary_used: list[str] = []
    is_correct: bool = False


class StoryExchange(ContentModel):
    id: str
    choices: list[StoryChoice] = []


# -----------------------------------------------------------------------------
# Step types
# -----------------------------------------------------------------------------

class StepBase(ContentModel):
    type: str
    points: int = Field(default=0, ge=0)

    @property
    def kind(self) -> StepKind:
        return StepKind(self.type)

    def referenced_vocabulary_ids(self) -> list[str]:
        """Vocabulary ids this step uses (not what it introduces)."""
        return []


class WelcomeStep(StepBase):
    type: Literal["welcome"] = "welcome"
    title: str = ""
    description: str = ""
    objectives: list[str] = []


class FlashcardStep(StepBase):
    """The only step kind that introduces vocabulary."""
    type: Literal["flashcard"] = "flashcard"
    vocabulary_id: Optional[str] = None
    front: Optional[str] = None  # legacy free-text cards
    back: Optional[str] = None

    def referenced_vocabulary_ids(self) -> list[str]:
        return [self.vocabulary_id] if self.vocabulary_id else []


class QuizStep(StepBase):
    type: Literal["quiz"] = "quiz"
    prompt: str
    options: list[str]
    correct: int = Field(..., ge=0)
    vocabulary_id: Optional[str] = None

    @model_validator(mode="after")
    def correct_in_range(self):
        if self.correct >= len(self.options):
            raise ValueError(f"correct index {self.correct} out of range for {len(self.options)} options")
        return self

    def referenced_vocabulary_ids(self) -> list[str]:
        return [self.vocabulary_id] if self.vocabulary_id else []


class ReverseQuizStep(QuizStep):
    type: Literal["reverse-quiz"] = "reverse-quiz"


class InputStep(StepBase):
    type: Literal["input"] = "input"
    question: str
    answer: str
    vocabulary_id: Optional[str] = None

    def referenced_vocabulary_ids(self) -> list[str]:
        return [self.vocabulary_id] if self.vocabulary_id else []


class MatchingStep(StepBase):
    type: Literal["matching"] = "matching"
    words: list[MatchingWord]
    slots: list[MatchingSlot]


class AudioMeaningStep(StepBase):
    type: Literal["audio-meaning"] = "audio-meaning"
    vocabulary_id: str
    distractors: list[str] = []
    auto_play: bool = True

    def referenced_vocabulary_ids(self) -> list[str]:
        return [self.vocabulary_id, *self.distractors]


class AudioSequenceStep(StepBase):
    type: Literal["audio-sequence"] = "audio-sequence"
    sequence: list[str] = Field(..., min_length=1)
    auto_play: bool = False

    def referenced_vocabulary_ids(self) -> list[str]:
        return list(self.sequence)


class TextSequenceStep(StepBase):
    type: Literal["text-sequence"] = "text-sequence"
    finglish_text: str
    expected_translation: str = ""
    max_word_bank_size: Optional[int] = Field(default=None, ge=1)


class GrammarIntroStep(StepBase):
    type: Literal["grammar-intro"] = "grammar-intro"
    concept_id: str


class GrammarFillBlankStep(StepBase):
    type: Literal["grammar-fill-blank"] = "grammar-fill-blank"
    concept_id: str
    exercises: list[FillBlankExercise] = Field(..., min_length=1)

    def suffix_tokens(self) -> list[str]:
        """Deduplicated suffix tokens offered by 'suffix-<token>' options, in order."""
        return _option_tokens(
            (option for exercise in self.exercises for option in exercise.suffix_options),
            SUFFIX_OPTION_PREFIX,
        )

    def connector_tokens(self) -> list[str]:
        """Deduplicated connector tokens offered by 'conn-<token>' word options."""
        return _option_tokens(
            (option for exercise in self.exercises for option in exercise.word_options),
            CONNECTOR_OPTION_PREFIX,
        )


class StoryConversationStep(StepBase):
    type: Literal["story-conversation"] = "story-conversation"
    story_id: str
    title: str = ""
    exchanges: list[StoryExchange] = []

    def referenced_vocabulary_ids(self) -> list[str]:
        return [
            vocab_id
            for exchange in self.exchanges
            for choice in exchange.choices
            for vocab_id in choice.vocabulary_used
        ]


class FinalStep(StepBase):
    type: Literal["final"] = "final"
    words: list[FinalWord] = []
    target_words: list[str] = []
    title: Optional[str] = None
    description: Optional[str] = None


def _option_tokens(options, prefix: str) -> list[str]:
    tokens: list[str] = []
    for option in options:
        if option.id.startswith(prefix):
            token = option.id[len(prefix):]
            if token and token not in tokens:
                tokens.append(token)
    return tokens


LessonStep = Annotated[
    Union[
        WelcomeStep,
        FlashcardStep,
        QuizStep,
        ReverseQuizStep,
        InputStep,
        MatchingStep,
        AudioMeaningStep,
        AudioSequenceStep,
        TextSequenceStep,
        GrammarIntroStep,
        GrammarFillBlankStep,
        StoryConversationStep,
        FinalStep,
    ],
    Field(discriminator="type"),
]

STEP_MODELS: dict[StepKind, type[StepBase]] = {
    StepKind.WELCOME: WelcomeStep,
    StepKind.FLASHCARD: FlashcardStep,
    StepKind.QUIZ: QuizStep,
    StepKind.REVERSE_QUIZ: ReverseQuizStep,
    StepKind.INPUT: InputStep,
    StepKind.MATCHING: MatchingStep,
    StepKind.AUDIO_MEANING: AudioMeaningStep,
    StepKind.AUDIO_SEQUENCE: AudioSequenceStep,
    StepKind.TEXT_SEQUENCE: TextSequenceStep,
    StepKind.GRAMMAR_INTRO: GrammarIntroStep,
    StepKind.GRAMMAR_FILL_BLANK: GrammarFillBlankStep,
    StepKind.STORY_CONVERSATION: StoryConversationStep,
    StepKind.FINAL: FinalStep,
}

_STEP_ADAPTER = TypeAdapter(LessonStep)


def parse_step(raw: dict) -> StepBase:
    """Validate one raw step mapping into its concrete step model."""
    return _STEP_ADAPTER.validate_python(raw)
