"""
curriculex Schemas - Pydantic models for curriculum content.

This module exports all schema classes for:
- Curriculum: modules, lessons, vocabulary items
- Steps: the closed union of lesson step kinds and their option shapes
"""

# Curriculum schemas
from .curriculum import (
    VocabularyItem,
    Lesson,
    Module,
    Curriculum,
)

# Step schemas
from .steps import (
    ContentModel,
    StepKind,
    StepBase,
    GrammarOption,
    FillBlankExercise,
    MatchingWord,
    MatchingSlot,
    FinalWord,
    StoryChoice,
    StoryExchange,
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
    LessonStep,
    STEP_MODELS,
    SUFFIX_OPTION_PREFIX,
    CONNECTOR_OPTION_PREFIX,
    parse_step,
)

__all__ = [
    # Curriculum
    'VocabularyItem',
    'Lesson',
    'Module',
    'Curriculum',
    # Steps
    'ContentModel',
    'StepKind',
    'StepBase',
    'GrammarOption',
    'FillBlankExercise',
    'MatchingWord',
    'MatchingSlot',
    'FinalWord',
    'StoryChoice',
    'StoryExchange',
    'WelcomeStep',
    'FlashcardStep',
    'QuizStep',
    'ReverseQuizStep',
    'InputStep',
    'MatchingStep',
    'AudioMeaningStep',
    'AudioSequenceStep',
    'TextSequenceStep',
    'GrammarIntroStep',
    'GrammarFillBlankStep',
    'StoryConversationStep',
    'FinalStep',
    'LessonStep',
    'STEP_MODELS',
    'SUFFIX_OPTION_PREFIX',
    'CONNECTOR_OPTION_PREFIX',
    'parse_step',
]
