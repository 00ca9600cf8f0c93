"""Convenience imports for all schema classes used by the API."""

from .course import (
    QuestionOption,
    MultipleChoiceQuestion,
    FreeFormQuestion,
    Question,
    Section,
    ExerciseHint,
    ExerciseTable,
    PracticeExercise,
    PassCriteria,
    Module,
    QuestionRead,
    SectionRead,
    ModuleSummary,
    ModuleRead,
)
from .progress import (
    TestSubmission,
    PracticeSubmission,
    TestResult,
    PracticeResult,
    ModuleProgressRead,
    AvailabilityRead,
)
from .chat import ChatMessage, ChatRequest, AnswerCheck, AnswerCheckResult
from .trainer import TrainerTaskRead, TrainerCheck, TrainerCheckResult

__all__ = [
    "QuestionOption",
    "MultipleChoiceQuestion",
    "FreeFormQuestion",
    "Question",
    "Section",
    "ExerciseHint",
    "ExerciseTable",
    "PracticeExercise",
    "PassCriteria",
    "Module",
    "QuestionRead",
    "SectionRead",
    "ModuleSummary",
    "ModuleRead",
    "TestSubmission",
    "PracticeSubmission",
    "TestResult",
    "PracticeResult",
    "ModuleProgressRead",
    "AvailabilityRead",
    "ChatMessage",
    "ChatRequest",
    "AnswerCheck",
    "AnswerCheckResult",
    "TrainerTaskRead",
    "TrainerCheck",
    "TrainerCheckResult",
]
