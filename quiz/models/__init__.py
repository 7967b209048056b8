"""Quiz Models - Schemas e estado da sessão."""

from .schemas import (
    OPTIONS_PER_QUESTION,
    QUESTIONS_PER_QUIZ,
    AnswerResult,
    ApiResponse,
    CompletedView,
    PublicQuestion,
    Question,
    QuestionView,
    QuizAnswerRequest,
    QuizHistoryEntry,
    QuizHistoryResponse,
    QuizHistoryStats,
    StartQuizResponse,
)
from .state import QuizSession

__all__ = [
    "OPTIONS_PER_QUESTION",
    "QUESTIONS_PER_QUIZ",
    # Schemas
    "Question",
    "PublicQuestion",
    "QuizAnswerRequest",
    "ApiResponse",
    "StartQuizResponse",
    "QuestionView",
    "CompletedView",
    "AnswerResult",
    "QuizHistoryEntry",
    "QuizHistoryStats",
    "QuizHistoryResponse",
    # State
    "QuizSession",
]
