"""Quiz Engines - lógica de negócio."""

from .dedup_engine import QuestionDeduplicationEngine
from .history import QuizHistoryAggregator
from .question_repair import repair_question
from .quiz_engine import QuizEngine

__all__ = [
    "QuestionDeduplicationEngine",
    "QuizHistoryAggregator",
    "QuizEngine",
    "repair_question",
]
