"""Quiz Storage - persistência das sessões de quiz."""

from .quiz_store import QuizStore

__all__ = ["QuizStore"]
