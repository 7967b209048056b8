"""Hierarquia de exceções do serviço de quiz.

Cada erro carrega o status HTTP correspondente, então a borda consegue
montar uma resposta estruturada sem inspecionar o tipo.
"""

from typing import Any, Optional


class AppError(Exception):
    """Erro base exposto à camada HTTP como resposta estruturada."""

    status_code: int = 500
    default_message: str = "Internal Server Error"

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Corpo da resposta: `fail` para erros do cliente, `error` para erros do servidor."""
        body: dict[str, Any] = {
            "status": "fail" if self.status_code < 500 else "error",
            "message": self.message,
        }
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request"


class NotAuthenticatedError(AppError):
    status_code = 401
    default_message = "Authentication required"


class NoActiveQuizError(AppError):
    status_code = 404
    default_message = "No active quiz found. Please start a new quiz."


class QuizNotFoundError(AppError):
    status_code = 404
    default_message = "Quiz not found"


class QuizAlreadyCompletedError(AppError):
    status_code = 400
    default_message = "Quiz already completed"


class ConcurrentUpdateError(AppError):
    """Escrita condicional perdeu para uma atualização concorrente do mesmo quiz."""

    status_code = 409
    default_message = "Quiz was updated concurrently, please retry"


class GenerationFailureError(AppError):
    """A fonte de perguntas não conseguiu produzir um conjunto utilizável.

    Nada é persistido quando este erro ocorre; a operação de início pode
    ser repetida por inteiro.
    """

    status_code = 502
    default_message = "Failed to generate Bible quiz questions"
