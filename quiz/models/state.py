"""Quiz State - sessão de quiz de dez perguntas de um usuário."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from .schemas import QUESTIONS_PER_QUIZ, Question


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return _utcnow()


@dataclass
class QuizSession:
    """Estado persistente de uma sessão de quiz.

    `progress` é o índice da próxima pergunta não respondida e sempre avança
    um por resposta; `correct_count` conta apenas os acertos.
    `completed` é verdadeiro exatamente quando `progress == total_questions`.

    Attributes:
        quiz_id: ID único, atribuído na criação
        user_id: Identidade dona da sessão
        questions: As 10 perguntas, fixadas na criação
        progress: Índice da próxima pergunta (0-10)
        correct_count: Acertos até agora (0-progress)
        completed: Se todas as perguntas foram respondidas
        created_at: Timestamp de criação (ordenação, janela de histórico)
        updated_at: Timestamp da última escrita
        version: Incrementada a cada escrita (updates condicionais)
    """

    user_id: str
    questions: list[Question]
    quiz_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    progress: int = 0
    correct_count: int = 0
    completed: bool = False
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    version: int = 0

    @classmethod
    def new(cls, user_id: str, questions: list[Question]) -> "QuizSession":
        """Cria uma sessão nova; exige exatamente QUESTIONS_PER_QUIZ perguntas."""
        if len(questions) != QUESTIONS_PER_QUIZ:
            raise ValueError(
                f"Deve ter exatamente {QUESTIONS_PER_QUIZ} perguntas, recebeu {len(questions)}"
            )
        return cls(user_id=user_id, questions=list(questions))

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def is_exhausted(self) -> bool:
        """Todas as perguntas foram respondidas (independente da flag completed)."""
        return self.progress >= self.total_questions

    def current_question(self) -> Optional[Question]:
        """Pergunta no índice `progress`, ou None quando esgotado."""
        if self.is_exhausted:
            return None
        return self.questions[self.progress]

    def record_answer(self, is_correct: bool) -> None:
        """Avança para depois da pergunta atual; conclui o quiz na última."""
        if self.is_exhausted:
            raise ValueError("Nenhuma pergunta pendente")
        if is_correct:
            self.correct_count += 1
        self.progress += 1
        if self.is_exhausted:
            self.completed = True

    def mark_complete(self) -> None:
        self.completed = True

    def to_dict(self) -> dict[str, Any]:
        """Converte para dict compatível com JSON (para persistência)."""
        return {
            "quiz_id": self.quiz_id,
            "user_id": self.user_id,
            "questions": [q.model_dump(mode="json") for q in self.questions],
            "progress": self.progress,
            "correct_count": self.correct_count,
            "completed": self.completed,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuizSession":
        """Reconstrói uma sessão a partir do dict persistido."""
        questions = [
            q if isinstance(q, Question) else Question.model_validate(q)
            for q in data.get("questions", [])
        ]

        return cls(
            quiz_id=data["quiz_id"],
            user_id=data["user_id"],
            questions=questions,
            progress=data.get("progress", 0),
            correct_count=data.get("correct_count", 0),
            completed=data.get("completed", False),
            created_at=_parse_datetime(data.get("created_at")),
            updated_at=_parse_datetime(data.get("updated_at")),
            version=data.get("version", 0),
        )
