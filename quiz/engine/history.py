"""Quiz History - agregados entre sessões lidos dos quizzes concluídos."""

import logging

from ..models.schemas import QuizHistoryEntry, QuizHistoryResponse, QuizHistoryStats
from ..storage.quiz_store import QuizStore

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_WINDOW = 10


class QuizHistoryAggregator:
    """Lê os quizzes concluídos do usuário para evitar repetição e gerar estatísticas."""

    def __init__(self, store: QuizStore):
        self.store = store

    async def previous_question_texts(
        self, user_id: str, limit: int = DEFAULT_HISTORY_WINDOW
    ) -> list[str]:
        """Textos das perguntas dos `limit` quizzes concluídos mais recentes.

        Os textos são achatados sessão por sessão, da sessão mais recente primeiro.
        """
        sessions = await self.store.list_completed_by_user(user_id, limit=limit)
        texts = [question.text for session in sessions for question in session.questions]
        logger.info(
            f"Encontradas {len(texts)} perguntas anteriores para evitar repetição "
            f"({len(sessions)} quizzes, usuário {user_id})"
        )
        return texts

    async def history_summary(self, user_id: str) -> QuizHistoryResponse:
        """Todos os quizzes concluídos (mais recentes primeiro) com total e média.

        O score de cada quiz é o número de acertos.
        """
        sessions = await self.store.list_completed_by_user(user_id)

        total_score = sum(session.correct_count for session in sessions)
        total_quizzes = len(sessions)

        return QuizHistoryResponse(
            quizzes=[
                QuizHistoryEntry(
                    id=session.quiz_id,
                    score=session.correct_count,
                    total_questions=session.total_questions,
                    created_at=session.created_at,
                )
                for session in sessions
            ],
            stats=QuizHistoryStats(
                total_score=total_score,
                total_quizzes=total_quizzes,
                average_score=total_score / total_quizzes if total_quizzes > 0 else 0,
            ),
        )
