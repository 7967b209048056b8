"""Quiz Router - endpoints do quiz bíblico."""

from __future__ import annotations

import logging
from typing import Optional, Union

from fastapi import APIRouter, Depends, Query

import app_state
from config import get_settings
from core.auth import get_current_user_id

from .engine.history import QuizHistoryAggregator
from .engine.quiz_engine import QuizEngine
from .llm.factory import LLMClientFactory
from .llm.question_source import ClaudeQuestionSource
from .models.schemas import (
    AnswerResult,
    ApiResponse,
    CompletedView,
    PublicQuestion,
    QuestionView,
    QuizAnswerRequest,
    QuizHistoryResponse,
    StartQuizResponse,
)
from .storage.quiz_store import QuizStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/game/quiz", tags=["Quiz"])

_store_instance: Optional[QuizStore] = None


# =============================================================================
# INJEÇÃO DE DEPENDÊNCIAS
# =============================================================================


async def get_quiz_store() -> QuizStore:
    """Dependency: QuizStore ligado à instância compartilhada do AgentFS.

    Um store por processo, compartilhando os locks de escrita por quiz.
    """
    global _store_instance

    agentfs = await app_state.get_agentfs()
    if _store_instance is None or _store_instance.agentfs is not agentfs:
        _store_instance = QuizStore(agentfs)
    return _store_instance


async def get_quiz_engine(store: QuizStore = Depends(get_quiz_store)) -> QuizEngine:
    """Dependency: QuizEngine com a fonte de perguntas do Claude."""
    settings = get_settings()
    source = ClaudeQuestionSource(LLMClientFactory(settings.quiz_model))
    return QuizEngine(store=store, source=source, history_window=settings.history_window)


async def get_history_aggregator(
    store: QuizStore = Depends(get_quiz_store),
) -> QuizHistoryAggregator:
    return QuizHistoryAggregator(store)


# =============================================================================
# ENDPOINTS
# =============================================================================


@router.post("/new", response_model=ApiResponse[StartQuizResponse], status_code=201)
async def start_quiz(
    user_id: str = Depends(get_current_user_id),
    engine: QuizEngine = Depends(get_quiz_engine),
):
    """Gera um quiz novo de 10 perguntas e retorna a primeira.

    Perguntas dos quizzes concluídos recentes do usuário são evitadas.
    """
    session = await engine.start_quiz(user_id)

    return ApiResponse(
        data=StartQuizResponse(
            quiz_id=session.quiz_id,
            current_question=PublicQuestion.from_question(session.questions[0]),
            total_questions=session.total_questions,
        )
    )


@router.get("/current", response_model=ApiResponse[Union[QuestionView, CompletedView]])
async def get_current_quiz(
    quiz_id: Optional[str] = Query(default=None, alias="quizId"),
    user_id: str = Depends(get_current_user_id),
    engine: QuizEngine = Depends(get_quiz_engine),
):
    """Pergunta atual do quiz ativo (ou score final se todas foram respondidas).

    - Sem `quizId`: o quiz não concluído iniciado mais recentemente
    - Com `quizId`: aquele quiz específico
    """
    view = await engine.get_current_state(user_id, quiz_id)
    return ApiResponse(data=view)


@router.post("/answer", response_model=ApiResponse[AnswerResult])
async def submit_answer(
    request: QuizAnswerRequest,
    user_id: str = Depends(get_current_user_id),
    engine: QuizEngine = Depends(get_quiz_engine),
):
    """Envia a resposta da pergunta atual.

    - Sempre avança para a próxima pergunta
    - Retorna se acertou, a resposta correta e a explicação
    """
    result = await engine.submit_answer(user_id, request.quiz_id, request.answer)
    return ApiResponse(data=result)


@router.get("/history", response_model=ApiResponse[QuizHistoryResponse])
async def get_quiz_history(
    user_id: str = Depends(get_current_user_id),
    history: QuizHistoryAggregator = Depends(get_history_aggregator),
):
    """Quizzes concluídos (mais recentes primeiro) com score total e médio."""
    summary = await history.history_summary(user_id)
    return ApiResponse(data=summary)
