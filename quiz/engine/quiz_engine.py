"""Quiz Engine - máquina de estados de uma sessão de quiz de dez perguntas."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Union

from core.exceptions import (
    ConcurrentUpdateError,
    GenerationFailureError,
    NoActiveQuizError,
    QuizAlreadyCompletedError,
    QuizNotFoundError,
)

from ..models.schemas import (
    QUESTIONS_PER_QUIZ,
    AnswerResult,
    CompletedView,
    PublicQuestion,
    Question,
    QuestionView,
)
from ..models.state import QuizSession
from ..storage.quiz_store import QuizStore
from .history import DEFAULT_HISTORY_WINDOW, QuizHistoryAggregator
from .question_repair import repair_question

if TYPE_CHECKING:
    from ..llm.question_source import QuestionSource

logger = logging.getLogger(__name__)


class QuizEngine:
    """Cria quizzes e os conduz da primeira pergunta até a conclusão.

    Não guarda estado de sessão entre chamadas: cada operação lê a sessão
    do store, aplica uma transição e grava de volta.

    Transições:
        - start_quiz: sessão nova, progress=0, completed=False
        - submit_answer: progress += 1 (certo ou errado); completed na última pergunta
        - get_current_state: conclui sob demanda uma sessão esgotada sem a flag

    Example:
        >>> engine = QuizEngine(QuizStore(agentfs), ClaudeQuestionSource())
        >>> session = await engine.start_quiz("user-1")
        >>> result = await engine.submit_answer("user-1", session.quiz_id, "perish")
    """

    def __init__(
        self,
        store: QuizStore,
        source: QuestionSource,
        history: Optional[QuizHistoryAggregator] = None,
        history_window: int = DEFAULT_HISTORY_WINDOW,
    ):
        """Inicializa engine.

        Args:
            store: Store das sessões de quiz
            source: Fonte de perguntas, chamada uma vez por quiz novo
            history: Agregador de histórico (padrão: um sobre `store`)
            history_window: Quizzes concluídos considerados para evitar repetição
        """
        self.store = store
        self.source = source
        self.history = history or QuizHistoryAggregator(store)
        self.history_window = history_window

    # =========================================================================
    # INÍCIO
    # =========================================================================

    def _validate_questions(self, candidates) -> list[Question]:
        """Repara candidatas e exige um quiz completo de perguntas válidas."""
        questions: list[Question] = []
        rejected = 0

        for candidate in candidates:
            question = repair_question(candidate)
            if question is None:
                rejected += 1
                continue
            questions.append(question)
            if len(questions) == QUESTIONS_PER_QUIZ:
                break

        if len(questions) < QUESTIONS_PER_QUIZ:
            logger.error(
                f"Apenas {len(questions)} perguntas utilizáveis ({rejected} rejeitadas), "
                f"necessário {QUESTIONS_PER_QUIZ}"
            )
            raise GenerationFailureError(
                details={"usableQuestions": len(questions), "required": QUESTIONS_PER_QUIZ}
            )

        return questions

    async def start_quiz(self, user_id: str) -> QuizSession:
        """Gera e persiste um quiz novo para o usuário.

        A sessão só é gravada depois que todas as perguntas foram geradas e
        validadas, então um início com falha ou cancelado não deixa resíduo.

        Args:
            user_id: Dono do quiz novo

        Returns:
            A sessão persistida (progress=0)

        Raises:
            GenerationFailureError: Se a fonte falhar ou render menos de
                10 perguntas utilizáveis
        """
        previous = await self.history.previous_question_texts(user_id, limit=self.history_window)

        try:
            candidates = await self.source.generate(previous, QUESTIONS_PER_QUIZ)
        except GenerationFailureError:
            raise
        except Exception as e:
            logger.error(f"Fonte de perguntas falhou para o usuário {user_id}: {e}")
            raise GenerationFailureError(details={"reason": str(e)}) from e

        questions = self._validate_questions(candidates or [])
        session = await self.store.create(QuizSession.new(user_id, questions))

        logger.info(f"[Quiz {session.quiz_id}] Iniciado para o usuário {user_id}")
        return session

    # =========================================================================
    # ESTADO ATUAL
    # =========================================================================

    @staticmethod
    def _completed_view(session: QuizSession) -> CompletedView:
        return CompletedView(
            quiz_id=session.quiz_id,
            score=session.correct_count,
            total_questions=session.total_questions,
        )

    async def get_current_state(
        self, user_id: str, quiz_id: Optional[str] = None
    ) -> Union[QuestionView, CompletedView]:
        """Resolve a pergunta atual do usuário.

        Sem `quiz_id` usa o quiz incompleto criado mais recentemente.
        Uma sessão com todas as perguntas respondidas, mas sem a flag
        completed, é concluída aqui antes de responder.

        Args:
            user_id: Identidade do chamador
            quiz_id: Quiz específico a inspecionar (opcional)

        Raises:
            NoActiveQuizError: Não existe quiz incompleto para o usuário
            QuizNotFoundError: `quiz_id` não pertence ao usuário
        """
        if quiz_id:
            session = await self.store.find_by_id(quiz_id, user_id)
            if session is None:
                raise QuizNotFoundError(details={"quizId": quiz_id})
        else:
            session = await self.store.find_active_by_user(user_id)
            if session is None:
                raise NoActiveQuizError()

        if session.completed:
            return self._completed_view(session)

        if session.is_exhausted:
            logger.warning(
                f"[Quiz {session.quiz_id}] Todas as perguntas respondidas sem conclusão, corrigindo"
            )
            read_version = session.version
            session.mark_complete()
            try:
                await self.store.save(session, expected_version=read_version)
            except ConcurrentUpdateError:
                # Outra requisição concluiu antes; reporta o resultado armazenado
                latest = await self.store.find_by_id(session.quiz_id, user_id)
                if latest is not None and latest.completed:
                    return self._completed_view(latest)
                raise
            return self._completed_view(session)

        question = session.current_question()
        return QuestionView(
            quiz_id=session.quiz_id,
            current_question=PublicQuestion.from_question(question),
            question_number=session.progress + 1,
            total_questions=session.total_questions,
            score=session.correct_count,
        )

    # =========================================================================
    # RESPOSTA
    # =========================================================================

    async def submit_answer(self, user_id: str, quiz_id: str, answer: str) -> AnswerResult:
        """Pontua a resposta da pergunta atual e avança o quiz.

        O progresso sempre avança um, com a resposta certa ou não. É feita
        exatamente uma escrita condicional; um envio duplicado concorrente
        falha com ConcurrentUpdateError em vez de avançar duas vezes.

        Args:
            user_id: Identidade do chamador
            quiz_id: Quiz sendo respondido
            answer: Texto da opção escolhida (comparação exata)

        Raises:
            QuizNotFoundError: Quiz não existe para o usuário
            QuizAlreadyCompletedError: Quiz sem pergunta pendente
            ConcurrentUpdateError: Quiz alterado entre a leitura e a escrita
        """
        session = await self.store.find_by_id(quiz_id, user_id)
        if session is None:
            raise QuizNotFoundError(details={"quizId": quiz_id})

        if session.completed or session.is_exhausted:
            raise QuizAlreadyCompletedError(details={"quizId": quiz_id})

        index = session.progress
        question = session.current_question()
        is_correct = answer == question.correct_answer

        read_version = session.version
        session.record_answer(is_correct)
        await self.store.save(session, expected_version=read_version)

        logger.debug(
            f"[Quiz {quiz_id}] P{index + 1} respondida "
            f"({'certa' if is_correct else 'errada'}), score={session.correct_count}"
        )
        if session.completed:
            logger.info(
                f"[Quiz {quiz_id}] Concluído com {session.correct_count}/{session.total_questions}"
            )

        return AnswerResult(
            is_correct=is_correct,
            correct_answer=question.correct_answer,
            explanation=question.explanation,
            score=session.correct_count,
            completed=session.completed,
            total_questions=session.total_questions,
            next_question_number=None if session.completed else index + 2,
        )
