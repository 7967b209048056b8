"""Quiz Store - Abstração sobre AgentFS para persistência das sessões de quiz."""

from __future__ import annotations

import asyncio
import logging
import weakref
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from agentfs_sdk import AgentFS

from core.exceptions import ConcurrentUpdateError

from ..models.state import QuizSession

logger = logging.getLogger(__name__)


class QuizStore:
    """Store de documentos das sessões de quiz sobre o KV do AgentFS.

    Estrutura de chaves:
        - quiz:{quiz_id}:state -> documento da sessão (QuizSession.to_dict)
        - quiz:user:{user_id}:sessions -> IDs dos quizzes em ordem de criação

    Escritas na mesma sessão são serializadas com um lock em processo e
    podem ser condicionadas à `version` armazenada.

    Example:
        >>> store = QuizStore(agentfs)
        >>> session = await store.create(QuizSession.new("user-1", questions))
        >>> active = await store.find_active_by_user("user-1")
    """

    KEY_PREFIX = "quiz"

    def __init__(self, agentfs: AgentFS):
        """Inicializa store com instância do AgentFS.

        Args:
            agentfs: Instância aberta do AgentFS (apenas `kv` é usado)
        """
        self.agentfs = agentfs
        # Entradas somem quando nenhuma coroutine segura ou aguarda o lock
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def _lock(self, key: str) -> asyncio.Lock:
        """Lock de `key`, compartilhado enquanto alguém o segura ou aguarda."""
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    def _state_key(self, quiz_id: str) -> str:
        return f"{self.KEY_PREFIX}:{quiz_id}:state"

    def _user_index_key(self, user_id: str) -> str:
        return f"{self.KEY_PREFIX}:user:{user_id}:sessions"

    async def _load_index(self, user_id: str) -> list[str]:
        ids = await self.agentfs.kv.get(self._user_index_key(user_id))
        return list(ids) if ids else []

    async def _load(self, quiz_id: str) -> Optional[QuizSession]:
        data = await self.agentfs.kv.get(self._state_key(quiz_id))
        if not data:
            return None
        return QuizSession.from_dict(data)

    async def _iter_recent(self, user_id: str):
        """Itera as sessões do usuário, das mais recentes para as mais antigas."""
        sessions = []
        for quiz_id in await self._load_index(user_id):
            session = await self._load(quiz_id)
            if session is None:
                logger.warning(f"ID de quiz órfão no índice do usuário {user_id}: {quiz_id}")
                continue
            sessions.append(session)

        # Ordem do índice desempata timestamps idênticos
        ordered = sorted(
            enumerate(sessions), key=lambda item: (item[1].created_at, item[0]), reverse=True
        )
        for _, session in ordered:
            yield session

    async def create(self, session: QuizSession) -> QuizSession:
        """Persiste uma sessão nova e registra no índice do usuário.

        Args:
            session: Sessão nova (version 0)

        Returns:
            A sessão armazenada
        """
        async with self._lock(f"user:{session.user_id}"):
            session.version = 1
            await self.agentfs.kv.set(self._state_key(session.quiz_id), session.to_dict())

            index = await self._load_index(session.user_id)
            index.append(session.quiz_id)
            await self.agentfs.kv.set(self._user_index_key(session.user_id), index)

        logger.debug(f"Quiz criado: {session.quiz_id} (usuário {session.user_id})")
        return session

    async def find_by_id(self, quiz_id: str, user_id: str) -> Optional[QuizSession]:
        """Carrega uma sessão apenas se pertencer a `user_id`."""
        session = await self._load(quiz_id)
        if session is None or session.user_id != user_id:
            return None
        return session

    async def find_active_by_user(self, user_id: str) -> Optional[QuizSession]:
        """Sessão incompleta mais recente do usuário, se houver."""
        async for session in self._iter_recent(user_id):
            if not session.completed:
                return session
        return None

    async def list_completed_by_user(
        self, user_id: str, limit: Optional[int] = None
    ) -> list[QuizSession]:
        """Sessões concluídas do usuário, mais recentes primeiro.

        Args:
            user_id: Dono das sessões
            limit: Número máximo de sessões (None = todas)
        """
        completed: list[QuizSession] = []
        if limit is not None and limit <= 0:
            return completed

        async for session in self._iter_recent(user_id):
            if session.completed:
                completed.append(session)
                if limit is not None and len(completed) >= limit:
                    break
        return completed

    async def save(self, session: QuizSession, expected_version: Optional[int] = None) -> None:
        """Grava a sessão, opcionalmente só se ninguém a alterou nesse meio tempo.

        Args:
            session: Sessão a persistir
            expected_version: Versão lida pelo chamador; None ignora a checagem

        Raises:
            ConcurrentUpdateError: Se a versão armazenada diferir de expected_version
        """
        async with self._lock(session.quiz_id):
            if expected_version is not None:
                stored = await self._load(session.quiz_id)
                stored_version = stored.version if stored else None
                if stored_version != expected_version:
                    logger.warning(
                        f"Conflito de versão no quiz {session.quiz_id}: "
                        f"esperada {expected_version}, encontrada {stored_version}"
                    )
                    raise ConcurrentUpdateError(
                        details={"quizId": session.quiz_id},
                    )

            session.version += 1
            session.updated_at = datetime.now(timezone.utc)
            await self.agentfs.kv.set(self._state_key(session.quiz_id), session.to_dict())

        logger.debug(
            f"Quiz salvo: {session.quiz_id} progress={session.progress} "
            f"completed={session.completed} v{session.version}"
        )

    async def delete_user_quizzes(self, user_id: str) -> int:
        """Remove todas as sessões de um usuário (exclusão de conta).

        Returns:
            Número de sessões removidas
        """
        async with self._lock(f"user:{user_id}"):
            quiz_ids = await self._load_index(user_id)
            for quiz_id in quiz_ids:
                await self.agentfs.kv.delete(self._state_key(quiz_id))
            await self.agentfs.kv.delete(self._user_index_key(user_id))

        logger.info(f"{len(quiz_ids)} quizzes deletados do usuário {user_id}")
        return len(quiz_ids)
