"""Core module - instância AgentFS compartilhada, usada como store dos quizzes."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Optional

from config import get_settings
from core.logger import get_logger

if TYPE_CHECKING:
    from agentfs_sdk import AgentFS

logger = get_logger("app_state")

# Instância global do AgentFS
agentfs: Optional[AgentFS] = None
_open_lock = asyncio.Lock()


async def get_agentfs() -> AgentFS:
    """Retorna a instância do AgentFS, abrindo no primeiro uso."""
    global agentfs

    if agentfs is not None:
        return agentfs

    async with _open_lock:
        if agentfs is None:
            from agentfs_sdk import AgentFS, AgentFSOptions

            settings = get_settings()
            agentfs = await AgentFS.open(AgentFSOptions(id=settings.agentfs_id))
            logger.info(f"AgentFS aberto: {settings.agentfs_id}")

    return agentfs


async def cleanup():
    """Fecha o AgentFS no shutdown."""
    global agentfs

    if agentfs is not None:
        try:
            await agentfs.close()
            logger.info("AgentFS fechado")
        except Exception as e:
            logger.warning(f"Erro ao fechar agentfs: {e}")
        agentfs = None
