# =============================================================================
# CONFIGURAÇÃO - Bible Quiz Backend
# =============================================================================

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------

DEFAULT_JWT_SECRET = "default_jwt_secret"
DEFAULT_AGENTFS_ID = "bible-quiz"
DEFAULT_QUIZ_MODEL = "haiku"
DEFAULT_HISTORY_WINDOW = 10


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Inteiro inválido em {name}={raw!r}, usando {default}")
        return default


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    """Configuração de runtime do serviço de quiz.

    Attributes:
        jwt_secret: Segredo usado para validar os bearer tokens
        jwt_algorithm: Algoritmo de assinatura do JWT
        agentfs_id: ID do banco AgentFS com os documentos de quiz
        quiz_model: Alias do modelo Claude para gerar perguntas (haiku, sonnet, opus)
        history_window: Sessões concluídas consideradas para evitar repetição
        log_level: Nível do log raiz
        environment: development, test ou production
        cors_origins: Origens CORS permitidas
    """

    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    agentfs_id: str = DEFAULT_AGENTFS_ID
    quiz_model: str = DEFAULT_QUIZ_MODEL
    history_window: int = DEFAULT_HISTORY_WINDOW
    log_level: str = "INFO"
    environment: str = "development"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @classmethod
    def from_env(cls) -> "Settings":
        """Monta a configuração a partir das variáveis de ambiente (e do `.env`, se existir)."""
        load_dotenv()

        return cls(
            jwt_secret=os.getenv("JWT_SECRET", DEFAULT_JWT_SECRET),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            agentfs_id=os.getenv("AGENTFS_ID", DEFAULT_AGENTFS_ID),
            quiz_model=os.getenv("QUIZ_MODEL", DEFAULT_QUIZ_MODEL).lower(),
            history_window=_env_int("QUIZ_HISTORY_WINDOW", DEFAULT_HISTORY_WINDOW),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            environment=os.getenv("ENVIRONMENT", "development"),
            cors_origins=_env_list("CORS_ORIGINS", ["*"]),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Configuração em cache, uma por processo."""
    return Settings.from_env()
