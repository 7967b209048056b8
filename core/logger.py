"""Configuração de logging do serviço."""

import logging
import sys

ROOT_LOGGER_NAME = "bible_quiz"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Configura o logging raiz uma única vez, com um stream handler.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR)
    """
    global _configured

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(numeric_level)

    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Retorna logger sob o namespace raiz do serviço."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
