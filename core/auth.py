"""Autenticação por bearer token para os endpoints do quiz."""

from typing import Any, Optional

import jwt
from fastapi import Header
from jwt import InvalidTokenError

from config import get_settings
from core.exceptions import NotAuthenticatedError
from core.logger import get_logger

logger = get_logger("auth")


def _prepare_token(raw_header: str) -> str:
    parts = raw_header.split(None, 1)
    if not parts:
        return ""
    if parts[0].lower() == "bearer":
        return parts[1].strip() if len(parts) > 1 else ""
    return raw_header.strip()


def decode_token(token: str) -> dict[str, Any]:
    """Valida um JWT com o segredo configurado e retorna as claims.

    Raises:
        NotAuthenticatedError: Se o token for inválido ou estiver expirado
    """
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except InvalidTokenError as exc:
        logger.warning(f"Falha na verificação do JWT: {exc}")
        raise NotAuthenticatedError("Invalid or expired token") from exc


def create_token(user_id: str, **claims: Any) -> str:
    """Assina um token para `user_id` (usado por ferramentas e testes)."""
    settings = get_settings()
    payload = {"userId": user_id, **claims}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def get_current_user_id(authorization: Optional[str] = Header(default=None)) -> str:
    """Dependency FastAPI: resolve a identidade do chamador pelo header Authorization.

    Aceita `Bearer <token>` ou o token puro. A identidade é a claim `userId`,
    com fallback para `sub`.
    """
    if not authorization:
        raise NotAuthenticatedError("Authentication required")

    token = _prepare_token(authorization)
    if not token:
        raise NotAuthenticatedError("Authentication required")

    claims = decode_token(token)
    user_id = claims.get("userId") or claims.get("sub")
    if not user_id:
        logger.warning("Payload do token sem identidade do usuário")
        raise NotAuthenticatedError("Invalid token format")

    return str(user_id)
