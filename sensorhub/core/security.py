from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from sensorhub.core.config import settings


def decodificar_token(token: str) -> Optional[dict]:
    """
    Valida o JWT emitido pelo provedor de autenticação externo.
    Retorna as claims ou None se o token for inválido/expirado.
    """
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
        )
    except JWTError:
        return None


def identidade_do_token(payload: dict) -> Optional[UUID]:
    """Extrai a identidade (claim "sub") como UUID."""
    sub = payload.get("sub")
    if not sub:
        return None
    try:
        return UUID(str(sub))
    except ValueError:
        return None
