"""
Bearer-token authentication.

Tokens are issued by the identity service and signed with the shared
JWT_SECRET_KEY. The caller's numeric user id travels in the `Id` claim.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tacotuesday.config import Settings, get_settings

logger = logging.getLogger(__name__)

USER_ID_CLAIM = "Id"

_bearer = HTTPBearer(auto_error=False)


def _unauthenticated(detail: str = "Not authenticated") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_token(token: str, settings: Settings) -> dict[str, Any]:
    """
    Verify signature, expiry and (when configured) audience and issuer.
    Raises jwt.InvalidTokenError on any failure.
    """
    options = {"verify_aud": settings.jwt_audience is not None}
    return jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm],
        audience=settings.jwt_audience,
        issuer=settings.jwt_issuer,
        options=options,
    )


def user_id_from_claims(claims: dict[str, Any]) -> int:
    """Parse the Id claim as an integer; raises ValueError if absent or not numeric."""
    raw = claims.get(USER_ID_CLAIM)
    if raw is None:
        raise ValueError(f"token has no {USER_ID_CLAIM} claim")
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if isinstance(raw, str) and raw.strip().isdigit():
        return int(raw.strip())
    raise ValueError(f"{USER_ID_CLAIM} claim is not an integer: {raw!r}")


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    settings: Settings = Depends(get_settings),
) -> int:
    """FastAPI dependency: the authenticated caller's user id."""
    if credentials is None:
        raise _unauthenticated()

    try:
        claims = decode_token(credentials.credentials, settings)
        return user_id_from_claims(claims)
    except jwt.InvalidTokenError as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise _unauthenticated("Invalid token") from exc
    except ValueError as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise _unauthenticated("Invalid token") from exc
