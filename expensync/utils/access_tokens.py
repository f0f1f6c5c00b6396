"""
Short-lived bearer credentials (HS256 JWTs).

Claims: ``sub`` and ``userId`` carry the user id, ``type`` is always
``"access"`` so a refresh token can never pass as one.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from expensync.utils.settings import AuthSettings, get_auth_settings

ACCESS_TOKEN_TYPE = "access"


class AccessTokenError(Exception):
    """Raised when an access token is missing, malformed, expired or of the wrong type."""


def create_access_token(
    user_id: uuid.UUID,
    *,
    settings: Optional[AuthSettings] = None,
    now: Optional[datetime] = None,
) -> str:
    settings = settings or get_auth_settings()
    issued = now or datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "userId": str(user_id),
        "type": ACCESS_TOKEN_TYPE,
        "iat": issued,
        "exp": issued + timedelta(minutes=settings.access_token_ttl_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, *, settings: Optional[AuthSettings] = None) -> Dict[str, Any]:
    settings = settings or get_auth_settings()
    if not token:
        raise AccessTokenError("Missing token")
    try:
        claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError as exc:
        raise AccessTokenError("Token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise AccessTokenError("Invalid token") from exc
    if claims.get("type") != ACCESS_TOKEN_TYPE:
        raise AccessTokenError("Invalid token type")
    return claims


def user_id_from_token(token: str, *, settings: Optional[AuthSettings] = None) -> uuid.UUID:
    claims = decode_access_token(token, settings=settings)
    try:
        return uuid.UUID(str(claims.get("sub")))
    except ValueError as exc:
        raise AccessTokenError("Invalid token subject") from exc
