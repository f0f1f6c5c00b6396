"""
API dependency helpers.

Resolves the calling user from the bearer access token.
"""
import logging
import uuid
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from expensync.db import models
from expensync.db.database import get_db
from expensync.db.repositories import users as users_repo
from expensync.utils.access_tokens import AccessTokenError, user_id_from_token

logger = logging.getLogger(__name__)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[7:].strip()
        return token or None
    return None


# Contract:
# Returns the sqlalchemy User model for the access token's subject.
# Raises 401 if the token is missing, invalid, expired, or its user is gone.
def get_current_user(
    db: Session = Depends(get_db),
    authorization: Optional[str] = Header(default=None),
) -> models.User:
    token = extract_bearer_token(authorization)
    if not token:
        raise _unauthorized("Authentication required")
    try:
        user_id = user_id_from_token(token)
    except AccessTokenError as exc:
        logger.info("access_token_rejected: reason=%s", exc)
        raise _unauthorized(str(exc))
    user = users_repo.get_user(db, user_id)
    if not user:
        raise _unauthorized("Invalid token user")
    return user


def parse_record_id(raw: str, not_found_detail: str) -> uuid.UUID:
    """Parse a path id; malformed ids are reported as not found."""
    try:
        return uuid.UUID(str(raw))
    except ValueError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=not_found_detail)
