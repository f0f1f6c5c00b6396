"""
Repositories for refresh tokens.

Implements issue/lookup/resolve/revoke and last-used updates.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from expensync.db import models
from expensync.utils import token_crypto

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _as_aware(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite drops tzinfo on round-trip; stored values are always UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def issue_refresh_token(db: Session, *, user_id: uuid.UUID, ttl_days: int) -> Tuple[models.RefreshToken, str]:
    token_id, secret, full_token = token_crypto.generate_token()
    now = _now()
    rt = models.RefreshToken(
        user_id=user_id,
        token_id=token_id,
        token_hash=token_crypto.hash_secret(secret),
        status="active",
        created_at=now,
        expires_at=now + timedelta(days=ttl_days),
    )
    db.add(rt)
    db.commit()
    db.refresh(rt)
    return rt, full_token


def get_by_token_id(db: Session, *, token_id: str) -> Optional[models.RefreshToken]:
    return (
        db.query(models.RefreshToken)
        .filter(models.RefreshToken.token_id == token_id)
        .first()
    )


def resolve_active(db: Session, *, token: str) -> Optional[models.RefreshToken]:
    """Return the stored token when `token` is well-formed, known, active, unexpired and its secret matches."""
    parsed = token_crypto.parse_token(token)
    if not parsed:
        return None
    rt = get_by_token_id(db, token_id=parsed.token_id)
    if not rt:
        return None
    if rt.status != "active":
        return None
    expires_at = _as_aware(rt.expires_at)
    if expires_at is not None and _now() >= expires_at:
        return None
    if not token_crypto.verify_secret(parsed.secret, rt.token_hash):
        return None
    return rt


def revoke(db: Session, *, token: str) -> bool:
    """Revoke the refresh token matching `token`. Returns False when nothing matched."""
    parsed = token_crypto.parse_token(token)
    if not parsed:
        return False
    rt = get_by_token_id(db, token_id=parsed.token_id)
    if not rt or not token_crypto.verify_secret(parsed.secret, rt.token_hash):
        return False
    if rt.status != "revoked":
        rt.status = "revoked"
        rt.revoked_at = _now()
        db.commit()
    return True


def mark_used_now(db: Session, *, rt: models.RefreshToken) -> None:
    rt.last_used_at = _now()
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.warning("refresh_token_touch_failed: token_id=%s", rt.token_id)
