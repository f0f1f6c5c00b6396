"""
User repository functions.
"""
from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy.orm import Session

from expensync.db import models
from expensync.utils import token_crypto


def get_user(db: Session, user_id: uuid.UUID) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.email == email).first()


def create_user(db: Session, *, name: str, email: str, password: str) -> models.User:
    user = models.User(
        name=name,
        email=email,
        password_hash=token_crypto.hash_password(password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def authenticate(db: Session, *, email: str, password: str) -> Optional[models.User]:
    user = get_user_by_email(db, email)
    if not user:
        return None
    if not token_crypto.verify_password(password, user.password_hash):
        return None
    return user
