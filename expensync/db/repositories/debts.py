"""
Debt repository functions.
"""
from __future__ import annotations

import uuid
from typing import List, Optional

from sqlalchemy.orm import Session

from expensync.db import models, schemas


def create_debt(db: Session, *, user_id: uuid.UUID, payload: schemas.DebtCreate) -> models.Debt:
    debt = models.Debt(
        user_id=user_id,
        title=payload.title,
        lender=(payload.lender or "").strip(),
        amount=float(payload.amount),
        interest_rate=float(payload.interest_rate),
        due_date=payload.due_date,
        note=(payload.note or "").strip(),
    )
    db.add(debt)
    db.commit()
    db.refresh(debt)
    return debt


def list_debts(db: Session, *, user_id: uuid.UUID) -> List[models.Debt]:
    # Nearest due date first; undated debts last
    return (
        db.query(models.Debt)
        .filter(models.Debt.user_id == user_id)
        .order_by(
            models.Debt.due_date.is_(None),
            models.Debt.due_date.asc(),
            models.Debt.created_at.desc(),
        )
        .all()
    )


def get_debt_owned(db: Session, *, debt_id: uuid.UUID, user_id: uuid.UUID) -> Optional[models.Debt]:
    return (
        db.query(models.Debt)
        .filter(models.Debt.id == debt_id, models.Debt.user_id == user_id)
        .first()
    )


def delete_debt_owned(db: Session, *, debt_id: uuid.UUID, user_id: uuid.UUID) -> bool:
    debt = get_debt_owned(db, debt_id=debt_id, user_id=user_id)
    if not debt:
        return False
    db.delete(debt)
    db.commit()
    return True
