"""
Budget repository functions.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from expensync.db import models, schemas


def current_month() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m")


def upsert_budget(db: Session, *, user_id: uuid.UUID, payload: schemas.BudgetCreate) -> Tuple[models.Budget, bool]:
    """Create or update the budget for (category, month). Returns (budget, created)."""
    month = payload.month or current_month()
    budget = (
        db.query(models.Budget)
        .filter(
            models.Budget.user_id == user_id,
            models.Budget.category == payload.category,
            models.Budget.month == month,
        )
        .first()
    )
    created = budget is None
    if created:
        budget = models.Budget(user_id=user_id, category=payload.category, month=month)
        db.add(budget)
    budget.amount = float(payload.amount)
    budget.note = (payload.note or "").strip()
    db.commit()
    db.refresh(budget)
    return budget, created


def list_budgets(db: Session, *, user_id: uuid.UUID) -> List[models.Budget]:
    return (
        db.query(models.Budget)
        .filter(models.Budget.user_id == user_id)
        .order_by(models.Budget.month.desc(), models.Budget.category.asc())
        .all()
    )


def get_budget_owned(db: Session, *, budget_id: uuid.UUID, user_id: uuid.UUID) -> Optional[models.Budget]:
    return (
        db.query(models.Budget)
        .filter(models.Budget.id == budget_id, models.Budget.user_id == user_id)
        .first()
    )


def delete_budget_owned(db: Session, *, budget_id: uuid.UUID, user_id: uuid.UUID) -> bool:
    budget = get_budget_owned(db, budget_id=budget_id, user_id=user_id)
    if not budget:
        return False
    db.delete(budget)
    db.commit()
    return True
