"""
Transaction repository functions.

Implements creation, the paginated search/filter listing, owner-scoped
lookups and deletes, and the signed-amount aggregates.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import case, func, or_, select
from sqlalchemy.orm import Session

from expensync.db import models


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def create_transaction(
    db: Session,
    *,
    user_id: uuid.UUID,
    title: str,
    amount: float,
    category: Optional[str] = None,
    note: Optional[str] = None,
    tags: Optional[Iterable[str]] = None,
    date: Optional[datetime] = None,
) -> models.Transaction:
    cleaned_tags = [t.strip() for t in (tags or []) if t and t.strip()]
    txn = models.Transaction(
        user_id=user_id,
        title=title.strip(),
        amount=float(amount),
        category=(category or "").strip() or models.DEFAULT_CATEGORY,
        note=(note or "").strip(),
        tags=cleaned_tags,
        date=_to_utc(date) if date else models.now_utc(),
    )
    db.add(txn)
    db.commit()
    db.refresh(txn)
    return txn


def _tag_matches(db: Session, pattern: str):
    """EXISTS over the elements of the JSON tags array, one ILIKE per tag."""
    if db.get_bind().dialect.name == "postgresql":
        elements = func.jsonb_array_elements_text(models.Transaction.tags)
    else:
        elements = func.json_each(models.Transaction.tags)
    tag = elements.table_valued("value").alias("tag")
    return select(tag.c.value).where(tag.c.value.ilike(pattern, escape="\\")).exists()


def _filtered_query(db: Session, user_id: uuid.UUID, search: str = "", category: str = ""):
    q = db.query(models.Transaction).filter(models.Transaction.user_id == user_id)
    term = (search or "").strip()
    if term:
        pattern = f"%{_escape_like(term)}%"
        q = q.filter(
            or_(
                models.Transaction.title.ilike(pattern, escape="\\"),
                models.Transaction.note.ilike(pattern, escape="\\"),
                _tag_matches(db, pattern),
            )
        )
    if category:
        q = q.filter(models.Transaction.category == category)
    return q


def list_transactions_page(
    db: Session,
    *,
    user_id: uuid.UUID,
    page: int = 1,
    limit: int = 10,
    search: str = "",
    category: str = "",
) -> Tuple[List[models.Transaction], int]:
    """Return (items, total) for one newest-first page."""
    q = _filtered_query(db, user_id, search, category)
    total = q.count()
    skip = (page - 1) * limit
    items = (
        q.order_by(models.Transaction.date.desc(), models.Transaction.created_at.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )
    return items, total


def list_all_transactions(db: Session, *, user_id: uuid.UUID) -> List[models.Transaction]:
    return (
        db.query(models.Transaction)
        .filter(models.Transaction.user_id == user_id)
        .order_by(models.Transaction.date.desc(), models.Transaction.created_at.desc())
        .all()
    )


def get_transaction_owned(db: Session, *, transaction_id: uuid.UUID, user_id: uuid.UUID) -> Optional[models.Transaction]:
    return (
        db.query(models.Transaction)
        .filter(
            models.Transaction.id == transaction_id,
            models.Transaction.user_id == user_id,
        )
        .first()
    )


def delete_transaction_owned(db: Session, *, transaction_id: uuid.UUID, user_id: uuid.UUID) -> bool:
    txn = get_transaction_owned(db, transaction_id=transaction_id, user_id=user_id)
    if not txn:
        return False
    db.delete(txn)
    db.commit()
    return True


def amount_totals(db: Session, *, user_id: uuid.UUID) -> Tuple[int, float, float]:
    """Return (count, income, expense); expense is the absolute sum of negative amounts."""
    income_expr = func.coalesce(func.sum(case((models.Transaction.amount >= 0, models.Transaction.amount), else_=0.0)), 0.0)
    expense_expr = func.coalesce(func.sum(case((models.Transaction.amount < 0, -models.Transaction.amount), else_=0.0)), 0.0)
    count, income, expense = (
        db.query(func.count(models.Transaction.id), income_expr, expense_expr)
        .filter(models.Transaction.user_id == user_id)
        .one()
    )
    return int(count or 0), float(income or 0.0), float(expense or 0.0)


def expense_by_category(db: Session, *, user_id: uuid.UUID) -> List[Tuple[str, float]]:
    """Absolute spend per category, largest first."""
    spent = func.sum(-models.Transaction.amount)
    rows = (
        db.query(models.Transaction.category, spent)
        .filter(models.Transaction.user_id == user_id, models.Transaction.amount < 0)
        .group_by(models.Transaction.category)
        .order_by(spent.desc())
        .all()
    )
    return [(category, float(total or 0.0)) for category, total in rows]
