"""
Category goal repository functions.
"""
from __future__ import annotations

import uuid
from typing import Dict, List, Sequence, Tuple

from sqlalchemy.orm import Session

from expensync.db import models


def upsert_goals(db: Session, *, user_id: uuid.UUID, goals: Sequence[Tuple[str, float]]) -> List[models.CategoryGoal]:
    """Upsert (category, goal) pairs in a single commit. Later duplicates win."""
    existing: Dict[str, models.CategoryGoal] = {
        g.category: g
        for g in db.query(models.CategoryGoal).filter(models.CategoryGoal.user_id == user_id).all()
    }
    touched: Dict[str, models.CategoryGoal] = {}
    for category, goal in goals:
        row = existing.get(category)
        if row is None:
            row = models.CategoryGoal(user_id=user_id, category=category, goal=float(goal))
            db.add(row)
            existing[category] = row
        else:
            row.goal = float(goal)
        touched[category] = row
    db.commit()
    return list(touched.values())


def list_goals(db: Session, *, user_id: uuid.UUID) -> List[models.CategoryGoal]:
    return (
        db.query(models.CategoryGoal)
        .filter(models.CategoryGoal.user_id == user_id)
        .order_by(models.CategoryGoal.category.asc())
        .all()
    )
