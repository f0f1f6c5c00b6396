"""
Category goals API endpoints.

Goals are per-category spending ceilings, set in bulk. A batch is validated
as a whole before anything is written.
"""
import logging
import math
from typing import Any, List, Tuple

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session

from expensync.api.deps import get_current_user
from expensync.db import models, schemas
from expensync.db.database import get_db
from expensync.db.repositories import category_goals as goals_repo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/category-goals", tags=["category-goals"])


def _is_valid_goal(value: Any) -> bool:
    # bool is an int subclass; a JSON true is not a goal
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value >= 0


def validate_goal_entries(entries: Any) -> List[Tuple[str, float]]:
    """Return cleaned (category, goal) pairs or raise 400."""
    if not isinstance(entries, list):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid data format")
    cleaned: List[Tuple[str, float]] = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid category or goal")
        category = entry.get("category")
        goal = entry.get("goal")
        if not isinstance(category, str) or not category.strip() or not _is_valid_goal(goal):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid category or goal")
        cleaned.append((category.strip(), float(goal)))
    return cleaned


@router.post("/set", response_model=schemas.MessageResponse)
def set_category_goals(
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    entries = None
    if isinstance(payload, dict):
        entries = payload.get("categoryGoals", payload.get("category_goals"))
    goals = validate_goal_entries(entries)
    goals_repo.upsert_goals(db, user_id=user.id, goals=goals)
    logger.info("category_goals_set: user_id=%s count=%d", user.id, len(goals))
    return {"message": "Category goals updated successfully"}


@router.get("", response_model=schemas.CategoryGoalList)
def get_category_goals(
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    goals = goals_repo.list_goals(db, user_id=user.id)
    return {"category_goals": [{"category": g.category, "goal": g.goal} for g in goals]}
