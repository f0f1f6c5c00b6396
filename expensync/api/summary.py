"""
Budget summary endpoint backing the dashboard cards.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from expensync.api.deps import get_current_user
from expensync.db import models, schemas
from expensync.db.database import get_db
from expensync.services.summary_service import get_budget_summary

router = APIRouter(prefix="/summary", tags=["summary"])


@router.get("", response_model=schemas.BudgetSummary)
def budget_summary(
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    return get_budget_summary(db, user_id=user.id)
