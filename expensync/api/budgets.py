"""
Budgets API endpoints.

A budget is a monthly amount per category; posting the same (category,
month) again updates it.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from expensync.api.deps import get_current_user, parse_record_id
from expensync.db import models, schemas
from expensync.db.database import get_db
from expensync.db.repositories import budgets as budgets_repo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/budgets", tags=["budgets"])


@router.get("", response_model=List[schemas.Budget])
def list_budgets(
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    return budgets_repo.list_budgets(db, user_id=user.id)


@router.post("", response_model=schemas.Budget, status_code=status.HTTP_201_CREATED)
def add_budget(
    payload: schemas.BudgetCreate,
    response: Response,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    budget, created = budgets_repo.upsert_budget(db, user_id=user.id, payload=payload)
    if not created:
        response.status_code = status.HTTP_200_OK
    return budget


@router.delete("/{budget_id}", response_model=schemas.MessageResponse)
def delete_budget(
    budget_id: str,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    budget_uuid = parse_record_id(budget_id, "Budget not found")
    if not budgets_repo.delete_budget_owned(db, budget_id=budget_uuid, user_id=user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Budget not found")
    logger.info("budget_deleted: user_id=%s budget_id=%s", user.id, budget_uuid)
    return {"message": "Budget deleted successfully"}
