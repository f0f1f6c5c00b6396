"""
Debts API endpoints.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from expensync.api.deps import get_current_user, parse_record_id
from expensync.db import models, schemas
from expensync.db.database import get_db
from expensync.db.repositories import debts as debts_repo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/debts", tags=["debts"])


@router.get("", response_model=List[schemas.Debt])
def list_debts(
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    return debts_repo.list_debts(db, user_id=user.id)


@router.post("/create", response_model=schemas.Debt, status_code=status.HTTP_201_CREATED)
def create_debt(
    payload: schemas.DebtCreate,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    return debts_repo.create_debt(db, user_id=user.id, payload=payload)


@router.delete("/{debt_id}", response_model=schemas.MessageResponse)
def delete_debt(
    debt_id: str,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    debt_uuid = parse_record_id(debt_id, "Debt not found")
    if not debts_repo.delete_debt_owned(db, debt_id=debt_uuid, user_id=user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Debt not found")
    logger.info("debt_deleted: user_id=%s debt_id=%s", user.id, debt_uuid)
    return {"message": "Debt deleted successfully"}
