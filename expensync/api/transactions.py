"""
Transactions API endpoints.

Create, paginated search/filter listing, summary, lookup and delete, all
scoped to the calling user.
"""
import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from expensync.api.deps import get_current_user, parse_record_id
from expensync.db import models, schemas
from expensync.db.database import get_db
from expensync.db.repositories import transactions as txn_repo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["transactions"])

NOT_FOUND = "Transaction not found or unauthorized"


@router.post("/create", response_model=schemas.Transaction, status_code=status.HTTP_201_CREATED)
def create_transaction(
    payload: schemas.TransactionCreate,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    if not (payload.title or "").strip() or payload.amount is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Title and amount are required")
    if not math.isfinite(payload.amount):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Amount must be a finite number")
    return txn_repo.create_transaction(
        db,
        user_id=user.id,
        title=payload.title,
        amount=payload.amount,
        category=payload.category,
        note=payload.note,
        tags=payload.tags,
        date=payload.date,
    )


# GET /transactions?page=1&limit=10&search=food&filter=Food
@router.get("", response_model=schemas.TransactionPage)
def list_transactions(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = "",
    filter: Optional[str] = "",
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    items, total = txn_repo.list_transactions_page(
        db,
        user_id=user.id,
        page=page,
        limit=limit,
        search=search or "",
        category=(filter or "").strip(),
    )
    return {
        "transactions": items,
        "current_page": page,
        "total_pages": math.ceil(total / limit),
        "has_more": page * limit < total,
        "total_items": total,
    }


@router.get("/summary", response_model=schemas.TransactionSummary)
def transaction_summary(
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    count, income, expense = txn_repo.amount_totals(db, user_id=user.id)
    return {
        "total_transactions": count,
        "income": income,
        "expense": expense,
        "net": income - expense,
    }


@router.get("/{transaction_id}", response_model=schemas.Transaction)
def get_transaction(
    transaction_id: str,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    txn = txn_repo.get_transaction_owned(
        db, transaction_id=parse_record_id(transaction_id, NOT_FOUND), user_id=user.id
    )
    if not txn:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return txn


@router.delete("/{transaction_id}", response_model=schemas.TransactionDeleteResponse)
def delete_transaction(
    transaction_id: str,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    txn_uuid = parse_record_id(transaction_id, NOT_FOUND)
    if not txn_repo.delete_transaction_owned(db, transaction_id=txn_uuid, user_id=user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    logger.info("transaction_deleted: user_id=%s transaction_id=%s", user.id, txn_uuid)
    return {
        "message": "Transaction deleted successfully",
        "transactions": txn_repo.list_all_transactions(db, user_id=user.id),
    }
