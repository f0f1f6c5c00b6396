"""
Reminders API endpoints.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from expensync.api.deps import get_current_user, parse_record_id
from expensync.db import models, schemas
from expensync.db.database import get_db
from expensync.db.repositories import reminders as reminders_repo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reminders", tags=["reminders"])


@router.get("", response_model=List[schemas.Reminder])
def list_reminders(
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    return reminders_repo.list_reminders(db, user_id=user.id)


@router.post("/create", response_model=schemas.Reminder, status_code=status.HTTP_201_CREATED)
def create_reminder(
    payload: schemas.ReminderCreate,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    return reminders_repo.create_reminder(db, user_id=user.id, payload=payload)


@router.delete("/{reminder_id}", response_model=schemas.MessageResponse)
def delete_reminder(
    reminder_id: str,
    db: Session = Depends(get_db),
    user: models.User = Depends(get_current_user),
):
    reminder_uuid = parse_record_id(reminder_id, "Reminder not found")
    if not reminders_repo.delete_reminder_owned(db, reminder_id=reminder_uuid, user_id=user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Reminder not found")
    logger.info("reminder_deleted: user_id=%s reminder_id=%s", user.id, reminder_uuid)
    return {"message": "Reminder deleted successfully"}
