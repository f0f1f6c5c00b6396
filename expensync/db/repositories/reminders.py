"""
Reminder repository functions.
"""
from __future__ import annotations

import uuid
from typing import List, Optional

from sqlalchemy.orm import Session

from expensync.db import models, schemas


def create_reminder(db: Session, *, user_id: uuid.UUID, payload: schemas.ReminderCreate) -> models.Reminder:
    reminder = models.Reminder(
        user_id=user_id,
        title=payload.title,
        amount=payload.amount,
        due_date=payload.due_date,
        note=(payload.note or "").strip(),
    )
    db.add(reminder)
    db.commit()
    db.refresh(reminder)
    return reminder


def list_reminders(db: Session, *, user_id: uuid.UUID) -> List[models.Reminder]:
    return (
        db.query(models.Reminder)
        .filter(models.Reminder.user_id == user_id)
        .order_by(models.Reminder.due_date.asc(), models.Reminder.created_at.asc())
        .all()
    )


def get_reminder_owned(db: Session, *, reminder_id: uuid.UUID, user_id: uuid.UUID) -> Optional[models.Reminder]:
    return (
        db.query(models.Reminder)
        .filter(models.Reminder.id == reminder_id, models.Reminder.user_id == user_id)
        .first()
    )


def delete_reminder_owned(db: Session, *, reminder_id: uuid.UUID, user_id: uuid.UUID) -> bool:
    reminder = get_reminder_owned(db, reminder_id=reminder_id, user_id=user_id)
    if not reminder:
        return False
    db.delete(reminder)
    db.commit()
    return True
