import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import field_validator

from .base import CamelModel


class ReminderCreate(CamelModel):
    title: str
    due_date: date
    amount: Optional[float] = None
    note: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _validate_title(cls, v: str):
        cleaned = (v or "").strip()
        if not cleaned:
            raise ValueError("Title is required")
        return cleaned


class Reminder(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    amount: Optional[float] = None
    due_date: date
    note: str = ""
    created_at: datetime
