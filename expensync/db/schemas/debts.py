import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import Field, field_validator

from .base import CamelModel


class DebtCreate(CamelModel):
    title: str
    lender: Optional[str] = None
    amount: float = Field(gt=0)
    interest_rate: float = Field(default=0.0, ge=0)
    due_date: Optional[date] = None
    note: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _validate_title(cls, v: str):
        cleaned = (v or "").strip()
        if not cleaned:
            raise ValueError("Title is required")
        return cleaned


class Debt(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    lender: str = ""
    amount: float
    interest_rate: float
    due_date: Optional[date] = None
    note: str = ""
    created_at: datetime
