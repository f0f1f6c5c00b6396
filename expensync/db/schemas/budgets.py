import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from .base import CamelModel


class BudgetCreate(CamelModel):
    category: str
    amount: float = Field(gt=0)
    month: Optional[str] = Field(default=None, pattern=r"^\d{4}-(0[1-9]|1[0-2])$")
    note: Optional[str] = None

    @field_validator("category")
    @classmethod
    def _validate_category(cls, v: str):
        cleaned = (v or "").strip()
        if not cleaned:
            raise ValueError("Category is required")
        return cleaned


class Budget(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    category: str
    amount: float
    month: str
    note: str = ""
    created_at: datetime
