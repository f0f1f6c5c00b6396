import uuid
from datetime import datetime
from typing import List, Optional

from .base import CamelModel


class TransactionCreate(CamelModel):
    # title/amount presence is checked by the endpoint so it can answer 400
    title: Optional[str] = None
    amount: Optional[float] = None
    category: Optional[str] = None
    note: Optional[str] = None
    tags: Optional[List[str]] = None
    date: Optional[datetime] = None


class Transaction(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    amount: float
    category: str
    note: str = ""
    tags: List[str] = []
    date: datetime
    created_at: datetime


class TransactionPage(CamelModel):
    transactions: List[Transaction]
    current_page: int
    total_pages: int
    has_more: bool
    total_items: int


class TransactionSummary(CamelModel):
    total_transactions: int
    income: float
    expense: float
    net: float


class TransactionDeleteResponse(CamelModel):
    message: str
    transactions: List[Transaction]
