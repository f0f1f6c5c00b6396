"""
Domain-split SQLAlchemy models.

Exposes `Base`, `now_utc`, and all ORM classes.
"""

from .base import Base, now_utc  # re-export

from .users import User
from .tokens import RefreshToken
from .transactions import Transaction, DEFAULT_CATEGORY
from .budgets import Budget
from .debts import Debt
from .category_goals import CategoryGoal
from .reminders import Reminder

__all__ = [
    "Base",
    "now_utc",
    "User",
    "RefreshToken",
    "Transaction",
    "DEFAULT_CATEGORY",
    "Budget",
    "Debt",
    "CategoryGoal",
    "Reminder",
]
