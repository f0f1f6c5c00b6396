"""
Domain-split Pydantic schemas.

Wire names are camelCase (see `CamelModel`); Python attributes stay snake_case.
"""

from .base import CamelModel, MessageResponse
from .users import User
from .auth import (
    normalize_email,
    SignupRequest,
    LoginRequest,
    RefreshRequest,
    SignupResponse,
    LoginResponse,
    AccessTokenResponse,
)
from .transactions import (
    TransactionCreate,
    Transaction,
    TransactionPage,
    TransactionSummary,
    TransactionDeleteResponse,
)
from .budgets import BudgetCreate, Budget
from .debts import DebtCreate, Debt
from .category_goals import CategoryGoal, CategoryGoalList
from .reminders import ReminderCreate, Reminder
from .summary import CategorySpend, BudgetSummary

__all__ = [
    "CamelModel",
    "MessageResponse",
    "User",
    "normalize_email",
    "SignupRequest",
    "LoginRequest",
    "RefreshRequest",
    "SignupResponse",
    "LoginResponse",
    "AccessTokenResponse",
    "TransactionCreate",
    "Transaction",
    "TransactionPage",
    "TransactionSummary",
    "TransactionDeleteResponse",
    "BudgetCreate",
    "Budget",
    "DebtCreate",
    "Debt",
    "CategoryGoal",
    "CategoryGoalList",
    "ReminderCreate",
    "Reminder",
    "CategorySpend",
    "BudgetSummary",
]
