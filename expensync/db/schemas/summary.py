from typing import List, Optional

from .base import CamelModel


class CategorySpend(CamelModel):
    category: str
    spent: float
    goal: Optional[float] = None


class BudgetSummary(CamelModel):
    total_income: float
    total_expenses: float
    balance: float
    budget_used: float
    categories: List[CategorySpend]
