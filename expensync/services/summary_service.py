"""
Budget summary aggregation.

Combines signed-amount totals, per-category spend and category goals into
the dashboard summary payload.
"""
from __future__ import annotations

import uuid
from typing import Dict, Iterable, Optional, Tuple

from sqlalchemy.orm import Session

from expensync.db import schemas
from expensync.db.repositories import category_goals as goals_repo
from expensync.db.repositories import transactions as txn_repo


def budget_used_percent(total_income: float, total_expenses: float) -> float:
    """Share of income already spent, in percent; 0 when there is no income."""
    if total_income <= 0:
        return 0.0
    return round(total_expenses / total_income * 100, 2)


def build_budget_summary(
    total_income: float,
    total_expenses: float,
    spend_by_category: Iterable[Tuple[str, float]],
    goals: Dict[str, float],
) -> schemas.BudgetSummary:
    spent: Dict[str, float] = {category: total for category, total in spend_by_category}
    categories = []
    for category in sorted(set(spent) | set(goals)):
        goal: Optional[float] = goals.get(category)
        categories.append(
            schemas.CategorySpend(category=category, spent=round(spent.get(category, 0.0), 2), goal=goal)
        )
    return schemas.BudgetSummary(
        total_income=round(total_income, 2),
        total_expenses=round(total_expenses, 2),
        balance=round(total_income - total_expenses, 2),
        budget_used=budget_used_percent(total_income, total_expenses),
        categories=categories,
    )


def get_budget_summary(db: Session, *, user_id: uuid.UUID) -> schemas.BudgetSummary:
    _count, income, expense = txn_repo.amount_totals(db, user_id=user_id)
    goals = {g.category: float(g.goal) for g in goals_repo.list_goals(db, user_id=user_id)}
    return build_budget_summary(
        income,
        expense,
        txn_repo.expense_by_category(db, user_id=user_id),
        goals,
    )
