"""
Dashboard overview: one call that gathers what the home screen shows.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from expensync.client.api import ApiClient

logger = logging.getLogger(__name__)


@dataclass
class GoalProgress:
    category: str
    goal: float
    spent: float

    @property
    def percent(self) -> float:
        if self.goal <= 0:
            return 0.0
        return round(self.spent / self.goal * 100, 2)

    @property
    def over_goal(self) -> bool:
        return self.spent > self.goal


@dataclass
class DashboardOverview:
    total_income: float = 0.0
    total_expenses: float = 0.0
    balance: float = 0.0
    budget_used: float = 0.0
    goals: List[GoalProgress] = field(default_factory=list)
    transactions: List[Dict[str, Any]] = field(default_factory=list)
    debts: List[Dict[str, Any]] = field(default_factory=list)


def spent_by_category(transactions: Iterable[Dict[str, Any]]) -> Dict[str, float]:
    """Absolute expense per category; income rows are ignored."""
    totals: Dict[str, float] = defaultdict(float)
    for txn in transactions:
        amount = float(txn.get("amount") or 0)
        if amount < 0:
            totals[txn.get("category") or "Others"] += abs(amount)
    return dict(totals)


def merge_goals(goals: Iterable[Dict[str, Any]], spent: Dict[str, float]) -> List[GoalProgress]:
    return [
        GoalProgress(
            category=g["category"],
            goal=float(g.get("goal") or 0),
            spent=round(spent.get(g["category"], 0.0), 2),
        )
        for g in goals
    ]


def load_dashboard(client: ApiClient, page_size: int = 10) -> DashboardOverview:
    summary = client.fetch_budget_summary() or {}
    page = client.get_transactions(page=1, limit=page_size) or {}
    goals = (client.fetch_category_goals() or {}).get("categoryGoals") or []
    debts = client.fetch_debts() or []

    transactions = list(page.get("transactions") or [])
    overview = DashboardOverview(
        total_income=float(summary.get("totalIncome") or 0),
        total_expenses=float(summary.get("totalExpenses") or 0),
        balance=float(summary.get("balance") or 0),
        budget_used=float(summary.get("budgetUsed") or 0),
        goals=merge_goals(goals, spent_by_category(transactions)),
        transactions=transactions,
        debts=list(debts),
    )
    logger.debug(
        "dashboard_loaded: transactions=%d goals=%d debts=%d",
        len(overview.transactions),
        len(overview.goals),
        len(overview.debts),
    )
    return overview
