from typing import List

from .base import CamelModel


class CategoryGoal(CamelModel):
    category: str
    goal: float


class CategoryGoalList(CamelModel):
    category_goals: List[CategoryGoal]
