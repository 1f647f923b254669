"""Savings goal progress rows."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from core.models import SavingsGoal, SavingsProgressRow

__all__ = ["build_savings_progress", "goal_percentage"]


def goal_percentage(goal: SavingsGoal) -> float:
    """Return saved/target as a percentage; a zero target counts as done."""

    if goal.target_amount <= 0:
        return 100.0
    return goal.saved_amount / goal.target_amount * 100


def build_savings_progress(goals: Iterable[SavingsGoal]) -> list[SavingsProgressRow]:
    rows: list[SavingsProgressRow] = []
    for goal in goals:
        percentage = goal_percentage(goal)
        rows.append(
            {
                "name": goal.name,
                "saved": int(goal.saved_amount),
                "target": int(goal.target_amount),
                "percentage": percentage,
                "width": int(np.clip(round(percentage), 0, 100)),
                "completed": bool(goal.is_completed),
            }
        )
    return rows
