"""Budget-versus-actual comparison."""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from analytics.categorisation import category_totals
from core.models import Budget

__all__ = ["BUDGET_COLUMNS", "build_budget_comparison"]

BUDGET_COLUMNS = ["Budget", "Allocated", "Actual", "Remaining", "Utilisation"]


def build_budget_comparison(expenses: pd.DataFrame, budgets: Iterable[Budget]) -> pd.DataFrame:
    """Left-join every budget onto the spend of the category sharing its name.

    Rows follow the order of ``budgets``; budgets without matching spend
    report an actual of 0.
    """

    totals = category_totals(expenses)
    rows: list[dict[str, object]] = []
    for budget in budgets:
        allocated = int(budget.total_budget)
        actual = int(totals.get(budget.name, 0))
        rows.append(
            {
                "Budget": budget.name,
                "Allocated": allocated,
                "Actual": actual,
                "Remaining": allocated - actual,
                "Utilisation": actual / allocated if allocated > 0 else None,
            }
        )
    return pd.DataFrame(rows, columns=BUDGET_COLUMNS)
