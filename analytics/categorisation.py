"""Category aggregation and the click-to-detail query."""

from __future__ import annotations

import pandas as pd

__all__ = [
    "CATEGORY_COLUMNS",
    "build_category_breakdown",
    "category_details",
    "category_totals",
]

CATEGORY_COLUMNS = ["Category", "Total", "Share", "Rank"]


def category_totals(expenses: pd.DataFrame) -> pd.Series:
    """Return spend per category in first-seen order."""

    if expenses.empty:
        return pd.Series(dtype="int64", name="amount")
    return expenses.groupby("category", sort=False)["amount"].sum()


def build_category_breakdown(expenses: pd.DataFrame) -> pd.DataFrame:
    """Return categories ranked by total spend, largest first.

    Ties keep the order in which categories first appear in ``expenses``.
    """

    if expenses.empty:
        return pd.DataFrame(columns=CATEGORY_COLUMNS)

    totals = category_totals(expenses).sort_values(ascending=False, kind="stable")
    breakdown = totals.reset_index().rename(columns={"category": "Category", "amount": "Total"})

    grand_total = float(breakdown["Total"].sum())
    if grand_total > 0:
        breakdown["Share"] = breakdown["Total"].astype(float) / grand_total
    else:
        breakdown["Share"] = 0.0
    breakdown["Rank"] = range(1, len(breakdown) + 1)
    return breakdown[CATEGORY_COLUMNS]


def category_details(expenses: pd.DataFrame, category: str) -> pd.DataFrame:
    """Return the records of one category sorted by amount, largest first."""

    if expenses.empty:
        return expenses.copy()
    matches = expenses[expenses["category"] == category]
    return matches.sort_values("amount", ascending=False, kind="stable").reset_index(drop=True)
