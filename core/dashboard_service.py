"""Core logic for assembling Dompet dashboard views for one period."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from typing import Final, Optional

import pandas as pd

from analytics.budgets import build_budget_comparison
from analytics.categorisation import build_category_breakdown, category_details
from analytics.forecasting import compute_forecast
from analytics.periods import (
    available_periods,
    current_period_key,
    filter_by_period,
    total_income,
)
from analytics.savings import build_savings_progress
from analytics.trend import build_daily_trend
from core.formatting import format_period_label
from core.ledger import build_ledger, ledger_frame
from core.models import ALL_PERIODS, AppState, DashboardData, TransactionRecord

__all__ = [
    "PeriodViews",
    "clear_view_cache",
    "prepare_dashboard_data",
    "resolve_period_key",
    "select_category",
]

logger = logging.getLogger(__name__)

_CACHE_SIZE: Final[int] = 32


@dataclass(frozen=True)
class PeriodViews:
    expenses: pd.DataFrame
    categories: pd.DataFrame
    trend: pd.DataFrame
    budgets: pd.DataFrame
    total_spend: int
    total_income: int


def _derive_ledger(state: AppState) -> tuple[tuple[TransactionRecord, ...], pd.DataFrame]:
    ledger = build_ledger(state)
    return ledger, ledger_frame(ledger)


def _derive_views(state: AppState, frame: pd.DataFrame, period_key: str) -> PeriodViews:
    expenses = filter_by_period(frame, period_key)
    return PeriodViews(
        expenses=expenses,
        categories=build_category_breakdown(expenses),
        trend=build_daily_trend(expenses, period_key),
        budgets=build_budget_comparison(expenses, state.budgets),
        total_spend=int(expenses["amount"].sum()) if not expenses.empty else 0,
        total_income=total_income(state.fund_history, period_key),
    )


@lru_cache(maxsize=_CACHE_SIZE)
def _normalized_ledger(state: AppState) -> tuple[tuple[TransactionRecord, ...], pd.DataFrame]:
    return _derive_ledger(state)


@lru_cache(maxsize=_CACHE_SIZE)
def _period_views(state: AppState, period_key: str) -> PeriodViews:
    """Derive every period-scoped view.

    Keyed by value on ``(state, period_key)``: any change to the snapshot is a
    new key, so cached output never outlives the state it came from. The
    frames held here are shared between calls and must not be mutated.
    """

    _, frame = _normalized_ledger(state)
    return _derive_views(state, frame, period_key)


def _is_hashable(state: AppState) -> bool:
    try:
        hash(state)
    except TypeError:
        return False
    return True


def clear_view_cache() -> None:
    _normalized_ledger.cache_clear()
    _period_views.cache_clear()


def resolve_period_key(
    requested: Optional[str],
    options: list[str],
    today: Optional[date | pd.Timestamp] = None,
) -> str:
    """Return ``requested`` if selectable, else the current or latest month."""

    if requested in options:
        return str(requested)
    current = current_period_key(today)
    if current in options:
        return current
    concrete = [key for key in options if key != ALL_PERIODS]
    return concrete[0] if concrete else ALL_PERIODS


def prepare_dashboard_data(
    state: AppState,
    period_key: Optional[str] = None,
    today: Optional[date | pd.Timestamp] = None,
) -> DashboardData:
    """Derive every dashboard panel for one period.

    Returned frames are copies, so callers may modify them freely.
    """

    cacheable = _is_hashable(state)
    if not cacheable:
        logger.debug("State snapshot is not hashable; deriving views without the cache")

    ledger, frame = _normalized_ledger(state) if cacheable else _derive_ledger(state)
    options = available_periods(ledger, today)
    selected = resolve_period_key(period_key, options, today)
    views = _period_views(state, selected) if cacheable else _derive_views(state, frame, selected)
    forecast = compute_forecast(views.expenses, views.total_income, selected, today)

    return {
        "period_key": selected,
        "period_label": format_period_label(selected),
        "period_options": options,
        "expenses_df": views.expenses.copy(),
        "category_df": views.categories.copy(),
        "trend_df": views.trend.copy(),
        "budget_df": views.budgets.copy(),
        "total_spend": views.total_spend,
        "total_income": views.total_income,
        "forecast": forecast,
        "savings_rows": build_savings_progress(state.savings_goals),
    }


def select_category(data: DashboardData, category: str) -> pd.DataFrame:
    """Return the filtered records for a clicked category."""

    return category_details(data["expenses_df"], category)
