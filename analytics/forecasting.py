"""Month-end spend projection for the current month."""

from __future__ import annotations

from datetime import date
from typing import Optional

import pandas as pd

from analytics.periods import days_in_month, is_current_period, resolve_today
from core.models import ALL_PERIODS, ForecastResult, ForecastState

__all__ = [
    "MESSAGE_NO_INCOME",
    "MESSAGE_NOT_CURRENT_MONTH",
    "MESSAGE_ZERO_SPEND",
    "compute_forecast",
    "project_month_end",
]

MESSAGE_NOT_CURRENT_MONTH = "Forecast only available for the current month."
MESSAGE_NO_INCOME = "Add income this month to see a forecast."
MESSAGE_ZERO_SPEND = "No spending yet. You're on track to save!"


def project_month_end(
    total_income: int,
    total_spend: int,
    days_elapsed: int,
    month_days: int,
) -> ForecastResult:
    """Extrapolate the spend-so-far daily rate across the whole month."""

    days_elapsed = max(int(days_elapsed), 1)
    daily_rate = total_spend / days_elapsed
    projected_total = daily_rate * month_days
    return ForecastResult(
        state=ForecastState.COMPUTED,
        total_income=total_income,
        total_spend=total_spend,
        days_elapsed=days_elapsed,
        days_in_month=month_days,
        daily_rate=daily_rate,
        projected_total=projected_total,
        delta=total_income - projected_total,
    )


def compute_forecast(
    expenses: pd.DataFrame,
    total_income: int,
    period_key: str,
    today: Optional[date | pd.Timestamp] = None,
) -> ForecastResult | None:
    """Return the forecast state for ``period_key``.

    ``None`` means no forecast applies (the all-time view). Months other than
    the current one, and the current month without income, report a fixed
    informational message instead of numbers.
    """

    if period_key == ALL_PERIODS:
        return None

    now = resolve_today(today)
    if not is_current_period(period_key, now):
        return ForecastResult(ForecastState.NOT_CURRENT_MONTH, MESSAGE_NOT_CURRENT_MONTH)
    if total_income == 0:
        return ForecastResult(ForecastState.NO_INCOME, MESSAGE_NO_INCOME)

    total_spend = int(expenses["amount"].sum()) if not expenses.empty else 0
    if total_spend == 0:
        return ForecastResult(
            ForecastState.ZERO_SPEND,
            MESSAGE_ZERO_SPEND,
            total_income=total_income,
            days_elapsed=now.day,
            days_in_month=days_in_month(period_key),
        )

    return project_month_end(total_income, total_spend, now.day, days_in_month(period_key))
