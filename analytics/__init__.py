"""Analytics helpers shared across Dompet services."""

from analytics.budgets import BUDGET_COLUMNS, build_budget_comparison
from analytics.categorisation import (
    CATEGORY_COLUMNS,
    build_category_breakdown,
    category_details,
    category_totals,
)
from analytics.forecasting import compute_forecast, project_month_end
from analytics.periods import (
    available_periods,
    current_period_key,
    days_in_month,
    filter_by_period,
    is_current_period,
    period_key_for,
    resolve_today,
    total_income,
)
from analytics.savings import build_savings_progress, goal_percentage
from analytics.trend import TREND_COLUMNS, build_daily_trend

__all__ = [
    "BUDGET_COLUMNS",
    "CATEGORY_COLUMNS",
    "TREND_COLUMNS",
    "available_periods",
    "build_budget_comparison",
    "build_category_breakdown",
    "build_daily_trend",
    "build_savings_progress",
    "category_details",
    "category_totals",
    "compute_forecast",
    "current_period_key",
    "days_in_month",
    "filter_by_period",
    "goal_percentage",
    "is_current_period",
    "period_key_for",
    "project_month_end",
    "resolve_today",
    "total_income",
]
