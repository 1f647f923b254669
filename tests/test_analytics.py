"""Unit tests for the period, category, trend, budget and forecast helpers."""

from __future__ import annotations

from datetime import date

import pandas as pd
import pytest

from analytics.budgets import build_budget_comparison
from analytics.categorisation import build_category_breakdown, category_details
from analytics.forecasting import (
    MESSAGE_NO_INCOME,
    MESSAGE_NOT_CURRENT_MONTH,
    MESSAGE_ZERO_SPEND,
    compute_forecast,
    project_month_end,
)
from analytics.periods import available_periods, days_in_month, filter_by_period, total_income
from analytics.savings import build_savings_progress
from analytics.trend import build_daily_trend
from core.ledger import build_ledger, ledger_frame
from core.models import ALL_PERIODS, AppState, Budget, ForecastState, RawEntry, SavingsGoal


@pytest.fixture()
def ledger(sample_state):
    return build_ledger(sample_state)


@pytest.fixture()
def frame(ledger) -> pd.DataFrame:
    return ledger_frame(ledger)


@pytest.fixture()
def february(frame) -> pd.DataFrame:
    return filter_by_period(frame, "2024-02")


def _expenses(*rows: tuple[str, int, str]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "timestamp": pd.to_datetime([row[0] for row in rows], utc=True),
            "amount": [row[1] for row in rows],
            "category": [row[2] for row in rows],
            "type": "debit",
            "description": [f"txn {index}" for index in range(len(rows))],
            "source": "daily",
        }
    )


# Periods


def test_available_periods_newest_first_with_all_sentinel(ledger):
    assert available_periods(ledger) == [ALL_PERIODS, "2024-02", "2024-01"]


def test_available_periods_defaults_to_current_month_when_empty():
    assert available_periods((), today=date(2025, 7, 4)) == [ALL_PERIODS, "2025-07"]


def test_filter_by_period_uses_utc_month_boundaries(frame):
    january = filter_by_period(frame, "2024-01")

    assert sorted(january["description"]) == ["Electricity", "Late coffee"]
    assert len(filter_by_period(frame, ALL_PERIODS)) == len(frame)
    assert filter_by_period(frame, "2023-12").empty


def test_filter_by_period_assigns_offset_timestamps_by_utc_date():
    state = AppState(daily_expenses=(RawEntry("2024-01-31T23:30:00-02:00", 1_000, None, "offset", "X"),))
    frame = ledger_frame(build_ledger(state))

    assert len(filter_by_period(frame, "2024-02")) == 1
    assert filter_by_period(frame, "2024-01").empty


def test_total_income_sums_credits_for_the_month(sample_state):
    assert total_income(sample_state.fund_history, "2024-02") == 5_000_000
    assert total_income(sample_state.fund_history, "2024-01") == 4_000_000
    assert total_income(sample_state.fund_history, "2023-11") == 0


def test_total_income_is_zero_for_all_time(sample_state):
    assert total_income(sample_state.fund_history, ALL_PERIODS) == 0


@pytest.mark.parametrize(
    ("period_key", "expected"),
    [
        ("2023-01", 31),
        ("2023-02", 28),
        ("2024-02", 29),
        ("2100-02", 28),
        ("2000-02", 29),
        ("2023-04", 30),
        ("2023-12", 31),
    ],
)
def test_days_in_month_follows_calendar_rules(period_key, expected):
    assert days_in_month(period_key) == expected


# Categories


def test_category_breakdown_ranks_descending(february):
    breakdown = build_category_breakdown(february)

    assert breakdown["Category"].tolist() == [
        "general expense",
        "Groceries",
        "uncategorized",
        "Coffee",
        "daily",
    ]
    assert breakdown["Total"].tolist() == [1_000_000, 500_000, 50_000, 30_000, 20_000]
    assert breakdown["Rank"].tolist() == [1, 2, 3, 4, 5]
    assert breakdown["Share"].sum() == pytest.approx(1.0)


@pytest.mark.parametrize("period_key", ["2024-01", "2024-02", ALL_PERIODS])
def test_category_totals_conserve_spend(frame, period_key):
    expenses = filter_by_period(frame, period_key)
    breakdown = build_category_breakdown(expenses)

    assert breakdown["Total"].sum() == expenses["amount"].sum()


def test_category_breakdown_keeps_first_seen_order_for_ties():
    expenses = _expenses(
        ("2024-02-01", 100, "Books"),
        ("2024-02-02", 100, "Games"),
        ("2024-02-03", 300, "Rent"),
    )

    assert build_category_breakdown(expenses)["Category"].tolist() == ["Rent", "Books", "Games"]


def test_category_breakdown_empty_input():
    breakdown = build_category_breakdown(ledger_frame(()))

    assert breakdown.empty
    assert list(breakdown.columns) == ["Category", "Total", "Share", "Rank"]


def test_category_details_sorted_by_amount(february):
    details = category_details(february, "Groceries")

    assert details["description"].tolist() == ["Supermarket", "Market"]
    assert details["amount"].tolist() == [400_000, 100_000]


def test_category_details_unknown_category_is_empty(february):
    assert category_details(february, "Holidays").empty
    assert category_details(ledger_frame(()), "Holidays").empty


# Daily trend


def test_daily_trend_is_gap_filled(february):
    trend = build_daily_trend(february, "2024-02")

    assert len(trend) == 29
    assert trend["Day"].tolist() == list(range(1, 30))
    totals = dict(zip(trend["Day"], trend["Total"]))
    assert totals[2] == 400_000
    assert totals[3] == 50_000
    assert totals[5] == 1_000_000
    assert totals[10] == 130_000
    assert totals[11] == 20_000
    assert totals[1] == 0
    assert totals[29] == 0
    assert trend["Total"].sum() == february["amount"].sum()
    assert trend["Date"].iloc[0] == pd.Timestamp("2024-02-01")


@pytest.mark.parametrize("year", [2023, 2024])
@pytest.mark.parametrize("month", range(1, 13))
def test_daily_trend_length_matches_month(year, month):
    period_key = f"{year}-{month:02d}"
    trend = build_daily_trend(ledger_frame(()), period_key)

    assert len(trend) == days_in_month(period_key)
    assert (trend["Total"] == 0).all()


def test_daily_trend_is_empty_for_all_time(frame):
    trend = build_daily_trend(frame, ALL_PERIODS)

    assert trend.empty


# Budgets


def test_budget_comparison_left_joins_in_budget_order(february, sample_state):
    comparison = build_budget_comparison(february, sample_state.budgets)

    assert comparison["Budget"].tolist() == ["Groceries", "Transport"]
    assert comparison["Allocated"].tolist() == [2_000_000, 500_000]
    assert comparison["Actual"].tolist() == [500_000, 0]
    assert comparison["Remaining"].tolist() == [1_500_000, 500_000]
    assert comparison["Utilisation"].iloc[0] == pytest.approx(0.25)


def test_budget_comparison_keeps_every_budget_without_spend():
    budgets = (
        Budget("Zeta", 100),
        Budget("Alpha", 300),
        Budget("Empty", 0),
    )

    comparison = build_budget_comparison(ledger_frame(()), budgets)

    assert len(comparison) == len(budgets)
    assert comparison["Budget"].tolist() == ["Zeta", "Alpha", "Empty"]
    assert comparison["Actual"].tolist() == [0, 0, 0]
    assert pd.isna(comparison["Utilisation"].iloc[2])


# Forecast


def test_project_month_end_surplus():
    forecast = project_month_end(1_000_000, 300_000, 10, 30)

    assert forecast.state is ForecastState.COMPUTED
    assert forecast.daily_rate == pytest.approx(30_000)
    assert forecast.projected_total == pytest.approx(900_000)
    assert forecast.delta == pytest.approx(100_000)
    assert not forecast.is_deficit
    assert forecast.gap == pytest.approx(100_000)


def test_project_month_end_deficit():
    forecast = project_month_end(1_000_000, 600_000, 10, 30)

    assert forecast.projected_total == pytest.approx(1_800_000)
    assert forecast.delta == pytest.approx(-800_000)
    assert forecast.is_deficit
    assert forecast.gap == pytest.approx(800_000)


def test_compute_forecast_current_month(february, today):
    forecast = compute_forecast(february, 5_000_000, "2024-02", today)

    assert forecast.state is ForecastState.COMPUTED
    assert forecast.days_elapsed == 20
    assert forecast.days_in_month == 29
    assert forecast.total_spend == 1_600_000
    assert forecast.daily_rate == pytest.approx(80_000)
    assert forecast.projected_total == pytest.approx(2_320_000)
    assert forecast.delta == pytest.approx(2_680_000)


def test_compute_forecast_all_time_is_none(frame, today):
    assert compute_forecast(frame, 0, ALL_PERIODS, today) is None


def test_compute_forecast_other_month_is_informational(frame, today):
    january = filter_by_period(frame, "2024-01")

    forecast = compute_forecast(january, 4_000_000, "2024-01", today)

    assert forecast.state is ForecastState.NOT_CURRENT_MONTH
    assert forecast.message == MESSAGE_NOT_CURRENT_MONTH
    assert forecast.projected_total == 0


def test_compute_forecast_requires_income(february, today):
    forecast = compute_forecast(february, 0, "2024-02", today)

    assert forecast.state is ForecastState.NO_INCOME
    assert forecast.message == MESSAGE_NO_INCOME


def test_compute_forecast_zero_spend(today):
    forecast = compute_forecast(ledger_frame(()), 5_000_000, "2024-02", today)

    assert forecast.state is ForecastState.ZERO_SPEND
    assert forecast.message == MESSAGE_ZERO_SPEND


def test_compute_forecast_end_of_december():
    expenses = _expenses(("2024-12-05", 310_000, "Gifts"))

    forecast = compute_forecast(expenses, 1_000_000, "2024-12", date(2024, 12, 31))

    assert forecast.days_elapsed == 31
    assert forecast.days_in_month == 31
    assert forecast.projected_total == pytest.approx(310_000)


def test_compute_forecast_leap_february_first_day():
    expenses = _expenses(("2024-02-01T05:00:00Z", 29_000, "Food"))

    forecast = compute_forecast(expenses, 100_000, "2024-02", pd.Timestamp("2024-02-01T23:00:00Z"))

    assert forecast.days_elapsed == 1
    assert forecast.days_in_month == 29
    assert forecast.projected_total == pytest.approx(841_000)
    assert forecast.is_deficit


# Savings


def test_savings_progress_rows():
    rows = build_savings_progress(
        (
            SavingsGoal("Emergency fund", 10_000_000, 2_500_000),
            SavingsGoal("Overshoot", 100, 150),
            SavingsGoal("Laptop", 0, 0, is_completed=True),
        )
    )

    assert [row["percentage"] for row in rows] == pytest.approx([25.0, 150.0, 100.0])
    assert [row["width"] for row in rows] == [25, 100, 100]
    assert [row["completed"] for row in rows] == [False, False, True]
