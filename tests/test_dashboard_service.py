from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from core.dashboard_service import prepare_dashboard_data, resolve_period_key, select_category
from core.models import ALL_PERIODS, AppState, ForecastState, RawEntry


def test_prepare_dashboard_data_for_current_month(sample_state, today):
    data = prepare_dashboard_data(sample_state, "2024-02", today=today)

    assert data["period_key"] == "2024-02"
    assert data["period_label"] == "February 2024"
    assert data["period_options"] == [ALL_PERIODS, "2024-02", "2024-01"]
    assert data["total_spend"] == 1_600_000
    assert data["total_income"] == 5_000_000
    assert len(data["trend_df"]) == 29
    assert data["budget_df"]["Actual"].tolist() == [500_000, 0]
    assert data["category_df"]["Total"].sum() == data["total_spend"]

    forecast = data["forecast"]
    assert forecast.state is ForecastState.COMPUTED
    assert forecast.delta == pytest.approx(2_680_000)
    assert [row["name"] for row in data["savings_rows"]] == ["Emergency fund", "Laptop"]


def test_prepare_dashboard_data_all_time(sample_state, today):
    data = prepare_dashboard_data(sample_state, ALL_PERIODS, today=today)

    assert data["period_label"] == "All time"
    assert data["total_spend"] == 1_910_000
    assert data["total_income"] == 0
    assert data["trend_df"].empty
    assert data["forecast"] is None


def test_prepare_dashboard_data_past_month_has_no_projection(sample_state, today):
    data = prepare_dashboard_data(sample_state, "2024-01", today=today)

    assert data["total_spend"] == 310_000
    assert data["forecast"].state is ForecastState.NOT_CURRENT_MONTH


def test_unknown_period_falls_back_to_current_month(sample_state, today):
    data = prepare_dashboard_data(sample_state, "1999-01", today=today)

    assert data["period_key"] == "2024-02"


def test_missing_current_month_falls_back_to_latest(sample_state):
    data = prepare_dashboard_data(sample_state, None, today=date(2024, 6, 1))

    assert data["period_key"] == "2024-02"
    assert data["forecast"].state is ForecastState.NOT_CURRENT_MONTH


def test_resolve_period_key_without_concrete_months():
    assert resolve_period_key(None, [ALL_PERIODS], today=date(2024, 6, 1)) == ALL_PERIODS
    assert resolve_period_key("2024-06", [ALL_PERIODS, "2024-06"]) == "2024-06"


def test_empty_state_offers_the_current_month():
    data = prepare_dashboard_data(AppState(), today=date(2024, 3, 5))

    assert data["period_options"] == [ALL_PERIODS, "2024-03"]
    assert data["period_key"] == "2024-03"
    assert data["total_spend"] == 0
    assert data["category_df"].empty
    assert data["budget_df"].empty
    assert data["forecast"].state is ForecastState.NO_INCOME


def test_changed_state_is_never_served_from_cache(sample_state, today):
    before = prepare_dashboard_data(sample_state, "2024-02", today=today)

    updated = replace(
        sample_state,
        daily_expenses=sample_state.daily_expenses
        + (RawEntry("2024-02-19T08:00:00Z", 70_000, None, "Taxi", "Transport"),),
    )
    after = prepare_dashboard_data(updated, "2024-02", today=today)

    assert before["total_spend"] == 1_600_000
    assert after["total_spend"] == 1_670_000
    assert after["budget_df"]["Actual"].tolist() == [500_000, 70_000]
    assert after["forecast"].total_spend == 1_670_000


def test_forecast_follows_the_clock_for_the_same_state(sample_state):
    early = prepare_dashboard_data(sample_state, "2024-02", today=date(2024, 2, 10))
    late = prepare_dashboard_data(sample_state, "2024-02", today=date(2024, 2, 20))

    assert early["forecast"].days_elapsed == 10
    assert late["forecast"].days_elapsed == 20
    assert early["forecast"].projected_total > late["forecast"].projected_total


def test_select_category_returns_sorted_records(sample_state, today):
    data = prepare_dashboard_data(sample_state, "2024-02", today=today)

    details = select_category(data, "Groceries")

    assert details["description"].tolist() == ["Supermarket", "Market"]
    assert select_category(data, "Holidays").empty


def test_oversized_amount_does_not_break_the_dashboard(today):
    state = AppState(
        daily_expenses=(
            RawEntry("2024-02-01T08:00:00Z", 1e20, None, "corrupt", "X"),
            RawEntry("2024-02-02T08:00:00Z", 25_000, None, "Snack", "X"),
        )
    )

    data = prepare_dashboard_data(state, "2024-02", today=today)

    assert data["total_spend"] == 25_000


def test_unhashable_snapshot_is_derived_without_cache(today):
    state = AppState(
        daily_expenses=(
            RawEntry("2024-02-01T08:00:00Z", {"v": 1}, None, "nested amount", "X"),
            RawEntry("2024-02-02T08:00:00Z", 25_000, None, "Snack", "X"),
        )
    )

    data = prepare_dashboard_data(state, "2024-02", today=today)

    assert data["total_spend"] == 25_000
    assert data["category_df"]["Category"].tolist() == ["X"]


def test_returned_frames_do_not_leak_into_the_cache(sample_state, today):
    first = prepare_dashboard_data(sample_state, "2024-02", today=today)
    first["category_df"].loc[:, "Total"] = 0
    first["expenses_df"].drop(first["expenses_df"].index, inplace=True)

    second = prepare_dashboard_data(sample_state, "2024-02", today=today)

    assert second["category_df"]["Total"].sum() == 1_600_000
    assert len(second["expenses_df"]) == 6
