"""Gap-filled daily spend series for a single month."""

from __future__ import annotations

import pandas as pd

from analytics.periods import days_in_month
from core.models import ALL_PERIODS

__all__ = ["TREND_COLUMNS", "build_daily_trend"]

TREND_COLUMNS = ["Day", "Date", "Total"]


def build_daily_trend(expenses: pd.DataFrame, period_key: str) -> pd.DataFrame:
    """Return one row per calendar day of ``period_key`` with the spend total.

    Days without transactions, including days still ahead in the current
    month, are present with a total of 0. ``"all"`` has no daily shape and
    yields an empty frame.
    """

    if period_key == ALL_PERIODS:
        return pd.DataFrame(columns=TREND_COLUMNS)

    month_days = days_in_month(period_key)
    index = pd.RangeIndex(1, month_days + 1, name="Day")

    if expenses.empty:
        totals = pd.Series(0, index=index, dtype="int64")
    else:
        day_of_month = expenses["timestamp"].dt.tz_convert("UTC").dt.day
        totals = (
            expenses.groupby(day_of_month)["amount"].sum().reindex(index, fill_value=0).astype("int64")
        )

    trend = totals.rename_axis("Day").rename("Total").reset_index()
    month_start = pd.Period(period_key, freq="M").to_timestamp(how="start")
    trend["Date"] = month_start + pd.to_timedelta(trend["Day"] - 1, unit="D")
    return trend[TREND_COLUMNS]
