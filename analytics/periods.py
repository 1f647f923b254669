"""Period selection helpers shared by every dashboard panel.

Periods are ``YYYY-MM`` keys computed in UTC, or the ``"all"`` sentinel.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

import pandas as pd

from core.ledger import coerce_amount, coerce_timestamp
from core.models import ALL_PERIODS, RawEntry, TransactionRecord, TransactionType

__all__ = [
    "available_periods",
    "current_period_key",
    "days_in_month",
    "filter_by_period",
    "is_current_period",
    "period_key_for",
    "resolve_today",
    "total_income",
]


def resolve_today(today: Optional[date | pd.Timestamp] = None) -> pd.Timestamp:
    """Return "now" as a UTC timestamp, defaulting to the wall clock."""

    if today is None:
        return pd.Timestamp.now(tz="UTC")
    stamp = pd.Timestamp(today)
    if stamp.tzinfo is None:
        return stamp.tz_localize("UTC")
    return stamp.tz_convert("UTC")


def period_key_for(stamp: pd.Timestamp) -> str:
    return stamp.tz_convert("UTC").strftime("%Y-%m") if stamp.tzinfo else stamp.strftime("%Y-%m")


def current_period_key(today: Optional[date | pd.Timestamp] = None) -> str:
    return period_key_for(resolve_today(today))


def is_current_period(period_key: str, today: Optional[date | pd.Timestamp] = None) -> bool:
    return period_key != ALL_PERIODS and period_key == current_period_key(today)


def days_in_month(period_key: str) -> int:
    """Return the number of calendar days in the ``YYYY-MM`` month."""

    return int(pd.Period(period_key, freq="M").days_in_month)


def available_periods(
    ledger: Iterable[TransactionRecord],
    today: Optional[date | pd.Timestamp] = None,
) -> list[str]:
    """Return ``["all", newest month, ..., oldest month]`` for the ledger.

    An empty ledger still offers the current month so there is always one
    concrete period to select.
    """

    keys = {period_key_for(record.timestamp) for record in ledger}
    if not keys:
        keys.add(current_period_key(today))
    return [ALL_PERIODS, *sorted(keys, reverse=True)]


def filter_by_period(frame: pd.DataFrame, period_key: str) -> pd.DataFrame:
    """Return the rows of a ledger frame that fall inside ``period_key``."""

    if period_key == ALL_PERIODS:
        return frame.copy()
    if frame.empty:
        return frame.copy()
    keys = frame["timestamp"].dt.tz_convert("UTC").dt.strftime("%Y-%m")
    return frame[keys == period_key].copy()


def total_income(fund_history: Iterable[RawEntry], period_key: str) -> int:
    """Sum credit entries of the fund history within a concrete month.

    Income is only reported for a concrete month; ``"all"`` yields 0.
    """

    if period_key == ALL_PERIODS:
        return 0

    total = 0
    for entry in fund_history:
        if TransactionType.parse(entry.type) is not TransactionType.CREDIT:
            continue
        stamp = coerce_timestamp(entry.timestamp)
        if stamp is None or period_key_for(stamp) != period_key:
            continue
        total += coerce_amount(entry.amount)
    return total
