"""Synthetic Dompet application state for demos and development.

Produces a few months of rupiah-denominated activity in the shape the state
store exports: closed-month archives, a general fund with salary credits,
budgets with their own spend history, ad-hoc daily expenses and savings goals.
"""

from __future__ import annotations

import argparse
import json
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from core.data_loader import state_to_dict
from core.models import AppState, ArchiveBatch, Budget, RawEntry, SavingsGoal

DEFAULT_SEED = 7


@dataclass(frozen=True)
class SpendProfile:
    """A recurring kind of expense and its typical size in rupiah."""

    description: str
    category: str
    low: int
    high: int
    per_month: int


BUDGET_PROFILES: tuple[tuple[str, int, Sequence[SpendProfile]], ...] = (
    (
        "Groceries",
        2_500_000,
        (
            SpendProfile("Supermarket run", "Groceries", 150_000, 450_000, 5),
            SpendProfile("Morning market", "Groceries", 40_000, 120_000, 6),
        ),
    ),
    (
        "Transport",
        900_000,
        (
            SpendProfile("Ride hailing", "Transport", 15_000, 60_000, 12),
            SpendProfile("Fuel", "Transport", 100_000, 200_000, 2),
        ),
    ),
    (
        "Entertainment",
        600_000,
        (
            SpendProfile("Cinema", "Entertainment", 50_000, 120_000, 2),
            SpendProfile("Streaming subscription", "Entertainment", 54_000, 54_000, 1),
        ),
    ),
)

ARCHIVE_PROFILES: tuple[SpendProfile, ...] = (
    SpendProfile("Electricity token", "Utilities", 200_000, 350_000, 1),
    SpendProfile("Mobile data", "Utilities", 75_000, 150_000, 1),
    SpendProfile("Pharmacy", "Health", 30_000, 180_000, 2),
)

DAILY_PROFILES: tuple[SpendProfile, ...] = (
    SpendProfile("Coffee", "Coffee", 18_000, 45_000, 10),
    SpendProfile("Lunch", "", 20_000, 60_000, 14),
)

FUND_DEBITS: tuple[SpendProfile, ...] = (
    SpendProfile("Rent transfer", "", 2_000_000, 2_000_000, 1),
    SpendProfile("Family support", "", 300_000, 700_000, 1),
)

MONTHLY_SALARY = 8_500_000


def _epoch_ms(stamp: pd.Timestamp) -> int:
    return int(stamp.value // 1_000_000)


def _random_instants(
    rng: np.random.Generator,
    month_start: pd.Timestamp,
    last_day: pd.Timestamp,
    count: int,
) -> list[pd.Timestamp]:
    span_days = int((last_day - month_start).days) + 1
    days = rng.integers(0, span_days, size=count)
    minutes = rng.integers(7 * 60, 22 * 60, size=count)
    return [
        month_start + pd.Timedelta(days=int(day), minutes=int(minute))
        for day, minute in zip(days, minutes)
    ]


def _entries(
    rng: np.random.Generator,
    profiles: Sequence[SpendProfile],
    month_start: pd.Timestamp,
    last_day: pd.Timestamp,
    txn_type: Optional[str],
    with_category: bool,
) -> list[RawEntry]:
    entries: list[RawEntry] = []
    for profile in profiles:
        for instant in _random_instants(rng, month_start, last_day, profile.per_month):
            amount = int(rng.integers(profile.low, profile.high + 1) // 1_000 * 1_000)
            entries.append(
                RawEntry(
                    timestamp=_epoch_ms(instant),
                    amount=amount,
                    type=txn_type,
                    description=profile.description,
                    category=(profile.category or None) if with_category else None,
                )
            )
    return entries


def generate_app_state(
    months: int = 3,
    today: Optional[date] = None,
    seed: int = DEFAULT_SEED,
) -> AppState:
    """Return ``months`` months of activity ending on ``today`` (UTC)."""

    rng = np.random.default_rng(seed)
    now = pd.Timestamp(today or pd.Timestamp.now(tz="UTC").date()).tz_localize("UTC")
    current = pd.Period(now.strftime("%Y-%m"), freq="M")

    archives: list[ArchiveBatch] = []
    fund_history: list[RawEntry] = []
    budget_history: dict[str, list[RawEntry]] = {name: [] for name, _, _ in BUDGET_PROFILES}
    daily_expenses: list[RawEntry] = []

    for offset in range(months - 1, -1, -1):
        period = current - offset
        month_start = period.to_timestamp(how="start").tz_localize("UTC")
        is_current = offset == 0
        if is_current:
            last_day = now.normalize()
        else:
            last_day = period.to_timestamp(how="end").normalize().tz_localize("UTC")

        fund_history.append(
            RawEntry(
                timestamp=_epoch_ms(month_start + pd.Timedelta(hours=9)),
                amount=MONTHLY_SALARY,
                type="add",
                description="Salary",
            )
        )
        fund_history.extend(_entries(rng, FUND_DEBITS, month_start, last_day, "remove", False))

        for name, _, profiles in BUDGET_PROFILES:
            budget_history[name].extend(_entries(rng, profiles, month_start, last_day, None, False))

        daily_expenses.extend(_entries(rng, DAILY_PROFILES, month_start, last_day, None, True))

        if not is_current:
            archived = _entries(rng, ARCHIVE_PROFILES, month_start, last_day, "remove", True)
            archived.append(
                RawEntry(
                    timestamp=_epoch_ms(month_start + pd.Timedelta(days=14)),
                    amount=250_000,
                    type="add",
                    description="Refund",
                    category="Refunds",
                )
            )
            archives.append(ArchiveBatch(label=str(period), transactions=tuple(archived)))

    budgets = tuple(
        Budget(name=name, total_budget=allocated, history=tuple(budget_history[name]))
        for name, allocated, _ in BUDGET_PROFILES
    )
    goals = (
        SavingsGoal("Emergency fund", 15_000_000, 6_750_000),
        SavingsGoal("New laptop", 12_000_000, 12_000_000, is_completed=True),
        SavingsGoal("Holiday to Bali", 5_000_000, 400_000),
    )
    return AppState(
        archives=tuple(archives),
        fund_history=tuple(fund_history),
        budgets=budgets,
        daily_expenses=tuple(daily_expenses),
        savings_goals=goals,
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Write a synthetic Dompet state export.")
    parser.add_argument("output", type=Path, help="Destination JSON file")
    parser.add_argument("--months", type=int, default=3)
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED)
    args = parser.parse_args(argv)

    state = generate_app_state(months=args.months, seed=args.seed)
    args.output.write_text(json.dumps(state_to_dict(state), indent=2), encoding="utf-8")


if __name__ == "__main__":
    main()
