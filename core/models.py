"""Shared data model definitions for the Dompet dashboard."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, TypedDict

import pandas as pd

UNCATEGORIZED = "uncategorized"
GENERAL_EXPENSE = "general expense"
DAILY_EXPENSE = "daily"
ALL_PERIODS = "all"

_CREDIT_ALIASES = frozenset({"credit", "add", "income"})
_DEBIT_ALIASES = frozenset({"debit", "remove", "expense"})


class TransactionType(str, Enum):
    CREDIT = "credit"
    DEBIT = "debit"

    @classmethod
    def parse(cls, raw: Any) -> Optional["TransactionType"]:
        """Map a stored type field onto credit/debit, or ``None`` if unknown."""

        if isinstance(raw, cls):
            return raw
        if raw is None:
            return None
        value = str(raw).strip().lower()
        if value in _CREDIT_ALIASES:
            return cls.CREDIT
        if value in _DEBIT_ALIASES:
            return cls.DEBIT
        return None


class SourceKind(str, Enum):
    ARCHIVE = "archive"
    FUND = "fund"
    BUDGET = "budget"
    DAILY = "daily"


@dataclass(frozen=True)
class RawEntry:
    """A transaction exactly as the state store keeps it."""

    timestamp: Any
    amount: Any
    type: Any = None
    description: str = ""
    category: Optional[str] = None


@dataclass(frozen=True)
class ArchiveBatch:
    label: str
    transactions: tuple[RawEntry, ...] = ()


@dataclass(frozen=True)
class Budget:
    name: str
    total_budget: int
    history: tuple[RawEntry, ...] = ()


@dataclass(frozen=True)
class SavingsGoal:
    name: str
    target_amount: int
    saved_amount: int
    is_completed: bool = False


@dataclass(frozen=True)
class AppState:
    """Read-only snapshot of everything the engine consumes."""

    archives: tuple[ArchiveBatch, ...] = ()
    fund_history: tuple[RawEntry, ...] = ()
    budgets: tuple[Budget, ...] = ()
    daily_expenses: tuple[RawEntry, ...] = ()
    savings_goals: tuple[SavingsGoal, ...] = ()


@dataclass(frozen=True)
class TransactionRecord:
    timestamp: pd.Timestamp
    amount: int
    category: str
    type: TransactionType
    description: str
    source: SourceKind


class ForecastState(str, Enum):
    NOT_CURRENT_MONTH = "not_current_month"
    NO_INCOME = "no_income"
    ZERO_SPEND = "zero_spend"
    COMPUTED = "computed"


@dataclass(frozen=True)
class ForecastResult:
    state: ForecastState
    message: str | None = None
    total_income: int = 0
    total_spend: int = 0
    days_elapsed: int = 0
    days_in_month: int = 0
    daily_rate: float = 0.0
    projected_total: float = 0.0
    delta: float = 0.0

    @property
    def is_deficit(self) -> bool:
        return self.state is ForecastState.COMPUTED and self.delta < 0

    @property
    def gap(self) -> float:
        """Size of the projected deficit or surplus."""

        return abs(self.delta)


class SavingsProgressRow(TypedDict):
    name: str
    saved: int
    target: int
    percentage: float
    width: int
    completed: bool


class DashboardData(TypedDict):
    period_key: str
    period_label: str
    period_options: list[str]
    expenses_df: pd.DataFrame
    category_df: pd.DataFrame
    trend_df: pd.DataFrame
    budget_df: pd.DataFrame
    total_spend: int
    total_income: int
    forecast: ForecastResult | None
    savings_rows: list[SavingsProgressRow]


__all__ = [
    "ALL_PERIODS",
    "DAILY_EXPENSE",
    "GENERAL_EXPENSE",
    "UNCATEGORIZED",
    "AppState",
    "ArchiveBatch",
    "Budget",
    "DashboardData",
    "ForecastResult",
    "ForecastState",
    "RawEntry",
    "SavingsGoal",
    "SavingsProgressRow",
    "SourceKind",
    "TransactionRecord",
    "TransactionType",
]
