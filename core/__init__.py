"""Core domain package for the Dompet application."""

from .ledger import build_ledger, ledger_frame
from .models import (
    ALL_PERIODS,
    AppState,
    ArchiveBatch,
    Budget,
    DashboardData,
    ForecastResult,
    ForecastState,
    RawEntry,
    SavingsGoal,
    SavingsProgressRow,
    SourceKind,
    TransactionRecord,
    TransactionType,
)

__all__ = [
    "ALL_PERIODS",
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
    "build_ledger",
    "ledger_frame",
]
