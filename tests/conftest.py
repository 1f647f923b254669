"""Shared fixtures for the Dompet test-suite."""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import pytest
import streamlit as st

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config.settings import get_settings  # noqa: E402
from core.dashboard_service import clear_view_cache  # noqa: E402
from core.models import AppState, ArchiveBatch, Budget, RawEntry, SavingsGoal  # noqa: E402

TODAY = date(2024, 2, 20)


@pytest.fixture(autouse=True)
def clear_streamlit_secrets(monkeypatch):
    """Provide an empty secrets mapping so tests don't rely on Streamlit runtime."""

    monkeypatch.setattr(st, "secrets", {}, raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    get_settings.cache_clear()
    clear_view_cache()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def today() -> date:
    return TODAY


@pytest.fixture()
def sample_state() -> AppState:
    """Two months of activity touching all four transaction sources.

    February 2024 spend totals 1,600,000 across five categories; January
    totals 310,000.
    """

    return AppState(
        archives=(
            ArchiveBatch(
                label="2024-01",
                transactions=(
                    RawEntry("2024-01-15T08:00:00Z", 300_000, "remove", "Electricity", "Utilities"),
                    RawEntry("2024-01-16T08:00:00Z", 250_000, "add", "Refund", "Refunds"),
                    RawEntry("2024-02-03T12:00:00Z", 50_000, "remove", "Parking", None),
                ),
            ),
        ),
        fund_history=(
            RawEntry("2024-01-01T09:00:00Z", 4_000_000, "add", "Salary"),
            RawEntry("2024-02-01T09:00:00Z", 5_000_000, "add", "Salary"),
            RawEntry("2024-02-05T10:00:00Z", 1_000_000, "remove", "Rent"),
        ),
        budgets=(
            Budget(
                name="Groceries",
                total_budget=2_000_000,
                history=(
                    RawEntry("2024-02-02T10:00:00Z", 400_000, "add", "Supermarket"),
                    RawEntry(1707559200000, 100_000, None, "Market"),
                ),
            ),
            Budget(name="Transport", total_budget=500_000),
        ),
        daily_expenses=(
            RawEntry("2024-02-10T07:30:00Z", 30_000, None, "Coffee", "Coffee"),
            RawEntry("2024-02-11T12:15:00Z", 20_000, None, "Lunch", None),
            RawEntry("2024-01-31T23:30:00Z", 10_000, None, "Late coffee", "Coffee"),
        ),
        savings_goals=(
            SavingsGoal("Emergency fund", 10_000_000, 2_500_000),
            SavingsGoal("Laptop", 0, 0, is_completed=True),
        ),
    )
