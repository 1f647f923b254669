"""Loading of exported application state for Dompet's dashboard pipeline."""

from __future__ import annotations

import json
from datetime import date, datetime
from functools import lru_cache
from pathlib import Path
from typing import Any, Final, Mapping

from core.ledger import coerce_amount
from core.models import AppState, ArchiveBatch, Budget, RawEntry, SavingsGoal

__all__ = ["StateLoadError", "load_app_state", "parse_app_state", "state_to_dict"]


_CACHE_SIZE: Final[int] = 8


class StateLoadError(RuntimeError):
    """Raised when a state export cannot be read or decoded."""


def _scalar(value: Any) -> Any:
    """Keep JSON scalars; nested objects and arrays become ``None``."""

    if value is None or isinstance(value, (str, int, float, bool, date, datetime)):
        return value
    return None


def _mappings(items: Any) -> list[Mapping[str, Any]]:
    if not isinstance(items, (list, tuple)):
        return []
    return [item for item in items if isinstance(item, Mapping)]


def _entry(raw: Mapping[str, Any], category_key: str = "category") -> RawEntry:
    return RawEntry(
        timestamp=_scalar(raw.get("timestamp")),
        amount=_scalar(raw.get("amount")),
        type=_scalar(raw.get("type")),
        description=str(_scalar(raw.get("desc") or raw.get("description")) or ""),
        category=_scalar(raw.get(category_key)),
    )


def _entries(items: Any, category_key: str = "category") -> tuple[RawEntry, ...]:
    return tuple(_entry(item, category_key) for item in _mappings(items))


def parse_app_state(payload: Mapping[str, Any]) -> AppState:
    """Build an :class:`AppState` from the store's camelCase export."""

    archives = tuple(
        ArchiveBatch(
            label=str(_scalar(archive.get("month") or archive.get("label")) or ""),
            transactions=_entries(archive.get("transactions")),
        )
        for archive in _mappings(payload.get("archives"))
    )
    budgets = tuple(
        Budget(
            name=str(_scalar(budget.get("name")) or ""),
            total_budget=coerce_amount(budget.get("totalBudget")),
            history=_entries(budget.get("history")),
        )
        for budget in _mappings(payload.get("budgets"))
    )
    goals = tuple(
        SavingsGoal(
            name=str(_scalar(goal.get("name")) or ""),
            target_amount=coerce_amount(goal.get("targetAmount")),
            saved_amount=coerce_amount(goal.get("savedAmount")),
            is_completed=bool(goal.get("isCompleted", False)),
        )
        for goal in _mappings(payload.get("savingsGoals"))
    )
    return AppState(
        archives=archives,
        fund_history=_entries(payload.get("fundHistory")),
        budgets=budgets,
        daily_expenses=_entries(payload.get("dailyExpenses"), category_key="sourceCategory"),
        savings_goals=goals,
    )


@lru_cache(maxsize=_CACHE_SIZE)
def load_app_state(json_path: str | Path) -> AppState:
    """Return the parsed application state stored at ``json_path``.

    Results are cached so repeated reruns of the dashboard do not re-read the
    same export from disk.
    """

    path = Path(json_path)
    if not path.exists():
        raise FileNotFoundError(f"State file not found: {path}")

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise StateLoadError(f"Could not read state file {path}: {exc}") from exc

    if not isinstance(payload, Mapping):
        raise StateLoadError(f"State file {path} does not contain a JSON object")
    try:
        return parse_app_state(payload)
    except (AttributeError, TypeError, ValueError) as exc:
        raise StateLoadError(f"State file {path} has an unexpected shape: {exc}") from exc


def _entry_dict(entry: RawEntry, category_key: str = "category") -> dict[str, Any]:
    record: dict[str, Any] = {
        "timestamp": entry.timestamp,
        "amount": entry.amount,
        "desc": entry.description,
    }
    if entry.type is not None:
        record["type"] = entry.type
    if entry.category is not None:
        record[category_key] = entry.category
    return record


def state_to_dict(state: AppState) -> dict[str, Any]:
    """Inverse of :func:`parse_app_state`, used when exporting synthetic data."""

    return {
        "archives": [
            {"month": batch.label, "transactions": [_entry_dict(t) for t in batch.transactions]}
            for batch in state.archives
        ],
        "fundHistory": [_entry_dict(entry) for entry in state.fund_history],
        "budgets": [
            {
                "name": budget.name,
                "totalBudget": budget.total_budget,
                "history": [_entry_dict(entry) for entry in budget.history],
            }
            for budget in state.budgets
        ],
        "dailyExpenses": [_entry_dict(entry, "sourceCategory") for entry in state.daily_expenses],
        "savingsGoals": [
            {
                "name": goal.name,
                "targetAmount": goal.target_amount,
                "savedAmount": goal.saved_amount,
                "isCompleted": goal.is_completed,
            }
            for goal in state.savings_goals
        ],
    }
