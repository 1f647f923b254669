"""Merge the four transaction sources into one normalized expense ledger."""

from __future__ import annotations

import logging
import math
import numbers
from datetime import date, datetime
from typing import Any, Iterable, Iterator, Optional

import pandas as pd

from core.models import (
    DAILY_EXPENSE,
    GENERAL_EXPENSE,
    UNCATEGORIZED,
    AppState,
    RawEntry,
    SourceKind,
    TransactionRecord,
    TransactionType,
)

__all__ = [
    "LEDGER_COLUMNS",
    "MAX_AMOUNT",
    "build_ledger",
    "coerce_amount",
    "coerce_timestamp",
    "ledger_frame",
    "resolve_category",
]

logger = logging.getLogger(__name__)

LEDGER_COLUMNS = ["timestamp", "amount", "category", "type", "description", "source"]

# One quadrillion rupiah; anything larger is a corrupt value.
MAX_AMOUNT = 10**15


def coerce_timestamp(raw: Any) -> Optional[pd.Timestamp]:
    """Return a UTC timestamp for ``raw`` or ``None`` when it is not a valid instant.

    Integers and floats are treated as epoch milliseconds, which is how the
    state store records them. Naive datetimes and strings are taken as UTC.
    """

    if raw is None or isinstance(raw, bool):
        return None
    try:
        if isinstance(raw, numbers.Real):
            if not math.isfinite(raw):
                return None
            stamp = pd.Timestamp(int(raw), unit="ms")
        elif isinstance(raw, (str, datetime, date, pd.Timestamp)):
            stamp = pd.Timestamp(raw)
        else:
            return None
    except (TypeError, ValueError, OverflowError):
        return None
    if pd.isna(stamp):
        return None
    if stamp.tzinfo is None:
        return stamp.tz_localize("UTC")
    return stamp.tz_convert("UTC")


def coerce_amount(raw: Any) -> int:
    """Return a non-negative integer amount, substituting 0 for garbage.

    Amounts above ``MAX_AMOUNT`` are treated as corrupt so ledger totals stay
    within int64.
    """

    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(value) or abs(value) > MAX_AMOUNT:
        return 0
    return int(round(abs(value)))


def resolve_category(raw: Any, fallback: str = UNCATEGORIZED) -> str:
    if raw is None:
        return fallback
    label = str(raw).strip()
    return label or fallback


def _normalise(
    entry: RawEntry,
    kind: SourceKind,
    category: str,
    txn_type: TransactionType,
) -> Optional[TransactionRecord]:
    stamp = coerce_timestamp(entry.timestamp)
    if stamp is None:
        logger.debug("Dropping %s entry with invalid timestamp %r", kind.value, entry.timestamp)
        return None
    return TransactionRecord(
        timestamp=stamp,
        amount=coerce_amount(entry.amount),
        category=category,
        type=txn_type,
        description=str(entry.description or ""),
        source=kind,
    )


def _iter_source_entries(state: AppState) -> Iterator[tuple[RawEntry, SourceKind, str]]:
    """Yield each spend entry with its provenance and resolved category.

    Archived batches and fund history only contribute debits; budget history
    and daily expenses are always spend regardless of any stored type.
    """

    for batch in state.archives:
        for entry in batch.transactions:
            if TransactionType.parse(entry.type) is TransactionType.DEBIT:
                yield entry, SourceKind.ARCHIVE, resolve_category(entry.category)

    for entry in state.fund_history:
        if TransactionType.parse(entry.type) is TransactionType.DEBIT:
            yield entry, SourceKind.FUND, GENERAL_EXPENSE

    for budget in state.budgets:
        category = resolve_category(budget.name)
        for entry in budget.history:
            yield entry, SourceKind.BUDGET, category

    for entry in state.daily_expenses:
        yield entry, SourceKind.DAILY, resolve_category(entry.category, DAILY_EXPENSE)


def build_ledger(state: AppState) -> tuple[TransactionRecord, ...]:
    """Return the unified, read-only expense ledger for ``state``."""

    records: list[TransactionRecord] = []
    for entry, kind, category in _iter_source_entries(state):
        record = _normalise(entry, kind, category, TransactionType.DEBIT)
        if record is not None:
            records.append(record)
    return tuple(records)


def ledger_frame(ledger: Iterable[TransactionRecord]) -> pd.DataFrame:
    """Return the ledger as a dataframe with one row per record."""

    rows = [
        {
            "timestamp": record.timestamp,
            "amount": record.amount,
            "category": record.category,
            "type": record.type.value,
            "description": record.description,
            "source": record.source.value,
        }
        for record in ledger
    ]
    frame = pd.DataFrame(rows, columns=LEDGER_COLUMNS)
    frame["timestamp"] = pd.to_datetime(frame["timestamp"], utc=True)
    frame["amount"] = frame["amount"].astype("int64")
    return frame
