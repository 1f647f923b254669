"""Formatting helpers for Dompet summaries."""

from __future__ import annotations

import pandas as pd

from core.models import ALL_PERIODS

__all__ = ["format_currency", "format_period_label", "format_short_currency"]

ALL_TIME_LABEL = "All time"


def format_currency(amount: float) -> str:
    """Format rupiah the Indonesian way: ``Rp 1.250.000``."""

    sign = "-" if amount < 0 else ""
    grouped = f"{abs(amount):,.0f}".replace(",", ".")
    return f"{sign}Rp {grouped}"


def format_short_currency(amount: float) -> str:
    """Compact axis label: millions as ``Jt`` (juta), thousands as ``rb`` (ribu)."""

    if amount >= 1_000_000:
        return f"{amount / 1_000_000:.1f} Jt"
    if amount >= 1_000:
        return f"{amount / 1_000:.0f} rb"
    return f"{amount:.0f}"


def format_period_label(period_key: str) -> str:
    if period_key == ALL_PERIODS:
        return ALL_TIME_LABEL
    try:
        return pd.Period(period_key, freq="M").strftime("%B %Y")
    except (TypeError, ValueError):
        return period_key
