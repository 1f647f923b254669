"""Shared Plotly theme tokens for Dompet visualizations."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ThemeTokens:
    label_color: str = "#2C3E50"
    label_font: str = "Inter"
    label_size: int = 12
    primary_navy: str = "#2C3E50"
    accent_teal: str = "#1ABC9C"
    danger_red: str = "#E74C3C"
    allocated_blue: str = "#3498DB"
    spent_orange: str = "#E67E22"
    neutral_grey: str = "#7F8C8D"
    neutral_white: str = "#FFFFFF"
    grid_color: str = "rgba(127, 140, 141, 0.25)"
    category_palette: tuple[str, ...] = (
        "#2C3E50",
        "#1ABC9C",
        "#F1C40F",
        "#E74C3C",
        "#3498DB",
        "#9B59B6",
        "#E67E22",
        "#7F8C8D",
    )


_TOKENS = ThemeTokens()


def theme_tokens() -> ThemeTokens:
    """Return the shared visualization tokens."""

    return _TOKENS
