"""Savings goals page layout."""

from __future__ import annotations

import streamlit as st

from app.layout import card
from core.formatting import format_currency
from core.models import DashboardData, SavingsProgressRow


def _render_goal(row: SavingsProgressRow) -> None:
    status = "Reached!" if row["completed"] else "Active"
    with card(row["name"], suffix=status):
        st.markdown(
            f"**{format_currency(row['saved'])}** of {format_currency(row['target'])}"
        )
        text = f"{row['percentage']:.0f}%" if row["percentage"] > 15 else None
        st.progress(row["width"] / 100, text=text)


def render_page(data: DashboardData) -> None:
    """Render the savings goals page."""

    st.title("Savings")
    rows = data["savings_rows"]
    if not rows:
        st.info("You don't have any savings goals yet. Start saving for something!")
        return

    columns = st.columns(2, gap="medium")
    for index, row in enumerate(rows):
        with columns[index % 2]:
            _render_goal(row)


__all__ = ["render_page"]
