"""Spending dashboard page layout."""

from __future__ import annotations

import html

import pandas as pd
import streamlit as st

from app.layout import card
from core.ai import CommentaryBoard, PanelStatus
from core.ai.commentary import PANEL_BUDGET, PANEL_CATEGORY, PANEL_FORECAST, PANEL_TREND
from core.dashboard_service import select_category
from core.formatting import format_currency
from core.models import DashboardData, ForecastResult, ForecastState
from visualization import build_budget_chart, build_category_chart, build_trend_chart


def _render_commentary(board: CommentaryBoard, panel: str, title: str) -> None:
    commentary = board.get(panel)
    if commentary.status is PanelStatus.IDLE:
        return

    st.caption(title)
    if commentary.status is PanelStatus.LOADING:
        st.caption("Analysing data…")
    elif commentary.status is PanelStatus.UNAVAILABLE:
        st.warning("AI analysis unavailable for this panel right now.")
    else:
        items = "".join(f"<li>{html.escape(line)}</li>" for line in commentary.lines)
        st.markdown(f"<div class='dp-commentary'><ul>{items}</ul></div>", unsafe_allow_html=True)


def _render_forecast_card(forecast: ForecastResult, board: CommentaryBoard) -> None:
    if forecast.state is not ForecastState.COMPUTED:
        st.info(forecast.message or "")
        return

    cols = st.columns(3)
    cols[0].metric("Income this month", format_currency(forecast.total_income))
    cols[1].metric("Spent so far", format_currency(forecast.total_spend))
    outcome = "Projected deficit" if forecast.is_deficit else "Projected surplus"
    cols[2].metric(
        "Projected month-end spend",
        format_currency(forecast.projected_total),
        f"{outcome} {format_currency(forecast.gap)}",
        delta_color="inverse" if forecast.is_deficit else "normal",
    )
    st.caption(
        f"Day {forecast.days_elapsed} of {forecast.days_in_month} · "
        f"{format_currency(forecast.daily_rate)} per day"
    )
    _render_commentary(board, PANEL_FORECAST, "AI forecast")


def category_detail_key(period_key: str) -> str:
    """Widget key for the category picker; each period starts on its top category."""

    return f"category_detail_{period_key}"


def _render_category_details(data: DashboardData) -> None:
    categories = data["category_df"]["Category"].tolist()
    selected = st.selectbox(
        "Show transactions for",
        categories,
        index=0,
        key=category_detail_key(data["period_key"]),
    )
    details = select_category(data, selected)
    if details.empty:
        st.info("No transactions to show.")
        return

    table = pd.DataFrame(
        {
            "Description": details["description"],
            "Date": details["timestamp"].dt.strftime("%d %b %Y"),
            "Amount": details["amount"].map(lambda value: f"-{format_currency(value)}"),
        }
    )
    st.dataframe(table, hide_index=True, use_container_width=True)


def _render_category_card(data: DashboardData, board: CommentaryBoard) -> None:
    category_df = data["category_df"]
    if category_df.empty:
        st.info("No spending in this period.")
        _render_commentary(board, PANEL_CATEGORY, "AI analysis of spending allocation")
        return

    st.plotly_chart(build_category_chart(category_df), use_container_width=True, key="category-pie")
    table = pd.DataFrame(
        {
            "Category": category_df["Category"],
            "Total spent": category_df["Total"].map(format_currency),
        }
    )
    st.dataframe(table, hide_index=True, use_container_width=True)
    _render_category_details(data)
    _render_commentary(board, PANEL_CATEGORY, "AI analysis of spending allocation")


def _render_dashboard(data: DashboardData, board: CommentaryBoard) -> None:
    label = data["period_label"]

    forecast = data["forecast"]
    if forecast is not None:
        with card("Forecast & early warning", suffix="Current month"):
            _render_forecast_card(forecast, board)

    if not data["trend_df"].empty:
        with card(f"Daily spending trend ({label})"):
            st.plotly_chart(build_trend_chart(data["trend_df"]), use_container_width=True)
            _render_commentary(board, PANEL_TREND, "AI analysis of the daily trend")

    if not data["budget_df"].empty:
        with card(f"Budget comparison ({label})"):
            st.plotly_chart(build_budget_chart(data["budget_df"]), use_container_width=True)
            _render_commentary(board, PANEL_BUDGET, "AI analysis of budgets")

    with card(f"Spending allocation ({label})"):
        _render_category_card(data, board)


def render_page(data: DashboardData, board: CommentaryBoard) -> None:
    """Render the spending dashboard page."""

    st.title("Spending overview")
    st.caption(
        f"{data['period_label']} · spent {format_currency(data['total_spend'])}"
    )
    _render_dashboard(data, board)


__all__ = ["category_detail_key", "render_page"]
