"""Dompet spending dashboard."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait

import pandas as pd
import streamlit as st

from app.layout import (
    NAV_LINKS,
    determine_active_page,
    inject_css,
    render_navbar,
    render_period_filter,
    sync_month_query_param,
)
from app.pages import render_dashboard_page, render_savings_page
from config import configure_logging, get_settings
from core.ai import CommentaryBoard, generate_commentary, plan_commentary
from core.dashboard_service import prepare_dashboard_data
from core.data_loader import StateLoadError, load_app_state
from core.models import AppState, DashboardData
from data.synth import generate_app_state

logger = logging.getLogger(__name__)

_BOARD_KEY = "commentary_board"


@st.cache_resource(show_spinner=False)
def _commentary_executor() -> ThreadPoolExecutor:
    return ThreadPoolExecutor(max_workers=4, thread_name_prefix="commentary")


@st.cache_resource(show_spinner=False)
def _synthetic_state(day_key: str) -> AppState:
    """Demo state regenerated once per calendar day."""

    return generate_app_state(today=pd.Timestamp(day_key).date())


def _load_state() -> AppState:
    settings = get_settings()
    if settings.state_path:
        try:
            return load_app_state(settings.state_path)
        except (FileNotFoundError, StateLoadError) as exc:
            logger.warning("Falling back to synthetic state: %s", exc)
            st.warning(f"Could not load saved data ({exc}). Showing demo data instead.")
    return _synthetic_state(pd.Timestamp.now(tz="UTC").strftime("%Y-%m-%d"))


def _commentary_board() -> CommentaryBoard:
    if _BOARD_KEY not in st.session_state:
        st.session_state[_BOARD_KEY] = CommentaryBoard()
    return st.session_state[_BOARD_KEY]


def _refresh_commentary(data: DashboardData, board: CommentaryBoard) -> None:
    """Dispatch commentary for panels whose inputs changed and wait briefly.

    Requests still running after the timeout keep going in the background;
    the board only accepts them if nothing newer was issued meanwhile.
    """

    settings = get_settings()
    executor = _commentary_executor()
    pending: list[Future] = []

    for plan in plan_commentary(data, model=settings.openai_model):
        if plan.request is None:
            if not board.is_current(plan.panel, f"message|{plan.message}"):
                board.show_message(plan.panel, plan.message or "")
            continue
        if board.is_current(plan.panel, plan.request.fingerprint):
            continue
        future = board.request(plan.request, generate_commentary, executor)
        if future is not None:
            pending.append(future)

    if pending:
        with st.spinner("Analysing data…"):
            wait(pending, timeout=settings.commentary_timeout)


def main() -> None:
    """Application entrypoint for the Dompet dashboard."""

    st.set_page_config(
        page_title="Dompet | Spending",
        page_icon="💰",
        layout="wide",
        initial_sidebar_state="expanded",
    )
    configure_logging(get_settings().log_level)
    inject_css()

    valid_pages = [link.slug for link in NAV_LINKS if link.enabled]
    active_page = determine_active_page(valid_pages)

    state = _load_state()
    requested = st.session_state.get("period_selector") or st.query_params.get("month")
    data = prepare_dashboard_data(state, requested)

    chosen = render_period_filter(data["period_options"], data["period_key"])
    if chosen != data["period_key"]:
        data = prepare_dashboard_data(state, chosen)
    sync_month_query_param(data["period_key"])

    render_navbar(active_page, data["period_key"])

    if active_page == "savings":
        render_savings_page(data)
        return

    board = _commentary_board()
    _refresh_commentary(data, board)
    render_dashboard_page(data, board)


if __name__ == "__main__":
    main()
