"""Shared layout primitives for the Dompet Streamlit app."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterable

import streamlit as st
from streamlit.components.v1 import html as components_html

from core.formatting import format_period_label


@dataclass(frozen=True)
class NavigationLink:
    slug: str
    label: str
    enabled: bool = True


NAV_LINKS: tuple[NavigationLink, ...] = (
    NavigationLink("dashboard", "Dashboard", True),
    NavigationLink("savings", "Savings", True),
)

DEFAULT_PAGE = "dashboard"


def inject_css() -> None:
    """Inject global CSS tokens and component styling into the Streamlit app."""

    st.markdown(
        """
        <style>
          :root {
            --gap: 16px;
            --radius: 12px;
            --card-bg: #FFFFFF;
            --border: #E6EAF2;
            --navy: #2C3E50;
            --teal: #1ABC9C;
            --shadow: 0 1px 2px rgba(16, 24, 40, 0.05), 0 1px 3px rgba(16, 24, 40, 0.06);
          }

          .block-container {
            max-width: 1100px;
            padding-top: 2.5rem;
            padding-bottom: 4rem;
          }

          .dp-nav {
            display: flex;
            align-items: center;
            justify-content: space-between;
            gap: 2rem;
            padding: 0.9rem 0;
          }

          .dp-nav__brand {
            font-size: 1.5rem;
            font-weight: 700;
            color: var(--navy);
          }

          .dp-nav__links {
            display: flex;
            align-items: center;
            gap: 1.8rem;
          }

          .dp-nav__link,
          .dp-nav__link:visited {
            font-weight: 600;
            color: #5C6478;
            text-decoration: none;
          }

          .dp-nav__link.is-active {
            color: var(--navy);
            border-bottom: 3px solid var(--teal);
          }

          .dp-card-anchor {
            display: none;
          }

          [data-testid="stVerticalBlock"]:has(> .dp-card-anchor) {
            background: var(--card-bg);
            border: 1px solid var(--border);
            border-radius: var(--radius);
            box-shadow: var(--shadow);
            padding: 16px;
            margin-bottom: var(--gap);
            gap: 12px;
          }

          .dp-card__head {
            display: flex;
            align-items: center;
            justify-content: space-between;
            gap: 12px;
            font-weight: 600;
            color: var(--navy);
            flex-wrap: wrap;
          }

          .dp-card__title {
            font-size: 1.05rem;
          }

          .dp-chip {
            font-size: 12px;
            padding: 2px 8px;
            border-radius: 999px;
            border: 1px solid #BDEFE4;
            background: #E8F8F5;
            color: #138D75;
            white-space: nowrap;
          }

          .dp-commentary {
            margin: 0;
            padding: 12px 16px;
            border-left: 4px solid var(--navy);
            background: #EBF5FB;
            border-radius: 0 8px 8px 0;
            color: #1F2937;
          }

          .dp-commentary ul {
            margin: 0;
            padding-left: 1.1rem;
          }
        </style>
        """,
        unsafe_allow_html=True,
    )


@contextmanager
def card(title: str, suffix: str | None = None):
    """Render content inside a reusable Dompet card."""

    chip_html = f'<span class="dp-chip">{suffix}</span>' if suffix else ""
    container = st.container()
    with container:
        st.markdown('<div class="dp-card-anchor"></div>', unsafe_allow_html=True)
        st.markdown(
            f'<div class="dp-card__head"><span class="dp-card__title">{title}</span>'
            f'{chip_html}</div>',
            unsafe_allow_html=True,
        )
        yield


def render_navbar(active_page: str, period_key: str | None) -> None:
    """Render the navigation bar with the active page highlighted."""

    link_markup: list[str] = []
    for link in NAV_LINKS:
        css_class = "dp-nav__link"
        aria_current = ""
        if link.slug == active_page:
            css_class += " is-active"
            aria_current = ' aria-current="page"'

        href = f"?page={link.slug}"
        if period_key:
            href += f"&month={period_key}"
        link_markup.append(
            f'<a class="{css_class}" href="{href}"{aria_current} target="_self">{link.label}</a>'
        )

    st.markdown(
        f"""
        <nav class="dp-nav">
            <div class="dp-nav__brand">Dompet</div>
            <div class="dp-nav__links">{''.join(link_markup)}</div>
        </nav>
        """,
        unsafe_allow_html=True,
    )
    _enforce_same_tab_navigation()


def render_period_filter(period_options: list[str], selected: str) -> str:
    """Render the report-period selector in the sidebar and return the choice."""

    try:
        default_index = period_options.index(selected)
    except ValueError:
        default_index = 0

    with st.sidebar:
        st.markdown("### Report period")
        return st.selectbox(
            "Period",
            period_options,
            index=default_index,
            key="period_selector",
            format_func=format_period_label,
        )


def _enforce_same_tab_navigation() -> None:
    """Keep navigation links inside the current browser tab."""

    components_html(
        """
        <script>
        (function() {
          if (window.parent && !window.parent.__dpNavSameTab) {
            window.parent.__dpNavSameTab = true;
            const enforce = () => {
              window.parent.document.querySelectorAll('a.dp-nav__link').forEach((anchor) => {
                anchor.target = '_self';
              });
            };
            enforce();
            new MutationObserver(enforce).observe(window.parent.document.body, { childList: true, subtree: true });
          }
        })();
        </script>
        """,
        height=0,
        width=0,
    )


def determine_active_page(valid_pages: Iterable[str]) -> str:
    """Determine the active page from the query params or session state."""

    params = st.query_params
    raw_page = params.get("page", st.session_state.get("active_page", DEFAULT_PAGE))
    if isinstance(raw_page, list):
        raw_page = raw_page[0]

    page = raw_page if raw_page in set(valid_pages) else DEFAULT_PAGE
    st.session_state["active_page"] = page
    if params.get("page") != page:
        st.query_params["page"] = page
    return page


def sync_month_query_param(period_key: str | None) -> None:
    """Ensure the ``month`` query param mirrors the current selection."""

    current_param = st.query_params.get("month")
    if period_key:
        if current_param != period_key:
            st.query_params["month"] = period_key
    elif "month" in st.query_params:
        st.query_params.pop("month")


__all__ = [
    "DEFAULT_PAGE",
    "NAV_LINKS",
    "NavigationLink",
    "card",
    "determine_active_page",
    "inject_css",
    "render_navbar",
    "render_period_filter",
    "sync_month_query_param",
]
