"""Page modules for the Dompet Streamlit application."""

from .dashboard import render_page as render_dashboard_page
from .savings import render_page as render_savings_page

__all__ = [
    "render_dashboard_page",
    "render_savings_page",
]
