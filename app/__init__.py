"""Streamlit front end for Dompet."""

from .main import main

__all__ = ["main"]
