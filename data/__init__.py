"""Synthetic data helpers for Dompet."""

from .synth import generate_app_state

__all__ = ["generate_app_state"]
