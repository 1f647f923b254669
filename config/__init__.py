"""Application configuration utilities."""

from .logging_setup import configure_logging
from .settings import DEFAULT_OPENAI_MODEL, Settings, get_settings

__all__ = [
    "DEFAULT_OPENAI_MODEL",
    "Settings",
    "configure_logging",
    "get_settings",
]
