"""Runtime configuration for Dompet.

Values come from ``DOMPET_*`` environment variables, overridden by the
``[openai]`` and ``[dompet]`` tables of ``.streamlit/secrets.toml`` when the
app runs under Streamlit. The plain ``OPENAI_API_KEY``/``OPENAI_BASE_URL``
variables are honoured last so an existing OpenAI setup works unchanged.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Any, Mapping

import streamlit as st
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"

# secrets table -> {secret key: settings field}
_SECRET_FIELDS: dict[str, dict[str, str]] = {
    "openai": {
        "api_key": "openai_api_key",
        "OPENAI_API_KEY": "openai_api_key",
        "api_base": "openai_base_url",
        "model": "openai_model",
    },
    "dompet": {
        "state_path": "state_path",
        "commentary_timeout": "commentary_timeout",
        "log_level": "log_level",
    },
}


def _secrets_table(name: str) -> Mapping[str, Any]:
    try:
        if name not in st.secrets:
            return {}
        table = st.secrets[name]
    except Exception:  # pragma: no cover - no secrets.toml outside Streamlit
        return {}
    return table if isinstance(table, Mapping) else dict(table)


def _secret_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for table_name, fields in _SECRET_FIELDS.items():
        table = _secrets_table(table_name)
        for secret_key, field_name in fields.items():
            value = table.get(secret_key)
            if value is not None and field_name not in overrides:
                overrides[field_name] = value
    return overrides


class Settings(BaseSettings):
    """Everything the dashboard reads from its environment."""

    openai_api_key: str | None = None
    openai_base_url: str | None = None
    openai_model: str = DEFAULT_OPENAI_MODEL
    state_path: str | None = None
    commentary_timeout: float = 20.0
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="DOMPET_", extra="ignore")

    @property
    def openai_client_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``openai.OpenAI``; unset values are left to the SDK."""

        kwargs = {"api_key": self.openai_api_key, "base_url": self.openai_base_url}
        return {key: value for key, value in kwargs.items() if value}


@lru_cache
def get_settings() -> Settings:
    """Build the settings once per process; tests call ``cache_clear``."""

    settings = Settings(**_secret_overrides())
    if settings.openai_api_key:
        return settings

    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        return settings
    return settings.model_copy(
        update={
            "openai_api_key": api_key,
            "openai_base_url": settings.openai_base_url or os.getenv("OPENAI_BASE_URL"),
        }
    )
