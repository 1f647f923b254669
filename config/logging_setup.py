"""Logging configuration for the Dompet application.

Library modules only call ``logging.getLogger(__name__)``; the Streamlit
entrypoint calls :func:`configure_logging` once per process.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_CONFIGURED = False
_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
    env_val = os.getenv("DOMPET_LOG_LEVEL")
    if env_val and env_val != level:
        return _parse_level(env_val)
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
) -> None:
    """Attach a single stream handler to the root logger.

    Repeated calls only adjust the level, which keeps Streamlit reruns from
    stacking handlers.
    """

    global _CONFIGURED

    root = logging.getLogger()
    root.setLevel(_parse_level(level))
    if _CONFIGURED:
        return

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))
    root.addHandler(handler)
    _CONFIGURED = True
