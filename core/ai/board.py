"""Per-panel bookkeeping that lets only the newest commentary request land.

Each panel has a monotonically increasing sequence number. A request is
stamped when issued, and its result (or failure) is applied only if no newer
request has been issued for the same panel since. Responses can therefore
arrive in any order without a stale one overwriting fresher text.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable

from core.ai.commentary import CommentaryError, CommentaryRequest

__all__ = ["CommentaryBoard", "PanelCommentary", "PanelStatus"]

logger = logging.getLogger(__name__)


class PanelStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class PanelCommentary:
    status: PanelStatus = PanelStatus.IDLE
    lines: tuple[str, ...] = ()
    error: str | None = None
    sequence: int = 0
    fingerprint: str | None = None


class CommentaryBoard:
    """Latest-request-wins store of commentary, one slot per panel."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._issued: dict[str, int] = {}
        self._panels: dict[str, PanelCommentary] = {}

    def get(self, panel: str) -> PanelCommentary:
        with self._lock:
            return self._panels.get(panel, PanelCommentary())

    def latest_sequence(self, panel: str) -> int:
        with self._lock:
            return self._issued.get(panel, 0)

    def is_current(self, panel: str, fingerprint: str) -> bool:
        """True when the panel already holds, or awaits, output for these inputs.

        A failed request is never current, so the next render retries it.
        """

        state = self.get(panel)
        return state.fingerprint == fingerprint and state.status in (PanelStatus.LOADING, PanelStatus.READY)

    def issue(self, panel: str, fingerprint: str | None = None) -> int:
        """Stamp a new request for ``panel`` and mark the panel as loading."""

        with self._lock:
            sequence = self._issued.get(panel, 0) + 1
            self._issued[panel] = sequence
            self._panels[panel] = PanelCommentary(
                status=PanelStatus.LOADING,
                sequence=sequence,
                fingerprint=fingerprint,
            )
            return sequence

    def apply(self, panel: str, sequence: int, lines: list[str] | tuple[str, ...]) -> bool:
        return self._settle(panel, sequence, status=PanelStatus.READY, lines=tuple(lines))

    def fail(self, panel: str, sequence: int, error: str) -> bool:
        return self._settle(panel, sequence, status=PanelStatus.UNAVAILABLE, error=error)

    def show_message(self, panel: str, message: str) -> None:
        """Publish fixed text for a panel, superseding anything in flight."""

        sequence = self.issue(panel, fingerprint=f"message|{message}")
        self.apply(panel, sequence, [message])

    def _settle(self, panel: str, sequence: int, **changes) -> bool:
        with self._lock:
            if sequence != self._issued.get(panel):
                logger.debug(
                    "Discarding stale %s commentary #%s (latest #%s)",
                    panel,
                    sequence,
                    self._issued.get(panel),
                )
                return False
            current = self._panels.get(panel, PanelCommentary(sequence=sequence))
            self._panels[panel] = replace(current, **changes)
            return True

    def request(
        self,
        request: CommentaryRequest,
        generate: Callable[[CommentaryRequest], list[str]],
        executor: Executor | None = None,
    ) -> Future | None:
        """Issue ``request`` and route its outcome back through the sequence check.

        With an executor the call runs in the background and the returned
        future completes once the board has been updated. Without one the call
        runs inline and ``None`` is returned.
        """

        sequence = self.issue(request.panel, request.fingerprint)

        def _run() -> bool:
            try:
                lines = generate(request)
            except CommentaryError as exc:
                return self.fail(request.panel, sequence, str(exc))
            except Exception as exc:
                logger.exception("Commentary for %s panel failed unexpectedly", request.panel)
                return self.fail(request.panel, sequence, f"Analysis unavailable: {exc}")
            return self.apply(request.panel, sequence, lines)

        if executor is None:
            _run()
            return None
        return executor.submit(_run)
