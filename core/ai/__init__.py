"""AI-focused helpers for Dompet."""

from .board import CommentaryBoard, PanelCommentary, PanelStatus
from .commentary import (
    PANELS,
    CommentaryError,
    CommentaryPlan,
    CommentaryRequest,
    generate_commentary,
    plan_commentary,
)

__all__ = [
    "PANELS",
    "CommentaryBoard",
    "CommentaryError",
    "CommentaryPlan",
    "CommentaryRequest",
    "PanelCommentary",
    "PanelStatus",
    "generate_commentary",
    "plan_commentary",
]
