"""AI-written commentary for the Dompet dashboard panels.

Every panel hands the model a structured JSON payload built from the engine's
numbers; the model only turns those numbers into prose.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable

import pandas as pd
from openai import APIError, OpenAI

from config.settings import get_settings
from core.models import DashboardData, ForecastResult, ForecastState
from prompts import get_prompt_text

PANEL_TREND = "trend"
PANEL_BUDGET = "budget"
PANEL_CATEGORY = "category"
PANEL_FORECAST = "forecast"
PANELS = (PANEL_FORECAST, PANEL_TREND, PANEL_BUDGET, PANEL_CATEGORY)

MESSAGE_NO_SPEND = "No spending data to analyse for this period."
MESSAGE_NO_BUDGETS = "No budgets to compare."

MAX_OUTPUT_TOKENS = 300

__all__ = [
    "MESSAGE_NO_BUDGETS",
    "MESSAGE_NO_SPEND",
    "PANELS",
    "PANEL_BUDGET",
    "PANEL_CATEGORY",
    "PANEL_FORECAST",
    "PANEL_TREND",
    "CommentaryError",
    "CommentaryPlan",
    "CommentaryRequest",
    "build_forecast_payload",
    "generate_commentary",
    "plan_commentary",
]

logger = logging.getLogger(__name__)


class CommentaryError(RuntimeError):
    """Raised when commentary for a panel cannot be generated."""


@dataclass(frozen=True, slots=True)
class CommentaryRequest:
    panel: str
    payload: Any
    period_label: str
    model: str

    @property
    def fingerprint(self) -> str:
        """Stable identity of the inputs, used to spot superseded requests."""

        body = json.dumps(self.payload, sort_keys=True, ensure_ascii=False)
        return f"{self.panel}|{self.model}|{self.period_label}|{body}"


@dataclass(frozen=True, slots=True)
class CommentaryPlan:
    """Either a request to send, or a fixed message that needs no model call."""

    panel: str
    request: CommentaryRequest | None = None
    message: str | None = None


def _trend_payload(trend_df: pd.DataFrame) -> list[dict[str, int]]:
    if trend_df is None or trend_df.empty:
        return []
    active = trend_df[trend_df["Total"] > 0]
    return [{"day": int(row.Day), "total": int(row.Total)} for row in active.itertuples(index=False)]


def _budget_payload(budget_df: pd.DataFrame) -> list[dict[str, Any]]:
    if budget_df is None or budget_df.empty:
        return []
    return [
        {
            "name": str(row.Budget),
            "allocated": int(row.Allocated),
            "actual": int(row.Actual),
        }
        for row in budget_df.itertuples(index=False)
    ]


def _category_payload(category_df: pd.DataFrame) -> list[dict[str, Any]]:
    if category_df is None or category_df.empty:
        return []
    return [
        {
            "category": str(row.Category),
            "total": int(row.Total),
            "share": round(float(row.Share), 4),
        }
        for row in category_df.itertuples(index=False)
    ]


def build_forecast_payload(forecast: ForecastResult) -> dict[str, Any]:
    return {
        "total_income": int(forecast.total_income),
        "total_spend_so_far": int(forecast.total_spend),
        "days_elapsed": int(forecast.days_elapsed),
        "days_in_month": int(forecast.days_in_month),
        "daily_rate": round(forecast.daily_rate, 2),
        "projected_total": round(forecast.projected_total, 2),
        "delta": round(forecast.delta, 2),
        "outcome": "deficit" if forecast.is_deficit else "surplus",
        "amount": round(forecast.gap, 2),
    }


def plan_commentary(data: DashboardData, model: str | None = None) -> list[CommentaryPlan]:
    """Decide, per panel, whether to ask the model or show a fixed message."""

    model = model or get_settings().openai_model
    label = data["period_label"]

    def _request(panel: str, payload: Any) -> CommentaryPlan:
        return CommentaryPlan(panel, CommentaryRequest(panel, payload, label, model))

    plans: list[CommentaryPlan] = []

    forecast = data["forecast"]
    if forecast is not None:
        if forecast.state is ForecastState.COMPUTED:
            plans.append(_request(PANEL_FORECAST, build_forecast_payload(forecast)))
        else:
            plans.append(CommentaryPlan(PANEL_FORECAST, message=forecast.message))

    trend = _trend_payload(data["trend_df"])
    if not data["trend_df"].empty:
        if trend:
            plans.append(_request(PANEL_TREND, trend))
        else:
            plans.append(CommentaryPlan(PANEL_TREND, message=MESSAGE_NO_SPEND))

    budgets = _budget_payload(data["budget_df"])
    if budgets:
        plans.append(_request(PANEL_BUDGET, budgets))
    else:
        plans.append(CommentaryPlan(PANEL_BUDGET, message=MESSAGE_NO_BUDGETS))

    categories = _category_payload(data["category_df"])
    if categories:
        plans.append(_request(PANEL_CATEGORY, categories))
    else:
        plans.append(CommentaryPlan(PANEL_CATEGORY, message=MESSAGE_NO_SPEND))

    return plans


def _default_client_factory() -> OpenAI:
    settings = get_settings()
    if not settings.openai_api_key:
        raise CommentaryError(
            "Missing OpenAI API key. Add it to .streamlit/secrets.toml under [openai]."
        )
    return OpenAI(**settings.openai_client_kwargs)


def generate_commentary(
    request: CommentaryRequest,
    *,
    client_factory: Callable[[], OpenAI] | None = None,
) -> list[str]:
    """Return the model's commentary for one panel as a list of lines."""

    client = (client_factory or _default_client_factory)()
    system_prompt = get_prompt_text(request.panel)
    user_message = (
        f"Period: {request.period_label}\n\n"
        "Data (JSON, amounts in IDR):\n"
        f"{_format_payload(request.payload)}"
    )

    try:
        response = client.chat.completions.create(
            model=request.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            max_tokens=MAX_OUTPUT_TOKENS,
            temperature=0.2,
        )
    except APIError as exc:
        logger.warning("Commentary request for %s panel failed: %s", request.panel, exc)
        raise CommentaryError(f"OpenAI API error: {exc}") from exc

    try:
        text = response.choices[0].message.content or ""
    except (AttributeError, IndexError) as exc:  # pragma: no cover - unexpected SDK output
        raise CommentaryError("Unexpected response format from OpenAI API") from exc

    lines = _normalise_output(text)
    if not lines:
        raise CommentaryError("OpenAI response was empty")
    return lines


def _format_payload(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2)


def _normalise_output(response_text: str) -> list[str]:
    normalized: list[str] = []
    for line in response_text.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        if stripped[:2] in ("- ", "* ", "• "):
            stripped = stripped[2:].strip()
        if stripped.startswith("**") and stripped.endswith("**") and len(stripped) > 4:
            stripped = stripped[2:-2].strip()
        normalized.append(stripped)
    return normalized
