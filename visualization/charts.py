"""Plotly chart builders for the Dompet dashboard."""

from __future__ import annotations

import numpy as np
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from core.formatting import format_currency, format_short_currency

from .theme import theme_tokens

TOKENS = theme_tokens()

__all__ = [
    "build_budget_chart",
    "build_category_chart",
    "build_trend_chart",
]


def _empty_plotly_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(
        annotations=[
            dict(
                text=message,
                x=0.5,
                y=0.5,
                xref="paper",
                yref="paper",
                showarrow=False,
                font=dict(color=TOKENS.neutral_grey, size=14, family=TOKENS.label_font),
            )
        ],
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        margin=dict(l=0, r=0, t=20, b=0),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def _short_currency_axis(max_value: float, ticks: int = 5) -> dict[str, object]:
    """Y-axis ticks labelled ``250 rb`` / ``1.2 Jt`` instead of raw rupiah."""

    if max_value <= 0:
        return dict(showgrid=True, gridcolor=TOKENS.grid_color, zeroline=False)
    values = np.linspace(0, max_value, ticks)
    return dict(
        showgrid=True,
        gridcolor=TOKENS.grid_color,
        zeroline=False,
        tickmode="array",
        tickvals=values.tolist(),
        ticktext=[format_short_currency(value) for value in values],
    )


def build_trend_chart(trend_df: pd.DataFrame) -> go.Figure:
    """Render the gap-filled daily spend line for a month."""

    if trend_df.empty or not (trend_df["Total"] > 0).any():
        return _empty_plotly_figure("No spending in this period.")

    df = trend_df.copy()
    df["Label"] = df["Total"].map(format_currency)

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=df["Day"],
            y=df["Total"],
            mode="lines+markers",
            name="Total spend",
            line=dict(color=TOKENS.primary_navy, width=2, shape="spline", smoothing=0.3),
            marker=dict(size=6, color=TOKENS.primary_navy, line=dict(color=TOKENS.neutral_white, width=1)),
            customdata=df[["Label"]].to_numpy(),
            hovertemplate="Day %{x}<br>%{customdata[0]}<extra></extra>",
        )
    )

    peak = df.nlargest(1, "Total")
    fig.add_trace(
        go.Scatter(
            x=peak["Day"],
            y=peak["Total"],
            mode="markers",
            name="Peak day",
            marker=dict(size=11, color=TOKENS.spent_orange, line=dict(color=TOKENS.neutral_white, width=2)),
            customdata=peak[["Label"]].to_numpy(),
            hovertemplate="Peak · day %{x}<br>%{customdata[0]}<extra></extra>",
            showlegend=False,
        )
    )

    fig.update_layout(
        title="",
        xaxis_title="Day",
        yaxis_title="Spend",
        margin=dict(l=0, r=0, t=20, b=0),
        hovermode="x unified",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1.0),
        xaxis=dict(showgrid=False, dtick=1 if len(df) <= 16 else 2, range=[0.5, len(df) + 0.5]),
        yaxis=_short_currency_axis(float(df["Total"].max())),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def build_budget_chart(budget_df: pd.DataFrame) -> go.Figure:
    """Render grouped allocated-versus-spent bars, one group per budget."""

    if budget_df.empty:
        return _empty_plotly_figure("No budgets defined yet.")

    fig = go.Figure()
    for column, label, color in (
        ("Allocated", "Allocated", TOKENS.allocated_blue),
        ("Actual", "Spent", TOKENS.spent_orange),
    ):
        fig.add_trace(
            go.Bar(
                x=budget_df["Budget"],
                y=budget_df[column],
                name=label,
                marker_color=color,
                customdata=budget_df[column].map(format_currency).to_numpy(),
                hovertemplate=f"%{{x}}<br>{label}: %{{customdata}}<extra></extra>",
            )
        )

    max_value = float(budget_df[["Allocated", "Actual"]].to_numpy().max())
    fig.update_layout(
        barmode="group",
        bargap=0.3,
        margin=dict(l=0, r=0, t=20, b=0),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1.0),
        xaxis=dict(title="", showgrid=False),
        yaxis=_short_currency_axis(max_value),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def build_category_chart(category_df: pd.DataFrame) -> go.Figure:
    """Render the category allocation pie."""

    palette = list(TOKENS.category_palette)

    if category_df.empty:
        empty = pd.DataFrame({"Category": [], "Total": []})
        fig = px.pie(empty, names="Category", values="Total")
        fig.update_layout(showlegend=False, margin=dict(l=0, r=0, t=0, b=0))
        return fig

    data = category_df.reset_index(drop=True)
    repeats = (len(data) // len(palette)) + 1
    color_sequence = (palette * repeats)[: len(data)]

    fig = px.pie(
        data,
        names="Category",
        values="Total",
        color="Category",
        color_discrete_sequence=color_sequence,
    )
    fig.update_traces(
        sort=False,
        textposition="inside",
        texttemplate="%{percent:.0%}",
        customdata=data["Total"].map(format_currency).to_numpy().reshape(-1, 1),
        hovertemplate="%{label}<br>%{customdata[0]}<br>Share: %{percent:.1%}<extra></extra>",
        marker=dict(line=dict(color=TOKENS.neutral_white, width=2)),
    )
    fig.update_layout(
        margin=dict(l=0, r=0, t=0, b=0),
        legend=dict(
            title="",
            orientation="v",
            yanchor="middle",
            y=0.5,
            xanchor="left",
            x=1.05,
            font=dict(color=TOKENS.label_color, family=TOKENS.label_font, size=TOKENS.label_size),
        ),
        showlegend=True,
    )
    return fig
