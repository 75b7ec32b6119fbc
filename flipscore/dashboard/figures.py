"""Plotly figures for the score breakdown."""

from decimal import Decimal

import plotly.graph_objects as go

from flipscore.engine.formatting import BAND_COLORS, score_color
from flipscore.models.score import ScoreResult


def score_gauge(total_score: int) -> go.Figure:
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=total_score,
        number={"suffix": "/100"},
        gauge={
            "axis": {"range": [0, 100]},
            "bar": {"color": score_color(total_score)},
            "steps": [
                {"range": [0, 40], "color": "#fbe3e7"},
                {"range": [40, 60], "color": "#fdf0dc"},
                {"range": [60, 100], "color": "#e3f7eb"},
            ],
        },
    ))
    fig.update_layout(height=260, margin=dict(l=20, r=20, t=20, b=20))
    return fig


def breakdown_chart(result: ScoreResult) -> go.Figure:
    """Achieved points drawn over each component's maximum."""
    components = list(reversed(result.breakdown.components))
    labels = [c.label for c in components]
    achieved = [float(c.points) for c in components]
    maxima = [float(c.max_points) for c in components]
    colors = [
        BAND_COLORS["good"] if c.fraction >= Decimal("0.75")
        else BAND_COLORS["fair"] if c.fraction >= Decimal("0.5")
        else BAND_COLORS["poor"]
        for c in components
    ]

    fig = go.Figure()
    fig.add_trace(go.Bar(
        y=labels, x=maxima,
        orientation="h",
        name="Max",
        marker_color="#e0e0e0",
        hoverinfo="skip",
    ))
    fig.add_trace(go.Bar(
        y=labels, x=achieved,
        orientation="h",
        name="Score",
        marker_color=colors,
        text=[f"{a:g} / {m:g}" for a, m in zip(achieved, maxima)],
        textposition="auto",
    ))
    fig.update_layout(
        barmode="overlay",
        showlegend=False,
        height=280,
        margin=dict(l=20, r=20, t=20, b=20),
        xaxis_title="Points",
    )
    return fig
