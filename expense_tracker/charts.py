"""
Plotly figures for the comparison chart.

The x axis is categorical so days appear in series order, not sorted by
date.
"""

import plotly.graph_objects as go

from expense_tracker.models.expense import ChartPoint


def comparison_figure(series: list[ChartPoint]) -> go.Figure:
    """Current vs previous period daily totals as two lines."""
    rows = [point.to_chart_row() for point in series]
    keys = [row["date"] for row in rows]

    fig = go.Figure()
    fig.add_trace(go.Scatter(x=keys, y=[row["current"] for row in rows], mode="lines+markers", name="Current Period"))
    fig.add_trace(go.Scatter(x=keys, y=[row["previous"] for row in rows], mode="lines+markers", name="Previous Period"))
    fig.update_xaxes(type="category", categoryorder="array", categoryarray=keys)
    fig.update_layout(margin=dict(t=30, b=10, l=10, r=10))
    return fig
