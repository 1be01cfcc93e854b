"""Plotly chart builders for the dashboard.

Each function takes a :class:`~moneymap.models.view.ChartSeries` and
returns a fresh ``plotly.graph_objects.Figure`` that Streamlit renders
via ``st.plotly_chart``. Figures are never updated in place; the
renderer throws the old one away and builds a new one on every render.
"""

from __future__ import annotations

import plotly.graph_objects as go

from moneymap.models.expense import Theme
from moneymap.models.view import ChartSeries


_TEMPLATES = {
    Theme.LIGHT: "plotly_white",
    Theme.DARK: "plotly_dark",
}


def _base_layout(fig: go.Figure, theme: Theme, title: str | None) -> go.Figure:
    fig.update_layout(
        title=title,
        template=_TEMPLATES[theme],
        showlegend=False,
        margin=dict(l=10, r=10, t=40 if title else 10, b=10),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def create_daily_bar_chart(
    series: ChartSeries,
    theme: Theme = Theme.DARK,
    title: str | None = None,
) -> go.Figure:
    """Bar chart with one bar per day of the selected month.

    Parameters
    ----------
    series : ChartSeries
        Day labels ("1".."31") and the amount spent on each day.
    theme : Theme
        Picks the matching Plotly template.
    title : str, optional
        Chart title.
    """
    fig = go.Figure(
        go.Bar(
            x=series.labels,
            y=[float(value) for value in series.values],
            marker_line_width=1,
            hovertemplate="Day %{x}: %{y:.0f}<extra></extra>",
        )
    )
    _base_layout(fig, theme, title)
    fig.update_xaxes(tickfont=dict(size=10), showgrid=False, type="category")
    fig.update_yaxes(tickfont=dict(size=10), showgrid=True, rangemode="tozero")
    return fig


def create_category_doughnut_chart(
    series: ChartSeries,
    theme: Theme = Theme.DARK,
    title: str | None = None,
) -> go.Figure:
    """Doughnut chart of spending per category.

    An empty series produces an empty figure with a "No data" note
    instead of a blank ring.
    """
    if not series.labels:
        fig = go.Figure()
        _base_layout(fig, theme, title)
        fig.add_annotation(text="No data to display", showarrow=False)
        fig.update_xaxes(visible=False)
        fig.update_yaxes(visible=False)
        return fig

    fig = go.Figure(
        go.Pie(
            labels=series.labels,
            values=[float(value) for value in series.values],
            hole=0.6,
            sort=False,
            textinfo="none",
            hovertemplate="%{label}: %{value:.0f} (%{percent})<extra></extra>",
        )
    )
    return _base_layout(fig, theme, title)
