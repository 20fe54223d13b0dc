# ui/charts.py
# ------------------------------------------------------------------
# Plotly figure builders for the results dashboard.
#
# Every _chart_* style builder here returns a go.Figure (or None when
# there is nothing to draw) and never touches Streamlit, so the page
# decides how and where a figure is shown.
#
#   chart_financial_metrics  aggregated metrics + simulated prior quarters
#   chart_cash_flow_trend    sample operating cash flow
#   chart_cash_flows         sample inflows (+) / outflows (-), stacked
#   chart_cash_components    sample waterfall of income components
# ------------------------------------------------------------------

from datetime import datetime
from typing import Dict, List, Optional

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from statement_engine.constants import LINE_CHART_METRICS
from statement_engine.formatting import parse_numeric
from statement_engine.models import FinancialMetric
from statement_engine.sample_data import SAMPLE_CASH_FLOW, CashFlowSample
from ui.components import BLUE, DOWN, ORANGE, TEAL, UP

SERIES_COLORS = [BLUE, DOWN, TEAL, ORANGE, "#AF52DE", "#FFD60A"]

# Multipliers applied to the current value for the four prior quarters.
HISTORY_FACTORS = (0.7, 0.75, 0.85, 0.95)
DEFAULT_PERIOD_LABEL = "Q1 2023"

_CHART_LAYOUT = dict(
    template="plotly_white", hovermode="x unified",
    plot_bgcolor="rgba(0,0,0,0)", paper_bgcolor="rgba(0,0,0,0)",
    font=dict(family="'SF Pro Display', 'Segoe UI', sans-serif", size=12, color="#ffffff"),
)

_AXIS = dict(showgrid=True, gridcolor="rgba(255,255,255,0.1)", zeroline=False,
             tickfont=dict(color="#ffffff"))


def _normalize_name(name: str) -> str:
    return " ".join(name.replace("_", " ").split()).lower()


def _lookup(metrics: Dict[str, FinancialMetric], name: str) -> Optional[FinancialMetric]:
    """Exact key first, then a case/underscore-insensitive match."""
    if name in metrics:
        return metrics[name]
    wanted = _normalize_name(name)
    for key, metric in metrics.items():
        if _normalize_name(key) == wanted:
            return metric
    return None


def quarter_label(date_str: Optional[str]) -> Optional[str]:
    """``"2024-04-01"`` -> ``"Q2 2024"``; None when the date cannot be parsed."""
    if not date_str:
        return None
    ts = pd.to_datetime(date_str, errors="coerce")
    if pd.isna(ts):
        return None
    return f"Q{(ts.month - 1) // 3 + 1} {ts.year}"


def simulated_history(value, rng: np.random.Generator) -> List[float]:
    """
    Four illustrative prior quarters followed by the current value.

    One fluctuation factor in [0.85, 1.0) is drawn per metric and applied
    to every prior quarter. Non-numeric values give a flat zero series.
    """
    current = parse_numeric(value)
    if current is None:
        return [0.0] * (len(HISTORY_FACTORS) + 1)
    fluctuation = 0.85 + rng.random() * 0.15
    return [current * f * fluctuation for f in HISTORY_FACTORS] + [current]


def chart_financial_metrics(
    metrics: Dict[str, FinancialMetric],
    seed: Optional[int] = None,
    prior_year: Optional[int] = None,
) -> Optional[go.Figure]:
    """Line chart of the income-statement subset; None when none of it is present."""
    available = [(name, _lookup(metrics, name)) for name in LINE_CHART_METRICS]
    available = [(name, m) for name, m in available if m is not None]
    if not available:
        return None

    first = available[0][1]
    current_label = DEFAULT_PERIOD_LABEL
    if first.period_from and first.period_to:
        current_label = quarter_label(first.period_from) or DEFAULT_PERIOD_LABEL

    if prior_year is None:
        prior_year = datetime.now().year - 1
    periods = [f"Q{q} {prior_year}" for q in range(1, 5)] + [current_label]

    rng = np.random.default_rng(seed)
    fig = go.Figure()
    for i, (name, metric) in enumerate(available):
        fig.add_trace(go.Scatter(
            x=periods, y=simulated_history(metric.value, rng),
            mode="lines+markers", name=name,
            line=dict(color=SERIES_COLORS[i % len(SERIES_COLORS)], width=2, shape="spline"),
            marker=dict(size=7),
            hovertemplate="%{y:$,.0f}<extra>" + name + "</extra>",
        ))
    fig.update_layout(
        **_CHART_LAYOUT, height=400,
        margin=dict(l=70, r=20, t=40, b=40),
        title=dict(text="Financial Performance Metrics", font=dict(color="#ffffff")),
        legend=dict(orientation="h", y=1.12),
        xaxis=_AXIS,
        yaxis=dict(**_AXIS, title=dict(text="Amount ($)"), tickprefix="$", tickformat="~s"),
    )
    return fig


def chart_cash_flow_trend(sample: CashFlowSample = SAMPLE_CASH_FLOW) -> go.Figure:
    fig = go.Figure(go.Scatter(
        x=sample.periods, y=sample.operating_cash_flow,
        mode="lines+markers", name="Cash Flow from Operating Activities",
        line=dict(color=BLUE, width=2, shape="spline"),
        fill="tozeroy", fillcolor="rgba(10,124,255,0.15)",
        hovertemplate="%{y:$,.0f}<extra></extra>",
    ))
    fig.update_layout(
        **_CHART_LAYOUT, height=400,
        margin=dict(l=70, r=20, t=40, b=40),
        title=dict(text="Cash Flow from Operating Activities Trend", font=dict(color="#ffffff")),
        showlegend=False,
        xaxis=_AXIS,
        yaxis=dict(**_AXIS, title=dict(text="Amount ($)"), rangemode="tozero"),
    )
    return fig


def chart_cash_flows(sample: CashFlowSample = SAMPLE_CASH_FLOW) -> go.Figure:
    """Inflows stacked above zero, outflows negated and stacked below."""
    inflow_colors = [TEAL, BLUE, "#AF52DE"]
    outflow_colors = [DOWN, ORANGE, "#FFD60A"]
    fig = go.Figure()
    for color, (activity, values) in zip(inflow_colors, sample.inflows.items()):
        fig.add_trace(go.Bar(
            x=sample.periods, y=list(values), name=f"{activity} Inflows",
            marker_color=color,
        ))
    for color, (activity, values) in zip(outflow_colors, sample.outflows.items()):
        fig.add_trace(go.Bar(
            x=sample.periods, y=[-v for v in values], name=f"{activity} Outflows",
            marker_color=color,
        ))
    fig.update_layout(
        **_CHART_LAYOUT, height=400, barmode="relative",
        margin=dict(l=70, r=20, t=40, b=40),
        title=dict(text="Cash Inflows and Outflows", font=dict(color="#ffffff")),
        legend=dict(orientation="h", y=1.12),
        xaxis=dict(**_AXIS, title=dict(text="Period")),
        yaxis=dict(**_AXIS, title=dict(text="Amount ($)")),
    )
    return fig


def waterfall_colors(values: List[float]) -> List[str]:
    """First bar is the start, last bar is the end; between them sign decides."""
    colors = []
    for i, v in enumerate(values):
        if i == 0:
            colors.append(BLUE)
        elif i == len(values) - 1:
            colors.append(TEAL)
        else:
            colors.append(UP if v >= 0 else DOWN)
    return colors


def chart_cash_components(sample: CashFlowSample = SAMPLE_CASH_FLOW) -> go.Figure:
    values = list(sample.component_values)
    fig = go.Figure(go.Bar(
        x=sample.component_labels, y=values,
        marker_color=waterfall_colors(values),
        text=[f"${v:,.0f}" if v >= 0 else f"-${abs(v):,.0f}" for v in values],
        textposition="outside",
        hovertemplate="%{x}: %{y:$,.0f}<extra></extra>",
    ))
    fig.update_layout(
        **_CHART_LAYOUT, height=400,
        margin=dict(l=70, r=20, t=40, b=60),
        title=dict(text="Cash Flow Components Breakdown", font=dict(color="#ffffff")),
        showlegend=False,
        xaxis=_AXIS,
        yaxis=dict(**_AXIS, title=dict(text="Amount ($)")),
    )
    return fig
