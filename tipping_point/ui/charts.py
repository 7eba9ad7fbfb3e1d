"""
Plotly figure builders for the results tabs.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from ..data.cohorts import BaselineStats
from ..model import ModelOutput
from ..scenarios import RevenueCurvePoint, ScenarioResult, SensitivityResult, revenue_curve_to_arrays

POSITIVE_COLOR = "#28a745"
NEGATIVE_COLOR = "#dc3545"
NET_COLOR = "#1f77b4"


def build_waterfall_chart(output: ModelOutput) -> go.Figure:
    """Mechanical gain, behavioral loss and net change as a waterfall ($B)."""
    fig = go.Figure(
        go.Waterfall(
            orientation="v",
            measure=["relative", "relative", "total"],
            x=["Mechanical Gain", "Behavioral Loss", "Net Revenue"],
            y=[output.total_mechanical_gain / 1e9, -output.total_behavioral_loss / 1e9, 0],
            text=[
                f"${output.total_mechanical_gain / 1e9:+.2f}B",
                f"${-output.total_behavioral_loss / 1e9:+.2f}B",
                f"${output.net_revenue_change / 1e9:+.2f}B",
            ],
            textposition="outside",
            increasing={"marker": {"color": POSITIVE_COLOR}},
            decreasing={"marker": {"color": NEGATIVE_COLOR}},
            totals={"marker": {"color": NET_COLOR}},
            connector={"line": {"color": "#888"}},
        )
    )
    fig.update_layout(
        title="Revenue Waterfall",
        yaxis_title="Revenue Change ($ billions)",
        showlegend=False,
        height=400,
    )
    return fig


def build_revenue_curve_chart(points: Sequence[RevenueCurvePoint], current_rate: float) -> go.Figure:
    """Mechanical, behavioral and net revenue across surcharge rates."""
    arrays = revenue_curve_to_arrays(points)
    rates_pct = arrays["surcharge_rate"] * 100

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=rates_pct, y=arrays["mechanical_gain"] / 1e9,
        name="Mechanical gain", line=dict(color=POSITIVE_COLOR, dash="dash"),
    ))
    fig.add_trace(go.Scatter(
        x=rates_pct, y=-arrays["behavioral_loss"] / 1e9,
        name="Behavioral loss", line=dict(color=NEGATIVE_COLOR, dash="dash"),
    ))
    fig.add_trace(go.Scatter(
        x=rates_pct, y=arrays["net_revenue"] / 1e9,
        name="Net revenue", line=dict(color=NET_COLOR, width=3),
    ))
    fig.add_vline(x=current_rate * 100, line_dash="dot", line_color="gray",
                  annotation_text="Current", annotation_position="top")
    fig.add_hline(y=0, line_color="black", line_width=1)
    fig.update_layout(
        title="Revenue Curve by NYS Surcharge Rate",
        xaxis_title="Surcharge Rate (%)",
        yaxis_title="Revenue Change ($ billions)",
        hovermode="x unified",
        height=420,
    )
    return fig


def build_migration_chart(output: ModelOutput) -> go.Figure:
    """Projected migration share and leaving filers by cohort."""
    df = pd.DataFrame({
        "Cohort": [r.cohort.label for r in output.cohort_results],
        "Migration %": [r.migration_share * 100 for r in output.cohort_results],
        "Leaving Filers": [round(r.leaving_filers) for r in output.cohort_results],
    })
    fig = px.bar(
        df,
        x="Cohort",
        y="Migration %",
        hover_data=["Leaving Filers"],
        color="Migration %",
        color_continuous_scale="Reds",
    )
    fig.update_layout(
        title=f"Projected Out-Migration by Cohort ({output.time_horizon}-Year)",
        yaxis_title="Share of Filers Leaving (%)",
        height=400,
    )
    return fig


def build_cohort_impact_chart(output: ModelOutput) -> go.Figure:
    """Mechanical gain vs. migration loss per cohort ($M)."""
    labels = [r.cohort.label for r in output.cohort_results]
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=labels, y=[r.mechanical_gain / 1e6 for r in output.cohort_results],
        name="Mechanical gain", marker_color=POSITIVE_COLOR,
    ))
    fig.add_trace(go.Bar(
        x=labels, y=[-r.migration_loss / 1e6 for r in output.cohort_results],
        name="Migration loss", marker_color=NEGATIVE_COLOR,
    ))
    fig.update_layout(
        barmode="relative",
        title="Revenue Impact by Cohort",
        yaxis_title="$ millions",
        height=400,
    )
    return fig


def build_concentration_chart(stats: BaselineStats) -> go.Figure:
    """Cumulative revenue share against cumulative filer share, top down."""
    df = stats.concentration
    fig = go.Figure(go.Scatter(
        x=df["filer_pct_cumulative"] * 100,
        y=df["revenue_pct_cumulative"] * 100,
        mode="lines+markers",
        text=df["label"],
        hovertemplate="%{text}<br>Top %{x:.2f}% of filers<br>%{y:.1f}% of revenue<extra></extra>",
        line=dict(color=NET_COLOR),
    ))
    fig.update_layout(
        title="Revenue Concentration",
        xaxis_title="Cumulative Share of Filers (%)",
        yaxis_title="Cumulative Share of NYS + NYC PIT (%)",
        xaxis_type="log",
        height=400,
    )
    return fig


def build_scenario_chart(results: Sequence[ScenarioResult]) -> go.Figure:
    """Net revenue under each behavioral scenario ($B)."""
    nets = [r.output.net_revenue_change / 1e9 for r in results]
    fig = go.Figure(go.Bar(
        x=[r.label for r in results],
        y=nets,
        marker_color=[POSITIVE_COLOR if n >= 0 else NEGATIVE_COLOR for n in nets],
        text=[f"${n:+.2f}B" for n in nets],
        textposition="outside",
    ))
    fig.add_hline(y=0, line_color="black", line_width=1)
    fig.update_layout(
        title="Net Revenue by Behavioral Scenario",
        yaxis_title="Net Revenue Change ($ billions)",
        height=420,
    )
    return fig


def build_sensitivity_chart(result: SensitivityResult, title: str) -> go.Figure:
    """Net revenue across one parameter sweep ($B)."""
    fig = go.Figure(go.Scatter(
        x=result.parameter_values,
        y=result.net_revenues / 1e9,
        mode="lines+markers",
        line=dict(color=NET_COLOR),
    ))
    fig.add_hline(y=0, line_color="black", line_width=1)
    fig.update_layout(
        title=title,
        xaxis_title=result.parameter_name,
        yaxis_title="Net Revenue Change ($ billions)",
        height=320,
    )
    return fig
