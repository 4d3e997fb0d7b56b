"""Reusable Plotly chart components."""

import pandas as pd
import plotly.graph_objects as go


def utilization_curve_chart(
    df: pd.DataFrame,
    current_utilization: float | None = None,
    max_rate: int | None = None,
    title: str = "Utilization Adjustment",
) -> go.Figure:
    """Create an interactive utilization adjustment chart.

    Args:
        df: DataFrame with columns: utilization, adjustment_bps.
        current_utilization: If provided, marks current utilization on chart.
        max_rate: If provided, draws the global rate cap.
        title: Chart title.
    """
    fig = go.Figure()

    fig.add_trace(
        go.Scatter(
            x=df["utilization"] * 100,
            y=df["adjustment_bps"],
            name="Adjustment",
            line=dict(color="#ef4444", width=2),
            hovertemplate="Utilization: %{x:.1f}%<br>Adjustment: %{y} bps<extra></extra>",
        )
    )

    if current_utilization is not None:
        fig.add_vline(
            x=current_utilization * 100,
            line_dash="dash",
            line_color="#6b7280",
            annotation_text=f"Current: {current_utilization*100:.1f}%",
        )

    if max_rate is not None:
        fig.add_hline(
            y=max_rate,
            line_dash="dot",
            line_color="#f59e0b",
            annotation_text=f"Cap: {max_rate} bps",
        )

    fig.update_layout(
        title=title,
        xaxis_title="Utilization (%)",
        yaxis_title="Adjustment (bps)",
        yaxis_type="log",
        hovermode="x unified",
        template="plotly_dark",
        height=450,
    )

    return fig


def rate_breakdown_chart(components: dict[str, int], total: int) -> go.Figure:
    """Stacked bar of the rate components next to the capped total."""
    fig = go.Figure()

    colors = ["#3b82f6", "#8b5cf6", "#f59e0b", "#ef4444", "#22c55e"]
    for (label, bps), color in zip(components.items(), colors):
        fig.add_trace(
            go.Bar(
                x=["Components"],
                y=[bps],
                name=label,
                marker_color=color,
                hovertemplate=f"{label}: %{{y}} bps<extra></extra>",
            )
        )

    fig.add_trace(
        go.Bar(
            x=["Rate (capped)"],
            y=[total],
            name="Rate",
            marker_color="#e5e7eb",
            hovertemplate="Rate: %{y} bps<extra></extra>",
        )
    )

    fig.update_layout(
        barmode="stack",
        yaxis_title="bps",
        template="plotly_dark",
        height=400,
    )

    return fig


def limit_adjustment_chart(df: pd.DataFrame, current_score: int | None = None) -> go.Figure:
    """Score adjustment curve with ineligible scores greyed out.

    Args:
        df: DataFrame with columns: score, adjustment_bps, eligible.
        current_score: If provided, marks the borrower's score.
    """
    fig = go.Figure()

    eligible = df[df["eligible"]]
    ineligible = df[~df["eligible"]]

    fig.add_trace(
        go.Scatter(
            x=eligible["score"],
            y=eligible["adjustment_bps"] / 100,
            name="Eligible",
            line=dict(color="#22c55e", width=2),
            hovertemplate="Score: %{x}<br>Adjustment: %{y:.2f}%<extra></extra>",
        )
    )
    fig.add_trace(
        go.Scatter(
            x=ineligible["score"],
            y=ineligible["adjustment_bps"] / 100,
            name="Below floor",
            line=dict(color="#6b7280", width=2, dash="dot"),
            hovertemplate="Score: %{x}<br>Adjustment: %{y:.2f}%<extra></extra>",
        )
    )

    if current_score is not None:
        fig.add_vline(
            x=current_score,
            line_dash="dash",
            line_color="#6b7280",
            annotation_text=f"Score: {current_score}",
        )

    fig.update_layout(
        title="Borrow Limit Score Adjustment",
        xaxis_title="Borrower Score",
        yaxis_title="Adjustment (%)",
        hovermode="x unified",
        template="plotly_dark",
        height=450,
    )

    return fig


def ceilings_chart(ceilings: dict[str, float], already_borrowed: float) -> go.Figure:
    """Horizontal bars comparing the three ceilings with the drawn amount."""
    binding = min(ceilings, key=ceilings.get)
    colors = ["#ef4444" if name == binding else "#3b82f6" for name in ceilings]

    fig = go.Figure(
        go.Bar(
            x=list(ceilings.values()),
            y=list(ceilings.keys()),
            orientation="h",
            marker_color=colors,
            hovertemplate="%{y}: %{x:,.2f}<extra></extra>",
        )
    )

    fig.add_vline(
        x=already_borrowed,
        line_dash="dash",
        line_color="#f59e0b",
        annotation_text="Already borrowed",
    )

    fig.update_layout(
        xaxis_title="Amount (pool token)",
        template="plotly_dark",
        height=300,
        margin=dict(t=30, b=30, l=30, r=30),
    )

    return fig
