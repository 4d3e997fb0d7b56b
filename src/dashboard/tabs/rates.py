"""Rates page — rate breakdown, utilization curve and fixed-term schedule."""

import pandas as pd
import streamlit as st

from src.dashboard.components.charts import rate_breakdown_chart, utilization_curve_chart
from src.dashboard.components.metrics_cards import format_bps, kpi_row
from src.engine.constants import BPS
from src.engine.errors import RateEngineError
from src.engine.rate import fixed_term_schedule
from src.engine.rate_engine import RateEngine
from src.engine.utilization import utilization_curve


def render_rates(
    engine: RateEngine, pool_id: str, score: int, utilization_bps: int
) -> None:
    """Render the rates page."""
    st.header("Borrower Rate")

    config = engine.config
    try:
        base = engine.secured_rate(pool_id)
        utilization_adj = engine.utilization_adjustment_rate(pool_id)
        credit_adj = engine.credit_score_adjustment_rate(score)
        total = engine.rate(pool_id, score)
    except RateEngineError as exc:
        st.error(f"Rate unavailable: {exc}")
        return

    kpi_row(
        [
            ("Rate", format_bps(total), None),
            ("Base Rate", format_bps(base), None),
            ("Credit Adjustment", format_bps(credit_adj), None),
            ("Utilization Adjustment", format_bps(utilization_adj), None),
        ]
    )

    components = {
        "Base rate": base,
        "Risk premium": config.risk_premium,
        "Credit adjustment": credit_adj,
        "Utilization adjustment": utilization_adj,
    }
    st.plotly_chart(rate_breakdown_chart(components, total), use_container_width=True)

    st.divider()
    st.subheader("Utilization Adjustment Curve")

    fig = utilization_curve_chart(
        utilization_curve(config),
        current_utilization=utilization_bps / BPS,
        max_rate=config.max_rate,
    )
    st.plotly_chart(fig, use_container_width=True)

    st.divider()
    st.subheader("Fixed-Term Loan Adjustment")

    schedule = fixed_term_schedule(config, max_days=360)
    buckets = schedule[schedule["term_days"] % 30 == 0]
    st.table(
        pd.DataFrame(
            {
                "Term (days)": buckets["term_days"],
                "Adjustment": [format_bps(int(b)) for b in buckets["adjustment_bps"]],
                "Term Rate": [
                    format_bps(min(total + int(b), config.max_rate))
                    for b in buckets["adjustment_bps"]
                ],
            }
        )
    )

