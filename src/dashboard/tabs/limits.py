"""Borrow limit page — score curve and the three ceilings."""

import streamlit as st

from src.dashboard.components.charts import ceilings_chart, limit_adjustment_chart
from src.dashboard.components.metrics_cards import format_amount, format_bps, kpi_row
from src.data.interfaces import PoolValue
from src.engine.borrow_limit import borrow_limit_ceilings, limit_adjustment_curve
from src.engine.constants import NORMALIZED_DECIMALS
from src.engine.errors import RateEngineError
from src.engine.rate_engine import RateEngine


def render_limits(
    engine: RateEngine, pool_id: str, score: int, pool_value: PoolValue
) -> None:
    """Render the borrow limit page.

    Credit line and TVL are entered in USD and passed as 18-decimal amounts.
    """
    st.header("Borrow Limit")

    decimals = pool_value.decimals
    col1, col2, col3 = st.columns(3)
    with col1:
        credit_line = st.number_input(
            "Credit Line (USD)", min_value=0.0, value=1_000_000.0, step=10_000.0
        )
    with col2:
        total_tvl = st.number_input(
            "Protocol TVL (USD)", min_value=0.0, value=100_000_000.0, step=1_000_000.0
        )
    with col3:
        borrowed = st.number_input("Already Borrowed", min_value=0.0, value=0.0, step=10_000.0)

    credit_line_raw = int(credit_line * 10**NORMALIZED_DECIMALS)
    tvl_raw = int(total_tvl * 10**NORMALIZED_DECIMALS)
    borrowed_raw = int(borrowed * 10**decimals)

    try:
        adjustment = engine.borrow_limit_adjustment(score)
        limit = engine.borrow_limit(
            pool_id,
            score,
            credit_line_raw,
            tvl_raw,
            borrowed_raw,
            tvl_decimals=NORMALIZED_DECIMALS,
        )
    except RateEngineError as exc:
        st.error(f"Borrow limit unavailable: {exc}")
        return

    config = engine.config
    floor = config.borrow_limit.score_floor
    kpi_row(
        [
            ("Available to Borrow", format_amount(limit, decimals), None),
            ("Score Adjustment", format_bps(adjustment), None),
            ("Score Floor", str(floor), None if score >= floor else "below floor"),
        ]
    )

    if score >= floor:
        ceilings = borrow_limit_ceilings(
            score,
            credit_line_raw,
            tvl_raw,
            pool_value.amount,
            decimals,
            config,
            tvl_decimals=NORMALIZED_DECIMALS,
        )
        amounts = {
            "Score": ceilings.score,
            "TVL": ceilings.tvl,
            "Pool value": ceilings.pool_value,
        }
        st.plotly_chart(
            ceilings_chart(
                {name: amount / 10**decimals for name, amount in amounts.items()},
                already_borrowed=borrowed,
            ),
            use_container_width=True,
        )

    st.divider()
    st.plotly_chart(
        limit_adjustment_chart(limit_adjustment_curve(config), current_score=score),
        use_container_width=True,
    )
