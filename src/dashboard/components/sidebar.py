"""Sidebar parameter controls."""

from dataclasses import dataclass

import streamlit as st

from src.engine.config import BorrowLimitConfig, RateConfig


@dataclass
class SidebarParams:
    """User-controlled parameters from the sidebar."""

    pool_id: str
    score: int
    config: RateConfig
    utilization_override: int | None


def _int_input(label: str, value: int, max_value: int, step: int = 1) -> int:
    return int(
        st.sidebar.number_input(
            label, min_value=0, max_value=max_value, value=value, step=step
        )
    )


def render_sidebar(pool_ids: list[str], defaults: RateConfig) -> SidebarParams:
    """Render sidebar controls and return selected parameters.

    The engine configuration edited here is a what-if copy; it is applied to
    the dashboard's own engine through the authority setters in app.py.
    """
    st.sidebar.header("Borrower")

    pool_id = st.sidebar.selectbox("Pool", pool_ids)
    score = st.sidebar.slider("Borrower Score", min_value=0, max_value=255, value=191)

    st.sidebar.header("Rate Parameters")

    risk_premium = _int_input("Risk Premium (bps)", defaults.risk_premium, 50_000, 10)
    credit_coefficient = _int_input(
        "Credit Adjustment Coefficient", defaults.credit_adjustment_coefficient, 100_000, 50
    )
    util_coefficient = _int_input(
        "Utilization Adjustment Coefficient", defaults.utilization_adjustment_coefficient, 10_000, 5
    )
    util_power = _int_input("Utilization Adjustment Power", defaults.utilization_adjustment_power, 10)
    term_coefficient = _int_input(
        "Fixed-Term Coefficient (bps / 30d)", defaults.fixed_term_loan_adjustment_coefficient, 1_000, 5
    )

    st.sidebar.header("Borrow Limit Parameters")

    limits = defaults.borrow_limit
    score_floor = _int_input("Score Floor", limits.score_floor, 255)
    limit_power = _int_input("Limit Adjustment Power (bps)", limits.limit_adjustment_power, 40_000, 250)
    tvl_coefficient = _int_input("TVL Limit Coefficient (bps)", limits.tvl_limit_coefficient, 10_000, 50)
    pool_coefficient = _int_input(
        "Pool Value Limit Coefficient (bps)", limits.pool_value_limit_coefficient, 10_000, 50
    )

    st.sidebar.header("What-If Analysis")

    use_util_override = st.sidebar.checkbox("Override Pool Utilization", value=False)
    util_override: int | None = None
    if use_util_override:
        util_override = st.sidebar.slider(
            "Pool Utilization (%)", min_value=0, max_value=100, value=80
        ) * 100

    config = RateConfig(
        risk_premium=risk_premium,
        credit_adjustment_coefficient=credit_coefficient,
        utilization_adjustment_coefficient=util_coefficient,
        utilization_adjustment_power=util_power,
        fixed_term_loan_adjustment_coefficient=term_coefficient,
        borrow_limit=BorrowLimitConfig(
            score_floor=score_floor,
            limit_adjustment_power=limit_power,
            tvl_limit_coefficient=tvl_coefficient,
            pool_value_limit_coefficient=pool_coefficient,
        ),
        max_rate=defaults.max_rate,
    )

    return SidebarParams(
        pool_id=pool_id,
        score=score,
        config=config,
        utilization_override=util_override,
    )
