"""Rate & Limit Engine Dashboard — Main Streamlit entry point."""

import logging
import os
from pathlib import Path
from typing import Hashable

import streamlit as st

# Load .env file if present (for RATE_ENGINE_RPC_URL, etc.)
_env_path = Path(__file__).resolve().parents[2] / ".env"
if _env_path.exists():
    for line in _env_path.read_text().splitlines():
        line = line.strip()
        if line and not line.startswith("#") and "=" in line:
            key, _, value = line.partition("=")
            os.environ.setdefault(key.strip(), value.strip())

from src.dashboard.components.sidebar import render_sidebar
from src.dashboard.tabs.limits import render_limits
from src.dashboard.tabs.rates import render_rates
from src.data.constants import POOL_ORACLES
from src.data.interfaces import PoolInfo, PoolValue
from src.data.provider_factory import create_provider
from src.engine.config import RateConfig
from src.engine.constants import BPS
from src.engine.events import log_change
from src.engine.rate_engine import RateEngine

DASHBOARD_AUTHORITY = "dashboard"

logger = logging.getLogger(__name__)


class _UtilizationOverride(PoolInfo):
    """Pool info that reports a fixed utilization for one pool."""

    def __init__(self, inner: PoolInfo, pool_id: Hashable, utilization_bps: int) -> None:
        self._inner = inner
        self._pool_id = pool_id
        self._liquidity_ratio = BPS - utilization_bps

    def liquidity_ratio_bps(self, pool_id: Hashable) -> int:
        if pool_id == self._pool_id:
            return self._liquidity_ratio
        return self._inner.liquidity_ratio_bps(pool_id)

    def value_in_own_decimals(self, pool_id: Hashable) -> PoolValue:
        return self._inner.value_in_own_decimals(pool_id)


def build_engine(rate_source, pool_info, config: RateConfig) -> RateEngine:
    """Engine owned by the dashboard with *config* applied through its setters."""
    engine = RateEngine(DASHBOARD_AUTHORITY, rate_source, pool_info, observers=[log_change])
    for pool_id, oracle_id in POOL_ORACLES.items():
        engine.set_base_rate_oracle(DASHBOARD_AUTHORITY, pool_id, oracle_id)

    engine.set_risk_premium(DASHBOARD_AUTHORITY, config.risk_premium)
    engine.set_credit_adjustment_coefficient(DASHBOARD_AUTHORITY, config.credit_adjustment_coefficient)
    engine.set_utilization_adjustment_coefficient(
        DASHBOARD_AUTHORITY, config.utilization_adjustment_coefficient
    )
    engine.set_utilization_adjustment_power(DASHBOARD_AUTHORITY, config.utilization_adjustment_power)
    engine.set_fixed_term_loan_adjustment_coefficient(
        DASHBOARD_AUTHORITY, config.fixed_term_loan_adjustment_coefficient
    )
    engine.set_borrow_limit_config(DASHBOARD_AUTHORITY, *config.borrow_limit.as_tuple())
    return engine


def main() -> None:
    st.set_page_config(
        page_title="Rate & Limit Engine",
        page_icon="📊",
        layout="wide",
    )

    st.title("Rate & Limit Engine")
    st.caption("Risk-based borrower rates and credit limits per lending pool")

    use_onchain = st.sidebar.checkbox("Use On-Chain Data", value=False, key="use_onchain")
    rate_source, pool_info = create_provider(use_onchain=use_onchain)

    if use_onchain:
        connected = getattr(pool_info, "is_connected", False)
        if connected:
            st.sidebar.success("On-chain: connected")
        else:
            st.sidebar.error("On-chain: unavailable, showing static data")

    params = render_sidebar(list(POOL_ORACLES), RateConfig())

    if params.utilization_override is not None:
        pool_info = _UtilizationOverride(pool_info, params.pool_id, params.utilization_override)

    engine = build_engine(rate_source, pool_info, params.config)

    try:
        utilization_bps = BPS - pool_info.liquidity_ratio_bps(params.pool_id)
        pool_value = pool_info.value_in_own_decimals(params.pool_id)
    except Exception as exc:
        logger.warning("Pool read failed for %s", params.pool_id, exc_info=True)
        st.error(f"Cannot read pool {params.pool_id}: {exc}")
        return

    tab1, tab2 = st.tabs(["Rates", "Borrow Limit"])

    with tab1:
        render_rates(engine, params.pool_id, params.score, utilization_bps)

    with tab2:
        render_limits(engine, params.pool_id, params.score, pool_value)


if __name__ == "__main__":
    main()
