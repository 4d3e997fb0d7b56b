"""Tests for the engine facade wiring config, calculators and collaborators."""

from unittest.mock import MagicMock

import pytest

from src.data.interfaces import BaseRateSource, PoolInfo, PoolValue
from src.data.static_params import StaticBaseRateSource, StaticPoolInfo
from src.engine.constants import DAY
from src.engine.errors import (
    CollaboratorUnavailable,
    NoOracleBound,
    RateEngineError,
    Unauthorized,
)
from src.engine.events import ConfigChange
from src.engine.rate_engine import RateEngine

OWNER = "owner"
BORROWER = "borrower"
POOL = "pool"
ORACLE = "oracle"
ETH = 10**18
USDC = 10**6


@pytest.fixture
def rate_source() -> StaticBaseRateSource:
    return StaticBaseRateSource({ORACLE: 300})


@pytest.fixture
def pool_info() -> StaticPoolInfo:
    return StaticPoolInfo({POOL: (5_000, PoolValue(10_000_000 * ETH, 18))})


@pytest.fixture
def engine(rate_source: StaticBaseRateSource, pool_info: StaticPoolInfo) -> RateEngine:
    engine = RateEngine(OWNER, rate_source, pool_info)
    engine.set_base_rate_oracle(OWNER, POOL, ORACLE)
    return engine


class TestInitializer:
    def test_authority(self, engine: RateEngine) -> None:
        assert engine.authority == OWNER

    def test_defaults(self, engine: RateEngine) -> None:
        config = engine.config
        assert config.risk_premium == 200
        assert config.credit_adjustment_coefficient == 1000
        assert config.utilization_adjustment_coefficient == 50
        assert config.utilization_adjustment_power == 2


class TestSetters:
    def test_set_and_read_back(self, engine: RateEngine) -> None:
        engine.set_risk_premium(OWNER, 300)
        engine.set_credit_adjustment_coefficient(OWNER, 2000)
        engine.set_utilization_adjustment_coefficient(OWNER, 100)
        engine.set_utilization_adjustment_power(OWNER, 3)
        engine.set_fixed_term_loan_adjustment_coefficient(OWNER, 50)
        engine.set_borrow_limit_config(OWNER, 1, 2, 3, 4)

        config = engine.config
        assert config.risk_premium == 300
        assert config.credit_adjustment_coefficient == 2000
        assert config.utilization_adjustment_coefficient == 100
        assert config.utilization_adjustment_power == 3
        assert config.fixed_term_loan_adjustment_coefficient == 50
        assert config.borrow_limit.as_tuple() == (1, 2, 3, 4)

    def test_oracle_binding(self, engine: RateEngine) -> None:
        assert engine.base_rate_oracle(POOL) == ORACLE

    def test_non_authority_rejected(self, engine: RateEngine) -> None:
        with pytest.raises(Unauthorized):
            engine.set_risk_premium(BORROWER, 0)
        with pytest.raises(Unauthorized):
            engine.set_base_rate_oracle(BORROWER, POOL, "other")

    def test_subscriber_receives_changes(self, engine: RateEngine) -> None:
        received: list[ConfigChange] = []
        engine.subscribe(received.append)
        engine.set_risk_premium(OWNER, 300)
        assert received == [ConfigChange("RiskPremiumChanged", (300,))]

    def test_transfer_authority(self, engine: RateEngine) -> None:
        engine.transfer_authority(OWNER, BORROWER)
        engine.set_risk_premium(BORROWER, 1)
        assert engine.config.risk_premium == 1


class TestRate:
    def test_calculates_rate(self, engine: RateEngine) -> None:
        engine.set_risk_premium(OWNER, 100)
        # 300 + 100 + 143 + 150
        assert engine.rate(POOL, 223) == 693

    def test_caps_rate(self, engine: RateEngine, pool_info: StaticPoolInfo) -> None:
        engine.set_risk_premium(OWNER, 22_600)
        pool_info.set_utilization(POOL, 9_500)
        # min(300 + 22600 + 7225 + 19950 = 50075, 50000)
        assert engine.rate(POOL, 31) == 50_000

    def test_components(self, engine: RateEngine) -> None:
        assert engine.secured_rate(POOL) == 300
        assert engine.utilization_adjustment_rate(POOL) == 150
        assert engine.credit_score_adjustment_rate(223) == 143
        assert engine.pool_basic_rate(POOL) == 300 + 200 + 150

    def test_reads_fresh_pool_state(self, engine: RateEngine, pool_info: StaticPoolInfo) -> None:
        assert engine.utilization_adjustment_rate(POOL) == 150
        pool_info.set_utilization(POOL, 9_000)
        assert engine.utilization_adjustment_rate(POOL) == 4950

    def test_reads_fresh_base_rate(self, engine: RateEngine, rate_source: StaticBaseRateSource) -> None:
        rate_source.set_rate(ORACLE, 400)
        assert engine.secured_rate(POOL) == 400

    def test_no_oracle_bound(self, engine: RateEngine, pool_info: StaticPoolInfo) -> None:
        pool_info.set_pool("other", 5_000, 10**18, 18)
        with pytest.raises(NoOracleBound):
            engine.rate("other", 200)

    def test_oracle_failure(self, pool_info: StaticPoolInfo) -> None:
        source = MagicMock(spec=BaseRateSource)
        source.weekly_rate.side_effect = ConnectionError("node down")
        engine = RateEngine(OWNER, source, pool_info)
        engine.set_base_rate_oracle(OWNER, POOL, ORACLE)

        with pytest.raises(CollaboratorUnavailable) as excinfo:
            engine.rate(POOL, 200)
        assert isinstance(excinfo.value.__cause__, ConnectionError)

    @pytest.mark.parametrize("weekly", [-300, 3.5, "300", None])
    def test_invalid_oracle_rate(self, pool_info: StaticPoolInfo, weekly) -> None:
        source = MagicMock(spec=BaseRateSource)
        source.weekly_rate.return_value = weekly
        engine = RateEngine(OWNER, source, pool_info)
        engine.set_base_rate_oracle(OWNER, POOL, ORACLE)

        with pytest.raises(CollaboratorUnavailable):
            engine.rate(POOL, 200)
        with pytest.raises(CollaboratorUnavailable):
            engine.secured_rate(POOL)

    def test_pool_failure(self, rate_source: StaticBaseRateSource) -> None:
        pools = MagicMock(spec=PoolInfo)
        pools.liquidity_ratio_bps.side_effect = TimeoutError()
        engine = RateEngine(OWNER, rate_source, pools)
        engine.set_base_rate_oracle(OWNER, POOL, ORACLE)

        with pytest.raises(CollaboratorUnavailable):
            engine.utilization_adjustment_rate(POOL)

    def test_engine_errors_pass_through(self, rate_source: StaticBaseRateSource) -> None:
        pools = MagicMock(spec=PoolInfo)
        pools.liquidity_ratio_bps.side_effect = CollaboratorUnavailable("stale")
        engine = RateEngine(OWNER, rate_source, pools)
        with pytest.raises(CollaboratorUnavailable, match="stale"):
            engine.utilization_adjustment_rate(POOL)

    def test_all_errors_share_base(self, engine: RateEngine) -> None:
        with pytest.raises(RateEngineError):
            engine.rate("missing", 200)


class TestFixedTerm:
    def test_fixed_term_adjustment(self, engine: RateEngine) -> None:
        engine.set_fixed_term_loan_adjustment_coefficient(OWNER, 25)
        assert engine.fixed_term_loan_adjustment(30 * DAY) == 25
        assert engine.fixed_term_loan_adjustment(180 * DAY) == 150
        assert engine.fixed_term_loan_adjustment(30 * DAY - 1) == 0

    def test_rate_excludes_term(self, engine: RateEngine) -> None:
        before = engine.rate(POOL, 223)
        engine.set_fixed_term_loan_adjustment_coefficient(OWNER, 1000)
        assert engine.rate(POOL, 223) == before


class TestBorrowLimit:
    def test_limited_by_score(self, engine: RateEngine) -> None:
        limit = engine.borrow_limit(POOL, 191, 100 * ETH, 20_000_000 * ETH, 0)
        assert limit == 8051 * 10**16

    def test_depends_on_pool_decimals(self, engine: RateEngine, pool_info: StaticPoolInfo) -> None:
        pool_info.set_pool(POOL, 5_000, 10_000_000 * ETH, 6)
        limit = engine.borrow_limit(POOL, 191, 100 * ETH, 20_000_000 * USDC, 0)
        assert limit == 80_510_000

    def test_limited_by_total_tvl(self, engine: RateEngine) -> None:
        tvl = 10 * ETH
        limit = engine.borrow_limit(POOL, 191, 100 * ETH, tvl, 0)
        assert limit == tvl * 15 // 100 * 8051 // 10000

    def test_limited_by_pool_value(self, engine: RateEngine, pool_info: StaticPoolInfo) -> None:
        pool_info.set_pool(POOL, 5_000, 100 * USDC, 18)
        limit = engine.borrow_limit(POOL, 191, 100 * ETH, 20_000_000 * ETH, 0)
        assert limit == 100 * USDC * 15 // 100

    def test_subtracts_borrowed(self, engine: RateEngine) -> None:
        limit = engine.borrow_limit(POOL, 191, 100 * ETH, 20_000_000 * ETH, 100)
        assert limit == 8051 * 10**16 - 100

    def test_zero_when_over_borrowed(self, engine: RateEngine) -> None:
        assert engine.borrow_limit(POOL, 191, 100 * ETH, 20_000_000 * ETH, 100 * ETH) == 0

    def test_tvl_decimals(self, engine: RateEngine, pool_info: StaticPoolInfo) -> None:
        pool_info.set_pool(POOL, 5_000, 10_000_000 * USDC, 6)
        limit = engine.borrow_limit(POOL, 191, 100 * ETH, 10 * ETH, 0, tvl_decimals=18)
        assert limit == 1_207_650

    def test_uses_current_config(self, engine: RateEngine) -> None:
        engine.set_borrow_limit_config(OWNER, 200, 7500, 1500, 1500)
        assert engine.borrow_limit(POOL, 191, 100 * ETH, 20_000_000 * ETH, 0) == 0

    def test_adjustment(self, engine: RateEngine) -> None:
        assert engine.borrow_limit_adjustment(191) == 8051
        assert engine.borrow_limit_adjustment(0) == 0
        assert engine.borrow_limit_adjustment(255) == 10_000
