"""Rate & limit engine: config store + calculators + collaborators."""

from __future__ import annotations

import logging
from typing import Any, Callable, Hashable

from src.data.interfaces import BaseRateSource, PoolInfo, PoolValue
from src.engine.borrow_limit import borrow_limit_adjustment, compute_borrow_limit
from src.engine.config import ConfigStore, RateConfig
from src.engine.errors import CollaboratorUnavailable, InvalidInput, RateEngineError
from src.engine.events import ConfigObserver
from src.engine.fixed_point import check_uint
from src.engine.rate import (
    combined_rate,
    credit_score_adjustment,
    fixed_term_loan_adjustment,
    pool_basic_rate,
)
from src.engine.utilization import utilization_adjustment

logger = logging.getLogger(__name__)


class RateEngine:
    """Computes borrower rates and borrow limits for lending pools.

    Each compute call reads one configuration snapshot and fresh collaborator
    values; nothing computed is stored. Setters take the caller identity as
    their first argument and are restricted to the configured authority.

    Parameters
    ----------
    authority : Hashable
        Identity allowed to change configuration.
    rate_source : BaseRateSource
        Supplies weekly base rates for bound oracles.
    pool_info : PoolInfo
        Supplies pool liquidity ratio, value and decimals.
    config : RateConfig | None
        Initial configuration (defaults when omitted).
    observers : list[ConfigObserver] | None
        Callables notified after each successful change.
    """

    def __init__(
        self,
        authority: Hashable,
        rate_source: BaseRateSource,
        pool_info: PoolInfo,
        config: RateConfig | None = None,
        observers: list[ConfigObserver] | None = None,
    ) -> None:
        self.store = ConfigStore(authority, config, observers)
        self._rate_source = rate_source
        self._pool_info = pool_info

    # ------------------------------------------------------------------
    # Collaborator reads
    # ------------------------------------------------------------------

    def _read(self, description: str, fetcher: Callable[..., Any], *args: Any) -> Any:
        try:
            return fetcher(*args)
        except RateEngineError:
            raise
        except Exception as exc:
            logger.warning("Collaborator read failed for %s", description, exc_info=True)
            raise CollaboratorUnavailable(f"Collaborator read failed for {description}") from exc

    def _liquidity_ratio(self, pool_id: Hashable) -> int:
        return self._read(
            f"liquidity_ratio:{pool_id}", self._pool_info.liquidity_ratio_bps, pool_id
        )

    def _pool_value(self, pool_id: Hashable) -> PoolValue:
        return self._read(
            f"pool_value:{pool_id}", self._pool_info.value_in_own_decimals, pool_id
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def config(self) -> RateConfig:
        return self.store.snapshot()

    @property
    def authority(self) -> Hashable:
        return self.store.authority

    def subscribe(self, observer: ConfigObserver) -> None:
        self.store.notifier.subscribe(observer)

    def base_rate_oracle(self, pool_id: Hashable) -> Hashable | None:
        return self.store.base_rate_oracle(pool_id)

    def set_risk_premium(self, caller: Hashable, bps: int) -> None:
        self.store.set_risk_premium(caller, bps)

    def set_credit_adjustment_coefficient(self, caller: Hashable, coefficient: int) -> None:
        self.store.set_credit_adjustment_coefficient(caller, coefficient)

    def set_utilization_adjustment_coefficient(self, caller: Hashable, coefficient: int) -> None:
        self.store.set_utilization_adjustment_coefficient(caller, coefficient)

    def set_utilization_adjustment_power(self, caller: Hashable, power: int) -> None:
        self.store.set_utilization_adjustment_power(caller, power)

    def set_fixed_term_loan_adjustment_coefficient(self, caller: Hashable, bps: int) -> None:
        self.store.set_fixed_term_loan_adjustment_coefficient(caller, bps)

    def set_borrow_limit_config(
        self,
        caller: Hashable,
        score_floor: int,
        limit_adjustment_power: int,
        tvl_limit_coefficient: int,
        pool_value_limit_coefficient: int,
    ) -> None:
        self.store.set_borrow_limit_config(
            caller,
            score_floor,
            limit_adjustment_power,
            tvl_limit_coefficient,
            pool_value_limit_coefficient,
        )

    def set_base_rate_oracle(
        self, caller: Hashable, pool_id: Hashable, oracle_id: Hashable
    ) -> None:
        self.store.set_base_rate_oracle(caller, pool_id, oracle_id)

    def transfer_authority(self, caller: Hashable, new_authority: Hashable) -> None:
        self.store.transfer_authority(caller, new_authority)

    # ------------------------------------------------------------------
    # Rates
    # ------------------------------------------------------------------

    def secured_rate(self, pool_id: Hashable) -> int:
        """Weekly base rate from the pool's bound oracle."""
        oracle_id = self.store.require_oracle(pool_id)
        weekly = self._read(f"weekly_rate:{oracle_id}", self._rate_source.weekly_rate, oracle_id)
        try:
            return check_uint(weekly, name="weekly_rate")
        except InvalidInput as exc:
            logger.warning("Oracle %r returned an invalid rate: %r", oracle_id, weekly)
            raise CollaboratorUnavailable(
                f"Oracle {oracle_id!r} returned an invalid rate"
            ) from exc

    def utilization_adjustment_rate(self, pool_id: Hashable) -> int:
        return utilization_adjustment(self._liquidity_ratio(pool_id), self.config)

    def credit_score_adjustment_rate(self, score: int) -> int:
        return credit_score_adjustment(score, self.config)

    def pool_basic_rate(self, pool_id: Hashable) -> int:
        config = self.config
        base = self.secured_rate(pool_id)
        return pool_basic_rate(base, self._liquidity_ratio(pool_id), config)

    def rate(self, pool_id: Hashable, score: int) -> int:
        """Borrower rate in bps for *pool_id*, capped at the maximum rate."""
        config = self.config
        base = self.secured_rate(pool_id)
        result = combined_rate(base, self._liquidity_ratio(pool_id), score, config)
        logger.debug("rate(%r, score=%d) = %d bps", pool_id, score, result)
        return result

    def fixed_term_loan_adjustment(self, term_seconds: int) -> int:
        return fixed_term_loan_adjustment(term_seconds, self.config)

    # ------------------------------------------------------------------
    # Limits
    # ------------------------------------------------------------------

    def borrow_limit_adjustment(self, score: int) -> int:
        return borrow_limit_adjustment(score, self.config)

    def borrow_limit(
        self,
        pool_id: Hashable,
        score: int,
        borrowed_amount: int,
        total_tvl: int,
        already_borrowed: int,
        tvl_decimals: int | None = None,
    ) -> int:
        """Further amount the borrower may draw from *pool_id*, in pool decimals.

        ``borrowed_amount`` is the nominal credit line in 18-decimal units.
        ``total_tvl`` is in pool decimals unless ``tvl_decimals`` says otherwise.
        """
        config = self.config
        value = self._pool_value(pool_id)
        result = compute_borrow_limit(
            score=score,
            credit_line=borrowed_amount,
            total_tvl=total_tvl,
            already_borrowed=already_borrowed,
            pool_value=value.amount,
            pool_decimals=value.decimals,
            config=config,
            tvl_decimals=tvl_decimals,
        )
        logger.debug("borrow_limit(%r, score=%d) = %d", pool_id, score, result)
        return result
