"""In-memory collaborators with fixed or hand-set values."""

from __future__ import annotations

from typing import Hashable

from src.data.constants import (
    DEFAULT_POOLS,
    DEFAULT_WEEKLY_RATES,
)
from src.data.interfaces import BaseRateSource, PoolInfo, PoolValue


class StaticBaseRateSource(BaseRateSource):
    """Base rate source backed by a dict of oracle id -> bps."""

    def __init__(self, rates: dict[Hashable, int] | None = None) -> None:
        self._rates: dict[Hashable, int] = dict(
            DEFAULT_WEEKLY_RATES if rates is None else rates
        )

    def set_rate(self, oracle_id: Hashable, bps: int) -> None:
        self._rates[oracle_id] = bps

    def weekly_rate(self, oracle_id: Hashable) -> int:
        return self._rates[oracle_id]


class StaticPoolInfo(PoolInfo):
    """Pool state backed by a dict of pool id -> (liquidity ratio, value)."""

    def __init__(
        self,
        pools: dict[Hashable, tuple[int, PoolValue]] | None = None,
    ) -> None:
        self._pools: dict[Hashable, tuple[int, PoolValue]] = dict(
            DEFAULT_POOLS if pools is None else pools
        )

    def set_pool(
        self,
        pool_id: Hashable,
        liquidity_ratio_bps: int,
        value: int,
        decimals: int,
    ) -> None:
        self._pools[pool_id] = (liquidity_ratio_bps, PoolValue(value, decimals))

    def set_utilization(self, pool_id: Hashable, utilization_bps: int) -> None:
        """Convenience setter: liquidity ratio = 10000 - utilization."""
        _, value = self._pools[pool_id]
        self._pools[pool_id] = (10_000 - utilization_bps, value)

    def liquidity_ratio_bps(self, pool_id: Hashable) -> int:
        return self._pools[pool_id][0]

    def value_in_own_decimals(self, pool_id: Hashable) -> PoolValue:
        return self._pools[pool_id][1]
