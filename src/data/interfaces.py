"""Abstract collaborator interfaces consumed by the rate engine."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Hashable


@dataclass(frozen=True)
class PoolValue:
    """Pool value in the pool token's smallest unit."""

    amount: int
    decimals: int


class BaseRateSource(ABC):
    """Source of time-averaged base rates, addressed by oracle identifier."""

    @abstractmethod
    def weekly_rate(self, oracle_id: Hashable) -> int:
        """Weekly-averaged base rate in basis points."""


class PoolInfo(ABC):
    """Live state of lending pools."""

    @abstractmethod
    def liquidity_ratio_bps(self, pool_id: Hashable) -> int:
        """Share of pool value that is liquid, in bps (10000 = 0% utilized)."""

    @abstractmethod
    def value_in_own_decimals(self, pool_id: Hashable) -> PoolValue:
        """Total pool value and the pool token's decimals."""
