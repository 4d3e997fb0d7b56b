"""On-chain collaborators reading pools and base rate oracles via web3.py.

Pool and oracle identifiers are contract addresses. Every read goes to the
node; nothing is cached, so the engine always sees the current block.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from src.data.contracts import BASE_RATE_ORACLE_ABI, POOL_ABI
from src.data.interfaces import BaseRateSource, PoolInfo, PoolValue
from src.engine.errors import CollaboratorUnavailable

logger = logging.getLogger(__name__)


class _Web3Reader:
    """Shared web3 connection with lazily built contract handles."""

    def __init__(self, rpc_url: str | None = None, w3: Any = None) -> None:
        if w3 is None:
            from web3 import Web3

            w3 = Web3(Web3.HTTPProvider(rpc_url))
        self._w3 = w3
        self._contracts: dict[tuple[str, str], Any] = {}

    def contract(self, address: str, kind: str, abi: list[dict]) -> Any:
        key = (kind, address)
        if key not in self._contracts:
            self._contracts[key] = self._w3.eth.contract(
                address=self._w3.to_checksum_address(address),
                abi=abi,
            )
        return self._contracts[key]

    def call(self, description: str, fetcher: Callable[[], Any]) -> Any:
        """Run an RPC read, converting any failure to ``CollaboratorUnavailable``."""
        try:
            return fetcher()
        except Exception as exc:
            logger.warning("RPC call failed for %s", description, exc_info=True)
            raise CollaboratorUnavailable(f"RPC call failed for {description}") from exc

    @property
    def is_connected(self) -> bool:
        try:
            return self._w3.is_connected()
        except Exception:
            return False


class OnChainBaseRateSource(BaseRateSource):
    """Reads ``getWeeklyAPY()`` from a time-averaged base rate oracle."""

    def __init__(self, rpc_url: str | None = None, w3: Any = None) -> None:
        self._reader = _Web3Reader(rpc_url, w3)

    def weekly_rate(self, oracle_id: str) -> int:
        oracle = self._reader.contract(oracle_id, "oracle", BASE_RATE_ORACLE_ABI)
        return int(
            self._reader.call(
                f"weekly_rate:{oracle_id}", oracle.functions.getWeeklyAPY().call
            )
        )

    @property
    def is_connected(self) -> bool:
        return self._reader.is_connected


class OnChainPoolInfo(PoolInfo):
    """Reads ``liquidRatio()``, ``poolValue()`` and ``decimals()`` from a pool."""

    def __init__(self, rpc_url: str | None = None, w3: Any = None) -> None:
        self._reader = _Web3Reader(rpc_url, w3)

    def liquidity_ratio_bps(self, pool_id: str) -> int:
        pool = self._reader.contract(pool_id, "pool", POOL_ABI)
        return int(
            self._reader.call(f"liquid_ratio:{pool_id}", pool.functions.liquidRatio().call)
        )

    def value_in_own_decimals(self, pool_id: str) -> PoolValue:
        pool = self._reader.contract(pool_id, "pool", POOL_ABI)

        def _fetch() -> PoolValue:
            value = pool.functions.poolValue().call()
            decimals = pool.functions.decimals().call()
            return PoolValue(amount=int(value), decimals=int(decimals))

        return self._reader.call(f"pool_value:{pool_id}", _fetch)

    @property
    def is_connected(self) -> bool:
        return self._reader.is_connected
