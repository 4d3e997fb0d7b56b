"""Factory for creating the engine's collaborators."""

from __future__ import annotations

import logging
import os

from src.data.interfaces import BaseRateSource, PoolInfo
from src.data.static_params import StaticBaseRateSource, StaticPoolInfo

logger = logging.getLogger(__name__)


def resolve_rpc_url(rpc_url: str | None = None) -> str | None:
    """Explicit URL, else ``RATE_ENGINE_RPC_URL``, else ``ETH_RPC_URL``."""
    return rpc_url or os.environ.get("RATE_ENGINE_RPC_URL") or os.environ.get("ETH_RPC_URL")


def create_provider(
    use_onchain: bool = False,
    rpc_url: str | None = None,
) -> tuple[BaseRateSource, PoolInfo]:
    """Create a base rate source and pool info, selecting static or on-chain.

    Parameters
    ----------
    use_onchain : bool
        If True, attempt to create web3-backed collaborators.
    rpc_url : str | None
        Ethereum JSON-RPC URL. Falls back to the ``RATE_ENGINE_RPC_URL`` and
        ``ETH_RPC_URL`` environment variables when not supplied.

    Returns
    -------
    tuple[BaseRateSource, PoolInfo]
        On-chain collaborators when requested and available, otherwise the
        static in-memory ones.
    """
    if not use_onchain:
        return StaticBaseRateSource(), StaticPoolInfo()

    resolved_url = resolve_rpc_url(rpc_url)
    if not resolved_url:
        logger.warning("On-chain data requested but no RPC URL provided; using static data")
        return StaticBaseRateSource(), StaticPoolInfo()

    try:
        from web3 import Web3

        from src.data.onchain_provider import OnChainBaseRateSource, OnChainPoolInfo

        w3 = Web3(Web3.HTTPProvider(resolved_url))
        return OnChainBaseRateSource(w3=w3), OnChainPoolInfo(w3=w3)
    except Exception:
        logger.warning("Failed to create on-chain collaborators; using static data", exc_info=True)
        return StaticBaseRateSource(), StaticPoolInfo()
