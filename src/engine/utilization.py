"""Utilization curve: pool liquidity ratio -> rate adjustment in bps.

    adjustment = coefficient * (1 / (1 - utilization)) ** power - coefficient

evaluated as ``coefficient * 10000**power // liquid_ratio**power - coefficient``
and capped at the global maximum rate. A fully utilized pool (liquid ratio
of zero) gets the cap.
"""

import numpy as np
import pandas as pd

from src.engine.config import RateConfig
from src.engine.constants import BPS
from src.engine.errors import InvalidInput


def utilization_adjustment(liquidity_ratio_bps: int, config: RateConfig) -> int:
    """Compute the utilization adjustment for a pool's liquidity ratio.

    Args:
        liquidity_ratio_bps: Liquid share of the pool in [0, 10000].
        config: Configuration snapshot.

    Returns:
        Adjustment in basis points, at most ``config.max_rate``.
    """
    if not 0 <= liquidity_ratio_bps <= BPS:
        raise InvalidInput(f"liquidity ratio {liquidity_ratio_bps} outside [0, {BPS}]")
    if liquidity_ratio_bps == 0:
        return config.max_rate

    coefficient = config.utilization_adjustment_coefficient
    power = config.utilization_adjustment_power
    # Python ints are unbounded, so large powers saturate at the cap below.
    raw = coefficient * BPS**power // liquidity_ratio_bps**power - coefficient
    return min(raw, config.max_rate)


def utilization_curve(config: RateConfig, n_points: int = 101) -> pd.DataFrame:
    """Tabulate the adjustment over utilization from 0% to 100%.

    Returns:
        DataFrame with columns: utilization, utilization_bps, adjustment_bps
    """
    utilization_bps = np.linspace(0, BPS, n_points).round().astype(int)
    adjustments = [utilization_adjustment(BPS - int(u), config) for u in utilization_bps]

    return pd.DataFrame(
        {
            "utilization": utilization_bps / BPS,
            "utilization_bps": utilization_bps,
            "adjustment_bps": adjustments,
        }
    )
