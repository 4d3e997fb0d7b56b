"""Borrow limit: how much more a borrower may draw from a pool.

Three ceilings, each in the borrowing pool's decimals:

- score ceiling: credit line * score adjustment
- TVL ceiling: protocol TVL * TVL coefficient * score adjustment
- pool ceiling: pool value * pool value coefficient (not score adjusted)

The limit is the smallest ceiling minus what is already borrowed, floored at
zero. Scores below the configured floor get no limit at all.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import pandas as pd

from src.engine.config import RateConfig
from src.engine.constants import MAX_CREDIT_SCORE, NORMALIZED_DECIMALS
from src.engine.fixed_point import (
    check_uint,
    mul_bps,
    rescale_decimals,
    saturating_sub,
    score_power_bps,
)
from src.engine.rate import check_score

logger = logging.getLogger(__name__)


def borrow_limit_adjustment(score: int, config: RateConfig) -> int:
    """``10000 * (score / 255) ** (limit_adjustment_power / 10000)``, floored.

    Monotonic in score; 0 maps to 0 and 255 maps to 10000.
    """
    check_score(score)
    return score_power_bps(score, config.borrow_limit.limit_adjustment_power)


@dataclass(frozen=True)
class LimitCeilings:
    """The three independent ceilings, in pool decimals."""

    score: int
    tvl: int
    pool_value: int

    @property
    def binding(self) -> int:
        return min(self.score, self.tvl, self.pool_value)


def borrow_limit_ceilings(
    score: int,
    credit_line: int,
    total_tvl: int,
    pool_value: int,
    pool_decimals: int,
    config: RateConfig,
    tvl_decimals: int | None = None,
) -> LimitCeilings:
    """Score, TVL and pool value ceilings, ignoring the score floor."""
    limits = config.borrow_limit
    adjustment = borrow_limit_adjustment(score, config)

    credit_line = rescale_decimals(credit_line, NORMALIZED_DECIMALS, pool_decimals)
    if tvl_decimals is not None:
        check_uint(tvl_decimals, 8, "tvl_decimals")
        total_tvl = rescale_decimals(total_tvl, tvl_decimals, pool_decimals)

    return LimitCeilings(
        score=mul_bps(credit_line, adjustment),
        tvl=mul_bps(mul_bps(total_tvl, limits.tvl_limit_coefficient), adjustment),
        pool_value=mul_bps(pool_value, limits.pool_value_limit_coefficient),
    )


def compute_borrow_limit(
    score: int,
    credit_line: int,
    total_tvl: int,
    already_borrowed: int,
    pool_value: int,
    pool_decimals: int,
    config: RateConfig,
    tvl_decimals: int | None = None,
) -> int:
    """Borrow limit from already-read pool state.

    Args:
        score: Borrower score in [0, 255].
        credit_line: Nominal credit line in 18-decimal normalized units.
        total_tvl: Protocol TVL, in ``tvl_decimals`` (pool decimals if None).
        already_borrowed: Amount already drawn, in pool decimals.
        pool_value: Pool value in pool decimals.
        pool_decimals: The pool token's decimals.
        config: Configuration snapshot.
        tvl_decimals: Decimals of ``total_tvl`` when they differ from the pool's.

    Returns:
        Further borrowable amount in pool decimals.
    """
    check_score(score)
    for name, value in (
        ("credit_line", credit_line),
        ("total_tvl", total_tvl),
        ("already_borrowed", already_borrowed),
        ("pool_value", pool_value),
    ):
        check_uint(value, name=name)
    check_uint(pool_decimals, 8, "pool_decimals")

    floor = config.borrow_limit.score_floor
    if score < floor:
        logger.debug("Score %d below floor %d; limit is zero", score, floor)
        return 0

    ceilings = borrow_limit_ceilings(
        score, credit_line, total_tvl, pool_value, pool_decimals, config, tvl_decimals
    )
    return saturating_sub(ceilings.binding, already_borrowed)


def limit_adjustment_curve(config: RateConfig) -> pd.DataFrame:
    """Tabulate the score adjustment for every score, marking the floor.

    Returns:
        DataFrame with columns: score, adjustment_bps, eligible
    """
    scores = list(range(MAX_CREDIT_SCORE + 1))
    return pd.DataFrame(
        {
            "score": scores,
            "adjustment_bps": [borrow_limit_adjustment(s, config) for s in scores],
            "eligible": [s >= config.borrow_limit.score_floor for s in scores],
        }
    )
