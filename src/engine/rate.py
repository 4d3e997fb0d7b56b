"""Borrower rate components.

    rate = min(base_rate + risk_premium + credit_adjustment + utilization_adjustment,
               max_rate)

The fixed-term adjustment is separate: callers add it for term loans.
"""

import numpy as np
import pandas as pd

from src.engine.config import RateConfig
from src.engine.constants import DAY, MAX_CREDIT_SCORE, TERM_BUCKET_SECONDS
from src.engine.errors import InvalidInput
from src.engine.fixed_point import checked_add, checked_mul
from src.engine.utilization import utilization_adjustment


def check_score(score: int) -> int:
    if isinstance(score, bool) or not isinstance(score, int):
        raise InvalidInput(f"score must be an integer, got {type(score).__name__}")
    if not 0 <= score <= MAX_CREDIT_SCORE:
        raise InvalidInput(f"score {score} outside [0, {MAX_CREDIT_SCORE}]")
    return score


def credit_score_adjustment(score: int, config: RateConfig) -> int:
    """Premium for weaker credit: ``coefficient * 255 / score - coefficient``.

    Score 255 gives zero, score 0 gets the global cap.
    """
    check_score(score)
    if score == 0:
        return config.max_rate
    coefficient = config.credit_adjustment_coefficient
    return min(coefficient * MAX_CREDIT_SCORE // score - coefficient, config.max_rate)


def pool_basic_rate(base_rate: int, liquidity_ratio_bps: int, config: RateConfig) -> int:
    """Base rate + risk premium + utilization adjustment, capped."""
    total = checked_add(
        checked_add(base_rate, config.risk_premium),
        utilization_adjustment(liquidity_ratio_bps, config),
    )
    return min(total, config.max_rate)


def combined_rate(
    base_rate: int, liquidity_ratio_bps: int, score: int, config: RateConfig
) -> int:
    """Full borrower rate from already-read market signals."""
    total = checked_add(
        pool_basic_rate(base_rate, liquidity_ratio_bps, config),
        credit_score_adjustment(score, config),
    )
    return min(total, config.max_rate)


def fixed_term_loan_adjustment(term_seconds: int, config: RateConfig) -> int:
    """One coefficient's worth of bps per completed 30-day period.

    Exactly 30 days is the first bucket; anything shorter adds nothing.
    """
    if isinstance(term_seconds, bool) or not isinstance(term_seconds, int):
        raise InvalidInput("term must be an integer number of seconds")
    if term_seconds < 0:
        raise InvalidInput(f"term must be non-negative, got {term_seconds}")
    return checked_mul(
        term_seconds // TERM_BUCKET_SECONDS,
        config.fixed_term_loan_adjustment_coefficient,
    )


def fixed_term_schedule(config: RateConfig, max_days: int = 360) -> pd.DataFrame:
    """Tabulate the fixed-term adjustment for whole-day terms.

    Returns:
        DataFrame with columns: term_days, adjustment_bps
    """
    days = np.arange(0, max_days + 1)
    adjustments = [fixed_term_loan_adjustment(int(d) * DAY, config) for d in days]
    return pd.DataFrame({"term_days": days, "adjustment_bps": adjustments})
