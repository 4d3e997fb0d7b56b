"""Integer fixed-point helpers.

All engine arithmetic is done on Python ints with floor division at each
step. Values that leave the engine are bounded to uint256.
"""

from math import gcd

from src.engine.constants import BPS, MAX_CREDIT_SCORE, UINT256_MAX
from src.engine.errors import InvalidInput, Overflow


def check_uint(value: int, bits: int = 256, name: str = "value") -> int:
    """Validate that *value* is a non-negative int fitting in *bits*."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise InvalidInput(f"{name} must be non-negative, got {value}")
    if value > 2**bits - 1:
        raise InvalidInput(f"{name}={value} does not fit in uint{bits}")
    return value


def checked_mul(a: int, b: int) -> int:
    """Multiply with uint256 overflow checking"""
    result = a * b
    if result > UINT256_MAX:
        raise Overflow("Arithmetic overflow in multiplication")
    return result


def checked_add(a: int, b: int) -> int:
    """Add with uint256 overflow checking"""
    result = a + b
    if result > UINT256_MAX:
        raise Overflow("Arithmetic overflow in addition")
    return result


def saturating_sub(a: int, b: int) -> int:
    """``a - b`` floored at zero."""
    return a - b if a > b else 0


def mul_bps(amount: int, bps: int) -> int:
    """``amount * bps / 10000`` with floor division."""
    return checked_mul(amount, bps) // BPS


def rescale_decimals(amount: int, from_decimals: int, to_decimals: int) -> int:
    """Move *amount* between decimal precisions.

    Scaling up multiplies by ``10**(to - from)``; scaling down truncates.
    """
    if to_decimals >= from_decimals:
        return checked_mul(amount, 10 ** (to_decimals - from_decimals))
    return amount // 10 ** (from_decimals - to_decimals)


def score_power_bps(score: int, power_bps: int) -> int:
    """Compute ``floor(10000 * (score / 255) ** (power_bps / 10000))`` exactly.

    The exponent is reduced to ``num / den`` and the largest ``r`` in
    ``[0, 10000]`` satisfying ``r**den * 255**num <= 10000**den * score**num``
    is found by bisection, so the result is the true floor with no
    floating-point rounding.
    *power_bps* is limited to uint16 so the operands stay small.
    """
    check_uint(power_bps, 16, "power_bps")
    if score == 0:
        return 0
    if score == MAX_CREDIT_SCORE or power_bps == 0:
        return BPS

    divisor = gcd(power_bps, BPS)
    num = power_bps // divisor
    den = BPS // divisor

    bound = BPS**den * score**num
    scale = MAX_CREDIT_SCORE**num

    lo, hi = 0, BPS
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if mid**den * scale <= bound:
            lo = mid
        else:
            hi = mid - 1
    return lo
