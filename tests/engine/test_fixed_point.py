"""Tests for integer fixed-point helpers."""

import pytest

from src.engine.constants import UINT256_MAX
from src.engine.errors import InvalidInput, Overflow
from src.engine.fixed_point import (
    check_uint,
    checked_add,
    checked_mul,
    mul_bps,
    rescale_decimals,
    saturating_sub,
    score_power_bps,
)


class TestCheckedArithmetic:
    def test_mul_within_bounds(self) -> None:
        assert checked_mul(2**128, 2**127) == 2**255

    def test_mul_overflow(self) -> None:
        with pytest.raises(Overflow):
            checked_mul(2**255, 2)

    def test_add_overflow(self) -> None:
        with pytest.raises(Overflow):
            checked_add(UINT256_MAX, 1)

    def test_overflow_is_arithmetic_error(self) -> None:
        with pytest.raises(ArithmeticError):
            checked_add(UINT256_MAX, 1)

    def test_saturating_sub(self) -> None:
        assert saturating_sub(10, 3) == 7
        assert saturating_sub(3, 10) == 0
        assert saturating_sub(5, 5) == 0

    def test_mul_bps_floors(self) -> None:
        assert mul_bps(10_001, 5_000) == 5_000


class TestCheckUint:
    def test_accepts_width_maximum(self) -> None:
        assert check_uint(255, 8) == 255

    def test_rejects_beyond_width(self) -> None:
        with pytest.raises(InvalidInput):
            check_uint(256, 8)

    def test_rejects_negative(self) -> None:
        with pytest.raises(InvalidInput):
            check_uint(-1)

    def test_rejects_bool_and_float(self) -> None:
        with pytest.raises(InvalidInput):
            check_uint(True)
        with pytest.raises(InvalidInput):
            check_uint(1.5)

    def test_invalid_input_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            check_uint(-1)


class TestRescaleDecimals:
    def test_scale_down_18_to_6(self) -> None:
        assert rescale_decimals(100 * 10**18, 18, 6) == 100 * 10**6

    def test_scale_down_truncates(self) -> None:
        assert rescale_decimals(123_456_789, 6, 3) == 123_456

    def test_scale_up(self) -> None:
        assert rescale_decimals(5, 6, 18) == 5 * 10**12

    def test_same_decimals_is_identity(self) -> None:
        assert rescale_decimals(42, 18, 18) == 42


class TestScorePowerBps:
    def test_linear_power(self) -> None:
        # 10000 * 191 / 255 = 7490.19...
        assert score_power_bps(191, 10_000) == 7490

    def test_square_power(self) -> None:
        # 10000 * (191 / 255)^2 = 5610.3...
        assert score_power_bps(191, 20_000) == 5610

    def test_zero_power_is_full(self) -> None:
        assert score_power_bps(1, 0) == 10_000

    def test_zero_score(self) -> None:
        assert score_power_bps(0, 7500) == 0

    def test_max_score(self) -> None:
        assert score_power_bps(255, 7500) == 10_000

    def test_coprime_exponent(self) -> None:
        # exponent 0.7501 cannot be reduced; result sits next to the 0.75 value
        assert score_power_bps(191, 7501) in (8050, 8051)

    def test_monotonic_in_score(self) -> None:
        values = [score_power_bps(s, 7500) for s in range(256)]
        assert values == sorted(values)

    def test_power_wider_than_uint16_rejected(self) -> None:
        with pytest.raises(InvalidInput):
            score_power_bps(200, 4_000_003)
