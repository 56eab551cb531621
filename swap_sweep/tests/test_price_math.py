"""
Price Math 테스트

token1 단위 가치 환산, 슬리피지 하한, 목표 비율 분할을 검증합니다.
"""

import pytest

from ..constants import Q96
from ..math.liquidity_math import get_amounts_for_liquidity
from ..math.price_math import (
    quote_amount0_in_token1,
    quote_amount1_in_token0,
    value_in_token1,
    apply_slippage,
    target_split,
)
from ..math.tick_math import get_sqrt_ratio_at_tick

SQRT_LOWER = get_sqrt_ratio_at_tick(185640)
SQRT_UPPER = get_sqrt_ratio_at_tick(207240)
SQRT_CURRENT = get_sqrt_ratio_at_tick(200000)


class TestQuotes:
    """풀 가격 기준 환산"""

    def test_price_one(self):
        assert quote_amount0_in_token1(1000, Q96) == 1000
        assert quote_amount1_in_token0(1000, Q96) == 1000

    def test_price_four(self):
        """sqrtP = 2 → price = 4"""
        assert quote_amount0_in_token1(1000, 2 * Q96) == 4000
        assert quote_amount1_in_token0(4000, 2 * Q96) == 1000

    def test_quotes_round_down(self):
        assert quote_amount1_in_token0(3, 2 * Q96) == 0

    def test_value_in_token1(self):
        assert value_in_token1(1000, 5, 2 * Q96) == 4005


class TestApplySlippage:
    """apply_slippage 테스트"""

    def test_half_percent(self):
        assert apply_slippage(10_000, 50) == 9_950

    def test_zero_and_full(self):
        assert apply_slippage(12_345, 0) == 12_345
        assert apply_slippage(12_345, 10_000) == 0

    def test_rounds_down(self):
        assert apply_slippage(999, 50) == 994

    def test_invalid(self):
        with pytest.raises(ValueError):
            apply_slippage(100, -1)
        with pytest.raises(ValueError):
            apply_slippage(100, 10_001)


class TestTargetSplit:
    """target_split 테스트"""

    def test_empty(self):
        assert target_split(0, 0, SQRT_CURRENT, SQRT_LOWER, SQRT_UPPER) == (0, 0)

    def test_value_preserved(self):
        """목표 수량의 token1 가치는 보유 가치와 같음"""
        amount0, amount1 = 10 ** 10, 0
        total = value_in_token1(amount0, amount1, SQRT_CURRENT)
        target0, target1 = target_split(amount0, amount1, SQRT_CURRENT, SQRT_LOWER, SQRT_UPPER)
        assert value_in_token1(target0, target1, SQRT_CURRENT) == total

    def test_ratio_matches_range(self):
        """목표 비율은 범위가 요구하는 단위 유동성 비율과 같음"""
        target0, target1 = target_split(10 ** 10, 10 ** 17, SQRT_CURRENT, SQRT_LOWER, SQRT_UPPER)
        unit0, unit1 = get_amounts_for_liquidity(SQRT_CURRENT, SQRT_LOWER, SQRT_UPPER, 10 ** 18)
        assert target0 > 0 and target1 > 0
        assert abs(target0 * unit1 - target1 * unit0) / (target1 * unit0) < 1e-6

    def test_above_range_all_token1(self):
        """가격이 범위 위면 전부 token1"""
        target0, target1 = target_split(1000, 0, SQRT_UPPER, SQRT_LOWER, SQRT_UPPER)
        assert target0 == 0
        assert target1 == quote_amount0_in_token1(1000, SQRT_UPPER)

    def test_below_range_all_token0(self):
        """가격이 범위 아래면 전부 token0"""
        target0, target1 = target_split(0, 10 ** 18, SQRT_LOWER, SQRT_LOWER, SQRT_UPPER)
        assert target0 == quote_amount1_in_token0(10 ** 18, SQRT_LOWER)
        # token0 1단위 미만의 잔여분만 token1로 남음
        assert target1 <= quote_amount0_in_token1(1, SQRT_LOWER) + 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
