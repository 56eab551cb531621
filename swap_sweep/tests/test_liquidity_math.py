"""
Liquidity Math 테스트

유동성 ↔ 토큰 수량 변환과 반올림 방향을 검증합니다.
"""

import pytest

from ..constants import Q96
from ..math.full_math import mul_div, mul_div_rounding_up, div_rounding_up
from ..math.liquidity_math import (
    get_amount0_delta,
    get_amount1_delta,
    get_liquidity_for_amount0,
    get_liquidity_for_amount1,
    get_liquidity_for_amounts,
    get_amounts_for_liquidity,
)
from ..math.tick_math import get_sqrt_ratio_at_tick

SQRT_LOWER = get_sqrt_ratio_at_tick(185640)
SQRT_UPPER = get_sqrt_ratio_at_tick(207240)
SQRT_CURRENT = get_sqrt_ratio_at_tick(200000)


class TestFullMath:
    """mul_div 반올림 규칙"""

    def test_mul_div_floor(self):
        assert mul_div(7, 3, 2) == 10

    def test_mul_div_rounding_up(self):
        assert mul_div_rounding_up(7, 3, 2) == 11
        assert mul_div_rounding_up(6, 3, 2) == 9

    def test_div_rounding_up(self):
        assert div_rounding_up(10, 3) == 4
        assert div_rounding_up(9, 3) == 3

    def test_zero_denominator(self):
        with pytest.raises(ZeroDivisionError):
            mul_div(1, 1, 0)


class TestAmountDeltas:
    """get_amount0_delta / get_amount1_delta"""

    def test_amount1_delta_exact(self):
        """Δy = L * (√P_b - √P_a)"""
        assert get_amount1_delta(Q96, 2 * Q96, 1000) == 1000

    def test_amount0_delta_exact(self):
        """Δx = L * (√P_b - √P_a) / (√P_a * √P_b)"""
        assert get_amount0_delta(Q96, 2 * Q96, 1000) == 500

    def test_amount0_delta_rounding(self):
        """홀수 유동성: 내림 500, 올림 501"""
        assert get_amount0_delta(Q96, 2 * Q96, 1001) == 500
        assert get_amount0_delta(Q96, 2 * Q96, 1001, round_up=True) == 501

    def test_order_independent(self):
        """가격 순서가 바뀌어도 같은 결과"""
        assert get_amount0_delta(2 * Q96, Q96, 1000) == get_amount0_delta(Q96, 2 * Q96, 1000)
        assert get_amount1_delta(2 * Q96, Q96, 1000) == get_amount1_delta(Q96, 2 * Q96, 1000)


class TestLiquidityForAmounts:
    """get_liquidity_for_amounts 테스트"""

    def test_single_sided(self):
        assert get_liquidity_for_amount1(Q96, 2 * Q96, 1000) == 1000
        assert get_liquidity_for_amount0(Q96, 2 * Q96, 500) == 1000

    def test_below_range_uses_token0_only(self):
        """가격이 범위 아래면 token0만 사용"""
        liquidity = get_liquidity_for_amounts(SQRT_LOWER - 1, SQRT_LOWER, SQRT_UPPER, 10 ** 10, 0)
        assert liquidity > 0
        amount0, amount1 = get_amounts_for_liquidity(SQRT_LOWER - 1, SQRT_LOWER, SQRT_UPPER, liquidity)
        assert amount1 == 0
        assert amount0 <= 10 ** 10

    def test_above_range_uses_token1_only(self):
        """가격이 범위 위면 token1만 사용"""
        liquidity = get_liquidity_for_amounts(SQRT_UPPER, SQRT_LOWER, SQRT_UPPER, 0, 10 ** 18)
        assert liquidity > 0
        amount0, amount1 = get_amounts_for_liquidity(SQRT_UPPER, SQRT_LOWER, SQRT_UPPER, liquidity)
        assert amount0 == 0
        assert amount1 <= 10 ** 18

    def test_in_range_limited_by_scarcer_token(self):
        """범위 안에서는 두 제약 중 작은 유동성"""
        amount0, amount1 = 10 ** 10, 10 ** 17
        liquidity = get_liquidity_for_amounts(SQRT_CURRENT, SQRT_LOWER, SQRT_UPPER, amount0, amount1)
        liquidity0 = get_liquidity_for_amount0(SQRT_CURRENT, SQRT_UPPER, amount0)
        liquidity1 = get_liquidity_for_amount1(SQRT_LOWER, SQRT_CURRENT, amount1)
        assert liquidity == min(liquidity0, liquidity1)

    def test_amounts_do_not_exceed_desired(self):
        """내림 평가 수량은 원하는 수량 이하"""
        amount0, amount1 = 10 ** 10, 10 ** 17
        liquidity = get_liquidity_for_amounts(SQRT_CURRENT, SQRT_LOWER, SQRT_UPPER, amount0, amount1)
        used0, used1 = get_amounts_for_liquidity(SQRT_CURRENT, SQRT_LOWER, SQRT_UPPER, liquidity)
        assert used0 <= amount0
        assert used1 <= amount1


class TestAmountsForLiquidityRounding:
    """민트 청구(올림)와 인출 지급(내림)"""

    def test_round_up_at_least_round_down(self):
        for liquidity in (1, 999, 10 ** 15, 10 ** 18 + 7):
            down = get_amounts_for_liquidity(SQRT_CURRENT, SQRT_LOWER, SQRT_UPPER, liquidity)
            up = get_amounts_for_liquidity(SQRT_CURRENT, SQRT_LOWER, SQRT_UPPER, liquidity, round_up=True)
            assert up[0] >= down[0] and up[1] >= down[1]
            assert up[0] - down[0] <= 1
            assert up[1] - down[1] <= 1

    def test_zero_liquidity(self):
        assert get_amounts_for_liquidity(SQRT_CURRENT, SQRT_LOWER, SQRT_UPPER, 0) == (0, 0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
