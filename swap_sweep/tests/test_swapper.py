"""
Swap Adapter 테스트

시뮬레이션 라우터를 통한 스왑과 슬리피지/기한 검사를 검증합니다.
"""

import pytest

from ..constants import Q96
from ..errors import DeadlineExpired, SlippageExceeded
from ..math.price_math import quote_amount0_in_token1
from ..sim.pool import SimulatedPool
from ..sim.router import SimulatedRouter
from ..swapper import SwapAdapter


@pytest.fixture
def swapper(router, clock):
    return SwapAdapter(router, "USDC", "WETH", 3000, clock)


class TestQuote:
    """quote / min_out"""

    def test_quote_direction(self, router, clock):
        """수수료 0 티어: 순수 가격 환산"""
        swapper = SwapAdapter(router, "USDC", "WETH", 0, clock)
        assert swapper.quote(True, 1_000, 2 * Q96) == 4_000
        assert swapper.quote(False, 4_000, 2 * Q96) == 1_000

    def test_quote_net_of_fee(self, swapper):
        """수수료 티어를 입력에서 먼저 차감"""
        assert swapper.quote(True, 1_000_000, 2 * Q96) == 997_000 * 4
        assert swapper.quote(False, 4_000_000, 2 * Q96) == 3_988_000 // 4

    def test_quote_matches_router(self, swapper, pool, clock):
        """수수료 티어가 슬리피지 한도보다 커도 견적 = 라우터 출력"""
        quoted = swapper.quote(True, 1_000_000_000, pool.sqrt_price_x96)
        assert swapper.swap(True, 1_000_000_000, quoted, clock() + 60) == quoted

    def test_one_percent_pool_within_small_slippage(self, clock):
        """1% 풀에서도 10 bps 한도로 스왑 가능"""
        pool = SimulatedPool("USDC", "WETH", 10000, 200, 200000)
        router = SimulatedRouter(pool, clock=clock)
        swapper = SwapAdapter(router, "USDC", "WETH", 10000, clock)
        quoted = swapper.quote(True, 1_000_000_000, pool.sqrt_price_x96)
        out = swapper.swap(True, 1_000_000_000, SwapAdapter.min_out(quoted, 10), clock() + 60)
        assert out == quoted

    def test_min_out(self):
        assert SwapAdapter.min_out(10_000, 50) == 9_950


class TestSwap:
    """SwapAdapter.swap 테스트"""

    def test_swap_pays_fee(self, swapper, pool, router, clock):
        """출력 = 풀 가격 견적에서 0.30% 수수료 차감"""
        amount_in = 1_000_000_000
        quoted = quote_amount0_in_token1(amount_in, pool.sqrt_price_x96)
        out = swapper.swap(True, amount_in, 0, clock() + 60)
        assert out == quote_amount0_in_token1(amount_in * 997 // 1000, pool.sqrt_price_x96)
        assert out < quoted
        assert router.swap_count == 1

    def test_reverse_direction(self, swapper, clock):
        out = swapper.swap(False, 10 ** 17, 0, clock() + 60)
        assert out > 0

    def test_min_out_enforced(self, swapper, pool, clock):
        """최소 출력 미달이면 SlippageExceeded"""
        quoted = quote_amount0_in_token1(1_000_000_000, pool.sqrt_price_x96)
        with pytest.raises(SlippageExceeded):
            swapper.swap(True, 1_000_000_000, quoted, clock() + 60)

    def test_within_slippage(self, swapper, pool, clock):
        """0.30% 수수료는 0.50% 슬리피지 한도 안"""
        quoted = quote_amount0_in_token1(1_000_000_000, pool.sqrt_price_x96)
        out = swapper.swap(True, 1_000_000_000, SwapAdapter.min_out(quoted, 50), clock() + 60)
        assert out >= SwapAdapter.min_out(quoted, 50)

    def test_price_impact(self, swapper, pool, router, clock):
        router.price_impact_bps = 100
        quoted = quote_amount0_in_token1(1_000_000_000, pool.sqrt_price_x96)
        with pytest.raises(SlippageExceeded):
            swapper.swap(True, 1_000_000_000, SwapAdapter.min_out(quoted, 50), clock() + 60)

    def test_expired_deadline(self, swapper, router, clock):
        with pytest.raises(DeadlineExpired):
            swapper.swap(True, 1_000, 0, clock() - 1)
        assert router.swap_count == 0

    def test_zero_amount(self, swapper, router, clock):
        assert swapper.swap(True, 0, 0, clock() + 60) == 0
        assert router.swap_count == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
