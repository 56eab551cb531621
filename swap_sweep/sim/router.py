"""
Simulated Router - 풀 가격 기준 exactInputSingle

출력 = 풀 현재 가격 견적 × (1 - 수수료 티어) × (1 - 가격 충격)
스왑은 풀 가격을 움직이지 않습니다.
"""

from typing import Any, Callable, Dict, Optional

from ..clock import Clock, require_deadline, system_clock
from ..constants import BPS_DENOMINATOR, FEE_DENOMINATOR
from ..errors import SlippageExceeded
from ..interfaces import Router
from ..math.full_math import mul_div
from ..math.price_math import quote_amount0_in_token1, quote_amount1_in_token0
from .pool import SimulatedPool


class SimulatedRouter(Router):
    """시뮬레이션 라우터

    Args:
        pool: 가격을 읽을 풀
        price_impact_bps: 추가 가격 충격 (bps)
        on_swap: 스왑 중 호출되는 콜백 (재진입 시나리오 재현용)
    """

    def __init__(
        self,
        pool: SimulatedPool,
        price_impact_bps: int = 0,
        clock: Clock = system_clock,
        on_swap: Optional[Callable[[], Any]] = None
    ):
        self.pool = pool
        self.price_impact_bps = price_impact_bps
        self.clock = clock
        self.on_swap = on_swap
        self.swap_count = 0
        self.volume0 = 0
        self.volume1 = 0

    def exact_input_single(
        self,
        token_in: str,
        token_out: str,
        fee: int,
        amount_in: int,
        min_amount_out: int,
        deadline: float
    ) -> int:
        require_deadline(self.clock, deadline)
        if fee != self.pool.fee():
            raise ValueError(f"풀 수수료 티어 불일치: {fee} != {self.pool.fee()}")

        if self.on_swap is not None:
            self.on_swap()

        amount_after_fee = mul_div(amount_in, FEE_DENOMINATOR - fee, FEE_DENOMINATOR)
        sqrt_price = self.pool.slot0()[0]
        if token_in == self.pool.token0 and token_out == self.pool.token1:
            quoted = quote_amount0_in_token1(amount_after_fee, sqrt_price)
            self.volume0 += amount_in
        elif token_in == self.pool.token1 and token_out == self.pool.token0:
            quoted = quote_amount1_in_token0(amount_after_fee, sqrt_price)
            self.volume1 += amount_in
        else:
            raise ValueError(f"풀에 없는 자산 쌍: {token_in} -> {token_out}")

        amount_out = mul_div(quoted, BPS_DENOMINATOR - self.price_impact_bps, BPS_DENOMINATOR)
        if amount_out < min_amount_out:
            raise SlippageExceeded("router", amount_out, min_amount_out)

        self.swap_count += 1
        return amount_out

    def snapshot(self) -> Dict[str, Any]:
        return {"swap_count": self.swap_count, "volume0": self.volume0, "volume1": self.volume1}

    def restore(self, state: Dict[str, Any]) -> None:
        self.swap_count = state["swap_count"]
        self.volume0 = state["volume0"]
        self.volume1 = state["volume1"]
