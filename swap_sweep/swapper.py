"""
Swap Adapter - 라우터를 통한 자산 간 스왑

슬리피지 하한과 기한으로 제한된 exactInputSingle 스왑.
예상 출력은 풀 현재 가격에서 수수료 티어를 뺀 값으로, 슬리피지 한도는 그 위에 적용됩니다.
"""

import logging

from .clock import Clock, require_deadline, system_clock
from .constants import FEE_DENOMINATOR
from .errors import SlippageExceeded
from .interfaces import Router
from .math.full_math import mul_div
from .math.price_math import apply_slippage, quote_amount0_in_token1, quote_amount1_in_token0

logger = logging.getLogger(__name__)


class SwapAdapter:
    """token0 ↔ token1 스왑

    Args:
        router: 외부 스왑 라우터
        token0, token1: 풀 자산 식별자
        fee: 풀 수수료 티어
    """

    def __init__(self, router: Router, token0: str, token1: str, fee: int, clock: Clock = system_clock):
        self.router = router
        self.token0 = token0
        self.token1 = token1
        self.fee = fee
        self.clock = clock

    def quote(self, zero_for_one: bool, amount_in: int, sqrt_price_x96: int) -> int:
        """풀 현재 가격 기준 예상 출력 (수수료 티어 차감, 가격 충격 제외, 내림)

        라우터와 같은 순서로 입력에서 수수료를 먼저 뗀 뒤 가격을 적용합니다.
        """
        amount_after_fee = mul_div(amount_in, FEE_DENOMINATOR - self.fee, FEE_DENOMINATOR)
        if zero_for_one:
            return quote_amount0_in_token1(amount_after_fee, sqrt_price_x96)
        return quote_amount1_in_token0(amount_after_fee, sqrt_price_x96)

    @staticmethod
    def min_out(quoted: int, max_slippage_bps: int) -> int:
        return apply_slippage(quoted, max_slippage_bps)

    def swap(self, zero_for_one: bool, amount_in: int, min_amount_out: int, deadline: float) -> int:
        """스왑 실행

        Args:
            zero_for_one: True면 token0 → token1
            amount_in: 입력 수량
            min_amount_out: 최소 출력 수량
            deadline: 기한 (Unix timestamp)

        Returns:
            실제 출력 수량

        Raises:
            DeadlineExpired, SlippageExceeded
        """
        require_deadline(self.clock, deadline)
        if amount_in <= 0:
            return 0

        token_in, token_out = (self.token0, self.token1) if zero_for_one else (self.token1, self.token0)
        amount_out = self.router.exact_input_single(
            token_in, token_out, self.fee, amount_in, min_amount_out, deadline
        )
        if amount_out < min_amount_out:
            raise SlippageExceeded("swap", amount_out, min_amount_out)

        logger.info(
            "Swap executed",
            extra={"event": "swap", "token_in": token_in, "token_out": token_out,
                   "amount_in": amount_in, "amount_out": amount_out},
        )
        return amount_out
