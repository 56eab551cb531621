"""
Simulated Pool - 메모리 내 집중 유동성 풀

볼트가 소비하는 Pool 인터페이스를 정수 연산으로 구현합니다.
- 가격은 set_tick / set_sqrt_price 로 외부에서 움직입니다 (스왑으로 움직이지 않음)
- 수수료는 accrue_fees 로 현재 활성 포지션에 유동성 비례 분배
- mint 청구 수량은 올림, burn 지급 수량은 내림

References:
- Uniswap V3 Core: UniswapV3Pool.mint / burn / collect
"""

import copy
from typing import Dict, Tuple, Any

from ..interfaces import Pool
from ..math.full_math import mul_div
from ..math.liquidity_math import get_amounts_for_liquidity
from ..math.tick_math import get_sqrt_ratio_at_tick, get_tick_at_sqrt_ratio
from ..types import PoolPosition

PositionKey = Tuple[str, int, int]


class SimulatedPool(Pool):
    """시뮬레이션 풀

    Args:
        token0, token1: 자산 식별자
        fee: 수수료 티어 (예: 3000 = 0.30%)
        tick_spacing: 틱 간격
        tick: 초기 틱
    """

    def __init__(self, token0: str, token1: str, fee: int, tick_spacing: int, tick: int):
        self.token0 = token0
        self.token1 = token1
        self._fee = fee
        self._tick_spacing = tick_spacing
        self.sqrt_price_x96 = get_sqrt_ratio_at_tick(tick)
        self.tick = tick
        self.positions: Dict[PositionKey, PoolPosition] = {}
        self.reserve0 = 0
        self.reserve1 = 0

    # ==========================================================================
    # 가격 조작 (시뮬레이션 전용)
    # ==========================================================================

    def set_tick(self, tick: int) -> None:
        self.sqrt_price_x96 = get_sqrt_ratio_at_tick(tick)
        self.tick = tick

    def set_sqrt_price(self, sqrt_price_x96: int) -> None:
        self.sqrt_price_x96 = sqrt_price_x96
        self.tick = get_tick_at_sqrt_ratio(sqrt_price_x96)

    def active_liquidity(self) -> int:
        """현재 틱에서 활성인 유동성 합 (tick_lower <= tick < tick_upper)"""
        return sum(
            position.liquidity
            for key, position in self.positions.items()
            if key[1] <= self.tick < key[2]
        )

    def accrue_fees(self, fee0: int, fee1: int) -> Tuple[int, int]:
        """거래 수수료를 활성 포지션에 유동성 비례로 적립 (내림)

        Returns:
            실제 분배된 (fee0, fee1)
        """
        active = self.active_liquidity()
        if active == 0:
            return 0, 0

        distributed0 = distributed1 = 0
        for key, position in self.positions.items():
            if not (key[1] <= self.tick < key[2]) or position.liquidity == 0:
                continue
            share0 = mul_div(fee0, position.liquidity, active)
            share1 = mul_div(fee1, position.liquidity, active)
            position.tokens_owed0 += share0
            position.tokens_owed1 += share1
            distributed0 += share0
            distributed1 += share1

        self.reserve0 += distributed0
        self.reserve1 += distributed1
        return distributed0, distributed1

    # ==========================================================================
    # Pool 인터페이스
    # ==========================================================================

    def slot0(self) -> Tuple[int, int]:
        return self.sqrt_price_x96, self.tick

    def tick_spacing(self) -> int:
        return self._tick_spacing

    def fee(self) -> int:
        return self._fee

    def mint(self, owner: str, tick_lower: int, tick_upper: int, liquidity: int) -> Tuple[int, int]:
        if liquidity <= 0:
            raise ValueError(f"민트 유동성은 양수여야 합니다: {liquidity}")
        self._check_ticks(tick_lower, tick_upper)

        amount0, amount1 = get_amounts_for_liquidity(
            self.sqrt_price_x96,
            get_sqrt_ratio_at_tick(tick_lower),
            get_sqrt_ratio_at_tick(tick_upper),
            liquidity,
            round_up=True,
        )
        position = self.positions.setdefault((owner, tick_lower, tick_upper), PoolPosition())
        position.liquidity += liquidity
        self.reserve0 += amount0
        self.reserve1 += amount1
        return amount0, amount1

    def burn(self, owner: str, tick_lower: int, tick_upper: int, liquidity: int) -> Tuple[int, int]:
        position = self.positions.get((owner, tick_lower, tick_upper))
        if position is None or position.liquidity < liquidity:
            raise ValueError(f"소각할 유동성이 부족합니다: {owner} [{tick_lower}, {tick_upper}]")

        amount0, amount1 = get_amounts_for_liquidity(
            self.sqrt_price_x96,
            get_sqrt_ratio_at_tick(tick_lower),
            get_sqrt_ratio_at_tick(tick_upper),
            liquidity,
        )
        position.liquidity -= liquidity
        position.tokens_owed0 += amount0
        position.tokens_owed1 += amount1
        return amount0, amount1

    def collect(
        self,
        owner: str,
        tick_lower: int,
        tick_upper: int,
        amount0_requested: int,
        amount1_requested: int
    ) -> Tuple[int, int]:
        position = self.positions.get((owner, tick_lower, tick_upper))
        if position is None:
            return 0, 0

        amount0 = min(amount0_requested, position.tokens_owed0)
        amount1 = min(amount1_requested, position.tokens_owed1)
        position.tokens_owed0 -= amount0
        position.tokens_owed1 -= amount1
        self.reserve0 -= amount0
        self.reserve1 -= amount1

        if position.liquidity == 0 and position.tokens_owed0 == 0 and position.tokens_owed1 == 0:
            del self.positions[(owner, tick_lower, tick_upper)]
        return amount0, amount1

    def position(self, owner: str, tick_lower: int, tick_upper: int) -> PoolPosition:
        position = self.positions.get((owner, tick_lower, tick_upper))
        if position is None:
            return PoolPosition()
        return copy.copy(position)

    def _check_ticks(self, tick_lower: int, tick_upper: int) -> None:
        if tick_lower >= tick_upper:
            raise ValueError(f"잘못된 틱 범위: [{tick_lower}, {tick_upper}]")
        if tick_lower % self._tick_spacing or tick_upper % self._tick_spacing:
            raise ValueError(f"틱 간격 불일치: [{tick_lower}, {tick_upper}] / {self._tick_spacing}")

    # ==========================================================================
    # 롤백 지원
    # ==========================================================================

    def snapshot(self) -> Dict[str, Any]:
        return {
            "sqrt_price_x96": self.sqrt_price_x96,
            "tick": self.tick,
            "positions": copy.deepcopy(self.positions),
            "reserve0": self.reserve0,
            "reserve1": self.reserve1,
        }

    def restore(self, state: Dict[str, Any]) -> None:
        self.sqrt_price_x96 = state["sqrt_price_x96"]
        self.tick = state["tick"]
        self.positions = copy.deepcopy(state["positions"])
        self.reserve0 = state["reserve0"]
        self.reserve1 = state["reserve1"]
