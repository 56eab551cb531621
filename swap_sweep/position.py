"""
Range Position - 볼트의 단일 집중 유동성 포지션

외부 풀에서 볼트가 소유한 하나의 틱 범위 포지션을 관리합니다.
- place: 범위에 유동성 추가 (민트)
- withdraw: 유동성 비례 제거 (원금만, 수수료는 미수령으로 남김)
- collect_fees: 누적 거래 수수료 수령
- current_tick: 범위 판정용 현재 틱

유동성은 입금(증가), 인출(감소), 재배치(전량 감소 + 새 범위 + 재증가)로만 변합니다.
"""

import logging
from dataclasses import replace
from typing import Tuple

from .clock import Clock, require_deadline, system_clock
from .errors import SlippageExceeded
from .interfaces import Pool
from .math.liquidity_math import get_amounts_for_liquidity, get_liquidity_for_amounts
from .math.tick_math import get_sqrt_ratio_at_tick, validate_tick_range
from .types import PlaceResult, RangePositionState

logger = logging.getLogger(__name__)


def _require_floor(label: str, actual: int, minimum: int) -> None:
    if actual < minimum:
        raise SlippageExceeded(label, actual, minimum)


def _require_cap(label: str, actual: int, maximum: int) -> None:
    if actual > maximum:
        raise SlippageExceeded(label, actual, maximum)


class RangePosition:
    """외부 풀 위의 볼트 포지션

    사용법:
        position = RangePosition(pool, owner="0xvault", tick_lower=185640, tick_upper=207240)
        result = position.place(185640, 207240, 10**10, 10**18, 0, 0, deadline)
        amount0, amount1 = position.withdraw(result.liquidity, 0, 0, deadline)
    """

    def __init__(
        self,
        pool: Pool,
        owner: str,
        tick_lower: int,
        tick_upper: int,
        clock: Clock = system_clock
    ):
        validate_tick_range(tick_lower, tick_upper, pool.tick_spacing())
        self.pool = pool
        self.owner = owner
        self.clock = clock
        self.state = RangePositionState(tick_lower=tick_lower, tick_upper=tick_upper)

    @property
    def liquidity(self) -> int:
        return self.state.liquidity

    @property
    def tick_lower(self) -> int:
        return self.state.tick_lower

    @property
    def tick_upper(self) -> int:
        return self.state.tick_upper

    def current_tick(self) -> int:
        return self.pool.current_tick()

    def sqrt_price_x96(self) -> int:
        return self.pool.slot0()[0]

    def preview_place(
        self,
        tick_lower: int,
        tick_upper: int,
        amount0_desired: int,
        amount1_desired: int,
        sqrt_price_x96: int
    ) -> PlaceResult:
        """현재 가격에서 민트 가능한 유동성과 풀이 청구할 수량 (올림)

        유동성은 내림으로 계산되지만 청구 수량은 올림이므로,
        청구 수량이 원하는 수량을 넘지 않을 때까지 유동성을 줄입니다.
        """
        sqrt_a = get_sqrt_ratio_at_tick(tick_lower)
        sqrt_b = get_sqrt_ratio_at_tick(tick_upper)

        liquidity = get_liquidity_for_amounts(
            sqrt_price_x96, sqrt_a, sqrt_b, amount0_desired, amount1_desired
        )
        while liquidity > 0:
            amount0, amount1 = get_amounts_for_liquidity(
                sqrt_price_x96, sqrt_a, sqrt_b, liquidity, round_up=True
            )
            if amount0 <= amount0_desired and amount1 <= amount1_desired:
                return PlaceResult(liquidity, amount0, amount1)
            liquidity -= 1
        return PlaceResult(0, 0, 0)

    def place(
        self,
        tick_lower: int,
        tick_upper: int,
        amount0_desired: int,
        amount1_desired: int,
        min_amount0: int,
        min_amount1: int,
        deadline: float
    ) -> PlaceResult:
        """범위에 유동성 추가

        Returns:
            PlaceResult(liquidity, amount0, amount1)

        Raises:
            DeadlineExpired: 현재 시각이 deadline을 지난 경우
            SlippageExceeded: 사용 수량이 하한 미만이거나 원하는 수량 초과
            ValueError: 기존 유동성이 있는데 다른 범위를 지정한 경우
        """
        require_deadline(self.clock, deadline)

        if self.state.liquidity > 0 and (tick_lower, tick_upper) != (self.tick_lower, self.tick_upper):
            raise ValueError(
                f"포지션은 하나의 범위만 가집니다: 현재 [{self.tick_lower}, {self.tick_upper}], "
                f"요청 [{tick_lower}, {tick_upper}]"
            )
        validate_tick_range(tick_lower, tick_upper, self.pool.tick_spacing())

        preview = self.preview_place(
            tick_lower, tick_upper, amount0_desired, amount1_desired, self.sqrt_price_x96()
        )
        _require_floor("amount0", preview.amount0, min_amount0)
        _require_floor("amount1", preview.amount1, min_amount1)
        if preview.liquidity == 0:
            return preview

        amount0, amount1 = self.pool.mint(self.owner, tick_lower, tick_upper, preview.liquidity)

        _require_cap("amount0_desired", amount0, amount0_desired)
        _require_cap("amount1_desired", amount1, amount1_desired)
        _require_floor("amount0", amount0, min_amount0)
        _require_floor("amount1", amount1, min_amount1)

        self.state.tick_lower = tick_lower
        self.state.tick_upper = tick_upper
        self.state.liquidity += preview.liquidity

        logger.info(
            "Liquidity placed",
            extra={"event": "position.place", "range": f"[{tick_lower}, {tick_upper}]",
                   "liquidity": preview.liquidity, "amount0": amount0, "amount1": amount1},
        )
        return PlaceResult(preview.liquidity, amount0, amount1)

    def withdraw(
        self,
        liquidity: int,
        min_amount0: int,
        min_amount1: int,
        deadline: float
    ) -> Tuple[int, int]:
        """유동성 비례 제거 (원금만 수령)

        Returns:
            (amount0, amount1) 볼트로 이전된 수량

        Raises:
            DeadlineExpired, SlippageExceeded
            ValueError: 보유 유동성보다 많이 제거하려는 경우
        """
        require_deadline(self.clock, deadline)

        if liquidity < 0 or liquidity > self.state.liquidity:
            raise ValueError(f"제거할 유동성 {liquidity}이 보유 유동성 {self.state.liquidity}을 넘습니다")
        if liquidity == 0:
            _require_floor("amount0", 0, min_amount0)
            _require_floor("amount1", 0, min_amount1)
            return 0, 0

        burned0, burned1 = self.pool.burn(self.owner, self.tick_lower, self.tick_upper, liquidity)
        amount0, amount1 = self.pool.collect(
            self.owner, self.tick_lower, self.tick_upper, burned0, burned1
        )

        _require_floor("amount0", amount0, min_amount0)
        _require_floor("amount1", amount1, min_amount1)

        self.state.liquidity -= liquidity

        logger.info(
            "Liquidity withdrawn",
            extra={"event": "position.withdraw", "liquidity": liquidity,
                   "amount0": amount0, "amount1": amount1},
        )
        return amount0, amount1

    def owed_fees(self) -> Tuple[int, int]:
        """미수령 수수료 조회"""
        pool_position = self.pool.position(self.owner, self.tick_lower, self.tick_upper)
        self.state.owed_fees0 = pool_position.tokens_owed0
        self.state.owed_fees1 = pool_position.tokens_owed1
        return pool_position.tokens_owed0, pool_position.tokens_owed1

    def collect_fees(self) -> Tuple[int, int]:
        """누적 수수료 전량 수령"""
        owed0, owed1 = self.owed_fees()
        if owed0 == 0 and owed1 == 0:
            return 0, 0

        fee0, fee1 = self.pool.collect(self.owner, self.tick_lower, self.tick_upper, owed0, owed1)
        self.state.owed_fees0 = owed0 - fee0
        self.state.owed_fees1 = owed1 - fee1

        logger.info(
            "Fees collected",
            extra={"event": "position.collect", "fee0": fee0, "fee1": fee1},
        )
        return fee0, fee1

    def amounts_at(self, sqrt_price_x96: int) -> Tuple[int, int]:
        """주어진 가격에서 포지션 원금 평가 (내림)"""
        if self.state.liquidity == 0:
            return 0, 0
        return get_amounts_for_liquidity(
            sqrt_price_x96,
            get_sqrt_ratio_at_tick(self.tick_lower),
            get_sqrt_ratio_at_tick(self.tick_upper),
            self.state.liquidity,
        )

    def move_range(self, tick_lower: int, tick_upper: int) -> None:
        """비어 있는 포지션의 범위 변경"""
        if self.state.liquidity > 0:
            raise ValueError("유동성이 남아 있는 포지션은 범위를 옮길 수 없습니다")
        validate_tick_range(tick_lower, tick_upper, self.pool.tick_spacing())
        self.state.tick_lower = tick_lower
        self.state.tick_upper = tick_upper

    def snapshot(self) -> RangePositionState:
        return replace(self.state)

    def restore(self, state: RangePositionState) -> None:
        self.state = replace(state)
