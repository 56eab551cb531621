"""
Simulated Yield Holding - cToken 스타일 수익 보관소

예치 시 환율(exchange_rate)로 지분을 발행하고, accrue()로 환율이 오르면
같은 지분의 상환 가능 금액이 늘어납니다.

    shares        = amount * SCALE // exchange_rate        (내림)
    balance_of    = shares * exchange_rate // SCALE        (내림)
    withdraw 소각 = ceil(amount * SCALE / exchange_rate)

일시정지(paused), 입금 한도(deposit_cap), 현금 부족(cash) 상황을
재현해 사일로 실패 경로를 테스트할 수 있습니다.
"""

from typing import Any, Dict, Optional

from ..constants import BPS_DENOMINATOR
from ..interfaces import YieldHolding
from ..math.full_math import mul_div, mul_div_rounding_up

SCALE = 10 ** 18


class SimulatedYieldHolding(YieldHolding):
    """시뮬레이션 보관소

    Args:
        asset: 보관 자산 식별자
        deposit_cap: 총 예치 한도 (None이면 무제한)
    """

    def __init__(self, asset: str, deposit_cap: Optional[int] = None):
        self.asset = asset
        self.deposit_cap = deposit_cap
        self.exchange_rate = SCALE
        self.shares: Dict[str, int] = {}
        self.cash = 0
        self.paused = False

    @property
    def total_shares(self) -> int:
        return sum(self.shares.values())

    @property
    def total_assets(self) -> int:
        return mul_div(self.total_shares, self.exchange_rate, SCALE)

    def accrue(self, rate_bps: int) -> None:
        """환율을 rate_bps만큼 올리고 이자만큼 현금 증가"""
        assets_before = self.total_assets
        self.exchange_rate += mul_div(self.exchange_rate, rate_bps, BPS_DENOMINATOR)
        self.cash += self.total_assets - assets_before

    def deposit(self, amount: int, holder: str) -> int:
        if amount > self.max_deposit(holder):
            raise ValueError(f"{self.asset} 보관소 입금 불가: {amount}")
        minted = mul_div(amount, SCALE, self.exchange_rate)
        self.shares[holder] = self.shares.get(holder, 0) + minted
        self.cash += amount
        return minted

    def withdraw(self, amount: int, holder: str) -> int:
        if amount > self.max_withdraw(holder):
            raise ValueError(f"{self.asset} 보관소 상환 불가: {amount}")
        burned = mul_div_rounding_up(amount, SCALE, self.exchange_rate)
        self.shares[holder] -= burned
        if self.shares[holder] == 0:
            del self.shares[holder]
        self.cash -= amount
        return amount

    def balance_of(self, holder: str) -> int:
        return mul_div(self.shares.get(holder, 0), self.exchange_rate, SCALE)

    def max_deposit(self, holder: str) -> int:
        if self.paused:
            return 0
        if self.deposit_cap is None:
            return 2 ** 255
        return max(self.deposit_cap - self.total_assets, 0)

    def max_withdraw(self, holder: str) -> int:
        if self.paused:
            return 0
        return min(self.balance_of(holder), self.cash)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "exchange_rate": self.exchange_rate,
            "shares": dict(self.shares),
            "cash": self.cash,
            "paused": self.paused,
            "deposit_cap": self.deposit_cap,
        }

    def restore(self, state: Dict[str, Any]) -> None:
        self.exchange_rate = state["exchange_rate"]
        self.shares = dict(state["shares"])
        self.cash = state["cash"]
        self.paused = state["paused"]
        self.deposit_cap = state["deposit_cap"]
