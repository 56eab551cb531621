"""
Silo Adapter - 유휴 자본 보관소 어댑터

포지션에 배치되지 않은 자산을 외부 수익 보관소(예: Compound cToken,
ERC-4626 볼트)에 맡기고 되찾습니다. 자산마다 어댑터 하나.

상환 가능 금액은 보관소의 환율 회계가 결정하며 원금(principal)을
넘을 수 있습니다. 볼트는 원금만 기록합니다.
"""

import logging
from typing import Dict, Any

from .errors import InsufficientSiloLiquidity, SiloUnavailable
from .interfaces import YieldHolding
from .math.full_math import mul_div
from .types import SiloBalance

logger = logging.getLogger(__name__)


class SiloAdapter:
    """단일 자산 사일로

    Args:
        holding: 외부 수익 보관소
        holder: 보관소에서 볼트를 식별하는 주소
        address: 사일로 식별자 (deposit_silo 대상 지정에 사용)
    """

    def __init__(self, holding: YieldHolding, holder: str, address: str):
        self.holding = holding
        self.holder = holder
        self.address = address
        self.balance = SiloBalance(asset=holding.asset)

    @property
    def asset(self) -> str:
        return self.balance.asset

    @property
    def principal(self) -> int:
        return self.balance.principal

    def balance_of(self) -> int:
        """현재 상환 가능 금액 (보관소 기준)"""
        return self.holding.balance_of(self.holder)

    def deposit(self, amount: int) -> int:
        """유휴 자산을 보관소에 예치

        Returns:
            보관소가 발행한 지분(receipt)

        Raises:
            SiloUnavailable: 보관소가 입금을 받지 않는 경우 (일시정지, 한도)
        """
        if amount <= 0:
            return 0

        capacity = self.holding.max_deposit(self.holder)
        if capacity < amount:
            raise SiloUnavailable(self.address, amount, capacity)

        receipt = self.holding.deposit(amount, self.holder)
        self.balance.principal += amount

        logger.info(
            "Silo deposit",
            extra={"event": "silo.deposit", "silo": self.address, "asset": self.asset,
                   "amount": amount, "receipt": receipt},
        )
        return receipt

    def withdraw(self, amount: int) -> int:
        """보관소에서 정확히 amount 상환

        Raises:
            InsufficientSiloLiquidity: 보관소가 정확한 수량을 돌려줄 수 없는 경우
        """
        if amount <= 0:
            return 0

        available = self.holding.max_withdraw(self.holder)
        if available < amount:
            raise InsufficientSiloLiquidity(self.address, amount, available)

        balance_before = self.balance_of()
        actual = self.holding.withdraw(amount, self.holder)
        if actual != amount:
            raise InsufficientSiloLiquidity(self.address, amount, actual)

        # 원금은 상환 비율만큼 감소
        if balance_before > 0:
            reduction = mul_div(self.balance.principal, amount, balance_before)
            self.balance.principal -= min(reduction, self.balance.principal)

        logger.info(
            "Silo withdraw",
            extra={"event": "silo.withdraw", "silo": self.address, "asset": self.asset,
                   "amount": amount},
        )
        return actual

    def snapshot(self) -> Dict[str, Any]:
        return {"principal": self.balance.principal}

    def restore(self, state: Dict[str, Any]) -> None:
        self.balance.principal = state["principal"]
