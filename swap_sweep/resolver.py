"""
Resolver - 키퍼용 실행 판단

볼트 상태를 읽기만 하고 지금 호출할 작업을 알려줍니다.
스케줄러는 없으며, 외부 키퍼가 checker() 결과를 보고 직접 호출합니다.

판단 규칙:
    1. 현재 틱이 범위 밖 → "reposition"
    2. 미수령 수수료가 임계값 이상 → "rebalance"
    3. 그 외 → None
"""

from typing import Optional, Tuple

from .types import Phase
from .vault import Vault

REPOSITION = "reposition"
REBALANCE = "rebalance"


class Resolver:
    """볼트 키퍼 판단기

    Args:
        vault: 대상 볼트
        fee_threshold0: rebalance를 권할 token0 미수령 수수료 하한
        fee_threshold1: rebalance를 권할 token1 미수령 수수료 하한
    """

    def __init__(self, vault: Vault, fee_threshold0: int = 1, fee_threshold1: int = 1):
        self.vault = vault
        self.fee_threshold0 = fee_threshold0
        self.fee_threshold1 = fee_threshold1

    def checker(self) -> Tuple[bool, Optional[str]]:
        """(실행 여부, 작업 이름)"""
        if self.vault.phase == Phase.OUT_OF_RANGE:
            return True, REPOSITION

        if self.vault.position.liquidity > 0:
            fee0, fee1 = self.vault.position.owed_fees()
            if fee0 >= self.fee_threshold0 or fee1 >= self.fee_threshold1:
                return True, REBALANCE

        return False, None

    def execute(self, deadline: float, sender: Optional[str] = None) -> Optional[str]:
        """checker()가 고른 작업 실행, 실행한 작업 이름 반환"""
        can_exec, action = self.checker()
        if not can_exec:
            return None
        if action == REPOSITION:
            self.vault.reposition(sender=sender)
        else:
            self.vault.rebalance(deadline, sender=sender)
        return action
