"""
Share Ledger - 볼트 지분 장부

총 발행 지분과 투자자별 지분 잔고를 관리합니다.
모든 변경은 mint / burn 두 메서드만 거치므로
sum(balances) == total_shares 불변식을 이 모듈 안에서 확인할 수 있습니다.

지분 발행 공식:
    total_shares == 0:  shares = value_contributed          (1:1 부트스트랩)
    그 외:              shares = value * total_shares // total_value_before

내림 나눗셈은 기존 보유자가 반올림 오차로 희석되지 않도록 합니다.
"""

import logging
from typing import Dict, Any

from .errors import EmptyVault, InsufficientShares, ZeroContribution
from .math.full_math import mul_div

logger = logging.getLogger(__name__)


class ShareLedger:
    """투자자별 지분 장부

    사용법:
        ledger = ShareLedger()
        shares = ledger.mint("alice", value_contributed=1000, total_value_before=0)
        value = ledger.burn("alice", shares, total_vault_value=1000)
    """

    def __init__(self):
        self._total_shares: int = 0
        self._balances: Dict[str, int] = {}

    @property
    def total_shares(self) -> int:
        return self._total_shares

    def balance_of(self, investor: str) -> int:
        return self._balances.get(investor, 0)

    def holders(self) -> Dict[str, int]:
        """지분 보유자 목록 (복사본)"""
        return dict(self._balances)

    def value_of(self, investor: str, total_vault_value: int) -> int:
        """투자자 지분의 현재 가치 (내림)"""
        if self._total_shares == 0:
            return 0
        return mul_div(self.balance_of(investor), total_vault_value, self._total_shares)

    def mint(self, investor: str, value_contributed: int, total_value_before: int) -> int:
        """기여 가치에 비례한 지분 발행

        Args:
            investor: 투자자 식별자
            value_contributed: 입금으로 늘어난 볼트 가치 (token1 단위)
            total_value_before: 입금 전 볼트 총가치

        Returns:
            발행된 지분

        Raises:
            ZeroContribution: 기여 가치가 0이거나 발행 지분이 0으로 내림된 경우
            EmptyVault: 지분은 있으나 입금 전 가치가 0인 경우
        """
        if value_contributed <= 0:
            raise ZeroContribution(value_contributed)

        if self._total_shares == 0:
            shares = value_contributed
        else:
            if total_value_before <= 0:
                raise EmptyVault(self._total_shares, total_value_before)
            shares = mul_div(value_contributed, self._total_shares, total_value_before)

        if shares == 0:
            raise ZeroContribution(value_contributed, shares)

        self._balances[investor] = self._balances.get(investor, 0) + shares
        self._total_shares += shares

        logger.info(
            "Shares minted",
            extra={"event": "ledger.mint", "investor": investor, "shares": shares,
                   "total_shares": self._total_shares},
        )
        return shares

    def burn(self, investor: str, shares: int, total_vault_value: int) -> int:
        """지분 소각, 소각 전 기준 비례 가치 반환

        반환값 = shares * total_vault_value // total_shares (소각 전)
        실제 자산 이전은 호출자(Vault) 책임입니다.

        Raises:
            InsufficientShares: 보유 지분보다 많이 소각하려는 경우
        """
        balance = self.balance_of(investor)
        if shares < 0 or shares > balance:
            raise InsufficientShares(investor, shares, balance)
        if shares == 0:
            return 0

        proportional_value = mul_div(shares, total_vault_value, self._total_shares)

        remaining = balance - shares
        if remaining:
            self._balances[investor] = remaining
        else:
            del self._balances[investor]
        self._total_shares -= shares

        logger.info(
            "Shares burned",
            extra={"event": "ledger.burn", "investor": investor, "shares": shares,
                   "total_shares": self._total_shares},
        )
        return proportional_value

    def snapshot(self) -> Dict[str, Any]:
        return {"total_shares": self._total_shares, "balances": dict(self._balances)}

    def restore(self, state: Dict[str, Any]) -> None:
        self._total_shares = state["total_shares"]
        self._balances = dict(state["balances"])
