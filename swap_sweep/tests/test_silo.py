"""
Silo Adapter 테스트

cToken 스타일 보관소에 대한 예치/상환과 실패 경로를 검증합니다.
"""

import pytest

from ..errors import InsufficientSiloLiquidity, SiloUnavailable
from ..silo import SiloAdapter
from ..sim.holding import SimulatedYieldHolding


@pytest.fixture
def silo(holding):
    return SiloAdapter(holding, "vault", "vault:silo0")


class ShortPayingHolding(SimulatedYieldHolding):
    """요청보다 1 적게 지급하는 보관소"""

    def withdraw(self, amount, holder):
        super().withdraw(amount, holder)
        return amount - 1


class TestDeposit:
    """SiloAdapter.deposit 테스트"""

    def test_deposit(self, silo):
        assert silo.deposit(1_000) == 1_000
        assert silo.principal == 1_000
        assert silo.balance_of() == 1_000
        assert silo.asset == "USDC"

    def test_zero_is_noop(self, silo, holding):
        assert silo.deposit(0) == 0
        assert holding.shares == {}

    def test_paused(self, silo, holding):
        holding.paused = True
        with pytest.raises(SiloUnavailable) as exc_info:
            silo.deposit(1_000)
        assert exc_info.value.capacity == 0
        assert silo.principal == 0

    def test_deposit_cap(self, holding):
        holding.deposit_cap = 500
        silo = SiloAdapter(holding, "vault", "vault:silo0")
        with pytest.raises(SiloUnavailable) as exc_info:
            silo.deposit(600)
        assert exc_info.value.capacity == 500


class TestYieldAndWithdraw:
    """수익 누적과 상환"""

    def test_accrual_raises_redeemable(self, silo, holding):
        """환율이 오르면 상환 가능 금액 증가, 원금은 그대로"""
        silo.deposit(1_000)
        holding.accrue(100)
        assert silo.balance_of() == 1_010
        assert silo.principal == 1_000

    def test_withdraw_reduces_principal_pro_rata(self, silo, holding):
        silo.deposit(1_000)
        holding.accrue(100)
        assert silo.withdraw(505) == 505
        assert silo.balance_of() == 505
        assert silo.principal == 500

    def test_withdraw_all(self, silo):
        silo.deposit(1_000)
        assert silo.withdraw(silo.balance_of()) == 1_000
        assert silo.balance_of() == 0
        assert silo.principal == 0

    def test_cash_shortage(self, silo, holding):
        """보관소 현금이 부족하면 InsufficientSiloLiquidity"""
        silo.deposit(1_000)
        holding.cash = 10
        with pytest.raises(InsufficientSiloLiquidity) as exc_info:
            silo.withdraw(100)
        assert exc_info.value.requested == 100
        assert exc_info.value.available == 10

    def test_more_than_balance(self, silo):
        silo.deposit(1_000)
        with pytest.raises(InsufficientSiloLiquidity):
            silo.withdraw(1_001)

    def test_short_payment(self):
        """정확한 수량을 돌려주지 않으면 실패"""
        silo = SiloAdapter(ShortPayingHolding("USDC"), "vault", "vault:silo0")
        silo.deposit(1_000)
        with pytest.raises(InsufficientSiloLiquidity) as exc_info:
            silo.withdraw(100)
        assert exc_info.value.available == 99

    def test_restore(self, silo):
        silo.deposit(1_000)
        state = silo.snapshot()
        silo.deposit(500)
        silo.restore(state)
        assert silo.principal == 1_000


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
