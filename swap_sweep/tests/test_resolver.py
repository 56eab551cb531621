"""
Resolver 테스트

키퍼 판단 규칙(범위 이탈 → reposition, 수수료 누적 → rebalance)을 검증합니다.
"""

import pytest

from ..resolver import REBALANCE, REPOSITION, Resolver
from ..types import Phase


class TestChecker:
    """Resolver.checker 테스트"""

    def test_nothing_to_do(self, funded_env):
        assert funded_env.resolver.checker() == (False, None)

    def test_empty_vault(self, env):
        """빈 볼트는 수수료가 없으므로 할 일 없음"""
        env.pool.accrue_fees(1_000, 1_000)
        assert env.resolver.checker() == (False, None)

    def test_fees_trigger_rebalance(self, funded_env):
        funded_env.pool.accrue_fees(1_000_000, 0)
        assert funded_env.resolver.checker() == (True, REBALANCE)

    def test_out_of_range_triggers_reposition(self, funded_env):
        funded_env.pool.set_tick(210000)
        assert funded_env.resolver.checker() == (True, REPOSITION)

    def test_reposition_takes_priority(self, funded_env):
        """수수료가 있어도 범위 밖이면 reposition 우선"""
        funded_env.pool.accrue_fees(1_000_000, 0)
        funded_env.pool.set_tick(210000)
        assert funded_env.resolver.checker() == (True, REPOSITION)

    def test_threshold(self, funded_env):
        """임계값 미만 수수료는 무시"""
        resolver = Resolver(funded_env.vault, fee_threshold0=10_000, fee_threshold1=10 ** 12)
        funded_env.pool.accrue_fees(9_999, 0)
        assert resolver.checker() == (False, None)
        funded_env.pool.accrue_fees(1, 0)
        assert resolver.checker() == (True, REBALANCE)

    def test_checker_is_read_only(self, funded_env):
        funded_env.pool.accrue_fees(1_000_000, 0)
        funded_env.resolver.checker()
        assert funded_env.vault.position.owed_fees() == (1_000_000, 0)
        assert funded_env.router.swap_count == 0


class TestExecute:
    """Resolver.execute 테스트"""

    def test_execute_reposition(self, funded_env):
        env = funded_env
        env.pool.set_tick(210000)
        action = env.resolver.execute(env.clock() + 60, sender="keeper")
        assert action == REPOSITION
        assert env.vault.phase == Phase.IN_RANGE
        assert env.resolver.checker() == (False, None)

    def test_execute_rebalance(self, funded_env):
        env = funded_env
        env.pool.accrue_fees(1_000_000, 0)
        action = env.resolver.execute(env.clock() + 60, sender="keeper")
        assert action == REBALANCE
        assert env.vault.position.owed_fees() == (0, 0)

    def test_execute_nothing(self, funded_env):
        env = funded_env
        assert env.resolver.execute(env.clock() + 60) is None
        assert env.router.swap_count == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
