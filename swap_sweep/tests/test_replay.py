"""
Replay 테스트

틱 경로 생성과 키퍼 재생 결과 DataFrame을 검증합니다.
"""

import numpy as np
import pytest

from ..sim.replay import random_tick_path, replay, summarize
from .conftest import CURRENT_TICK

COLUMNS = [
    'step', 'tick', 'phase', 'action', 'tick_lower', 'tick_upper', 'liquidity',
    'fees0', 'fees1', 'idle0', 'idle1', 'silo0', 'silo1', 'total_value', 'total_shares',
]


class TestTickPath:
    """random_tick_path 테스트"""

    def test_deterministic_with_seed(self):
        a = random_tick_path(CURRENT_TICK, 100, seed=7)
        b = random_tick_path(CURRENT_TICK, 100, seed=7)
        np.testing.assert_array_equal(a, b)

    def test_shape_and_dtype(self):
        path = random_tick_path(CURRENT_TICK, 50, sigma=30.0, seed=1)
        assert len(path) == 50
        assert np.issubdtype(path.dtype, np.integer)

    def test_clipped_to_tick_bounds(self):
        path = random_tick_path(887000, 200, sigma=1_000.0, seed=3)
        assert path.max() <= 887272
        assert path.min() >= -887272


class TestReplay:
    """replay / summarize 테스트"""

    def test_keeper_actions(self, funded_env):
        """범위 안 수수료 → rebalance, 범위 이탈 → reposition"""
        env = funded_env
        df = replay(
            env.vault, env.resolver, env.pool, env.clock,
            [200000, 210000, 210060],
            fee_per_step0=1_000_000,
        )
        assert list(df.columns) == COLUMNS
        assert list(df['action']) == ["rebalance", "reposition", "rebalance"]
        assert list(df['phase']) == ["in_range", "in_range", "in_range"]
        assert tuple(df[['tick_lower', 'tick_upper']].iloc[1]) == (199200, 220800)

    def test_shares_unchanged_by_keeper(self, funded_env):
        """키퍼 작업은 지분을 발행하지 않음"""
        env = funded_env
        shares = env.vault.total_shares
        df = replay(env.vault, env.resolver, env.pool, env.clock, [200000, 200060, 200120])
        assert (df['total_shares'] == shares).all()

    def test_clock_advances(self, funded_env):
        env = funded_env
        start = env.clock()
        replay(env.vault, env.resolver, env.pool, env.clock, [200000] * 4, step_seconds=600)
        assert env.clock() == start + 2_400

    def test_summarize(self, funded_env):
        env = funded_env
        df = replay(
            env.vault, env.resolver, env.pool, env.clock,
            [200000, 210000, 210060],
            fee_per_step0=1_000_000,
        )
        summary = summarize(df)
        assert summary["steps"] == 3
        assert summary["repositions"] == 1
        assert summary["rebalances"] == 2
        assert summary["failures"] == 0
        assert summary["in_range_pct"] == pytest.approx(100.0)
        assert summary["end_value"] > 0

    def test_summarize_empty(self, funded_env):
        env = funded_env
        df = replay(env.vault, env.resolver, env.pool, env.clock, [])
        summary = summarize(df)
        assert summary["steps"] == 0
        assert summary["start_value"] == 0
        assert summary["end_value"] == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
