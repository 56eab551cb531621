"""
공용 테스트 픽스처

USDC/WETH 0.30% 풀 (틱 간격 60), 볼트 범위 [185640, 207240], 현재 틱 200000.
"""

import pytest

from ..sim import build_environment
from ..sim.clock import ManualClock
from ..sim.holding import SimulatedYieldHolding
from ..sim.pool import SimulatedPool
from ..sim.router import SimulatedRouter

TICK_LOWER = 185640
TICK_UPPER = 207240
CURRENT_TICK = 200000
CONTROLLER = "controller"


@pytest.fixture
def env():
    """시뮬레이션 볼트 환경"""
    return build_environment(
        tick=CURRENT_TICK,
        tick_lower=TICK_LOWER,
        tick_upper=TICK_UPPER,
        controller=CONTROLLER,
    )


@pytest.fixture
def vault(env):
    return env.vault


@pytest.fixture
def funded_env(env):
    """alice가 10,000 USDC + 0.1 WETH를 입금한 환경"""
    env.vault.deposit(10_000_000_000, 100_000_000_000_000_000, 0, 0, sender="alice")
    return env


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def pool():
    return SimulatedPool("USDC", "WETH", 3000, 60, CURRENT_TICK)


@pytest.fixture
def router(pool, clock):
    return SimulatedRouter(pool, clock=clock)


@pytest.fixture
def holding():
    return SimulatedYieldHolding("USDC")
