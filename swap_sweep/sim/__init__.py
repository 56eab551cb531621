"""
시뮬레이션 협력자

메모리 내 풀 / 라우터 / 수익 보관소 / 시계와, 이를 조합한 볼트 환경.

사용법:
    from swap_sweep.sim import build_environment

    env = build_environment(tick=200000, tick_lower=185640, tick_upper=207240)
    env.vault.deposit(10**10, 10**17, 0, 0, sender="alice")
    env.pool.set_tick(210000)
    env.resolver.checker()  # (True, "reposition")
"""

from dataclasses import dataclass
from typing import Optional

from ..constants import DEFAULT_MAX_DEADLINE_SECONDS, DEFAULT_MAX_SLIPPAGE_BPS
from ..math.tick_math import get_tick_spacing_for_fee
from ..resolver import Resolver
from ..vault import Vault
from .clock import ManualClock
from .holding import SimulatedYieldHolding
from .pool import SimulatedPool
from .replay import random_tick_path, replay, summarize
from .router import SimulatedRouter


@dataclass
class SimulatedEnvironment:
    """볼트와 시뮬레이션 협력자 묶음"""
    pool: SimulatedPool
    router: SimulatedRouter
    holding0: SimulatedYieldHolding
    holding1: SimulatedYieldHolding
    clock: ManualClock
    vault: Vault
    resolver: Resolver


def build_environment(
    tick: int = 200000,
    tick_lower: int = 185640,
    tick_upper: int = 207240,
    fee: int = 3000,
    tick_spacing: Optional[int] = None,
    token0: str = "USDC",
    token1: str = "WETH",
    max_slippage_bps: int = DEFAULT_MAX_SLIPPAGE_BPS,
    max_deadline_seconds: int = DEFAULT_MAX_DEADLINE_SECONDS,
    controller: str = "controller",
    price_impact_bps: int = 0
) -> SimulatedEnvironment:
    """시뮬레이션 볼트 환경 생성

    tick_spacing을 생략하면 수수료 티어의 표준 틱 간격을 씁니다.
    """
    if tick_spacing is None:
        tick_spacing = get_tick_spacing_for_fee(fee)
    clock = ManualClock()
    pool = SimulatedPool(token0, token1, fee, tick_spacing, tick)
    router = SimulatedRouter(pool, price_impact_bps=price_impact_bps, clock=clock)
    holding0 = SimulatedYieldHolding(token0)
    holding1 = SimulatedYieldHolding(token1)
    vault = Vault(
        pool,
        router,
        holding0,
        holding1,
        tick_lower,
        tick_upper,
        max_slippage_bps,
        controller=controller,
        max_deadline_seconds=max_deadline_seconds,
        clock=clock,
    )
    return SimulatedEnvironment(
        pool=pool,
        router=router,
        holding0=holding0,
        holding1=holding1,
        clock=clock,
        vault=vault,
        resolver=Resolver(vault),
    )


__all__ = [
    'ManualClock',
    'SimulatedPool',
    'SimulatedRouter',
    'SimulatedYieldHolding',
    'SimulatedEnvironment',
    'build_environment',
    'random_tick_path',
    'replay',
    'summarize',
]
