"""
Replay - 틱 경로 위에서 볼트 + 키퍼 실행

각 스텝마다:
    1. 풀 틱 이동
    2. 활성 포지션에 수수료 적립
    3. 시계 진행
    4. Resolver.checker()가 고른 작업 실행
    5. 볼트 상태 기록

결과는 스텝별 pandas DataFrame.
"""

import logging
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from ..constants import MAX_TICK, MIN_TICK
from ..errors import VaultError
from ..resolver import Resolver
from ..vault import Vault
from .clock import ManualClock
from .pool import SimulatedPool

logger = logging.getLogger(__name__)


def random_tick_path(start_tick: int, steps: int, sigma: float = 60.0, seed: Optional[int] = None) -> np.ndarray:
    """정규분포 증분 랜덤워크 틱 경로

    Args:
        start_tick: 시작 틱 (경로에 포함되지 않음)
        steps: 스텝 수
        sigma: 스텝당 틱 변화 표준편차
        seed: 난수 시드

    Returns:
        길이 steps의 int64 배열
    """
    rng = np.random.default_rng(seed)
    increments = rng.normal(0.0, sigma, size=steps)
    path = start_tick + np.cumsum(increments)
    return np.clip(np.rint(path), MIN_TICK, MAX_TICK).astype(np.int64)


def replay(
    vault: Vault,
    resolver: Resolver,
    pool: SimulatedPool,
    clock: ManualClock,
    ticks: Sequence[int],
    fee_per_step0: int = 0,
    fee_per_step1: int = 0,
    step_seconds: int = 3600,
    keeper: str = "keeper"
) -> pd.DataFrame:
    """틱 경로 재생

    작업이 VaultError로 실패하면 볼트는 이미 롤백된 상태이므로
    실패한 에러 이름을 action 컬럼에 남기고 다음 스텝으로 진행합니다.
    """
    tracking = {
        'step': [],
        'tick': [],
        'phase': [],
        'action': [],
        'tick_lower': [],
        'tick_upper': [],
        'liquidity': [],
        'fees0': [],
        'fees1': [],
        'idle0': [],
        'idle1': [],
        'silo0': [],
        'silo1': [],
        'total_value': [],
        'total_shares': [],
    }

    for step, tick in enumerate(ticks):
        pool.set_tick(int(tick))
        pool.accrue_fees(fee_per_step0, fee_per_step1)
        clock.advance(step_seconds)

        try:
            action = resolver.execute(clock() + vault.max_deadline_seconds, sender=keeper)
        except VaultError as e:
            logger.warning(
                "Keeper action failed",
                extra={"event": "replay.failed", "step": step, "error": type(e).__name__},
            )
            action = f"failed:{type(e).__name__}"

        amounts = vault.total_amounts()
        tracking['step'].append(step)
        tracking['tick'].append(int(tick))
        tracking['phase'].append(vault.phase.value)
        tracking['action'].append(action)
        tracking['tick_lower'].append(vault.tick_lower)
        tracking['tick_upper'].append(vault.tick_upper)
        tracking['liquidity'].append(vault.position.liquidity)
        tracking['fees0'].append(amounts.fees0)
        tracking['fees1'].append(amounts.fees1)
        tracking['idle0'].append(amounts.idle0)
        tracking['idle1'].append(amounts.idle1)
        tracking['silo0'].append(amounts.silo0)
        tracking['silo1'].append(amounts.silo1)
        tracking['total_value'].append(vault.total_value())
        tracking['total_shares'].append(vault.total_shares)

    return pd.DataFrame(tracking)


def summarize(df: pd.DataFrame) -> dict:
    """재생 결과 요약"""
    if df.empty:
        return {"steps": 0, "in_range_pct": 0.0, "repositions": 0, "rebalances": 0, "failures": 0,
                "start_value": 0, "end_value": 0}

    actions = df['action'].fillna("")
    return {
        "steps": len(df),
        "in_range_pct": float((df['phase'] == "in_range").mean() * 100),
        "repositions": int((actions == "reposition").sum()),
        "rebalances": int((actions == "rebalance").sum()),
        "failures": int(actions.str.startswith("failed:").sum()),
        "start_value": int(df['total_value'].iloc[0]),
        "end_value": int(df['total_value'].iloc[-1]),
    }
