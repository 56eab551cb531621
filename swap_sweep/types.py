"""
SwapSweep 데이터 타입 정의

볼트 상태와 진입점 입출력을 dataclass / NamedTuple로 정의.
모든 수량 필드는 온체인 정밀도를 위해 int 타입 사용.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import NamedTuple


class Phase(str, Enum):
    """볼트 상태 (현재 틱에서 매번 재계산)"""
    IN_RANGE = "in_range"
    OUT_OF_RANGE = "out_of_range"


class SiloSelector(IntEnum):
    """배치되지 않은 잔여 자산의 목적지

    - IDLE: 볼트 유휴 잔고로 보관
    - SILO: 자산별 사일로로 이동
    """
    IDLE = 0
    SILO = 1


@dataclass(frozen=True)
class DepositRequest:
    """입금 요청 (저장되지 않음)"""
    amount0: int
    amount1: int
    min_amount0: int = 0
    min_amount1: int = 0
    silo_selector: SiloSelector = SiloSelector.SILO

    def __post_init__(self):
        for name in ("amount0", "amount1", "min_amount0", "min_amount1"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name}은 음수일 수 없습니다: {getattr(self, name)}")


@dataclass
class RangePositionState:
    """볼트 소유 범위 포지션 상태

    - liquidity: 포지션 유동성
    - tick_lower / tick_upper: 범위 (볼트 범위와 동일)
    - owed_fees0 / owed_fees1: 누적되었으나 수령하지 않은 수수료
    """
    tick_lower: int
    tick_upper: int
    liquidity: int = 0
    owed_fees0: int = 0
    owed_fees1: int = 0


@dataclass
class SiloBalance:
    """사일로 원금 (현재 상환 가능 금액은 사일로가 결정)"""
    asset: str
    principal: int = 0


@dataclass
class PoolPosition:
    """외부 풀이 보고하는 포지션 정보"""
    liquidity: int = 0
    tokens_owed0: int = 0
    tokens_owed1: int = 0


class PlaceResult(NamedTuple):
    """RangePosition.place 결과"""
    liquidity: int
    amount0: int
    amount1: int


class DepositResult(NamedTuple):
    """Vault.deposit 결과"""
    investor_id: str
    amount0_used: int
    amount1_used: int
    shares_issued: int


class WithdrawResult(NamedTuple):
    """Vault.withdraw 결과"""
    amount0_out: int
    amount1_out: int


class TickReading(NamedTuple):
    """Vault.read_ticks 결과"""
    tick_lower: int
    tick_upper: int
    current_tick: int


class VaultAmounts(NamedTuple):
    """볼트 보유 자산 내역 (token 단위)"""
    position0: int
    position1: int
    fees0: int
    fees1: int
    idle0: int
    idle1: int
    silo0: int
    silo1: int

    @property
    def amount0(self) -> int:
        return self.position0 + self.fees0 + self.idle0 + self.silo0

    @property
    def amount1(self) -> int:
        return self.position1 + self.fees1 + self.idle1 + self.silo1
