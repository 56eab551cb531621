"""
외부 협력자 인터페이스

볼트는 아래 추상 기능 집합에만 의존합니다. 실제 온체인 구현이나
sim 패키지의 시뮬레이션 구현으로 교체할 수 있습니다.

- Pool: 집중 유동성 풀 (slot0 / mint / burn / collect)
- Router: exactInputSingle 스타일 스왑
- YieldHolding: ERC-4626 스타일 수익 보관소

snapshot() / restore(state)를 구현한 협력자는 볼트 작업 실패 시
호출 전 상태로 함께 되돌려집니다.
"""

from abc import ABC, abstractmethod
from typing import Any, Tuple

from .types import PoolPosition


class Pool(ABC):
    """집중 유동성 풀"""

    token0: str
    token1: str

    @abstractmethod
    def slot0(self) -> Tuple[int, int]:
        """(sqrt_price_x96, tick)"""
        raise NotImplementedError

    def current_tick(self) -> int:
        return self.slot0()[1]

    @abstractmethod
    def tick_spacing(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def fee(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def mint(self, owner: str, tick_lower: int, tick_upper: int, liquidity: int) -> Tuple[int, int]:
        """유동성 추가, 청구된 (amount0, amount1) 반환"""
        raise NotImplementedError

    @abstractmethod
    def burn(self, owner: str, tick_lower: int, tick_upper: int, liquidity: int) -> Tuple[int, int]:
        """유동성 제거, 미수령 잔고에 적립된 (amount0, amount1) 반환"""
        raise NotImplementedError

    @abstractmethod
    def collect(
        self,
        owner: str,
        tick_lower: int,
        tick_upper: int,
        amount0_requested: int,
        amount1_requested: int
    ) -> Tuple[int, int]:
        """미수령 잔고에서 실제 인출된 (amount0, amount1) 반환"""
        raise NotImplementedError

    @abstractmethod
    def position(self, owner: str, tick_lower: int, tick_upper: int) -> PoolPosition:
        """포지션 조회 (수수료 정산 포함)"""
        raise NotImplementedError


class Router(ABC):
    """스왑 라우터"""

    @abstractmethod
    def exact_input_single(
        self,
        token_in: str,
        token_out: str,
        fee: int,
        amount_in: int,
        min_amount_out: int,
        deadline: float
    ) -> int:
        raise NotImplementedError


class YieldHolding(ABC):
    """단일 자산 수익 보관소"""

    asset: str

    @abstractmethod
    def deposit(self, amount: int, holder: str) -> int:
        """자산 예치, 발행된 지분(receipt) 반환"""
        raise NotImplementedError

    @abstractmethod
    def withdraw(self, amount: int, holder: str) -> int:
        """자산 상환, 실제 지급된 수량 반환"""
        raise NotImplementedError

    @abstractmethod
    def balance_of(self, holder: str) -> int:
        """holder의 현재 상환 가능 자산 수량"""
        raise NotImplementedError

    @abstractmethod
    def max_deposit(self, holder: str) -> int:
        raise NotImplementedError

    @abstractmethod
    def max_withdraw(self, holder: str) -> int:
        raise NotImplementedError


def supports_snapshot(obj: Any) -> bool:
    """snapshot()/restore() 지원 여부"""
    return callable(getattr(obj, "snapshot", None)) and callable(getattr(obj, "restore", None))
