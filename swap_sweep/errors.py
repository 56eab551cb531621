"""
볼트 에러 정의

모든 실패는 작업 전체를 되돌리고(원자적 롤백) 호출자에게 전달됩니다.
각 에러는 재시도 판단에 필요한 값(종류 + 문제 값)을 속성으로 가집니다.
"""

from typing import Optional


class VaultError(Exception):
    """볼트 작업 실패의 기본 클래스"""


class ZeroDeposit(VaultError):
    def __init__(self, amount0: int = 0, amount1: int = 0):
        self.amount0 = amount0
        self.amount1 = amount1
        super().__init__(f"입금 수량이 0입니다: amount0={amount0}, amount1={amount1}")


class ZeroContribution(VaultError):
    def __init__(self, value_contributed: int, shares: int = 0):
        self.value_contributed = value_contributed
        self.shares = shares
        super().__init__(
            f"기여 가치로 발행할 지분이 없습니다: value={value_contributed}, shares={shares}"
        )


class InsufficientShares(VaultError):
    def __init__(self, investor: str, requested: int, balance: int):
        self.investor = investor
        self.requested = requested
        self.balance = balance
        super().__init__(f"지분 부족: {investor} 요청={requested}, 보유={balance}")


class SlippageExceeded(VaultError):
    def __init__(self, label: str, actual: int, bound: int):
        self.label = label
        self.actual = actual
        self.bound = bound
        super().__init__(f"슬리피지 초과 ({label}): 실제={actual}, 한도={bound}")


class DeadlineExpired(VaultError):
    def __init__(self, deadline: float, now: float):
        self.deadline = deadline
        self.now = now
        super().__init__(f"기한 만료: deadline={deadline}, now={now}")


class StillInRange(VaultError):
    def __init__(self, current_tick: int, tick_lower: int, tick_upper: int):
        self.current_tick = current_tick
        self.tick_lower = tick_lower
        self.tick_upper = tick_upper
        super().__init__(
            f"현재 틱 {current_tick}이 범위 [{tick_lower}, {tick_upper}] 안에 있습니다"
        )


class SiloUnavailable(VaultError):
    def __init__(self, silo: str, amount: int, capacity: Optional[int] = None):
        self.silo = silo
        self.amount = amount
        self.capacity = capacity
        super().__init__(f"사일로 {silo} 입금 거부: amount={amount}, 한도={capacity}")


class InsufficientSiloLiquidity(VaultError):
    def __init__(self, silo: str, requested: int, available: int):
        self.silo = silo
        self.requested = requested
        self.available = available
        super().__init__(f"사일로 {silo} 유동성 부족: 요청={requested}, 가능={available}")


class Reentrancy(VaultError):
    def __init__(self, entry_point: str):
        self.entry_point = entry_point
        super().__init__(f"재진입 차단: {entry_point}")


class Unauthorized(VaultError):
    def __init__(self, sender: Optional[str], action: str):
        self.sender = sender
        self.action = action
        super().__init__(f"권한 없음: {sender} -> {action}")


class EmptyVault(VaultError):
    def __init__(self, total_shares: int, total_value: int):
        self.total_shares = total_shares
        self.total_value = total_value
        super().__init__(
            f"볼트 지분/가치 불일치: total_shares={total_shares}, total_value={total_value}"
        )


class InvalidSilo(VaultError):
    def __init__(self, silo: str):
        self.silo = silo
        super().__init__(f"등록되지 않은 사일로: {silo}")
