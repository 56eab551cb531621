"""
Vault - 단일 범위 유동성 볼트

RangePosition / SiloAdapter / SwapAdapter / ShareLedger 를 조합해
입금, 인출, 리밸런스, 재배치를 하나의 원자적 작업으로 수행합니다.

상태 (현재 틱으로 매번 재계산, 저장하지 않음):
    IN_RANGE:      tick_lower <= tick <= tick_upper
    OUT_OF_RANGE:  범위를 벗어남 (reposition 으로만 복귀)

볼트 가치는 token1 단위:
    V = 포지션 원금 + 미수령 수수료 + 유휴 잔고 + 사일로 상환 가능 금액

원자성:
    모든 변경 진입점은 재진입 가드를 거칩니다. 가드는 시작 시
    볼트와 구성요소, snapshot()을 지원하는 외부 협력자의 상태를 저장하고
    예외가 발생하면 모두 되돌린 뒤 예외를 그대로 전달합니다.
"""

import functools
import logging
from typing import Any, Callable, List, Optional, Tuple, TypeVar

from .clock import Clock, require_deadline, system_clock
from .constants import DEFAULT_MAX_DEADLINE_SECONDS, DEFAULT_MAX_SLIPPAGE_BPS, MAX_SLIPPAGE_BPS
from .errors import (
    EmptyVault,
    InvalidSilo,
    Reentrancy,
    SlippageExceeded,
    StillInRange,
    Unauthorized,
    ZeroDeposit,
)
from .interfaces import Pool, Router, YieldHolding, supports_snapshot
from .ledger import ShareLedger
from .math.full_math import mul_div
from .math.price_math import apply_slippage, target_split, value_in_token1
from .math.tick_math import center_range_on_tick, get_sqrt_ratio_at_tick, is_tick_in_range
from .position import RangePosition
from .silo import SiloAdapter
from .swapper import SwapAdapter
from .types import (
    DepositRequest,
    DepositResult,
    Phase,
    SiloSelector,
    TickReading,
    VaultAmounts,
    WithdrawResult,
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def nonreentrant(method: F) -> F:
    """재진입 차단 + 실패 시 전체 롤백"""

    @functools.wraps(method)
    def wrapper(self: "Vault", *args, **kwargs):
        if self._entered:
            raise Reentrancy(method.__name__)
        self._entered = True
        checkpoint = self._checkpoint()
        try:
            return method(self, *args, **kwargs)
        except Exception:
            self._rollback(checkpoint)
            raise
        finally:
            self._entered = False

    return wrapper  # type: ignore[return-value]


class Vault:
    """SwapSweep 볼트

    사용법:
        vault = Vault(pool, router, holding0, holding1, 185640, 207240, 15, controller="0xadmin")
        result = vault.deposit(10**10, 10**17, 0, 0, SiloSelector.SILO, sender="0xalice")
        amount0, amount1 = vault.withdraw(result.shares_issued, 0, 0, SiloSelector.SILO, sender="0xalice")

    Args:
        pool: 집중 유동성 풀
        router: 스왑 라우터
        silo0_holding / silo1_holding: 자산별 수익 보관소
        tick_lower / tick_upper: 초기 범위 (틱 간격의 배수)
        max_slippage_bps: 내부 스왑/배치의 슬리피지 상한 (0 ~ 10000)
        controller: 설정 변경 권한 계정
        address: 풀 포지션 소유자 및 사일로 보유자로 쓰이는 볼트 주소
    """

    def __init__(
        self,
        pool: Pool,
        router: Router,
        silo0_holding: YieldHolding,
        silo1_holding: YieldHolding,
        tick_lower: int,
        tick_upper: int,
        max_slippage_bps: int = DEFAULT_MAX_SLIPPAGE_BPS,
        *,
        controller: str,
        address: str = "swap-sweep-vault",
        silo0_address: Optional[str] = None,
        silo1_address: Optional[str] = None,
        max_deadline_seconds: int = DEFAULT_MAX_DEADLINE_SECONDS,
        clock: Clock = system_clock
    ):
        if silo0_holding.asset != pool.token0 or silo1_holding.asset != pool.token1:
            raise ValueError(
                f"사일로 자산이 풀 자산과 다릅니다: ({silo0_holding.asset}, {silo1_holding.asset}) "
                f"!= ({pool.token0}, {pool.token1})"
            )
        _validate_slippage(max_slippage_bps)
        _validate_deadline(max_deadline_seconds)

        self.pool = pool
        self.router = router
        self.address = address
        self.controller = controller
        self.clock = clock

        self.position = RangePosition(pool, address, tick_lower, tick_upper, clock)
        self.swapper = SwapAdapter(router, pool.token0, pool.token1, pool.fee(), clock)
        self.silo0 = SiloAdapter(silo0_holding, address, silo0_address or f"{address}:silo0")
        self.silo1 = SiloAdapter(silo1_holding, address, silo1_address or f"{address}:silo1")
        self.ledger = ShareLedger()

        self._max_slippage_bps = max_slippage_bps
        self._max_deadline_seconds = max_deadline_seconds
        self._idle0 = 0
        self._idle1 = 0
        self._entered = False

    # ==========================================================================
    # 조회
    # ==========================================================================

    @property
    def asset0(self) -> str:
        return self.pool.token0

    @property
    def asset1(self) -> str:
        return self.pool.token1

    @property
    def fee_tier(self) -> int:
        return self.swapper.fee

    @property
    def tick_lower(self) -> int:
        return self.position.tick_lower

    @property
    def tick_upper(self) -> int:
        return self.position.tick_upper

    @property
    def max_slippage_bps(self) -> int:
        return self._max_slippage_bps

    @property
    def max_deadline_seconds(self) -> int:
        return self._max_deadline_seconds

    @property
    def idle_balances(self) -> Tuple[int, int]:
        return self._idle0, self._idle1

    @property
    def total_shares(self) -> int:
        return self.ledger.total_shares

    @property
    def phase(self) -> Phase:
        return self._classify(self.pool.current_tick())

    def balance_of(self, investor: str) -> int:
        return self.ledger.balance_of(investor)

    def share_value(self, investor: str) -> int:
        """투자자 지분의 현재 가치 (token1 단위)"""
        return self.ledger.value_of(investor, self.total_value())

    def read_ticks(self) -> TickReading:
        return TickReading(self.tick_lower, self.tick_upper, self.pool.current_tick())

    def total_amounts(self, sqrt_price_x96: Optional[int] = None) -> VaultAmounts:
        """볼트 보유 자산 내역"""
        if sqrt_price_x96 is None:
            sqrt_price_x96 = self.pool.slot0()[0]
        position0, position1 = self.position.amounts_at(sqrt_price_x96)
        fees0, fees1 = self.position.owed_fees()
        return VaultAmounts(
            position0=position0,
            position1=position1,
            fees0=fees0,
            fees1=fees1,
            idle0=self._idle0,
            idle1=self._idle1,
            silo0=self.silo0.balance_of(),
            silo1=self.silo1.balance_of(),
        )

    def total_value(self, sqrt_price_x96: Optional[int] = None) -> int:
        """볼트 총가치 (현재 풀 가격, token1 단위)"""
        if sqrt_price_x96 is None:
            sqrt_price_x96 = self.pool.slot0()[0]
        amounts = self.total_amounts(sqrt_price_x96)
        return value_in_token1(amounts.amount0, amounts.amount1, sqrt_price_x96)

    # ==========================================================================
    # 진입점
    # ==========================================================================

    @nonreentrant
    def deposit(
        self,
        amount0: int,
        amount1: int,
        min_amount0: int,
        min_amount1: int,
        silo_selector: SiloSelector = SiloSelector.SILO,
        *,
        sender: str
    ) -> DepositResult:
        """두 자산 입금 후 지분 발행

        범위가 현재 요구하는 비율로 최대한 배치하고 남은 수량은
        silo_selector에 따라 사일로 또는 유휴 잔고로 보냅니다.
        발행 지분은 입금 전후 볼트 가치 차이로 계산합니다.

        Returns:
            DepositResult(investor_id, amount0_used, amount1_used, shares_issued)

        Raises:
            ZeroDeposit: 두 수량이 모두 0
            SlippageExceeded: 배치 수량이 하한 미만
            ZeroContribution: 발행 지분이 0
        """
        request = DepositRequest(amount0, amount1, min_amount0, min_amount1, SiloSelector(silo_selector))
        if request.amount0 == 0 and request.amount1 == 0:
            raise ZeroDeposit(amount0, amount1)

        sqrt_price, tick = self._observe()
        value_before = self.total_value(sqrt_price)

        self._idle0 += request.amount0
        self._idle1 += request.amount1

        placed = self.position.place(
            self.tick_lower,
            self.tick_upper,
            request.amount0,
            request.amount1,
            request.min_amount0,
            request.min_amount1,
            self._deadline(),
        )
        self._idle0 -= placed.amount0
        self._idle1 -= placed.amount1

        if request.silo_selector == SiloSelector.SILO:
            self._park(request.amount0 - placed.amount0, request.amount1 - placed.amount1)

        value_after = self.total_value(sqrt_price)
        shares = self.ledger.mint(sender, value_after - value_before, value_before)

        logger.info(
            "Deposit",
            extra={"event": "vault.deposit", "sender": sender, "amount0": request.amount0,
                   "amount1": request.amount1, "used0": placed.amount0, "used1": placed.amount1,
                   "shares": shares, "tick": tick},
        )
        return DepositResult(sender, placed.amount0, placed.amount1, shares)

    @nonreentrant
    def deposit_silo(self, silo_address: str, amount: int, *, sender: str) -> None:
        """단일 자산을 사일로에 직접 예치 (유휴 준비금 보충, 지분 발행 없음)

        Raises:
            InvalidSilo: 볼트에 등록되지 않은 사일로
            ZeroDeposit: amount가 0
            EmptyVault: 지분이 하나도 없는 볼트
        """
        silo = self._silo_by_address(silo_address)
        if amount <= 0:
            raise ZeroDeposit(amount, 0)
        if self.ledger.total_shares == 0:
            raise EmptyVault(0, self.total_value())

        silo.deposit(amount)

        logger.info(
            "Silo top-up",
            extra={"event": "vault.deposit_silo", "sender": sender, "silo": silo.address,
                   "asset": silo.asset, "amount": amount},
        )

    @nonreentrant
    def withdraw(
        self,
        shares: int,
        min_amount0: int,
        min_amount1: int,
        silo_selector: SiloSelector = SiloSelector.SILO,
        *,
        sender: str
    ) -> WithdrawResult:
        """지분 소각 후 비례 자산 인출

        포지션 유동성, 미수령 수수료, 유휴 잔고, 사일로 잔고를 모두
        shares / total_shares 비율로 인출합니다 (각각 내림).
        silo_selector가 SILO면 남은 유휴 잔고를 사일로로 보냅니다.

        Raises:
            InsufficientShares: 보유 지분 초과
            SlippageExceeded: 인출 수량이 하한 미만
        """
        sqrt_price, tick = self._observe()
        total_shares = self.ledger.total_shares

        fee0, fee1 = self.position.collect_fees()
        self._idle0 += fee0
        self._idle1 += fee1

        self.ledger.burn(sender, shares, self.total_value(sqrt_price))

        out0 = out1 = 0
        if shares > 0:
            idle0 = mul_div(self._idle0, shares, total_shares)
            idle1 = mul_div(self._idle1, shares, total_shares)
            self._idle0 -= idle0
            self._idle1 -= idle1

            liquidity = mul_div(self.position.liquidity, shares, total_shares)
            position0, position1 = self.position.withdraw(liquidity, 0, 0, self._deadline())

            silo0 = self.silo0.withdraw(mul_div(self.silo0.balance_of(), shares, total_shares))
            silo1 = self.silo1.withdraw(mul_div(self.silo1.balance_of(), shares, total_shares))

            out0 = idle0 + position0 + silo0
            out1 = idle1 + position1 + silo1

        if out0 < min_amount0:
            raise SlippageExceeded("amount0_out", out0, min_amount0)
        if out1 < min_amount1:
            raise SlippageExceeded("amount1_out", out1, min_amount1)

        if SiloSelector(silo_selector) == SiloSelector.SILO:
            self._park(self._idle0, self._idle1)

        logger.info(
            "Withdraw",
            extra={"event": "vault.withdraw", "sender": sender, "shares": shares,
                   "amount0": out0, "amount1": out1, "tick": tick},
        )
        return WithdrawResult(out0, out1)

    @nonreentrant
    def rebalance(self, deadline: float, *, sender: Optional[str] = None) -> None:
        """같은 범위 안에서 수수료 재투자

        수수료 수령 → 한 번의 스왑으로 비율 맞춤 → 같은 범위에 배치 →
        남은 유휴 잔고는 사일로로.
        범위 밖이면 스왑/배치 없이 수수료 수령과 사일로 이동만 합니다.
        범위 복귀는 reposition으로만 합니다.

        Raises:
            DeadlineExpired: deadline 이후 호출
        """
        require_deadline(self.clock, deadline)
        sqrt_price, tick = self._observe()
        deadline = min(deadline, self._deadline())
        phase = self._classify(tick)

        fee0, fee1 = self.position.collect_fees()
        self._idle0 += fee0
        self._idle1 += fee1

        if phase == Phase.IN_RANGE:
            self._swap_to_ratio(deadline)
            self._place_idle(deadline)
        self._park(self._idle0, self._idle1)

        logger.info(
            "Rebalance",
            extra={"event": "vault.rebalance", "sender": sender, "fee0": fee0, "fee1": fee1,
                   "tick": tick, "phase": phase.value, "liquidity": self.position.liquidity},
        )

    @nonreentrant
    def reposition(self, *, sender: Optional[str] = None) -> None:
        """범위를 벗어난 포지션을 현재 틱 중심의 새 범위로 이동

        기존 범위 유동성 전량 인출 → 수수료 수령 → 같은 폭의 범위를 현재 틱에
        맞춰 재설정 → 한 번의 스왑으로 비율 맞춤 → 배치 → 잔여분 사일로로.

        Raises:
            StillInRange: 현재 틱이 기존 범위 안에 있는 경우
        """
        sqrt_price, tick = self._observe()
        old_lower, old_upper = self.tick_lower, self.tick_upper
        if is_tick_in_range(tick, old_lower, old_upper):
            raise StillInRange(tick, old_lower, old_upper)

        deadline = self._deadline()

        liquidity = self.position.liquidity
        if liquidity > 0:
            expected0, expected1 = self.position.amounts_at(sqrt_price)
            amount0, amount1 = self.position.withdraw(
                liquidity,
                apply_slippage(expected0, self._max_slippage_bps),
                apply_slippage(expected1, self._max_slippage_bps),
                deadline,
            )
            self._idle0 += amount0
            self._idle1 += amount1

        fee0, fee1 = self.position.collect_fees()
        self._idle0 += fee0
        self._idle1 += fee1

        new_lower, new_upper = center_range_on_tick(tick, old_upper - old_lower, self.pool.tick_spacing())
        self.position.move_range(new_lower, new_upper)

        self._swap_to_ratio(deadline)
        self._place_idle(deadline)
        self._park(self._idle0, self._idle1)

        logger.info(
            "Reposition",
            extra={"event": "vault.reposition", "sender": sender, "tick": tick,
                   "old_range": f"[{old_lower}, {old_upper}]",
                   "new_range": f"[{new_lower}, {new_upper}]",
                   "liquidity": self.position.liquidity},
        )

    @nonreentrant
    def set_max_deadline(self, seconds: int, *, sender: str) -> None:
        """내부 풀/라우터 호출의 최대 기한 (초)"""
        self._require_controller(sender, "set_max_deadline")
        _validate_deadline(seconds)
        self._max_deadline_seconds = seconds
        logger.info("Max deadline updated", extra={"event": "vault.config", "max_deadline": seconds})

    @nonreentrant
    def set_max_slippage_d(self, basis_points: int, *, sender: str) -> None:
        """내부 스왑/배치의 슬리피지 상한 (bps)"""
        self._require_controller(sender, "set_max_slippage_d")
        _validate_slippage(basis_points)
        self._max_slippage_bps = basis_points
        logger.info("Max slippage updated", extra={"event": "vault.config", "max_slippage_bps": basis_points})

    # ==========================================================================
    # 내부 헬퍼
    # ==========================================================================

    def _classify(self, tick: int) -> Phase:
        if is_tick_in_range(tick, self.tick_lower, self.tick_upper):
            return Phase.IN_RANGE
        return Phase.OUT_OF_RANGE

    def _observe(self) -> Tuple[int, int]:
        """현재 가격/틱을 새로 읽고 상태 재분류"""
        sqrt_price, tick = self.pool.slot0()
        logger.debug(
            "Observed pool",
            extra={"event": "vault.observe", "tick": tick, "phase": self._classify(tick).value},
        )
        return sqrt_price, tick

    def _deadline(self) -> float:
        return self.clock() + self._max_deadline_seconds

    def _require_controller(self, sender: Optional[str], action: str) -> None:
        if sender != self.controller:
            raise Unauthorized(sender, action)

    def _silo_by_address(self, silo_address: str) -> SiloAdapter:
        for silo in (self.silo0, self.silo1):
            if silo.address == silo_address:
                return silo
        raise InvalidSilo(silo_address)

    def _park(self, amount0: int, amount1: int) -> None:
        """유휴 잔고 일부를 사일로로 이동"""
        if amount0 > 0:
            self.silo0.deposit(amount0)
            self._idle0 -= amount0
        if amount1 > 0:
            self.silo1.deposit(amount1)
            self._idle1 -= amount1

    def _swap_to_ratio(self, deadline: float) -> None:
        """유휴 잔고를 현재 범위가 요구하는 비율로 한 번에 스왑

        목표 수량은 풀 현재 가격 기준 (수수료/가격 충격 제외), 스왑 수량은 내림.
        """
        sqrt_price = self.pool.slot0()[0]
        target0, target1 = target_split(
            self._idle0,
            self._idle1,
            sqrt_price,
            get_sqrt_ratio_at_tick(self.tick_lower),
            get_sqrt_ratio_at_tick(self.tick_upper),
        )

        if self._idle0 > target0:
            zero_for_one, amount_in = True, self._idle0 - target0
        elif self._idle1 > target1:
            zero_for_one, amount_in = False, self._idle1 - target1
        else:
            return

        quoted = self.swapper.quote(zero_for_one, amount_in, sqrt_price)
        if quoted == 0:
            return

        amount_out = self.swapper.swap(
            zero_for_one, amount_in, self.swapper.min_out(quoted, self._max_slippage_bps), deadline
        )
        if zero_for_one:
            self._idle0 -= amount_in
            self._idle1 += amount_out
        else:
            self._idle1 -= amount_in
            self._idle0 += amount_out

    def _place_idle(self, deadline: float) -> None:
        """유휴 잔고를 현재 범위에 배치"""
        preview = self.position.preview_place(
            self.tick_lower, self.tick_upper, self._idle0, self._idle1, self.pool.slot0()[0]
        )
        if preview.liquidity == 0:
            return

        placed = self.position.place(
            self.tick_lower,
            self.tick_upper,
            self._idle0,
            self._idle1,
            apply_slippage(preview.amount0, self._max_slippage_bps),
            apply_slippage(preview.amount1, self._max_slippage_bps),
            deadline,
        )
        self._idle0 -= placed.amount0
        self._idle1 -= placed.amount1

    def _participants(self) -> List[Any]:
        """롤백 대상 (중복 제거)"""
        candidates = [
            self.ledger, self.position, self.silo0, self.silo1,
            self.pool, self.router, self.silo0.holding, self.silo1.holding,
        ]
        seen = set()
        participants = []
        for obj in candidates:
            if id(obj) not in seen and supports_snapshot(obj):
                seen.add(id(obj))
                participants.append(obj)
        return participants

    def _checkpoint(self) -> List[Tuple[Any, Any]]:
        state = {
            "idle0": self._idle0,
            "idle1": self._idle1,
            "max_slippage_bps": self._max_slippage_bps,
            "max_deadline_seconds": self._max_deadline_seconds,
        }
        return [(self, state)] + [(obj, obj.snapshot()) for obj in self._participants()]

    def _rollback(self, checkpoint: List[Tuple[Any, Any]]) -> None:
        for obj, state in checkpoint:
            if obj is self:
                self._idle0 = state["idle0"]
                self._idle1 = state["idle1"]
                self._max_slippage_bps = state["max_slippage_bps"]
                self._max_deadline_seconds = state["max_deadline_seconds"]
            else:
                obj.restore(state)
        logger.warning("Vault operation reverted", extra={"event": "vault.revert"})


def _validate_slippage(basis_points: int) -> None:
    if basis_points < 0 or basis_points > MAX_SLIPPAGE_BPS:
        raise ValueError(f"슬리피지 상한은 0 ~ {MAX_SLIPPAGE_BPS} bps 범위여야 합니다: {basis_points}")


def _validate_deadline(seconds: int) -> None:
    if seconds <= 0:
        raise ValueError(f"최대 기한은 양수여야 합니다: {seconds}")
