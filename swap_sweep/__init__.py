"""
SwapSweep Concentrated Liquidity Vault

단일 집중 유동성 포지션을 감싸는 볼트 라이브러리.
두 자산 입금에 지분을 발행하고, 남는 자본은 수익 사일로에 맡기며,
수수료 재투자(rebalance)와 범위 재배치(reposition)를 수행합니다.
모든 수량은 온체인 수준의 정수 연산으로 처리합니다.
"""

__version__ = "0.1.0"

from .constants import Q96, TICK_SPACINGS, DEFAULT_MAX_DEADLINE_SECONDS, DEFAULT_MAX_SLIPPAGE_BPS
from .errors import (
    VaultError,
    ZeroDeposit,
    ZeroContribution,
    InsufficientShares,
    SlippageExceeded,
    DeadlineExpired,
    StillInRange,
    SiloUnavailable,
    InsufficientSiloLiquidity,
    Reentrancy,
    Unauthorized,
    EmptyVault,
    InvalidSilo,
)
from .types import (
    Phase,
    SiloSelector,
    DepositRequest,
    DepositResult,
    WithdrawResult,
    TickReading,
    VaultAmounts,
)
from .interfaces import Pool, Router, YieldHolding
from .ledger import ShareLedger
from .position import RangePosition
from .silo import SiloAdapter
from .swapper import SwapAdapter
from .vault import Vault
from .resolver import Resolver
