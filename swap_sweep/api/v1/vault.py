"""
Vault Endpoints

Exposes the vault entry points and read-only views over the simulated
environment.
"""
from fastapi import APIRouter

from ...errors import VaultError
from ...types import SiloSelector
from ..deps import get_environment, to_http_error
from ..schemas import (
    ActionResponse,
    BalanceResponse,
    DepositBody,
    DepositResponse,
    DepositSiloBody,
    KeeperBody,
    ResolverResponse,
    SettingBody,
    TicksResponse,
    VaultStateResponse,
    WithdrawBody,
    WithdrawResponse,
)

router = APIRouter()


@router.get("/vault", response_model=VaultStateResponse)
async def vault_state():
    """
    Vault state

    Returns ticks, phase, shares, value and the holdings breakdown.
    """
    vault = get_environment().vault
    ticks = vault.read_ticks()
    amounts = vault.total_amounts()
    return VaultStateResponse(
        asset0=vault.asset0,
        asset1=vault.asset1,
        fee_tier=vault.fee_tier,
        phase=vault.phase.value,
        tick_lower=ticks.tick_lower,
        tick_upper=ticks.tick_upper,
        current_tick=ticks.current_tick,
        liquidity=vault.position.liquidity,
        total_shares=vault.total_shares,
        total_value=vault.total_value(),
        amounts=amounts._asdict(),
        max_slippage_bps=vault.max_slippage_bps,
        max_deadline_seconds=vault.max_deadline_seconds,
    )


@router.get("/vault/ticks", response_model=TicksResponse)
async def read_ticks():
    """Current range and pool tick"""
    ticks = get_environment().vault.read_ticks()
    return TicksResponse(**ticks._asdict())


@router.get("/vault/balance/{investor}", response_model=BalanceResponse)
async def balance(investor: str):
    """Share balance and its value in token1 units"""
    vault = get_environment().vault
    return BalanceResponse(
        investor=investor,
        shares=vault.balance_of(investor),
        value=vault.share_value(investor),
    )


@router.get("/vault/resolver", response_model=ResolverResponse)
async def resolver_check():
    """Keeper check: which action should run now"""
    can_exec, action = get_environment().resolver.checker()
    return ResolverResponse(can_exec=can_exec, action=action)


@router.post("/vault/deposit", response_model=DepositResponse)
async def deposit(body: DepositBody):
    """
    Deposit both assets and receive shares

    The remainder that cannot be placed at the range ratio goes to the
    silos (silo_selector=1) or stays idle (silo_selector=0).
    """
    vault = get_environment().vault
    try:
        result = vault.deposit(
            body.amount0,
            body.amount1,
            body.min_amount0,
            body.min_amount1,
            SiloSelector(body.silo_selector),
            sender=body.sender,
        )
    except (VaultError, ValueError) as e:
        raise to_http_error(e)
    return DepositResponse(**result._asdict())


@router.post("/vault/deposit_silo", response_model=ActionResponse)
async def deposit_silo(body: DepositSiloBody):
    """Top up one silo without minting shares"""
    vault = get_environment().vault
    try:
        vault.deposit_silo(body.silo_address, body.amount, sender=body.sender)
    except (VaultError, ValueError) as e:
        raise to_http_error(e)
    return ActionResponse(status="ok", action="deposit_silo")


@router.post("/vault/withdraw", response_model=WithdrawResponse)
async def withdraw(body: WithdrawBody):
    """Burn shares and receive the proportional assets"""
    vault = get_environment().vault
    try:
        result = vault.withdraw(
            body.shares,
            body.min_amount0,
            body.min_amount1,
            SiloSelector(body.silo_selector),
            sender=body.sender,
        )
    except (VaultError, ValueError) as e:
        raise to_http_error(e)
    return WithdrawResponse(**result._asdict())


@router.post("/vault/rebalance", response_model=ActionResponse)
async def rebalance(body: KeeperBody):
    """Reinvest collected fees within the current range"""
    env = get_environment()
    deadline = body.deadline
    if deadline is None:
        deadline = env.clock() + env.vault.max_deadline_seconds
    try:
        env.vault.rebalance(deadline, sender=body.sender)
    except (VaultError, ValueError) as e:
        raise to_http_error(e)
    return ActionResponse(status="ok", action="rebalance")


@router.post("/vault/reposition", response_model=ActionResponse)
async def reposition(body: KeeperBody):
    """Move an out-of-range position to a range centred on the current tick"""
    vault = get_environment().vault
    try:
        vault.reposition(sender=body.sender)
    except (VaultError, ValueError) as e:
        raise to_http_error(e)
    return ActionResponse(status="ok", action="reposition")


@router.post("/vault/settings/max_deadline", response_model=ActionResponse)
async def set_max_deadline(body: SettingBody):
    """Controller only: maximum deadline for internal pool and router calls"""
    vault = get_environment().vault
    try:
        vault.set_max_deadline(body.value, sender=body.sender)
    except (VaultError, ValueError) as e:
        raise to_http_error(e)
    return ActionResponse(status="ok", action="set_max_deadline")


@router.post("/vault/settings/max_slippage", response_model=ActionResponse)
async def set_max_slippage(body: SettingBody):
    """Controller only: slippage bound in basis points"""
    vault = get_environment().vault
    try:
        vault.set_max_slippage_d(body.value, sender=body.sender)
    except (VaultError, ValueError) as e:
        raise to_http_error(e)
    return ActionResponse(status="ok", action="set_max_slippage_d")


@router.post("/vault/keeper", response_model=ResolverResponse)
async def keeper_execute(body: KeeperBody):
    """Run whatever the resolver selects"""
    env = get_environment()
    deadline = body.deadline
    if deadline is None:
        deadline = env.clock() + env.vault.max_deadline_seconds
    try:
        action = env.resolver.execute(deadline, sender=body.sender)
    except (VaultError, ValueError) as e:
        raise to_http_error(e)
    return ResolverResponse(can_exec=action is not None, action=action)
