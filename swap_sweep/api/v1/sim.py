"""
Simulation Control Endpoints

Moves the simulated pool price, distributes trading fees and advances the
clock so the vault endpoints can be exercised end to end.
"""
from fastapi import APIRouter

from ..deps import get_environment, reset_environment
from ..schemas import ActionResponse, SimAdvanceBody, SimFeesBody, SimTickBody

router = APIRouter()


@router.post("/sim/tick", response_model=ActionResponse)
async def set_tick(body: SimTickBody):
    """Move the pool to a new tick"""
    get_environment().pool.set_tick(body.tick)
    return ActionResponse(status="ok", action="set_tick")


@router.post("/sim/fees", response_model=ActionResponse)
async def accrue_fees(body: SimFeesBody):
    """Credit trading fees to positions active at the current tick"""
    get_environment().pool.accrue_fees(body.fee0, body.fee1)
    return ActionResponse(status="ok", action="accrue_fees")


@router.post("/sim/advance", response_model=ActionResponse)
async def advance_clock(body: SimAdvanceBody):
    """Advance the simulation clock"""
    get_environment().clock.advance(body.seconds)
    return ActionResponse(status="ok", action="advance")


@router.post("/sim/reset", response_model=ActionResponse)
async def reset():
    """Rebuild the environment from settings"""
    reset_environment()
    return ActionResponse(status="ok", action="reset")
