"""
API Request/Response Schemas using Pydantic

Defines data models for the vault API endpoints. Token amounts are raw
integer units (no decimals applied).
"""
from pydantic import BaseModel, Field
from typing import Dict, Optional
from datetime import datetime, timezone


class DepositBody(BaseModel):
    """Request payload for POST /api/v1/vault/deposit"""
    sender: str = Field(..., description="Investor account", min_length=1)
    amount0: int = Field(..., description="Token0 amount offered", ge=0)
    amount1: int = Field(..., description="Token1 amount offered", ge=0)
    min_amount0: int = Field(default=0, description="Minimum token0 placed into the range", ge=0)
    min_amount1: int = Field(default=0, description="Minimum token1 placed into the range", ge=0)
    silo_selector: int = Field(default=1, description="Remainder destination (0=idle, 1=silo)", ge=0, le=1)

    class Config:
        json_schema_extra = {
            "example": {
                "sender": "0xalice",
                "amount0": 10000000000,
                "amount1": 100000000,
                "min_amount0": 0,
                "min_amount1": 0,
                "silo_selector": 1
            }
        }


class DepositResponse(BaseModel):
    """Response payload for POST /api/v1/vault/deposit"""
    investor_id: str = Field(..., description="Investor credited with shares")
    amount0_used: int = Field(..., description="Token0 placed into the range")
    amount1_used: int = Field(..., description="Token1 placed into the range")
    shares_issued: int = Field(..., description="Shares minted")


class DepositSiloBody(BaseModel):
    """Request payload for POST /api/v1/vault/deposit_silo"""
    sender: str = Field(..., description="Caller account", min_length=1)
    silo_address: str = Field(..., description="Silo identifier registered on the vault")
    amount: int = Field(..., description="Amount of the silo asset", gt=0)


class WithdrawBody(BaseModel):
    """Request payload for POST /api/v1/vault/withdraw"""
    sender: str = Field(..., description="Investor account", min_length=1)
    shares: int = Field(..., description="Shares to burn", ge=0)
    min_amount0: int = Field(default=0, description="Minimum token0 paid out", ge=0)
    min_amount1: int = Field(default=0, description="Minimum token1 paid out", ge=0)
    silo_selector: int = Field(default=1, description="Sweep leftover idle balances into silos (1) or not (0)", ge=0, le=1)


class WithdrawResponse(BaseModel):
    """Response payload for POST /api/v1/vault/withdraw"""
    amount0_out: int = Field(..., description="Token0 paid out")
    amount1_out: int = Field(..., description="Token1 paid out")


class KeeperBody(BaseModel):
    """Request payload for rebalance / reposition"""
    sender: Optional[str] = Field(None, description="Keeper account (logged only)")
    deadline: Optional[float] = Field(None, description="Unix timestamp; defaults to now + max deadline")


class SettingBody(BaseModel):
    """Request payload for controller setters"""
    sender: str = Field(..., description="Controller account", min_length=1)
    value: int = Field(..., description="New value (seconds or basis points)")


class TicksResponse(BaseModel):
    """Response payload for GET /api/v1/vault/ticks"""
    tick_lower: int
    tick_upper: int
    current_tick: int


class VaultStateResponse(BaseModel):
    """Response payload for GET /api/v1/vault"""
    asset0: str = Field(..., description="Token0 identifier")
    asset1: str = Field(..., description="Token1 identifier")
    fee_tier: int = Field(..., description="Pool fee tier")
    phase: str = Field(..., description="in_range or out_of_range")
    tick_lower: int
    tick_upper: int
    current_tick: int
    liquidity: int = Field(..., description="Range position liquidity")
    total_shares: int
    total_value: int = Field(..., description="Vault value in token1 units")
    amounts: Dict[str, int] = Field(..., description="Holdings breakdown by location")
    max_slippage_bps: int
    max_deadline_seconds: int


class BalanceResponse(BaseModel):
    """Response payload for GET /api/v1/vault/balance/{investor}"""
    investor: str
    shares: int
    value: int = Field(..., description="Share value in token1 units")


class ResolverResponse(BaseModel):
    """Response payload for GET /api/v1/vault/resolver"""
    can_exec: bool
    action: Optional[str] = Field(None, description="reposition, rebalance or null")


class ActionResponse(BaseModel):
    """Generic response for state-changing calls without a payload"""
    status: str = Field(..., description="ok")
    action: str = Field(..., description="Entry point that ran")


class SimTickBody(BaseModel):
    """Request payload for POST /api/v1/sim/tick"""
    tick: int = Field(..., description="New pool tick", ge=-887272, le=887272)


class SimFeesBody(BaseModel):
    """Request payload for POST /api/v1/sim/fees"""
    fee0: int = Field(default=0, description="Token0 trading fees to distribute", ge=0)
    fee1: int = Field(default=0, description="Token1 trading fees to distribute", ge=0)


class SimAdvanceBody(BaseModel):
    """Request payload for POST /api/v1/sim/advance"""
    seconds: float = Field(..., description="Seconds to advance the simulation clock", ge=0)


class HealthCheckResponse(BaseModel):
    """Response payload for GET /api/v1/health endpoint"""
    status: str = Field(..., description="Health status (healthy or unhealthy)")
    version: str = Field(..., description="API version")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), description="Health check timestamp")

    class Config:
        json_schema_extra = {
            "example": {
                "status": "healthy",
                "version": "0.1.0",
                "timestamp": "2024-01-15T10:30:00Z"
            }
        }
