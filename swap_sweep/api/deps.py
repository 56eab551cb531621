"""
Shared simulated vault environment for the API

One environment per process, built lazily from settings.
"""
from fastapi import HTTPException

from ..config import settings
from ..errors import (
    EmptyVault,
    InsufficientShares,
    InvalidSilo,
    Reentrancy,
    StillInRange,
    Unauthorized,
    VaultError,
)
from ..sim import SimulatedEnvironment, build_environment

# Global cache for the simulated environment
_env_cache = {}

# VaultError kind -> HTTP status (default 400)
ERROR_STATUS = {
    Unauthorized: 403,
    InvalidSilo: 404,
    StillInRange: 409,
    Reentrancy: 409,
    EmptyVault: 409,
    InsufficientShares: 422,
}


def get_environment() -> SimulatedEnvironment:
    """Return the process-wide environment, building it on first use"""
    if "env" not in _env_cache:
        _env_cache["env"] = build_environment(**settings.vault_params())
    return _env_cache["env"]


def reset_environment() -> SimulatedEnvironment:
    """Discard the current environment and build a fresh one"""
    _env_cache.pop("env", None)
    return get_environment()


def to_http_error(error: Exception) -> HTTPException:
    """Translate a vault failure into an HTTPException"""
    if isinstance(error, VaultError):
        status = ERROR_STATUS.get(type(error), 400)
        return HTTPException(
            status_code=status,
            detail={"error": type(error).__name__, "message": str(error)}
        )
    return HTTPException(
        status_code=400,
        detail={"error": "ValueError", "message": str(error)}
    )
