"""
Configuration settings for the SwapSweep vault service

Loads environment variables and provides application configuration.
"""
import os
from typing import List
from dotenv import load_dotenv

from .constants import DEFAULT_MAX_DEADLINE_SECONDS, DEFAULT_MAX_SLIPPAGE_BPS

# Load environment variables from .env file
load_dotenv()


class Settings:
    """Application settings"""

    # API Configuration
    API_VERSION: str = "0.1.0"
    API_TITLE: str = os.getenv("SWAP_SWEEP_API_TITLE", "SwapSweep Vault API")
    API_DESCRIPTION: str = "Concentrated liquidity vault with yield silos, rebalancing and repositioning"

    # Vault Configuration
    MAX_DEADLINE_SECONDS: int = int(os.getenv("SWAP_SWEEP_MAX_DEADLINE_SECONDS", DEFAULT_MAX_DEADLINE_SECONDS))
    MAX_SLIPPAGE_BPS: int = int(os.getenv("SWAP_SWEEP_MAX_SLIPPAGE_BPS", DEFAULT_MAX_SLIPPAGE_BPS))
    CONTROLLER: str = os.getenv("SWAP_SWEEP_CONTROLLER", "controller")

    # Simulated Pool
    TOKEN0: str = os.getenv("SWAP_SWEEP_TOKEN0", "USDC")
    TOKEN1: str = os.getenv("SWAP_SWEEP_TOKEN1", "WETH")
    INITIAL_TICK: int = int(os.getenv("SWAP_SWEEP_INITIAL_TICK", 200000))
    TICK_LOWER: int = int(os.getenv("SWAP_SWEEP_TICK_LOWER", 185640))
    TICK_UPPER: int = int(os.getenv("SWAP_SWEEP_TICK_UPPER", 207240))
    # 틱 간격은 수수료 티어에서 결정 (build_environment)
    FEE_TIER: int = int(os.getenv("SWAP_SWEEP_FEE_TIER", 3000))

    # CORS Configuration
    CORS_ORIGINS: List[str] = os.getenv(
        "SWAP_SWEEP_CORS_ORIGINS",
        "http://localhost:3000"
    ).split(",")

    # Server Configuration
    HOST: str = os.getenv("SWAP_SWEEP_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("SWAP_SWEEP_PORT", 8000))
    DEBUG: bool = os.getenv("SWAP_SWEEP_DEBUG", "False").lower() == "true"

    def vault_params(self) -> dict:
        """build_environment() 인자"""
        return {
            "tick": self.INITIAL_TICK,
            "tick_lower": self.TICK_LOWER,
            "tick_upper": self.TICK_UPPER,
            "fee": self.FEE_TIER,
            "token0": self.TOKEN0,
            "token1": self.TOKEN1,
            "max_slippage_bps": self.MAX_SLIPPAGE_BPS,
            "max_deadline_seconds": self.MAX_DEADLINE_SECONDS,
            "controller": self.CONTROLLER,
        }


# Create global settings instance
settings = Settings()
