"""
Price Math - 풀 가격 기준 가치 환산

볼트 가치는 모두 token1 단위로 표현합니다.
price(token1/token0, raw) = sqrtPriceX96^2 / 2^192

References:
- Uniswap V3 Periphery: contracts/libraries/OracleLibrary.sol (getQuoteAtTick)
"""

from typing import Tuple

from ..constants import Q96, Q192, BPS_DENOMINATOR
from .full_math import mul_div
from .liquidity_math import get_amounts_for_liquidity


def quote_amount0_in_token1(amount0: int, sqrt_price_x96: int) -> int:
    """token0 수량을 현재 가격의 token1 수량으로 환산 (내림)"""
    return mul_div(amount0, sqrt_price_x96 * sqrt_price_x96, Q192)


def quote_amount1_in_token0(amount1: int, sqrt_price_x96: int) -> int:
    """token1 수량을 현재 가격의 token0 수량으로 환산 (내림)"""
    return mul_div(amount1, Q192, sqrt_price_x96 * sqrt_price_x96)


def value_in_token1(amount0: int, amount1: int, sqrt_price_x96: int) -> int:
    """(amount0, amount1) 묶음의 token1 단위 가치"""
    return quote_amount0_in_token1(amount0, sqrt_price_x96) + amount1


def apply_slippage(amount: int, slippage_bps: int) -> int:
    """허용 슬리피지를 뺀 하한값 (내림)

    amount * (10000 - bps) / 10000
    """
    if slippage_bps < 0 or slippage_bps > BPS_DENOMINATOR:
        raise ValueError(f"슬리피지는 0 ~ {BPS_DENOMINATOR} bps 범위여야 합니다: {slippage_bps}")
    return mul_div(amount, BPS_DENOMINATOR - slippage_bps, BPS_DENOMINATOR)


def target_split(
    amount0: int,
    amount1: int,
    sqrt_price_x96: int,
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int
) -> Tuple[int, int]:
    """보유 수량 전체 가치를 범위가 요구하는 비율로 나눈 목표 (token0, token1)

    한 번의 스왑으로 비율을 맞추기 위한 목표값입니다.
    범위가 요구하는 단위 유동성당 수량 (u0, u1)에 대해:
        target0 = V * u0 / (u0 * P + u1)
        target1 = V - target0 * P
    모든 나눗셈은 내림이며 스왑 수수료와 가격 충격은 무시합니다.
    """
    total_value = value_in_token1(amount0, amount1, sqrt_price_x96)
    if total_value == 0:
        return 0, 0

    unit0, unit1 = get_amounts_for_liquidity(sqrt_price_x96, sqrt_ratio_a_x96, sqrt_ratio_b_x96, Q96 << 32)
    unit_value = value_in_token1(unit0, unit1, sqrt_price_x96)
    if unit_value == 0:
        return amount0, amount1

    target1_from_units = mul_div(total_value, unit1, unit_value)
    target0 = quote_amount1_in_token0(total_value - target1_from_units, sqrt_price_x96)
    target1 = total_value - quote_amount0_in_token1(target0, sqrt_price_x96)
    return target0, target1
