"""
Liquidity Math - 유동성 ↔ 토큰 수량

포지션 배치(place) 시 민트할 유동성과 필요한 토큰 수량,
포지션 평가 및 인출 시 유동성에 해당하는 토큰 수량을 계산합니다.

References:
- Uniswap V3 Core: contracts/libraries/SqrtPriceMath.sol
- Uniswap V3 Periphery: contracts/libraries/LiquidityAmounts.sol

핵심 공식:
    Δx = L * (√P_b - √P_a) / (√P_a * √P_b)
    Δy = L * (√P_b - √P_a)

반올림:
    민트 시 풀이 청구하는 수량은 올림 (round_up=True)
    인출/평가 시 지급되는 수량은 내림 (round_up=False)
"""

from typing import Tuple

from ..constants import Q96
from .full_math import mul_div, mul_div_rounding_up, div_rounding_up


def _sorted(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int) -> Tuple[int, int]:
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        return sqrt_ratio_b_x96, sqrt_ratio_a_x96
    return sqrt_ratio_a_x96, sqrt_ratio_b_x96


def get_amount0_delta(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    round_up: bool = False
) -> int:
    """두 가격 사이에서 liquidity에 해당하는 token0 수량"""
    sqrt_a, sqrt_b = _sorted(sqrt_ratio_a_x96, sqrt_ratio_b_x96)

    numerator1 = liquidity << 96
    numerator2 = sqrt_b - sqrt_a

    if round_up:
        return div_rounding_up(mul_div_rounding_up(numerator1, numerator2, sqrt_b), sqrt_a)
    return mul_div(numerator1, numerator2, sqrt_b) // sqrt_a


def get_amount1_delta(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    round_up: bool = False
) -> int:
    """두 가격 사이에서 liquidity에 해당하는 token1 수량"""
    sqrt_a, sqrt_b = _sorted(sqrt_ratio_a_x96, sqrt_ratio_b_x96)

    if round_up:
        return mul_div_rounding_up(liquidity, sqrt_b - sqrt_a, Q96)
    return mul_div(liquidity, sqrt_b - sqrt_a, Q96)


def get_liquidity_for_amount0(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, amount0: int) -> int:
    """token0 수량으로 민트 가능한 최대 유동성

    L = Δx * √P_a * √P_b / (√P_b - √P_a)
    """
    sqrt_a, sqrt_b = _sorted(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    if sqrt_b == sqrt_a:
        return 0

    intermediate = mul_div(sqrt_a, sqrt_b, Q96)
    return mul_div(amount0, intermediate, sqrt_b - sqrt_a)


def get_liquidity_for_amount1(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, amount1: int) -> int:
    """token1 수량으로 민트 가능한 최대 유동성

    L = Δy / (√P_b - √P_a)
    """
    sqrt_a, sqrt_b = _sorted(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    if sqrt_b == sqrt_a:
        return 0

    return mul_div(amount1, Q96, sqrt_b - sqrt_a)


def get_liquidity_for_amounts(
    sqrt_ratio_x96: int,
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    amount0: int,
    amount1: int
) -> int:
    """현재 가격에서 두 토큰 수량으로 민트 가능한 최대 유동성

    - 가격이 범위 아래: token0만 사용
    - 가격이 범위 안: 두 제약 중 작은 값
    - 가격이 범위 위: token1만 사용
    """
    sqrt_a, sqrt_b = _sorted(sqrt_ratio_a_x96, sqrt_ratio_b_x96)

    if sqrt_ratio_x96 <= sqrt_a:
        return get_liquidity_for_amount0(sqrt_a, sqrt_b, amount0)
    if sqrt_ratio_x96 < sqrt_b:
        liquidity0 = get_liquidity_for_amount0(sqrt_ratio_x96, sqrt_b, amount0)
        liquidity1 = get_liquidity_for_amount1(sqrt_a, sqrt_ratio_x96, amount1)
        return min(liquidity0, liquidity1)
    return get_liquidity_for_amount1(sqrt_a, sqrt_b, amount1)


def get_amounts_for_liquidity(
    sqrt_ratio_x96: int,
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    round_up: bool = False
) -> Tuple[int, int]:
    """현재 가격에서 liquidity가 나타내는 (amount0, amount1)

    Args:
        sqrt_ratio_x96: 현재 sqrtPriceX96
        sqrt_ratio_a_x96: 하한 sqrtPriceX96
        sqrt_ratio_b_x96: 상한 sqrtPriceX96
        liquidity: 유동성
        round_up: True면 민트 청구량(올림), False면 지급량(내림)

    Returns:
        (amount0, amount1)
    """
    sqrt_a, sqrt_b = _sorted(sqrt_ratio_a_x96, sqrt_ratio_b_x96)

    if sqrt_ratio_x96 <= sqrt_a:
        return get_amount0_delta(sqrt_a, sqrt_b, liquidity, round_up), 0
    if sqrt_ratio_x96 < sqrt_b:
        amount0 = get_amount0_delta(sqrt_ratio_x96, sqrt_b, liquidity, round_up)
        amount1 = get_amount1_delta(sqrt_a, sqrt_ratio_x96, liquidity, round_up)
        return amount0, amount1
    return 0, get_amount1_delta(sqrt_a, sqrt_b, liquidity, round_up)
