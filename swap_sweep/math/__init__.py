"""
Math layer for the SwapSweep vault

온체인 정밀도의 정수 연산:
- full_math: mul_div 반올림 규칙
- tick_math: 틱 ↔ sqrtPriceX96, 범위 검증/재배치
- liquidity_math: 유동성 ↔ 토큰 수량
- price_math: token1 단위 가치 환산, 슬리피지 하한, 목표 비율
"""

from .full_math import mul_div, mul_div_rounding_up, div_rounding_up
from .tick_math import (
    MIN_SQRT_RATIO,
    MAX_SQRT_RATIO,
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
    floor_tick_to_spacing,
    validate_tick_range,
    is_tick_in_range,
    center_range_on_tick,
    get_tick_spacing_for_fee,
)
from .liquidity_math import (
    get_amount0_delta,
    get_amount1_delta,
    get_liquidity_for_amount0,
    get_liquidity_for_amount1,
    get_liquidity_for_amounts,
    get_amounts_for_liquidity,
)
from .price_math import (
    quote_amount0_in_token1,
    quote_amount1_in_token0,
    value_in_token1,
    apply_slippage,
    target_split,
)
