"""
Tick Math - 틱 ↔ sqrtPriceX96 변환과 틱 범위 계산

볼트의 범위 판정(InRange/OutOfRange)과 재배치(reposition) 시
새 범위를 고르는 데 필요한 틱 연산.

References:
- Uniswap V3 Core: contracts/libraries/TickMath.sol

핵심 공식:
    price = 1.0001^tick
    sqrtPriceX96 = sqrt(price) * 2^96
"""

from typing import Tuple

from ..constants import MIN_TICK, MAX_TICK, TICK_SPACINGS


MIN_SQRT_RATIO: int = 4295128739
MAX_SQRT_RATIO: int = 1461446703485210103287273052203988822378723970342

# TickMath.getSqrtRatioAtTick 비트별 곱셈 계수 (Q128.128)
_TICK_RATIO_FACTORS: Tuple[Tuple[int, int], ...] = (
    (0x2, 0xfff97272373d413259a46990580e213a),
    (0x4, 0xfff2e50f5f656932ef12357cf3c7fdcc),
    (0x8, 0xffe5caca7e10e4e61c3624eaa0941cd0),
    (0x10, 0xffcb9843d60f6159c9db58835c926644),
    (0x20, 0xff973b41fa98c081472e6896dfb254c0),
    (0x40, 0xff2ea16466c96a3843ec78b326b52861),
    (0x80, 0xfe5dee046a99a2a811c461f1969c3053),
    (0x100, 0xfcbe86c7900a88aedcffc83b479aa3a4),
    (0x200, 0xf987a7253ac413176f2b074cf7815e54),
    (0x400, 0xf3392b0822b70005940c7a398e4b70f3),
    (0x800, 0xe7159475a2c29b7443b29c7fa6e889d9),
    (0x1000, 0xd097f3bdfd2022b8845ad8f792aa5825),
    (0x2000, 0xa9f746462d870fdf8a65dc1f90e061e5),
    (0x4000, 0x70d869a156d2a1b890bb3df62baf32f7),
    (0x8000, 0x31be135f97d08fd981231505542fcfa6),
    (0x10000, 0x9aa508b5b7a84e1c677de54f3e99bc9),
    (0x20000, 0x5d6af8dedb81196699c329225ee604),
    (0x40000, 0x2216e584f5fa1ea926041bedfe98),
    (0x80000, 0x48a170391f7dc42444e8fa2),
)


def get_sqrt_ratio_at_tick(tick: int) -> int:
    """틱에서 sqrtPriceX96 계산

    정수 연산만 사용하여 온체인 값과 비트 단위로 일치합니다.

    Args:
        tick: 틱 인덱스 (MIN_TICK ~ MAX_TICK)

    Returns:
        sqrtPriceX96 (Q64.96)

    Raises:
        ValueError: 틱이 유효 범위를 벗어난 경우
    """
    if tick < MIN_TICK or tick > MAX_TICK:
        raise ValueError(f"틱이 유효 범위를 벗어났습니다: {tick} (범위: {MIN_TICK} ~ {MAX_TICK})")

    abs_tick = abs(tick)

    ratio = 0x100000000000000000000000000000000 if abs_tick & 0x1 == 0 \
        else 0xfffcb933bd6fad37aa2d162d1a594001

    for bit, factor in _TICK_RATIO_FACTORS:
        if abs_tick & bit:
            ratio = (ratio * factor) >> 128

    if tick > 0:
        ratio = (2 ** 256 - 1) // ratio

    # Q128.128 -> Q64.96, 올림
    return (ratio >> 32) + (1 if ratio % (1 << 32) != 0 else 0)


def get_tick_at_sqrt_ratio(sqrt_price_x96: int) -> int:
    """sqrtPriceX96에서 틱 계산

    get_sqrt_ratio_at_tick(tick) <= sqrt_price_x96 를 만족하는 가장 큰 틱.

    Raises:
        ValueError: sqrtPriceX96이 유효 범위를 벗어난 경우
    """
    if sqrt_price_x96 < MIN_SQRT_RATIO or sqrt_price_x96 >= MAX_SQRT_RATIO:
        raise ValueError(f"sqrtPriceX96이 유효 범위를 벗어났습니다: {sqrt_price_x96}")

    ratio = sqrt_price_x96 << 32

    # 최상위 비트
    msb = ratio.bit_length() - 1

    if msb >= 128:
        r = ratio >> (msb - 127)
    else:
        r = ratio << (127 - msb)

    log_2 = (msb - 128) << 64

    for i in range(14):
        r = (r * r) >> 127
        f = r >> 128
        log_2 |= f << (63 - i)
        r >>= f

    log_sqrt10001 = log_2 * 255738958999603826347141

    tick_low = (log_sqrt10001 - 3402992956809132418596140100660247210) >> 128
    tick_high = (log_sqrt10001 + 291339464771989622907027621153398088495) >> 128

    if tick_low == tick_high:
        return tick_low

    return tick_high if get_sqrt_ratio_at_tick(tick_high) <= sqrt_price_x96 else tick_low


def floor_tick_to_spacing(tick: int, tick_spacing: int) -> int:
    """틱 간격 기준 내림 (음수 틱도 -inf 방향)"""
    if tick_spacing <= 0:
        raise ValueError(f"틱 간격은 양수여야 합니다: {tick_spacing}")
    return (tick // tick_spacing) * tick_spacing


def validate_tick_range(tick_lower: int, tick_upper: int, tick_spacing: int) -> None:
    """볼트 범위 유효성 검사

    Raises:
        ValueError: tick_lower >= tick_upper, 범위 초과, 틱 간격 불일치
    """
    if tick_lower >= tick_upper:
        raise ValueError(f"tick_lower는 tick_upper보다 작아야 합니다: [{tick_lower}, {tick_upper}]")
    if tick_lower < MIN_TICK or tick_upper > MAX_TICK:
        raise ValueError(f"틱 범위 초과: [{tick_lower}, {tick_upper}]")
    if tick_lower % tick_spacing != 0 or tick_upper % tick_spacing != 0:
        raise ValueError(
            f"틱이 간격 {tick_spacing}의 배수가 아닙니다: [{tick_lower}, {tick_upper}]"
        )


def is_tick_in_range(tick: int, tick_lower: int, tick_upper: int) -> bool:
    """tick_lower <= tick <= tick_upper (양 끝 포함)"""
    return tick_lower <= tick <= tick_upper


def center_range_on_tick(tick: int, width: int, tick_spacing: int) -> Tuple[int, int]:
    """현재 틱을 중심으로 같은 폭의 새 범위 계산

    width는 tick_spacing의 배수여야 합니다. 결과 범위는 항상
    tick_lower <= tick < tick_upper 를 만족합니다.

    Args:
        tick: 현재 풀 틱
        width: 범위 폭 (tick_upper - tick_lower)
        tick_spacing: 풀 틱 간격

    Returns:
        (tick_lower, tick_upper)
    """
    if width <= 0 or width % tick_spacing != 0:
        raise ValueError(f"범위 폭 {width}은 틱 간격 {tick_spacing}의 양의 배수여야 합니다")

    steps = width // tick_spacing
    tick_lower = floor_tick_to_spacing(tick, tick_spacing) - (steps // 2) * tick_spacing
    tick_upper = tick_lower + width

    # 풀 경계에 걸리면 범위를 안쪽으로 밀어 넣음
    min_aligned = -floor_tick_to_spacing(-MIN_TICK, tick_spacing)
    max_aligned = floor_tick_to_spacing(MAX_TICK, tick_spacing)
    if tick_lower < min_aligned:
        tick_lower, tick_upper = min_aligned, min_aligned + width
    elif tick_upper > max_aligned:
        tick_lower, tick_upper = max_aligned - width, max_aligned

    return tick_lower, tick_upper


def get_tick_spacing_for_fee(fee_tier: int) -> int:
    """수수료 티어에 해당하는 틱 간격"""
    if fee_tier not in TICK_SPACINGS:
        raise ValueError(f"지원하지 않는 수수료 티어: {fee_tier}")
    return TICK_SPACINGS[fee_tier]
