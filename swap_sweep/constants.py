"""
SwapSweep 상수 정의

볼트 계산에 쓰이는 고정소수점/틱/설정 상수:
- Q96, Q192: sqrt price 인코딩 (2^96) 및 가격 제곱 환산
- MIN_TICK, MAX_TICK: 풀 틱 범위
- TICK_SPACINGS: 수수료 티어별 틱 간격
- BPS_DENOMINATOR: 슬리피지 상한의 basis point 분모
"""

from typing import Dict

# Fixed-point 인코딩 상수
Q96: int = 2 ** 96
Q192: int = 2 ** 192

# 수수료 티어 (pool fee 단위: 1e-6)
# 500 = 0.05%, 3000 = 0.30%, 10000 = 1.00%, 틱 간격은 티어별 고정
TICK_SPACINGS: Dict[int, int] = {
    100: 1,
    500: 10,
    3000: 60,
    10000: 200,
}

FEE_DENOMINATOR: int = 1_000_000

# 틱 범위 상수
MIN_TICK: int = -887272
MAX_TICK: int = 887272

# 슬리피지 (basis points)
BPS_DENOMINATOR: int = 10_000
MAX_SLIPPAGE_BPS: int = BPS_DENOMINATOR

# 볼트 기본 설정
DEFAULT_MAX_DEADLINE_SECONDS: int = 300
DEFAULT_MAX_SLIPPAGE_BPS: int = 50

UINT128_MAX: int = 2 ** 128 - 1
