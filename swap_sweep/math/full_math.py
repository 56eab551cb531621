"""
Full Math - 정밀도 손실 없는 곱셈/나눗셈

Solidity FullMath.mulDiv / mulDivRoundingUp 와 동일한 반올림 규칙.
Python int는 오버플로우가 없으므로 중간값 그대로 계산합니다.

반올림 원칙:
- 사용자에게 지급하는 값은 내림
- 사용자에게 청구하는 값은 올림
"""


def mul_div(a: int, b: int, denominator: int) -> int:
    """(a * b) / denominator 내림

    Raises:
        ZeroDivisionError: denominator가 0인 경우
    """
    if denominator == 0:
        raise ZeroDivisionError("mul_div: 분모가 0입니다")
    return (a * b) // denominator


def mul_div_rounding_up(a: int, b: int, denominator: int) -> int:
    """(a * b) / denominator 올림"""
    result = mul_div(a, b, denominator)
    if (a * b) % denominator > 0:
        result += 1
    return result


def div_rounding_up(numerator: int, denominator: int) -> int:
    """numerator / denominator 올림"""
    result = numerator // denominator
    if numerator % denominator > 0:
        result += 1
    return result
