"""
Tick Math 테스트

tick_math.py의 함수들을 테스트합니다.
온체인 값과 비교하여 정확도를 검증합니다.
"""

import pytest

from ..constants import MIN_TICK, MAX_TICK
from ..math.tick_math import (
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
    floor_tick_to_spacing,
    validate_tick_range,
    is_tick_in_range,
    center_range_on_tick,
    get_tick_spacing_for_fee,
    MIN_SQRT_RATIO,
    MAX_SQRT_RATIO
)


class TestGetSqrtRatioAtTick:
    """get_sqrt_ratio_at_tick 테스트"""

    def test_min_tick(self):
        """최소 틱에서의 sqrtPrice"""
        assert get_sqrt_ratio_at_tick(MIN_TICK) == MIN_SQRT_RATIO

    def test_max_tick(self):
        """최대 틱에서의 sqrtPrice"""
        assert get_sqrt_ratio_at_tick(MAX_TICK) == MAX_SQRT_RATIO

    def test_tick_0(self):
        """틱 0에서 sqrtPrice = 2^96 (price = 1)"""
        assert get_sqrt_ratio_at_tick(0) == 2 ** 96

    def test_monotonic(self):
        """틱이 커지면 sqrtPrice도 커짐"""
        values = [get_sqrt_ratio_at_tick(t) for t in (-60, -1, 0, 1, 60, 185640, 207240)]
        assert values == sorted(values)
        assert len(set(values)) == len(values)

    def test_invalid_tick(self):
        """유효 범위를 벗어난 틱"""
        with pytest.raises(ValueError):
            get_sqrt_ratio_at_tick(MIN_TICK - 1)
        with pytest.raises(ValueError):
            get_sqrt_ratio_at_tick(MAX_TICK + 1)


class TestGetTickAtSqrtRatio:
    """get_tick_at_sqrt_ratio 테스트"""

    def test_min_sqrt_ratio(self):
        assert get_tick_at_sqrt_ratio(MIN_SQRT_RATIO) == MIN_TICK

    def test_roundtrip(self):
        """틱 -> sqrtPrice -> 틱 왕복"""
        for tick in [-50000, -1000, -1, 0, 1, 1000, 185640, 200000, 207240]:
            assert get_tick_at_sqrt_ratio(get_sqrt_ratio_at_tick(tick)) == tick

    def test_between_ticks_rounds_down(self):
        """두 틱 사이의 가격은 아래 틱으로"""
        sqrt_price = get_sqrt_ratio_at_tick(200001) - 1
        assert get_tick_at_sqrt_ratio(sqrt_price) == 200000

    def test_invalid_sqrt_ratio(self):
        with pytest.raises(ValueError):
            get_tick_at_sqrt_ratio(MIN_SQRT_RATIO - 1)
        with pytest.raises(ValueError):
            get_tick_at_sqrt_ratio(MAX_SQRT_RATIO)


class TestTickSpacing:
    """틱 간격 정렬 테스트"""

    def test_floor_positive(self):
        assert floor_tick_to_spacing(119, 60) == 60
        assert floor_tick_to_spacing(120, 60) == 120

    def test_floor_negative(self):
        """음수 틱은 -inf 방향으로 내림"""
        assert floor_tick_to_spacing(-1, 60) == -60
        assert floor_tick_to_spacing(-60, 60) == -60

    def test_floor_invalid_spacing(self):
        with pytest.raises(ValueError):
            floor_tick_to_spacing(100, 0)

    def test_spacing_for_fee(self):
        assert get_tick_spacing_for_fee(500) == 10
        assert get_tick_spacing_for_fee(3000) == 60
        assert get_tick_spacing_for_fee(10000) == 200
        with pytest.raises(ValueError):
            get_tick_spacing_for_fee(1234)


class TestValidateTickRange:
    """validate_tick_range 테스트"""

    def test_valid(self):
        validate_tick_range(185640, 207240, 60)

    def test_inverted(self):
        with pytest.raises(ValueError):
            validate_tick_range(207240, 185640, 60)

    def test_equal(self):
        with pytest.raises(ValueError):
            validate_tick_range(60, 60, 60)

    def test_not_aligned(self):
        with pytest.raises(ValueError):
            validate_tick_range(185641, 207240, 60)

    def test_out_of_bounds(self):
        with pytest.raises(ValueError):
            validate_tick_range(-887280, 0, 60)


class TestRangeMembership:
    """is_tick_in_range 테스트 (양 끝 포함)"""

    def test_inside(self):
        assert is_tick_in_range(200000, 185640, 207240)

    def test_bounds_inclusive(self):
        assert is_tick_in_range(185640, 185640, 207240)
        assert is_tick_in_range(207240, 185640, 207240)

    def test_outside(self):
        assert not is_tick_in_range(185639, 185640, 207240)
        assert not is_tick_in_range(207241, 185640, 207240)


class TestCenterRangeOnTick:
    """center_range_on_tick 테스트"""

    def test_aligned_tick(self):
        """정렬된 틱: 폭의 절반씩 양쪽으로"""
        assert center_range_on_tick(210000, 21600, 60) == (199200, 220800)

    def test_unaligned_tick(self):
        """정렬되지 않은 틱도 범위 안에 포함"""
        lower, upper = center_range_on_tick(210031, 21600, 60)
        assert upper - lower == 21600
        assert lower % 60 == 0 and upper % 60 == 0
        assert lower <= 210031 < upper

    def test_negative_tick(self):
        lower, upper = center_range_on_tick(-1, 120, 60)
        assert (lower, upper) == (-120, 0)
        assert lower <= -1 < upper

    def test_odd_step_count(self):
        """폭이 간격의 홀수 배여도 틱을 포함"""
        for tick in (0, 30, 59, 60, -1, -59):
            lower, upper = center_range_on_tick(tick, 180, 60)
            assert upper - lower == 180
            assert lower <= tick < upper

    def test_clamped_at_max(self):
        """풀 경계 근처에서는 안쪽으로 밀림"""
        lower, upper = center_range_on_tick(887000, 1200, 60)
        assert upper == 887220
        assert lower == 887220 - 1200

    def test_clamped_at_min(self):
        lower, upper = center_range_on_tick(-887000, 1200, 60)
        assert lower == -887220
        assert upper == -887220 + 1200

    def test_invalid_width(self):
        with pytest.raises(ValueError):
            center_range_on_tick(0, 100, 60)
        with pytest.raises(ValueError):
            center_range_on_tick(0, 0, 60)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
