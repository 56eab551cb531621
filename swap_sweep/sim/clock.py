"""
ManualClock - 테스트/시뮬레이션용 수동 시계
"""


class ManualClock:
    """호출 시 현재 시각을 반환하는 시계

    사용법:
        clock = ManualClock(1_700_000_000)
        clock.advance(60)
        clock()  # 1_700_000_060
    """

    def __init__(self, start: float = 1_700_000_000):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now
