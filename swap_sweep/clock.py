"""
시간 소스와 기한(deadline) 검사

볼트 작업의 유일한 취소 수단은 deadline 파라미터입니다.
"""

import time
from typing import Callable

from .errors import DeadlineExpired

Clock = Callable[[], float]


def system_clock() -> float:
    """현재 Unix timestamp (초)"""
    return time.time()


def require_deadline(clock: Clock, deadline: float) -> None:
    """now > deadline 이면 DeadlineExpired"""
    now = clock()
    if now > deadline:
        raise DeadlineExpired(deadline, now)
