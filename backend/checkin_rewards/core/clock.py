"""
[ATT-01] 현재 시각 공급자. 출석 로직은 시계를 소유하지 않고 주입받는다.
"""
import time
from typing import Callable

SECONDS_PER_DAY = 86400

Clock = Callable[[], int]


def system_clock() -> int:
    """현재 unix timestamp(초, 정수)."""
    return int(time.time())


def epoch_day(timestamp: int) -> int:
    """timestamp ÷ 86400 내림. 고정 24시간 기준(타임존 미적용)."""
    return int(timestamp) // SECONDS_PER_DAY
