"""
[ATT-05] 연속 출석(Streak) 상태 전이 — 순수 함수.
(이전 상태, 현재 시각) → 새 상태. 저장·트랜잭션은 호출자(AttendanceManager) 책임.
"""
from dataclasses import dataclass, replace

from checkin_rewards.core.clock import epoch_day
from checkin_rewards.infrastructure.attendance.exceptions import AlreadyCheckedInToday


@dataclass(frozen=True)
class StreakState:
    """[ATT-05] 계정별 출석 기록 스냅샷. 첫 출석 전에는 모든 값 0."""

    total_check_ins: int = 0
    last_check_in_day: int = 0
    current_streak: int = 0
    max_streak: int = 0

    @property
    def has_checked_in(self) -> bool:
        # last_check_in_day 0은 실제 0일차와 구분되지 않으므로 총 횟수로 판별
        return self.total_check_ins > 0


def apply_check_in(state: StreakState, now: int) -> StreakState:
    """
    [ATT-05] 출석 1회 반영.
    - 같은 날(또는 기록보다 이전 날) 재출석 → AlreadyCheckedInToday.
    - 직전 출석 다음 날이면 streak +1, 첫 출석이거나 하루 이상 빠졌으면 1로 리셋.
    - max_streak는 감소하지 않는다.
    """
    day = epoch_day(now)
    if state.has_checked_in and day <= state.last_check_in_day:
        raise AlreadyCheckedInToday()
    if state.has_checked_in and day == state.last_check_in_day + 1:
        streak = state.current_streak + 1
    else:
        streak = 1
    return replace(
        state,
        total_check_ins=state.total_check_ins + 1,
        last_check_in_day=day,
        current_streak=streak,
        max_streak=max(state.max_streak, streak),
    )
