"""
[ATT-02] 출석·보상 비즈니스 규칙 위반 예외.
모두 호출자에게 노출되는 정상적인 거절이며, 발생 시 해당 작업 전체가 롤백된다.
"""


class AttendanceError(Exception):
    """출석·보상 도메인 예외 기본형. code는 API 응답용 고정 식별자."""

    code = "attendance_error"
    message = "Attendance operation rejected."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)

    @property
    def detail(self) -> str:
        return str(self)


class AlreadyCheckedInToday(AttendanceError):
    code = "already_checked_in_today"
    message = "Already checked in today"


class InsufficientStreak(AttendanceError):
    code = "insufficient_streak"
    message = "Please check in for at least 30 days."


class NoRewardAvailable(AttendanceError):
    code = "no_reward_available"
    message = "No reward available or already claimed."


class AllRewardsClaimed(AttendanceError):
    code = "all_rewards_claimed"
    message = "All rewards have been claimed."
