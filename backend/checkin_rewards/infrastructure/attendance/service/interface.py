"""
[ATT-09] 출석·보상 조회 서비스 인터페이스.
출석 기록 조회, 티어 청구 여부, 토큰 잔액·URI, 다음 청구 대상 티어 조회 계약을 정의한다.
"""
from typing import Protocol

from checkin_rewards.infrastructure.attendance.repository import ClaimRecordDto
from checkin_rewards.infrastructure.attendance.reward_catalog import RewardTier
from checkin_rewards.infrastructure.attendance.schemas import CheckInHistoryResponse


class AttendanceService(Protocol):
    """출석 기록 및 보상 조회 서비스 인터페이스 [ATT-09]."""

    def get_check_in_history(self, account: str) -> CheckInHistoryResponse:
        """(총 출석, 마지막 출석일, 현재 streak, 최대 streak). 출석 기록이 없으면 모두 0."""
        ...

    def has_claimed(self, account: str, threshold_days: int) -> bool:
        """해당 임계값 티어를 청구했는지. streak가 리셋돼도 True 유지."""
        ...

    def balance_of(self, account: str, token_id: int) -> int:
        ...

    def uri(self, token_id: int) -> str:
        ...

    def next_claimable_tier(self, account: str) -> RewardTier | None:
        """다음 청구 시 대상이 되는 티어(아직 청구하지 않은 최저 티어). 전부 청구했으면 None."""
        ...

    def list_claims(self, account: str) -> list[ClaimRecordDto]:
        ...

    def list_tiers(self) -> list[RewardTier]:
        ...

    def owner(self) -> str:
        ...
