"""
[ATT-10] 출석·보상 요청/응답 스키마.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# ── 응답: 출석 ──────────────────────────────────────────────────

class CheckInResponse(BaseModel):
    """[ATT-05] 출석 체크 결과 — 갱신된 출석 기록."""

    account: str
    day: int = Field(..., ge=0, description="출석한 epoch day (timestamp // 86400)")
    total_check_ins: int = Field(..., ge=0)
    current_streak: int = Field(..., ge=0, description="현재 연속 출석 일수")
    max_streak: int = Field(..., ge=0, description="역대 최대 연속 출석 일수")


class CheckInHistoryResponse(BaseModel):
    """[ATT-09] 출석 기록 조회 — (총 출석, 마지막 출석일, 현재 streak, 최대 streak)."""

    account: str
    total_check_ins: int = 0
    last_check_in_day: int = Field(0, description="마지막 출석 epoch day. 출석 기록 없으면 0")
    current_streak: int = 0
    max_streak: int = 0


# ── 응답: 보상 ──────────────────────────────────────────────────

class RewardTierResponse(BaseModel):
    """[ATT-04] 보상 티어."""

    threshold_days: int
    token_id: int
    name: str
    metadata_uri: str

    model_config = {"from_attributes": True}


class ClaimResponse(BaseModel):
    """[ATT-06] 보상 청구 결과 — 지급된 티어와 청구 시점 streak."""

    account: str
    tier_threshold: int
    token_id: int
    tier_name: str
    metadata_uri: str
    current_streak: int


class ClaimRecordResponse(BaseModel):
    """[ATT-06] 청구 이력 1건."""

    account: str
    tier_threshold: int
    token_id: int
    streak_at_claim: int
    claimed_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class HasClaimedResponse(BaseModel):
    account: str
    threshold_days: int
    claimed: bool


class TokenBalanceResponse(BaseModel):
    account: str
    token_id: int
    balance: int = Field(..., ge=0)


class TokenUriResponse(BaseModel):
    token_id: int
    uri: str = Field(..., description="메타데이터 URI. 알 수 없는 토큰이면 빈 문자열")


class OwnerResponse(BaseModel):
    owner: str


class ErrorResponse(BaseModel):
    """[ATT-02] 비즈니스 규칙 거절 응답 본문."""

    detail: str
