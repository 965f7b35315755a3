"""
[ATT-03] 출석·보상 모델.
AttendanceAccount: 계정별 출석 기록(총 횟수, 마지막 출석일, 현재/최대 streak). 첫 출석 시 생성.
ClaimedTier: 청구 완료 티어 — 계정·임계값 유일, 삭제하지 않음.
RewardTokenBalance: 보상 토큰 잔액(TokenIssuer 소유).
AttendanceEventLog: check_in / reward_claimed 이벤트 로그.
"""
from sqlalchemy import BigInteger, Column, DateTime, Integer, String, Text, UniqueConstraint, func

from checkin_rewards.core.database import Base


class AttendanceAccount(Base):
    """
    [ATT-03] 계정별 출석 집계. account는 정규화된 계정 식별자(소문자).
    streak 갱신은 streak.apply_check_in 결과를 그대로 덮어쓴다.
    """

    __tablename__ = "attendance_accounts"

    account = Column(String(128), primary_key=True)
    total_check_ins = Column(Integer, nullable=False, default=0)
    last_check_in_day = Column(BigInteger, nullable=False, default=0)  # epoch day
    current_streak = Column(Integer, nullable=False, default=0)
    max_streak = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())


class ClaimedTier(Base):
    """[ATT-06] 청구 완료 티어. streak 리셋 후에도 유지된다."""

    __tablename__ = "attendance_claimed_tiers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    account = Column(String(128), nullable=False, index=True)
    tier_threshold = Column(Integer, nullable=False)
    token_id = Column(Integer, nullable=False)
    streak_at_claim = Column(Integer, nullable=False)
    claimed_at = Column(DateTime, nullable=False, server_default=func.now())

    __table_args__ = (UniqueConstraint("account", "tier_threshold", name="uq_claimed_tier_account_threshold"),)


class RewardTokenBalance(Base):
    """[ATT-07] 계정·토큰별 잔액."""

    __tablename__ = "reward_token_balances"

    id = Column(Integer, primary_key=True, autoincrement=True)
    account = Column(String(128), nullable=False, index=True)
    token_id = Column(Integer, nullable=False)
    balance = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (UniqueConstraint("account", "token_id", name="uq_token_balance_account_token"),)


class AttendanceEventLog(Base):
    """[ATT-03] 출석·청구 이벤트 로그. metadata_json에 이벤트별 페이로드 저장."""

    __tablename__ = "attendance_event_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    account = Column(String(128), nullable=False, index=True)
    event_type = Column(String(32), nullable=False, index=True)
    event_at = Column(DateTime, nullable=False)
    metadata_json = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    __table_args__ = ({"sqlite_autoincrement": True},)
