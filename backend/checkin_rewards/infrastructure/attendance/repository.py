"""
[ATT-03] 출석 기록·청구 티어 영속성 — DAO/리포지토리 패턴.
모든 메서드는 호출자가 연 세션을 받는다. 커밋·롤백은 호출자(작업 단위) 책임.
"""
import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from checkin_rewards.infrastructure.attendance.models import (
    AttendanceAccount,
    AttendanceEventLog,
    ClaimedTier,
)
from checkin_rewards.infrastructure.attendance.streak import StreakState


def normalize_account(account: str) -> str:
    """계정 식별자 정규화(공백 제거·소문자). 빈 값은 ValueError."""
    value = (account or "").strip().lower()
    if not value:
        raise ValueError("account must be a non-empty string")
    return value


@dataclass
class ClaimRecordDto:
    """[ATT-06] 청구 이력 1건."""

    account: str
    tier_threshold: int
    token_id: int
    streak_at_claim: int
    claimed_at: datetime | None


class AttendanceRepository:
    """[ATT-03] attendance_accounts / attendance_claimed_tiers / attendance_event_logs 접근 객체."""

    @staticmethod
    def get_account_row(session: Session, account: str, for_update: bool = False) -> AttendanceAccount | None:
        query = session.query(AttendanceAccount).filter(AttendanceAccount.account == account)
        if for_update:
            # 같은 계정에 대한 동시 쓰기 직렬화 (SQLite에서는 무시됨)
            query = query.with_for_update()
        return query.first()

    @staticmethod
    def to_state(row: AttendanceAccount | None) -> StreakState:
        if row is None:
            return StreakState()
        return StreakState(
            total_check_ins=row.total_check_ins or 0,
            last_check_in_day=row.last_check_in_day or 0,
            current_streak=row.current_streak or 0,
            max_streak=row.max_streak or 0,
        )

    @staticmethod
    def get_state(session: Session, account: str) -> StreakState:
        return AttendanceRepository.to_state(AttendanceRepository.get_account_row(session, account))

    @staticmethod
    def save_state(
        session: Session, account: str, state: StreakState, row: AttendanceAccount | None = None
    ) -> AttendanceAccount:
        """새 상태 전체를 한 번에 기록. 행이 없으면(첫 출석) 생성."""
        if row is None:
            row = AttendanceAccount(account=account)
            session.add(row)
        row.total_check_ins = state.total_check_ins
        row.last_check_in_day = state.last_check_in_day
        row.current_streak = state.current_streak
        row.max_streak = state.max_streak
        return row

    @staticmethod
    def get_claimed_thresholds(session: Session, account: str) -> set[int]:
        rows = session.query(ClaimedTier.tier_threshold).filter(ClaimedTier.account == account).all()
        return {r[0] for r in rows}

    @staticmethod
    def has_claimed(session: Session, account: str, threshold_days: int) -> bool:
        exists = (
            session.query(ClaimedTier.id)
            .filter(ClaimedTier.account == account, ClaimedTier.tier_threshold == threshold_days)
            .limit(1)
            .first()
        )
        return exists is not None

    @staticmethod
    def add_claim(
        session: Session, account: str, tier_threshold: int, token_id: int, streak_at_claim: int
    ) -> ClaimedTier:
        row = ClaimedTier(
            account=account,
            tier_threshold=tier_threshold,
            token_id=token_id,
            streak_at_claim=streak_at_claim,
        )
        session.add(row)
        return row

    @staticmethod
    def list_claims(session: Session, account: str) -> list[ClaimRecordDto]:
        rows = (
            session.query(ClaimedTier)
            .filter(ClaimedTier.account == account)
            .order_by(ClaimedTier.tier_threshold.asc())
            .all()
        )
        return [
            ClaimRecordDto(
                account=r.account,
                tier_threshold=r.tier_threshold,
                token_id=r.token_id,
                streak_at_claim=r.streak_at_claim,
                claimed_at=r.claimed_at,
            )
            for r in rows
        ]

    @staticmethod
    def log_event(
        session: Session,
        account: str,
        event_type: str,
        metadata: dict[str, Any] | None = None,
        event_at: datetime | None = None,
    ) -> AttendanceEventLog:
        log = AttendanceEventLog(
            account=account,
            event_type=event_type,
            event_at=event_at or datetime.now(timezone.utc),
            metadata_json=json.dumps(metadata or {}, ensure_ascii=False),
        )
        session.add(log)
        return log

    @staticmethod
    def list_events(session: Session, account: str, event_type: str | None = None) -> list[AttendanceEventLog]:
        query = session.query(AttendanceEventLog).filter(AttendanceEventLog.account == account)
        if event_type:
            query = query.filter(AttendanceEventLog.event_type == event_type)
        return query.order_by(AttendanceEventLog.id.asc()).all()
