"""
[ATT-08] 출석 체크·보상 청구 작업 단위(Unit of Work) — AttendanceManager.
각 작업은 세션 트랜잭션 하나로 실행되고, 모든 단계(토큰 발행 포함)가 성공해야 커밋된다.
실패 시 streak·청구 티어·잔액 변경이 모두 롤백된다.
"""
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from checkin_rewards.core.clock import Clock, system_clock
from checkin_rewards.core.database import get_session_factory
from checkin_rewards.infrastructure.attendance.claim_rules import select_claimable_tier
from checkin_rewards.infrastructure.attendance.constants import (
    EVENT_CHECK_IN,
    EVENT_REWARD_CLAIMED,
    REWARD_MINT_AMOUNT,
)
from checkin_rewards.infrastructure.attendance.exceptions import AttendanceError
from checkin_rewards.infrastructure.attendance.repository import AttendanceRepository, normalize_account
from checkin_rewards.infrastructure.attendance.reward_catalog import RewardCatalog, get_reward_catalog
from checkin_rewards.infrastructure.attendance.streak import apply_check_in
from checkin_rewards.infrastructure.attendance.token_issuer import LedgerTokenIssuer, TokenIssuer

logger = logging.getLogger(__name__)

IssuerFactory = Callable[[Session, RewardCatalog], TokenIssuer]

# 쓰기 작업 직렬화: 한 프로세스 안에서 모든 check_in / claim_reward는 순서대로 실행된다
_write_lock = threading.RLock()


@dataclass
class CheckInResult:
    """[ATT-08] check_in 반환 — 갱신된 출석 기록."""

    account: str
    day: int
    total_check_ins: int
    current_streak: int
    max_streak: int


@dataclass
class ClaimResult:
    """[ATT-08] claim_reward 반환 — 지급된 티어."""

    account: str
    tier_threshold: int
    token_id: int
    tier_name: str
    metadata_uri: str
    current_streak: int


class AttendanceManager:
    """
    [ATT-08] 출석 기록·보상 청구 관리.
    세션 팩토리·카탈로그·시계·토큰 발행기를 주입받는다(기본값은 프로세스 전역 설정).
    """

    def __init__(
        self,
        session_factory: sessionmaker | None = None,
        catalog: RewardCatalog | None = None,
        clock: Clock = system_clock,
        issuer_factory: IssuerFactory = LedgerTokenIssuer,
    ):
        self._session_factory = session_factory
        self._catalog = catalog
        self._clock = clock
        self._issuer_factory = issuer_factory

    @property
    def session_factory(self) -> sessionmaker:
        return self._session_factory or get_session_factory()

    @property
    def catalog(self) -> RewardCatalog:
        return self._catalog or get_reward_catalog()

    def check_in(self, account: str, now: int | None = None, _retry: bool = True) -> CheckInResult:
        """
        [ATT-05] 출석 체크. 현재 시각은 호출 시작 시 한 번만 읽는다.
        같은 날 재출석 → AlreadyCheckedInToday (상태 변경 없음).
        """
        account = normalize_account(account)
        timestamp = int(now) if now is not None else self._clock()
        with _write_lock, self.session_factory() as session:
            try:
                row = AttendanceRepository.get_account_row(session, account, for_update=True)
                previous = AttendanceRepository.to_state(row)
                state = apply_check_in(previous, timestamp)
                AttendanceRepository.save_state(session, account, state, row)
                AttendanceRepository.log_event(
                    session,
                    account,
                    EVENT_CHECK_IN,
                    {
                        "day": state.last_check_in_day,
                        "current_streak": state.current_streak,
                        "max_streak": state.max_streak,
                    },
                    event_at=datetime.fromtimestamp(timestamp, timezone.utc),
                )
                session.commit()
            except AttendanceError as e:
                session.rollback()
                logger.warning("[ATT-05] check-in rejected account=%s reason=%s", account, e.code)
                raise
            except IntegrityError:
                # 다른 프로세스가 같은 계정의 첫 출석을 먼저 기록한 경우: 최신 상태로 1회 재시도
                session.rollback()
                if not _retry:
                    raise
                return self.check_in(account, timestamp, _retry=False)
            except Exception:
                session.rollback()
                raise
        logger.info(
            "[ATT-05] check-in account=%s day=%s streak=%s->%s max=%s total=%s",
            account, state.last_check_in_day, previous.current_streak,
            state.current_streak, state.max_streak, state.total_check_ins,
        )
        return CheckInResult(
            account=account,
            day=state.last_check_in_day,
            total_check_ins=state.total_check_ins,
            current_streak=state.current_streak,
            max_streak=state.max_streak,
        )

    def claim_reward(self, account: str) -> ClaimResult:
        """
        [ATT-06] 다음 보상 티어 청구. 청구 기록·토큰 발행·이벤트 로그를 한 트랜잭션으로 커밋.
        AllRewardsClaimed / InsufficientStreak / NoRewardAvailable 또는 발행 실패 시 전부 롤백.
        """
        account = normalize_account(account)
        catalog = self.catalog
        claimed_at = datetime.fromtimestamp(self._clock(), timezone.utc)
        with _write_lock, self.session_factory() as session:
            state = None
            try:
                row = AttendanceRepository.get_account_row(session, account, for_update=True)
                state = AttendanceRepository.to_state(row)
                claimed = AttendanceRepository.get_claimed_thresholds(session, account)
                tier = select_claimable_tier(catalog, state.current_streak, claimed)
                AttendanceRepository.add_claim(
                    session, account, tier.threshold_days, tier.token_id, state.current_streak
                )
                session.flush()
                issuer = self._issuer_factory(session, catalog)
                issuer.mint(account, tier.token_id, REWARD_MINT_AMOUNT)
                AttendanceRepository.log_event(
                    session,
                    account,
                    EVENT_REWARD_CLAIMED,
                    {"tier_threshold": tier.threshold_days, "token_id": tier.token_id},
                    event_at=claimed_at,
                )
                session.commit()
            except AttendanceError as e:
                session.rollback()
                logger.warning(
                    "[ATT-06] claim rejected account=%s streak=%s reason=%s",
                    account, state.current_streak if state else 0, e.code,
                )
                raise
            except Exception:
                session.rollback()
                logger.exception("[ATT-06] claim failed account=%s, rolled back", account)
                raise
        logger.info(
            "[ATT-06] reward claimed account=%s tier=%s token_id=%s streak=%s",
            account, tier.threshold_days, tier.token_id, state.current_streak,
        )
        return ClaimResult(
            account=account,
            tier_threshold=tier.threshold_days,
            token_id=tier.token_id,
            tier_name=tier.name,
            metadata_uri=tier.metadata_uri,
            current_streak=state.current_streak,
        )
