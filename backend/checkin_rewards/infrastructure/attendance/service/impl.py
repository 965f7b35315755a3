"""
[ATT-09] 출석·보상 조회 서비스 구현체.
읽기 전용 세션으로 출석 기록·청구 티어·토큰 잔액을 조회한다. 쓰기는 AttendanceManager 담당.
"""
import logging

from sqlalchemy.orm import sessionmaker

from checkin_rewards.core.database import get_session_factory
from checkin_rewards.infrastructure.attendance.claim_rules import next_unclaimed_tier
from checkin_rewards.infrastructure.attendance.repository import (
    AttendanceRepository,
    ClaimRecordDto,
    normalize_account,
)
from checkin_rewards.infrastructure.attendance.reward_catalog import (
    RewardCatalog,
    RewardTier,
    get_reward_catalog,
)
from checkin_rewards.infrastructure.attendance.schemas import CheckInHistoryResponse
from checkin_rewards.infrastructure.attendance.token_issuer import LedgerTokenIssuer

logger = logging.getLogger(__name__)


class AttendanceServiceImpl:
    """출석 기록 및 보상 조회 서비스 구현 [ATT-09]."""

    def __init__(self, session_factory: sessionmaker | None = None, catalog: RewardCatalog | None = None):
        self._session_factory = session_factory
        self._catalog = catalog

    @property
    def session_factory(self) -> sessionmaker:
        return self._session_factory or get_session_factory()

    @property
    def catalog(self) -> RewardCatalog:
        return self._catalog or get_reward_catalog()

    def get_check_in_history(self, account: str) -> CheckInHistoryResponse:
        """
        [ATT-09] 출석 기록 조회. 한 번도 출석하지 않은 계정은 0으로 채워 반환한다(에러 아님).
        """
        account = normalize_account(account)
        with self.session_factory() as session:
            state = AttendanceRepository.get_state(session, account)
        return CheckInHistoryResponse(
            account=account,
            total_check_ins=state.total_check_ins,
            last_check_in_day=state.last_check_in_day,
            current_streak=state.current_streak,
            max_streak=state.max_streak,
        )

    def has_claimed(self, account: str, threshold_days: int) -> bool:
        account = normalize_account(account)
        with self.session_factory() as session:
            return AttendanceRepository.has_claimed(session, account, threshold_days)

    def balance_of(self, account: str, token_id: int) -> int:
        account = normalize_account(account)
        with self.session_factory() as session:
            return LedgerTokenIssuer(session, self.catalog).balance_of(account, token_id)

    def uri(self, token_id: int) -> str:
        return self.catalog.uri(token_id)

    def next_claimable_tier(self, account: str) -> RewardTier | None:
        account = normalize_account(account)
        with self.session_factory() as session:
            claimed = AttendanceRepository.get_claimed_thresholds(session, account)
        return next_unclaimed_tier(self.catalog, claimed)

    def list_claims(self, account: str) -> list[ClaimRecordDto]:
        account = normalize_account(account)
        with self.session_factory() as session:
            return AttendanceRepository.list_claims(session, account)

    def list_tiers(self) -> list[RewardTier]:
        return list(self.catalog.tiers_ascending())

    def owner(self) -> str:
        return self.catalog.admin
