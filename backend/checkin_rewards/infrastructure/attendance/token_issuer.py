"""
[ATT-07] 보상 토큰 발행 원장(TokenIssuer).
청구 로직과 분리된 다중 토큰 잔액 관리. 1티어 1회 청구 규칙은 여기서 검사하지 않는다(ClaimedTier 책임).
"""
import logging
from typing import Protocol

from sqlalchemy.orm import Session

from checkin_rewards.infrastructure.attendance.models import RewardTokenBalance
from checkin_rewards.infrastructure.attendance.reward_catalog import RewardCatalog

logger = logging.getLogger(__name__)


class TokenIssuer(Protocol):
    """[ATT-07] 토큰 발행 인터페이스 — mint / balance_of / uri."""

    def mint(self, account: str, token_id: int, amount: int) -> None:
        ...

    def balance_of(self, account: str, token_id: int) -> int:
        ...

    def uri(self, token_id: int) -> str:
        ...


class LedgerTokenIssuer:
    """
    [ATT-07] reward_token_balances 테이블 기반 TokenIssuer.
    호출자 세션에 묶여 있어 mint가 청구 트랜잭션과 함께 커밋·롤백된다.
    """

    def __init__(self, session: Session, catalog: RewardCatalog):
        self._session = session
        self._catalog = catalog

    def _row(self, account: str, token_id: int) -> RewardTokenBalance | None:
        return (
            self._session.query(RewardTokenBalance)
            .filter(
                RewardTokenBalance.account == account,
                RewardTokenBalance.token_id == token_id,
            )
            .first()
        )

    def mint(self, account: str, token_id: int, amount: int) -> None:
        if amount <= 0:
            raise ValueError("mint amount must be positive")
        row = self._row(account, token_id)
        if row is None:
            row = RewardTokenBalance(account=account, token_id=token_id, balance=0)
            self._session.add(row)
        row.balance = (row.balance or 0) + amount
        self._session.flush()
        logger.info("[ATT-07] minted account=%s token_id=%s amount=%s balance=%s", account, token_id, amount, row.balance)

    def balance_of(self, account: str, token_id: int) -> int:
        row = self._row(account, token_id)
        return row.balance if row is not None else 0

    def uri(self, token_id: int) -> str:
        return self._catalog.uri(token_id)
