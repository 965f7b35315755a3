"""
[ATT-11] 호출 계정 식별.
게이트웨이(지갑 서명 검증 등)를 통과한 요청의 X-Account-Address 헤더를 계정 식별자로 사용한다.
"""
from typing import Optional

from fastapi import Header, HTTPException, status

from checkin_rewards.infrastructure.attendance.repository import normalize_account

ACCOUNT_HEADER = "X-Account-Address"


def get_current_account(
    x_account_address: Optional[str] = Header(None, alias=ACCOUNT_HEADER),
) -> str:
    """헤더가 없거나 비어 있으면 401."""
    if not x_account_address or not x_account_address.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"{ACCOUNT_HEADER} header is required.",
        )
    return normalize_account(x_account_address)
