"""
[ATT-10] 출석 체크·보상 청구 API.
출석 체크, 다음 티어 청구, 출석 기록·청구 여부·토큰 잔액·메타데이터 URI 조회.
"""
from fastapi import APIRouter, Depends, HTTPException, Path, status

from checkin_rewards.domains.auth.security import get_current_account
from checkin_rewards.infrastructure.attendance.attendance_manager import AttendanceManager
from checkin_rewards.infrastructure.attendance.exceptions import (
    AllRewardsClaimed,
    AlreadyCheckedInToday,
    AttendanceError,
)
from checkin_rewards.infrastructure.attendance.repository import normalize_account
from checkin_rewards.infrastructure.attendance.schemas import (
    CheckInHistoryResponse,
    CheckInResponse,
    ClaimRecordResponse,
    ClaimResponse,
    ErrorResponse,
    HasClaimedResponse,
    OwnerResponse,
    RewardTierResponse,
    TokenBalanceResponse,
    TokenUriResponse,
)
from checkin_rewards.infrastructure.attendance.service import AttendanceServiceImpl

router = APIRouter()

_service: AttendanceServiceImpl | None = None
_manager: AttendanceManager | None = None


def get_attendance_service() -> AttendanceServiceImpl:
    global _service
    if _service is None:
        _service = AttendanceServiceImpl()
    return _service


def get_attendance_manager() -> AttendanceManager:
    global _manager
    if _manager is None:
        _manager = AttendanceManager()
    return _manager


def _to_http_error(e: AttendanceError) -> HTTPException:
    """[ATT-02] 규칙 위반 → 중복·소진은 409, 자격 미달은 400."""
    if isinstance(e, (AlreadyCheckedInToday, AllRewardsClaimed)):
        code = status.HTTP_409_CONFLICT
    else:
        code = status.HTTP_400_BAD_REQUEST
    return HTTPException(status_code=code, detail=e.detail, headers={"X-Error-Code": e.code})


# SQLite INTEGER 범위 안의 임계값·토큰 ID만 허용
_MAX_INT_PARAM = 2**31 - 1


def path_account(account: str) -> str:
    """경로의 계정 식별자 정규화. 공백뿐이면 400."""
    try:
        return normalize_account(account)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


_REJECTIONS = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_409_CONFLICT: {"model": ErrorResponse},
}


# ── [ATT-05][ATT-06] 쓰기: 출석 체크·보상 청구 ─────────────────────────────────

@router.post(
    "/check-in",
    response_model=CheckInResponse,
    responses=_REJECTIONS,
    summary="[ATT-05] 출석 체크 (하루 1회, 연속 출석 streak 갱신)",
)
def check_in(
    account: str = Depends(get_current_account),
    manager: AttendanceManager = Depends(get_attendance_manager),
):
    """같은 epoch day에 다시 호출하면 409 Already checked in today."""
    try:
        result = manager.check_in(account)
    except AttendanceError as e:
        raise _to_http_error(e)
    return CheckInResponse(
        account=result.account,
        day=result.day,
        total_check_ins=result.total_check_ins,
        current_streak=result.current_streak,
        max_streak=result.max_streak,
    )


@router.post(
    "/claim",
    response_model=ClaimResponse,
    responses=_REJECTIONS,
    summary="[ATT-06] 다음 보상 티어 청구 (오름차순, 1회 1티어)",
)
def claim_reward(
    account: str = Depends(get_current_account),
    manager: AttendanceManager = Depends(get_attendance_manager),
):
    """
    [ATT-06] 아직 청구하지 않은 가장 낮은 티어를 지급한다.
    현재 streak가 상위 티어 기준을 넘어도 한 번에 한 티어씩만 나간다.
    """
    try:
        result = manager.claim_reward(account)
    except AttendanceError as e:
        raise _to_http_error(e)
    return ClaimResponse(
        account=result.account,
        tier_threshold=result.tier_threshold,
        token_id=result.token_id,
        tier_name=result.tier_name,
        metadata_uri=result.metadata_uri,
        current_streak=result.current_streak,
    )


# ── [ATT-09] 조회 ──────────────────────────────────────────────────────────────

@router.get(
    "/history/{account}",
    response_model=CheckInHistoryResponse,
    summary="[ATT-09] 출석 기록 (총 출석, 마지막 출석일, 현재/최대 streak)",
)
def get_check_in_history(
    account: str = Depends(path_account),
    service: AttendanceServiceImpl = Depends(get_attendance_service),
):
    return service.get_check_in_history(account)


@router.get(
    "/claimed/{account}/{threshold_days}",
    response_model=HasClaimedResponse,
    summary="[ATT-09] 티어 청구 여부",
)
def has_claimed(
    account: str = Depends(path_account),
    threshold_days: int = Path(..., ge=0, le=_MAX_INT_PARAM),
    service: AttendanceServiceImpl = Depends(get_attendance_service),
):
    return HasClaimedResponse(
        account=account,
        threshold_days=threshold_days,
        claimed=service.has_claimed(account, threshold_days),
    )


@router.get(
    "/claims/{account}",
    response_model=list[ClaimRecordResponse],
    summary="[ATT-09] 청구 이력 (티어 오름차순)",
)
def list_claims(
    account: str = Depends(path_account),
    service: AttendanceServiceImpl = Depends(get_attendance_service),
):
    return [ClaimRecordResponse.model_validate(c) for c in service.list_claims(account)]


@router.get(
    "/next-reward/{account}",
    response_model=RewardTierResponse | None,
    summary="[ATT-09] 다음 청구 대상 티어 (전부 청구했으면 null)",
)
def next_reward(
    account: str = Depends(path_account),
    service: AttendanceServiceImpl = Depends(get_attendance_service),
):
    tier = service.next_claimable_tier(account)
    return RewardTierResponse.model_validate(tier) if tier is not None else None


@router.get(
    "/balance/{account}/{token_id}",
    response_model=TokenBalanceResponse,
    summary="[ATT-07] 보상 토큰 잔액",
)
def balance_of(
    account: str = Depends(path_account),
    token_id: int = Path(..., ge=0, le=_MAX_INT_PARAM),
    service: AttendanceServiceImpl = Depends(get_attendance_service),
):
    return TokenBalanceResponse(
        account=account,
        token_id=token_id,
        balance=service.balance_of(account, token_id),
    )


@router.get(
    "/uri/{token_id}",
    response_model=TokenUriResponse,
    summary="[ATT-04] 토큰 메타데이터 URI",
)
def token_uri(
    token_id: int = Path(..., ge=0, le=_MAX_INT_PARAM),
    service: AttendanceServiceImpl = Depends(get_attendance_service),
):
    return TokenUriResponse(token_id=token_id, uri=service.uri(token_id))


@router.get(
    "/tiers",
    response_model=list[RewardTierResponse],
    summary="[ATT-04] 보상 티어 목록 (임계값 오름차순)",
)
def list_tiers(service: AttendanceServiceImpl = Depends(get_attendance_service)):
    return [RewardTierResponse.model_validate(t) for t in service.list_tiers()]


@router.get(
    "/owner",
    response_model=OwnerResponse,
    summary="[ATT-04] 관리자 계정",
)
def owner(service: AttendanceServiceImpl = Depends(get_attendance_service)):
    return OwnerResponse(owner=service.owner())
