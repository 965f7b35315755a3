"""
[ATT-04] 보상 티어 카탈로그 — 5개 티어(30/90/180/365/730일)의 불변 조회 테이블.
생성 시 관리자 계정과 티어별 메타데이터 URI 5개를 받아 한 번만 구성하고, 이후 변경하지 않는다.
프로세스 기본 카탈로그는 설정 파일(JSON)에서 로드한다.
"""
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

from checkin_rewards.core.config import get_settings
from checkin_rewards.infrastructure.attendance.constants import TIER_NAMES, TIER_THRESHOLDS

logger = logging.getLogger(__name__)

# 설정 파일을 읽지 못했을 때 사용하는 기본 메타데이터 URI (티어 오름차순)
_DEFAULT_METADATA_URIS = (
    "ipfs://bafybeibbkpc42gg36mrji23ikqgiic6av3hxt6h6ebiq3nhjeb3fg4ufky/metadata.json",
    "ipfs://bafybeiabn4tvqy2aitglciwefn4xjmreot4twz4kpaazunu5bk275qbhim/metadata.json",
    "ipfs://bafybeicne4fqegfyhsdm7vboahkvi5lirwa3fpxntfuvujjqmvn6jma6hq/metadata.json",
    "ipfs://bafybeicgju3tliip77xhv2tzaegcr37lclxgoiv63ick2cbb7wadltyzry/metadata.json",
    "ipfs://bafybeibfxuwsdkltgv2xqohizd6rxlntg6ysodbtq3zxnq5iznjfqjzsri/metadata.json",
)
_DEFAULT_ADMIN = "0x0000000000000000000000000000000000000000"


@dataclass(frozen=True)
class RewardTier:
    """[ATT-04] 보상 티어 1건. token_id는 임계값과 동일."""

    threshold_days: int
    token_id: int
    name: str
    metadata_uri: str


class RewardCatalog:
    """
    [ATT-04] 오름차순 고정 보상 티어 테이블.
    티어 집합은 닫혀 있으므로(5개) 튜플 하나로 보관하고 조회만 제공한다.
    """

    __slots__ = ("_admin", "_tiers", "_by_threshold", "_by_token_id")

    def __init__(self, admin: str, metadata_uris: Sequence[str]):
        if not admin or not str(admin).strip():
            raise ValueError("admin account is required")
        uris = list(metadata_uris)
        if len(uris) != len(TIER_THRESHOLDS):
            raise ValueError(
                f"expected {len(TIER_THRESHOLDS)} metadata URIs (one per tier), got {len(uris)}"
            )
        for uri in uris:
            if not isinstance(uri, str) or not uri:
                raise ValueError("metadata URI must be a non-empty string")
        self._admin = str(admin).strip()
        self._tiers = tuple(
            RewardTier(threshold_days=days, token_id=days, name=name, metadata_uri=uri)
            for days, name, uri in zip(TIER_THRESHOLDS, TIER_NAMES, uris)
        )
        self._by_threshold = {t.threshold_days: t for t in self._tiers}
        self._by_token_id = {t.token_id: t for t in self._tiers}

    @property
    def admin(self) -> str:
        return self._admin

    @property
    def lowest_threshold(self) -> int:
        return self._tiers[0].threshold_days

    def tiers_ascending(self) -> tuple[RewardTier, ...]:
        return self._tiers

    def tier_by_threshold(self, value: int) -> RewardTier | None:
        return self._by_threshold.get(value)

    def tier_by_token_id(self, token_id: int) -> RewardTier | None:
        return self._by_token_id.get(token_id)

    def uri(self, token_id: int) -> str:
        """토큰 메타데이터 URI. 알 수 없는 토큰 ID는 빈 문자열."""
        tier = self._by_token_id.get(token_id)
        return tier.metadata_uri if tier is not None else ""

    def __repr__(self) -> str:
        return f"RewardCatalog(admin={self._admin!r}, tiers={[t.threshold_days for t in self._tiers]})"


def _load_raw_config(path: Path) -> dict[str, Any]:
    """설정 파일(JSON) 로드. 파일 없거나 깨졌으면 빈 구조 반환."""
    if not path.is_file():
        logger.warning("[ATT-04] reward tier config not found at %s", path)
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("[ATT-04] Failed to load reward tier config: %s", e)
        return {}


def build_catalog_from_config(raw: dict[str, Any], admin_override: str = "") -> RewardCatalog:
    """
    [ATT-04] 설정 dict → RewardCatalog.
    metadata_uris가 없으면 기본 URI를 사용한다. 개수가 틀리면 ValueError(잘못된 설정은 기동 시 실패).
    """
    uris = raw.get("metadata_uris")
    if not uris:
        logger.warning("[ATT-04] metadata_uris missing in config, using defaults")
        uris = _DEFAULT_METADATA_URIS
    admin = admin_override or raw.get("admin") or _DEFAULT_ADMIN
    return RewardCatalog(admin=admin, metadata_uris=uris)


# 프로세스당 1회 빌드(캐시). 설정 변경 시 reload_reward_catalog() 호출
_catalog_cached: RewardCatalog | None = None


def get_reward_catalog() -> RewardCatalog:
    global _catalog_cached
    if _catalog_cached is None:
        settings = get_settings()
        raw = _load_raw_config(settings.reward_tiers_config_path)
        _catalog_cached = build_catalog_from_config(raw, settings.admin_account)
        logger.info("[ATT-04] reward catalog loaded admin=%s", _catalog_cached.admin)
    return _catalog_cached


def reload_reward_catalog() -> RewardCatalog:
    global _catalog_cached
    _catalog_cached = None
    return get_reward_catalog()
