"""
[ATT-06] 보상 청구 자격 판정 — 순수 함수.
티어는 반드시 오름차순으로 한 번에 하나씩 청구한다. 현재 streak가 상위 티어 기준을 넘더라도
아직 청구하지 않은 가장 낮은 티어가 먼저 나간다(100일 streak → 1회차 Bronze, 2회차 Silver).
"""
from typing import Collection

from checkin_rewards.infrastructure.attendance.exceptions import (
    AllRewardsClaimed,
    InsufficientStreak,
    NoRewardAvailable,
)
from checkin_rewards.infrastructure.attendance.reward_catalog import RewardCatalog, RewardTier


def next_unclaimed_tier(catalog: RewardCatalog, claimed: Collection[int]) -> RewardTier | None:
    """아직 청구하지 않은 가장 낮은 티어. 전부 청구했으면 None."""
    for tier in catalog.tiers_ascending():
        if tier.threshold_days not in claimed:
            return tier
    return None


def select_claimable_tier(
    catalog: RewardCatalog, current_streak: int, claimed: Collection[int]
) -> RewardTier:
    """
    [ATT-06] 이번 청구로 지급할 티어 결정. 판정 순서 고정:
    1) 남은 티어 없음 → AllRewardsClaimed
    2) streak < 최저 임계값 → InsufficientStreak
    3) streak < 다음 티어 임계값 → NoRewardAvailable
    """
    tier = next_unclaimed_tier(catalog, claimed)
    if tier is None:
        raise AllRewardsClaimed()
    if current_streak < catalog.lowest_threshold:
        raise InsufficientStreak()
    if current_streak < tier.threshold_days:
        raise NoRewardAvailable()
    return tier
