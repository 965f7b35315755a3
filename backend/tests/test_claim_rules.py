import pytest

from checkin_rewards.infrastructure.attendance.claim_rules import next_unclaimed_tier, select_claimable_tier
from checkin_rewards.infrastructure.attendance.exceptions import (
    AllRewardsClaimed,
    InsufficientStreak,
    NoRewardAvailable,
)

ALL = {30, 90, 180, 365, 730}


def test_next_unclaimed_is_lowest_missing(catalog):
    assert next_unclaimed_tier(catalog, set()).threshold_days == 30
    assert next_unclaimed_tier(catalog, {30}).threshold_days == 90
    # 중간이 비어 있으면 그 티어가 먼저
    assert next_unclaimed_tier(catalog, {30, 180}).threshold_days == 90
    assert next_unclaimed_tier(catalog, ALL) is None


@pytest.mark.parametrize("streak", [0, 1, 29])
def test_below_lowest_threshold_is_insufficient(catalog, streak):
    with pytest.raises(InsufficientStreak):
        select_claimable_tier(catalog, streak, set())


def test_exact_threshold_qualifies(catalog):
    assert select_claimable_tier(catalog, 30, set()).threshold_days == 30


def test_high_streak_still_claims_lowest_first(catalog):
    assert select_claimable_tier(catalog, 1000, set()).threshold_days == 30
    assert select_claimable_tier(catalog, 1000, {30}).threshold_days == 90


def test_next_tier_not_reached(catalog):
    with pytest.raises(NoRewardAvailable):
        select_claimable_tier(catalog, 30, {30})
    with pytest.raises(NoRewardAvailable):
        select_claimable_tier(catalog, 100, {30, 90})


def test_all_claimed_wins_over_other_checks(catalog):
    with pytest.raises(AllRewardsClaimed):
        select_claimable_tier(catalog, 0, ALL)
    with pytest.raises(AllRewardsClaimed):
        select_claimable_tier(catalog, 800, ALL)


def test_reset_streak_after_claim_is_insufficient(catalog):
    with pytest.raises(InsufficientStreak):
        select_claimable_tier(catalog, 1, {30})
