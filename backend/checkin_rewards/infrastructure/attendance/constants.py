"""
[ATT-01] 출석·보상 기준 수치 상수.
연속 출석(Streak) 산출 및 보상 티어 판정에서 사용하는 값들을 한 곳에서 관리한다.
"""
from checkin_rewards.core.clock import SECONDS_PER_DAY

# 보상 티어 임계값(일). 오름차순 고정, 토큰 ID = 임계값
BRONZE_DAYS = 30
SILVER_DAYS = 90
GOLD_DAYS = 180
PLATINUM_DAYS = 365
DIAMOND_DAYS = 730

TIER_THRESHOLDS = (BRONZE_DAYS, SILVER_DAYS, GOLD_DAYS, PLATINUM_DAYS, DIAMOND_DAYS)
TIER_NAMES = ("Bronze", "Silver", "Gold", "Platinum", "Diamond")

# 보상 1회 청구 시 발행 수량
REWARD_MINT_AMOUNT = 1

# 하루(초). 일 경계 = timestamp // ONE_DAY_SECONDS
ONE_DAY_SECONDS = SECONDS_PER_DAY

# [ATT-03] 출석 이벤트 로그 타입
EVENT_CHECK_IN = "check_in"
EVENT_REWARD_CLAIMED = "reward_claimed"
