import pytest

from checkin_rewards.core.clock import epoch_day
from checkin_rewards.infrastructure.attendance.constants import ONE_DAY_SECONDS
from checkin_rewards.infrastructure.attendance.exceptions import AlreadyCheckedInToday
from checkin_rewards.infrastructure.attendance.streak import StreakState, apply_check_in

DAY = ONE_DAY_SECONDS


def test_epoch_day_floors():
    assert epoch_day(0) == 0
    assert epoch_day(DAY - 1) == 0
    assert epoch_day(DAY) == 1
    assert epoch_day(10 * DAY + 5) == 10


def test_first_check_in_on_day_zero():
    state = apply_check_in(StreakState(), 0)
    assert state == StreakState(total_check_ins=1, last_check_in_day=0, current_streak=1, max_streak=1)


def test_day_zero_then_day_one_extends_streak():
    state = apply_check_in(StreakState(), 0)
    state = apply_check_in(state, DAY)
    assert (state.total_check_ins, state.current_streak, state.max_streak) == (2, 2, 2)
    assert state.last_check_in_day == 1


def test_skipping_a_day_resets_streak():
    state = apply_check_in(StreakState(), 0)
    state = apply_check_in(state, 2 * DAY)
    assert (state.total_check_ins, state.current_streak, state.max_streak) == (2, 1, 1)


def test_same_day_is_rejected_and_state_untouched():
    state = apply_check_in(StreakState(), 5 * DAY + 10)
    with pytest.raises(AlreadyCheckedInToday):
        apply_check_in(state, 5 * DAY + DAY - 1)
    assert state.total_check_ins == 1


def test_earlier_day_is_rejected():
    state = apply_check_in(StreakState(), 5 * DAY)
    with pytest.raises(AlreadyCheckedInToday):
        apply_check_in(state, 4 * DAY)


def test_consecutive_days_count_up():
    state = StreakState()
    for i in range(10):
        state = apply_check_in(state, 100 * DAY + i * DAY)
    assert (state.total_check_ins, state.current_streak, state.max_streak) == (10, 10, 10)


def test_max_streak_survives_reset():
    state = StreakState()
    ts = 100 * DAY
    for _ in range(5):
        state = apply_check_in(state, ts)
        ts += DAY
    ts += DAY  # 하루 건너뜀
    for _ in range(3):
        state = apply_check_in(state, ts)
        ts += DAY
    assert state.total_check_ins == 8
    assert state.current_streak == 3
    assert state.max_streak == 5


def test_check_in_near_midnight_counts_next_day():
    state = apply_check_in(StreakState(), 3 * DAY - 1)
    state = apply_check_in(state, 3 * DAY)
    assert state.current_streak == 2


def test_long_gap_resets_to_one():
    state = apply_check_in(StreakState(), 10 * DAY)
    state = apply_check_in(state, 375 * DAY)
    assert (state.total_check_ins, state.current_streak, state.max_streak) == (2, 1, 1)
