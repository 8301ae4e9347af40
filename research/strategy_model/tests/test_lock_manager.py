"""Lock lifecycle tests"""
import pytest

from strategy_model.src.constants import DAY_IN_SECONDS, ONE_ETHER
from strategy_model.src.errors import (
    InsufficientBalanceError,
    InvalidLockMultiplierError,
    LockAlreadyExistsError,
    NoLockFoundError,
    StillLockedError,
    UnauthorizedError,
    UnknownLockPeriodError,
)
from strategy_model.src.instructions.lock_manager import (
    get_lock_config,
    is_locked,
    lock_bonus_rate,
    lock_deposit,
    lock_of,
    set_lock_config,
    unlock_deposit,
)
from strategy_model.src.instructions.tier_classifier import set_tier_config
from strategy_model.src.instructions.utilization_rate import set_utilization_config
from strategy_model.src.state.events import LockCreated, LockReleased
from strategy_model.src.state.lock import LockPeriod, LockPolicyConfig, UserLock
from strategy_model.src.state.tier import Tier

from conftest import ADMIN, ALICE, BOB, START

THIRTY_DAYS = 30 * DAY_IN_SECONDS


def test_lock_snapshots_deposit_and_bonus(vault, state):
    vault.deposit(ALICE, 50 * ONE_ETHER)  # Gold, 100 bps
    vault.deposit(BOB, 7950 * ONE_ETHER)  # 80% utilization, base 600
    lock = lock_deposit(state, vault, ALICE, LockPeriod.THIRTY_DAYS, now=START)
    assert lock == UserLock(
        amount=50 * ONE_ETHER,
        unlock_time=START + THIRTY_DAYS,
        period=LockPeriod.THIRTY_DAYS,
        bonus_rate=(600 + 100) * 11_000 // 10_000,
    )
    assert lock_of(state, ALICE) == lock
    assert state.events[-1] == LockCreated(ALICE, lock.amount, lock.period, lock.unlock_time, 770)


def test_bonus_rate_truncates():
    assert lock_bonus_rate(201, 0, 12_500) == 251


def test_bonus_rate_is_frozen(vault, state):
    vault.deposit(ALICE, 10 * ONE_ETHER)
    lock = lock_deposit(state, vault, ALICE, LockPeriod.NINETY_DAYS, now=START)
    set_utilization_config(state, vault, ADMIN, 8000, 5000, 5, 50)
    set_tier_config(state, vault, ADMIN, Tier.SILVER, 10 * ONE_ETHER, 1000)
    set_lock_config(state, vault, ADMIN, LockPeriod.NINETY_DAYS, DAY_IN_SECONDS, 20_000)
    assert lock_of(state, ALICE) == lock


def test_relock_fails_until_unlocked(vault, state):
    vault.deposit(ALICE, ONE_ETHER)
    lock_deposit(state, vault, ALICE, LockPeriod.THIRTY_DAYS, now=START)
    for elapsed in (0, THIRTY_DAYS - 1, THIRTY_DAYS, 10 * THIRTY_DAYS):
        with pytest.raises(LockAlreadyExistsError):
            lock_deposit(state, vault, ALICE, LockPeriod.NINETY_DAYS, now=START + elapsed)
    unlock_deposit(state, ALICE, now=START + THIRTY_DAYS)
    lock_deposit(state, vault, ALICE, LockPeriod.NINETY_DAYS, now=START + THIRTY_DAYS)
    assert lock_of(state, ALICE).period == LockPeriod.NINETY_DAYS


def test_lock_requires_deposit(vault, state):
    with pytest.raises(InsufficientBalanceError):
        lock_deposit(state, vault, ALICE, LockPeriod.THIRTY_DAYS, now=START)
    assert lock_of(state, ALICE) is None
    assert state.events == []


def test_unlock_timing(vault, state):
    vault.deposit(ALICE, ONE_ETHER)
    lock_deposit(state, vault, ALICE, LockPeriod.THIRTY_DAYS, now=START)
    with pytest.raises(StillLockedError):
        unlock_deposit(state, ALICE, now=START + THIRTY_DAYS - 1)
    assert lock_of(state, ALICE) is not None

    released = unlock_deposit(state, ALICE, now=START + THIRTY_DAYS)
    assert released.amount == ONE_ETHER
    assert lock_of(state, ALICE) is None
    assert state.events[-1] == LockReleased(ALICE, ONE_ETHER)


def test_unlock_without_lock(state):
    with pytest.raises(NoLockFoundError):
        unlock_deposit(state, ALICE, now=START)


def test_is_locked_expires_at_unlock_time(vault, state):
    vault.deposit(ALICE, ONE_ETHER)
    lock_deposit(state, vault, ALICE, LockPeriod.THIRTY_DAYS, now=START)
    assert is_locked(state, ALICE, now=START + THIRTY_DAYS - 1)
    assert not is_locked(state, ALICE, now=START + THIRTY_DAYS)
    assert not is_locked(state, BOB, now=START)


def test_none_period_is_immediately_unlockable(vault, state):
    vault.deposit(ALICE, ONE_ETHER)
    lock_deposit(state, vault, ALICE, LockPeriod.NONE, now=START)
    assert not is_locked(state, ALICE, now=START)
    unlock_deposit(state, ALICE, now=START)


def test_set_config_round_trip(vault, state):
    set_lock_config(state, vault, ADMIN, LockPeriod.ONE_EIGHTY_DAYS, 200 * DAY_IN_SECONDS, 16_000)
    assert get_lock_config(state, LockPeriod.ONE_EIGHTY_DAYS) == LockPolicyConfig(200 * DAY_IN_SECONDS, 16_000)


@pytest.mark.parametrize("multiplier", [9_999, 20_001])
def test_multiplier_bounds(vault, state, multiplier):
    before = get_lock_config(state, LockPeriod.THIRTY_DAYS)
    with pytest.raises(InvalidLockMultiplierError):
        set_lock_config(state, vault, ADMIN, LockPeriod.THIRTY_DAYS, THIRTY_DAYS, multiplier)
    assert get_lock_config(state, LockPeriod.THIRTY_DAYS) == before


def test_set_config_requires_authorization(vault, state):
    with pytest.raises(UnauthorizedError):
        set_lock_config(state, vault, BOB, LockPeriod.THIRTY_DAYS, THIRTY_DAYS, 15_000)


def test_unknown_period_rejected(vault, state):
    before = dict(state.lock_configs)
    with pytest.raises(UnknownLockPeriodError):
        set_lock_config(state, vault, ADMIN, 9, THIRTY_DAYS, 15_000)
    assert state.lock_configs == before

    vault.deposit(ALICE, ONE_ETHER)
    with pytest.raises(UnknownLockPeriodError):
        lock_deposit(state, vault, ALICE, 9, now=START)
    assert lock_of(state, ALICE) is None
