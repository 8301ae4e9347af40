"""Time locked deposits

Each user holds at most one lock:

    Unlocked --lock_deposit--> Locked --unlock_deposit (now >= unlock_time)--> Unlocked

A lock that reaches its unlock time stops counting as active, but its
record stays until unlock_deposit clears it, and a new lock cannot be
created over it.
"""
import logging
import time
from typing import Optional
from ..constants import MIN_LOCK_MULTIPLIER_BPS, MAX_LOCK_MULTIPLIER_BPS
from ..errors import (
    InsufficientBalanceError,
    InvalidLockMultiplierError,
    LockAlreadyExistsError,
    NoLockFoundError,
    StillLockedError,
)
from ..fixed_point import checked_add, apply_bps
from ..state.lock import LockPeriod, LockPolicyConfig, UserLock, parse_lock_period
from ..state.strategy_state import StrategyState
from ..state.events import ConfigChanged, LockCreated, LockReleased
from ..state.vault import VaultView
from .authorization import require_authorized
from .tier_classifier import tier_bonus
from .utilization_rate import current_rate

logger = logging.getLogger(__name__)

def resolve_timestamp(now: Optional[int] = None) -> int:
    """Wall clock seconds unless the caller pins the time"""
    return int(time.time()) if now is None else now

def lock_bonus_rate(base_rate: int, bonus_bps: int, multiplier_bps: int) -> int:
    """(base + tier bonus) scaled by the period multiplier"""
    return apply_bps(checked_add(base_rate, bonus_bps), multiplier_bps)

def lock_deposit(
    state: StrategyState,
    vault: VaultView,
    user: str,
    period: LockPeriod,
    now: Optional[int] = None
) -> UserLock:
    """Lock the user's whole deposit and freeze a bonus rate"""
    now = resolve_timestamp(now)
    period = parse_lock_period(period)

    if user in state.user_locks:
        logger.warning("Lock rejected for %s: record already exists", user)
        raise LockAlreadyExistsError(f"{user} already has a lock")

    amount = vault.user_deposit(user)
    if amount == 0:
        raise InsufficientBalanceError(f"{user} has nothing deposited to lock")

    policy = state.lock_configs[period]
    bonus_rate = lock_bonus_rate(
        current_rate(state, vault),
        tier_bonus(state, vault, user),
        policy.bonus_multiplier_bps
    )
    lock = UserLock(
        amount=amount,
        unlock_time=checked_add(now, policy.duration),
        period=period,
        bonus_rate=bonus_rate
    )

    with state.atomic():
        state.user_locks[user] = lock
        state.emit(LockCreated(user, lock.amount, lock.period, lock.unlock_time, lock.bonus_rate))
    return lock

def unlock_deposit(state: StrategyState, user: str, now: Optional[int] = None) -> UserLock:
    """Clear an expired lock record"""
    now = resolve_timestamp(now)
    lock = state.user_locks.get(user)
    if lock is None:
        raise NoLockFoundError(f"{user} has no lock")
    if now < lock.unlock_time:
        raise StillLockedError(f"{user} locked until {lock.unlock_time}, now {now}")

    with state.atomic():
        del state.user_locks[user]
        state.emit(LockReleased(user, lock.amount))
    return lock

def lock_of(state: StrategyState, user: str) -> Optional[UserLock]:
    return state.user_locks.get(user)

def is_locked(state: StrategyState, user: str, now: Optional[int] = None) -> bool:
    """Active lock check; a lock expires exactly at unlock_time"""
    lock = state.user_locks.get(user)
    return lock is not None and lock.unlock_time > resolve_timestamp(now)

def get_lock_config(state: StrategyState, period: LockPeriod) -> LockPolicyConfig:
    return state.lock_configs[period]

def set_lock_config(
    state: StrategyState,
    vault: VaultView,
    caller: str,
    period: LockPeriod,
    duration: int,
    bonus_multiplier_bps: int
) -> None:
    """Overwrite the policy for one lock period; existing locks keep their terms"""
    require_authorized(vault, caller)
    period = parse_lock_period(period)
    if not MIN_LOCK_MULTIPLIER_BPS <= bonus_multiplier_bps <= MAX_LOCK_MULTIPLIER_BPS:
        raise InvalidLockMultiplierError(
            f"Multiplier {bonus_multiplier_bps} outside [{MIN_LOCK_MULTIPLIER_BPS}, {MAX_LOCK_MULTIPLIER_BPS}]"
        )

    before = state.lock_configs[period]
    after = LockPolicyConfig(duration=duration, bonus_multiplier_bps=bonus_multiplier_bps)
    state.lock_configs[period] = after
    state.emit(ConfigChanged("lock", period, before, after))
