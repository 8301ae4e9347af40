"""Time lock state"""
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict
from ..constants import DEFAULT_LOCK_POLICIES
from ..errors import IncompleteConfigError, UnknownLockPeriodError

class LockPeriod(IntEnum):
    NONE = 0
    THIRTY_DAYS = 1
    NINETY_DAYS = 2
    ONE_EIGHTY_DAYS = 3
    THREE_SIXTY_FIVE_DAYS = 4

@dataclass(frozen=True)
class LockPolicyConfig:
    """Duration and bonus multiplier for one lock period"""
    duration: int  # seconds
    bonus_multiplier_bps: int  # 10000 = 1.0x

@dataclass(frozen=True)
class UserLock:
    """A user's single locked commitment

    The bonus rate is frozen when the lock is created and does not follow
    later utilization or tier changes.
    """
    amount: int
    unlock_time: int
    period: LockPeriod
    bonus_rate: int

LockPolicyTable = Dict[LockPeriod, LockPolicyConfig]

def parse_lock_period(value) -> LockPeriod:
    try:
        return LockPeriod(value)
    except ValueError:
        raise UnknownLockPeriodError(f"No lock period {value!r}") from None

def default_lock_configs() -> LockPolicyTable:
    table = {
        period: LockPolicyConfig(duration=duration, bonus_multiplier_bps=multiplier)
        for period, (duration, multiplier) in zip(LockPeriod, DEFAULT_LOCK_POLICIES)
    }
    check_lock_table(table)
    return table

def check_lock_table(table: LockPolicyTable) -> None:
    missing = [period.name for period in LockPeriod if period not in table]
    if missing:
        raise IncompleteConfigError(f"Lock config missing for {', '.join(missing)}")
