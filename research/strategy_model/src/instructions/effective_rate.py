"""Effective rate composition"""
from dataclasses import dataclass
from typing import Optional
from ..state.lock import LockPeriod
from ..state.tier import Tier
from ..state.strategy_state import StrategyState
from ..state.vault import TokenLedger, VaultView
from .lock_manager import resolve_timestamp, is_locked, lock_of
from .performance_fee import pending_fee
from .tier_classifier import bonus_of, tier_of
from .utilization_rate import current_rate

@dataclass(frozen=True)
class StrategyInfo:
    """Everything a user sees about their position in one read"""
    rate: int
    tier: Tier
    tier_bonus: int
    is_locked: bool
    lock_period: LockPeriod
    unlock_time: int
    effective_rate: int
    pending_fee: int

def effective_rate(state: StrategyState, vault: VaultView, user: str, now: Optional[int] = None) -> int:
    """Frozen lock bonus while a lock is active, base rate plus tier bonus otherwise"""
    if is_locked(state, user, now):
        return state.user_locks[user].bonus_rate
    return current_rate(state, vault) + bonus_of(state, tier_of(state, vault, user))

def strategy_info(
    state: StrategyState,
    vault: VaultView,
    token: TokenLedger,
    user: str,
    now: Optional[int] = None
) -> StrategyInfo:
    now = resolve_timestamp(now)
    tier = tier_of(state, vault, user)
    lock = lock_of(state, user)
    return StrategyInfo(
        rate=current_rate(state, vault),
        tier=tier,
        tier_bonus=bonus_of(state, tier),
        is_locked=is_locked(state, user, now),
        lock_period=lock.period if lock else LockPeriod.NONE,
        unlock_time=lock.unlock_time if lock else 0,
        effective_rate=effective_rate(state, vault, user, now),
        pending_fee=pending_fee(state, token, user)
    )
