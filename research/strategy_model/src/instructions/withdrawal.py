"""Withdrawal gate

Runs before the vault releases value: locked users are refused, then the
performance fee is charged against pre-withdrawal balances, then the host
release runs. If the release fails the fee is refunded and the strategy
state restored.
"""
import logging
from typing import Callable, Optional, TypeVar
from ..errors import WithdrawalLockedError, TransferFailedError
from ..state.strategy_state import StrategyState
from ..state.vault import TokenLedger
from .lock_manager import resolve_timestamp, is_locked
from .performance_fee import charge_fee

logger = logging.getLogger(__name__)

T = TypeVar("T")

def process_withdrawal(
    state: StrategyState,
    token: TokenLedger,
    user: str,
    release: Callable[[], T],
    now: Optional[int] = None
) -> T:
    now = resolve_timestamp(now)
    if is_locked(state, user, now):
        lock = state.user_locks[user]
        raise WithdrawalLockedError(f"{user} locked until {lock.unlock_time}")

    with state.atomic():
        fee = charge_fee(state, token, user)
        try:
            return release()
        except Exception:
            if fee and not token.transfer_value(state.fee_config.recipient, user, fee):
                logger.error("Could not refund fee of %d to %s after failed release", fee, user)
                raise TransferFailedError(f"Refund of {fee} to {user} failed")
            raise
