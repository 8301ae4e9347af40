"""High-water mark performance fee

Value per share is tracked per 10000 shares. A user pays fee_bps of the
value their balance gained above the last mark they were charged at, or
above the global mark if they were never charged.
"""
import logging
from typing import Optional, Tuple
from ..constants import MAX_PERFORMANCE_FEE_BPS
from ..errors import InvalidPerformanceFeeError, InvalidFeeRecipientError, TransferFailedError
from ..fixed_point import apply_bps, to_bps_ratio
from ..state.fee import PerformanceFeeConfig
from ..state.strategy_state import StrategyState
from ..state.events import ConfigChanged, FeeCharged, HighWaterMarkUpdated
from ..state.vault import TokenLedger, VaultView, is_null_identity
from .authorization import require_authorized

logger = logging.getLogger(__name__)

def supply_per_share(token: TokenLedger) -> Optional[int]:
    """Value per 10000 shares, None while no shares exist"""
    shares = token.total_shares()
    if shares == 0:
        return None
    return to_bps_ratio(token.total_supply(), shares)

def calculate_fee(value_per_share: int, mark: int, balance: int, fee_bps: int) -> int:
    """Fee on the balance's gain above mark

    excess = (value_per_share - mark) * balance / 10000
    fee    = excess * fee_bps / 10000
    """
    if value_per_share <= mark:
        return 0
    excess_return = apply_bps(balance, value_per_share - mark)
    return apply_bps(excess_return, fee_bps)

def _quote(state: StrategyState, token: TokenLedger, user: str) -> Tuple[int, Optional[int]]:
    value_per_share = supply_per_share(token)
    if value_per_share is None:
        return 0, None
    fee = calculate_fee(
        value_per_share,
        state.high_water_mark.reference_for(user),
        token.balance_of(user),
        state.fee_config.fee_bps
    )
    return fee, value_per_share

def pending_fee(state: StrategyState, token: TokenLedger, user: str) -> int:
    fee, _ = _quote(state, token, user)
    return fee

def high_water_mark_of(state: StrategyState, user: str) -> int:
    return state.high_water_mark.reference_for(user)

def charge_fee(state: StrategyState, token: TokenLedger, user: str) -> int:
    """Collect the pending fee and raise the user's mark to the current value per share

    Supply and shares are read once; the fee and the new mark come from the
    same snapshot. The mark moves only after the ledger confirms the transfer.
    """
    fee, new_mark = _quote(state, token, user)
    if fee == 0:
        return 0

    recipient = state.fee_config.recipient
    with state.atomic():
        if not token.transfer_value(user, recipient, fee):
            raise TransferFailedError(f"Fee transfer of {fee} from {user} to {recipient} failed")
        state.high_water_mark.user_marks[user] = new_mark
        state.emit(FeeCharged(user, fee, new_mark))
    return fee

def set_performance_fee_config(
    state: StrategyState,
    vault: VaultView,
    caller: str,
    fee_bps: int,
    recipient: str
) -> None:
    require_authorized(vault, caller)
    if fee_bps > MAX_PERFORMANCE_FEE_BPS:
        raise InvalidPerformanceFeeError(f"Fee {fee_bps} bps above {MAX_PERFORMANCE_FEE_BPS}")
    if is_null_identity(recipient):
        raise InvalidFeeRecipientError("Fee recipient cannot be the null address")

    before = state.fee_config
    state.fee_config = PerformanceFeeConfig(recipient=recipient, fee_bps=fee_bps)
    state.emit(ConfigChanged("performance_fee", None, before, state.fee_config))

def update_global_high_water_mark(
    state: StrategyState,
    vault: VaultView,
    token: TokenLedger,
    caller: str
) -> Optional[int]:
    """Reset the global mark to the current value per share

    May lower the mark. Returns the new mark, or None when no shares exist.
    """
    require_authorized(vault, caller)
    new_mark = supply_per_share(token)
    if new_mark is None:
        return None

    before = state.high_water_mark.global_mark
    if new_mark < before:
        logger.warning("Global high-water mark decreasing from %d to %d", before, new_mark)
    state.high_water_mark.global_mark = new_mark
    state.emit(HighWaterMarkUpdated(before, new_mark))
    return new_mark
