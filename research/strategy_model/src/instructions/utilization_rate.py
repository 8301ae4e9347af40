"""Utilization based base rate

rate
 ^
 |                         / high_slope
 |                       /
 |            ________ /  <- kink
 |  ________/  low_slope
 | base
 +--------------------------> utilization
"""
import logging
from ..constants import MAX_KINK_BPS, MAX_BASE_RATE_BPS
from ..errors import InvalidKinkError, InvalidBaseRateError
from ..fixed_point import checked_add, checked_mul, to_bps_ratio, bps_to_percent
from ..state.rate_curve import RateCurveConfig
from ..state.strategy_state import StrategyState
from ..state.events import ConfigChanged
from ..state.vault import VaultView
from .authorization import require_authorized

logger = logging.getLogger(__name__)

def utilization_bps(capacity: int, deposited: int) -> int:
    """deposited / capacity in bps, zero for a capacity-less vault"""
    if capacity == 0:
        return 0
    return to_bps_ratio(deposited, capacity)

def calculate_rate(capacity: int, deposited: int, curve: RateCurveConfig) -> int:
    """Base rate in bps for the given utilization

    Utilization is converted to whole percents before applying a slope,
    so 79.99% prices as 79%. The result is not capped.
    """
    if capacity == 0:
        return curve.base_rate_bps

    utilization = utilization_bps(capacity, deposited)

    if utilization <= curve.kink_bps:
        return checked_add(
            curve.base_rate_bps,
            checked_mul(bps_to_percent(utilization), curve.low_slope)
        )

    kink_rate = checked_add(
        curve.base_rate_bps,
        checked_mul(bps_to_percent(curve.kink_bps), curve.low_slope)
    )
    excess_percent = bps_to_percent(utilization - curve.kink_bps)
    return checked_add(kink_rate, checked_mul(excess_percent, curve.high_slope))

def current_rate(state: StrategyState, vault: VaultView) -> int:
    rate = calculate_rate(vault.max_capacity(), vault.total_deposited(), state.rate_curve)
    logger.debug("Base rate %d bps at %d/%d", rate, vault.total_deposited(), vault.max_capacity())
    return rate

def get_utilization_config(state: StrategyState) -> RateCurveConfig:
    return state.rate_curve

def set_utilization_config(
    state: StrategyState,
    vault: VaultView,
    caller: str,
    kink_bps: int,
    base_rate_bps: int,
    low_slope: int,
    high_slope: int
) -> None:
    """Replace the rate curve"""
    require_authorized(vault, caller)
    if kink_bps > MAX_KINK_BPS:
        raise InvalidKinkError(f"Kink {kink_bps} bps above {MAX_KINK_BPS}")
    if base_rate_bps > MAX_BASE_RATE_BPS:
        raise InvalidBaseRateError(f"Base rate {base_rate_bps} bps above {MAX_BASE_RATE_BPS}")

    before = state.rate_curve
    state.rate_curve = RateCurveConfig(
        kink_bps=kink_bps,
        base_rate_bps=base_rate_bps,
        low_slope=low_slope,
        high_slope=high_slope
    )
    state.emit(ConfigChanged("utilization", None, before, state.rate_curve))
