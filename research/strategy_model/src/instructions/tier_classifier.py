"""Deposit tier classification"""
import logging
from ..constants import MAX_TIER_BONUS_BPS
from ..errors import InvalidTierBonusError
from ..state.tier import Tier, TierConfig, TierTable, is_monotonic, parse_tier
from ..state.strategy_state import StrategyState
from ..state.events import ConfigChanged
from ..state.vault import VaultView
from .authorization import require_authorized

logger = logging.getLogger(__name__)

def classify_tier(user_deposit: int, tier_configs: TierTable) -> Tier:
    """Highest tier whose threshold the deposit meets, Bronze otherwise"""
    for tier in sorted(Tier, reverse=True):
        if user_deposit >= tier_configs[tier].min_deposit:
            return tier
    return Tier.BRONZE

def bonus_of(state: StrategyState, tier: Tier) -> int:
    return state.tier_configs[tier].bonus_bps

def tier_of(state: StrategyState, vault: VaultView, user: str) -> Tier:
    return classify_tier(vault.user_deposit(user), state.tier_configs)

def tier_bonus(state: StrategyState, vault: VaultView, user: str) -> int:
    return bonus_of(state, tier_of(state, vault, user))

def get_tier_config(state: StrategyState, tier: Tier) -> TierConfig:
    return state.tier_configs[tier]

def set_tier_config(
    state: StrategyState,
    vault: VaultView,
    caller: str,
    tier: Tier,
    min_deposit: int,
    bonus_bps: int
) -> None:
    """Overwrite one tier in place

    Neighbouring thresholds are not re-validated; a non-monotonic ladder is
    accepted and logged.
    """
    require_authorized(vault, caller)
    tier = parse_tier(tier)
    if bonus_bps > MAX_TIER_BONUS_BPS:
        raise InvalidTierBonusError(f"Tier bonus {bonus_bps} bps above {MAX_TIER_BONUS_BPS}")

    before = state.tier_configs[tier]
    after = TierConfig(min_deposit=min_deposit, bonus_bps=bonus_bps)
    state.tier_configs[tier] = after
    if not is_monotonic(state.tier_configs):
        logger.warning("Tier thresholds no longer strictly increasing after updating %s", tier.name)
    state.emit(ConfigChanged("tier", tier, before, after))
