"""Deposit tier state"""
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict
from ..constants import DEFAULT_TIER_THRESHOLDS
from ..errors import IncompleteConfigError, UnknownTierError

class Tier(IntEnum):
    """Deposit size buckets, ordered lowest to highest"""
    BRONZE = 0
    SILVER = 1
    GOLD = 2
    PLATINUM = 3
    DIAMOND = 4

@dataclass(frozen=True)
class TierConfig:
    """Threshold and bonus for one tier"""
    min_deposit: int
    bonus_bps: int

TierTable = Dict[Tier, TierConfig]

def parse_tier(value) -> Tier:
    try:
        return Tier(value)
    except ValueError:
        raise UnknownTierError(f"No tier {value!r}") from None

def default_tier_configs() -> TierTable:
    """Seed tier ladder, Bronze..Diamond"""
    table = {
        tier: TierConfig(min_deposit=min_deposit, bonus_bps=bonus_bps)
        for tier, (min_deposit, bonus_bps) in zip(Tier, DEFAULT_TIER_THRESHOLDS)
    }
    check_tier_table(table)
    return table

def check_tier_table(table: TierTable) -> None:
    missing = [tier.name for tier in Tier if tier not in table]
    if missing:
        raise IncompleteConfigError(f"Tier config missing for {', '.join(missing)}")

def is_monotonic(table: TierTable) -> bool:
    """True when min_deposit strictly increases with tier ordinal"""
    thresholds = [table[tier].min_deposit for tier in Tier]
    return all(lower < upper for lower, upper in zip(thresholds, thresholds[1:]))
