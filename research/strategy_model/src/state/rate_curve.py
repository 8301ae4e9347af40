"""Utilization rate curve configuration"""
from dataclasses import dataclass
from ..constants import (
    DEFAULT_KINK_BPS,
    DEFAULT_BASE_RATE_BPS,
    DEFAULT_LOW_SLOPE,
    DEFAULT_HIGH_SLOPE,
)

@dataclass(frozen=True)
class RateCurveConfig:
    """Kinked piecewise-linear curve, all rates in bps"""
    kink_bps: int = DEFAULT_KINK_BPS
    base_rate_bps: int = DEFAULT_BASE_RATE_BPS
    low_slope: int = DEFAULT_LOW_SLOPE    # bps added per whole percent up to the kink
    high_slope: int = DEFAULT_HIGH_SLOPE  # bps added per whole percent past the kink
