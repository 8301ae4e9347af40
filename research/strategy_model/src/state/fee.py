"""Performance fee and high-water mark state"""
from dataclasses import dataclass, field
from typing import Dict
from ..constants import DEFAULT_PERFORMANCE_FEE_BPS, DEFAULT_HIGH_WATER_MARK

@dataclass(frozen=True)
class PerformanceFeeConfig:
    recipient: str
    fee_bps: int = DEFAULT_PERFORMANCE_FEE_BPS

@dataclass
class HighWaterMark:
    """Value per 10000 shares, globally and per user

    The per-user mark only exists once a fee has been charged to that user.
    """
    global_mark: int = DEFAULT_HIGH_WATER_MARK
    user_marks: Dict[str, int] = field(default_factory=dict)

    def reference_for(self, user: str) -> int:
        """The mark a user's gains are measured against"""
        return self.user_marks.get(user, self.global_mark)
