"""Strategy configuration and state management"""
import copy
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List
from .rate_curve import RateCurveConfig
from .tier import TierTable, default_tier_configs, check_tier_table
from .lock import LockPolicyTable, UserLock, default_lock_configs, check_lock_table
from .fee import PerformanceFeeConfig, HighWaterMark
from .vault import VaultView

logger = logging.getLogger(__name__)

_RECORD_FIELDS = (
    "fee_config",
    "rate_curve",
    "tier_configs",
    "lock_configs",
    "user_locks",
    "high_water_mark",
)

@dataclass
class StrategyState:
    """Everything the strategy owns, passed explicitly into each instruction"""
    fee_config: PerformanceFeeConfig
    rate_curve: RateCurveConfig = field(default_factory=RateCurveConfig)
    tier_configs: TierTable = field(default_factory=default_tier_configs)
    lock_configs: LockPolicyTable = field(default_factory=default_lock_configs)
    user_locks: Dict[str, UserLock] = field(default_factory=dict)
    high_water_mark: HighWaterMark = field(default_factory=HighWaterMark)
    events: List[object] = field(default_factory=list)

    def __post_init__(self):
        check_tier_table(self.tier_configs)
        check_lock_table(self.lock_configs)

    @classmethod
    def create(cls, vault: VaultView) -> "StrategyState":
        """Seed state, with fees paid to the vault's recipient"""
        return cls(fee_config=PerformanceFeeConfig(recipient=vault.fee_recipient()))

    def emit(self, event: object) -> None:
        self.events.append(event)
        logger.info("%s", event)

    @contextmanager
    def atomic(self) -> Iterator["StrategyState"]:
        """Run a block as one unit: on any exception the records are restored
        and events emitted inside the block are dropped"""
        snapshot = copy.deepcopy({name: getattr(self, name) for name in _RECORD_FIELDS})
        n_events = len(self.events)
        try:
            yield self
        except BaseException:
            for name, value in snapshot.items():
                setattr(self, name, value)
            del self.events[n_events:]
            logger.debug("Rolled back strategy state")
            raise
