"""Structured notifications emitted by mutating operations"""
from dataclasses import dataclass
from typing import Any, Optional
from .lock import LockPeriod

@dataclass(frozen=True)
class ConfigChanged:
    name: str  # "utilization", "tier", "lock" or "performance_fee"
    key: Optional[Any]  # tier or lock period for per-variant tables
    before: Any
    after: Any

@dataclass(frozen=True)
class LockCreated:
    user: str
    amount: int
    period: LockPeriod
    unlock_time: int
    bonus_rate: int

@dataclass(frozen=True)
class LockReleased:
    user: str
    amount: int

@dataclass(frozen=True)
class FeeCharged:
    user: str
    amount: int
    new_mark: int

@dataclass(frozen=True)
class HighWaterMarkUpdated:
    before: int
    after: int
