"""Custom errors for the yield strategy model"""

class StrategyError(Exception):
    """Base error class for strategy errors"""
    pass

class FixedPointOverflowError(StrategyError):
    """Error for arithmetic past the 256-bit word"""
    pass

class UnauthorizedError(StrategyError):
    """Error for a caller without configuration privileges"""
    pass

class TransferFailedError(StrategyError):
    """Error for a token transfer the ledger refused"""
    pass

# Configuration validation

class ConfigValidationError(StrategyError):
    """Base error for out-of-range configuration parameters"""
    pass

class InvalidKinkError(ConfigValidationError):
    """Kink above 100% utilization"""
    pass

class InvalidBaseRateError(ConfigValidationError):
    """Base rate above 100%"""
    pass

class InvalidTierBonusError(ConfigValidationError):
    """Tier bonus above the bonus cap"""
    pass

class InvalidLockMultiplierError(ConfigValidationError):
    """Lock multiplier outside [1.0x, 2.0x]"""
    pass

class InvalidPerformanceFeeError(ConfigValidationError):
    """Performance fee above the fee cap"""
    pass

class InvalidFeeRecipientError(ConfigValidationError):
    """Fee recipient is the null identity"""
    pass

class IncompleteConfigError(ConfigValidationError):
    """Enum-indexed table is missing a variant"""
    pass

class UnknownTierError(ConfigValidationError):
    """Value does not name a tier"""
    pass

class UnknownLockPeriodError(ConfigValidationError):
    """Value does not name a lock period"""
    pass

# State preconditions

class StatePreconditionError(StrategyError):
    """Base error for operations whose preconditions do not hold"""
    pass

class LockAlreadyExistsError(StatePreconditionError):
    """User already has a lock record"""
    pass

class NoLockFoundError(StatePreconditionError):
    """User has no lock record"""
    pass

class StillLockedError(StatePreconditionError):
    """Lock has not reached its unlock time"""
    pass

class InsufficientBalanceError(StatePreconditionError):
    """Nothing deposited to lock"""
    pass

class WithdrawalLockedError(StatePreconditionError):
    """Withdrawal attempted while a lock is active"""
    pass
