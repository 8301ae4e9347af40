# Fixed point scale factors
BPS_SCALE = 10_000  # Basis points (100% = 10000)
PERCENT_SCALE = 100  # bps per whole percent
WORD_MAX = 2**256 - 1  # uint256::MAX
ONE_ETHER = 10**18

# Time constants
DAY_IN_SECONDS = 24 * 60 * 60

# Configuration bounds
MAX_KINK_BPS = BPS_SCALE
MAX_BASE_RATE_BPS = BPS_SCALE
MAX_TIER_BONUS_BPS = 1000        # 10% in bps
MIN_LOCK_MULTIPLIER_BPS = 10_000  # 1.0x
MAX_LOCK_MULTIPLIER_BPS = 20_000  # 2.0x
MAX_PERFORMANCE_FEE_BPS = 5000    # 50% in bps

# Utilization curve defaults
DEFAULT_KINK_BPS = 8000       # 80% utilization
DEFAULT_BASE_RATE_BPS = 200   # 2% floor
DEFAULT_LOW_SLOPE = 5         # bps per percent below kink
DEFAULT_HIGH_SLOPE = 50       # bps per percent above kink

# Tier defaults: (min deposit, bonus bps), Bronze..Diamond
DEFAULT_TIER_THRESHOLDS = (
    (0, 0),
    (10 * ONE_ETHER, 50),
    (50 * ONE_ETHER, 100),
    (200 * ONE_ETHER, 200),
    (1000 * ONE_ETHER, 300),
)

# Lock defaults: (duration seconds, bonus multiplier bps), None..365 days
DEFAULT_LOCK_POLICIES = (
    (0, 10_000),
    (30 * DAY_IN_SECONDS, 11_000),
    (90 * DAY_IN_SECONDS, 12_500),
    (180 * DAY_IN_SECONDS, 15_000),
    (365 * DAY_IN_SECONDS, 20_000),
)

# Fee constants
DEFAULT_PERFORMANCE_FEE_BPS = 1000  # 10% in bps
DEFAULT_HIGH_WATER_MARK = BPS_SCALE  # 1.0 value per share, scaled

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
