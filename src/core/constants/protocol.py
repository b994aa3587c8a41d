"""Protocol defaults for collateral optimization.

These are the defaults behind EngineConfig; components read the values from
the config they are given, never from this module directly.
"""

# Minimum collateralization ratio (110%)
DEFAULT_MCR_BPS = 11000

# Added on top of the LTV-derived target ratio
DEFAULT_SAFETY_MARGIN_BPS = 500

# Forced buffer when a strategy carries no target LTV
NO_TARGET_BUFFER_BPS = 200

# A user already this far above MCR keeps their own ratio as target
SAFE_USER_BUFFER_BPS = 1000

# Safety gate: positions must sit at or above MCR * 110%
DEFAULT_GATE_BUFFER_PCT = 110

# Yield improvement floor, meant to exceed fixed transaction overhead
DEFAULT_MIN_IMPROVEMENT_BPS = 20

# Adaptive threshold cap for moves into riskier collateral
DEFAULT_MAX_THRESHOLD_BPS = 1000

# Proximity penalty zone above MCR
PROXIMITY_ZONE_BPS = 1000

# Score adjustments (bps of the base score)
MAX_RATIO_BONUS_BPS = 2000
MAX_RATIO_PENALTY_BPS = 3000

# Volatility discount applied to fallback prices, per volatility point
VOLATILITY_DISCOUNT_BPS = 100

# Strategy bounds
MIN_TARGET_LTV_BPS = 5000
MAX_TARGET_LTV_BPS = 9000
MIN_REBALANCE_THRESHOLD_BPS = 50

# Asset defaults
DEFAULT_BASE_ASSET = "WETH"
DEFAULT_DECIMALS = 18
DEFAULT_VOLATILITY = 7
BASE_ASSET_VOLATILITY = 3

# Liquid-staking derivatives with known low volatility.
# Deployments should override this table through settings.
DEFAULT_VOLATILITY_OVERRIDES = {
    "wstETH": 2,
    "rETH": 3,
    "cbETH": 3,
}

DEFAULT_MAX_SLIPPAGE_BPS = 100
