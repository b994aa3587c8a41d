"""Core constants module.

Re-exports all constants for convenience.
"""

from src.core.constants.generic import (
    WAD,
    BPS,
    SCORE_SCALE,
    MIN_VOLATILITY,
    MAX_VOLATILITY,
    MIN_RISK_TOLERANCE,
    MAX_RISK_TOLERANCE,
)

from src.core.constants.protocol import (
    DEFAULT_MCR_BPS,
    DEFAULT_SAFETY_MARGIN_BPS,
    NO_TARGET_BUFFER_BPS,
    SAFE_USER_BUFFER_BPS,
    DEFAULT_GATE_BUFFER_PCT,
    DEFAULT_MIN_IMPROVEMENT_BPS,
    DEFAULT_MAX_THRESHOLD_BPS,
    PROXIMITY_ZONE_BPS,
    MAX_RATIO_BONUS_BPS,
    MAX_RATIO_PENALTY_BPS,
    VOLATILITY_DISCOUNT_BPS,
    MIN_TARGET_LTV_BPS,
    MAX_TARGET_LTV_BPS,
    MIN_REBALANCE_THRESHOLD_BPS,
    DEFAULT_BASE_ASSET,
    DEFAULT_DECIMALS,
    DEFAULT_VOLATILITY,
    BASE_ASSET_VOLATILITY,
    DEFAULT_VOLATILITY_OVERRIDES,
    DEFAULT_MAX_SLIPPAGE_BPS,
)

__all__ = [
    # Generic
    "WAD",
    "BPS",
    "SCORE_SCALE",
    "MIN_VOLATILITY",
    "MAX_VOLATILITY",
    "MIN_RISK_TOLERANCE",
    "MAX_RISK_TOLERANCE",
    # Protocol defaults
    "DEFAULT_MCR_BPS",
    "DEFAULT_SAFETY_MARGIN_BPS",
    "NO_TARGET_BUFFER_BPS",
    "SAFE_USER_BUFFER_BPS",
    "DEFAULT_GATE_BUFFER_PCT",
    "DEFAULT_MIN_IMPROVEMENT_BPS",
    "DEFAULT_MAX_THRESHOLD_BPS",
    "PROXIMITY_ZONE_BPS",
    "MAX_RATIO_BONUS_BPS",
    "MAX_RATIO_PENALTY_BPS",
    "VOLATILITY_DISCOUNT_BPS",
    "MIN_TARGET_LTV_BPS",
    "MAX_TARGET_LTV_BPS",
    "MIN_REBALANCE_THRESHOLD_BPS",
    "DEFAULT_BASE_ASSET",
    "DEFAULT_DECIMALS",
    "DEFAULT_VOLATILITY",
    "BASE_ASSET_VOLATILITY",
    "DEFAULT_VOLATILITY_OVERRIDES",
    "DEFAULT_MAX_SLIPPAGE_BPS",
]
