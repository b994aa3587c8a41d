"""Generic constants for fixed-point collateral calculations.

These constants are protocol-agnostic and shared by every engine component.
"""

# Precision constants
WAD = 10**18  # Standard 18 decimal precision for prices, debt and USD values
BPS = 10_000  # Basis points denominator (ratios, LTVs, yields, thresholds)

# Scoring precision applied before integer division in the base score
SCORE_SCALE = 10_000

# Volatility score domain
MIN_VOLATILITY = 1
MAX_VOLATILITY = 10

# Risk tolerance domain
MIN_RISK_TOLERANCE = 1
MAX_RISK_TOLERANCE = 10
