"""Collateral scoring function.

Maps (yield, volatility, risk tolerance, yield priority, resulting ratio,
target ratio) to an integer score. Higher is better; 0 means the candidate
must never be selected.
"""

from src.core.constants import (
    BPS,
    SCORE_SCALE,
    MIN_RISK_TOLERANCE,
    MAX_RISK_TOLERANCE,
    PROXIMITY_ZONE_BPS,
    MAX_RATIO_BONUS_BPS,
    MAX_RATIO_PENALTY_BPS,
)
from src.engine.fixed_point import apply_bps, clamp, mul_div

# Maps risk 1 <-> 10 symmetrically via (11 - risk)
RISK_NORMALIZER = MAX_RISK_TOLERANCE + 1


def base_score(yield_bps: int, volatility: int, risk: int, yield_prioritized: bool) -> int:
    """Yield/volatility trade-off before any ratio adjustment."""
    if yield_prioritized:
        return mul_div(yield_bps * risk, SCORE_SCALE, RISK_NORMALIZER - risk + volatility)
    return mul_div(yield_bps * (RISK_NORMALIZER - risk), SCORE_SCALE, risk + volatility)


def ratio_adjustment_bps(result_ratio: int, target_ratio: int, mcr_bps: int) -> int:
    """
    Multiplier (bps of 10000) for where the ratio sits relative to target.

    Above target earns a bonus of up to 20%, between MCR and target a
    penalty of up to 30%, exactly at target nothing.
    """
    if result_ratio > target_ratio:
        bonus = min(MAX_RATIO_BONUS_BPS, mul_div(MAX_RATIO_BONUS_BPS, result_ratio - target_ratio, target_ratio))
        return BPS + bonus
    if mcr_bps <= result_ratio < target_ratio:
        penalty = min(MAX_RATIO_PENALTY_BPS, mul_div(MAX_RATIO_PENALTY_BPS, target_ratio - result_ratio, target_ratio))
        return BPS - penalty
    return BPS


def proximity_penalty_bps(result_ratio: int, mcr_bps: int) -> int:
    """
    Extra cut for ratios within 1000 bps of MCR.

    (1000 - margin) / 10 percent, i.e. (1000 - margin) * 10 bps: the full
    score at a margin of 1000, nothing at a margin of 0.
    """
    margin = max(0, result_ratio - mcr_bps)
    if margin >= PROXIMITY_ZONE_BPS:
        return 0
    return (PROXIMITY_ZONE_BPS - margin) * BPS // PROXIMITY_ZONE_BPS


def score_candidate(
    yield_bps: int,
    volatility: int,
    risk_tolerance: int,
    yield_prioritized: bool,
    result_ratio: int,
    target_ratio: int,
    mcr_bps: int,
) -> int:
    """
    Score a collateral candidate.

    Degenerate inputs (zero yield, volatility or ratios) and ratios below
    MCR score 0. Monotonically non-decreasing in yield and non-increasing
    in volatility.

    Args:
        yield_bps: Asset yield (bps)
        volatility: Volatility score 1-10
        risk_tolerance: User risk tolerance, clamped to 1-10
        yield_prioritized: Favour yield over safety
        result_ratio: Collateral ratio after the switch (bps)
        target_ratio: Ratio the selector aims for (bps)
        mcr_bps: Minimum collateralization ratio (bps)

    Returns:
        Non-negative integer score
    """
    if yield_bps <= 0 or volatility <= 0 or result_ratio <= 0 or target_ratio <= 0:
        return 0
    if result_ratio < mcr_bps:
        return 0

    risk = clamp(risk_tolerance, MIN_RISK_TOLERANCE, MAX_RISK_TOLERANCE)
    score = base_score(yield_bps, volatility, risk, yield_prioritized)
    score = apply_bps(score, ratio_adjustment_bps(result_ratio, target_ratio, mcr_bps))

    penalty = proximity_penalty_bps(result_ratio, mcr_bps)
    if penalty:
        score = apply_bps(score, BPS - penalty)

    return score
