"""Rebalance-worthiness decision."""

import logging
from dataclasses import dataclass

from src.core.constants import BPS
from src.core.exceptions import InvalidInputError
from src.core.models import CandidateAllocation
from src.engine.config import EngineConfig
from src.engine.fixed_point import apply_pct, mul_div
from src.engine.volatility import same_asset

logger = logging.getLogger(__name__)

# Threshold increase (percent) for a volatility step up of 1 and 2 points;
# from 3 points on the increase is 50% per point
VOLATILITY_STEP_UP_PCT = {1: 25, 2: 50}
VOLATILITY_STEP_UP_PCT_PER_POINT = 50

# Threshold reduction per point of volatility decrease, and its cap
VOLATILITY_STEP_DOWN_PCT_PER_POINT = 10
MAX_STEP_DOWN_PCT = 50


@dataclass(frozen=True)
class DecisionReport:
    """Why a rebalance was (or was not) judged worthwhile."""
    should_rebalance: bool
    improvement_bps: int
    threshold_bps: int
    reason: str


class RebalanceDecision:
    """
    Decides whether moving to a candidate allocation is worth its cost.

    Asymmetric: a move into riskier collateral must clear a higher
    threshold, a move into calmer collateral a lower one, never below the
    fixed improvement floor.
    """

    def __init__(self, config: EngineConfig):
        self.config = config

    def should_rebalance(
        self,
        current: CandidateAllocation,
        candidate: CandidateAllocation,
        user_threshold_bps: int,
    ) -> bool:
        return self.evaluate(current, candidate, user_threshold_bps).should_rebalance

    def evaluate(
        self,
        current: CandidateAllocation,
        candidate: CandidateAllocation,
        user_threshold_bps: int,
    ) -> DecisionReport:
        """
        Run the decision rules in order.

        Args:
            current: Current allocation
            candidate: Proposed allocation
            user_threshold_bps: Strategy rebalance threshold

        Returns:
            DecisionReport with the improvement and the threshold applied

        Raises:
            InvalidInputError: If the user threshold is not positive
        """
        if user_threshold_bps <= 0:
            raise InvalidInputError(
                f"Rebalance threshold must be positive: {user_threshold_bps}",
                "user_threshold_bps",
            )

        if same_asset(candidate.asset, current.asset):
            return DecisionReport(False, 0, user_threshold_bps, "same asset")

        if candidate.yield_bps <= current.yield_bps:
            return DecisionReport(False, 0, user_threshold_bps, "no yield improvement")

        improvement = self.improvement_bps(current.yield_bps, candidate.yield_bps)
        floor = self.config.min_improvement_bps
        if improvement < floor:
            return DecisionReport(
                False, improvement, floor, f"improvement below {floor} bps floor"
            )

        threshold = self.adaptive_threshold(
            user_threshold_bps, current.volatility, candidate.volatility
        )
        worthwhile = improvement >= threshold
        reason = (
            f"improvement {improvement} bps "
            f"{'meets' if worthwhile else 'below'} threshold {threshold} bps"
        )
        logger.debug(f"Rebalance {current.asset} -> {candidate.asset}: {reason}")
        return DecisionReport(worthwhile, improvement, threshold, reason)

    @staticmethod
    def improvement_bps(current_yield: int, candidate_yield: int) -> int:
        """Relative yield improvement in bps of the current yield."""
        if current_yield <= 0:
            # Any positive yield over nothing is an unbounded improvement
            return BPS * BPS if candidate_yield > 0 else 0
        return mul_div(candidate_yield - current_yield, BPS, current_yield)

    def adaptive_threshold(
        self,
        user_threshold_bps: int,
        current_volatility: int,
        candidate_volatility: int,
    ) -> int:
        """
        Scale the user threshold by the change in volatility.

        Riskier: +25% for 1 point, +50% for 2, +50% per point from 3,
        capped at the max threshold (1000 bps by default). Calmer: -10% per
        point, at most -50%, never below the improvement floor. Equal: unchanged.
        """
        delta = candidate_volatility - current_volatility
        threshold = user_threshold_bps

        if delta > 0:
            step_pct = VOLATILITY_STEP_UP_PCT.get(delta, VOLATILITY_STEP_UP_PCT_PER_POINT * delta)
            threshold = threshold + apply_pct(threshold, step_pct)
            threshold = min(threshold, self.config.max_threshold_bps)
        elif delta < 0:
            reduction_pct = min(MAX_STEP_DOWN_PCT, VOLATILITY_STEP_DOWN_PCT_PER_POINT * -delta)
            threshold = threshold - apply_pct(threshold, reduction_pct)
            threshold = max(threshold, self.config.min_improvement_bps)

        return threshold
