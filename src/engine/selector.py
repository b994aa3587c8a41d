"""Optimal collateral candidate selection."""

import logging

from src.core.exceptions import InvalidInputError, InvalidPriceError, InvalidStrategyError
from src.core.models import (
    CandidateAllocation,
    MarketSnapshot,
    PositionSnapshot,
    ScoredCandidate,
    Selection,
    Strategy,
)
from src.engine.config import EngineConfig
from src.engine.evaluator import CandidateEvaluator
from src.engine.risk import RiskCalculator
from src.engine.scoring import score_candidate
from src.engine.volatility import same_asset

logger = logging.getLogger(__name__)


class CandidateSelector:
    """
    Picks the highest-scoring collateral among a strategy's permitted assets.

    Algorithm:
    1. Derive the target ratio from the strategy's LTV (or the current ratio)
    2. Score the current asset at the current ratio as the baseline
    3. Evaluate every other permitted asset in list order, skipping failures
    4. Keep the strictly highest score; ties go to the earlier candidate
    """

    def __init__(self, config: EngineConfig, evaluator: CandidateEvaluator):
        self.config = config
        self.evaluator = evaluator

    def derive_target_ratio(self, strategy: Strategy, current_ratio: int) -> int:
        """
        Target collateral ratio for a position.

        With a target LTV: 1 / LTV plus the safety margin, raised to the
        current ratio when the user already sits above it and comfortably
        above MCR. Without one: the current ratio plus a small buffer.
        """
        if not strategy.has_target_ltv:
            return current_ratio + self.config.no_target_buffer_bps

        target = RiskCalculator.ratio_from_ltv(strategy.target_ltv_bps) + self.config.safety_margin_bps
        safe_floor = self.config.mcr_bps + self.config.safe_user_buffer_bps
        if current_ratio > target and current_ratio > safe_floor:
            target = current_ratio
        return target

    def select_best(
        self,
        position: PositionSnapshot,
        strategy: Strategy,
        market_price: int,
        current_ratio: int,
        market: MarketSnapshot,
    ) -> Selection:
        """
        Find the best collateral allocation for a position.

        Args:
            position: Position snapshot
            strategy: Owner's strategy
            market_price: Current price of the position's asset (1e18-scaled)
            current_ratio: Current collateral ratio (bps)
            market: Market data for the permitted assets

        Returns:
            Selection whose best candidate is the baseline when nothing beats it

        Raises:
            InvalidInputError: If preconditions are violated
        """
        if market_price <= 0:
            raise InvalidPriceError(f"Market price must be positive: {market_price}")
        if current_ratio < self.config.mcr_bps:
            raise InvalidInputError(
                f"Current ratio {current_ratio} bps below MCR {self.config.mcr_bps} bps",
                "current_ratio",
            )
        if not position.is_open:
            raise InvalidInputError(
                f"Position {position.position_id} needs positive collateral and debt",
                "position",
            )
        if not strategy.permitted_assets:
            raise InvalidStrategyError("Strategy permits no assets", "permitted_assets")

        target_ratio = self.derive_target_ratio(strategy, current_ratio)

        baseline = self._score_baseline(position, strategy, current_ratio, target_ratio, market)
        best = baseline

        decimals = market.decimals_of(position.asset, self.config.default_decimals)
        collateral_value = RiskCalculator.collateral_value(position.collateral, market_price, decimals)

        evaluated = 0
        skipped = 0
        for asset in strategy.permitted_assets:
            if same_asset(asset, position.asset):
                continue

            result = self.evaluator.evaluate(
                asset=asset,
                collateral_value_usd=collateral_value,
                strategy=strategy,
                debt=position.debt,
                target_ratio=target_ratio,
                base_price=market.base_price,
                market=market,
            )
            if not result.ok:
                skipped += 1
                logger.debug(f"Skipping {asset} for {position.position_id}: {result.error}")
                continue

            evaluated += 1
            if result.score > best.score:
                best = result.scored

        logger.debug(
            f"Selected {best.asset} for {position.position_id}: score={best.score} "
            f"(baseline {baseline.score}), target={target_ratio}bps, "
            f"evaluated={evaluated}, skipped={skipped}"
        )

        return Selection(
            best=best,
            baseline=baseline,
            target_ratio=target_ratio,
            evaluated=evaluated,
            skipped=skipped,
        )

    def _score_baseline(
        self,
        position: PositionSnapshot,
        strategy: Strategy,
        current_ratio: int,
        target_ratio: int,
        market: MarketSnapshot,
    ) -> ScoredCandidate:
        """Score the current asset as-is. Always eligible as the fallback."""
        volatility = self.evaluator.classifier.classify(position.asset)
        yield_bps = market.yield_of(position.asset)
        score = score_candidate(
            yield_bps=yield_bps,
            volatility=volatility,
            risk_tolerance=strategy.risk_tolerance,
            yield_prioritized=strategy.yield_prioritized,
            result_ratio=current_ratio,
            target_ratio=target_ratio,
            mcr_bps=self.config.mcr_bps,
        )
        return ScoredCandidate(
            candidate=CandidateAllocation(
                asset=position.asset,
                amount=position.collateral,
                yield_bps=yield_bps,
                volatility=volatility,
            ),
            score=score,
            ratio=current_ratio,
            is_baseline=True,
        )
