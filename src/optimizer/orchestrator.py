"""Collateral optimization orchestrator.

Runs one stateless cycle per position:
START -> SAFETY_GATE -> SELECT -> DECIDE -> {ACT | NO_ACTION}
"""

import asyncio
import logging
from typing import Iterable, List, Optional, Tuple

from aiolimiter import AsyncLimiter

from config.settings import Settings, get_settings
from src.core.constants import BPS
from src.core.exceptions import (
    EngineError,
    GateRejectedError,
    InvalidInputError,
    InvalidPriceError,
    PositionNotFoundError,
    StrategyNotFoundError,
)
from src.core.models import (
    BatchSummary,
    MarketSnapshot,
    OptimizationAction,
    OptimizationOutcome,
    PositionSnapshot,
    Strategy,
    SwapRequest,
)
from src.data.sources.base import (
    ExecutionCollaborator,
    PositionProvider,
    PriceSource,
    StrategyProvider,
    YieldSource,
)
from src.engine.config import EngineConfig
from src.engine.decision import RebalanceDecision
from src.engine.evaluator import CandidateEvaluator
from src.engine.fixed_point import apply_bps
from src.engine.selector import CandidateSelector
from src.engine.volatility import VolatilityClassifier, same_asset

logger = logging.getLogger(__name__)


class CollateralOptimizer:
    """
    Optimizer for collateral allocation of debt positions.

    Features:
    - Safety gate against positions near liquidation
    - Candidate selection across the owner's permitted assets
    - Adaptive rebalance-worthiness decision
    - Hand-off of ACT outcomes to an execution collaborator
    - Batch runs with per-position failure isolation
    """

    def __init__(
        self,
        prices: PriceSource,
        yields: YieldSource,
        positions: PositionProvider,
        strategies: StrategyProvider,
        executor: Optional[ExecutionCollaborator] = None,
        config: Optional[EngineConfig] = None,
        settings: Optional[Settings] = None,
    ):
        self.prices = prices
        self.yields = yields
        self.positions = positions
        self.strategies = strategies
        self.executor = executor

        self.settings = settings or get_settings()
        self.config = config or EngineConfig.from_settings(self.settings)

        self.classifier = VolatilityClassifier(self.config)
        self.evaluator = CandidateEvaluator(self.config, self.classifier)
        self.selector = CandidateSelector(self.config, self.evaluator)
        self.decision = RebalanceDecision(self.config)

    async def optimize_position(self, position_id: str) -> OptimizationOutcome:
        """
        Run one optimization cycle for a position.

        Args:
            position_id: Position to evaluate

        Returns:
            OptimizationOutcome with ACT (carrying a SwapRequest) or NO_ACTION

        Raises:
            GateRejectedError: If the position is too close to liquidation
            InvalidInputError: If the position, strategy or market data is invalid
        """
        # 1. Load position and strategy
        position, strategy = await self._load_position(position_id)

        # 2. Safety gate, before any market data is fetched
        self._check_gate(position)
        market_price, market = await self._load_market(position, strategy)

        # 3. Select
        selection = self.selector.select_best(
            position=position,
            strategy=strategy,
            market_price=market_price,
            current_ratio=position.current_ratio,
            market=market,
        )

        # 4. Decide
        current = selection.baseline.candidate
        best = selection.best
        report = self.decision.evaluate(current, best.candidate, strategy.rebalance_threshold_bps)

        if report.should_rebalance:
            amount = best.candidate.amount
            swap = SwapRequest(
                position_id=position.position_id,
                from_asset=position.asset,
                to_asset=best.asset,
                amount=amount,
                min_acceptable_amount=apply_bps(amount, BPS - self.config.max_slippage_bps),
            )
            action = OptimizationAction.ACT
        else:
            swap = None
            action = OptimizationAction.NO_ACTION

        outcome = OptimizationOutcome(
            position_id=position.position_id,
            action=action,
            current=current,
            selection=best,
            target_ratio=selection.target_ratio,
            improvement_bps=report.improvement_bps,
            threshold_bps=report.threshold_bps,
            reason=report.reason,
            swap=swap,
        )

        logger.info(
            f"Position {position.position_id}: {action.value} "
            f"({position.asset} -> {best.asset}, {report.reason})"
        )
        return outcome

    async def execute(self, outcome: OptimizationOutcome) -> bool:
        """
        Hand an ACT outcome to the execution collaborator.

        NO_ACTION outcomes are never sent. Records the collaborator's
        success flag on the outcome.

        Returns:
            True if the swap was executed successfully
        """
        if not outcome.should_act or outcome.swap is None:
            return False
        if self.executor is None:
            raise InvalidInputError("No execution collaborator configured", "executor")

        success = await self.executor.execute_swap(outcome.swap)
        outcome.executed = success
        if not success:
            logger.warning(
                f"Swap {outcome.swap.from_asset} -> {outcome.swap.to_asset} "
                f"failed for {outcome.position_id}"
            )
        return success

    async def run_batch(
        self,
        position_ids: Iterable[str],
        execute: bool = False,
    ) -> BatchSummary:
        """
        Run independent cycles for many positions.

        One position's failure never affects the others: it is recorded as
        skipped with its error message.

        Args:
            position_ids: Positions to evaluate
            execute: Hand ACT outcomes to the execution collaborator

        Returns:
            BatchSummary with processed / acted / skipped / executed counts
        """
        ids: List[str] = list(position_ids)
        limiter = AsyncLimiter(self.settings.batch_rate_limit, self.settings.batch_rate_window)

        async def run_one(position_id: str) -> OptimizationOutcome:
            async with limiter:
                outcome = await self.optimize_position(position_id)
                if execute and outcome.should_act:
                    await self.execute(outcome)
                return outcome

        results = await asyncio.gather(*(run_one(pid) for pid in ids), return_exceptions=True)

        summary = BatchSummary(processed=len(ids))
        for position_id, result in zip(ids, results):
            if isinstance(result, EngineError):
                logger.warning(f"Skipping {position_id}: {result}")
            elif isinstance(result, Exception):
                logger.error(f"Unexpected error for {position_id}: {result}")
            elif isinstance(result, BaseException):
                raise result
            else:
                summary.outcomes.append(result)
                if result.should_act:
                    summary.acted += 1
                if result.executed:
                    summary.executed += 1
                continue

            summary.skipped += 1
            summary.errors[position_id] = str(result)

        logger.info(
            f"Batch complete: {summary.processed} processed, {summary.acted} acted, "
            f"{summary.skipped} skipped, {summary.executed} executed"
        )
        return summary

    async def _load_position(self, position_id: str) -> Tuple[PositionSnapshot, Strategy]:
        position = await self.positions.get_position(position_id)
        if position is None:
            raise PositionNotFoundError(f"Position {position_id} not found")
        if not position.is_open:
            raise InvalidInputError(
                f"Position {position_id} needs positive collateral and debt", "position"
            )
        if position.current_ratio <= 0:
            raise InvalidInputError(
                f"Position {position_id} has no valid ratio: {position.current_ratio}",
                "current_ratio",
            )

        strategy = await self.strategies.get_strategy(position.owner)
        if strategy is None:
            raise StrategyNotFoundError(f"No strategy for owner {position.owner}")
        return position, strategy

    async def _load_market(
        self,
        position: PositionSnapshot,
        strategy: Strategy,
    ) -> Tuple[int, MarketSnapshot]:
        """Fetch prices, yields and decimals for one cycle.

        Returns: (market_price of the position's asset, market snapshot)
        """
        assets = [position.asset] + [
            a for a in strategy.permitted_assets if not same_asset(a, position.asset)
        ]

        market_price = await self._price_of(position.asset)
        if self.classifier.is_base_asset(position.asset):
            base_price = market_price
        else:
            base_price = await self._price_of(self.config.base_asset)

        yields = {}
        last_good = {}
        decimals = {}
        for asset in assets:
            yields[asset] = await self.yields.get_yield(asset)
            last_good[asset] = await self.prices.last_good_price(asset)
            asset_decimals = await self.yields.get_decimals(asset)
            if asset_decimals is not None:
                decimals[asset] = asset_decimals

        return market_price, MarketSnapshot(
            base_price=base_price,
            yields=yields,
            last_good_prices=last_good,
            decimals=decimals,
        )

    async def _price_of(self, asset: str) -> int:
        """Live price, falling back to the last good price when the feed is down.

        Raises:
            InvalidPriceError: If no positive price is available
        """
        price, ok = await self.prices.current_price(asset)
        if not ok:
            logger.warning(f"Live price for {asset} unavailable, using last good price")
            price = await self.prices.last_good_price(asset)
        if price <= 0:
            raise InvalidPriceError(f"No valid price for {asset}: {price}")
        return price

    def _check_gate(self, position: PositionSnapshot) -> None:
        """Reject positions below MCR * gate buffer (110% by default)."""
        required = self.config.gate_ratio_bps
        if position.current_ratio < required:
            logger.warning(
                f"Gate rejected {position.position_id}: ratio {position.current_ratio}bps "
                f"< {required}bps"
            )
            raise GateRejectedError(position.position_id, position.current_ratio, required)
