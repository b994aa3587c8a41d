"""Candidate evaluation for alternate collateral assets."""

import logging

from src.core.constants import BPS, VOLATILITY_DISCOUNT_BPS
from src.core.exceptions import (
    InvalidInputError,
    InvalidAssetError,
    InvalidCollateralValueError,
    InvalidDebtError,
    InvalidPriceError,
    TargetRatioBelowMinimumError,
)
from src.core.models import (
    CandidateAllocation,
    EvaluationResult,
    MarketSnapshot,
    ScoredCandidate,
    Strategy,
)
from src.engine.config import EngineConfig
from src.engine.fixed_point import apply_bps
from src.engine.risk import RiskCalculator
from src.engine.scoring import score_candidate
from src.engine.volatility import VolatilityClassifier

logger = logging.getLogger(__name__)


class CandidateEvaluator:
    """
    Derives the allocation of an alternate asset that preserves the
    position's USD collateral value, floors it at the target ratio, and
    scores it.
    """

    def __init__(self, config: EngineConfig, classifier: VolatilityClassifier):
        self.config = config
        self.classifier = classifier

    def evaluate(
        self,
        asset: str,
        collateral_value_usd: int,
        strategy: Strategy,
        debt: int,
        target_ratio: int,
        base_price: int,
        market: MarketSnapshot,
    ) -> EvaluationResult:
        """Evaluate an asset, carrying any validation failure in the result."""
        try:
            scored = self.evaluate_or_raise(
                asset, collateral_value_usd, strategy, debt, target_ratio, base_price, market
            )
        except InvalidInputError as e:
            logger.debug(f"Evaluation of {asset} failed: {e}")
            return EvaluationResult.failure(asset, e)
        return EvaluationResult.success(scored)

    def evaluate_or_raise(
        self,
        asset: str,
        collateral_value_usd: int,
        strategy: Strategy,
        debt: int,
        target_ratio: int,
        base_price: int,
        market: MarketSnapshot,
    ) -> ScoredCandidate:
        """
        Evaluate an asset as replacement collateral.

        Args:
            asset: Candidate asset identifier
            collateral_value_usd: Current collateral USD value (1e18-scaled)
            strategy: Position owner's strategy
            debt: Outstanding debt (1e18-scaled)
            target_ratio: Minimum ratio the candidate must reach (bps)
            base_price: Current price of the base asset (1e18-scaled)
            market: Yields, fallback prices and decimals

        Returns:
            ScoredCandidate whose ratio is never below target_ratio

        Raises:
            InvalidInputError: A distinct subclass per violated precondition
        """
        self._validate(asset, collateral_value_usd, debt, target_ratio, base_price)

        yield_bps = market.yield_of(asset)
        volatility = self.classifier.classify(asset)
        price = self.unit_price(asset, volatility, base_price, market)
        decimals = market.decimals_of(asset, self.config.default_decimals)

        amount = RiskCalculator.amount_for_value(collateral_value_usd, price, decimals)
        value = RiskCalculator.collateral_value(amount, price, decimals)
        ratio = RiskCalculator.collateral_ratio(value, debt)

        if ratio < target_ratio:
            # Top up so the candidate never sits below target
            amount = RiskCalculator.amount_for_ratio(debt, target_ratio, price, decimals)
            ratio = target_ratio

        score = score_candidate(
            yield_bps=yield_bps,
            volatility=volatility,
            risk_tolerance=strategy.risk_tolerance,
            yield_prioritized=strategy.yield_prioritized,
            result_ratio=ratio,
            target_ratio=target_ratio,
            mcr_bps=self.config.mcr_bps,
        )

        logger.debug(
            f"Evaluated {asset}: amount={amount}, yield={yield_bps}bps, "
            f"vol={volatility}, ratio={ratio}bps, score={score}"
        )

        return ScoredCandidate(
            candidate=CandidateAllocation(
                asset=asset,
                amount=amount,
                yield_bps=yield_bps,
                volatility=volatility,
            ),
            score=score,
            ratio=ratio,
        )

    def unit_price(
        self,
        asset: str,
        volatility: int,
        base_price: int,
        market: MarketSnapshot,
    ) -> int:
        """
        Price used to size the candidate.

        The base asset uses the live base price. Other assets use their last
        known good price discounted by volatility * 1%.

        Raises:
            InvalidPriceError: If the fallback price is missing or non-positive
        """
        if self.classifier.is_base_asset(asset):
            return base_price

        fallback = market.last_good_price(asset)
        if fallback <= 0:
            raise InvalidPriceError(f"No valid fallback price for {asset}: {fallback}")

        discount = BPS - volatility * VOLATILITY_DISCOUNT_BPS
        price = apply_bps(fallback, discount)
        if price <= 0:
            raise InvalidPriceError(f"Discounted price for {asset} is not positive")
        return price

    def _validate(
        self,
        asset: str,
        collateral_value_usd: int,
        debt: int,
        target_ratio: int,
        base_price: int,
    ) -> None:
        if not asset:
            raise InvalidAssetError("Asset identifier is empty")
        if collateral_value_usd <= 0:
            raise InvalidCollateralValueError(
                f"Collateral value must be positive: {collateral_value_usd}"
            )
        if debt <= 0:
            raise InvalidDebtError(f"Debt must be positive: {debt}")
        if target_ratio < self.config.mcr_bps:
            raise TargetRatioBelowMinimumError(
                f"Target ratio {target_ratio} bps below MCR {self.config.mcr_bps} bps"
            )
        if base_price <= 0:
            raise InvalidPriceError(f"Base price must be positive: {base_price}")
