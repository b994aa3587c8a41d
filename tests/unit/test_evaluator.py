"""Unit tests for CandidateEvaluator."""

import pytest

from src.core.constants import WAD
from src.core.exceptions import (
    InvalidAssetError,
    InvalidCollateralValueError,
    InvalidDebtError,
    InvalidInputError,
    InvalidPriceError,
    TargetRatioBelowMinimumError,
)
from src.core.models import MarketSnapshot
from src.engine import RiskCalculator

VALUE = 20_000 * WAD
DEBT = 10_000 * WAD
BASE_PRICE = 2000 * WAD


def run(evaluator, strategy, market, asset="wstETH", value=VALUE, debt=DEBT,
        target=14000, base_price=BASE_PRICE):
    return evaluator.evaluate(asset, value, strategy, debt, target, base_price, market)


class TestPricing:

    def test_base_asset_uses_live_price(self, evaluator, market):
        assert evaluator.unit_price("WETH", 3, 1234 * WAD, market) == 1234 * WAD

    def test_other_assets_discounted_by_volatility(self, evaluator, market):
        # wstETH volatility 2 -> 98% of the last good price
        assert evaluator.unit_price("wstETH", 2, BASE_PRICE, market) == 2254 * WAD

    def test_missing_fallback_price(self, evaluator, market):
        with pytest.raises(InvalidPriceError):
            evaluator.unit_price("UNKNOWN", 7, BASE_PRICE, market)


class TestEvaluate:

    def test_preserves_usd_value(self, evaluator, strategy, market):
        result = run(evaluator, strategy, market)

        assert result.ok
        candidate = result.scored.candidate
        assert candidate.asset == "wstETH"
        assert candidate.amount == VALUE * 10**18 // (2254 * WAD)
        assert candidate.yield_bps == 450
        assert candidate.volatility == 2
        assert 19990 <= result.scored.ratio <= 20000
        assert result.score > 0

    def test_base_asset_amount(self, evaluator, strategy, market):
        result = run(evaluator, strategy, market, asset="WETH")

        assert result.scored.candidate.amount == 10 * WAD
        assert result.scored.ratio == 20000

    def test_honours_decimals(self, evaluator, strategy):
        market = MarketSnapshot(
            base_price=BASE_PRICE,
            yields={"WBTC": 100},
            last_good_prices={"WBTC": 60_000 * WAD},
            decimals={"WBTC": 8},
        )
        result = run(evaluator, strategy, market, asset="WBTC")

        # Unknown volatility 7 -> 93% of 60000 = 55800
        assert result.scored.candidate.amount == 35_842_293
        assert result.scored.candidate.volatility == 7

    def test_tops_up_to_target_ratio(self, evaluator, strategy, market):
        result = run(evaluator, strategy, market, target=25000)

        scored = result.scored
        assert scored.ratio == 25000
        price = 2254 * WAD
        actual = RiskCalculator.position_ratio(scored.candidate.amount, price, 18, DEBT)
        assert actual >= 25000
        # Smallest such amount
        below = RiskCalculator.position_ratio(scored.candidate.amount - 1, price, 18, DEBT)
        assert below < 25000

    def test_ratio_never_below_target(self, evaluator, strategy, market):
        for target in range(11000, 40001, 1500):
            for asset in ("WETH", "wstETH", "rETH", "cbETH"):
                result = run(evaluator, strategy, market, asset=asset, target=target)
                assert result.scored.ratio >= target

    def test_unknown_yield_scores_zero(self, evaluator, strategy):
        market = MarketSnapshot(base_price=BASE_PRICE, last_good_prices={"NEW": 10 * WAD})
        result = run(evaluator, strategy, market, asset="NEW")

        assert result.ok
        assert result.score == 0


class TestValidation:

    @pytest.mark.parametrize(
        "kwargs, error",
        [
            ({"asset": ""}, InvalidAssetError),
            ({"value": 0}, InvalidCollateralValueError),
            ({"value": -1}, InvalidCollateralValueError),
            ({"debt": 0}, InvalidDebtError),
            ({"target": 10999}, TargetRatioBelowMinimumError),
            ({"base_price": 0}, InvalidPriceError),
            ({"asset": "UNKNOWN"}, InvalidPriceError),
        ],
    )
    def test_failures_carried_in_result(self, evaluator, strategy, market, kwargs, error):
        result = run(evaluator, strategy, market, **kwargs)

        assert not result.ok
        assert isinstance(result.error, error)
        assert result.score == 0
        with pytest.raises(error):
            result.unwrap()

    def test_evaluate_or_raise(self, evaluator, strategy, market):
        with pytest.raises(InvalidDebtError):
            evaluator.evaluate_or_raise("wstETH", VALUE, strategy, 0, 14000, BASE_PRICE, market)


class TestMarketSnapshot:

    def test_rejects_negative_decimals(self):
        with pytest.raises(InvalidInputError):
            MarketSnapshot(base_price=BASE_PRICE, decimals={"WBTC": -8})

    def test_zero_decimals_allowed(self):
        market = MarketSnapshot(base_price=BASE_PRICE, decimals={"NFT": 0})
        assert market.decimals_of("NFT", 18) == 0
