"""Unit tests for CandidateSelector."""

from dataclasses import replace

import pytest

from src.core.constants import WAD
from src.core.exceptions import InvalidInputError, InvalidPriceError
from src.core.models import MarketSnapshot, Strategy

MARKET_PRICE = 2000 * WAD


class TestTargetRatio:

    @pytest.mark.parametrize(
        "ltv, current, expected",
        [
            (8000, 12500, 13000),   # 12500 + 500 margin
            (8000, 13000, 13000),   # Not strictly above target
            (8000, 13500, 13500),   # Safe user keeps own ratio
            (8000, 20000, 20000),
            (9000, 11900, 11611),   # Above target but within 1000 bps of MCR
            (9000, 12100, 12100),
            (5000, 15000, 20500),
        ],
    )
    def test_from_ltv(self, selector, strategy, ltv, current, expected):
        strategy = replace(strategy, target_ltv_bps=ltv)
        assert selector.derive_target_ratio(strategy, current) == expected

    def test_without_target_ltv(self, selector, strategy):
        strategy = replace(strategy, target_ltv_bps=None)
        assert selector.derive_target_ratio(strategy, 15000) == 15200


class TestSelectBest:

    def test_picks_highest_score(self, selector, weth_position, strategy, market):
        selection = selector.select_best(weth_position, strategy, MARKET_PRICE, 20000, market)

        assert selection.best.asset == "wstETH"
        assert not selection.keeps_current
        assert selection.baseline.asset == "WETH"
        assert selection.baseline.is_baseline
        assert selection.best.score > selection.baseline.score
        assert selection.target_ratio == 20000
        assert selection.evaluated == 2
        assert selection.skipped == 0

    def test_candidate_never_below_target(self, selector, weth_position, market):
        for ltv in (5000, 6500, 8000, 9000, None):
            for permitted in (("wstETH",), ("rETH", "cbETH"), ("WETH", "wstETH", "rETH", "cbETH")):
                strategy = Strategy(permitted_assets=permitted, target_ltv_bps=ltv)
                for current in (12100, 15000, 20000):
                    selection = selector.select_best(
                        weth_position, strategy, MARKET_PRICE, current, market
                    )
                    if not selection.best.is_baseline:
                        assert selection.best.ratio >= selection.target_ratio

    def test_baseline_kept_when_nothing_scores_higher(self, selector, weth_position, market):
        strategy = Strategy(permitted_assets=("cbETH",), yield_prioritized=True, target_ltv_bps=8000)
        market = replace(market, yields={**market.yields, "cbETH": 10})

        selection = selector.select_best(weth_position, strategy, MARKET_PRICE, 20000, market)

        assert selection.keeps_current
        assert selection.best.asset == "WETH"
        assert selection.best.candidate.amount == weth_position.collateral

    def test_failed_evaluations_are_skipped(self, selector, weth_position, market):
        strategy = Strategy(permitted_assets=("UNKNOWN", "rETH", "MISSING"), target_ltv_bps=8000)

        selection = selector.select_best(weth_position, strategy, MARKET_PRICE, 20000, market)

        assert selection.skipped == 2
        assert selection.evaluated == 1
        assert selection.best.asset == "rETH"

    def test_all_failures_fall_back_to_baseline(self, selector, weth_position, market):
        strategy = Strategy(permitted_assets=("UNKNOWN",), target_ltv_bps=8000)

        selection = selector.select_best(weth_position, strategy, MARKET_PRICE, 20000, market)

        assert selection.best.is_baseline
        assert selection.skipped == 1

    def test_ties_keep_first_encountered(self, selector, weth_position):
        market = MarketSnapshot(
            base_price=MARKET_PRICE,
            yields={"WETH": 300, "rETH": 400, "cbETH": 400},
            last_good_prices={"WETH": MARKET_PRICE, "rETH": 2200 * WAD, "cbETH": 2200 * WAD},
        )
        forward = Strategy(permitted_assets=("cbETH", "rETH"), target_ltv_bps=8000)
        backward = Strategy(permitted_assets=("rETH", "cbETH"), target_ltv_bps=8000)

        first = selector.select_best(weth_position, forward, MARKET_PRICE, 20000, market)
        second = selector.select_best(weth_position, backward, MARKET_PRICE, 20000, market)

        assert first.best.score == second.best.score
        assert first.best.asset == "cbETH"
        assert second.best.asset == "rETH"

    def test_current_asset_skipped_regardless_of_case(self, selector, weth_position, market):
        strategy = Strategy(permitted_assets=("weth",), target_ltv_bps=8000)

        selection = selector.select_best(weth_position, strategy, MARKET_PRICE, 20000, market)

        assert selection.keeps_current
        assert selection.evaluated == 0
        assert selection.skipped == 0

    def test_idempotent(self, selector, weth_position, strategy, market):
        first = selector.select_best(weth_position, strategy, MARKET_PRICE, 20000, market)
        second = selector.select_best(weth_position, strategy, MARKET_PRICE, 20000, market)

        assert first == second


class TestPreconditions:

    def test_market_price_must_be_positive(self, selector, weth_position, strategy, market):
        with pytest.raises(InvalidPriceError):
            selector.select_best(weth_position, strategy, 0, 20000, market)

    def test_current_ratio_must_clear_mcr(self, selector, weth_position, strategy, market):
        with pytest.raises(InvalidInputError):
            selector.select_best(weth_position, strategy, MARKET_PRICE, 10999, market)

    def test_position_needs_collateral_and_debt(self, selector, weth_position, strategy, market):
        empty = replace(weth_position, collateral=0)
        with pytest.raises(InvalidInputError):
            selector.select_best(empty, strategy, MARKET_PRICE, 20000, market)

        no_debt = replace(weth_position, debt=0)
        with pytest.raises(InvalidInputError):
            selector.select_best(no_debt, strategy, MARKET_PRICE, 20000, market)
