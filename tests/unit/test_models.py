"""Unit tests for strategy validation, the strategy registry and risk helpers."""

import pytest

from src.core.constants import WAD
from src.core.exceptions import InvalidStrategyError, StrategyNotFoundError
from src.core.models import Strategy
from src.data import StaticYieldSource, StrategyRegistry
from src.engine import RiskCalculator
from src.engine.fixed_point import mul_div_up


class TestStrategy:

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"permitted_assets": ()},
            {"permitted_assets": ("WETH", "WETH")},
            {"permitted_assets": ("WETH", "weth")},
            {"permitted_assets": ("WETH", "")},
            {"target_ltv_bps": 4999},
            {"target_ltv_bps": 9001},
            {"risk_tolerance": 0},
            {"risk_tolerance": 11},
            {"rebalance_threshold_bps": 49},
        ],
    )
    def test_rejects_invalid_fields(self, kwargs):
        fields = {"permitted_assets": ("WETH",), **kwargs}
        with pytest.raises(InvalidStrategyError):
            Strategy(**fields)

    def test_accepts_bounds(self):
        Strategy(permitted_assets=("WETH",), target_ltv_bps=5000, risk_tolerance=1,
                 rebalance_threshold_bps=50)
        Strategy(permitted_assets=("WETH",), target_ltv_bps=9000, risk_tolerance=10)

    def test_permitted_assets_keep_order(self):
        strategy = Strategy(permitted_assets=["rETH", "WETH", "cbETH"])
        assert strategy.permitted_assets == ("rETH", "WETH", "cbETH")

    def test_validate_supported_assets(self):
        strategy = Strategy(permitted_assets=("WETH", "PEPE"))
        with pytest.raises(InvalidStrategyError, match="PEPE"):
            strategy.validate({"WETH", "wstETH"})

    def test_dict_round_trip(self, strategy):
        assert Strategy.from_dict(strategy.to_dict()) == strategy


class TestStrategyRegistry:

    @pytest.fixture
    def registry(self, yield_source):
        return StrategyRegistry(yield_source)

    @pytest.mark.asyncio
    async def test_set_and_get(self, registry, strategy):
        await registry.set_strategy("0xalice", strategy)

        assert await registry.get_strategy("0xalice") == strategy
        assert await registry.get_strategy("0xbob") is None

    @pytest.mark.asyncio
    async def test_rejects_unsupported_assets(self, registry):
        with pytest.raises(InvalidStrategyError):
            await registry.set_strategy("0xalice", Strategy(permitted_assets=("PEPE",)))
        assert len(registry) == 0

    @pytest.mark.asyncio
    async def test_replaces_wholesale(self, registry, strategy):
        await registry.set_strategy("0xalice", strategy)
        replacement = Strategy(permitted_assets=("rETH",), risk_tolerance=9)
        await registry.set_strategy("0xalice", replacement)

        assert await registry.get_strategy("0xalice") == replacement
        assert len(registry) == 1

    @pytest.mark.asyncio
    async def test_supported_set_is_checked_at_write_time(self, strategy):
        source = StaticYieldSource({"WETH": 300}, supported={"WETH", "wstETH", "rETH"})
        registry = StrategyRegistry(source)

        await registry.set_strategy("0xalice", strategy)
        source.supported.discard("rETH")

        assert await registry.get_strategy("0xalice") == strategy

    @pytest.mark.asyncio
    async def test_remove(self, registry, strategy):
        await registry.set_strategy("0xalice", strategy)
        await registry.remove_strategy("0xalice")

        assert await registry.get_strategy("0xalice") is None
        with pytest.raises(StrategyNotFoundError):
            await registry.remove_strategy("0xalice")


class TestRiskCalculator:

    def test_collateral_value(self):
        assert RiskCalculator.collateral_value(10 * WAD, 2000 * WAD, 18) == 20_000 * WAD
        assert RiskCalculator.collateral_value(3 * 10**8, 60_000 * WAD, 8) == 180_000 * WAD

    def test_collateral_ratio(self):
        assert RiskCalculator.collateral_ratio(20_000 * WAD, 10_000 * WAD) == 20000
        assert RiskCalculator.collateral_ratio(20_000 * WAD, 0) == 0

    def test_ratio_from_ltv(self):
        assert RiskCalculator.ratio_from_ltv(8000) == 12500
        assert RiskCalculator.ratio_from_ltv(9000) == 11111
        assert RiskCalculator.ratio_from_ltv(0) == 0

    def test_amount_for_ratio_rounds_up(self):
        amount = RiskCalculator.amount_for_ratio(10_000 * WAD, 15000, 3 * WAD, 18)
        assert RiskCalculator.position_ratio(amount, 3 * WAD, 18, 10_000 * WAD) >= 15000
        assert RiskCalculator.position_ratio(amount - 1, 3 * WAD, 18, 10_000 * WAD) < 15000

    def test_mul_div_up(self):
        assert mul_div_up(10, 1, 3) == 4
        assert mul_div_up(9, 1, 3) == 3
        assert mul_div_up(0, 5, 3) == 0
