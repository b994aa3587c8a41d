"""Pytest configuration and fixtures."""

import pytest

from config.settings import Settings
from src.core.constants import WAD
from src.core.models import MarketSnapshot, PositionSnapshot, Strategy
from src.data import (
    InMemoryPositionProvider,
    RecordingExecutor,
    StaticPriceSource,
    StaticYieldSource,
)
from src.engine import (
    CandidateEvaluator,
    CandidateSelector,
    EngineConfig,
    RebalanceDecision,
    VolatilityClassifier,
)

PRICES = {
    "WETH": 2000 * WAD,
    "wstETH": 2300 * WAD,
    "rETH": 2200 * WAD,
    "cbETH": 2100 * WAD,
}

YIELDS = {
    "WETH": 300,
    "wstETH": 450,
    "rETH": 380,
    "cbETH": 320,
}


@pytest.fixture
def engine_config() -> EngineConfig:
    """Default protocol parameters (MCR 110%, WETH base asset)."""
    return EngineConfig()


@pytest.fixture
def classifier(engine_config) -> VolatilityClassifier:
    return VolatilityClassifier(engine_config)


@pytest.fixture
def evaluator(engine_config, classifier) -> CandidateEvaluator:
    return CandidateEvaluator(engine_config, classifier)


@pytest.fixture
def selector(engine_config, evaluator) -> CandidateSelector:
    return CandidateSelector(engine_config, evaluator)


@pytest.fixture
def decision(engine_config) -> RebalanceDecision:
    return RebalanceDecision(engine_config)


@pytest.fixture
def market() -> MarketSnapshot:
    """Market data with WETH as the base asset."""
    return MarketSnapshot(
        base_price=PRICES["WETH"],
        yields=dict(YIELDS),
        last_good_prices=dict(PRICES),
        decimals={asset: 18 for asset in PRICES},
    )


@pytest.fixture
def weth_position() -> PositionSnapshot:
    """10 WETH at $2000 backing $10k of debt (200% ratio)."""
    return PositionSnapshot(
        position_id="pos-1",
        owner="0xalice",
        debt=10_000 * WAD,
        collateral=10 * WAD,
        asset="WETH",
        current_ratio=20000,
    )


@pytest.fixture
def strategy() -> Strategy:
    return Strategy(
        permitted_assets=("WETH", "wstETH", "rETH"),
        risk_tolerance=5,
        yield_prioritized=True,
        rebalance_threshold_bps=200,
        target_ltv_bps=8000,
    )


@pytest.fixture
def test_settings() -> Settings:
    """Settings independent of the local environment."""
    return Settings(_env_file=None, batch_rate_limit=1000, batch_rate_window=1.0)


@pytest.fixture
def price_source() -> StaticPriceSource:
    return StaticPriceSource(PRICES)


@pytest.fixture
def yield_source() -> StaticYieldSource:
    return StaticYieldSource(YIELDS, decimals={asset: 18 for asset in YIELDS})


@pytest.fixture
def position_provider(weth_position) -> InMemoryPositionProvider:
    return InMemoryPositionProvider([weth_position])


@pytest.fixture
def executor() -> RecordingExecutor:
    return RecordingExecutor()
