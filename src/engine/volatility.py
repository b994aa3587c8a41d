"""Volatility classification for collateral assets."""

from typing import Dict

from src.engine.config import EngineConfig


def same_asset(a: str, b: str) -> bool:
    """Asset identifiers compare case-insensitively."""
    return (a or "").lower() == (b or "").lower()


class VolatilityClassifier:
    """
    Static lookup of asset volatility scores (1 = calmest, 10 = wildest).

    The base asset has its own score, known liquid-staking derivatives
    come from the injectable override table (matched case-insensitively),
    and anything else gets the conservative default.
    """

    def __init__(self, config: EngineConfig):
        self.config = config
        self._table: Dict[str, int] = {
            asset.lower(): score for asset, score in config.volatility_overrides.items()
        }
        self._base = config.base_asset.lower()

    def classify(self, asset: str) -> int:
        """Return the volatility score for an asset. Never fails."""
        key = (asset or "").lower()
        if key == self._base:
            return self.config.base_volatility
        return self._table.get(key, self.config.default_volatility)

    def is_base_asset(self, asset: str) -> bool:
        return (asset or "").lower() == self._base
