"""Market data snapshot consumed by one evaluation cycle."""

from dataclasses import dataclass, field
from typing import Dict

from src.core.exceptions import InvalidInputError


@dataclass(frozen=True)
class MarketSnapshot:
    """
    Prices, yields and decimals supplied by external sources.

    Prices are 1e18-scaled USD per whole token. The engine reads this
    snapshot only; it never fetches market data itself.
    """

    # Current price of the designated base asset
    base_price: int

    # Per-asset data
    yields: Dict[str, int] = field(default_factory=dict)  # bps
    last_good_prices: Dict[str, int] = field(default_factory=dict)
    decimals: Dict[str, int] = field(default_factory=dict)

    def __post_init__(self):
        for asset, asset_decimals in self.decimals.items():
            if asset_decimals < 0:
                raise InvalidInputError(
                    f"Decimals for {asset} must be non-negative: {asset_decimals}", "decimals"
                )

    def yield_of(self, asset: str) -> int:
        """Yield in bps; unknown assets yield nothing."""
        return self.yields.get(asset, 0)

    def last_good_price(self, asset: str) -> int:
        return self.last_good_prices.get(asset, 0)

    def decimals_of(self, asset: str, default: int) -> int:
        return self.decimals.get(asset, default)

    def to_dict(self) -> dict:
        return {
            "base_price": str(self.base_price),
            "yields": dict(self.yields),
            "last_good_prices": {k: str(v) for k, v in self.last_good_prices.items()},
            "decimals": dict(self.decimals),
        }
