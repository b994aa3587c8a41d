"""In-memory collaborator implementations.

Back local runs and tests with fixed market data and positions.
"""

import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple

from src.core.models import PositionSnapshot, SwapRequest
from src.data.sources.base import (
    ExecutionCollaborator,
    PositionProvider,
    PriceSource,
    YieldSource,
)

logger = logging.getLogger(__name__)


class StaticPriceSource(PriceSource):
    """Prices from fixed tables. Assets in `stale` report ok=False."""

    def __init__(
        self,
        prices: Dict[str, int],
        last_good: Optional[Dict[str, int]] = None,
        stale: Iterable[str] = (),
    ):
        self.prices = dict(prices)
        self.last_good = dict(last_good) if last_good is not None else dict(prices)
        self.stale: Set[str] = set(stale)

    async def current_price(self, asset: str) -> Tuple[int, bool]:
        price = self.prices.get(asset, 0)
        return price, asset not in self.stale and price > 0

    async def last_good_price(self, asset: str) -> int:
        return self.last_good.get(asset, 0)


class StaticYieldSource(YieldSource):
    """Yields and decimals from fixed tables."""

    def __init__(
        self,
        yields: Dict[str, int],
        decimals: Optional[Dict[str, int]] = None,
        supported: Optional[Iterable[str]] = None,
    ):
        self.yields = dict(yields)
        self.decimals = dict(decimals or {})
        self.supported: Set[str] = set(supported) if supported is not None else set(yields)

    async def get_yield(self, asset: str) -> int:
        return self.yields.get(asset, 0)

    async def supported_assets(self) -> Set[str]:
        return set(self.supported)

    async def get_decimals(self, asset: str) -> Optional[int]:
        return self.decimals.get(asset)


class InMemoryPositionProvider(PositionProvider):
    """Positions held in a dict keyed by position id."""

    def __init__(self, positions: Iterable[PositionSnapshot] = ()):
        self.positions: Dict[str, PositionSnapshot] = {p.position_id: p for p in positions}

    def put(self, position: PositionSnapshot) -> None:
        self.positions[position.position_id] = position

    async def get_position(self, position_id: str) -> Optional[PositionSnapshot]:
        return self.positions.get(position_id)


class RecordingExecutor(ExecutionCollaborator):
    """Records swap requests and reports a fixed result."""

    def __init__(self, succeed: bool = True, fail_for: Iterable[str] = ()):
        self.succeed = succeed
        self.fail_for: Set[str] = set(fail_for)
        self.requests: List[SwapRequest] = []

    async def execute_swap(self, request: SwapRequest) -> bool:
        self.requests.append(request)
        ok = self.succeed and request.position_id not in self.fail_for
        logger.info(
            f"Swap {request.from_asset} -> {request.to_asset} for "
            f"{request.position_id}: {'ok' if ok else 'failed'}"
        )
        return ok
