"""Strategy registry with write-time validation.

Strategies are validated against the protocol's supported assets when
written, so the engine can assume them valid when reading.
"""

import logging
from typing import Dict, Optional

from src.core.exceptions import StrategyNotFoundError
from src.core.models import Strategy
from src.data.sources.base import StrategyProvider, YieldSource

logger = logging.getLogger(__name__)


class StrategyRegistry(StrategyProvider):
    """In-memory store of one strategy per owner."""

    def __init__(self, yields: YieldSource):
        self.yields = yields
        self._strategies: Dict[str, Strategy] = {}

    async def set_strategy(self, owner: str, strategy: Strategy) -> None:
        """Validate and store a strategy, replacing any previous one.

        Raises:
            InvalidStrategyError: If a permitted asset is unsupported
        """
        supported = await self.yields.supported_assets()
        strategy.validate(supported)
        replaced = owner in self._strategies
        self._strategies[owner] = strategy
        logger.info(
            f"{'Replaced' if replaced else 'Set'} strategy for {owner}: "
            f"{len(strategy.permitted_assets)} assets, risk={strategy.risk_tolerance}"
        )

    async def remove_strategy(self, owner: str) -> None:
        if owner not in self._strategies:
            raise StrategyNotFoundError(f"No strategy for {owner}")
        del self._strategies[owner]

    async def get_strategy(self, owner: str) -> Optional[Strategy]:
        return self._strategies.get(owner)

    def __len__(self) -> int:
        return len(self._strategies)
