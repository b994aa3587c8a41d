"""External collaborator interfaces.

Defines the abstract interfaces the optimizer consumes for prices, yields,
positions, strategies and swap execution. The engine validates what these
return but never implements them itself.
"""

from abc import ABC, abstractmethod
from typing import Optional, Set, Tuple

from src.core.models import PositionSnapshot, Strategy, SwapRequest


class PriceSource(ABC):
    """Source of USD prices, 1e18-scaled per whole token."""

    @abstractmethod
    async def current_price(self, asset: str) -> Tuple[int, bool]:
        """Fetch the live price of an asset.

        Args:
            asset: Asset identifier

        Returns:
            (price, ok) where ok is False if the live feed is unusable
        """
        ...

    @abstractmethod
    async def last_good_price(self, asset: str) -> int:
        """Fetch the last price that passed the feed's sanity checks.

        Args:
            asset: Asset identifier

        Returns:
            Price, or 0 if none is known
        """
        ...


class YieldSource(ABC):
    """Source of collateral yields and the supported asset set."""

    @abstractmethod
    async def get_yield(self, asset: str) -> int:
        """Fetch the current yield of an asset in bps."""
        ...

    @abstractmethod
    async def supported_assets(self) -> Set[str]:
        """Return the assets the protocol accepts as collateral."""
        ...

    async def get_decimals(self, asset: str) -> Optional[int]:
        """Return the asset's decimals if known.

        Override this method if the source tracks token metadata.
        """
        return None


class PositionProvider(ABC):
    """Read-only access to position snapshots."""

    @abstractmethod
    async def get_position(self, position_id: str) -> Optional[PositionSnapshot]:
        """Fetch a fresh snapshot, or None if the position does not exist."""
        ...


class StrategyProvider(ABC):
    """Read-only access to user strategies."""

    @abstractmethod
    async def get_strategy(self, owner: str) -> Optional[Strategy]:
        """Fetch the owner's strategy, or None if they have not set one."""
        ...


class ExecutionCollaborator(ABC):
    """Performs the actual collateral swap for an ACT outcome."""

    @abstractmethod
    async def execute_swap(self, request: SwapRequest) -> bool:
        """Perform the swap.

        Args:
            request: Swap to perform

        Returns:
            True if the swap succeeded
        """
        ...
