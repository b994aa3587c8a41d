"""Data layer: external collaborator interfaces and in-memory sources."""

from .sources.base import (
    PriceSource,
    YieldSource,
    PositionProvider,
    StrategyProvider,
    ExecutionCollaborator,
)
from .sources.static import (
    StaticPriceSource,
    StaticYieldSource,
    InMemoryPositionProvider,
    RecordingExecutor,
)
from .strategies import StrategyRegistry

__all__ = [
    # Interfaces
    "PriceSource",
    "YieldSource",
    "PositionProvider",
    "StrategyProvider",
    "ExecutionCollaborator",
    # In-memory
    "StaticPriceSource",
    "StaticYieldSource",
    "InMemoryPositionProvider",
    "RecordingExecutor",
    "StrategyRegistry",
]
