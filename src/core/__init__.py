"""Core module - models, constants and errors."""

from .models import (
    Strategy,
    PositionSnapshot,
    MarketSnapshot,
    CandidateAllocation,
    ScoredCandidate,
    EvaluationResult,
    OptimizationAction,
    SwapRequest,
    OptimizationOutcome,
    BatchSummary,
)
from .constants import WAD, BPS
from .exceptions import EngineError, InvalidInputError, GateRejectedError

__all__ = [
    "Strategy",
    "PositionSnapshot",
    "MarketSnapshot",
    "CandidateAllocation",
    "ScoredCandidate",
    "EvaluationResult",
    "OptimizationAction",
    "SwapRequest",
    "OptimizationOutcome",
    "BatchSummary",
    "WAD",
    "BPS",
    "EngineError",
    "InvalidInputError",
    "GateRejectedError",
]
