"""Core data models for Collateral Optimizer."""

from .strategy import Strategy
from .position import PositionSnapshot
from .market import MarketSnapshot
from .allocation import CandidateAllocation, ScoredCandidate, EvaluationResult, Selection
from .outcome import OptimizationAction, SwapRequest, OptimizationOutcome, BatchSummary

__all__ = [
    "Strategy",
    "PositionSnapshot",
    "MarketSnapshot",
    "CandidateAllocation",
    "ScoredCandidate",
    "EvaluationResult",
    "Selection",
    "OptimizationAction",
    "SwapRequest",
    "OptimizationOutcome",
    "BatchSummary",
]
