"""Optimization cycle outcome models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .allocation import CandidateAllocation, ScoredCandidate


class OptimizationAction(Enum):
    """Result of the decide step."""
    ACT = "act"                # Hand the swap to the execution collaborator
    NO_ACTION = "no_action"    # Keep current collateral


@dataclass(frozen=True)
class SwapRequest:
    """Payload handed to the execution collaborator for an ACT outcome."""
    position_id: str
    from_asset: str
    to_asset: str
    amount: int
    min_acceptable_amount: int

    def to_dict(self) -> dict:
        return {
            "position_id": self.position_id,
            "from_asset": self.from_asset,
            "to_asset": self.to_asset,
            "amount": str(self.amount),
            "min_acceptable_amount": str(self.min_acceptable_amount),
        }


@dataclass
class OptimizationOutcome:
    """Result of one optimization cycle for a position."""
    position_id: str
    action: OptimizationAction

    current: CandidateAllocation
    selection: ScoredCandidate
    target_ratio: int

    # Decision details
    improvement_bps: int = 0
    threshold_bps: int = 0
    reason: str = ""

    swap: Optional[SwapRequest] = None

    # None until the execution collaborator reports back
    executed: Optional[bool] = None

    @property
    def should_act(self) -> bool:
        return self.action == OptimizationAction.ACT

    def to_dict(self) -> dict:
        return {
            "position_id": self.position_id,
            "action": self.action.value,
            "current": self.current.to_dict(),
            "selection": self.selection.to_dict(),
            "target_ratio": self.target_ratio,
            "improvement_bps": self.improvement_bps,
            "threshold_bps": self.threshold_bps,
            "reason": self.reason,
            "swap": self.swap.to_dict() if self.swap else None,
            "executed": self.executed,
        }


@dataclass
class BatchSummary:
    """Aggregated counts from a batch of independent cycles."""
    processed: int = 0
    acted: int = 0
    skipped: int = 0
    executed: int = 0

    outcomes: List[OptimizationOutcome] = field(default_factory=list)
    errors: Dict[str, str] = field(default_factory=dict)  # position_id -> message

    def to_dict(self) -> dict:
        return {
            "processed": self.processed,
            "acted": self.acted,
            "skipped": self.skipped,
            "executed": self.executed,
            "outcomes": [o.to_dict() for o in self.outcomes],
            "errors": dict(self.errors),
        }
