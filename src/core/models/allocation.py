"""Candidate allocation and evaluation result models."""

from dataclasses import dataclass
from typing import Optional

from src.core.exceptions import InvalidInputError


@dataclass(frozen=True)
class CandidateAllocation:
    """A proposed collateral allocation under evaluation."""
    asset: str
    amount: int  # Native decimals of the asset
    yield_bps: int
    volatility: int  # 1-10

    def to_dict(self) -> dict:
        return {
            "asset": self.asset,
            "amount": str(self.amount),
            "yield_bps": self.yield_bps,
            "volatility": self.volatility,
        }


@dataclass(frozen=True)
class ScoredCandidate:
    """A candidate together with its score and resulting safety ratio."""
    candidate: CandidateAllocation
    score: int  # 0 = never select
    ratio: int  # Resulting collateral ratio (bps)
    is_baseline: bool = False

    @property
    def asset(self) -> str:
        return self.candidate.asset

    def to_dict(self) -> dict:
        return {
            "candidate": self.candidate.to_dict(),
            "score": self.score,
            "ratio": self.ratio,
            "is_baseline": self.is_baseline,
        }


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of evaluating one asset: a scored candidate or a typed failure."""
    asset: str
    scored: Optional[ScoredCandidate] = None
    error: Optional[InvalidInputError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.scored is not None

    @property
    def score(self) -> int:
        return self.scored.score if self.scored else 0

    @classmethod
    def success(cls, scored: ScoredCandidate) -> "EvaluationResult":
        return cls(asset=scored.asset, scored=scored)

    @classmethod
    def failure(cls, asset: str, error: InvalidInputError) -> "EvaluationResult":
        return cls(asset=asset, error=error)

    def unwrap(self) -> ScoredCandidate:
        """Return the scored candidate or raise the carried error."""
        if self.error is not None:
            raise self.error
        if self.scored is None:
            raise InvalidInputError(f"No evaluation for {self.asset}")
        return self.scored


@dataclass(frozen=True)
class Selection:
    """Best candidate found for a position, with the baseline it beat."""
    best: ScoredCandidate
    baseline: ScoredCandidate
    target_ratio: int

    evaluated: int = 0  # Alternate assets evaluated successfully
    skipped: int = 0    # Alternate assets whose evaluation failed

    @property
    def keeps_current(self) -> bool:
        return self.best.is_baseline

    def to_dict(self) -> dict:
        return {
            "best": self.best.to_dict(),
            "baseline": self.baseline.to_dict(),
            "target_ratio": self.target_ratio,
            "evaluated": self.evaluated,
            "skipped": self.skipped,
        }
