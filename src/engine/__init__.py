"""Collateral evaluation engine components."""

from .config import EngineConfig
from .risk import RiskCalculator
from .volatility import VolatilityClassifier, same_asset
from .scoring import score_candidate
from .evaluator import CandidateEvaluator
from .selector import CandidateSelector
from .decision import RebalanceDecision, DecisionReport

__all__ = [
    "EngineConfig",
    "RiskCalculator",
    "VolatilityClassifier",
    "same_asset",
    "score_candidate",
    "CandidateEvaluator",
    "CandidateSelector",
    "RebalanceDecision",
    "DecisionReport",
]
