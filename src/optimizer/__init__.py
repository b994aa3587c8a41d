"""Optimization orchestration for collateral positions."""

from .orchestrator import CollateralOptimizer

__all__ = ["CollateralOptimizer"]
