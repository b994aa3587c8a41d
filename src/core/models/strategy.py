"""User optimization strategy model."""

from dataclasses import dataclass
from typing import AbstractSet, Any, Dict, Optional, Tuple

from src.core.constants import (
    MIN_TARGET_LTV_BPS,
    MAX_TARGET_LTV_BPS,
    MIN_RISK_TOLERANCE,
    MAX_RISK_TOLERANCE,
    MIN_REBALANCE_THRESHOLD_BPS,
)
from src.core.exceptions import InvalidStrategyError


@dataclass(frozen=True)
class Strategy:
    """
    Per-user collateral optimization preferences.

    A strategy is replaced wholesale, never partially updated. Field ranges
    are checked on construction; membership of the permitted assets in the
    protocol's supported set is checked by validate() at write time.
    """

    permitted_assets: Tuple[str, ...]
    risk_tolerance: int = 5
    yield_prioritized: bool = False
    rebalance_threshold_bps: int = 100

    # None means no target: the selector then keeps a small buffer above
    # the current ratio instead of deriving one from the LTV.
    target_ltv_bps: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "permitted_assets", tuple(self.permitted_assets))

        if not self.permitted_assets:
            raise InvalidStrategyError("Strategy must permit at least one asset", "permitted_assets")
        if any(not asset for asset in self.permitted_assets):
            raise InvalidStrategyError("Permitted assets must be non-empty identifiers", "permitted_assets")
        if len({asset.lower() for asset in self.permitted_assets}) != len(self.permitted_assets):
            raise InvalidStrategyError("Permitted assets contain duplicates", "permitted_assets")

        if self.target_ltv_bps is not None and not (
            MIN_TARGET_LTV_BPS <= self.target_ltv_bps <= MAX_TARGET_LTV_BPS
        ):
            raise InvalidStrategyError(
                f"Target LTV {self.target_ltv_bps} bps outside "
                f"[{MIN_TARGET_LTV_BPS}, {MAX_TARGET_LTV_BPS}]",
                "target_ltv_bps",
            )
        if not MIN_RISK_TOLERANCE <= self.risk_tolerance <= MAX_RISK_TOLERANCE:
            raise InvalidStrategyError(
                f"Risk tolerance {self.risk_tolerance} outside "
                f"[{MIN_RISK_TOLERANCE}, {MAX_RISK_TOLERANCE}]",
                "risk_tolerance",
            )
        if self.rebalance_threshold_bps < MIN_REBALANCE_THRESHOLD_BPS:
            raise InvalidStrategyError(
                f"Rebalance threshold {self.rebalance_threshold_bps} bps below "
                f"minimum {MIN_REBALANCE_THRESHOLD_BPS}",
                "rebalance_threshold_bps",
            )

    @property
    def has_target_ltv(self) -> bool:
        return self.target_ltv_bps is not None and self.target_ltv_bps > 0

    def validate(self, supported_assets: AbstractSet[str]) -> None:
        """Check every permitted asset is supported by the protocol.

        Raises:
            InvalidStrategyError: If any permitted asset is unsupported
        """
        unsupported = [a for a in self.permitted_assets if a not in supported_assets]
        if unsupported:
            raise InvalidStrategyError(
                f"Unsupported assets in strategy: {', '.join(unsupported)}",
                "permitted_assets",
            )

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "permitted_assets": list(self.permitted_assets),
            "risk_tolerance": self.risk_tolerance,
            "yield_prioritized": self.yield_prioritized,
            "rebalance_threshold_bps": self.rebalance_threshold_bps,
            "target_ltv_bps": self.target_ltv_bps,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Strategy":
        """Deserialize from dictionary."""
        target = data.get("target_ltv_bps")
        return cls(
            permitted_assets=tuple(data.get("permitted_assets", ())),
            risk_tolerance=int(data.get("risk_tolerance", 5)),
            yield_prioritized=bool(data.get("yield_prioritized", False)),
            rebalance_threshold_bps=int(data.get("rebalance_threshold_bps", 100)),
            target_ltv_bps=int(target) if target is not None else None,
        )
