"""Explicit engine configuration.

Protocol parameters travel with every call as an EngineConfig value, so
the engine is a pure function of its inputs.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from config.settings import Settings, get_settings
from src.core.constants import (
    MIN_VOLATILITY,
    MAX_VOLATILITY,
    DEFAULT_MCR_BPS,
    DEFAULT_SAFETY_MARGIN_BPS,
    NO_TARGET_BUFFER_BPS,
    SAFE_USER_BUFFER_BPS,
    DEFAULT_GATE_BUFFER_PCT,
    DEFAULT_MIN_IMPROVEMENT_BPS,
    DEFAULT_MAX_THRESHOLD_BPS,
    DEFAULT_BASE_ASSET,
    DEFAULT_DECIMALS,
    DEFAULT_VOLATILITY,
    BASE_ASSET_VOLATILITY,
    DEFAULT_VOLATILITY_OVERRIDES,
    DEFAULT_MAX_SLIPPAGE_BPS,
)
from src.core.exceptions import InvalidInputError


@dataclass(frozen=True)
class EngineConfig:
    """Protocol-wide parameters for one evaluation cycle."""

    # Safety ratios (bps)
    mcr_bps: int = DEFAULT_MCR_BPS
    safety_margin_bps: int = DEFAULT_SAFETY_MARGIN_BPS
    no_target_buffer_bps: int = NO_TARGET_BUFFER_BPS
    safe_user_buffer_bps: int = SAFE_USER_BUFFER_BPS
    gate_buffer_pct: int = DEFAULT_GATE_BUFFER_PCT

    # Rebalancing thresholds (bps)
    min_improvement_bps: int = DEFAULT_MIN_IMPROVEMENT_BPS
    max_threshold_bps: int = DEFAULT_MAX_THRESHOLD_BPS
    max_slippage_bps: int = DEFAULT_MAX_SLIPPAGE_BPS

    # Assets
    base_asset: str = DEFAULT_BASE_ASSET
    default_decimals: int = DEFAULT_DECIMALS
    default_volatility: int = DEFAULT_VOLATILITY
    base_volatility: int = BASE_ASSET_VOLATILITY
    volatility_overrides: Dict[str, int] = field(
        default_factory=lambda: dict(DEFAULT_VOLATILITY_OVERRIDES)
    )

    def __post_init__(self):
        if self.mcr_bps <= 0:
            raise InvalidInputError(f"MCR must be positive: {self.mcr_bps}", "mcr_bps")
        if not self.base_asset:
            raise InvalidInputError("Base asset must be set", "base_asset")

        scores = dict(self.volatility_overrides)
        scores["default_volatility"] = self.default_volatility
        scores["base_volatility"] = self.base_volatility
        for name, score in scores.items():
            if not MIN_VOLATILITY <= score <= MAX_VOLATILITY:
                raise InvalidInputError(
                    f"Volatility for {name} outside [{MIN_VOLATILITY}, {MAX_VOLATILITY}]: {score}",
                    "volatility_overrides",
                )

    @property
    def gate_ratio_bps(self) -> int:
        """Lowest ratio at which the safety gate lets a cycle through."""
        return self.mcr_bps * self.gate_buffer_pct // 100

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "EngineConfig":
        """Build config from application settings."""
        settings = settings or get_settings()
        return cls(
            mcr_bps=settings.mcr_bps,
            safety_margin_bps=settings.safety_margin_bps,
            gate_buffer_pct=settings.gate_buffer_pct,
            min_improvement_bps=settings.min_improvement_bps,
            max_threshold_bps=settings.max_threshold_bps,
            max_slippage_bps=settings.max_slippage_bps,
            base_asset=settings.base_asset,
            default_decimals=settings.default_decimals,
            default_volatility=settings.default_volatility,
            base_volatility=settings.base_volatility,
            volatility_overrides=dict(settings.volatility_overrides),
        )
