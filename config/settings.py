"""Pydantic settings for Collateral Optimizer configuration."""

from functools import lru_cache
from typing import Annotated, Dict

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from src.core.constants import (
    DEFAULT_MCR_BPS,
    DEFAULT_SAFETY_MARGIN_BPS,
    DEFAULT_GATE_BUFFER_PCT,
    DEFAULT_BASE_ASSET,
    DEFAULT_DECIMALS,
    DEFAULT_VOLATILITY,
    BASE_ASSET_VOLATILITY,
    DEFAULT_VOLATILITY_OVERRIDES,
    DEFAULT_MIN_IMPROVEMENT_BPS,
    DEFAULT_MAX_THRESHOLD_BPS,
    DEFAULT_MAX_SLIPPAGE_BPS,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Protocol safety parameters (basis points)
    mcr_bps: int = Field(default=DEFAULT_MCR_BPS, ge=10000, le=30000, description="Minimum collateralization ratio")
    safety_margin_bps: int = Field(
        default=DEFAULT_SAFETY_MARGIN_BPS, ge=0, le=5000, description="Buffer added to the LTV-derived target ratio"
    )
    gate_buffer_pct: int = Field(default=DEFAULT_GATE_BUFFER_PCT, ge=100, le=200, description="Safety gate as % of MCR")

    # Collateral assets
    base_asset: str = Field(default=DEFAULT_BASE_ASSET, description="Designated base collateral asset")
    default_decimals: int = Field(default=DEFAULT_DECIMALS, ge=0, le=36, description="Decimals for unlisted assets")
    default_volatility: int = Field(default=DEFAULT_VOLATILITY, ge=1, le=10, description="Score for unrecognized assets")
    base_volatility: int = Field(default=BASE_ASSET_VOLATILITY, ge=1, le=10, description="Score for the base asset")
    volatility_overrides: Annotated[Dict[str, int], NoDecode] = Field(
        default_factory=lambda: dict(DEFAULT_VOLATILITY_OVERRIDES),
        description="Asset -> volatility score table",
    )

    # Rebalancing
    min_improvement_bps: int = Field(default=DEFAULT_MIN_IMPROVEMENT_BPS, ge=1, le=1000, description="Yield improvement floor")
    max_threshold_bps: int = Field(default=DEFAULT_MAX_THRESHOLD_BPS, ge=50, le=10000, description="Adaptive threshold cap")
    max_slippage_bps: int = Field(default=DEFAULT_MAX_SLIPPAGE_BPS, ge=0, le=5000, description="Slippage tolerated on swaps")

    # Batch runner
    batch_rate_limit: int = Field(default=50, ge=1, le=10000, description="Position cycles per rate window")
    batch_rate_window: float = Field(default=1.0, gt=0, le=3600, description="Rate window in seconds")

    @field_validator("volatility_overrides", mode="before")
    @classmethod
    def parse_volatility_overrides(cls, v):
        """Parse comma-separated asset=score pairs."""
        if isinstance(v, str):
            if not v.strip():
                return {}
            table = {}
            for pair in v.split(","):
                if not pair.strip():
                    continue
                asset, _, score = pair.partition("=")
                table[asset.strip()] = int(score.strip())
            return table
        return v or {}

    @field_validator("volatility_overrides")
    @classmethod
    def check_volatility_range(cls, v: Dict[str, int]) -> Dict[str, int]:
        """Volatility scores must fall within 1-10."""
        for asset, score in v.items():
            if not 1 <= score <= 10:
                raise ValueError(f"Volatility for {asset} out of range: {score}")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
