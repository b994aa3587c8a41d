"""Error hierarchy for the collateral optimization engine.

Zero scores are not errors: an unscoreable candidate or one below the
minimum collateralization ratio simply scores 0 and is never selected.
"""

from typing import Optional


class EngineError(Exception):
    """Base class for every error raised by the engine."""


class InvalidInputError(EngineError, ValueError):
    """An operation received an out-of-range or missing input.

    The operation is rejected as a whole; nothing is partially applied.
    """

    field: Optional[str] = None

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        if field is not None:
            self.field = field


class InvalidAssetError(InvalidInputError):
    field = "asset"


class InvalidCollateralValueError(InvalidInputError):
    field = "collateral_value_usd"


class InvalidDebtError(InvalidInputError):
    field = "debt"


class InvalidPriceError(InvalidInputError):
    field = "price"


class TargetRatioBelowMinimumError(InvalidInputError):
    field = "target_ratio"


class InvalidStrategyError(InvalidInputError):
    field = "strategy"


class PositionNotFoundError(InvalidInputError):
    field = "position_id"


class StrategyNotFoundError(InvalidInputError):
    field = "owner"


class GateRejectedError(EngineError):
    """Position is too close to liquidation for optimization to run.

    This is a precondition failure, distinct from a NO_ACTION decision.
    """

    def __init__(self, position_id: str, current_ratio: int, required_ratio: int):
        self.position_id = position_id
        self.current_ratio = current_ratio
        self.required_ratio = required_ratio
        super().__init__(
            f"Position {position_id} ratio {current_ratio} bps below safety gate "
            f"{required_ratio} bps"
        )
