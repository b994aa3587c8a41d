"""Position snapshot model for collateralized debt positions."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PositionSnapshot:
    """Read-only view of a borrower's position for one evaluation cycle."""

    position_id: str
    owner: str  # Wallet address

    # Outstanding debt, 1e18-scaled USD
    debt: int

    # Collateral amount in the asset's native decimals
    collateral: int
    asset: str

    # Collateral USD value * 10000 / debt
    current_ratio: int

    @property
    def is_open(self) -> bool:
        """Check the position carries both collateral and debt."""
        return self.collateral > 0 and self.debt > 0

    def to_dict(self) -> dict:
        return {
            "position_id": self.position_id,
            "owner": self.owner,
            "debt": str(self.debt),
            "collateral": str(self.collateral),
            "asset": self.asset,
            "current_ratio": self.current_ratio,
        }
