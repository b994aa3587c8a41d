"""Risk calculation utilities for collateral positions."""

from src.core.constants import BPS
from src.engine.fixed_point import mul_div, mul_div_up


class RiskCalculator:
    """
    Calculator for collateral ratio conversions.

    Handles collateral valuation, collateral ratio, and LTV/ratio
    conversions. Prices, values and debt are 1e18-scaled; ratios and
    LTVs are basis points; amounts are in the asset's native decimals.
    """

    @staticmethod
    def collateral_value(amount: int, price: int, decimals: int) -> int:
        """
        Calculate the USD value of a collateral amount.

        value = amount * price / 10^decimals

        Args:
            amount: Collateral amount in native units
            price: USD price per whole token (1e18-scaled)
            decimals: Asset decimals

        Returns:
            USD value (1e18-scaled)
        """
        return mul_div(amount, price, 10**decimals)

    @staticmethod
    def amount_for_value(value: int, price: int, decimals: int) -> int:
        """
        Calculate the amount of an asset worth a given USD value.

        amount = value * 10^decimals / price

        Args:
            value: USD value (1e18-scaled)
            price: USD price per whole token (1e18-scaled)
            decimals: Asset decimals

        Returns:
            Amount in native units, rounded down
        """
        return mul_div(value, 10**decimals, price)

    @staticmethod
    def collateral_ratio(value: int, debt: int) -> int:
        """
        Calculate the collateral ratio.

        ratio = value * 10000 / debt

        Returns:
            Ratio in bps (0 when there is no debt)
        """
        if debt == 0:
            return 0
        return mul_div(value, BPS, debt)

    @staticmethod
    def amount_for_ratio(debt: int, target_ratio: int, price: int, decimals: int) -> int:
        """
        Calculate the smallest amount whose ratio reaches a target.

        amount = debt * target_ratio / 10000 * 10^decimals / price

        Both divisions round up so the resulting ratio never lands
        below target.

        Args:
            debt: Outstanding debt (1e18-scaled)
            target_ratio: Target collateral ratio (bps)
            price: USD price per whole token (1e18-scaled)
            decimals: Asset decimals

        Returns:
            Amount in native units
        """
        required_value = mul_div_up(debt, target_ratio, BPS)
        return mul_div_up(required_value, 10**decimals, price)

    @staticmethod
    def ratio_from_ltv(ltv_bps: int) -> int:
        """
        Convert a loan-to-value into a collateral ratio.

        ratio = 10000 * 10000 / LTV, e.g. 8000 bps LTV -> 12500 bps ratio
        """
        if ltv_bps <= 0:
            return 0
        return BPS * BPS // ltv_bps

    @staticmethod
    def position_ratio(collateral: int, price: int, decimals: int, debt: int) -> int:
        """Collateral ratio of a position at a given price."""
        value = RiskCalculator.collateral_value(collateral, price, decimals)
        return RiskCalculator.collateral_ratio(value, debt)
