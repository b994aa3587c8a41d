"""Integer fixed-point helpers shared by the engine.

All engine math runs on Python ints; nothing here touches floats or
Decimal, so results are bit-reproducible across runs and platforms.
"""

from src.core.constants import BPS


def mul_div(a: int, b: int, denominator: int) -> int:
    """Compute floor(a * b / denominator)."""
    if denominator == 0:
        raise ZeroDivisionError("mul_div denominator is zero")
    return (a * b) // denominator


def mul_div_up(a: int, b: int, denominator: int) -> int:
    """Compute ceil(a * b / denominator) for non-negative operands."""
    if denominator == 0:
        raise ZeroDivisionError("mul_div_up denominator is zero")
    return -((-a * b) // denominator)


def apply_bps(value: int, bps: int) -> int:
    """Scale value by bps / 10000."""
    return mul_div(value, bps, BPS)


def apply_pct(value: int, pct: int) -> int:
    """Scale value by pct / 100."""
    return mul_div(value, pct, 100)


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))
