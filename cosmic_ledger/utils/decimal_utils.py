"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from documents or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: Decimal) -> Decimal:
    """Round a monetary amount to cents, half up.

    Args:
        value: Amount to round.

    Returns:
        Decimal: Amount quantized to two decimal places.
    """
    return coerce_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def within_tolerance(left: Decimal, right: Decimal, tolerance: Decimal) -> bool:
    """Return True when two amounts differ by at most the tolerance."""
    return abs(coerce_decimal(left) - coerce_decimal(right)) <= tolerance


__all__ = ["CENT", "coerce_decimal", "round_money", "within_tolerance"]
