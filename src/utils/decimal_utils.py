"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal: Normalized numeric value.

    Raises:
        decimal.InvalidOperation: If the value is not numeric.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value).strip())


def round_amount(value: Decimal, places: int = 0) -> Decimal:
    """Round an amount half-up to the given number of decimal places."""
    exponent = Decimal(1).scaleb(-places)
    return value.quantize(exponent, rounding=ROUND_HALF_UP)


__all__ = ["coerce_decimal", "round_amount"]
