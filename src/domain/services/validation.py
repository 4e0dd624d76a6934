"""Domain validation helpers."""

from decimal import Decimal
from logging import Logger

from src.domain.exceptions import ConfigurationError, InvalidAmountError


def require_finite(value: Decimal, field_name: str) -> Decimal:
    """Return the value when it is a finite Decimal.

    Args:
        value: Amount to check.
        field_name: Name used in the error message.

    Returns:
        Decimal: The unchanged value.

    Raises:
        InvalidAmountError: If the value is NaN, infinite, or not a Decimal.
    """
    if not isinstance(value, Decimal) or not value.is_finite():
        raise InvalidAmountError(
            f"{field_name} must be a finite decimal, got {value!r}"
        )
    return value


def require_traveller_count(traveller_count: int) -> int:
    """Return the traveller count when it is a non-negative integer."""
    if isinstance(traveller_count, bool) or not isinstance(
        traveller_count, int
    ):
        raise ConfigurationError(
            f"traveller_count must be an integer, got {traveller_count!r}"
        )
    if traveller_count < 0:
        raise ConfigurationError(
            f"traveller_count must not be negative, got {traveller_count}"
        )
    return traveller_count


def require_max_group_size(max_group_size: int) -> int:
    """Return the chunk size when it is a positive integer."""
    if isinstance(max_group_size, bool) or not isinstance(max_group_size, int):
        raise ConfigurationError(
            f"max_group_size must be an integer, got {max_group_size!r}"
        )
    if max_group_size <= 0:
        raise ConfigurationError(
            f"max_group_size must be positive, got {max_group_size}"
        )
    return max_group_size


def validate_receipt_sign(
    receipt_id: str,
    amount: Decimal,
    note: str,
    logger: Logger,
) -> None:
    """Warn when a negative receipt is not flagged as a refund.

    Args:
        receipt_id: Receipt identifier for the log line.
        amount: Actual amount of the receipt.
        note: Receipt note, refund receipts carry a refund prefix.
        logger: Logger used for warnings.
    """
    if amount < 0 and not note.startswith("退款"):
        logger.warning(
            f"Negative receipt without refund note receipt_id={receipt_id}: "
            f"{amount}"
        )


__all__ = [
    "require_finite",
    "require_traveller_count",
    "require_max_group_size",
    "validate_receipt_sign",
]
