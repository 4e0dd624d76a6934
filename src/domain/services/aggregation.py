"""Cost and revenue aggregators for group settlement."""

from collections.abc import Iterable
from decimal import Decimal
from logging import Logger

from src.domain.constants import (
    DEFAULT_ADMINISTRATIVE_COST_PER_TRAVELLER,
    BonusCategory,
    CalculationType,
)
from src.domain.exceptions import UnsupportedRuleError
from src.domain.models.erp_rows import BonusSetting, ExpenseInvoice, Receipt
from src.domain.services.bonus_settings import settings_for_category
from src.domain.services.validation import (
    require_finite,
    require_traveller_count,
    validate_receipt_sign,
)


def sum_expenses(invoices: Iterable[ExpenseInvoice]) -> Decimal:
    """Sum the subtotals of every line item of the given invoices.

    The aggregator sums whatever it is given; callers drop BONUS items
    beforehand when they need the non-bonus expense view.
    """
    total = Decimal("0")
    for invoice in invoices:
        for item in invoice.line_items:
            total += require_finite(
                item.subtotal,
                f"subtotal of invoice {invoice.invoice_id}",
            )
    return total


def sum_receipts(
    receipts: Iterable[Receipt],
    logger: Logger | None = None,
) -> Decimal:
    """Sum actual receipt amounts, refund receipts included.

    Args:
        receipts: Receipts of the group, possibly with negative refunds.
        logger: Optional logger used to flag unexpected negative receipts.

    Returns:
        Decimal: Total amount received.
    """
    total = Decimal("0")
    for receipt in receipts:
        amount = require_finite(
            receipt.actual_amount,
            f"actual_amount of receipt {receipt.receipt_id}",
        )
        if logger is not None:
            validate_receipt_sign(
                receipt.receipt_id,
                amount,
                receipt.note,
                logger,
            )
        total += amount
    return total


def administrative_cost_per_traveller(
    settings: Iterable[BonusSetting],
    fallback: Decimal = DEFAULT_ADMINISTRATIVE_COST_PER_TRAVELLER,
) -> Decimal:
    """Return the flat administrative rate charged per traveller.

    Args:
        settings: Bonus rules of the group.
        fallback: Rate used when the group has no administrative rule.

    Returns:
        Decimal: Sum of the administrative rule amounts, or the fallback.

    Raises:
        UnsupportedRuleError: If an administrative rule is a percentage.
    """
    rules = settings_for_category(
        settings,
        BonusCategory.ADMINISTRATIVE_EXPENSES,
    )
    if not rules:
        return require_finite(fallback, "administrative cost fallback")
    for rule in rules:
        if rule.calculation_type != CalculationType.FIXED_AMOUNT:
            raise UnsupportedRuleError(
                "ADMINISTRATIVE_EXPENSES rules must be FIXED_AMOUNT "
                f"per-traveller rates (setting id={rule.id})"
            )
    return sum((rule.amount for rule in rules), Decimal("0"))


def administrative_cost(
    traveller_count: int,
    per_traveller: Decimal,
) -> Decimal:
    """Return the administrative cost charged for the whole group."""
    require_traveller_count(traveller_count)
    require_finite(per_traveller, "administrative cost per traveller")
    if traveller_count == 0:
        return Decimal("0")
    return per_traveller * traveller_count


__all__ = [
    "sum_expenses",
    "sum_receipts",
    "administrative_cost_per_traveller",
    "administrative_cost",
]
