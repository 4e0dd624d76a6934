"""Preprocessing of a group's invoices before settlement."""

from dataclasses import dataclass, field, replace
from collections.abc import Iterable

from src.domain.constants import LineItemType
from src.domain.models import ExpenseInvoice, Receipt

REFUND_NOTE_PREFIX = "退款: "


@dataclass(frozen=True)
class ProcessedInvoices:
    """Invoices of a group split by settlement role.

    Attributes:
        refund_receipts: Negative receipts derived from REFUND line items.
        bonus_invoices: Invoices reduced to their BONUS line items.
        non_bonus_invoices: Invoices reduced to every other line item.
    """

    refund_receipts: list[Receipt] = field(default_factory=list)
    bonus_invoices: list[ExpenseInvoice] = field(default_factory=list)
    non_bonus_invoices: list[ExpenseInvoice] = field(default_factory=list)


def split_group_invoices(
    invoices: Iterable[ExpenseInvoice],
) -> ProcessedInvoices:
    """Split invoices into refund receipts, bonus and non-bonus invoices.

    Refunds are money returned to customers, so they reduce the receipts
    instead of counting as expenses. Invoices left without items are dropped.

    Args:
        invoices: Expense invoices of a group.

    Returns:
        ProcessedInvoices: The three views used by the settlement report.
    """
    processed = ProcessedInvoices()
    for invoice in invoices:
        bonus_items = []
        regular_items = []
        for item in invoice.line_items:
            if item.line_type == LineItemType.REFUND:
                processed.refund_receipts.append(
                    Receipt(
                        actual_amount=-abs(item.subtotal),
                        receipt_id=invoice.invoice_id,
                        order_id=invoice.order_id,
                        receipt_date=invoice.invoice_date,
                        note=f"{REFUND_NOTE_PREFIX}{item.note}",
                    )
                )
            elif item.line_type == LineItemType.BONUS:
                bonus_items.append(item)
            else:
                regular_items.append(item)
        if bonus_items:
            processed.bonus_invoices.append(
                replace(invoice, line_items=tuple(bonus_items))
            )
        if regular_items:
            processed.non_bonus_invoices.append(
                replace(invoice, line_items=tuple(regular_items))
            )
    return processed


__all__ = ["ProcessedInvoices", "split_group_invoices", "REFUND_NOTE_PREFIX"]
