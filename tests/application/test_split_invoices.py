"""Tests for the invoice preprocessing step."""

from datetime import date
from decimal import Decimal

from src.application.use_cases.split_invoices import split_group_invoices
from src.domain.constants import LineItemType
from src.domain.models import ExpenseInvoice, ExpenseLineItem


def test_split_group_invoices_routes_items_by_type() -> None:
    """Refunds become receipts; bonus and regular items are separated."""
    hotel = ExpenseLineItem(LineItemType.HOTEL, "SUP-1", Decimal("1000"))
    bonus = ExpenseLineItem(LineItemType.BONUS, "E1", Decimal("300"))
    refund = ExpenseLineItem(
        LineItemType.REFUND,
        "customer",
        Decimal("200"),
        note="cancelled seat",
    )
    invoices = [
        ExpenseInvoice(
            invoice_id="INV-1",
            order_id="ORD-1",
            line_items=(hotel, bonus, refund),
            invoice_date=date(2024, 5, 2),
        ),
        ExpenseInvoice(
            invoice_id="INV-2",
            order_id="ORD-2",
            line_items=(bonus,),
        ),
    ]

    processed = split_group_invoices(invoices)

    assert len(processed.refund_receipts) == 1
    receipt = processed.refund_receipts[0]
    assert receipt.actual_amount == Decimal("-200")
    assert receipt.receipt_id == "INV-1"
    assert receipt.order_id == "ORD-1"
    assert receipt.receipt_date == date(2024, 5, 2)
    assert receipt.note == "退款: cancelled seat"

    assert [inv.invoice_id for inv in processed.bonus_invoices] == [
        "INV-1",
        "INV-2",
    ]
    assert processed.bonus_invoices[0].line_items == (bonus,)
    assert [inv.invoice_id for inv in processed.non_bonus_invoices] == [
        "INV-1"
    ]
    assert processed.non_bonus_invoices[0].line_items == (hotel,)


def test_split_group_invoices_keeps_refunds_negative() -> None:
    """Refund lines stored with negative quantities still reduce receipts."""
    refund = ExpenseLineItem(
        LineItemType.REFUND,
        "customer",
        Decimal("150"),
        quantity=Decimal("-1"),
    )
    invoices = [
        ExpenseInvoice(invoice_id="INV-9", order_id=None, line_items=(refund,))
    ]

    processed = split_group_invoices(invoices)

    assert processed.refund_receipts[0].actual_amount == Decimal("-150")
    assert processed.bonus_invoices == []
    assert processed.non_bonus_invoices == []
