"""Tests for payee grouping of expense line items."""

from decimal import Decimal

import pytest

from src.domain.constants import LineItemType
from src.domain.exceptions import ConfigurationError
from src.domain.models import ExpenseInvoice, ExpenseLineItem
from src.domain.services.invoice_grouping import (
    bill_total_amount,
    group_invoices_by_payee,
    payee_label,
)


def _item(payee, price, line_type=LineItemType.HOTEL, note="", quantity="1"):
    return ExpenseLineItem(
        line_type=line_type,
        payee_ref=payee,
        unit_price=Decimal(price),
        quantity=Decimal(quantity),
        note=note,
    )


def _invoice(invoice_id, *items, order_id="ORD-1", created_by="U1"):
    return ExpenseInvoice(
        invoice_id=invoice_id,
        order_id=order_id,
        line_items=tuple(items),
        created_by=created_by,
        group_name="Tokyo 5D",
    )


def test_seven_items_for_one_payee_split_into_five_and_two() -> None:
    """Only the first chunk carries the payee total."""
    invoices = [
        _invoice(f"INV-{index}", _item("SUP-1", "100", note=f"n{index}"))
        for index in range(7)
    ]

    groups = group_invoices_by_payee(invoices, max_group_size=5)

    assert [len(group.rows) for group in groups] == [5, 2]
    assert groups[0].total == Decimal("700")
    assert groups[0].total_suppressed is False
    assert groups[1].total == Decimal("0")
    assert groups[1].total_suppressed is True
    assert [row.invoice_id for row in groups[0].rows] == [
        "INV-0",
        "INV-1",
        "INV-2",
        "INV-3",
        "INV-4",
    ]


def test_grouping_keeps_every_line_item_once() -> None:
    """Each line item appears in exactly one chunk."""
    invoices = [
        _invoice("INV-2", _item("SUP-B", "10"), _item("SUP-A", "20")),
        _invoice("INV-1", _item("SUP-A", "30"), order_id="ORD-0"),
        _invoice("INV-3", _item("SUP-B", "40"), _item("SUP-C", "50")),
    ]

    groups = group_invoices_by_payee(invoices, max_group_size=1)

    prices = sorted(row.price for group in groups for row in group.rows)
    assert prices == [
        Decimal("10"),
        Decimal("20"),
        Decimal("30"),
        Decimal("40"),
        Decimal("50"),
    ]
    assert [group.payee_ref for group in groups] == [
        "SUP-A",
        "SUP-A",
        "SUP-B",
        "SUP-B",
        "SUP-C",
    ]
    # ORD-0 sorts before ORD-1.
    assert groups[0].rows[0].invoice_id == "INV-1"
    assert bill_total_amount(groups) == Decimal("150")


def test_grouping_resolves_names_and_reserved_payees() -> None:
    invoices = [
        _invoice(
            "INV-1",
            _item("SUP-1", "100"),
            _item("customer", "50", LineItemType.REFUND, quantity="-1"),
        )
    ]

    groups = group_invoices_by_payee(
        invoices,
        payee_name={"SUP-1": "Hotel Sakura"}.get,
        created_by_name={"U1": "Carol"}.get,
    )

    labels = [group.payee_label for group in groups]
    assert labels == sorted(["Hotel Sakura", "客戶退款專用"])
    refund_group = groups[labels.index("客戶退款專用")]
    assert refund_group.rows[0].price == Decimal("50")
    assert refund_group.rows[0].note == "退預收款"
    assert refund_group.rows[0].created_by == "Carol"
    assert refund_group.rows[0].group_name == "Tokyo 5D"


def test_grouping_merges_rows_of_the_same_invoice() -> None:
    """Bill printing merges a payee's rows per invoice."""
    invoices = [
        _invoice(
            "INV-1",
            _item("SUP-1", "100", note="room"),
            _item("SUP-1", "20", note="breakfast"),
            _item("SUP-2", "5", note="tip"),
        ),
        _invoice("INV-2", _item("SUP-1", "7", note="tax")),
    ]

    groups = group_invoices_by_payee(invoices, merge_by_invoice=True)

    sup_1 = groups[0]
    assert sup_1.payee_ref == "SUP-1"
    assert len(sup_1.rows) == 2
    assert sup_1.rows[0].note == "room、breakfast"
    assert sup_1.rows[0].price == Decimal("120")
    assert sup_1.total == Decimal("127")


def test_grouping_keeps_payees_with_the_same_name_apart() -> None:
    """Two supplier codes sharing a display name stay two payees."""
    invoices = [
        _invoice("INV-1", _item("SUP-B", "40")),
        _invoice("INV-2", _item("SUP-A", "100")),
        _invoice("INV-3", _item("SUP-0", "5")),
    ]
    names = {"SUP-A": "Hilton", "SUP-B": "Hilton", "SUP-0": "Ryokan"}

    groups = group_invoices_by_payee(invoices, payee_name=names.get)

    assert [(group.payee_label, group.payee_ref) for group in groups] == [
        ("Hilton", "SUP-A"),
        ("Hilton", "SUP-B"),
        ("Ryokan", "SUP-0"),
    ]
    assert [group.total for group in groups] == [
        Decimal("100"),
        Decimal("40"),
        Decimal("5"),
    ]
    assert bill_total_amount(groups) == Decimal("145")


@pytest.mark.parametrize("size", [0, -1])
def test_grouping_rejects_non_positive_group_size(size: int) -> None:
    with pytest.raises(ConfigurationError):
        group_invoices_by_payee([], max_group_size=size)


def test_grouping_without_items_returns_no_group() -> None:
    assert group_invoices_by_payee([_invoice("INV-1")]) == []


def test_payee_label_wraps_resolver_failures() -> None:
    def _broken(code: str) -> str:
        raise LookupError(code)

    assert payee_label("foreign", _broken) == "外幣請款專用"
    with pytest.raises(ConfigurationError):
        payee_label("SUP-1", _broken)
