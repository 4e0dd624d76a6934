"""Payee grouping of expense line items for printed documents."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from decimal import Decimal

from src.domain.constants import (
    DEFAULT_MAX_GROUP_SIZE,
    LINE_ITEM_TYPE_NAMES,
    RESERVED_PAYEE_LABELS,
    LineItemType,
)
from src.domain.exceptions import ConfigurationError
from src.domain.models.billing import InvoiceGroup, InvoiceGroupRow
from src.domain.models.erp_rows import ExpenseInvoice
from src.domain.services.validation import (
    require_finite,
    require_max_group_size,
)


@dataclass(frozen=True)
class _FlatItem:
    sort_key: tuple[str, str, int]
    payee_ref: str
    label: str
    row: InvoiceGroupRow


def default_line_type_name(line_type: LineItemType) -> str:
    """Return the display name of a line item type."""
    return LINE_ITEM_TYPE_NAMES.get(line_type, f"未知類型({int(line_type)})")


def _resolve(
    resolver: Callable[[str], str] | None,
    value: str,
    kind: str,
) -> str:
    if resolver is None:
        return value
    try:
        resolved = resolver(value)
    except Exception as exc:
        raise ConfigurationError(
            f"{kind} resolver failed for {value!r}"
        ) from exc
    return resolved or value


def payee_label(
    payee_ref: str,
    payee_name: Callable[[str], str] | None = None,
) -> str:
    """Return the printed label of a payee reference."""
    for reserved, label in RESERVED_PAYEE_LABELS.items():
        if payee_ref == reserved.value:
            return label
    return _resolve(payee_name, payee_ref, "Payee name")


def line_item_price(subtotal: Decimal, line_type: LineItemType) -> Decimal:
    """Return the printed price; refunds are printed as positive amounts."""
    if line_type == LineItemType.REFUND:
        return abs(subtotal)
    return subtotal


def flatten_line_items(
    invoices: Iterable[ExpenseInvoice],
    *,
    payee_name: Callable[[str], str] | None = None,
    created_by_name: Callable[[str], str] | None = None,
    line_type_name: Callable[[LineItemType], str] = default_line_type_name,
) -> list[tuple[str, str, InvoiceGroupRow]]:
    """Flatten invoices into (payee ref, label, row) triples in print order.

    Rows are ordered by order id, then invoice id, then their position among
    all line items, so the output does not depend on the invoice order.
    """
    flat: list[_FlatItem] = []
    position = 0
    for invoice in invoices:
        created_by = _resolve(
            created_by_name,
            invoice.created_by,
            "Creator name",
        )
        for item in invoice.line_items:
            price = require_finite(
                item.subtotal,
                f"subtotal of invoice {invoice.invoice_id}",
            )
            flat.append(
                _FlatItem(
                    sort_key=(
                        invoice.order_id or "",
                        invoice.invoice_id,
                        position,
                    ),
                    payee_ref=item.payee_ref,
                    label=payee_label(item.payee_ref, payee_name),
                    row=InvoiceGroupRow(
                        invoice_id=invoice.invoice_id,
                        created_by=created_by,
                        group_name=invoice.group_name,
                        note=item.note or line_type_name(item.line_type),
                        price=line_item_price(price, item.line_type),
                    ),
                )
            )
            position += 1
    flat.sort(key=lambda entry: entry.sort_key)
    return [(entry.payee_ref, entry.label, entry.row) for entry in flat]


def merge_rows_by_invoice(
    rows: Iterable[InvoiceGroupRow],
) -> list[InvoiceGroupRow]:
    """Merge rows of the same invoice; notes joined with ``、``."""
    merged: dict[str, list[InvoiceGroupRow]] = {}
    for row in rows:
        merged.setdefault(row.invoice_id, []).append(row)
    return [
        InvoiceGroupRow(
            invoice_id=invoice_id,
            created_by=group[0].created_by,
            group_name=group[0].group_name,
            note="、".join(row.note for row in group),
            price=sum((row.price for row in group), Decimal("0")),
        )
        for invoice_id, group in merged.items()
    ]


def split_payee_rows(
    payee_ref: str,
    label: str,
    rows: list[InvoiceGroupRow],
    max_group_size: int,
) -> list[InvoiceGroup]:
    """Chunk one payee's rows; only the first chunk shows the payee total."""
    require_max_group_size(max_group_size)
    total = sum((row.price for row in rows), Decimal("0"))
    groups: list[InvoiceGroup] = []
    for start in range(0, len(rows), max_group_size):
        first = start == 0
        groups.append(
            InvoiceGroup(
                payee_ref=payee_ref,
                payee_label=label,
                rows=tuple(rows[start:start + max_group_size]),
                total=total if first else Decimal("0"),
                total_suppressed=not first,
            )
        )
    return groups


def group_invoices_by_payee(
    invoices: Iterable[ExpenseInvoice],
    max_group_size: int = DEFAULT_MAX_GROUP_SIZE,
    *,
    payee_name: Callable[[str], str] | None = None,
    created_by_name: Callable[[str], str] | None = None,
    line_type_name: Callable[[LineItemType], str] = default_line_type_name,
    merge_by_invoice: bool = False,
) -> list[InvoiceGroup]:
    """Group expense line items by payee into printable chunks.

    Args:
        invoices: Expense invoices to print.
        max_group_size: Maximum number of rows per chunk.
        payee_name: Optional resolver from supplier code to display name.
        created_by_name: Optional resolver from user code to display name.
        line_type_name: Note used when a line item has none.
        merge_by_invoice: Merge a payee's rows of the same invoice first.

    Returns:
        list[InvoiceGroup]: Chunks sorted by payee label, then payee
        ref. Payees are told apart by ref, so two refs resolving to the
        same label stay separate. Chunks of the same payee stay consecutive
        and in order.

    Raises:
        ConfigurationError: If max_group_size is not positive or a resolver
            fails.
    """
    require_max_group_size(max_group_size)
    by_payee: dict[str, list[InvoiceGroupRow]] = {}
    labels: dict[str, str] = {}
    for payee_ref, label, row in flatten_line_items(
        invoices,
        payee_name=payee_name,
        created_by_name=created_by_name,
        line_type_name=line_type_name,
    ):
        labels.setdefault(payee_ref, label)
        by_payee.setdefault(payee_ref, []).append(row)

    groups: list[InvoiceGroup] = []
    for payee_ref in sorted(by_payee, key=lambda ref: (labels[ref], ref)):
        rows = by_payee[payee_ref]
        if merge_by_invoice:
            rows = merge_rows_by_invoice(rows)
        groups.extend(
            split_payee_rows(
                payee_ref,
                labels[payee_ref],
                rows,
                max_group_size,
            )
        )
    return groups


def bill_total_amount(groups: Iterable[InvoiceGroup]) -> Decimal:
    """Return the printed total; suppressed chunks contribute nothing."""
    return sum((group.total for group in groups), Decimal("0"))


__all__ = [
    "default_line_type_name",
    "payee_label",
    "line_item_price",
    "flatten_line_items",
    "merge_rows_by_invoice",
    "split_payee_rows",
    "group_invoices_by_payee",
    "bill_total_amount",
]
