"""Domain models for payee-grouped billing rows."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class InvoiceGroupRow:
    """Printable row of a payee group."""

    invoice_id: str
    created_by: str
    group_name: str
    note: str
    price: Decimal


@dataclass(frozen=True)
class InvoiceGroup:
    """Chunk of rows sharing one payee.

    Attributes:
        payee_ref: Supplier or employee code the rows are paid to.
        payee_label: Printed name of the payee.
        rows: Rows printed in this chunk.
        total: Payee total, or zero on suppressed chunks.
        total_suppressed: True on continuation chunks of a split payee.
    """

    payee_ref: str
    payee_label: str
    rows: tuple[InvoiceGroupRow, ...]
    total: Decimal
    total_suppressed: bool = False


__all__ = ["InvoiceGroupRow", "InvoiceGroup"]
