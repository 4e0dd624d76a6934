"""Raw ERP records consumed by the settlement engine."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from src.domain.constants import BonusCategory, CalculationType, LineItemType


@dataclass(frozen=True)
class BonusSetting:
    """Configurable bonus rule attached to a tour group.

    Attributes:
        category: Rule category (tax, team bonus, administrative cost...).
        amount: Percentage or flat amount, depending on calculation_type.
        calculation_type: PERCENT or FIXED_AMOUNT.
        employee_ref: Employee code for personal rules, None for general ones.
    """

    category: BonusCategory
    amount: Decimal
    calculation_type: CalculationType
    employee_ref: str | None = None
    id: int | None = None
    group_code: str = ""
    created_by: str | None = None
    created_at: datetime | None = None
    modified_by: str | None = None
    modified_at: datetime | None = None

    @property
    def is_personal(self) -> bool:
        """Return True when the rule belongs to a single employee."""
        return bool(self.employee_ref)


@dataclass(frozen=True)
class ExpenseLineItem:
    """Single line of an expense invoice."""

    line_type: LineItemType
    payee_ref: str
    unit_price: Decimal
    quantity: Decimal = Decimal("1")
    note: str = ""

    @property
    def subtotal(self) -> Decimal:
        """Return unit_price times quantity."""
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class ExpenseInvoice:
    """Confirmed expense document for a group."""

    invoice_id: str
    order_id: str | None
    line_items: tuple[ExpenseLineItem, ...] = field(default_factory=tuple)
    created_by: str = ""
    group_code: str = ""
    group_name: str = ""
    invoice_date: date | None = None


@dataclass(frozen=True)
class Receipt:
    """Money received for a group or order."""

    actual_amount: Decimal
    receipt_id: str = ""
    order_id: str | None = None
    receipt_date: date | None = None
    note: str = ""


__all__ = [
    "BonusSetting",
    "ExpenseLineItem",
    "ExpenseInvoice",
    "Receipt",
]
