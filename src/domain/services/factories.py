"""Factories building fully populated records from partial mappings.

Each factory reads only the keys declared in its default table, fills the
missing ones from that table, and coerces numeric and enum fields. Repository
rows, API payloads and test fixtures all go through these functions so that
no record is ever built with implicit defaults.
"""

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from enum import IntEnum
from typing import Any, TypeVar

from src.domain.constants import (
    UNSUPPORTED_CALCULATION_CODES,
    BonusCategory,
    CalculationType,
    LineItemType,
)
from src.domain.exceptions import InvalidAmountError, UnsupportedRuleError
from src.domain.models.erp_rows import (
    BonusSetting,
    ExpenseInvoice,
    ExpenseLineItem,
    Receipt,
)
from src.domain.services.validation import require_finite
from src.utils.decimal_utils import coerce_decimal

EnumT = TypeVar("EnumT", bound=IntEnum)

BONUS_SETTING_DEFAULTS: Mapping[str, Any] = {
    "id": None,
    "group_code": "",
    "category": BonusCategory.PROFIT_TAX,
    "amount": Decimal("0"),
    "calculation_type": CalculationType.PERCENT,
    "employee_ref": None,
    "created_by": None,
    "created_at": None,
    "modified_by": None,
    "modified_at": None,
}

LINE_ITEM_DEFAULTS: Mapping[str, Any] = {
    "line_type": LineItemType.OTHER,
    "payee_ref": "",
    "unit_price": Decimal("0"),
    "quantity": Decimal("1"),
    "note": "",
}

INVOICE_DEFAULTS: Mapping[str, Any] = {
    "invoice_id": "",
    "order_id": None,
    "line_items": (),
    "created_by": "",
    "group_code": "",
    "group_name": "",
    "invoice_date": None,
}

RECEIPT_DEFAULTS: Mapping[str, Any] = {
    "actual_amount": Decimal("0"),
    "receipt_id": "",
    "order_id": None,
    "receipt_date": None,
    "note": "",
}


def _merge(
    data: Mapping[str, Any],
    defaults: Mapping[str, Any],
) -> dict[str, Any]:
    merged = dict(defaults)
    for key in defaults:
        if key in data and data[key] is not None:
            merged[key] = data[key]
    return merged


def _amount(value: Any, field_name: str) -> Decimal:
    try:
        amount = coerce_decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidAmountError(
            f"{field_name} is not a numeric amount: {value!r}"
        ) from exc
    return require_finite(amount, field_name)


def coerce_enum(value: Any, enum_type: type[EnumT]) -> EnumT:
    """Resolve an enum member from a member, its name, or its stored code.

    Args:
        value: Raw value from a repository row or payload.
        enum_type: Target IntEnum type.

    Returns:
        The matching enum member.

    Raises:
        UnsupportedRuleError: If the value matches no member.
    """
    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        cleaned = value.strip()
        if cleaned.upper() in enum_type.__members__:
            return enum_type[cleaned.upper()]
        if cleaned.lstrip("-").isdigit():
            value = int(cleaned)
    try:
        return enum_type(value)
    except (ValueError, TypeError) as exc:
        raise UnsupportedRuleError(
            f"Unknown {enum_type.__name__} value: {value!r}"
        ) from exc


def _calculation_type(value: Any) -> CalculationType:
    key = str(value).strip().upper()
    for code, name in UNSUPPORTED_CALCULATION_CODES.items():
        if key in (str(code), name):
            raise UnsupportedRuleError(
                f"Calculation type {name} ({code}) is not supported: "
                "deduction rules are not applied by settlement"
            )
    return coerce_enum(value, CalculationType)


def build_bonus_setting(
    data: Mapping[str, Any],
    defaults: Mapping[str, Any] = BONUS_SETTING_DEFAULTS,
) -> BonusSetting:
    """Build a BonusSetting from a partial mapping."""
    values = _merge(data, defaults)
    employee_ref = values["employee_ref"]
    if employee_ref is not None:
        employee_ref = str(employee_ref).strip() or None
    return BonusSetting(
        category=coerce_enum(values["category"], BonusCategory),
        amount=_amount(values["amount"], "amount"),
        calculation_type=_calculation_type(values["calculation_type"]),
        employee_ref=employee_ref,
        id=values["id"],
        group_code=values["group_code"],
        created_by=values["created_by"],
        created_at=values["created_at"],
        modified_by=values["modified_by"],
        modified_at=values["modified_at"],
    )


def build_line_item(
    data: Mapping[str, Any],
    defaults: Mapping[str, Any] = LINE_ITEM_DEFAULTS,
) -> ExpenseLineItem:
    """Build an ExpenseLineItem from a partial mapping."""
    values = _merge(data, defaults)
    return ExpenseLineItem(
        line_type=coerce_enum(values["line_type"], LineItemType),
        payee_ref=str(values["payee_ref"]),
        unit_price=_amount(values["unit_price"], "unit_price"),
        quantity=_amount(values["quantity"], "quantity"),
        note=values["note"],
    )


def build_invoice(
    data: Mapping[str, Any],
    defaults: Mapping[str, Any] = INVOICE_DEFAULTS,
) -> ExpenseInvoice:
    """Build an ExpenseInvoice, building nested line items when needed."""
    values = _merge(data, defaults)
    line_items = tuple(
        item
        if isinstance(item, ExpenseLineItem)
        else build_line_item(item)
        for item in values["line_items"]
    )
    return ExpenseInvoice(
        invoice_id=str(values["invoice_id"]),
        order_id=values["order_id"],
        line_items=line_items,
        created_by=values["created_by"],
        group_code=values["group_code"],
        group_name=values["group_name"],
        invoice_date=values["invoice_date"],
    )


def build_receipt(
    data: Mapping[str, Any],
    defaults: Mapping[str, Any] = RECEIPT_DEFAULTS,
) -> Receipt:
    """Build a Receipt from a partial mapping."""
    values = _merge(data, defaults)
    return Receipt(
        actual_amount=_amount(values["actual_amount"], "actual_amount"),
        receipt_id=str(values["receipt_id"]),
        order_id=values["order_id"],
        receipt_date=values["receipt_date"],
        note=values["note"],
    )


__all__ = [
    "BONUS_SETTING_DEFAULTS",
    "LINE_ITEM_DEFAULTS",
    "INVOICE_DEFAULTS",
    "RECEIPT_DEFAULTS",
    "coerce_enum",
    "build_bonus_setting",
    "build_line_item",
    "build_invoice",
    "build_receipt",
]
