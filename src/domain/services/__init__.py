"""Domain services package."""

from .aggregation import (
    administrative_cost,
    administrative_cost_per_traveller,
    sum_expenses,
    sum_receipts,
)
from .bonus_settings import (
    classify_bonus_settings,
    describe_rules,
    validate_bonus_settings,
)
from .factories import (
    build_bonus_setting,
    build_invoice,
    build_line_item,
    build_receipt,
)
from .invoice_grouping import bill_total_amount, group_invoices_by_payee
from .report import build_report_items, project_report_rows
from .settlement import settle
from .validation import require_finite

__all__ = [
    "administrative_cost",
    "administrative_cost_per_traveller",
    "sum_expenses",
    "sum_receipts",
    "classify_bonus_settings",
    "describe_rules",
    "validate_bonus_settings",
    "build_bonus_setting",
    "build_invoice",
    "build_line_item",
    "build_receipt",
    "bill_total_amount",
    "group_invoices_by_payee",
    "build_report_items",
    "project_report_rows",
    "settle",
    "require_finite",
]
