"""Domain package for settlement rules and core models."""

from .constants import (
    DEFAULT_ADMINISTRATIVE_COST_PER_TRAVELLER,
    DEFAULT_MAX_GROUP_SIZE,
    BonusCategory,
    CalculationType,
    LineItemType,
)
from .exceptions import (
    ConfigurationError,
    InvalidAmountError,
    SettlementError,
    UnsupportedRuleError,
)
from .models import (
    BonusSetting,
    EmployeeBonus,
    ExpenseInvoice,
    ExpenseLineItem,
    InvoiceGroup,
    InvoiceGroupRow,
    Receipt,
    ReportRow,
    SettlementResult,
)
from .services import (
    bill_total_amount,
    classify_bonus_settings,
    group_invoices_by_payee,
    project_report_rows,
    settle,
)

__all__ = [
    "DEFAULT_ADMINISTRATIVE_COST_PER_TRAVELLER",
    "DEFAULT_MAX_GROUP_SIZE",
    "BonusCategory",
    "CalculationType",
    "LineItemType",
    "ConfigurationError",
    "InvalidAmountError",
    "SettlementError",
    "UnsupportedRuleError",
    "BonusSetting",
    "EmployeeBonus",
    "ExpenseInvoice",
    "ExpenseLineItem",
    "InvoiceGroup",
    "InvoiceGroupRow",
    "Receipt",
    "ReportRow",
    "SettlementResult",
    "bill_total_amount",
    "classify_bonus_settings",
    "group_invoices_by_payee",
    "project_report_rows",
    "settle",
]
