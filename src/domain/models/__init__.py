"""Domain models package."""

from .billing import InvoiceGroup, InvoiceGroupRow
from .erp_rows import BonusSetting, ExpenseInvoice, ExpenseLineItem, Receipt
from .settlement import (
    ClassifiedBonusSettings,
    EmployeeBonus,
    ReportItem,
    ReportRow,
    SettlementResult,
)

__all__ = [
    "BonusSetting",
    "ExpenseInvoice",
    "ExpenseLineItem",
    "Receipt",
    "ClassifiedBonusSettings",
    "EmployeeBonus",
    "ReportItem",
    "ReportRow",
    "SettlementResult",
    "InvoiceGroup",
    "InvoiceGroupRow",
]
