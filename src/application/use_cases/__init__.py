"""Application use cases package."""

from .get_bill_invoice_groups import BillView, GetBillInvoiceGroupsUseCase
from .get_group_settlement import (
    GetGroupSettlementUseCase,
    GroupSettlementReport,
)
from .split_invoices import ProcessedInvoices, split_group_invoices

__all__ = [
    "GetGroupSettlementUseCase",
    "GroupSettlementReport",
    "GetBillInvoiceGroupsUseCase",
    "BillView",
    "ProcessedInvoices",
    "split_group_invoices",
]
