"""Application port for group settlement data access."""

from typing import Protocol

from src.domain.models import BonusSetting, ExpenseInvoice, Receipt


class GroupSettlementRepositoryPort(Protocol):
    """Port exposing read access to the records a settlement needs."""

    def fetch_invoices(self, group_code: str) -> list[ExpenseInvoice]:
        """Return the confirmed expense invoices of a group."""

    def fetch_receipts(self, group_code: str) -> list[Receipt]:
        """Return the receipts of every order of a group."""

    def fetch_bonus_settings(self, group_code: str) -> list[BonusSetting]:
        """Return the bonus rules attached to a group."""

    def fetch_traveller_count(self, group_code: str) -> int:
        """Return the number of travellers on a group."""

    def fetch_employee_names(self) -> dict[str, str]:
        """Return display names keyed by employee code."""

    def fetch_supplier_names(self) -> dict[str, str]:
        """Return display names keyed by supplier code."""

    def fetch_bill_invoices(self, bill_number: str) -> list[ExpenseInvoice]:
        """Return the invoices paid by a bill."""


__all__ = ["GroupSettlementRepositoryPort"]
