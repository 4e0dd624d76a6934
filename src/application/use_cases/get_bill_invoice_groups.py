"""Use case building the payee groups printed on a bill."""

from dataclasses import dataclass
from decimal import Decimal

from src.application.ports.group_repository import (
    GroupSettlementRepositoryPort,
)
from src.domain.models import InvoiceGroup
from src.domain.services.invoice_grouping import (
    bill_total_amount,
    group_invoices_by_payee,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import SettlementSettings


@dataclass(frozen=True)
class BillView:
    """Payee groups and total of a bill."""

    bill_number: str
    invoice_groups: list[InvoiceGroup]
    total_amount: Decimal


class GetBillInvoiceGroupsUseCase:
    """Group the invoices paid by a bill per payee."""

    def __init__(
        self,
        repository: GroupSettlementRepositoryPort,
        settings: SettlementSettings | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing bill invoices and display names.
            settings: Optional settlement settings, defaults apply otherwise.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._settings = settings or SettlementSettings()
        self._logger = logger or get_app_logger()

    def execute(self, bill_number: str) -> BillView:
        """Return the printable payee groups of a bill.

        Rows of the same invoice and payee are merged into one line, as
        printed on the bill.
        """
        invoices = self._repository.fetch_bill_invoices(bill_number)
        if not invoices:
            self._logger.warning(f"No invoices found for bill={bill_number}")
            return BillView(
                bill_number=bill_number,
                invoice_groups=[],
                total_amount=Decimal("0"),
            )

        employee_names = self._repository.fetch_employee_names()
        supplier_names = self._repository.fetch_supplier_names()
        invoice_groups = group_invoices_by_payee(
            invoices,
            self._settings.max_group_size,
            payee_name=lambda code: supplier_names.get(code, code),
            created_by_name=lambda code: employee_names.get(code, code),
            merge_by_invoice=True,
        )
        total_amount = bill_total_amount(invoice_groups)
        self._logger.info(
            f"Bill {bill_number}: {len(invoices)} invoices, "
            f"{len(invoice_groups)} payee groups, total={total_amount}"
        )
        return BillView(
            bill_number=bill_number,
            invoice_groups=invoice_groups,
            total_amount=total_amount,
        )


__all__ = ["GetBillInvoiceGroupsUseCase", "BillView"]
