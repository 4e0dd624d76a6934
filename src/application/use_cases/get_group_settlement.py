"""Use case computing the settlement report of a tour group."""

from dataclasses import dataclass

from src.application.ports.group_repository import (
    GroupSettlementRepositoryPort,
)
from src.application.use_cases.split_invoices import split_group_invoices
from src.domain.constants import BonusCategory
from src.domain.models import InvoiceGroup, ReportRow, SettlementResult
from src.domain.services.aggregation import (
    administrative_cost,
    administrative_cost_per_traveller,
    sum_expenses,
    sum_receipts,
)
from src.domain.services.bonus_settings import (
    classify_bonus_settings,
    describe_rules,
)
from src.domain.services.invoice_grouping import group_invoices_by_payee
from src.domain.services.report import project_report_rows
from src.domain.services.settlement import settle
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import SettlementSettings


@dataclass(frozen=True)
class GroupSettlementReport:
    """Everything the settlement report page prints for a group.

    Attributes:
        group_code: Code of the settled group.
        traveller_count: Number of travellers on the group.
        result: Settlement waterfall figures.
        team_bonus_description: Team bonus rule text, e.g. ``45%``.
        rows: Two-column settlement table.
        invoice_groups: Non-bonus expenses grouped by payee.
        bonus_invoice_groups: Bonus expenses grouped by payee.
    """

    group_code: str
    traveller_count: int
    result: SettlementResult
    team_bonus_description: str
    rows: list[ReportRow]
    invoice_groups: list[InvoiceGroup]
    bonus_invoice_groups: list[InvoiceGroup]


class GetGroupSettlementUseCase:
    """Compute a group's settlement from ERP records."""

    def __init__(
        self,
        repository: GroupSettlementRepositoryPort,
        settings: SettlementSettings | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing group records.
            settings: Optional settlement settings, defaults apply otherwise.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._settings = settings or SettlementSettings()
        self._logger = logger or get_app_logger()

    def execute(self, group_code: str) -> GroupSettlementReport:
        """Return the settlement report of a group.

        Args:
            group_code: Code of the group to settle.

        Returns:
            GroupSettlementReport: Waterfall figures, table rows and payee
            groups.
        """
        invoices = self._repository.fetch_invoices(group_code)
        receipts = self._repository.fetch_receipts(group_code)
        bonus_settings = self._repository.fetch_bonus_settings(group_code)
        traveller_count = self._repository.fetch_traveller_count(group_code)
        employee_names = self._repository.fetch_employee_names()
        supplier_names = self._repository.fetch_supplier_names()

        processed = split_group_invoices(invoices)
        expense_total = sum_expenses(processed.non_bonus_invoices)
        receipt_total = sum_receipts(
            [*receipts, *processed.refund_receipts],
            logger=self._logger,
        )
        per_traveller = administrative_cost_per_traveller(
            bonus_settings,
            self._settings.administrative_cost_per_traveller,
        )
        admin_cost = administrative_cost(traveller_count, per_traveller)

        result = settle(
            expense_total,
            receipt_total,
            admin_cost,
            bonus_settings,
            traveller_count,
            lambda code: employee_names.get(code, code),
            administrative_cost_per_traveller=per_traveller,
            logger=self._logger,
        )
        classified = classify_bonus_settings(bonus_settings)
        team_bonus_description = describe_rules(
            classified.general.get(BonusCategory.TEAM_BONUS, [])
        )

        invoice_groups = group_invoices_by_payee(
            processed.non_bonus_invoices,
            self._settings.max_group_size,
            payee_name=lambda code: supplier_names.get(code, code),
            created_by_name=lambda code: employee_names.get(code, code),
        )
        bonus_invoice_groups = group_invoices_by_payee(
            processed.bonus_invoices,
            self._settings.max_group_size,
            payee_name=lambda code: employee_names.get(
                code,
                supplier_names.get(code, code),
            ),
            created_by_name=lambda code: employee_names.get(code, code),
        )

        self._logger.info(
            f"Settlement report built for group={group_code}: "
            f"{len(invoices)} invoices, {len(receipts)} receipts, "
            f"{len(processed.refund_receipts)} refunds"
        )
        return GroupSettlementReport(
            group_code=group_code,
            traveller_count=traveller_count,
            result=result,
            team_bonus_description=team_bonus_description,
            rows=project_report_rows(result, team_bonus_description),
            invoice_groups=invoice_groups,
            bonus_invoice_groups=bonus_invoice_groups,
        )


__all__ = ["GetGroupSettlementUseCase", "GroupSettlementReport"]
