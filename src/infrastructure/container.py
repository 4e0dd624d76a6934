"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.group_repository import (
    GroupSettlementRepositoryPort,
)
from src.application.use_cases.get_bill_invoice_groups import (
    GetBillInvoiceGroupsUseCase,
)
from src.application.use_cases.get_group_settlement import (
    GetGroupSettlementUseCase,
)
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.group_repository import (
    SqlAlchemyGroupSettlementRepository,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import SettlementSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_group_repository(
    db_port: DatabaseEnginePort | None = None,
) -> GroupSettlementRepositoryPort:
    """Return the ERP settlement repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyGroupSettlementRepository(resolved_db)


def build_group_settlement_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> GetGroupSettlementUseCase:
    """Return the group settlement use case wired to the ERP database."""
    return GetGroupSettlementUseCase(
        repository=build_group_repository(db_port),
        settings=SettlementSettings.from_env(),
        logger=get_app_logger(),
    )


def build_bill_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> GetBillInvoiceGroupsUseCase:
    """Return the bill use case wired to the ERP database."""
    return GetBillInvoiceGroupsUseCase(
        repository=build_group_repository(db_port),
        settings=SettlementSettings.from_env(),
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_group_repository",
    "build_group_settlement_use_case",
    "build_bill_use_case",
]
