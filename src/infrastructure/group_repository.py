"""SQLAlchemy-backed repository for group settlement records."""

from sqlalchemy import text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.group_repository import (
    GroupSettlementRepositoryPort,
)
from src.domain.models import BonusSetting, ExpenseInvoice, Receipt
from src.domain.services.bonus_settings import sort_bonus_settings
from src.domain.services.factories import (
    build_bonus_setting,
    build_invoice,
    build_line_item,
    build_receipt,
)

_INVOICE_COLUMNS = """
    i.invoice_number AS invoice_id,
    i.order_number AS order_id,
    i.created_by AS created_by,
    i.group_code AS group_code,
    COALESCE(g.group_name, '') AS group_name,
    i.invoice_date AS invoice_date
"""


class SqlAlchemyGroupSettlementRepository(GroupSettlementRepositoryPort):
    """Repository backed by SQLAlchemy for ERP settlement queries."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ERP engine.
        """
        self._db_port = db_port

    def fetch_invoices(self, group_code: str) -> list[ExpenseInvoice]:
        query = text(
            f"""
            SELECT {_INVOICE_COLUMNS}
            FROM invoices i
            LEFT JOIN groups g ON g.group_code = i.group_code
            WHERE i.group_code = :group_code
            ORDER BY i.invoice_number
            """
        )
        return self._fetch_invoices(query, {"group_code": group_code})

    def fetch_bill_invoices(self, bill_number: str) -> list[ExpenseInvoice]:
        query = text(
            f"""
            SELECT {_INVOICE_COLUMNS}
            FROM bills b
            JOIN invoices i ON i.invoice_number = ANY(b.invoice_numbers)
            LEFT JOIN groups g ON g.group_code = i.group_code
            WHERE b.bill_number = :bill_number
            ORDER BY i.invoice_number
            """
        )
        return self._fetch_invoices(query, {"bill_number": bill_number})

    def fetch_receipts(self, group_code: str) -> list[Receipt]:
        query = text(
            """
            SELECT r.receipt_number AS receipt_id,
                   r.order_number AS order_id,
                   r.receipt_date AS receipt_date,
                   r.actual_amount AS actual_amount,
                   COALESCE(r.note, '') AS note
            FROM receipts r
            JOIN orders o ON o.order_number = r.order_number
            WHERE o.group_code = :group_code
            ORDER BY r.order_number, r.receipt_number
            """
        )
        engine = self._db_port.get_erp_engine()
        with engine.connect() as conn:
            rows = conn.execute(query, {"group_code": group_code}).all()
        return [build_receipt(row._mapping) for row in rows]

    def fetch_bonus_settings(self, group_code: str) -> list[BonusSetting]:
        query = text(
            """
            SELECT id,
                   group_code,
                   type AS category,
                   bonus AS amount,
                   bonus_type AS calculation_type,
                   employee_code AS employee_ref,
                   created_by,
                   created_at,
                   modified_by,
                   modified_at
            FROM group_bonus_setting
            WHERE group_code = :group_code
            """
        )
        engine = self._db_port.get_erp_engine()
        with engine.connect() as conn:
            rows = conn.execute(query, {"group_code": group_code}).all()
        return sort_bonus_settings(
            build_bonus_setting(row._mapping) for row in rows
        )

    def fetch_traveller_count(self, group_code: str) -> int:
        query = text(
            """
            SELECT COALESCE(cardinality(traveller_ids), 0) AS traveller_count
            FROM groups
            WHERE group_code = :group_code
            """
        )
        engine = self._db_port.get_erp_engine()
        with engine.connect() as conn:
            result = conn.execute(query, {"group_code": group_code}).first()
        if not result:
            raise RuntimeError(f"Missing group: {group_code}")
        return int(result.traveller_count)

    def fetch_employee_names(self) -> dict[str, str]:
        query = text("SELECT id, display_name FROM users")
        engine = self._db_port.get_erp_engine()
        with engine.connect() as conn:
            rows = conn.execute(query).all()
        return {row.id: row.display_name for row in rows}

    def fetch_supplier_names(self) -> dict[str, str]:
        query = text("SELECT supplier_code, supplier_name FROM suppliers")
        engine = self._db_port.get_erp_engine()
        with engine.connect() as conn:
            rows = conn.execute(query).all()
        return {row.supplier_code: row.supplier_name for row in rows}

    def _fetch_invoices(self, query, params: dict) -> list[ExpenseInvoice]:
        items_query = text(
            """
            SELECT invoice_number AS invoice_id,
                   invoice_type AS line_type,
                   pay_for AS payee_ref,
                   price AS unit_price,
                   quantity,
                   COALESCE(note, '') AS note
            FROM invoice_items
            WHERE invoice_number = ANY(:invoice_ids)
            ORDER BY invoice_number, id
            """
        )
        engine = self._db_port.get_erp_engine()
        with engine.connect() as conn:
            invoice_rows = conn.execute(query, params).all()
            if not invoice_rows:
                return []
            invoice_ids = [row.invoice_id for row in invoice_rows]
            item_rows = conn.execute(
                items_query,
                {"invoice_ids": invoice_ids},
            ).all()

        items_by_invoice: dict[str, list] = {}
        for row in item_rows:
            items_by_invoice.setdefault(row.invoice_id, []).append(
                build_line_item(row._mapping)
            )
        return [
            build_invoice(
                {
                    **row._mapping,
                    "line_items": items_by_invoice.get(row.invoice_id, []),
                }
            )
            for row in invoice_rows
        ]


__all__ = ["SqlAlchemyGroupSettlementRepository"]
