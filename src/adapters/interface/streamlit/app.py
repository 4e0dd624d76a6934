"""Streamlit settlement report entry point."""

from collections.abc import Sequence
from decimal import Decimal

import streamlit as st
import altair as alt

from src.application.use_cases.get_bill_invoice_groups import BillView
from src.application.use_cases.get_group_settlement import (
    GroupSettlementReport,
)
from src.domain.exceptions import SettlementError
from src.domain.models import InvoiceGroup, ReportRow, SettlementResult
from src.domain.services.report import (
    COMPANY_PROFIT_TITLE,
    TAX_AMOUNT_TITLE,
    TEAM_BONUS_TITLE,
)
from src.infrastructure.container import (
    build_bill_use_case,
    build_group_settlement_use_case,
)
from src.infrastructure.logging.logger import get_usage_logger
from src.utils.decimal_utils import round_amount


def _fetch_group_settlement(group_code: str) -> GroupSettlementReport:
    """Fetch the settlement report of a group from the ERP database."""
    use_case = build_group_settlement_use_case()
    return use_case.execute(group_code)


@st.cache_data(show_spinner=False)
def _load_group_settlement(
    group_code: str,
    schema_version: int = 1,
) -> GroupSettlementReport:
    """Cached wrapper around _fetch_group_settlement."""
    _ = schema_version
    return _fetch_group_settlement(group_code)


def _fetch_bill(bill_number: str) -> BillView:
    """Fetch the payee groups of a bill from the ERP database."""
    use_case = build_bill_use_case()
    return use_case.execute(bill_number)


@st.cache_data(show_spinner=False)
def _load_bill(bill_number: str, schema_version: int = 1) -> BillView:
    """Cached wrapper around _fetch_bill."""
    _ = schema_version
    return _fetch_bill(bill_number)


def _format_currency(value: Decimal) -> str:
    """Format amounts rounded to whole New Taiwan dollars."""
    return f"NT$ {round_amount(value):,}"


def _check_altair_dependencies() -> tuple[bool, str | None]:
    """Check that numpy and pandas expose what Altair needs.

    Returns:
        Tuple of a success flag and an error message when the check fails.
    """
    try:
        import numpy
        import pandas
    except ImportError as exc:
        return False, f"Altair dependencies are not importable: {exc}"
    if not hasattr(numpy, "ndarray"):
        return False, "numpy is installed but incomplete (no ndarray)."
    if not hasattr(pandas, "Timestamp"):
        return False, "pandas is installed but incomplete (no Timestamp)."
    return True, None


def _prepare_distribution_chart_data(
    result: SettlementResult,
) -> list[dict[str, str | float]]:
    """Prepare how the profit before tax is distributed.

    Args:
        result: Settlement figures of a group.

    Returns:
        Altair-ready rows, one per recipient of the profit.
    """
    items: list[tuple[str, Decimal]] = [
        (TAX_AMOUNT_TITLE, result.tax_amount),
        (TEAM_BONUS_TITLE, result.team_bonus),
    ]
    for bonus in result.employee_bonuses:
        items.append((f"{bonus.description} - {bonus.name}", bonus.amount))
    items.append((COMPANY_PROFIT_TITLE, result.company_profit))
    return [
        {
            "category": label,
            "amount": float(amount),
            "amount_label": _format_currency(amount),
        }
        for label, amount in items
        if amount != 0
    ]


def _render_distribution_chart(result: SettlementResult) -> None:
    """Render a bar chart of tax, bonuses and company profit."""
    st.subheader("Profit distribution")
    if result.is_loss:
        st.info("The group made no profit, no bonus is distributed.")
        return
    ok, message = _check_altair_dependencies()
    if not ok:
        st.warning(message)
        return
    data = _prepare_distribution_chart_data(result)
    if not data:
        st.info("No amounts available for the chart.")
        return
    chart = alt.Chart(alt.Data(values=data)).mark_bar(
        cornerRadiusEnd=4,
    ).encode(
        x=alt.X("amount:Q", title="Amount"),
        y=alt.Y("category:N", sort=None, title=None),
        color=alt.Color("category:N", legend=None),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
        ],
    ).properties(height=40 * len(data))
    st.altair_chart(chart, width="stretch")


def _render_settlement_table(rows: Sequence[ReportRow]) -> None:
    """Render the two-column settlement table."""
    data = [
        {
            "Item": row.label,
            "Amount": _format_currency(row.value),
            "Item ": row.label2,
            "Amount ": _format_currency(row.value2) if row.label2 else "",
        }
        for row in rows
    ]
    st.dataframe(data, width="stretch", hide_index=True)


def _render_invoice_groups(
    title: str,
    groups: Sequence[InvoiceGroup],
) -> None:
    """Render payee chunks as separate tables."""
    st.subheader(title)
    if not groups:
        st.caption("No invoices.")
        return
    for group in groups:
        header = group.payee_label
        if not group.total_suppressed:
            header = f"{header} · {_format_currency(group.total)}"
        st.markdown(f"**{header}**")
        data = [
            {
                "Invoice": row.invoice_id,
                "Created by": row.created_by,
                "Group": row.group_name,
                "Note": row.note,
                "Price": _format_currency(row.price),
            }
            for row in group.rows
        ]
        st.dataframe(data, width="stretch", hide_index=True)


def _render_group_page() -> None:
    """Render the settlement page of a group."""
    group_code = st.text_input("Group code", placeholder="e.g. TYO240501A")
    if not group_code.strip():
        st.caption("Enter a group code to build its settlement report.")
        return
    try:
        report = _load_group_settlement(group_code.strip(), schema_version=1)
    except (SettlementError, RuntimeError) as exc:
        st.error(f"Unable to settle group {group_code}: {exc}")
        return
    get_usage_logger().info(f"streamlit settlement group={group_code}")

    result = report.result
    receipts_col, expenses_col, profit_col = st.columns(3)
    receipts_col.metric("Receipts", _format_currency(result.receipt_total))
    expenses_col.metric("Expenses", _format_currency(result.expense_total))
    profit_col.metric("Net profit", _format_currency(result.net_profit))
    st.caption(f"{report.traveller_count} travellers")

    _render_settlement_table(report.rows)
    _render_distribution_chart(result)
    _render_invoice_groups("Expenses by payee", report.invoice_groups)
    _render_invoice_groups("Bonuses by payee", report.bonus_invoice_groups)


def _render_bill_page() -> None:
    """Render the payee groups of a bill."""
    bill_number = st.text_input("Bill number")
    if not bill_number.strip():
        st.caption("Enter a bill number to list its payees.")
        return
    try:
        view = _load_bill(bill_number.strip(), schema_version=1)
    except (SettlementError, RuntimeError) as exc:
        st.error(f"Unable to load bill {bill_number}: {exc}")
        return
    get_usage_logger().info(f"streamlit bill bill={bill_number}")
    if not view.invoice_groups:
        st.warning("No invoices found for this bill.")
        return
    st.metric("Bill total", _format_currency(view.total_amount))
    _render_invoice_groups("Payees", view.invoice_groups)


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Group Settlement", layout="wide")
    st.title("Group Settlement")

    page = st.sidebar.selectbox("Page", ["Settlement", "Bill"])
    if page == "Settlement":
        _render_group_page()
    else:
        _render_bill_page()


if __name__ == "__main__":  # pragma: no cover
    main()
