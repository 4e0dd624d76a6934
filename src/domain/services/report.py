"""Projection of a settlement result into printable report rows."""

from decimal import Decimal

from src.domain.models.settlement import ReportItem, ReportRow, SettlementResult
from src.domain.services.bonus_settings import format_rule_amount

RECEIPT_TOTAL_TITLE = "收款總額 （進項）"
EXPENSE_TOTAL_TITLE = "付款總額 （銷項）"
PROFIT_BEFORE_TAX_TITLE = "營收總額 （未扣除營收稅額）"
NET_PROFIT_TITLE = "利潤總額 （已扣除營收稅額）"
TAX_AMOUNT_TITLE = "營收稅額"
TEAM_BONUS_TITLE = "團隊獎金"
NO_BONUS_TITLE = "無獎金 (利潤為負)"
COMPANY_PROFIT_TITLE = "公司盈餘"


def build_report_items(
    result: SettlementResult,
    team_bonus_description: str,
) -> list[ReportItem]:
    """Return the labelled figures of the settlement report in print order.

    Args:
        result: Computed settlement waterfall.
        team_bonus_description: Team bonus rule text, e.g. ``45%``.

    Returns:
        list[ReportItem]: Totals, administrative cost, tax, net profit, the
        team bonus and each employee bonus, closed by the company profit.
        A loss replaces every bonus item with a single zero item.
    """
    per_traveller = format_rule_amount(result.administrative_cost_per_traveller)
    tax_rate = format_rule_amount(result.tax_rate)
    items = [
        ReportItem(RECEIPT_TOTAL_TITLE, result.receipt_total),
        ReportItem(EXPENSE_TOTAL_TITLE, result.expense_total),
        ReportItem(
            f"行政費用 （{per_traveller}元/人）",
            result.administrative_cost,
        ),
        ReportItem(PROFIT_BEFORE_TAX_TITLE, result.profit_before_tax),
        ReportItem(f"{TAX_AMOUNT_TITLE}  （{tax_rate}%）", result.tax_amount),
        ReportItem(NET_PROFIT_TITLE, result.net_profit),
    ]
    if result.is_loss:
        items.append(ReportItem(NO_BONUS_TITLE, Decimal("0")))
    else:
        items.append(
            ReportItem(
                f"{TEAM_BONUS_TITLE} （{team_bonus_description}）",
                result.team_bonus,
            )
        )
        items.extend(
            ReportItem(f"{bonus.description} - {bonus.name}", bonus.amount)
            for bonus in result.employee_bonuses
        )
    items.append(ReportItem(COMPANY_PROFIT_TITLE, result.company_profit))
    return items


def pair_report_items(items: list[ReportItem]) -> list[ReportRow]:
    """Lay items out two per row; an odd last item gets an empty partner."""
    rows: list[ReportRow] = []
    for index in range(0, len(items), 2):
        first = items[index]
        if index + 1 < len(items):
            second = items[index + 1]
            rows.append(
                ReportRow(first.title, first.value, second.title, second.value)
            )
        else:
            rows.append(ReportRow(first.title, first.value))
    return rows


def project_report_rows(
    result: SettlementResult,
    team_bonus_description: str,
) -> list[ReportRow]:
    """Return the two-column settlement table for a result."""
    return pair_report_items(build_report_items(result, team_bonus_description))


__all__ = [
    "RECEIPT_TOTAL_TITLE",
    "EXPENSE_TOTAL_TITLE",
    "PROFIT_BEFORE_TAX_TITLE",
    "TAX_AMOUNT_TITLE",
    "NET_PROFIT_TITLE",
    "TEAM_BONUS_TITLE",
    "NO_BONUS_TITLE",
    "COMPANY_PROFIT_TITLE",
    "build_report_items",
    "pair_report_items",
    "project_report_rows",
]
