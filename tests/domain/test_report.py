"""Tests for the settlement report projection."""

from decimal import Decimal

from src.domain.constants import BonusCategory
from src.domain.models import EmployeeBonus, ReportItem, SettlementResult
from src.domain.services.report import (
    COMPANY_PROFIT_TITLE,
    NO_BONUS_TITLE,
    RECEIPT_TOTAL_TITLE,
    build_report_items,
    pair_report_items,
    project_report_rows,
)


def _result(**overrides) -> SettlementResult:
    values = {
        "receipt_total": Decimal("500000"),
        "expense_total": Decimal("300000"),
        "administrative_cost": Decimal("200"),
        "administrative_cost_per_traveller": Decimal("10"),
        "profit_before_tax": Decimal("199800"),
        "tax_rate": Decimal("12"),
        "tax_amount": Decimal("23976"),
        "net_profit": Decimal("175824"),
        "team_bonus": Decimal("79120.8"),
        "employee_bonuses": (),
        "company_profit": Decimal("96703.2"),
    }
    values.update(overrides)
    return SettlementResult(**values)


def test_project_report_rows_for_profitable_group() -> None:
    """Eight items are laid out as four two-column rows."""
    rows = project_report_rows(_result(), "45%")

    assert len(rows) == 4
    assert rows[0].label == RECEIPT_TOTAL_TITLE
    assert rows[0].value == Decimal("500000")
    assert rows[0].value2 == Decimal("300000")
    assert rows[1].label == "行政費用 （10元/人）"
    assert rows[1].value == Decimal("200")
    assert rows[2].label == "營收稅額  （12%）"
    assert rows[2].value == Decimal("23976")
    assert rows[2].value2 == Decimal("175824")
    assert rows[3].label == "團隊獎金 （45%）"
    assert rows[3].value == Decimal("79120.8")
    assert rows[3].label2 == COMPANY_PROFIT_TITLE
    assert rows[3].value2 == Decimal("96703.2")


def test_build_report_items_lists_employee_bonuses() -> None:
    """Employee bonuses follow the team bonus; company profit stays last."""
    bonus = EmployeeBonus(
        employee_ref="E1",
        name="Alice",
        amount=Decimal("8791.2"),
        category=BonusCategory.SALE_BONUS,
        description="業務獎金(5%)",
    )

    items = build_report_items(
        _result(
            employee_bonuses=(bonus,),
            company_profit=Decimal("87912"),
        ),
        "45%",
    )

    assert items[-2] == ReportItem("業務獎金(5%) - Alice", Decimal("8791.2"))
    assert items[-1] == ReportItem(COMPANY_PROFIT_TITLE, Decimal("87912"))


def test_build_report_items_for_loss_replaces_bonuses() -> None:
    """A loss prints a single zero bonus line before company profit."""
    items = build_report_items(
        _result(
            receipt_total=Decimal("250000"),
            profit_before_tax=Decimal("-50200"),
            tax_amount=Decimal("0"),
            net_profit=Decimal("-50200"),
            team_bonus=Decimal("0"),
            company_profit=Decimal("-50200"),
        ),
        "45%",
    )

    titles = [item.title for item in items]
    assert titles[-2:] == [NO_BONUS_TITLE, COMPANY_PROFIT_TITLE]
    assert not any(title.startswith("團隊獎金") for title in titles)
    assert items[-1].value == Decimal("-50200")


def test_pair_report_items_leaves_last_partner_empty() -> None:
    rows = pair_report_items(
        [
            ReportItem("a", Decimal("1")),
            ReportItem("b", Decimal("2")),
            ReportItem("c", Decimal("3")),
        ]
    )

    assert len(rows) == 2
    assert rows[1].label == "c"
    assert rows[1].label2 == ""
    assert rows[1].value2 == Decimal("0")
