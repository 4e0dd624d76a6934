"""Tests for the settlement waterfall."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.domain.constants import BonusCategory, CalculationType
from src.domain.exceptions import (
    ConfigurationError,
    InvalidAmountError,
    UnsupportedRuleError,
)
from src.domain.models import BonusSetting
from src.domain.services.settlement import (
    compute_tax_amount,
    compute_tax_rate,
    settle,
)


def _setting(
    category: BonusCategory,
    amount: str,
    calculation_type: CalculationType = CalculationType.PERCENT,
    employee_ref: str | None = None,
) -> BonusSetting:
    return BonusSetting(
        category=category,
        amount=Decimal(amount),
        calculation_type=calculation_type,
        employee_ref=employee_ref,
    )


def _names(code: str) -> str:
    return {"E1": "Alice", "E2": "Bob"}.get(code, "")


_BASE_RULES = [
    _setting(BonusCategory.PROFIT_TAX, "12"),
    _setting(BonusCategory.TEAM_BONUS, "45"),
]


def test_settle_profitable_group_scenario() -> None:
    """A 20 traveller group splits its profit between tax, team and company."""
    result = settle(
        Decimal("300000"),
        Decimal("500000"),
        Decimal("200"),
        _BASE_RULES,
        20,
        _names,
        administrative_cost_per_traveller=Decimal("10"),
    )

    assert result.profit_before_tax == Decimal("199800")
    assert result.tax_rate == Decimal("12")
    assert result.tax_amount == Decimal("23976")
    assert result.net_profit == Decimal("175824")
    assert result.team_bonus == Decimal("79120.8")
    assert result.employee_bonuses == ()
    assert result.company_profit == Decimal("96703.2")
    assert result.is_loss is False


def test_settle_loss_is_absorbed_by_company() -> None:
    """A loss is neither taxed nor distributed."""
    rules = [
        *_BASE_RULES,
        _setting(BonusCategory.SALE_BONUS, "5", employee_ref="E1"),
    ]

    result = settle(
        Decimal("300000"),
        Decimal("250000"),
        Decimal("200"),
        rules,
        20,
        _names,
        administrative_cost_per_traveller=Decimal("10"),
    )

    assert result.profit_before_tax == Decimal("-50200")
    assert result.tax_amount == Decimal("0")
    assert result.net_profit == Decimal("-50200")
    assert result.team_bonus == Decimal("0")
    assert result.employee_bonuses == ()
    assert result.company_profit == Decimal("-50200")
    assert result.is_loss is True


def test_settle_balances_every_stage() -> None:
    """Each stage adds up to the previous one."""
    rules = [
        *_BASE_RULES,
        _setting(BonusCategory.SALE_BONUS, "5", employee_ref="E1"),
        _setting(
            BonusCategory.OP_BONUS,
            "300",
            CalculationType.FIXED_AMOUNT,
            employee_ref="E2",
        ),
    ]

    result = settle(
        Decimal("123456.78"),
        Decimal("234567.89"),
        Decimal("70"),
        rules,
        7,
        _names,
        administrative_cost_per_traveller=Decimal("10"),
    )

    assert (
        result.receipt_total
        - result.expense_total
        - result.administrative_cost
        == result.profit_before_tax
    )
    assert result.profit_before_tax - result.tax_amount == result.net_profit
    assert (
        result.company_profit
        + result.team_bonus
        + result.employee_bonus_total
        == result.net_profit
    )


def test_settle_orders_sale_bonuses_before_op_bonuses() -> None:
    """Employee bonuses follow category order, then employee appearance."""
    rules = [
        _setting(
            BonusCategory.OP_BONUS,
            "300",
            CalculationType.FIXED_AMOUNT,
            employee_ref="E2",
        ),
        _setting(BonusCategory.SALE_BONUS, "5", employee_ref="E1"),
        _setting(
            BonusCategory.SALE_BONUS,
            "100",
            CalculationType.FIXED_AMOUNT,
            employee_ref="E1",
        ),
    ]

    result = settle(
        Decimal("0"),
        Decimal("10000"),
        Decimal("0"),
        rules,
        0,
        _names,
    )

    first, second = result.employee_bonuses
    assert first.category == BonusCategory.SALE_BONUS
    assert first.name == "Alice"
    assert first.amount == Decimal("600")
    assert first.description == "業務獎金(5%+100元)"
    assert second.category == BonusCategory.OP_BONUS
    assert second.name == "Bob"
    assert second.amount == Decimal("300")
    assert second.description == "OP獎金(300元)"


def test_settle_falls_back_to_code_when_name_is_empty() -> None:
    """An unknown employee is shown by code."""
    rules = [_setting(BonusCategory.SALE_BONUS, "1", employee_ref="E9")]

    result = settle(
        Decimal("0"),
        Decimal("100"),
        Decimal("0"),
        rules,
        0,
        _names,
    )

    assert result.employee_bonuses[0].name == "E9"


def test_settle_without_travellers_has_no_administrative_cost() -> None:
    """A group without travellers is not charged administrative cost."""
    result = settle(
        Decimal("100"),
        Decimal("1000"),
        Decimal("0"),
        [],
        0,
        _names,
    )

    assert result.administrative_cost == Decimal("0")
    assert result.profit_before_tax == Decimal("900")


def test_settle_without_tax_rule_applies_no_tax() -> None:
    """Missing PROFIT_TAX rules mean a zero rate."""
    result = settle(
        Decimal("100"),
        Decimal("1000"),
        Decimal("0"),
        [_setting(BonusCategory.TEAM_BONUS, "10")],
        0,
        _names,
    )

    assert result.tax_rate == Decimal("0")
    assert result.tax_amount == Decimal("0")
    assert result.net_profit == Decimal("900")
    assert result.team_bonus == Decimal("90")


def test_settle_rejects_fixed_profit_tax() -> None:
    """PROFIT_TAX only accepts percentages."""
    rules = [
        _setting(
            BonusCategory.PROFIT_TAX,
            "100",
            CalculationType.FIXED_AMOUNT,
        )
    ]

    with pytest.raises(UnsupportedRuleError):
        settle(Decimal("0"), Decimal("1"), Decimal("0"), rules, 0, _names)


def test_settle_rejects_non_finite_amounts() -> None:
    """NaN inputs raise instead of propagating."""
    with pytest.raises(InvalidAmountError):
        settle(
            Decimal("0"),
            Decimal("NaN"),
            Decimal("0"),
            [],
            0,
            _names,
        )


def test_settle_rejects_negative_traveller_count() -> None:
    """A negative traveller count is a configuration error."""
    with pytest.raises(ConfigurationError):
        settle(Decimal("0"), Decimal("1"), Decimal("0"), [], -1, _names)


def test_settle_wraps_resolver_failures() -> None:
    """A failing name resolver surfaces as ConfigurationError."""
    def _broken(code: str) -> str:
        raise KeyError(code)

    rules = [_setting(BonusCategory.SALE_BONUS, "5", employee_ref="E1")]

    with pytest.raises(ConfigurationError):
        settle(Decimal("0"), Decimal("100"), Decimal("0"), rules, 0, _broken)


@pytest.mark.parametrize("with_logger", [True, False])
def test_settle_rejects_personal_tax_and_team_rules(with_logger: bool) -> None:
    """Personal tax and team rules fail with or without a logger."""
    rules = [
        _setting(BonusCategory.TEAM_BONUS, "50", employee_ref="E1"),
        _setting(BonusCategory.PROFIT_TAX, "10", employee_ref="E2"),
    ]
    kwargs = {"logger": MagicMock()} if with_logger else {}

    with pytest.raises(UnsupportedRuleError, match="cannot be personal"):
        settle(
            Decimal("0"),
            Decimal("1000"),
            Decimal("0"),
            rules,
            0,
            _names,
            **kwargs,
        )


def test_settle_warns_when_administrative_cost_mismatches() -> None:
    """The administrative cost is checked against count times rate."""
    logger = MagicMock()

    settle(
        Decimal("0"),
        Decimal("1000"),
        Decimal("50"),
        [],
        20,
        _names,
        administrative_cost_per_traveller=Decimal("10"),
        logger=logger,
    )

    logger.warning.assert_called_once()


def test_compute_tax_helpers() -> None:
    """Tax rate sums general percentages; non-positive bases are untaxed."""
    rules = [
        _setting(BonusCategory.PROFIT_TAX, "10"),
        _setting(BonusCategory.PROFIT_TAX, "2.5"),
        _setting(BonusCategory.PROFIT_TAX, "50", employee_ref="E1"),
    ]

    assert compute_tax_rate(rules) == Decimal("12.5")
    assert compute_tax_amount(Decimal("200"), Decimal("12.5")) == Decimal("25")
    assert compute_tax_amount(Decimal("0"), Decimal("12.5")) == Decimal("0")
    assert compute_tax_amount(Decimal("-5"), Decimal("12.5")) == Decimal("0")
