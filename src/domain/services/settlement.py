"""Settlement waterfall for a single tour group.

The stages run in a fixed order, each one consuming the previous stage's
remainder:

    receipts - expenses - administrative cost  -> profit before tax
    profit before tax - profit tax             -> net profit
    net profit - team bonus - employee bonuses -> company profit

A loss is never taxed and never distributed: when net profit is negative no
bonus rule is applied and the company absorbs the whole loss. Amounts keep
full Decimal precision; rounding belongs to the rendering layer.
"""

from collections.abc import Callable, Iterable
from decimal import Decimal
from logging import Logger

from src.domain.constants import (
    DISTRIBUTION_CATEGORIES,
    BonusCategory,
    CalculationType,
)
from src.domain.exceptions import ConfigurationError
from src.domain.models.erp_rows import BonusSetting
from src.domain.models.settlement import EmployeeBonus, SettlementResult
from src.domain.services import aggregation
from src.domain.services.bonus_settings import (
    classify_bonus_settings,
    describe_personal_rules,
    rule_contribution,
    validate_bonus_settings,
)
from src.domain.services.validation import (
    require_finite,
    require_traveller_count,
)

NameResolver = Callable[[str], str]


def compute_tax_rate(settings: Iterable[BonusSetting]) -> Decimal:
    """Return the summed PERCENT rate of the general PROFIT_TAX rules."""
    return sum(
        (
            setting.amount
            for setting in settings
            if setting.category == BonusCategory.PROFIT_TAX
            and setting.calculation_type == CalculationType.PERCENT
            and not setting.is_personal
        ),
        Decimal("0"),
    )


def compute_tax_amount(
    profit_before_tax: Decimal,
    tax_rate: Decimal,
) -> Decimal:
    """Return the profit tax; a zero or negative base is not taxed."""
    if profit_before_tax <= 0:
        return Decimal("0")
    return profit_before_tax * tax_rate / Decimal("100")


def compute_team_bonus(
    team_rules: Iterable[BonusSetting],
    net_profit: Decimal,
) -> Decimal:
    """Sum the contributions of the team bonus rules."""
    return sum(
        (rule_contribution(rule, net_profit) for rule in team_rules),
        Decimal("0"),
    )


def compute_employee_bonuses(
    personal: dict[BonusCategory, dict[str, list[BonusSetting]]],
    net_profit: Decimal,
    name_resolver: NameResolver,
) -> tuple[EmployeeBonus, ...]:
    """Return one bonus per employee and distribution category.

    Args:
        personal: Personal rules keyed by category then employee code.
        net_profit: Base for percentage rules.
        name_resolver: Maps an employee code to a display name.

    Returns:
        tuple[EmployeeBonus, ...]: Bonuses ordered by category, then by the
        first appearance of each employee.

    Raises:
        ConfigurationError: If the resolver fails.
    """
    bonuses: list[EmployeeBonus] = []
    for category in DISTRIBUTION_CATEGORIES:
        for employee_ref, rules in personal.get(category, {}).items():
            amount = sum(
                (rule_contribution(rule, net_profit) for rule in rules),
                Decimal("0"),
            )
            bonuses.append(
                EmployeeBonus(
                    employee_ref=employee_ref,
                    name=_resolve_name(name_resolver, employee_ref),
                    amount=amount,
                    category=category,
                    description=describe_personal_rules(category, rules),
                )
            )
    return tuple(bonuses)


def _resolve_name(name_resolver: NameResolver, employee_ref: str) -> str:
    try:
        name = name_resolver(employee_ref)
    except Exception as exc:
        raise ConfigurationError(
            f"Employee name resolver failed for {employee_ref!r}"
        ) from exc
    return name or employee_ref


def settle(
    expense_total: Decimal,
    receipt_total: Decimal,
    administrative_cost: Decimal,
    settings: Iterable[BonusSetting],
    traveller_count: int,
    name_resolver: NameResolver,
    *,
    administrative_cost_per_traveller: Decimal | None = None,
    logger: Logger | None = None,
) -> SettlementResult:
    """Run the settlement waterfall for one group.

    Args:
        expense_total: Sum of the non-bonus expense line items.
        receipt_total: Sum of receipts, refund receipts included.
        administrative_cost: Administrative cost charged to the group.
        settings: Bonus rules of the group.
        traveller_count: Number of travellers on the group.
        name_resolver: Maps an employee code to a display name.
        administrative_cost_per_traveller: Rate behind administrative_cost;
            derived from the administrative rules when omitted.
        logger: Optional logger for the computed figures.

    Returns:
        SettlementResult: Every intermediate figure of the waterfall.

    Raises:
        InvalidAmountError: If an amount is not a finite Decimal.
        UnsupportedRuleError: If a rule shape is undefined for its category.
        ConfigurationError: On a negative traveller count or resolver failure.
    """
    settings = list(settings)
    require_finite(expense_total, "expense_total")
    require_finite(receipt_total, "receipt_total")
    require_finite(administrative_cost, "administrative_cost")
    require_traveller_count(traveller_count)
    for setting in settings:
        require_finite(setting.amount, f"amount of bonus setting {setting.id}")
    validate_bonus_settings(settings)

    if administrative_cost_per_traveller is None:
        administrative_cost_per_traveller = (
            aggregation.administrative_cost_per_traveller(settings)
        )
    require_finite(
        administrative_cost_per_traveller,
        "administrative_cost_per_traveller",
    )
    expected_cost = aggregation.administrative_cost(
        traveller_count,
        administrative_cost_per_traveller,
    )
    if logger is not None and expected_cost != administrative_cost:
        logger.warning(
            f"Administrative cost {administrative_cost} differs from "
            f"{traveller_count} x {administrative_cost_per_traveller}"
        )

    profit_before_tax = receipt_total - expense_total - administrative_cost
    tax_rate = compute_tax_rate(settings)
    tax_amount = compute_tax_amount(profit_before_tax, tax_rate)
    net_profit = profit_before_tax - tax_amount

    team_bonus = Decimal("0")
    employee_bonuses: tuple[EmployeeBonus, ...] = ()
    company_profit = net_profit
    classified = classify_bonus_settings(settings)
    if net_profit >= 0:
        team_bonus = compute_team_bonus(
            classified.general.get(BonusCategory.TEAM_BONUS, []),
            net_profit,
        )
        employee_bonuses = compute_employee_bonuses(
            classified.personal,
            net_profit,
            name_resolver,
        )
        company_profit = net_profit - team_bonus - sum(
            (bonus.amount for bonus in employee_bonuses),
            Decimal("0"),
        )
    elif logger is not None:
        logger.info(f"Net profit is negative ({net_profit}), no bonus applied")

    if logger is not None:
        logger.info(
            f"Settlement computed: profit_before_tax={profit_before_tax}, "
            f"tax={tax_amount}, net_profit={net_profit}, "
            f"team_bonus={team_bonus}, company_profit={company_profit}"
        )

    return SettlementResult(
        receipt_total=receipt_total,
        expense_total=expense_total,
        administrative_cost=administrative_cost,
        administrative_cost_per_traveller=administrative_cost_per_traveller,
        profit_before_tax=profit_before_tax,
        tax_rate=tax_rate,
        tax_amount=tax_amount,
        net_profit=net_profit,
        team_bonus=team_bonus,
        employee_bonuses=employee_bonuses,
        company_profit=company_profit,
    )


__all__ = [
    "NameResolver",
    "compute_tax_rate",
    "compute_tax_amount",
    "compute_team_bonus",
    "compute_employee_bonuses",
    "settle",
]
