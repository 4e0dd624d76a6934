"""Domain models for group settlement results."""

from dataclasses import dataclass, field
from decimal import Decimal

from src.domain.constants import BonusCategory
from src.domain.models.erp_rows import BonusSetting


@dataclass(frozen=True)
class ClassifiedBonusSettings:
    """Bonus rules split into general and personal pools.

    Attributes:
        general: Group-wide rules keyed by category.
        personal: Employee rules keyed by category, then employee code.
    """

    general: dict[BonusCategory, list[BonusSetting]] = field(
        default_factory=dict
    )
    personal: dict[BonusCategory, dict[str, list[BonusSetting]]] = field(
        default_factory=dict
    )


@dataclass(frozen=True)
class EmployeeBonus:
    """Bonus paid to one employee for one rule category."""

    employee_ref: str
    name: str
    amount: Decimal
    category: BonusCategory
    description: str = ""


@dataclass(frozen=True)
class SettlementResult:
    """Every stage of the settlement waterfall for one group."""

    receipt_total: Decimal
    expense_total: Decimal
    administrative_cost: Decimal
    administrative_cost_per_traveller: Decimal
    profit_before_tax: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    net_profit: Decimal
    team_bonus: Decimal
    employee_bonuses: tuple[EmployeeBonus, ...]
    company_profit: Decimal

    @property
    def employee_bonus_total(self) -> Decimal:
        """Return the sum of all employee bonuses."""
        return sum(
            (bonus.amount for bonus in self.employee_bonuses),
            Decimal("0"),
        )

    @property
    def is_loss(self) -> bool:
        """Return True when net profit is negative."""
        return self.net_profit < 0


@dataclass(frozen=True)
class ReportItem:
    """Labelled value of the settlement report."""

    title: str
    value: Decimal


@dataclass(frozen=True)
class ReportRow:
    """Two-column row of the printed settlement table."""

    label: str
    value: Decimal
    label2: str = ""
    value2: Decimal = Decimal("0")


__all__ = [
    "ClassifiedBonusSettings",
    "EmployeeBonus",
    "SettlementResult",
    "ReportItem",
    "ReportRow",
]
