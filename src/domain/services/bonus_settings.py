"""Bonus rule classification, validation and description."""

from collections.abc import Iterable
from decimal import Decimal

from src.domain.constants import (
    ALLOWED_CALCULATION_TYPES,
    BONUS_CATEGORY_NAMES,
    BONUS_CATEGORY_SORT_ORDER,
    GENERAL_ONLY_CATEGORIES,
    BonusCategory,
    CalculationType,
)
from src.domain.exceptions import UnsupportedRuleError
from src.domain.models.erp_rows import BonusSetting
from src.domain.models.settlement import ClassifiedBonusSettings


def classify_bonus_settings(
    settings: Iterable[BonusSetting],
) -> ClassifiedBonusSettings:
    """Split rules into general and personal pools by category.

    Args:
        settings: Bonus rules of one group.

    Returns:
        ClassifiedBonusSettings: General rules keyed by category and personal
        rules keyed by category then employee code. Rules are kept as-is.
    """
    general: dict[BonusCategory, list[BonusSetting]] = {}
    personal: dict[BonusCategory, dict[str, list[BonusSetting]]] = {}
    for setting in settings:
        if setting.is_personal:
            by_employee = personal.setdefault(setting.category, {})
            by_employee.setdefault(setting.employee_ref, []).append(setting)
        else:
            general.setdefault(setting.category, []).append(setting)
    return ClassifiedBonusSettings(general=general, personal=personal)


def validate_bonus_settings(settings: Iterable[BonusSetting]) -> None:
    """Reject rules whose shape is undefined for their category.

    A rule is rejected when its calculation type is not allowed for its
    category, or when it is a personal PROFIT_TAX or TEAM_BONUS rule: those
    categories only apply group-wide.

    Raises:
        UnsupportedRuleError: On the first rule violating the taxonomy.
    """
    for setting in settings:
        allowed = ALLOWED_CALCULATION_TYPES.get(setting.category)
        if allowed is None:
            raise UnsupportedRuleError(
                f"Unknown bonus category: {setting.category!r}"
            )
        if setting.calculation_type not in allowed:
            raise UnsupportedRuleError(
                f"{setting.category.name} does not accept "
                f"{setting.calculation_type.name} rules "
                f"(setting id={setting.id})"
            )
        if (
            setting.is_personal
            and setting.category in GENERAL_ONLY_CATEGORIES
        ):
            raise UnsupportedRuleError(
                f"{setting.category.name} rules cannot be personal "
                f"(setting id={setting.id}, "
                f"employee={setting.employee_ref})"
            )


def settings_for_category(
    settings: Iterable[BonusSetting],
    category: BonusCategory,
) -> list[BonusSetting]:
    """Return the rules of a category, general and personal alike."""
    return [setting for setting in settings if setting.category == category]


def rule_contribution(setting: BonusSetting, base: Decimal) -> Decimal:
    """Return the amount a single rule takes from the given base.

    PERCENT rules take ``base * amount / 100``; FIXED_AMOUNT rules take
    their amount as-is.
    """
    if setting.calculation_type == CalculationType.PERCENT:
        return base * setting.amount / Decimal("100")
    return setting.amount


def sort_bonus_settings(settings: Iterable[BonusSetting]) -> list[BonusSetting]:
    """Sort rules by category display order, general rules first."""
    return sorted(
        settings,
        key=lambda setting: (
            BONUS_CATEGORY_SORT_ORDER[setting.category],
            setting.employee_ref or "",
        ),
    )


def format_rule_amount(amount: Decimal) -> str:
    """Render a rate or amount without trailing zeros, e.g. ``12.5``."""
    return format(amount.normalize(), "f")


def describe_rule(setting: BonusSetting) -> str:
    """Describe a general rule, e.g. ``45%`` or ``固定500``."""
    amount = format_rule_amount(setting.amount)
    if setting.calculation_type == CalculationType.PERCENT:
        return f"{amount}%"
    return f"固定{amount}"


def describe_rules(settings: Iterable[BonusSetting]) -> str:
    """Join rule descriptions with ``+``; ``0`` when there is no rule."""
    descriptions = [describe_rule(setting) for setting in settings]
    if not descriptions:
        return "0"
    return "+".join(descriptions)


def describe_personal_rules(
    category: BonusCategory,
    settings: Iterable[BonusSetting],
) -> str:
    """Describe personal rules, e.g. ``業務獎金(5%)`` or ``OP獎金(5%+300元)``."""
    texts = []
    for setting in settings:
        amount = format_rule_amount(setting.amount)
        if setting.calculation_type == CalculationType.PERCENT:
            texts.append(f"{amount}%")
        else:
            texts.append(f"{amount}元")
    return f"{category_name(category)}({'+'.join(texts)})"


def category_name(category: BonusCategory) -> str:
    """Return the display name of a rule category."""
    return BONUS_CATEGORY_NAMES.get(category, "獎金")


__all__ = [
    "classify_bonus_settings",
    "validate_bonus_settings",
    "settings_for_category",
    "rule_contribution",
    "sort_bonus_settings",
    "describe_rule",
    "describe_rules",
    "describe_personal_rules",
    "category_name",
    "format_rule_amount",
]
