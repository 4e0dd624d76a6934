"""Domain constants for group settlement and billing."""

from decimal import Decimal
from enum import Enum, IntEnum


class BonusCategory(IntEnum):
    """Category of a group bonus rule, keyed by its stored code."""

    PROFIT_TAX = 0
    OP_BONUS = 1
    SALE_BONUS = 2
    TEAM_BONUS = 3
    ADMINISTRATIVE_EXPENSES = 4


class CalculationType(IntEnum):
    """How a rule amount is applied.

    PERCENT is a percentage of the stage base. FIXED_AMOUNT is a flat lump
    sum for bonus categories and a flat per-traveller rate for
    ADMINISTRATIVE_EXPENSES.
    """

    PERCENT = 0
    FIXED_AMOUNT = 1


class LineItemType(IntEnum):
    """Type of an expense line item."""

    HOTEL = 0
    TRANSPORT = 1
    MEAL = 2
    ACTIVITY = 3
    TOUR_PAYMENT = 4
    TOUR_RETURN = 5
    OTHER = 6
    INSURANCE = 7
    BONUS = 8
    REFUND = 9
    B2B = 10
    ESIM = 11
    EMPLOYEE = 999


class ReservedPayee(str, Enum):
    """Payee references that do not point at a supplier."""

    CUSTOMER = "customer"
    FOREIGN = "foreign"


ALLOWED_CALCULATION_TYPES: dict[BonusCategory, frozenset[CalculationType]] = {
    BonusCategory.PROFIT_TAX: frozenset({CalculationType.PERCENT}),
    BonusCategory.ADMINISTRATIVE_EXPENSES: frozenset(
        {CalculationType.FIXED_AMOUNT}
    ),
    BonusCategory.TEAM_BONUS: frozenset(
        {CalculationType.PERCENT, CalculationType.FIXED_AMOUNT}
    ),
    BonusCategory.OP_BONUS: frozenset(
        {CalculationType.PERCENT, CalculationType.FIXED_AMOUNT}
    ),
    BonusCategory.SALE_BONUS: frozenset(
        {CalculationType.PERCENT, CalculationType.FIXED_AMOUNT}
    ),
}

# Stored deduction codes that settlement does not apply.
UNSUPPORTED_CALCULATION_CODES = {
    2: "MINUS_PERCENT",
    3: "MINUS_FIXED_AMOUNT",
}

# Only general rules of these categories are applied.
GENERAL_ONLY_CATEGORIES = (
    BonusCategory.PROFIT_TAX,
    BonusCategory.TEAM_BONUS,
)

# Personal rules of these categories are paid out of net profit.
DISTRIBUTION_CATEGORIES = (
    BonusCategory.SALE_BONUS,
    BonusCategory.OP_BONUS,
)

BONUS_CATEGORY_NAMES = {
    BonusCategory.PROFIT_TAX: "營收稅額",
    BonusCategory.OP_BONUS: "OP獎金",
    BonusCategory.SALE_BONUS: "業務獎金",
    BonusCategory.TEAM_BONUS: "團隊獎金",
    BonusCategory.ADMINISTRATIVE_EXPENSES: "行政費用",
}

BONUS_CATEGORY_SORT_ORDER = {
    BonusCategory.ADMINISTRATIVE_EXPENSES: 0,
    BonusCategory.PROFIT_TAX: 1,
    BonusCategory.SALE_BONUS: 2,
    BonusCategory.OP_BONUS: 3,
    BonusCategory.TEAM_BONUS: 4,
}

LINE_ITEM_TYPE_NAMES = {
    LineItemType.HOTEL: "飯店",
    LineItemType.TRANSPORT: "交通",
    LineItemType.MEAL: "餐飲",
    LineItemType.ACTIVITY: "活動",
    LineItemType.TOUR_PAYMENT: "出團款",
    LineItemType.TOUR_RETURN: "回團款",
    LineItemType.OTHER: "其他",
    LineItemType.INSURANCE: "保險",
    LineItemType.BONUS: "獎金",
    LineItemType.REFUND: "退預收款",
    LineItemType.B2B: "同業",
    LineItemType.ESIM: "網卡",
    LineItemType.EMPLOYEE: "員工",
}

RESERVED_PAYEE_LABELS = {
    ReservedPayee.CUSTOMER: "客戶退款專用",
    ReservedPayee.FOREIGN: "外幣請款專用",
}

DEFAULT_MAX_GROUP_SIZE = 5
DEFAULT_ADMINISTRATIVE_COST_PER_TRAVELLER = Decimal("10")


__all__ = [
    "BonusCategory",
    "CalculationType",
    "LineItemType",
    "ReservedPayee",
    "ALLOWED_CALCULATION_TYPES",
    "UNSUPPORTED_CALCULATION_CODES",
    "GENERAL_ONLY_CATEGORIES",
    "DISTRIBUTION_CATEGORIES",
    "BONUS_CATEGORY_NAMES",
    "BONUS_CATEGORY_SORT_ORDER",
    "LINE_ITEM_TYPE_NAMES",
    "RESERVED_PAYEE_LABELS",
    "DEFAULT_MAX_GROUP_SIZE",
    "DEFAULT_ADMINISTRATIVE_COST_PER_TRAVELLER",
]
