"""Domain exceptions for settlement and billing computations."""


class SettlementError(ValueError):
    """Base error raised when a settlement precondition is violated."""


class ConfigurationError(SettlementError):
    """Raised for invalid engine configuration or collaborators."""


class UnsupportedRuleError(SettlementError):
    """Raised when a bonus rule has a shape its category does not define."""


class InvalidAmountError(SettlementError):
    """Raised when a monetary input is not a finite number."""


__all__ = [
    "SettlementError",
    "ConfigurationError",
    "UnsupportedRuleError",
    "InvalidAmountError",
]
