"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import os

from src.domain.constants import (
    DEFAULT_ADMINISTRATIVE_COST_PER_TRAVELLER,
    DEFAULT_MAX_GROUP_SIZE,
)
from src.domain.exceptions import ConfigurationError
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class SettlementSettings:
    """Settings for settlement reports and printed payee groups.

    Attributes:
        max_group_size: Maximum rows printed per payee chunk.
        administrative_cost_per_traveller: Fallback administrative rate used
            when a group has no administrative rule.
    """

    max_group_size: int = DEFAULT_MAX_GROUP_SIZE
    administrative_cost_per_traveller: Decimal = (
        DEFAULT_ADMINISTRATIVE_COST_PER_TRAVELLER
    )

    def __post_init__(self) -> None:
        if self.max_group_size <= 0:
            raise ConfigurationError(
                f"max_group_size must be positive, got {self.max_group_size}"
            )
        if (
            not self.administrative_cost_per_traveller.is_finite()
            or self.administrative_cost_per_traveller < 0
        ):
            raise ConfigurationError(
                "administrative_cost_per_traveller must be a finite, "
                "non-negative amount"
            )

    @classmethod
    def from_env(cls) -> "SettlementSettings":
        """Build settings from environment variables.

        Returns:
            SettlementSettings: Settings sourced from environment variables.

        Raises:
            ConfigurationError: If a variable holds an invalid value.
        """
        logger = get_app_logger()
        max_group_size = cls._parse_int(
            os.getenv("SETTLEMENT_MAX_GROUP_SIZE"),
            DEFAULT_MAX_GROUP_SIZE,
            "SETTLEMENT_MAX_GROUP_SIZE",
        )
        admin_cost = cls._parse_decimal(
            os.getenv("SETTLEMENT_ADMIN_COST_PER_TRAVELLER"),
            DEFAULT_ADMINISTRATIVE_COST_PER_TRAVELLER,
            "SETTLEMENT_ADMIN_COST_PER_TRAVELLER",
        )
        if max_group_size != DEFAULT_MAX_GROUP_SIZE:
            logger.info(f"Using payee chunk size {max_group_size}")
        return cls(
            max_group_size=max_group_size,
            administrative_cost_per_traveller=admin_cost,
        )

    @staticmethod
    def _parse_int(raw: str | None, default: int, name: str) -> int:
        """Parse an integer variable.

        Args:
            raw: Raw environment value.
            default: Value used when the variable is unset or blank.
            name: Variable name used in errors.

        Returns:
            int: Parsed value.
        """
        if raw is None or not raw.strip():
            return default
        try:
            return int(raw.strip())
        except ValueError as exc:
            raise ConfigurationError(
                f"{name} must be an integer, got {raw!r}"
            ) from exc

    @staticmethod
    def _parse_decimal(
        raw: str | None,
        default: Decimal,
        name: str,
    ) -> Decimal:
        if raw is None or not raw.strip():
            return default
        try:
            return Decimal(raw.strip())
        except InvalidOperation as exc:
            raise ConfigurationError(
                f"{name} must be a number, got {raw!r}"
            ) from exc


__all__ = ["SettlementSettings"]
