"""Tests for infrastructure settings."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.domain.exceptions import ConfigurationError
from src.infrastructure import settings as settings_module
from src.infrastructure.settings import SettlementSettings


@pytest.fixture(autouse=True)
def _quiet_logger(monkeypatch):
    monkeypatch.setattr(
        settings_module,
        "get_app_logger",
        lambda: MagicMock(),
    )


def test_from_env_uses_defaults(monkeypatch) -> None:
    """Unset variables fall back to the documented defaults."""
    monkeypatch.delenv("SETTLEMENT_MAX_GROUP_SIZE", raising=False)
    monkeypatch.delenv("SETTLEMENT_ADMIN_COST_PER_TRAVELLER", raising=False)

    settings = SettlementSettings.from_env()

    assert settings.max_group_size == 5
    assert settings.administrative_cost_per_traveller == Decimal("10")


def test_from_env_reads_values(monkeypatch) -> None:
    monkeypatch.setenv("SETTLEMENT_MAX_GROUP_SIZE", " 8 ")
    monkeypatch.setenv("SETTLEMENT_ADMIN_COST_PER_TRAVELLER", "12.5")

    settings = SettlementSettings.from_env()

    assert settings.max_group_size == 8
    assert settings.administrative_cost_per_traveller == Decimal("12.5")


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("SETTLEMENT_MAX_GROUP_SIZE", "five"),
        ("SETTLEMENT_MAX_GROUP_SIZE", "0"),
        ("SETTLEMENT_ADMIN_COST_PER_TRAVELLER", "ten"),
        ("SETTLEMENT_ADMIN_COST_PER_TRAVELLER", "-1"),
        ("SETTLEMENT_ADMIN_COST_PER_TRAVELLER", "NaN"),
    ],
)
def test_from_env_rejects_invalid_values(monkeypatch, name, value) -> None:
    monkeypatch.delenv("SETTLEMENT_MAX_GROUP_SIZE", raising=False)
    monkeypatch.delenv("SETTLEMENT_ADMIN_COST_PER_TRAVELLER", raising=False)
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError):
        SettlementSettings.from_env()
