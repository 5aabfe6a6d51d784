"""Tests for infrastructure settings."""

from decimal import Decimal
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from unctico_billing.infrastructure import settings as settings_module
from unctico_billing.infrastructure.settings import BillingSettings

_VARS = (
    "BILLING_BACKEND",
    "BILLING_DATA_DIR",
    "BILLING_ENCRYPTION_KEY",
    "BILLING_DEFAULT_TAX_RATE",
    "BILLING_GATEWAY_SUCCESS_RATE",
    "BILLING_GATEWAY_DELAY_SECONDS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr(settings_module.dotenv, "load_dotenv", lambda: None)
    monkeypatch.setattr(
        settings_module,
        "get_app_logger",
        lambda: MagicMock(),
    )
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_from_env_defaults(monkeypatch, tmp_path: Path) -> None:
    """Defaults should select the JSON backend under <project>/data."""
    monkeypatch.setattr(settings_module, "get_project_root", lambda: tmp_path)

    settings = BillingSettings.from_env()

    assert settings.backend == "json"
    assert settings.data_dir == tmp_path / "data"
    assert settings.encryption_key is None
    assert settings.default_tax_rate == Decimal("0")
    assert settings.gateway_success_rate == 0.95
    assert settings.gateway_delay_seconds == 1.5


def test_from_env_reads_values(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("BILLING_BACKEND", " SQLAlchemy ")
    monkeypatch.setenv("BILLING_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("BILLING_ENCRYPTION_KEY", "a2V5")
    monkeypatch.setenv("BILLING_DEFAULT_TAX_RATE", "0.0825")
    monkeypatch.setenv("BILLING_GATEWAY_SUCCESS_RATE", "1")
    monkeypatch.setenv("BILLING_GATEWAY_DELAY_SECONDS", "0")

    settings = BillingSettings.from_env()

    assert settings.backend == "sqlalchemy"
    assert settings.data_dir == tmp_path.resolve()
    assert settings.encryption_key == "a2V5"
    assert settings.default_tax_rate == Decimal("0.0825")
    assert settings.gateway_success_rate == 1.0
    assert settings.gateway_delay_seconds == 0.0


@pytest.mark.parametrize(
    "name, value",
    [
        ("BILLING_BACKEND", "mongodb"),
        ("BILLING_DEFAULT_TAX_RATE", "eight"),
        ("BILLING_DEFAULT_TAX_RATE", "-0.1"),
        ("BILLING_DEFAULT_TAX_RATE", "NaN"),
        ("BILLING_GATEWAY_SUCCESS_RATE", "often"),
    ],
)
def test_from_env_rejects_invalid_values(monkeypatch, name, value) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError):
        BillingSettings.from_env()
