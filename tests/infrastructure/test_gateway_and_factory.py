"""Tests for the simulated gateway, repository factory and container."""

from decimal import Decimal
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from unctico_billing.application.ports.payment_gateway import GatewayError
from unctico_billing.domain.models import CardBrand, CardDetails
from unctico_billing.infrastructure import container
from unctico_billing.infrastructure.encryption import AesGcmCipher
from unctico_billing.infrastructure.repositories.json_repositories import (
    JsonInvoiceRepository,
)
from unctico_billing.infrastructure.repository_factory import (
    create_billing_repositories,
)
from unctico_billing.infrastructure.settings import BillingSettings
from unctico_billing.infrastructure.simulated_gateway import (
    SimulatedPaymentGateway,
)

CARD = CardDetails("4532015112830366", 12, 2030, "123")


def test_simulated_gateway_approves_below_success_rate():
    sleeps = []
    gateway = SimulatedPaymentGateway(
        sleep=sleeps.append,
        rng=lambda: 0.10,
        logger=MagicMock(),
    )

    charge = gateway.authorize(CARD, Decimal("86.40"))

    assert sleeps == [1.5]
    assert charge.amount == Decimal("86.40")
    assert charge.card_last_four == "0366"
    assert charge.brand == CardBrand.VISA
    assert charge.charge_id.startswith("sim_")


def test_simulated_gateway_declines_at_or_above_success_rate():
    gateway = SimulatedPaymentGateway(
        success_rate=0.95,
        sleep=lambda seconds: None,
        rng=lambda: 0.95,
        logger=MagicMock(),
    )

    with pytest.raises(GatewayError):
        gateway.authorize(CARD, Decimal("10"))


def test_simulated_gateway_rejects_bad_rate():
    with pytest.raises(ValueError):
        SimulatedPaymentGateway(success_rate=1.5, logger=MagicMock())


def test_factory_builds_json_repositories(tmp_path: Path):
    settings = BillingSettings(
        backend="json",
        data_dir=tmp_path,
        encryption_key=AesGcmCipher.generate_key(),
    )

    repositories = create_billing_repositories(settings, logger=MagicMock())

    assert isinstance(repositories.invoices, JsonInvoiceRepository)
    assert repositories.sequences.next_value("INV", 2025) == 1


def test_factory_requires_db_port_for_sql():
    settings = BillingSettings(backend="sqlalchemy")

    with pytest.raises(RuntimeError):
        create_billing_repositories(settings, logger=MagicMock())


def test_factory_rejects_unknown_backend():
    with pytest.raises(ValueError):
        create_billing_repositories(
            BillingSettings(backend="mongodb"),
            logger=MagicMock(),
        )


def test_container_wires_gateway_from_settings():
    settings = BillingSettings(
        gateway_success_rate=1.0,
        gateway_delay_seconds=0.0,
    )

    gateway = container.build_payment_gateway(settings)

    assert isinstance(gateway, SimulatedPaymentGateway)
    assert gateway.authorize(CARD, Decimal("1")).amount == Decimal("1")


def test_container_builds_sql_repositories_with_adapter(monkeypatch):
    fake_adapter = object()
    captured = {}

    def _fake_factory(settings, db_port, logger):
        captured["db_port"] = db_port
        return "repositories"

    monkeypatch.setattr(
        container,
        "build_database_adapter",
        lambda: fake_adapter,
    )
    monkeypatch.setattr(
        container,
        "create_billing_repositories",
        _fake_factory,
    )

    result = container.build_repositories(
        BillingSettings(backend="sqlalchemy")
    )

    assert result == "repositories"
    assert captured["db_port"] is fake_adapter
