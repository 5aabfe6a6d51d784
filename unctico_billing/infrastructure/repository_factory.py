"""Factory helpers to select the billing storage backend."""

from dataclasses import dataclass

from unctico_billing.application.ports.database import DatabaseEnginePort
from unctico_billing.application.ports.repositories import (
    InvoiceRepositoryPort,
    LedgerRepositoryPort,
    PaymentRepositoryPort,
    ReceiptRepositoryPort,
    SequenceRepositoryPort,
)
from unctico_billing.infrastructure.encryption import AesGcmCipher
from unctico_billing.infrastructure.json_store import JsonFileStore
from unctico_billing.infrastructure.logging.logger import get_app_logger
from unctico_billing.infrastructure.repositories.json_repositories import (
    JsonInvoiceRepository,
    JsonLedgerRepository,
    JsonPaymentRepository,
    JsonReceiptRepository,
    JsonSequenceRepository,
)
from unctico_billing.infrastructure.repositories.sql_repositories import (
    SqlAlchemyInvoiceRepository,
    SqlAlchemyLedgerRepository,
    SqlAlchemyPaymentRepository,
    SqlAlchemyReceiptRepository,
    SqlAlchemySequenceRepository,
    ensure_schema,
)
from unctico_billing.infrastructure.settings import BillingSettings


@dataclass(frozen=True)
class BillingRepositories:
    """Repositories sharing one storage backend."""

    invoices: InvoiceRepositoryPort
    payments: PaymentRepositoryPort
    receipts: ReceiptRepositoryPort
    ledger: LedgerRepositoryPort
    sequences: SequenceRepositoryPort


def create_billing_repositories(
    settings: BillingSettings,
    db_port: DatabaseEnginePort | None = None,
    logger=None,
) -> BillingRepositories:
    """Return repositories for the configured backend.

    Args:
        settings: Billing settings selecting the backend.
        db_port: Port providing the billing engine (SQL backend).
        logger: Optional logger compatible with logging.Logger-like API.

    Returns:
        BillingRepositories: Concrete repository implementations.

    Raises:
        RuntimeError: When the SQL backend is selected without a db port.
        ValueError: When the backend is unknown.
    """
    resolved_logger = logger or get_app_logger()

    if settings.backend == "json":
        cipher = (
            AesGcmCipher.from_encoded_key(settings.encryption_key)
            if settings.encryption_key
            else None
        )
        store = JsonFileStore(
            settings.data_dir,
            cipher=cipher,
            logger=resolved_logger,
        )
        resolved_logger.info(f"Using JSON billing store at {settings.data_dir}")
        return BillingRepositories(
            invoices=JsonInvoiceRepository(store),
            payments=JsonPaymentRepository(store),
            receipts=JsonReceiptRepository(store),
            ledger=JsonLedgerRepository(store),
            sequences=JsonSequenceRepository(store),
        )

    if settings.backend == "sqlalchemy":
        if db_port is None:
            raise RuntimeError("SQL backend requires a database adapter.")
        ensure_schema(db_port)
        resolved_logger.info("Using SQL billing store")
        return BillingRepositories(
            invoices=SqlAlchemyInvoiceRepository(db_port),
            payments=SqlAlchemyPaymentRepository(db_port),
            receipts=SqlAlchemyReceiptRepository(db_port),
            ledger=SqlAlchemyLedgerRepository(db_port),
            sequences=SqlAlchemySequenceRepository(db_port),
        )

    raise ValueError(
        "Unsupported billing backend: "
        f"{settings.backend}. Expected json or sqlalchemy."
    )


__all__ = ["BillingRepositories", "create_billing_repositories"]
