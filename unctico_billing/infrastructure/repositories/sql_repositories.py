"""SQLAlchemy-backed repositories storing billing documents as JSON."""

import json
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from unctico_billing.application.ports.database import DatabaseEnginePort
from unctico_billing.application.ports.repositories import (
    InvoiceRepositoryPort,
    LedgerRepositoryPort,
    PaymentRepositoryPort,
    ReceiptRepositoryPort,
    SequenceRepositoryPort,
)
from unctico_billing.domain.errors import PersistenceError
from unctico_billing.domain.models import (
    ExpenseRecord,
    IncomeRecord,
    Invoice,
    Payment,
    Receipt,
)
from unctico_billing.infrastructure.serialization import (
    expense_from_dict,
    expense_to_dict,
    income_from_dict,
    income_to_dict,
    invoice_from_dict,
    invoice_to_dict,
    payment_from_dict,
    payment_to_dict,
    receipt_from_dict,
    receipt_to_dict,
)

_CREATE_DOCUMENTS = text(
    """
    CREATE TABLE IF NOT EXISTS billing_documents (
        kind VARCHAR(32) NOT NULL,
        id VARCHAR(64) NOT NULL,
        payload TEXT NOT NULL,
        PRIMARY KEY (kind, id)
    )
    """
)
_CREATE_SEQUENCES = text(
    """
    CREATE TABLE IF NOT EXISTS billing_sequences (
        name VARCHAR(16) NOT NULL,
        year INTEGER NOT NULL,
        value INTEGER NOT NULL,
        PRIMARY KEY (name, year)
    )
    """
)

_Record = TypeVar("_Record")


def ensure_schema(db_port: DatabaseEnginePort) -> None:
    """Create the billing tables when they do not exist.

    Raises:
        PersistenceError: When the statements fail.
    """
    try:
        with db_port.get_billing_engine().begin() as conn:
            conn.execute(_CREATE_DOCUMENTS)
            conn.execute(_CREATE_SEQUENCES)
    except SQLAlchemyError as exc:
        raise PersistenceError(f"Could not create billing tables: {exc}") from exc


class _SqlDocuments(Generic[_Record]):
    """Documents of one kind in the ``billing_documents`` table."""

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        kind: str,
        key: Callable[[_Record], str],
        to_dict: Callable[[_Record], dict[str, Any]],
        from_dict: Callable[[dict[str, Any]], _Record],
    ) -> None:
        self._db_port = db_port
        self._kind = kind
        self._key = key
        self._to_dict = to_dict
        self._from_dict = from_dict

    def get(self, key: str) -> _Record | None:
        query = text(
            """
            SELECT payload
            FROM billing_documents
            WHERE kind = :kind AND id = :id
            """
        )
        try:
            with self._db_port.get_billing_engine().connect() as conn:
                row = conn.execute(
                    query,
                    {"kind": self._kind, "id": key},
                ).first()
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Could not read {self._kind} {key}: {exc}"
            ) from exc
        if row is None:
            return None
        return self._decode(row.payload)

    def values(self) -> list[_Record]:
        query = text(
            """
            SELECT payload
            FROM billing_documents
            WHERE kind = :kind
            ORDER BY id
            """
        )
        try:
            with self._db_port.get_billing_engine().connect() as conn:
                rows = conn.execute(query, {"kind": self._kind}).all()
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Could not list {self._kind} documents: {exc}"
            ) from exc
        return [self._decode(row.payload) for row in rows]

    def _decode(self, payload: str) -> _Record:
        try:
            return self._from_dict(json.loads(payload))
        except (KeyError, TypeError, ValueError) as exc:
            raise PersistenceError(
                f"Invalid {self._kind} document: {exc}"
            ) from exc

    def put(self, record: _Record) -> None:
        params = {
            "kind": self._kind,
            "id": self._key(record),
            "payload": json.dumps(self._to_dict(record)),
        }
        try:
            with self._db_port.get_billing_engine().begin() as conn:
                conn.execute(
                    text(
                        "DELETE FROM billing_documents "
                        "WHERE kind = :kind AND id = :id"
                    ),
                    params,
                )
                conn.execute(
                    text(
                        "INSERT INTO billing_documents (kind, id, payload) "
                        "VALUES (:kind, :id, :payload)"
                    ),
                    params,
                )
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Could not store {self._kind} {params['id']}: {exc}"
            ) from exc

    def remove(self, key: str) -> None:
        try:
            with self._db_port.get_billing_engine().begin() as conn:
                conn.execute(
                    text(
                        "DELETE FROM billing_documents "
                        "WHERE kind = :kind AND id = :id"
                    ),
                    {"kind": self._kind, "id": key},
                )
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Could not delete {self._kind} {key}: {exc}"
            ) from exc


class SqlAlchemyInvoiceRepository(InvoiceRepositoryPort):
    """Invoices stored in the billing database."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the billing engine.
        """
        self._documents = _SqlDocuments(
            db_port,
            "invoice",
            key=lambda invoice: invoice.id,
            to_dict=invoice_to_dict,
            from_dict=invoice_from_dict,
        )

    def get(self, invoice_id: str) -> Invoice | None:
        return self._documents.get(invoice_id)

    def list_invoices(self) -> list[Invoice]:
        return self._documents.values()

    def save(self, invoice: Invoice) -> None:
        self._documents.put(invoice)


class SqlAlchemyPaymentRepository(PaymentRepositoryPort):
    """Payments stored in the billing database."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        self._documents = _SqlDocuments(
            db_port,
            "payment",
            key=lambda payment: payment.id,
            to_dict=payment_to_dict,
            from_dict=payment_from_dict,
        )

    def get(self, payment_id: str) -> Payment | None:
        return self._documents.get(payment_id)

    def list_payments(self) -> list[Payment]:
        return self._documents.values()

    def save(self, payment: Payment) -> None:
        self._documents.put(payment)

    def delete(self, payment_id: str) -> None:
        self._documents.remove(payment_id)


class SqlAlchemyReceiptRepository(ReceiptRepositoryPort):
    """Receipts stored in the billing database."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        self._documents = _SqlDocuments(
            db_port,
            "receipt",
            key=lambda receipt: receipt.receipt_number,
            to_dict=receipt_to_dict,
            from_dict=receipt_from_dict,
        )

    def list_receipts(self) -> list[Receipt]:
        return self._documents.values()

    def save(self, receipt: Receipt) -> None:
        self._documents.put(receipt)


class SqlAlchemyLedgerRepository(LedgerRepositoryPort):
    """Income and expense entries stored in the billing database."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        self._incomes = _SqlDocuments(
            db_port,
            "income",
            key=lambda income: income.id,
            to_dict=income_to_dict,
            from_dict=income_from_dict,
        )
        self._expenses = _SqlDocuments(
            db_port,
            "expense",
            key=lambda expense: expense.id,
            to_dict=expense_to_dict,
            from_dict=expense_from_dict,
        )

    def list_incomes(self) -> list[IncomeRecord]:
        return self._incomes.values()

    def list_expenses(self) -> list[ExpenseRecord]:
        return self._expenses.values()

    def save_income(self, income: IncomeRecord) -> None:
        self._incomes.put(income)

    def save_expense(self, expense: ExpenseRecord) -> None:
        self._expenses.put(expense)

    def delete_income(self, income_id: str) -> None:
        self._incomes.remove(income_id)

    def delete_expense(self, expense_id: str) -> None:
        self._expenses.remove(expense_id)


class SqlAlchemySequenceRepository(SequenceRepositoryPort):
    """Counters stored in ``billing_sequences``."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        self._db_port = db_port

    def next_value(self, name: str, year: int) -> int:
        params = {"name": name, "year": year}
        try:
            with self._db_port.get_billing_engine().begin() as conn:
                row = conn.execute(
                    text(
                        "SELECT value FROM billing_sequences "
                        "WHERE name = :name AND year = :year"
                    ),
                    params,
                ).first()
                if row is None:
                    value = 1
                    conn.execute(
                        text(
                            "INSERT INTO billing_sequences (name, year, value) "
                            "VALUES (:name, :year, :value)"
                        ),
                        {**params, "value": value},
                    )
                else:
                    value = int(row.value) + 1
                    conn.execute(
                        text(
                            "UPDATE billing_sequences SET value = :value "
                            "WHERE name = :name AND year = :year"
                        ),
                        {**params, "value": value},
                    )
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"Could not advance sequence {name}-{year}: {exc}"
            ) from exc
        return value


__all__ = [
    "ensure_schema",
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyPaymentRepository",
    "SqlAlchemyReceiptRepository",
    "SqlAlchemyLedgerRepository",
    "SqlAlchemySequenceRepository",
]
