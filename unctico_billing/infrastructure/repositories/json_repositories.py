"""JSON file repositories for invoices, payments, receipts and the ledger."""

from collections.abc import Callable
from typing import Any, Generic, TypeVar

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
from unctico_billing.infrastructure.json_store import JsonFileStore
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

INVOICES_FILE = "invoices.json"
PAYMENTS_FILE = "payments.json"
RECEIPTS_FILE = "receipts.json"
INCOMES_FILE = "incomes.json"
EXPENSES_FILE = "expenses.json"
SEQUENCES_FILE = "sequences.json"

_Record = TypeVar("_Record")


class _JsonCollection(Generic[_Record]):
    """Keyed collection mirrored to one JSON array file.

    The file is loaded on first access. Mutations write the whole array and
    only replace the cached records once the write succeeded.
    """

    def __init__(
        self,
        store: JsonFileStore,
        filename: str,
        key: Callable[[_Record], str],
        to_dict: Callable[[_Record], dict[str, Any]],
        from_dict: Callable[[dict[str, Any]], _Record],
    ) -> None:
        self._store = store
        self._filename = filename
        self._key = key
        self._to_dict = to_dict
        self._from_dict = from_dict
        self._records: dict[str, _Record] | None = None

    def _load(self) -> dict[str, _Record]:
        if self._records is None:
            raw = self._store.read(self._filename, [])
            try:
                records = [self._from_dict(item) for item in raw]
            except (KeyError, TypeError, ValueError) as exc:
                raise PersistenceError(
                    f"Invalid record in {self._filename}: {exc}"
                ) from exc
            self._records = {self._key(record): record for record in records}
        return self._records

    def _commit(self, records: dict[str, _Record]) -> None:
        self._store.write(
            self._filename,
            [self._to_dict(record) for record in records.values()],
        )
        self._records = records

    def get(self, key: str) -> _Record | None:
        return self._load().get(key)

    def values(self) -> list[_Record]:
        return list(self._load().values())

    def put(self, record: _Record) -> None:
        records = dict(self._load())
        records[self._key(record)] = record
        self._commit(records)

    def remove(self, key: str) -> None:
        records = dict(self._load())
        if records.pop(key, None) is None:
            return
        self._commit(records)


class JsonInvoiceRepository(InvoiceRepositoryPort):
    """Invoices stored in ``invoices.json``."""

    def __init__(self, store: JsonFileStore) -> None:
        self._collection = _JsonCollection(
            store,
            INVOICES_FILE,
            key=lambda invoice: invoice.id,
            to_dict=invoice_to_dict,
            from_dict=invoice_from_dict,
        )

    def get(self, invoice_id: str) -> Invoice | None:
        return self._collection.get(invoice_id)

    def list_invoices(self) -> list[Invoice]:
        return self._collection.values()

    def save(self, invoice: Invoice) -> None:
        self._collection.put(invoice)


class JsonPaymentRepository(PaymentRepositoryPort):
    """Payments stored in ``payments.json``."""

    def __init__(self, store: JsonFileStore) -> None:
        self._collection = _JsonCollection(
            store,
            PAYMENTS_FILE,
            key=lambda payment: payment.id,
            to_dict=payment_to_dict,
            from_dict=payment_from_dict,
        )

    def get(self, payment_id: str) -> Payment | None:
        return self._collection.get(payment_id)

    def list_payments(self) -> list[Payment]:
        return self._collection.values()

    def save(self, payment: Payment) -> None:
        self._collection.put(payment)

    def delete(self, payment_id: str) -> None:
        self._collection.remove(payment_id)


class JsonReceiptRepository(ReceiptRepositoryPort):
    """Receipts stored in ``receipts.json``, keyed by receipt number."""

    def __init__(self, store: JsonFileStore) -> None:
        self._collection = _JsonCollection(
            store,
            RECEIPTS_FILE,
            key=lambda receipt: receipt.receipt_number,
            to_dict=receipt_to_dict,
            from_dict=receipt_from_dict,
        )

    def list_receipts(self) -> list[Receipt]:
        return self._collection.values()

    def save(self, receipt: Receipt) -> None:
        self._collection.put(receipt)


class JsonLedgerRepository(LedgerRepositoryPort):
    """Income and expense entries in ``incomes.json``/``expenses.json``."""

    def __init__(self, store: JsonFileStore) -> None:
        self._incomes = _JsonCollection(
            store,
            INCOMES_FILE,
            key=lambda income: income.id,
            to_dict=income_to_dict,
            from_dict=income_from_dict,
        )
        self._expenses = _JsonCollection(
            store,
            EXPENSES_FILE,
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


class JsonSequenceRepository(SequenceRepositoryPort):
    """Per-(name, year) counters stored in ``sequences.json``."""

    def __init__(self, store: JsonFileStore) -> None:
        self._store = store

    def next_value(self, name: str, year: int) -> int:
        counters: dict[str, int] = dict(self._store.read(SEQUENCES_FILE, {}))
        key = f"{name}-{year}"
        value = int(counters.get(key, 0)) + 1
        counters[key] = value
        self._store.write(SEQUENCES_FILE, counters)
        return value


__all__ = [
    "JsonInvoiceRepository",
    "JsonPaymentRepository",
    "JsonReceiptRepository",
    "JsonLedgerRepository",
    "JsonSequenceRepository",
]
