"""Repository ports for billing and ledger persistence.

Implementations raise ``PersistenceError`` when a write cannot be stored and
must leave their in-memory view unchanged in that case.
"""

from typing import Protocol

from unctico_billing.domain.models import (
    ExpenseRecord,
    IncomeRecord,
    Invoice,
    Payment,
    Receipt,
)


class InvoiceRepositoryPort(Protocol):
    """Port exposing invoice storage."""

    def get(self, invoice_id: str) -> Invoice | None:
        """Return the invoice or None when missing."""

    def list_invoices(self) -> list[Invoice]:
        """Return every stored invoice."""

    def save(self, invoice: Invoice) -> None:
        """Insert or replace an invoice."""


class PaymentRepositoryPort(Protocol):
    """Port exposing payment storage."""

    def get(self, payment_id: str) -> Payment | None:
        """Return the payment or None when missing."""

    def list_payments(self) -> list[Payment]:
        """Return every stored payment."""

    def save(self, payment: Payment) -> None:
        """Insert or replace a payment."""

    def delete(self, payment_id: str) -> None:
        """Remove a payment; used to undo a partially persisted write."""


class ReceiptRepositoryPort(Protocol):
    """Port exposing receipt storage."""

    def list_receipts(self) -> list[Receipt]:
        """Return every issued receipt."""

    def save(self, receipt: Receipt) -> None:
        """Store a newly issued receipt."""


class LedgerRepositoryPort(Protocol):
    """Port exposing income and expense entries."""

    def list_incomes(self) -> list[IncomeRecord]:
        """Return every income entry."""

    def list_expenses(self) -> list[ExpenseRecord]:
        """Return every expense entry."""

    def save_income(self, income: IncomeRecord) -> None:
        """Insert or replace an income entry."""

    def save_expense(self, expense: ExpenseRecord) -> None:
        """Insert or replace an expense entry."""

    def delete_income(self, income_id: str) -> None:
        """Remove an income entry."""

    def delete_expense(self, expense_id: str) -> None:
        """Remove an expense entry."""


class SequenceRepositoryPort(Protocol):
    """Port exposing persisted, monotonically increasing counters."""

    def next_value(self, name: str, year: int) -> int:
        """Reserve and return the next value (starting at 1) for the key."""


__all__ = [
    "InvoiceRepositoryPort",
    "PaymentRepositoryPort",
    "ReceiptRepositoryPort",
    "LedgerRepositoryPort",
    "SequenceRepositoryPort",
]
