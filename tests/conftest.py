"""Shared in-memory repositories and builders for billing tests."""

from datetime import date, datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from unctico_billing.domain.models import (
    Appointment,
    ExpenseCategory,
    ExpenseRecord,
    IncomeCategory,
    IncomeRecord,
    Invoice,
    LineItem,
    PaymentMethod,
    ServiceType,
)

NOW = datetime(2025, 3, 14, 10, 30)


class InMemoryInvoices:
    def __init__(self):
        self.items = {}

    def get(self, invoice_id):
        return self.items.get(invoice_id)

    def list_invoices(self):
        return list(self.items.values())

    def save(self, invoice):
        self.items[invoice.id] = invoice


class InMemoryPayments:
    def __init__(self):
        self.items = {}

    def get(self, payment_id):
        return self.items.get(payment_id)

    def list_payments(self):
        return list(self.items.values())

    def save(self, payment):
        self.items[payment.id] = payment

    def delete(self, payment_id):
        self.items.pop(payment_id, None)


class InMemoryReceipts:
    def __init__(self):
        self.items = []

    def list_receipts(self):
        return list(self.items)

    def save(self, receipt):
        self.items.append(receipt)


class InMemoryLedger:
    def __init__(self):
        self.incomes = {}
        self.expenses = {}

    def list_incomes(self):
        return list(self.incomes.values())

    def list_expenses(self):
        return list(self.expenses.values())

    def save_income(self, income):
        self.incomes[income.id] = income

    def save_expense(self, expense):
        self.expenses[expense.id] = expense

    def delete_income(self, income_id):
        self.incomes.pop(income_id, None)

    def delete_expense(self, expense_id):
        self.expenses.pop(expense_id, None)


class InMemorySequences:
    def __init__(self):
        self.values = {}

    def next_value(self, name, year):
        key = (name, year)
        self.values[key] = self.values.get(key, 0) + 1
        return self.values[key]


def make_invoice(
    invoice_id="inv-1",
    client_id="client-1",
    prices=("80.00",),
    tax_rate="0.08",
    discount="0",
    paid_amount="0",
    **overrides,
):
    """Build an invoice with one line item per price."""
    fields = dict(
        id=invoice_id,
        invoice_number="INV-2025-0001",
        client_id=client_id,
        line_items=tuple(
            LineItem("Swedish Massage", Decimal("1"), Decimal(price))
            for price in prices
        ),
        tax_rate=Decimal(tax_rate),
        discount=Decimal(discount),
        issued_on=NOW.date(),
        due_date=NOW.date(),
        created_at=NOW,
        updated_at=NOW,
        paid_amount=Decimal(paid_amount),
    )
    fields.update(overrides)
    return Invoice(**fields)


def make_appointment(appointment_id="appt-1", client_id="client-1",
                     service_type=ServiceType.SWEDISH):
    return Appointment(
        id=appointment_id,
        client_id=client_id,
        service_type=service_type,
        starts_at=NOW,
    )


def make_income(entry_id, entry_date, amount, category=None, method=None,
                is_taxable=True):
    return IncomeRecord(
        id=entry_id,
        date=entry_date,
        amount=Decimal(amount),
        category=category or IncomeCategory.MASSAGE_SERVICES,
        description=f"income {entry_id}",
        payment_method=method or PaymentMethod.CASH,
        is_taxable=is_taxable,
    )


def make_expense(entry_id, entry_date, amount, category=None, method=None,
                 has_receipt=True, is_tax_deductible=True):
    return ExpenseRecord(
        id=entry_id,
        date=entry_date,
        amount=Decimal(amount),
        category=category or ExpenseCategory.RENT,
        description=f"expense {entry_id}",
        payment_method=method or PaymentMethod.CARD,
        has_receipt=has_receipt,
        is_tax_deductible=is_tax_deductible,
    )


@pytest.fixture
def invoices():
    return InMemoryInvoices()


@pytest.fixture
def payments():
    return InMemoryPayments()


@pytest.fixture
def receipts():
    return InMemoryReceipts()


@pytest.fixture
def ledger():
    return InMemoryLedger()


@pytest.fixture
def sequences():
    return InMemorySequences()


@pytest.fixture
def fake_logger():
    return MagicMock()


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def today():
    return date(2025, 3, 14)
