"""Mapping between domain models and JSON-compatible dictionaries.

Money is stored as decimal strings and dates as ISO 8601 strings. Readers
take only the keys they know, so records written by a newer version with
extra fields still load.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from unctico_billing.domain.models import (
    ExpenseCategory,
    ExpenseRecord,
    IncomeCategory,
    IncomeRecord,
    Invoice,
    InvoiceStatus,
    LineItem,
    Payment,
    PaymentMethod,
    PaymentStatus,
    Receipt,
    Refund,
)
from unctico_billing.utils.decimal_utils import coerce_decimal


def _money(value: Decimal) -> str:
    return str(value)


def _optional(data: dict[str, Any], key: str) -> Any:
    return data.get(key)


def _line_item_to_dict(item: LineItem) -> dict[str, Any]:
    return {
        "description": item.description,
        "quantity": _money(item.quantity),
        "unit_price": _money(item.unit_price),
    }


def _line_item_from_dict(data: dict[str, Any]) -> LineItem:
    return LineItem(
        description=data["description"],
        quantity=coerce_decimal(data["quantity"]),
        unit_price=coerce_decimal(data["unit_price"]),
    )


def invoice_to_dict(invoice: Invoice) -> dict[str, Any]:
    return {
        "id": invoice.id,
        "invoice_number": invoice.invoice_number,
        "client_id": invoice.client_id,
        "line_items": [_line_item_to_dict(item) for item in invoice.line_items],
        "tax_rate": _money(invoice.tax_rate),
        "discount": _money(invoice.discount),
        "issued_on": invoice.issued_on.isoformat(),
        "due_date": invoice.due_date.isoformat(),
        "created_at": invoice.created_at.isoformat(),
        "updated_at": invoice.updated_at.isoformat(),
        "appointment_ids": list(invoice.appointment_ids),
        "paid_amount": _money(invoice.paid_amount),
        "status": invoice.status.value,
        "payment_terms": invoice.payment_terms,
        "notes": invoice.notes,
    }


def invoice_from_dict(data: dict[str, Any]) -> Invoice:
    """Build an invoice from its stored form.

    Raises:
        KeyError: When a required field is missing.
        ValueError: When a value cannot be parsed.
    """
    optional: dict[str, Any] = {}
    if "payment_terms" in data:
        optional["payment_terms"] = data["payment_terms"]
    return Invoice(
        id=data["id"],
        invoice_number=data["invoice_number"],
        client_id=data["client_id"],
        line_items=tuple(
            _line_item_from_dict(item) for item in data.get("line_items", [])
        ),
        tax_rate=coerce_decimal(data.get("tax_rate", "0")),
        discount=coerce_decimal(data.get("discount", "0")),
        issued_on=date.fromisoformat(data["issued_on"]),
        due_date=date.fromisoformat(data["due_date"]),
        created_at=datetime.fromisoformat(data["created_at"]),
        updated_at=datetime.fromisoformat(data["updated_at"]),
        appointment_ids=tuple(data.get("appointment_ids", [])),
        paid_amount=coerce_decimal(data.get("paid_amount", "0")),
        status=InvoiceStatus(data.get("status", InvoiceStatus.UNPAID.value)),
        notes=_optional(data, "notes"),
        **optional,
    )


def _refund_to_dict(refund: Refund) -> dict[str, Any]:
    return {
        "amount": _money(refund.amount),
        "method": refund.method.value,
        "refunded_at": refund.refunded_at.isoformat(),
        "reason": refund.reason,
    }


def _refund_from_dict(data: dict[str, Any]) -> Refund:
    return Refund(
        amount=coerce_decimal(data["amount"]),
        method=PaymentMethod(data["method"]),
        refunded_at=datetime.fromisoformat(data["refunded_at"]),
        reason=_optional(data, "reason"),
    )


def payment_to_dict(payment: Payment) -> dict[str, Any]:
    return {
        "id": payment.id,
        "invoice_id": payment.invoice_id,
        "client_id": payment.client_id,
        "amount": _money(payment.amount),
        "method": payment.method.value,
        "paid_at": payment.paid_at.isoformat(),
        "created_at": payment.created_at.isoformat(),
        "updated_at": payment.updated_at.isoformat(),
        "status": payment.status.value,
        "reference_number": payment.reference_number,
        "notes": payment.notes,
        "refund": (
            _refund_to_dict(payment.refund) if payment.refund else None
        ),
    }


def payment_from_dict(data: dict[str, Any]) -> Payment:
    raw_refund = data.get("refund")
    return Payment(
        id=data["id"],
        invoice_id=data["invoice_id"],
        client_id=data["client_id"],
        amount=coerce_decimal(data["amount"]),
        method=PaymentMethod(data["method"]),
        paid_at=datetime.fromisoformat(data["paid_at"]),
        created_at=datetime.fromisoformat(data["created_at"]),
        updated_at=datetime.fromisoformat(data["updated_at"]),
        status=PaymentStatus(
            data.get("status", PaymentStatus.COMPLETED.value)
        ),
        reference_number=_optional(data, "reference_number"),
        notes=_optional(data, "notes"),
        refund=_refund_from_dict(raw_refund) if raw_refund else None,
    )


def receipt_to_dict(receipt: Receipt) -> dict[str, Any]:
    return {
        "receipt_number": receipt.receipt_number,
        "payment_id": receipt.payment_id,
        "invoice_id": receipt.invoice_id,
        "client_id": receipt.client_id,
        "amount_paid": _money(receipt.amount_paid),
        "method": receipt.method.value,
        "issued_at": receipt.issued_at.isoformat(),
    }


def receipt_from_dict(data: dict[str, Any]) -> Receipt:
    return Receipt(
        receipt_number=data["receipt_number"],
        payment_id=data["payment_id"],
        invoice_id=data["invoice_id"],
        client_id=data["client_id"],
        amount_paid=coerce_decimal(data["amount_paid"]),
        method=PaymentMethod(data["method"]),
        issued_at=datetime.fromisoformat(data["issued_at"]),
    )


def income_to_dict(income: IncomeRecord) -> dict[str, Any]:
    return {
        "id": income.id,
        "date": income.date.isoformat(),
        "amount": _money(income.amount),
        "category": income.category.value,
        "description": income.description,
        "payment_method": income.payment_method.value,
        "source": income.source,
        "is_taxable": income.is_taxable,
        "is_automatic": income.is_automatic,
        "client_id": income.client_id,
        "invoice_id": income.invoice_id,
        "payment_id": income.payment_id,
    }


def income_from_dict(data: dict[str, Any]) -> IncomeRecord:
    category = IncomeCategory(data["category"])
    return IncomeRecord(
        id=data["id"],
        date=date.fromisoformat(data["date"]),
        amount=coerce_decimal(data["amount"]),
        category=category,
        description=data.get("description", ""),
        payment_method=PaymentMethod(data["payment_method"]),
        source=data.get("source", ""),
        is_taxable=bool(data.get("is_taxable", category.default_taxable)),
        is_automatic=bool(data.get("is_automatic", False)),
        client_id=_optional(data, "client_id"),
        invoice_id=_optional(data, "invoice_id"),
        payment_id=_optional(data, "payment_id"),
    )


def expense_to_dict(expense: ExpenseRecord) -> dict[str, Any]:
    return {
        "id": expense.id,
        "date": expense.date.isoformat(),
        "amount": _money(expense.amount),
        "category": expense.category.value,
        "description": expense.description,
        "payment_method": expense.payment_method.value,
        "vendor": expense.vendor,
        "is_tax_deductible": expense.is_tax_deductible,
        "has_receipt": expense.has_receipt,
        "is_automatic": expense.is_automatic,
    }


def expense_from_dict(data: dict[str, Any]) -> ExpenseRecord:
    category = ExpenseCategory(data["category"])
    return ExpenseRecord(
        id=data["id"],
        date=date.fromisoformat(data["date"]),
        amount=coerce_decimal(data["amount"]),
        category=category,
        description=data.get("description", ""),
        payment_method=PaymentMethod(data["payment_method"]),
        vendor=data.get("vendor", ""),
        is_tax_deductible=bool(
            data.get("is_tax_deductible", category.default_deductible)
        ),
        has_receipt=bool(data.get("has_receipt", False)),
        is_automatic=bool(data.get("is_automatic", False)),
    )


__all__ = [
    "invoice_to_dict",
    "invoice_from_dict",
    "payment_to_dict",
    "payment_from_dict",
    "receipt_to_dict",
    "receipt_from_dict",
    "income_to_dict",
    "income_from_dict",
    "expense_to_dict",
    "expense_from_dict",
]
