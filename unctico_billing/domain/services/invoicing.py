"""Invoice arithmetic and status transitions.

Functions here are pure: they receive an invoice and return a new one, or
raise a ``BillingError`` leaving the input untouched.
"""

from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime
from decimal import Decimal

from unctico_billing.domain.constants import SERVICE_PRICES
from unctico_billing.domain.errors import (
    AmountExceedsBalanceError,
    InvalidAmountError,
    InvoiceVoidError,
)
from unctico_billing.domain.models import (
    Appointment,
    Invoice,
    InvoiceStatus,
    LineItem,
    ServiceType,
)
from unctico_billing.utils.decimal_utils import (
    ZERO,
    coerce_decimal,
    format_currency,
    to_money,
)


def parse_decimal(value, label: str = "Amount") -> Decimal:
    """Convert caller input to a finite Decimal.

    Raises:
        InvalidAmountError: When the value is not a finite number.
    """
    try:
        return coerce_decimal(value)
    except ValueError as exc:
        raise InvalidAmountError(
            f"{label} must be a number, got {value!r}"
        ) from exc


def parse_amount(value, label: str = "Amount") -> Decimal:
    """Convert caller input to a money amount rounded to cents.

    Raises:
        InvalidAmountError: When the value is not a finite number.
    """
    return to_money(parse_decimal(value, label))


def price_for_service(service_type: ServiceType) -> Decimal:
    """Return the list price for a service type."""
    return SERVICE_PRICES[ServiceType(service_type).value]


def build_line_items(
    appointments: Iterable[Appointment],
) -> tuple[LineItem, ...]:
    """Create one line item per appointment from the price table."""
    return tuple(
        LineItem(
            description=appointment.service_type.label,
            quantity=Decimal("1"),
            unit_price=price_for_service(appointment.service_type),
        )
        for appointment in appointments
    )


def validate_invoice_terms(invoice: Invoice) -> None:
    """Check the rate and discount of a freshly built invoice.

    Raises:
        InvalidAmountError: On negative rate or discount, or a discount
            larger than subtotal plus tax.
    """
    if invoice.tax_rate < 0:
        raise InvalidAmountError("Tax rate cannot be negative")
    if invoice.discount < 0:
        raise InvalidAmountError("Discount cannot be negative")
    if invoice.discount > invoice.subtotal + invoice.tax_amount:
        raise InvalidAmountError(
            "Discount exceeds the invoice amount "
            f"({format_currency(invoice.subtotal + invoice.tax_amount)})"
        )


def resolve_status(invoice: Invoice) -> InvoiceStatus:
    """Derive the status from paid amount versus total.

    Void invoices keep their status.
    """
    if invoice.is_void:
        return InvoiceStatus.VOID
    if invoice.paid_amount <= 0:
        return InvoiceStatus.UNPAID
    if invoice.paid_amount >= invoice.total:
        return InvoiceStatus.PAID
    return InvoiceStatus.PARTIALLY_PAID


def apply_payment(
    invoice: Invoice,
    amount: Decimal,
    now: datetime,
) -> Invoice:
    """Return the invoice with ``amount`` applied.

    Raises:
        InvalidAmountError: When amount is not positive.
        InvoiceVoidError: When the invoice is void.
        AmountExceedsBalanceError: When amount exceeds the balance.
    """
    if amount <= 0:
        raise InvalidAmountError("Payment amount must be greater than zero")
    if invoice.is_void:
        raise InvoiceVoidError(
            f"Invoice {invoice.invoice_number} is void and cannot be paid"
        )
    if amount > invoice.balance_remaining:
        raise AmountExceedsBalanceError(
            "Payment amount exceeds invoice balance "
            f"({format_currency(invoice.balance_remaining)})"
        )
    updated = replace(
        invoice,
        paid_amount=invoice.paid_amount + amount,
        updated_at=now,
    )
    return replace(updated, status=resolve_status(updated))


def apply_refund(
    invoice: Invoice,
    amount: Decimal,
    now: datetime,
) -> Invoice:
    """Return the invoice with ``amount`` taken back out of paid_amount."""
    if amount <= 0:
        raise InvalidAmountError("Refund amount must be greater than zero")
    updated = replace(
        invoice,
        paid_amount=max(invoice.paid_amount - amount, ZERO),
        updated_at=now,
    )
    return replace(updated, status=resolve_status(updated))


def void_invoice(invoice: Invoice, now: datetime) -> Invoice:
    """Mark an unpaid or partially paid invoice as void.

    Raises:
        InvoiceVoidError: When the invoice is already void or fully paid.
    """
    if invoice.is_void:
        raise InvoiceVoidError(
            f"Invoice {invoice.invoice_number} is already void"
        )
    if invoice.status == InvoiceStatus.PAID:
        raise InvoiceVoidError(
            f"Invoice {invoice.invoice_number} is paid and cannot be voided"
        )
    return replace(invoice, status=InvoiceStatus.VOID, updated_at=now)


def format_document_number(prefix: str, year: int, sequence: int) -> str:
    """Return numbers such as ``REC-2025-0001``."""
    return f"{prefix}-{year:04d}-{sequence:04d}"


__all__ = [
    "parse_decimal",
    "parse_amount",
    "price_for_service",
    "build_line_items",
    "validate_invoice_terms",
    "resolve_status",
    "apply_payment",
    "apply_refund",
    "void_invoice",
    "format_document_number",
]
