"""Tests for invoice arithmetic and status transitions."""

from datetime import datetime
from decimal import Decimal

import pytest

from conftest import NOW, make_appointment, make_invoice
from unctico_billing.domain.errors import (
    AmountExceedsBalanceError,
    InvalidAmountError,
    InvoiceVoidError,
)
from unctico_billing.domain.models import InvoiceStatus, ServiceType
from unctico_billing.domain.services.invoicing import (
    apply_payment,
    apply_refund,
    build_line_items,
    format_document_number,
    price_for_service,
    resolve_status,
    validate_invoice_terms,
    void_invoice,
)

LATER = datetime(2025, 3, 15, 9, 0)


def test_basic_invoice_totals():
    """A single Swedish massage at 8% tax should total 86.40."""
    invoice = make_invoice()

    assert invoice.subtotal == Decimal("80.00")
    assert invoice.tax_amount == Decimal("6.40")
    assert invoice.total == Decimal("86.40")
    assert invoice.balance_remaining == Decimal("86.40")
    assert invoice.status == InvoiceStatus.UNPAID


def test_tax_amount_rounds_half_up_to_cents():
    invoice = make_invoice(prices=("0.50",), tax_rate="0.01")

    assert invoice.tax_amount == Decimal("0.01")


def test_discount_is_subtracted_after_tax():
    invoice = make_invoice(prices=("100.00",), tax_rate="0.10", discount="5")

    assert invoice.total == Decimal("105.00")


@pytest.mark.parametrize(
    "prices, tax_rate, discount",
    [
        (("80.00",), "0.08", "0"),
        (("19.99", "0.01"), "0.0825", "0"),
        (("33.33", "33.33", "33.34"), "0.07", "10.00"),
        (("0.05",) * 7, "0.125", "0.10"),
        (("120.00", "95.00", "110.00", "80.00", "65.00"), "0.0925", "25.50"),
        (("12.34",) * 12, "0", "0"),
    ],
)
def test_total_matches_subtotal_with_tax_less_discount(
    prices,
    tax_rate,
    discount,
):
    invoice = make_invoice(
        prices=prices,
        tax_rate=tax_rate,
        discount=discount,
    )
    expected = invoice.subtotal * (1 + Decimal(tax_rate)) - Decimal(discount)

    assert invoice.subtotal == sum(Decimal(price) for price in prices)
    assert abs(invoice.total - expected) <= Decimal("0.005")
    assert invoice.total == invoice.total.quantize(Decimal("0.01"))


def test_payment_percentage_tracks_paid_share():
    assert make_invoice().payment_percentage == Decimal("0")
    assert make_invoice(paid_amount="43.20").payment_percentage == Decimal(
        "50"
    )
    assert make_invoice(paid_amount="86.40").payment_percentage == Decimal(
        "100"
    )


def test_balance_remaining_never_negative():
    invoice = make_invoice(paid_amount="100.00")

    assert invoice.balance_remaining == Decimal("0")


def test_price_table_and_line_items():
    appointments = [
        make_appointment("a1", service_type=ServiceType.DEEP_TISSUE),
        make_appointment("a2", service_type=ServiceType.HOT_STONE),
    ]

    items = build_line_items(appointments)

    assert price_for_service(ServiceType.MEDICAL) == Decimal("75")
    assert [item.description for item in items] == [
        "Deep Tissue Massage",
        "Hot Stone Massage",
    ]
    assert [item.total for item in items] == [Decimal("100"), Decimal("120")]


@pytest.mark.parametrize(
    "tax_rate, discount",
    [("-0.01", "0"), ("0", "-1"), ("0.08", "86.41")],
)
def test_validate_invoice_terms_rejects_bad_values(tax_rate, discount):
    invoice = make_invoice(tax_rate=tax_rate, discount=discount)

    with pytest.raises(InvalidAmountError):
        validate_invoice_terms(invoice)


def test_validate_invoice_terms_accepts_full_discount():
    validate_invoice_terms(make_invoice(discount="86.40"))


def test_apply_payment_moves_through_statuses():
    invoice = make_invoice()

    partial = apply_payment(invoice, Decimal("40.00"), LATER)
    paid = apply_payment(partial, Decimal("46.40"), LATER)

    assert partial.status == InvoiceStatus.PARTIALLY_PAID
    assert partial.balance_remaining == Decimal("46.40")
    assert partial.updated_at == LATER
    assert paid.status == InvoiceStatus.PAID
    assert paid.balance_remaining == Decimal("0")
    assert invoice.paid_amount == Decimal("0")


def test_apply_payment_rejects_overpayment_without_change():
    invoice = make_invoice()

    with pytest.raises(AmountExceedsBalanceError):
        apply_payment(invoice, Decimal("86.41"), LATER)

    assert invoice.paid_amount == Decimal("0")
    assert invoice.status == InvoiceStatus.UNPAID


@pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5")])
def test_apply_payment_rejects_non_positive_amounts(amount):
    with pytest.raises(InvalidAmountError):
        apply_payment(make_invoice(), amount, LATER)


def test_apply_payment_rejects_void_invoice():
    invoice = make_invoice(status=InvoiceStatus.VOID)

    with pytest.raises(InvoiceVoidError):
        apply_payment(invoice, Decimal("10"), LATER)


def test_refund_then_repay_restores_paid_amount():
    paid = apply_payment(make_invoice(), Decimal("86.40"), LATER)

    refunded = apply_refund(paid, Decimal("86.40"), LATER)
    repaid = apply_payment(refunded, Decimal("86.40"), LATER)

    assert refunded.status == InvoiceStatus.UNPAID
    assert repaid.paid_amount == paid.paid_amount
    assert repaid.status == InvoiceStatus.PAID


def test_apply_refund_clamps_paid_amount_at_zero():
    invoice = make_invoice(paid_amount="10.00")

    refunded = apply_refund(invoice, Decimal("25.00"), LATER)

    assert refunded.paid_amount == Decimal("0")
    assert refunded.status == InvoiceStatus.UNPAID


def test_resolve_status_keeps_void():
    invoice = make_invoice(paid_amount="10", status=InvoiceStatus.VOID)

    assert resolve_status(invoice) == InvoiceStatus.VOID


def test_void_invoice_rules():
    voided = void_invoice(make_invoice(), LATER)

    assert voided.status == InvoiceStatus.VOID
    assert voided.is_outstanding is False
    with pytest.raises(InvoiceVoidError):
        void_invoice(voided, LATER)
    with pytest.raises(InvoiceVoidError):
        void_invoice(
            make_invoice(paid_amount="86.40", status=InvoiceStatus.PAID),
            NOW,
        )


def test_format_document_number_pads_sequence():
    assert format_document_number("REC", 2025, 7) == "REC-2025-0007"
    assert format_document_number("INV", 2025, 12345) == "INV-2025-12345"
