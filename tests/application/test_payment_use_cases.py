"""Tests for recording and refunding payments."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from conftest import NOW, make_invoice
from unctico_billing.application.use_cases.issue_refund import (
    IssueRefundUseCase,
)
from unctico_billing.application.use_cases.record_payment import (
    RecordPaymentUseCase,
)
from unctico_billing.domain.errors import (
    AlreadyRefundedError,
    AmountExceedsBalanceError,
    InvalidAmountError,
    InvoiceNotFoundError,
    InvoiceVoidError,
    PaymentNotFoundError,
    PersistenceError,
)
from unctico_billing.domain.models import (
    ExpenseCategory,
    IncomeCategory,
    InvoiceStatus,
    PaymentMethod,
    PaymentStatus,
)


def _record_use_case(invoices, payments, ledger=None, clock=lambda: NOW):
    return RecordPaymentUseCase(
        invoices,
        payments,
        ledger=ledger,
        logger=MagicMock(),
        usage_logger=MagicMock(),
        clock=clock,
    )


def _refund_use_case(invoices, payments, ledger=None):
    return IssueRefundUseCase(
        invoices,
        payments,
        ledger=ledger,
        logger=MagicMock(),
        usage_logger=MagicMock(),
        clock=lambda: NOW,
    )


def test_record_payment_updates_invoice_and_posts_income(
    invoices,
    payments,
    ledger,
):
    invoices.save(make_invoice())
    use_case = _record_use_case(invoices, payments, ledger)

    payment = use_case.execute(
        "inv-1",
        "client-1",
        "40",
        PaymentMethod.CASH,
        reference_number="R-1",
    )

    assert payment.amount == Decimal("40.00")
    assert payment.status == PaymentStatus.COMPLETED
    assert payments.get(payment.id) == payment
    invoice = invoices.get("inv-1")
    assert invoice.paid_amount == Decimal("40.00")
    assert invoice.status == InvoiceStatus.PARTIALLY_PAID
    (income,) = ledger.list_incomes()
    assert income.amount == Decimal("40.00")
    assert income.category == IncomeCategory.MASSAGE_SERVICES
    assert income.is_automatic is True
    assert income.payment_id == payment.id
    assert income.invoice_id == "inv-1"


def test_paid_amount_equals_sum_of_payments(invoices, payments):
    invoices.save(make_invoice())
    use_case = _record_use_case(invoices, payments)

    for amount in ("10.00", "20.00", "56.40"):
        use_case.execute("inv-1", "client-1", amount, PaymentMethod.CHECK)

    total = sum(p.amount for p in payments.list_payments())
    assert invoices.get("inv-1").paid_amount == total
    assert invoices.get("inv-1").status == InvoiceStatus.PAID


def test_overpayment_rejected_and_nothing_written(invoices, payments, ledger):
    original = make_invoice()
    invoices.save(original)
    use_case = _record_use_case(invoices, payments, ledger)

    with pytest.raises(AmountExceedsBalanceError):
        use_case.execute("inv-1", "client-1", "86.41", PaymentMethod.CASH)

    assert invoices.get("inv-1") == original
    assert payments.list_payments() == []
    assert ledger.list_incomes() == []


@pytest.mark.parametrize(
    "amount",
    ["0", "-1", "abc", "NaN", "Infinity", "", Decimal("-Infinity")],
)
def test_invalid_payment_amount_rejected(invoices, payments, ledger, amount):
    invoices.save(make_invoice())

    with pytest.raises(InvalidAmountError):
        _record_use_case(invoices, payments, ledger).execute(
            "inv-1",
            "client-1",
            amount,
            PaymentMethod.CASH,
        )
    assert payments.list_payments() == []
    assert ledger.list_incomes() == []
    assert invoices.get("inv-1") == make_invoice()


def test_payment_on_missing_or_void_invoice(invoices, payments):
    invoices.save(make_invoice(status=InvoiceStatus.VOID))
    use_case = _record_use_case(invoices, payments)

    with pytest.raises(InvoiceNotFoundError):
        use_case.execute("missing", "client-1", "5", PaymentMethod.CASH)
    with pytest.raises(InvoiceVoidError):
        use_case.execute("inv-1", "client-1", "5", PaymentMethod.CASH)


def test_failed_income_write_undoes_payment_and_invoice(invoices, payments):
    original = make_invoice()
    invoices.save(original)
    failing_ledger = MagicMock()
    failing_ledger.save_income.side_effect = PersistenceError("disk full")
    use_case = _record_use_case(invoices, payments, failing_ledger)

    with pytest.raises(PersistenceError):
        use_case.execute("inv-1", "client-1", "20", PaymentMethod.CASH)

    assert payments.list_payments() == []
    assert invoices.get("inv-1") == original


def test_full_refund_marks_payment_refunded(invoices, payments, ledger):
    invoices.save(make_invoice())
    payment = _record_use_case(invoices, payments).execute(
        "inv-1",
        "client-1",
        "86.40",
        PaymentMethod.CARD,
    )

    result = _refund_use_case(invoices, payments, ledger).execute(
        payment.id,
        "86.40",
        reason="Client cancelled",
    )

    assert result.payment.status == PaymentStatus.REFUNDED
    assert result.payment.refund.amount == Decimal("86.40")
    assert result.payment.net_amount == Decimal("0")
    assert result.invoice.paid_amount == Decimal("0")
    assert result.invoice.status == InvoiceStatus.UNPAID
    (expense,) = ledger.list_expenses()
    assert expense.category == ExpenseCategory.REFUNDS
    assert expense.amount == Decimal("86.40")
    assert expense.is_automatic is True


def test_partial_refund_marks_partially_refunded(invoices, payments):
    invoices.save(make_invoice())
    payment = _record_use_case(invoices, payments).execute(
        "inv-1",
        "client-1",
        "86.40",
        PaymentMethod.CARD,
    )

    result = _refund_use_case(invoices, payments).execute(payment.id, "20")

    assert result.payment.status == PaymentStatus.PARTIALLY_REFUNDED
    assert result.payment.net_amount == Decimal("66.40")
    assert result.invoice.paid_amount == Decimal("66.40")
    assert result.invoice.status == InvoiceStatus.PARTIALLY_PAID


def test_second_refund_is_rejected(invoices, payments):
    invoices.save(make_invoice())
    payment = _record_use_case(invoices, payments).execute(
        "inv-1",
        "client-1",
        "50",
        PaymentMethod.CASH,
    )
    use_case = _refund_use_case(invoices, payments)
    use_case.execute(payment.id, "10")

    with pytest.raises(AlreadyRefundedError):
        use_case.execute(payment.id, "10")


def test_refund_then_repay_restores_invoice(invoices, payments):
    invoices.save(make_invoice())
    record = _record_use_case(invoices, payments)
    first = record.execute("inv-1", "client-1", "86.40", PaymentMethod.CASH)
    paid_before = invoices.get("inv-1").paid_amount

    _refund_use_case(invoices, payments).execute(first.id, "86.40")
    record.execute("inv-1", "client-1", "86.40", PaymentMethod.CASH)

    assert invoices.get("inv-1").paid_amount == paid_before
    assert invoices.get("inv-1").status == InvoiceStatus.PAID


def test_refund_validation(invoices, payments):
    invoices.save(make_invoice())
    payment = _record_use_case(invoices, payments).execute(
        "inv-1",
        "client-1",
        "50",
        PaymentMethod.CASH,
    )
    use_case = _refund_use_case(invoices, payments)

    with pytest.raises(PaymentNotFoundError):
        use_case.execute("missing", "10")
    with pytest.raises(InvalidAmountError):
        use_case.execute(payment.id, "50.01")
    with pytest.raises(InvalidAmountError):
        use_case.execute(payment.id, "0")
    for bad_amount in ("abc", "NaN", "Infinity"):
        with pytest.raises(InvalidAmountError):
            use_case.execute(payment.id, bad_amount)
    assert payments.get(payment.id).refund is None
    assert invoices.get("inv-1").paid_amount == Decimal("50.00")


def test_refund_without_invoice_still_refunds(invoices, payments):
    invoices.save(make_invoice())
    payment = _record_use_case(invoices, payments).execute(
        "inv-1",
        "client-1",
        "50",
        PaymentMethod.CASH,
    )
    invoices.items.clear()
    logger = MagicMock()
    use_case = IssueRefundUseCase(
        invoices,
        payments,
        logger=logger,
        usage_logger=MagicMock(),
        clock=lambda: NOW,
    )

    result = use_case.execute(payment.id, "50")

    assert result.invoice is None
    assert payments.get(payment.id).status == PaymentStatus.REFUNDED
    logger.warning.assert_called_once()
