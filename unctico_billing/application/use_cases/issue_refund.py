"""Use case to refund a recorded payment."""

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
import uuid

from unctico_billing.application.ports.repositories import (
    InvoiceRepositoryPort,
    LedgerRepositoryPort,
    PaymentRepositoryPort,
)
from unctico_billing.application.use_cases.compensating_writes import (
    CompensatingWrites,
)
from unctico_billing.domain.errors import (
    AlreadyRefundedError,
    InvalidAmountError,
    PaymentNotFoundError,
)
from unctico_billing.domain.models import (
    ExpenseCategory,
    ExpenseRecord,
    Invoice,
    Payment,
    PaymentStatus,
    Refund,
)
from unctico_billing.domain.services.invoicing import (
    apply_refund,
    parse_amount,
)
from unctico_billing.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from unctico_billing.utils.decimal_utils import format_currency


@dataclass(frozen=True)
class RefundResult:
    """Payment and invoice as stored after a refund.

    Attributes:
        payment: Payment carrying the embedded refund.
        invoice: Owning invoice with the reduced paid amount, or None when
            the invoice no longer exists.
    """

    payment: Payment
    invoice: Invoice | None


class IssueRefundUseCase:
    """Refund a payment once, fully or partially."""

    def __init__(
        self,
        invoices: InvoiceRepositoryPort,
        payments: PaymentRepositoryPort,
        ledger: LedgerRepositoryPort | None = None,
        logger=None,
        usage_logger=None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._invoices = invoices
        self._payments = payments
        self._ledger = ledger
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()
        self._clock = clock

    def execute(
        self,
        payment_id: str,
        amount: Decimal | str,
        reason: str | None = None,
    ) -> RefundResult:
        """Refund ``amount`` of a payment.

        Args:
            payment_id: Payment to refund.
            amount: Amount to give back, in ``(0, payment.amount]``.
            reason: Optional reason kept on the refund.

        Returns:
            RefundResult: Updated payment and invoice.

        Raises:
            PaymentNotFoundError: When the payment does not exist.
            AlreadyRefundedError: When the payment was refunded before.
            InvalidAmountError: When amount is out of range.
            PersistenceError: When storage fails; nothing stays written.
        """
        value = parse_amount(amount, "Refund amount")
        payment = self._payments.get(payment_id)
        if payment is None:
            raise PaymentNotFoundError(payment_id)
        if payment.is_refunded:
            raise AlreadyRefundedError("Payment has already been refunded")
        if value <= 0 or value > payment.amount:
            raise InvalidAmountError(
                "Invalid refund amount; must be between $0.01 and "
                f"{format_currency(payment.amount)}"
            )

        now = self._clock()
        status = (
            PaymentStatus.REFUNDED
            if value == payment.amount
            else PaymentStatus.PARTIALLY_REFUNDED
        )
        refunded_payment = replace(
            payment,
            refund=Refund(
                amount=value,
                method=payment.method,
                refunded_at=now,
                reason=reason,
            ),
            status=status,
            updated_at=now,
        )

        invoice = self._invoices.get(payment.invoice_id)
        updated_invoice = None
        if invoice is not None:
            updated_invoice = apply_refund(invoice, value, now)
        else:
            self._logger.warning(
                f"Refunding payment {payment.id} whose invoice "
                f"{payment.invoice_id} no longer exists"
            )

        writes = CompensatingWrites(self._logger)
        writes.run(
            "payment",
            lambda: self._payments.save(refunded_payment),
            lambda: self._payments.save(payment),
        )
        if invoice is not None:
            writes.run(
                "invoice",
                lambda: self._invoices.save(updated_invoice),
                lambda: self._invoices.save(invoice),
            )
        if self._ledger is not None:
            expense = self._expense_for(refunded_payment, reason)
            writes.run(
                "refund expense",
                lambda: self._ledger.save_expense(expense),
                lambda: self._ledger.delete_expense(expense.id),
            )

        self._logger.info(
            f"Refunded {format_currency(value)} of payment {payment.id} "
            f"({status.value})"
        )
        self._usage_logger.info(
            f"refund method={payment.method.value} amount={value} "
            f"payment={payment.id}"
        )
        return RefundResult(payment=refunded_payment, invoice=updated_invoice)

    @staticmethod
    def _expense_for(payment: Payment, reason: str | None) -> ExpenseRecord:
        refund = payment.refund
        return ExpenseRecord(
            id=str(uuid.uuid4()),
            date=refund.refunded_at.date(),
            amount=refund.amount,
            category=ExpenseCategory.REFUNDS,
            description=f"Refund - {reason or 'no reason given'}",
            payment_method=refund.method,
            vendor=payment.client_id,
            is_tax_deductible=ExpenseCategory.REFUNDS.default_deductible,
            has_receipt=True,
            is_automatic=True,
        )


__all__ = ["IssueRefundUseCase", "RefundResult"]
