"""Use case to record a payment against an invoice.

The payment ledger is the only writer of ``Invoice.paid_amount``: this use
case and ``IssueRefundUseCase`` are the two places that change it.
"""

from collections.abc import Callable
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
    InvalidAmountError,
    InvoiceNotFoundError,
)
from unctico_billing.domain.models import (
    IncomeCategory,
    IncomeRecord,
    Payment,
    PaymentMethod,
    PaymentStatus,
)
from unctico_billing.domain.services.invoicing import (
    apply_payment,
    parse_amount,
)
from unctico_billing.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)
from unctico_billing.utils.decimal_utils import format_currency


class RecordPaymentUseCase:
    """Apply a payment to an invoice and store both as one unit."""

    def __init__(
        self,
        invoices: InvoiceRepositoryPort,
        payments: PaymentRepositoryPort,
        ledger: LedgerRepositoryPort | None = None,
        logger=None,
        usage_logger=None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize the use case.

        Args:
            invoices: Port storing invoices.
            payments: Port storing payments.
            ledger: Optional ledger receiving an automatic income entry.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger for money movements.
            clock: Callable returning the current time.
        """
        self._invoices = invoices
        self._payments = payments
        self._ledger = ledger
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()
        self._clock = clock

    def execute(
        self,
        invoice_id: str,
        client_id: str,
        amount: Decimal | str,
        method: PaymentMethod,
        reference_number: str | None = None,
        notes: str | None = None,
    ) -> Payment:
        """Record a completed payment.

        Args:
            invoice_id: Invoice being paid.
            client_id: Client making the payment.
            amount: Amount received; rounded to cents.
            method: Payment method.
            reference_number: Optional check number or transaction id.
            notes: Optional free text.

        Returns:
            Payment: The stored payment.

        Raises:
            InvalidAmountError: When amount is not positive.
            InvoiceNotFoundError: When the invoice does not exist.
            InvoiceVoidError: When the invoice is void.
            AmountExceedsBalanceError: When amount exceeds the balance.
            PersistenceError: When storage fails; nothing stays written.
        """
        value = parse_amount(amount, "Payment amount")
        if value <= 0:
            raise InvalidAmountError(
                "Payment amount must be greater than zero"
            )
        invoice = self._invoices.get(invoice_id)
        if invoice is None:
            raise InvoiceNotFoundError(invoice_id)

        now = self._clock()
        updated_invoice = apply_payment(invoice, value, now)
        payment = Payment(
            id=str(uuid.uuid4()),
            invoice_id=invoice.id,
            client_id=client_id,
            amount=value,
            method=PaymentMethod(method),
            paid_at=now,
            created_at=now,
            updated_at=now,
            status=PaymentStatus.COMPLETED,
            reference_number=reference_number,
            notes=notes,
        )

        writes = CompensatingWrites(self._logger)
        writes.run(
            "payment",
            lambda: self._payments.save(payment),
            lambda: self._payments.delete(payment.id),
        )
        writes.run(
            "invoice",
            lambda: self._invoices.save(updated_invoice),
            lambda: self._invoices.save(invoice),
        )
        if self._ledger is not None:
            income = self._income_for(payment, invoice.invoice_number)
            writes.run(
                "income entry",
                lambda: self._ledger.save_income(income),
                lambda: self._ledger.delete_income(income.id),
            )

        self._logger.info(
            f"Recorded payment {payment.id} of {format_currency(value)} on "
            f"invoice {invoice.invoice_number}; status="
            f"{updated_invoice.status.value}"
        )
        self._usage_logger.info(
            f"payment method={payment.method.value} "
            f"amount={value} invoice={invoice.invoice_number}"
        )
        return payment

    @staticmethod
    def _income_for(payment: Payment, invoice_number: str) -> IncomeRecord:
        return IncomeRecord(
            id=str(uuid.uuid4()),
            date=payment.paid_at.date(),
            amount=payment.amount,
            category=IncomeCategory.MASSAGE_SERVICES,
            description=f"Payment on invoice {invoice_number}",
            payment_method=payment.method,
            source=payment.client_id,
            is_taxable=IncomeCategory.MASSAGE_SERVICES.default_taxable,
            is_automatic=True,
            client_id=payment.client_id,
            invoice_id=payment.invoice_id,
            payment_id=payment.id,
        )


__all__ = ["RecordPaymentUseCase"]
