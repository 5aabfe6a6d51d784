"""Use case to charge a card and record the resulting payment."""

from collections.abc import Callable
from datetime import date
from decimal import Decimal

from unctico_billing.application.ports.payment_gateway import (
    GatewayError,
    PaymentGatewayPort,
)
from unctico_billing.application.ports.repositories import (
    InvoiceRepositoryPort,
)
from unctico_billing.application.use_cases.record_payment import (
    RecordPaymentUseCase,
)
from unctico_billing.domain.errors import (
    AmountExceedsBalanceError,
    InvalidAmountError,
    InvoiceNotFoundError,
    InvoiceVoidError,
    ProcessingFailedError,
)
from unctico_billing.domain.models import CardDetails, Payment, PaymentMethod
from unctico_billing.domain.services.card_validation import validate_card
from unctico_billing.domain.services.invoicing import parse_amount
from unctico_billing.infrastructure.logging.logger import get_app_logger
from unctico_billing.utils.decimal_utils import format_currency


class ProcessCardPaymentUseCase:
    """Validate a card, authorize the charge and record a card payment.

    Everything that can be checked locally is checked before the gateway is
    called, so a declined invoice never reaches the processor.
    """

    def __init__(
        self,
        invoices: InvoiceRepositoryPort,
        gateway: PaymentGatewayPort,
        record_payment: RecordPaymentUseCase,
        logger=None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._invoices = invoices
        self._gateway = gateway
        self._record_payment = record_payment
        self._logger = logger or get_app_logger()
        self._today = today

    def execute(
        self,
        invoice_id: str,
        client_id: str,
        amount: Decimal | str,
        card: CardDetails,
        notes: str | None = None,
    ) -> Payment:
        """Charge the card and record the payment.

        Args:
            invoice_id: Invoice being paid.
            client_id: Client making the payment.
            amount: Amount to charge; rounded to cents.
            card: Card data; only the masked number is logged.
            notes: Optional free text stored on the payment.

        Returns:
            Payment: The stored card payment, referencing the charge id.

        Raises:
            InvalidCardNumberError: When the card number is invalid.
            CardExpiredError: When the card has expired.
            InvalidCvvError: When the CVV is malformed.
            InvalidAmountError: When amount is not positive.
            InvoiceNotFoundError: When the invoice does not exist.
            InvoiceVoidError: When the invoice is void.
            AmountExceedsBalanceError: When amount exceeds the balance.
            ProcessingFailedError: When the gateway declines the charge.
        """
        validate_card(card, self._today())

        value = parse_amount(amount, "Payment amount")
        if value <= 0:
            raise InvalidAmountError(
                "Payment amount must be greater than zero"
            )
        invoice = self._invoices.get(invoice_id)
        if invoice is None:
            raise InvoiceNotFoundError(invoice_id)
        if invoice.is_void:
            raise InvoiceVoidError(
                f"Invoice {invoice.invoice_number} is void"
            )
        if value > invoice.balance_remaining:
            raise AmountExceedsBalanceError(
                f"Payment amount {format_currency(value)} exceeds balance "
                f"{format_currency(invoice.balance_remaining)}"
            )

        try:
            charge = self._gateway.authorize(card, value)
        except GatewayError as exc:
            self._logger.warning(
                f"Card {card.masked_number} declined for invoice "
                f"{invoice.invoice_number}: {exc}"
            )
            raise ProcessingFailedError(
                "Payment processing failed. Please try again."
            ) from exc

        self._logger.info(
            f"Authorized {format_currency(value)} on {charge.brand.value} "
            f"{card.masked_number} as {charge.charge_id}"
        )
        return self._record_payment.execute(
            invoice_id=invoice.id,
            client_id=client_id,
            amount=value,
            method=PaymentMethod.CARD,
            reference_number=charge.charge_id,
            notes=notes,
        )


__all__ = ["ProcessCardPaymentUseCase"]
