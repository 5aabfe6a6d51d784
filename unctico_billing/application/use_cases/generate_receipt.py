"""Use case to issue a numbered receipt for a payment."""

from collections.abc import Callable
from datetime import datetime

from unctico_billing.application.ports.repositories import (
    PaymentRepositoryPort,
    ReceiptRepositoryPort,
    SequenceRepositoryPort,
)
from unctico_billing.domain.constants import RECEIPT_PREFIX
from unctico_billing.domain.errors import PaymentNotFoundError
from unctico_billing.domain.models import Receipt
from unctico_billing.domain.services.invoicing import format_document_number
from unctico_billing.infrastructure.logging.logger import get_app_logger


class GenerateReceiptUseCase:
    """Allocate ``REC-<year>-<nnnn>`` numbers and store receipts.

    The counter lives in the sequence repository, so numbers stay unique
    across restarts; it starts again at 0001 each calendar year.
    """

    def __init__(
        self,
        payments: PaymentRepositoryPort,
        receipts: ReceiptRepositoryPort,
        sequences: SequenceRepositoryPort,
        logger=None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._payments = payments
        self._receipts = receipts
        self._sequences = sequences
        self._logger = logger or get_app_logger()
        self._clock = clock

    def execute(self, payment_id: str) -> Receipt:
        """Issue a receipt for the payment.

        Args:
            payment_id: Payment being acknowledged.

        Returns:
            Receipt: The stored receipt.

        Raises:
            PaymentNotFoundError: When the payment does not exist.
            PersistenceError: When the counter or receipt cannot be stored.
        """
        payment = self._payments.get(payment_id)
        if payment is None:
            raise PaymentNotFoundError(payment_id)

        now = self._clock()
        sequence = self._sequences.next_value(RECEIPT_PREFIX, now.year)
        receipt = Receipt(
            receipt_number=format_document_number(
                RECEIPT_PREFIX,
                now.year,
                sequence,
            ),
            payment_id=payment.id,
            invoice_id=payment.invoice_id,
            client_id=payment.client_id,
            amount_paid=payment.amount,
            method=payment.method,
            issued_at=now,
        )
        self._receipts.save(receipt)
        self._logger.info(
            f"Issued receipt {receipt.receipt_number} for payment {payment.id}"
        )
        return receipt

    def for_payment(self, payment_id: str) -> list[Receipt]:
        return sorted(
            (
                receipt
                for receipt in self._receipts.list_receipts()
                if receipt.payment_id == payment_id
            ),
            key=lambda receipt: receipt.receipt_number,
        )


__all__ = ["GenerateReceiptUseCase"]
