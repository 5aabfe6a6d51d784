"""Use case to void an invoice that will not be collected."""

from collections.abc import Callable
from datetime import datetime

from unctico_billing.application.ports.repositories import (
    InvoiceRepositoryPort,
)
from unctico_billing.domain.errors import InvoiceNotFoundError
from unctico_billing.domain.models import Invoice
from unctico_billing.domain.services.invoicing import void_invoice
from unctico_billing.infrastructure.logging.logger import get_app_logger


class VoidInvoiceUseCase:
    """Move an unpaid or partially paid invoice to the terminal void state."""

    def __init__(
        self,
        invoices: InvoiceRepositoryPort,
        logger=None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._invoices = invoices
        self._logger = logger or get_app_logger()
        self._clock = clock

    def execute(self, invoice_id: str) -> Invoice:
        """Void the invoice.

        Raises:
            InvoiceNotFoundError: When the invoice does not exist.
            InvoiceVoidError: When it is already void or fully paid.
            PersistenceError: When the invoice cannot be stored.
        """
        invoice = self._invoices.get(invoice_id)
        if invoice is None:
            raise InvoiceNotFoundError(invoice_id)
        voided = void_invoice(invoice, self._clock())
        self._invoices.save(voided)
        if invoice.paid_amount > 0:
            self._logger.warning(
                f"Voided invoice {invoice.invoice_number} with "
                f"{invoice.paid_amount} already paid; refund separately"
            )
        else:
            self._logger.info(f"Voided invoice {invoice.invoice_number}")
        return voided


__all__ = ["VoidInvoiceUseCase"]
