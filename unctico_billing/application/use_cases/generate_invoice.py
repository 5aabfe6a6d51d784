"""Use case to bill a client for a set of appointments."""

from collections.abc import Callable, Sequence
from dataclasses import replace
from datetime import datetime, timedelta
from decimal import Decimal
import uuid

from unctico_billing.application.ports.repositories import (
    InvoiceRepositoryPort,
    SequenceRepositoryPort,
)
from unctico_billing.domain.constants import (
    DEFAULT_PAYMENT_TERMS,
    INVOICE_PREFIX,
)
from unctico_billing.domain.errors import InvalidAmountError
from unctico_billing.domain.models import Appointment, Invoice, InvoiceStatus
from unctico_billing.domain.services.invoicing import (
    build_line_items,
    format_document_number,
    parse_amount,
    parse_decimal,
    validate_invoice_terms,
)
from unctico_billing.infrastructure.logging.logger import get_app_logger
from unctico_billing.utils.decimal_utils import (
    coerce_decimal,
    format_currency,
)


class GenerateInvoiceUseCase:
    """Create and store an invoice priced from the service table."""

    def __init__(
        self,
        invoices: InvoiceRepositoryPort,
        sequences: SequenceRepositoryPort,
        logger=None,
        clock: Callable[[], datetime] = datetime.now,
        default_tax_rate: Decimal | str = Decimal("0"),
    ) -> None:
        """Initialize the use case.

        Args:
            invoices: Port storing invoices.
            sequences: Port allocating invoice numbers.
            logger: Optional logger compatible with logging.Logger-like API.
            clock: Callable returning the current time.
            default_tax_rate: Rate used when execute receives none.
        """
        self._invoices = invoices
        self._sequences = sequences
        self._logger = logger or get_app_logger()
        self._clock = clock
        self._default_tax_rate = coerce_decimal(default_tax_rate)

    def execute(
        self,
        client_id: str,
        appointments: Sequence[Appointment],
        tax_rate: Decimal | str | None = None,
        discount: Decimal | str = Decimal("0"),
        due_in_days: int = 0,
        notes: str | None = None,
    ) -> Invoice:
        """Build one line item per appointment and persist the invoice.

        Args:
            client_id: Client being billed.
            appointments: Appointments to bill; must not be empty.
            tax_rate: Tax rate as a fraction (0.08 for 8%); defaults to the
                configured rate.
            discount: Flat discount subtracted after tax.
            due_in_days: Days after today the invoice falls due.
            notes: Optional note to the client.

        Returns:
            Invoice: The stored invoice, status unpaid.

        Raises:
            InvalidAmountError: When there is nothing to bill or the rate or
                discount is invalid.
            PersistenceError: When the invoice cannot be stored.
        """
        if not appointments:
            raise InvalidAmountError("At least one appointment is required")
        foreign = [a.id for a in appointments if a.client_id != client_id]
        if foreign:
            self._logger.warning(
                f"Appointments {foreign} belong to another client than "
                f"{client_id}"
            )

        now = self._clock()
        draft = Invoice(
            id=str(uuid.uuid4()),
            invoice_number="",
            client_id=client_id,
            line_items=build_line_items(appointments),
            tax_rate=(
                self._default_tax_rate
                if tax_rate is None
                else parse_decimal(tax_rate, "Tax rate")
            ),
            discount=parse_amount(discount, "Discount"),
            issued_on=now.date(),
            due_date=now.date() + timedelta(days=due_in_days),
            created_at=now,
            updated_at=now,
            appointment_ids=tuple(a.id for a in appointments),
            status=InvoiceStatus.UNPAID,
            payment_terms=DEFAULT_PAYMENT_TERMS,
            notes=notes,
        )
        validate_invoice_terms(draft)

        sequence = self._sequences.next_value(INVOICE_PREFIX, now.year)
        invoice = replace(
            draft,
            invoice_number=format_document_number(
                INVOICE_PREFIX,
                now.year,
                sequence,
            ),
        )
        self._invoices.save(invoice)
        self._logger.info(
            f"Generated invoice {invoice.invoice_number} for client "
            f"{client_id}: {len(invoice.line_items)} items, "
            f"total={format_currency(invoice.total)}"
        )
        return invoice


__all__ = ["GenerateInvoiceUseCase"]
