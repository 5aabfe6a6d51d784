"""Use case for querying invoices."""

from collections.abc import Callable
from datetime import date
from decimal import Decimal

from unctico_billing.application.ports.repositories import (
    InvoiceRepositoryPort,
)
from unctico_billing.domain.errors import InvoiceNotFoundError
from unctico_billing.domain.models import (
    DateRange,
    Invoice,
    InvoiceStatistics,
    InvoiceStatus,
)
from unctico_billing.utils.decimal_utils import ZERO


class GetInvoicesUseCase:
    """Read-only invoice queries."""

    def __init__(
        self,
        invoices: InvoiceRepositoryPort,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._invoices = invoices
        self._today = today

    def get(self, invoice_id: str) -> Invoice:
        """Return the invoice.

        Raises:
            InvoiceNotFoundError: When the invoice does not exist.
        """
        invoice = self._invoices.get(invoice_id)
        if invoice is None:
            raise InvoiceNotFoundError(invoice_id)
        return invoice

    def for_client(self, client_id: str) -> list[Invoice]:
        """Return a client's invoices, newest first."""
        return sorted(
            (
                invoice
                for invoice in self._invoices.list_invoices()
                if invoice.client_id == client_id
            ),
            key=lambda invoice: (invoice.issued_on, invoice.created_at),
            reverse=True,
        )

    def outstanding(self) -> list[Invoice]:
        """Return non-void invoices with a balance, earliest due first."""
        return sorted(
            (
                invoice
                for invoice in self._invoices.list_invoices()
                if invoice.is_outstanding
            ),
            key=lambda invoice: (invoice.due_date, invoice.invoice_number),
        )

    def overdue(self, today: date | None = None) -> list[Invoice]:
        """Return outstanding invoices past their due date.

        Args:
            today: Reference day; defaults to the injected clock.

        Returns:
            list[Invoice]: Overdue invoices, earliest due first.
        """
        reference = today or self._today()
        return [
            invoice
            for invoice in self.outstanding()
            if invoice.is_overdue(reference)
        ]

    def in_range(self, start_date: date, end_date: date) -> list[Invoice]:
        """Return invoices issued in the inclusive range, newest first.

        Raises:
            ValueError: When start_date is after end_date.
        """
        period = DateRange(start_date, end_date)
        return sorted(
            (
                invoice
                for invoice in self._invoices.list_invoices()
                if period.contains(invoice.issued_on)
            ),
            key=lambda invoice: (invoice.issued_on, invoice.created_at),
            reverse=True,
        )

    def total_outstanding(self) -> Decimal:
        return sum(
            (invoice.balance_remaining for invoice in self.outstanding()),
            ZERO,
        )

    def total_revenue(self, start_date: date, end_date: date) -> Decimal:
        """Return the totals of paid invoices issued in the range."""
        return sum(
            (
                invoice.total
                for invoice in self.in_range(start_date, end_date)
                if invoice.status == InvoiceStatus.PAID
            ),
            ZERO,
        )

    def statistics(self, today: date | None = None) -> InvoiceStatistics:
        invoices = self._invoices.list_invoices()
        reference = today or self._today()

        def _count(status: InvoiceStatus) -> int:
            return sum(1 for invoice in invoices if invoice.status == status)

        billable = [invoice for invoice in invoices if not invoice.is_void]
        return InvoiceStatistics(
            total_invoices=len(invoices),
            unpaid_invoices=_count(InvoiceStatus.UNPAID),
            partially_paid_invoices=_count(InvoiceStatus.PARTIALLY_PAID),
            paid_invoices=_count(InvoiceStatus.PAID),
            void_invoices=_count(InvoiceStatus.VOID),
            overdue_invoices=sum(
                1 for invoice in invoices if invoice.is_overdue(reference)
            ),
            total_billed=sum((invoice.total for invoice in billable), ZERO),
            total_outstanding=sum(
                (invoice.balance_remaining for invoice in billable),
                ZERO,
            ),
            total_revenue=sum(
                (
                    invoice.total
                    for invoice in invoices
                    if invoice.status == InvoiceStatus.PAID
                ),
                ZERO,
            ),
        )


__all__ = ["GetInvoicesUseCase"]
