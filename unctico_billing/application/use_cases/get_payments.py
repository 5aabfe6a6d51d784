"""Use case for querying the payment ledger."""

from datetime import date, datetime
from decimal import Decimal

from unctico_billing.application.ports.repositories import (
    PaymentRepositoryPort,
)
from unctico_billing.domain.models import (
    SETTLED_PAYMENT_STATUSES,
    DateRange,
    Payment,
    PaymentStatistics,
    PaymentStatus,
)
from unctico_billing.infrastructure.logging.logger import get_app_logger
from unctico_billing.utils.decimal_utils import ZERO


def _newest_first(payments: list[Payment]) -> list[Payment]:
    return sorted(payments, key=lambda payment: payment.paid_at, reverse=True)


class GetPaymentsUseCase:
    """Filter, total and summarize recorded payments.

    All queries scan the full collection; a single practice holds at most a
    few thousand payments.
    """

    def __init__(self, payments: PaymentRepositoryPort, logger=None) -> None:
        self._payments = payments
        self._logger = logger or get_app_logger()

    def for_invoice(self, invoice_id: str) -> list[Payment]:
        return _newest_first(
            [
                payment
                for payment in self._payments.list_payments()
                if payment.invoice_id == invoice_id
            ]
        )

    def for_client(self, client_id: str) -> list[Payment]:
        return _newest_first(
            [
                payment
                for payment in self._payments.list_payments()
                if payment.client_id == client_id
            ]
        )

    def in_range(self, start_date: date, end_date: date) -> list[Payment]:
        """Return payments made on days within the inclusive range."""
        period = DateRange(start_date, end_date)
        return _newest_first(
            [
                payment
                for payment in self._payments.list_payments()
                if period.contains(self._payment_day(payment.paid_at))
            ]
        )

    def total_payments(self, start_date: date, end_date: date) -> Decimal:
        """Sum net amounts (after refunds) of settled payments in range."""
        total = sum(
            (
                payment.net_amount
                for payment in self.in_range(start_date, end_date)
                if payment.status in SETTLED_PAYMENT_STATUSES
            ),
            ZERO,
        )
        self._logger.info(
            f"Total payments {start_date} to {end_date}: {total}"
        )
        return total

    def statistics(self) -> PaymentStatistics:
        payments = self._payments.list_payments()
        settled = [
            payment
            for payment in payments
            if payment.status in SETTLED_PAYMENT_STATUSES
        ]
        return PaymentStatistics(
            total_payments=len(payments),
            completed_payments=sum(
                1 for p in payments if p.status == PaymentStatus.COMPLETED
            ),
            pending_payments=sum(
                1 for p in payments if p.status == PaymentStatus.PENDING
            ),
            refunded_payments=sum(1 for p in payments if p.is_refunded),
            total_amount=sum((p.amount for p in settled), ZERO),
            total_refunds=sum((p.refunded_amount for p in payments), ZERO),
        )

    @staticmethod
    def _payment_day(paid_at: datetime) -> date:
        return paid_at.date()


__all__ = ["GetPaymentsUseCase"]
