"""Domain models for invoices, payments, refunds and receipts."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from unctico_billing.domain.constants import DEFAULT_PAYMENT_TERMS
from unctico_billing.utils.decimal_utils import CENT, ZERO, percentage_of


class ServiceType(str, Enum):
    """Massage services that can be billed from an appointment."""

    SWEDISH = "swedish"
    DEEP_TISSUE = "deep_tissue"
    SPORTS = "sports"
    PRENATAL = "prenatal"
    HOT_STONE = "hot_stone"
    AROMATHERAPY = "aromatherapy"
    THERAPEUTIC = "therapeutic"
    MEDICAL = "medical"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title() + " Massage"


class InvoiceStatus(str, Enum):
    UNPAID = "unpaid"
    PARTIALLY_PAID = "partially_paid"
    PAID = "paid"
    VOID = "void"


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    CHECK = "check"
    TRANSFER = "transfer"
    OTHER = "other"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    REFUNDED = "refunded"
    PARTIALLY_REFUNDED = "partially_refunded"


SETTLED_PAYMENT_STATUSES = (
    PaymentStatus.COMPLETED,
    PaymentStatus.PARTIALLY_REFUNDED,
    PaymentStatus.REFUNDED,
)


@dataclass(frozen=True)
class Appointment:
    """Scheduled session used as the input for invoice generation."""

    id: str
    client_id: str
    service_type: ServiceType
    starts_at: datetime
    duration_minutes: int = 60


@dataclass(frozen=True)
class LineItem:
    """One billable entry on an invoice."""

    description: str
    quantity: Decimal
    unit_price: Decimal

    @property
    def total(self) -> Decimal:
        return self.quantity * self.unit_price


@dataclass(frozen=True)
class Invoice:
    """Bill issued to a client.

    Attributes:
        id: Unique identifier.
        invoice_number: Human-facing number (INV-<year>-<seq>).
        client_id: Client being billed.
        line_items: Ordered billable entries.
        tax_rate: Tax rate as a fraction (0.08 for 8%).
        discount: Flat discount subtracted after tax.
        issued_on: Invoice date.
        due_date: Payment due date.
        created_at: Creation timestamp.
        updated_at: Last mutation timestamp.
        appointment_ids: Appointments covered by this invoice.
        paid_amount: Sum of payments applied, net of refunds.
        status: Payment status derived from paid_amount vs total.
        payment_terms: Terms printed on the invoice.
        notes: Optional note to the client.
    """

    id: str
    invoice_number: str
    client_id: str
    line_items: tuple[LineItem, ...]
    tax_rate: Decimal
    discount: Decimal
    issued_on: date
    due_date: date
    created_at: datetime
    updated_at: datetime
    appointment_ids: tuple[str, ...] = ()
    paid_amount: Decimal = ZERO
    status: InvoiceStatus = InvoiceStatus.UNPAID
    payment_terms: str = DEFAULT_PAYMENT_TERMS
    notes: str | None = None

    @property
    def subtotal(self) -> Decimal:
        return sum((item.total for item in self.line_items), ZERO)

    @property
    def tax_amount(self) -> Decimal:
        """Return subtotal * tax_rate rounded half-up to cents."""
        return (self.subtotal * self.tax_rate).quantize(
            CENT,
            rounding=ROUND_HALF_UP,
        )

    @property
    def total(self) -> Decimal:
        return self.subtotal + self.tax_amount - self.discount

    @property
    def balance_remaining(self) -> Decimal:
        return max(self.total - self.paid_amount, ZERO)

    @property
    def is_void(self) -> bool:
        return self.status == InvoiceStatus.VOID

    @property
    def is_outstanding(self) -> bool:
        return not self.is_void and self.balance_remaining > 0

    def is_overdue(self, today: date) -> bool:
        """Return True when a balance is still due after the due date."""
        return self.is_outstanding and self.due_date < today

    @property
    def payment_percentage(self) -> Decimal:
        return percentage_of(self.paid_amount, self.total)


@dataclass(frozen=True)
class Refund:
    """Refund embedded in the payment it reverses."""

    amount: Decimal
    method: PaymentMethod
    refunded_at: datetime
    reason: str | None = None


@dataclass(frozen=True)
class Payment:
    """Money received against an invoice."""

    id: str
    invoice_id: str
    client_id: str
    amount: Decimal
    method: PaymentMethod
    paid_at: datetime
    created_at: datetime
    updated_at: datetime
    status: PaymentStatus = PaymentStatus.COMPLETED
    reference_number: str | None = None
    notes: str | None = None
    refund: Refund | None = None

    @property
    def is_refunded(self) -> bool:
        return self.refund is not None

    @property
    def refunded_amount(self) -> Decimal:
        return self.refund.amount if self.refund else ZERO

    @property
    def net_amount(self) -> Decimal:
        return self.amount - self.refunded_amount


@dataclass(frozen=True)
class Receipt:
    """Proof of payment handed to a client."""

    receipt_number: str
    payment_id: str
    invoice_id: str
    client_id: str
    amount_paid: Decimal
    method: PaymentMethod
    issued_at: datetime


__all__ = [
    "ServiceType",
    "InvoiceStatus",
    "PaymentMethod",
    "PaymentStatus",
    "SETTLED_PAYMENT_STATUSES",
    "Appointment",
    "LineItem",
    "Invoice",
    "Refund",
    "Payment",
    "Receipt",
]
