"""Domain package for billing rules and core models."""

from .constants import RECEIPT_PREFIX, SERVICE_PRICES
from .errors import BillingError
from .models import (
    Invoice,
    InvoiceStatus,
    Payment,
    PaymentMethod,
    PaymentStatus,
    Receipt,
)

__all__ = [
    "RECEIPT_PREFIX",
    "SERVICE_PRICES",
    "BillingError",
    "Invoice",
    "InvoiceStatus",
    "Payment",
    "PaymentMethod",
    "PaymentStatus",
    "Receipt",
]
