"""Domain constants for billing and bookkeeping."""

from decimal import Decimal

SERVICE_PRICES = {
    "swedish": Decimal("80.00"),
    "deep_tissue": Decimal("100.00"),
    "sports": Decimal("95.00"),
    "prenatal": Decimal("90.00"),
    "hot_stone": Decimal("120.00"),
    "aromatherapy": Decimal("110.00"),
    "therapeutic": Decimal("95.00"),
    "medical": Decimal("75.00"),
}

RECEIPT_PREFIX = "REC"
INVOICE_PREFIX = "INV"
DEFAULT_PAYMENT_TERMS = "Due on receipt"

CARD_MIN_DIGITS = 13
CARD_MAX_DIGITS = 19


__all__ = [
    "SERVICE_PRICES",
    "RECEIPT_PREFIX",
    "INVOICE_PREFIX",
    "DEFAULT_PAYMENT_TERMS",
    "CARD_MIN_DIGITS",
    "CARD_MAX_DIGITS",
]
