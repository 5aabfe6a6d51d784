"""Application ports package."""

from .database import DatabaseEnginePort
from .payment_gateway import Charge, GatewayError, PaymentGatewayPort
from .repositories import (
    InvoiceRepositoryPort,
    LedgerRepositoryPort,
    PaymentRepositoryPort,
    ReceiptRepositoryPort,
    SequenceRepositoryPort,
)

__all__ = [
    "DatabaseEnginePort",
    "Charge",
    "GatewayError",
    "PaymentGatewayPort",
    "InvoiceRepositoryPort",
    "LedgerRepositoryPort",
    "PaymentRepositoryPort",
    "ReceiptRepositoryPort",
    "SequenceRepositoryPort",
]
