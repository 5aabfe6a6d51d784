"""Domain errors raised by billing operations.

Each error carries a stable ``code`` and a human-readable message. Adapters
catch ``BillingError`` and show the message; nothing retries automatically.
"""


class BillingError(Exception):
    """Base class for billing and ledger failures."""

    code = "billing_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidAmountError(BillingError):
    code = "invalid_amount"


class InvoiceNotFoundError(BillingError):
    code = "invoice_not_found"

    def __init__(self, invoice_id: str) -> None:
        super().__init__(f"Invoice not found: {invoice_id}")
        self.invoice_id = invoice_id


class AmountExceedsBalanceError(BillingError):
    code = "amount_exceeds_balance"


class InvoiceVoidError(BillingError):
    code = "invoice_void"


class PaymentNotFoundError(BillingError):
    code = "payment_not_found"

    def __init__(self, payment_id: str) -> None:
        super().__init__(f"Payment not found: {payment_id}")
        self.payment_id = payment_id


class AlreadyRefundedError(BillingError):
    code = "already_refunded"


class InvalidCardNumberError(BillingError):
    code = "invalid_card_number"


class CardExpiredError(BillingError):
    code = "card_expired"


class InvalidCvvError(BillingError):
    code = "invalid_cvv"


class ProcessingFailedError(BillingError):
    code = "processing_failed"


class PersistenceError(BillingError):
    code = "persistence_failed"


__all__ = [
    "BillingError",
    "InvalidAmountError",
    "InvoiceNotFoundError",
    "AmountExceedsBalanceError",
    "InvoiceVoidError",
    "PaymentNotFoundError",
    "AlreadyRefundedError",
    "InvalidCardNumberError",
    "CardExpiredError",
    "InvalidCvvError",
    "ProcessingFailedError",
    "PersistenceError",
]
