"""Domain models package."""

from .billing import (
    SETTLED_PAYMENT_STATUSES,
    Appointment,
    Invoice,
    InvoiceStatus,
    LineItem,
    Payment,
    PaymentMethod,
    PaymentStatus,
    Receipt,
    Refund,
    ServiceType,
)
from .cards import CardBrand, CardDetails
from .ledger import (
    ExpenseCategory,
    ExpenseRecord,
    IncomeCategory,
    IncomeRecord,
)
from .reports import (
    CashFlowReport,
    DateRange,
    InvoiceStatistics,
    PaymentStatistics,
    ProfitAndLossReport,
    TaxReport,
    YearEndSummary,
)

__all__ = [
    "SETTLED_PAYMENT_STATUSES",
    "Appointment",
    "Invoice",
    "InvoiceStatus",
    "LineItem",
    "Payment",
    "PaymentMethod",
    "PaymentStatus",
    "Receipt",
    "Refund",
    "ServiceType",
    "CardBrand",
    "CardDetails",
    "ExpenseCategory",
    "ExpenseRecord",
    "IncomeCategory",
    "IncomeRecord",
    "CashFlowReport",
    "DateRange",
    "InvoiceStatistics",
    "PaymentStatistics",
    "ProfitAndLossReport",
    "TaxReport",
    "YearEndSummary",
]
