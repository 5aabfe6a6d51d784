"""Application use cases package."""

from .generate_invoice import GenerateInvoiceUseCase
from .get_invoices import GetInvoicesUseCase
from .void_invoice import VoidInvoiceUseCase
from .record_payment import RecordPaymentUseCase
from .issue_refund import IssueRefundUseCase, RefundResult
from .get_payments import GetPaymentsUseCase
from .generate_receipt import GenerateReceiptUseCase
from .process_card_payment import ProcessCardPaymentUseCase
from .manage_ledger import ManageLedgerUseCase
from .get_financial_reports import (
    GetCashFlowUseCase,
    GetProfitAndLossUseCase,
    GetTaxReportUseCase,
    GetYearEndSummaryUseCase,
)

__all__ = [
    "GenerateInvoiceUseCase",
    "GetInvoicesUseCase",
    "VoidInvoiceUseCase",
    "RecordPaymentUseCase",
    "IssueRefundUseCase",
    "RefundResult",
    "GetPaymentsUseCase",
    "GenerateReceiptUseCase",
    "ProcessCardPaymentUseCase",
    "ManageLedgerUseCase",
    "GetCashFlowUseCase",
    "GetProfitAndLossUseCase",
    "GetTaxReportUseCase",
    "GetYearEndSummaryUseCase",
]
