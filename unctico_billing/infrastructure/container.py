"""Composition root for wiring infrastructure adapters."""

from unctico_billing.application.ports.database import DatabaseEnginePort
from unctico_billing.application.ports.payment_gateway import (
    PaymentGatewayPort,
)
from unctico_billing.application.use_cases import (
    GenerateInvoiceUseCase,
    GenerateReceiptUseCase,
    GetCashFlowUseCase,
    GetInvoicesUseCase,
    GetPaymentsUseCase,
    GetProfitAndLossUseCase,
    GetTaxReportUseCase,
    GetYearEndSummaryUseCase,
    IssueRefundUseCase,
    ManageLedgerUseCase,
    ProcessCardPaymentUseCase,
    RecordPaymentUseCase,
    VoidInvoiceUseCase,
)
from unctico_billing.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from unctico_billing.infrastructure.logging.logger import get_app_logger
from unctico_billing.infrastructure.repository_factory import (
    BillingRepositories,
    create_billing_repositories,
)
from unctico_billing.infrastructure.settings import BillingSettings
from unctico_billing.infrastructure.simulated_gateway import (
    SimulatedPaymentGateway,
)


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_repositories(
    settings: BillingSettings | None = None,
) -> BillingRepositories:
    """Return repositories for the configured backend."""
    resolved = settings or BillingSettings.from_env()
    db_port = (
        build_database_adapter() if resolved.backend == "sqlalchemy" else None
    )
    return create_billing_repositories(
        resolved,
        db_port=db_port,
        logger=get_app_logger(),
    )


def build_payment_gateway(
    settings: BillingSettings | None = None,
) -> PaymentGatewayPort:
    """Return the simulated gateway configured from settings."""
    resolved = settings or BillingSettings.from_env()
    return SimulatedPaymentGateway(
        delay_seconds=resolved.gateway_delay_seconds,
        success_rate=resolved.gateway_success_rate,
    )


def build_generate_invoice_use_case(
    repositories: BillingRepositories | None = None,
) -> GenerateInvoiceUseCase:
    repos = repositories or build_repositories()
    return GenerateInvoiceUseCase(
        repos.invoices,
        repos.sequences,
        default_tax_rate=BillingSettings.from_env().default_tax_rate,
    )


def build_get_invoices_use_case(
    repositories: BillingRepositories | None = None,
) -> GetInvoicesUseCase:
    repos = repositories or build_repositories()
    return GetInvoicesUseCase(repos.invoices)


def build_void_invoice_use_case(
    repositories: BillingRepositories | None = None,
) -> VoidInvoiceUseCase:
    repos = repositories or build_repositories()
    return VoidInvoiceUseCase(repos.invoices)


def build_record_payment_use_case(
    repositories: BillingRepositories | None = None,
) -> RecordPaymentUseCase:
    """Return the payment use case posting automatic income entries."""
    repos = repositories or build_repositories()
    return RecordPaymentUseCase(
        repos.invoices,
        repos.payments,
        ledger=repos.ledger,
    )


def build_issue_refund_use_case(
    repositories: BillingRepositories | None = None,
) -> IssueRefundUseCase:
    repos = repositories or build_repositories()
    return IssueRefundUseCase(
        repos.invoices,
        repos.payments,
        ledger=repos.ledger,
    )


def build_get_payments_use_case(
    repositories: BillingRepositories | None = None,
) -> GetPaymentsUseCase:
    repos = repositories or build_repositories()
    return GetPaymentsUseCase(repos.payments)


def build_generate_receipt_use_case(
    repositories: BillingRepositories | None = None,
) -> GenerateReceiptUseCase:
    repos = repositories or build_repositories()
    return GenerateReceiptUseCase(
        repos.payments,
        repos.receipts,
        repos.sequences,
    )


def build_process_card_payment_use_case(
    repositories: BillingRepositories | None = None,
    gateway: PaymentGatewayPort | None = None,
) -> ProcessCardPaymentUseCase:
    repos = repositories or build_repositories()
    return ProcessCardPaymentUseCase(
        repos.invoices,
        gateway or build_payment_gateway(),
        build_record_payment_use_case(repos),
    )


def build_manage_ledger_use_case(
    repositories: BillingRepositories | None = None,
) -> ManageLedgerUseCase:
    repos = repositories or build_repositories()
    return ManageLedgerUseCase(repos.ledger)


def build_profit_and_loss_use_case(
    repositories: BillingRepositories | None = None,
) -> GetProfitAndLossUseCase:
    repos = repositories or build_repositories()
    return GetProfitAndLossUseCase(repos.ledger)


def build_cash_flow_use_case(
    repositories: BillingRepositories | None = None,
) -> GetCashFlowUseCase:
    repos = repositories or build_repositories()
    return GetCashFlowUseCase(repos.ledger)


def build_tax_report_use_case(
    repositories: BillingRepositories | None = None,
) -> GetTaxReportUseCase:
    repos = repositories or build_repositories()
    return GetTaxReportUseCase(repos.ledger)


def build_year_end_summary_use_case(
    repositories: BillingRepositories | None = None,
) -> GetYearEndSummaryUseCase:
    repos = repositories or build_repositories()
    return GetYearEndSummaryUseCase(repos.ledger)


__all__ = [
    "build_database_adapter",
    "build_repositories",
    "build_payment_gateway",
    "build_generate_invoice_use_case",
    "build_get_invoices_use_case",
    "build_void_invoice_use_case",
    "build_record_payment_use_case",
    "build_issue_refund_use_case",
    "build_get_payments_use_case",
    "build_generate_receipt_use_case",
    "build_process_card_payment_use_case",
    "build_manage_ledger_use_case",
    "build_profit_and_loss_use_case",
    "build_cash_flow_use_case",
    "build_tax_report_use_case",
    "build_year_end_summary_use_case",
]
