"""Use cases computing financial reports from the ledger."""

from collections.abc import Callable
from datetime import date

from unctico_billing.application.ports.repositories import (
    LedgerRepositoryPort,
)
from unctico_billing.domain.models import (
    CashFlowReport,
    DateRange,
    ProfitAndLossReport,
    TaxReport,
    YearEndSummary,
)
from unctico_billing.domain.services.periods import (
    current_quarter_range,
    last_quarter_range,
    month_range,
    quarter_range,
)
from unctico_billing.domain.services.reporting import (
    compute_cash_flow,
    compute_profit_and_loss,
    compute_tax_report,
    compute_year_end_summary,
)
from unctico_billing.infrastructure.logging.logger import get_app_logger
from unctico_billing.utils.decimal_utils import format_currency


class GetProfitAndLossUseCase:
    """Compute profit and loss statements for arbitrary periods."""

    def __init__(
        self,
        ledger: LedgerRepositoryPort,
        logger=None,
        today: Callable[[], date] = date.today,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger: Port providing income and expense entries.
            logger: Optional logger compatible with logging.Logger-like API.
            today: Callable returning the current date.
        """
        self._ledger = ledger
        self._logger = logger or get_app_logger()
        self._today = today

    def execute(self, start_date: date, end_date: date) -> ProfitAndLossReport:
        """Return the statement for the inclusive period.

        Raises:
            ValueError: When start_date is after end_date.
        """
        period = DateRange(start_date, end_date)
        report = compute_profit_and_loss(
            period,
            self._ledger.list_incomes(),
            self._ledger.list_expenses(),
        )
        self._logger.info(
            f"P&L {start_date} to {end_date}: income "
            f"{format_currency(report.total_income)}, expenses "
            f"{format_currency(report.total_expenses)}"
        )
        return report

    def for_month(self, month: int, year: int) -> ProfitAndLossReport:
        period = month_range(month, year)
        return self.execute(period.start, period.end)

    def for_quarter(self, quarter: int, year: int) -> ProfitAndLossReport:
        period = quarter_range(quarter, year)
        return self.execute(period.start, period.end)

    def current_quarter(self) -> ProfitAndLossReport:
        period = current_quarter_range(self._today())
        return self.execute(period.start, period.end)

    def last_quarter(self) -> ProfitAndLossReport:
        period = last_quarter_range(self._today())
        return self.execute(period.start, period.end)


class GetCashFlowUseCase:
    """Compute cash movement by payment method for a period."""

    def __init__(self, ledger: LedgerRepositoryPort, logger=None) -> None:
        self._ledger = ledger
        self._logger = logger or get_app_logger()

    def execute(self, start_date: date, end_date: date) -> CashFlowReport:
        period = DateRange(start_date, end_date)
        report = compute_cash_flow(
            period,
            self._ledger.list_incomes(),
            self._ledger.list_expenses(),
        )
        self._logger.info(
            f"Cash flow {start_date} to {end_date}: net "
            f"{format_currency(report.net_cash_flow)}"
        )
        return report


class GetTaxReportUseCase:
    """Compute the calendar-year tax preparation report."""

    def __init__(self, ledger: LedgerRepositoryPort, logger=None) -> None:
        self._ledger = ledger
        self._logger = logger or get_app_logger()

    def execute(self, year: int) -> TaxReport:
        return compute_tax_report(
            year,
            self._ledger.list_incomes(),
            self._ledger.list_expenses(),
            logger=self._logger,
        )


class GetYearEndSummaryUseCase:
    """Compute the year-end summary combining all reports."""

    def __init__(self, ledger: LedgerRepositoryPort, logger=None) -> None:
        self._ledger = ledger
        self._logger = logger or get_app_logger()

    def execute(self, year: int) -> YearEndSummary:
        summary = compute_year_end_summary(
            year,
            self._ledger.list_incomes(),
            self._ledger.list_expenses(),
            logger=self._logger,
        )
        self._logger.info(
            f"Year-end {year}: net income "
            f"{format_currency(summary.profit_and_loss.net_income)}"
        )
        return summary


__all__ = [
    "GetProfitAndLossUseCase",
    "GetCashFlowUseCase",
    "GetTaxReportUseCase",
    "GetYearEndSummaryUseCase",
]
