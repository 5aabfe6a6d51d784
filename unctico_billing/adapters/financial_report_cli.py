"""CLI adapter printing financial reports for a period.

Configuration is read from the environment:

* ``REPORT_KIND``: ``pnl`` (default), ``cashflow``, ``tax`` or ``year_end``.
* ``REPORT_START_DATE`` / ``REPORT_END_DATE``: ISO dates for pnl/cashflow;
  the current quarter is used when either is missing.
* ``REPORT_YEAR``: calendar year for tax/year_end; defaults to this year.
"""

import calendar
from datetime import date
import os

from unctico_billing.domain.errors import BillingError
from unctico_billing.domain.models import (
    CashFlowReport,
    ProfitAndLossReport,
    TaxReport,
    YearEndSummary,
)
from unctico_billing.domain.services.periods import current_quarter_range
from unctico_billing.infrastructure.container import (
    build_cash_flow_use_case,
    build_profit_and_loss_use_case,
    build_repositories,
    build_tax_report_use_case,
    build_year_end_summary_use_case,
)
from unctico_billing.infrastructure.logging.logger import get_app_logger
from unctico_billing.utils.decimal_utils import format_currency

REPORT_KINDS = ("pnl", "cashflow", "tax", "year_end")


def _parse_date(value: str | None, logger) -> date | None:
    """Parse an ISO date string into a date.

    Args:
        value: Date string in YYYY-MM-DD format.
        logger: Logger used for warnings.

    Returns:
        date | None: Parsed date or None when invalid.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        logger.warning(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        )
        return None


def _parse_year(value: str | None, logger) -> int:
    if not value:
        return date.today().year
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid year '{value}'. Using the current year.")
        return date.today().year


def _print_profit_and_loss(report: ProfitAndLossReport) -> None:
    print(
        f"Profit & loss {report.period.start} to {report.period.end}"
    )
    print(f"Income: {format_currency(report.total_income)}")
    for category, amount in report.income_by_category.items():
        print(f"  {category.value}: {format_currency(amount)}")
    print(f"Expenses: {format_currency(report.total_expenses)}")
    for category, amount in report.expenses_by_category.items():
        print(f"  {category.value}: {format_currency(amount)}")
    print(
        f"Net income: {format_currency(report.net_income)} "
        f"(margin {report.profit_margin:.1f}%)"
    )


def _print_cash_flow(report: CashFlowReport) -> None:
    print(f"Cash flow {report.period.start} to {report.period.end}")
    print(f"Cash in: {format_currency(report.total_cash_in)}")
    for method, amount in report.income_by_method.items():
        print(f"  {method.value}: {format_currency(amount)}")
    print(f"Cash out: {format_currency(report.total_cash_out)}")
    for method, amount in report.expenses_by_method.items():
        print(f"  {method.value}: {format_currency(amount)}")
    print(f"Net cash flow: {format_currency(report.net_cash_flow)}")


def _print_tax_report(report: TaxReport) -> None:
    print(f"Tax report {report.year}")
    print(f"Taxable income: {format_currency(report.taxable_income)}")
    print(
        f"Deductible expenses: {format_currency(report.deductible_expenses)}"
    )
    print(f"Net taxable income: {format_currency(report.net_taxable_income)}")
    if report.expenses_missing_receipts:
        print(
            f"Expenses missing receipts: "
            f"{len(report.expenses_missing_receipts)}"
        )
        for expense in report.expenses_missing_receipts:
            print(
                f"  {expense.date} {expense.description}: "
                f"{format_currency(expense.amount)}"
            )


def _print_year_end(summary: YearEndSummary) -> None:
    _print_profit_and_loss(summary.profit_and_loss)
    print(
        f"Average daily income: "
        f"{format_currency(summary.average_daily_income)}"
    )
    best = summary.highest_income_month
    if best is not None:
        print(f"Best month: {calendar.month_name[best]}")


def main() -> None:
    """Print the requested report."""
    logger = get_app_logger()
    kind = os.getenv("REPORT_KIND", "pnl").strip().lower()
    if kind not in REPORT_KINDS:
        logger.warning(
            f"Unknown report kind '{kind}'. Expected one of "
            f"{', '.join(REPORT_KINDS)}."
        )
        return

    try:
        repositories = build_repositories()
        if kind in ("pnl", "cashflow"):
            start_date = _parse_date(os.getenv("REPORT_START_DATE"), logger)
            end_date = _parse_date(os.getenv("REPORT_END_DATE"), logger)
            if start_date is None or end_date is None:
                period = current_quarter_range(date.today())
                start_date, end_date = period.start, period.end
            if start_date > end_date:
                logger.warning(
                    f"Start date {start_date} is after end date {end_date}."
                )
                return
            if kind == "pnl":
                _print_profit_and_loss(
                    build_profit_and_loss_use_case(repositories).execute(
                        start_date,
                        end_date,
                    )
                )
            else:
                _print_cash_flow(
                    build_cash_flow_use_case(repositories).execute(
                        start_date,
                        end_date,
                    )
                )
            return

        year = _parse_year(os.getenv("REPORT_YEAR"), logger)
        if kind == "tax":
            _print_tax_report(
                build_tax_report_use_case(repositories).execute(year)
            )
        else:
            _print_year_end(
                build_year_end_summary_use_case(repositories).execute(year)
            )
    except BillingError as exc:
        logger.error(f"Report failed: {exc.message}")
        print(exc.message)


if __name__ == "__main__":  # pragma: no cover
    main()
