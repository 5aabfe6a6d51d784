"""Domain services for financial report aggregation.

Reports are recomputed on every call from the ledger entries handed in;
nothing is cached.
"""

from collections.abc import Callable, Hashable, Iterable
from decimal import Decimal
from logging import Logger
from typing import TypeVar

from unctico_billing.domain.models import (
    CashFlowReport,
    DateRange,
    ExpenseRecord,
    IncomeRecord,
    ProfitAndLossReport,
    TaxReport,
    YearEndSummary,
)
from unctico_billing.domain.services.periods import year_range
from unctico_billing.utils.decimal_utils import ZERO, coerce_decimal

_Entry = TypeVar("_Entry", IncomeRecord, ExpenseRecord)
_Key = TypeVar("_Key", bound=Hashable)


def filter_by_period(
    entries: Iterable[_Entry],
    period: DateRange,
) -> list[_Entry]:
    return [entry for entry in entries if period.contains(entry.date)]


def sum_amounts(entries: Iterable[IncomeRecord | ExpenseRecord]) -> Decimal:
    return sum((coerce_decimal(entry.amount) for entry in entries), ZERO)


def group_totals(
    entries: Iterable[_Entry],
    key: Callable[[_Entry], _Key],
) -> dict[_Key, Decimal]:
    """Sum entry amounts per key, preserving first-seen key order."""
    totals: dict[_Key, Decimal] = {}
    for entry in entries:
        group = key(entry)
        totals[group] = totals.get(group, ZERO) + coerce_decimal(entry.amount)
    return totals


def compute_profit_and_loss(
    period: DateRange,
    incomes: Iterable[IncomeRecord],
    expenses: Iterable[ExpenseRecord],
) -> ProfitAndLossReport:
    """Compute a profit and loss statement.

    Args:
        period: Inclusive reporting period.
        incomes: Income entries (any dates; filtered here).
        expenses: Expense entries (any dates; filtered here).

    Returns:
        ProfitAndLossReport: Totals and per-category breakdowns.
    """
    period_incomes = filter_by_period(incomes, period)
    period_expenses = filter_by_period(expenses, period)
    return ProfitAndLossReport(
        period=period,
        total_income=sum_amounts(period_incomes),
        income_by_category=group_totals(
            period_incomes,
            lambda entry: entry.category,
        ),
        total_expenses=sum_amounts(period_expenses),
        expenses_by_category=group_totals(
            period_expenses,
            lambda entry: entry.category,
        ),
    )


def compute_cash_flow(
    period: DateRange,
    incomes: Iterable[IncomeRecord],
    expenses: Iterable[ExpenseRecord],
) -> CashFlowReport:
    """Compute cash in and cash out grouped by payment method."""
    period_incomes = filter_by_period(incomes, period)
    period_expenses = filter_by_period(expenses, period)
    return CashFlowReport(
        period=period,
        income_by_method=group_totals(
            period_incomes,
            lambda entry: entry.payment_method,
        ),
        expenses_by_method=group_totals(
            period_expenses,
            lambda entry: entry.payment_method,
        ),
        total_cash_in=sum_amounts(period_incomes),
        total_cash_out=sum_amounts(period_expenses),
    )


def compute_tax_report(
    year: int,
    incomes: Iterable[IncomeRecord],
    expenses: Iterable[ExpenseRecord],
    logger: Logger | None = None,
) -> TaxReport:
    """Compute the calendar-year tax preparation report.

    Expenses in the year without a receipt are listed for follow-up, oldest
    first.
    """
    period = year_range(year)
    year_incomes = filter_by_period(incomes, period)
    year_expenses = filter_by_period(expenses, period)
    missing_receipts = sorted(
        (entry for entry in year_expenses if not entry.has_receipt),
        key=lambda entry: (entry.date, entry.id),
    )
    if missing_receipts and logger is not None:
        logger.warning(
            f"{len(missing_receipts)} expenses in {year} have no receipt"
        )
    return TaxReport(
        year=year,
        total_income=sum_amounts(year_incomes),
        taxable_income=sum_amounts(
            entry for entry in year_incomes if entry.is_taxable
        ),
        income_by_category=group_totals(
            year_incomes,
            lambda entry: entry.category,
        ),
        total_expenses=sum_amounts(year_expenses),
        deductible_expenses=sum_amounts(
            entry for entry in year_expenses if entry.is_tax_deductible
        ),
        expenses_by_category=group_totals(
            year_expenses,
            lambda entry: entry.category,
        ),
        expenses_missing_receipts=missing_receipts,
    )


def monthly_totals(
    entries: Iterable[IncomeRecord | ExpenseRecord],
    year: int,
) -> dict[int, Decimal]:
    """Return totals for months 1-12 of ``year`` (zero for empty months)."""
    totals = {month: ZERO for month in range(1, 13)}
    for entry in entries:
        if entry.date.year == year:
            totals[entry.date.month] += coerce_decimal(entry.amount)
    return totals


def compute_year_end_summary(
    year: int,
    incomes: Iterable[IncomeRecord],
    expenses: Iterable[ExpenseRecord],
    logger: Logger | None = None,
) -> YearEndSummary:
    income_list = list(incomes)
    expense_list = list(expenses)
    period = year_range(year)
    profit_and_loss = compute_profit_and_loss(period, income_list, expense_list)
    return YearEndSummary(
        year=year,
        profit_and_loss=profit_and_loss,
        cash_flow=compute_cash_flow(period, income_list, expense_list),
        tax_report=compute_tax_report(
            year,
            income_list,
            expense_list,
            logger=logger,
        ),
        income_by_month=monthly_totals(income_list, year),
        expenses_by_month=monthly_totals(expense_list, year),
        average_daily_income=profit_and_loss.total_income / period.days,
    )


__all__ = [
    "filter_by_period",
    "sum_amounts",
    "group_totals",
    "compute_profit_and_loss",
    "compute_cash_flow",
    "compute_tax_report",
    "monthly_totals",
    "compute_year_end_summary",
]
