"""Tests for report aggregation."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from conftest import make_expense, make_income
from unctico_billing.domain.models import (
    DateRange,
    ExpenseCategory,
    IncomeCategory,
    PaymentMethod,
    PaymentStatistics,
)
from unctico_billing.domain.services.reporting import (
    compute_cash_flow,
    compute_profit_and_loss,
    compute_tax_report,
    compute_year_end_summary,
    group_totals,
    monthly_totals,
)

MARCH = DateRange(date(2025, 3, 1), date(2025, 3, 31))


def _entries():
    incomes = [
        make_income("i1", date(2025, 3, 1), "100.00"),
        make_income(
            "i2",
            date(2025, 3, 31),
            "50.00",
            category=IncomeCategory.TIPS,
            method=PaymentMethod.CARD,
            is_taxable=False,
        ),
        make_income("i3", date(2025, 4, 1), "999.00"),
    ]
    expenses = [
        make_expense("e1", date(2025, 3, 10), "30.00"),
        make_expense(
            "e2",
            date(2025, 3, 2),
            "20.00",
            category=ExpenseCategory.DONATIONS,
            method=PaymentMethod.CASH,
            has_receipt=False,
            is_tax_deductible=False,
        ),
    ]
    return incomes, expenses


def test_profit_and_loss_uses_inclusive_period():
    incomes, expenses = _entries()

    report = compute_profit_and_loss(MARCH, incomes, expenses)

    assert report.total_income == Decimal("150.00")
    assert report.total_expenses == Decimal("50.00")
    assert report.net_income == Decimal("100.00")
    assert report.income_by_category == {
        IncomeCategory.MASSAGE_SERVICES: Decimal("100.00"),
        IncomeCategory.TIPS: Decimal("50.00"),
    }
    assert report.profit_margin.quantize(Decimal("0.01")) == Decimal("66.67")


def test_profit_margin_is_zero_without_income():
    _, expenses = _entries()

    report = compute_profit_and_loss(MARCH, [], expenses)

    assert report.total_income == Decimal("0")
    assert report.profit_margin == Decimal("0")
    assert report.expense_ratio == Decimal("0")


def test_cash_flow_groups_by_method():
    incomes, expenses = _entries()

    report = compute_cash_flow(MARCH, incomes, expenses)

    assert report.cash_income == Decimal("100.00")
    assert report.card_income == Decimal("50.00")
    assert report.check_income == Decimal("0")
    assert report.expenses_by_method == {
        PaymentMethod.CARD: Decimal("30.00"),
        PaymentMethod.CASH: Decimal("20.00"),
    }
    assert report.net_cash_flow == Decimal("100.00")


def test_tax_report_splits_taxable_and_deductible():
    incomes, expenses = _entries()
    logger = MagicMock()

    report = compute_tax_report(2025, incomes, expenses, logger=logger)

    assert report.total_income == Decimal("1149.00")
    assert report.taxable_income == Decimal("1099.00")
    assert report.non_taxable_income == Decimal("50.00")
    assert report.deductible_expenses == Decimal("30.00")
    assert report.net_taxable_income == Decimal("1069.00")
    assert [e.id for e in report.expenses_missing_receipts] == ["e2"]
    logger.warning.assert_called_once()


def test_group_totals_keeps_first_seen_order():
    incomes, _ = _entries()

    totals = group_totals(incomes, lambda entry: entry.payment_method)

    assert list(totals) == [PaymentMethod.CASH, PaymentMethod.CARD]


def test_monthly_totals_fill_all_months():
    incomes, _ = _entries()

    totals = monthly_totals(incomes, 2025)

    assert list(totals) == list(range(1, 13))
    assert totals[3] == Decimal("150.00")
    assert totals[4] == Decimal("999.00")
    assert totals[1] == Decimal("0")


def test_year_end_summary_combines_reports():
    incomes, expenses = _entries()

    summary = compute_year_end_summary(2025, incomes, expenses)

    assert summary.profit_and_loss.total_income == Decimal("1149.00")
    assert summary.highest_income_month == 4
    assert summary.average_daily_income == Decimal("1149.00") / 365
    assert summary.tax_report.year == 2025


def test_year_end_summary_without_income_has_no_best_month():
    summary = compute_year_end_summary(2024, [], [])

    assert summary.highest_income_month is None
    assert summary.lowest_income_month is None


def test_date_range_rejects_inverted_bounds():
    with pytest.raises(ValueError):
        DateRange(date(2025, 2, 1), date(2025, 1, 1))


def test_payment_statistics_rates():
    stats = PaymentStatistics(
        total_payments=4,
        completed_payments=2,
        pending_payments=1,
        refunded_payments=1,
        total_amount=Decimal("300"),
        total_refunds=Decimal("50"),
    )

    assert stats.net_revenue == Decimal("250")
    assert stats.success_rate == Decimal("75")
    assert stats.average_payment == Decimal("75")
