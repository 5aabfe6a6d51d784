"""Derived report snapshots for bookkeeping and payments."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from unctico_billing.domain.models.billing import PaymentMethod
from unctico_billing.domain.models.ledger import (
    ExpenseCategory,
    ExpenseRecord,
    IncomeCategory,
)
from unctico_billing.utils.decimal_utils import ZERO, percentage_of


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of calendar days."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"Range start {self.start} is after range end {self.end}"
            )

    def contains(self, value: date) -> bool:
        return self.start <= value <= self.end

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


@dataclass(frozen=True)
class ProfitAndLossReport:
    """Income and expenses grouped by category for a period."""

    period: DateRange
    total_income: Decimal
    income_by_category: dict[IncomeCategory, Decimal]
    total_expenses: Decimal
    expenses_by_category: dict[ExpenseCategory, Decimal]

    @property
    def net_income(self) -> Decimal:
        return self.total_income - self.total_expenses

    @property
    def profit_margin(self) -> Decimal:
        """Return net income as a percentage of income (0 without income)."""
        return percentage_of(self.net_income, self.total_income)

    @property
    def expense_ratio(self) -> Decimal:
        return percentage_of(self.total_expenses, self.total_income)


@dataclass(frozen=True)
class CashFlowReport:
    """Cash in by payment method against cash out for a period."""

    period: DateRange
    income_by_method: dict[PaymentMethod, Decimal]
    expenses_by_method: dict[PaymentMethod, Decimal]
    total_cash_in: Decimal
    total_cash_out: Decimal

    @property
    def net_cash_flow(self) -> Decimal:
        return self.total_cash_in - self.total_cash_out

    @property
    def cash_income(self) -> Decimal:
        return self.income_by_method.get(PaymentMethod.CASH, ZERO)

    @property
    def check_income(self) -> Decimal:
        return self.income_by_method.get(PaymentMethod.CHECK, ZERO)

    @property
    def card_income(self) -> Decimal:
        return self.income_by_method.get(PaymentMethod.CARD, ZERO)

    @property
    def other_income(self) -> Decimal:
        return (
            self.total_cash_in
            - self.cash_income
            - self.check_income
            - self.card_income
        )


@dataclass(frozen=True)
class TaxReport:
    """Calendar-year figures prepared for the accountant."""

    year: int
    total_income: Decimal
    taxable_income: Decimal
    income_by_category: dict[IncomeCategory, Decimal]
    total_expenses: Decimal
    deductible_expenses: Decimal
    expenses_by_category: dict[ExpenseCategory, Decimal]
    expenses_missing_receipts: list[ExpenseRecord]

    @property
    def non_taxable_income(self) -> Decimal:
        return self.total_income - self.taxable_income

    @property
    def non_deductible_expenses(self) -> Decimal:
        return self.total_expenses - self.deductible_expenses

    @property
    def net_taxable_income(self) -> Decimal:
        return self.taxable_income - self.deductible_expenses


@dataclass(frozen=True)
class YearEndSummary:
    """Annual roll-up of the three reports plus monthly trends."""

    year: int
    profit_and_loss: ProfitAndLossReport
    cash_flow: CashFlowReport
    tax_report: TaxReport
    income_by_month: dict[int, Decimal]
    expenses_by_month: dict[int, Decimal]
    average_daily_income: Decimal

    @property
    def highest_income_month(self) -> int | None:
        if not any(self.income_by_month.values()):
            return None
        return max(self.income_by_month, key=self.income_by_month.__getitem__)

    @property
    def lowest_income_month(self) -> int | None:
        if not any(self.income_by_month.values()):
            return None
        return min(self.income_by_month, key=self.income_by_month.__getitem__)


@dataclass(frozen=True)
class PaymentStatistics:
    """Counts and totals over the payment ledger."""

    total_payments: int
    completed_payments: int
    pending_payments: int
    refunded_payments: int
    total_amount: Decimal
    total_refunds: Decimal

    @property
    def net_revenue(self) -> Decimal:
        return self.total_amount - self.total_refunds

    @property
    def success_rate(self) -> Decimal:
        settled = self.total_payments - self.pending_payments
        return percentage_of(settled, self.total_payments)

    @property
    def average_payment(self) -> Decimal:
        if self.total_payments == 0:
            return ZERO
        return self.total_amount / self.total_payments


@dataclass(frozen=True)
class InvoiceStatistics:
    """Counts and totals over all invoices.

    Attributes:
        total_invoices: Every invoice, void ones included.
        unpaid_invoices: Invoices with nothing paid yet.
        partially_paid_invoices: Invoices with a remaining balance.
        paid_invoices: Invoices settled in full.
        void_invoices: Cancelled invoices.
        overdue_invoices: Outstanding invoices past their due date.
        total_billed: Sum of totals over non-void invoices.
        total_outstanding: Sum of remaining balances.
        total_revenue: Sum of totals over paid invoices.
    """

    total_invoices: int
    unpaid_invoices: int
    partially_paid_invoices: int
    paid_invoices: int
    void_invoices: int
    overdue_invoices: int
    total_billed: Decimal
    total_outstanding: Decimal
    total_revenue: Decimal

    @property
    def collection_rate(self) -> Decimal:
        """Return the billed amount already collected, as a percentage."""
        return percentage_of(
            self.total_billed - self.total_outstanding,
            self.total_billed,
        )

__all__ = [
    "DateRange",
    "ProfitAndLossReport",
    "CashFlowReport",
    "TaxReport",
    "YearEndSummary",
    "PaymentStatistics",
    "InvoiceStatistics",
]
