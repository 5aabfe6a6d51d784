"""Use case to add, list and remove income and expense entries."""

from datetime import date
from decimal import Decimal
import uuid

from unctico_billing.application.ports.repositories import (
    LedgerRepositoryPort,
)
from unctico_billing.domain.errors import InvalidAmountError
from unctico_billing.domain.models import (
    DateRange,
    ExpenseCategory,
    ExpenseRecord,
    IncomeCategory,
    IncomeRecord,
    PaymentMethod,
)
from unctico_billing.domain.services.invoicing import parse_amount
from unctico_billing.domain.services.reporting import filter_by_period
from unctico_billing.infrastructure.logging.logger import get_app_logger


def _positive_amount(amount: Decimal | str) -> Decimal:
    value = parse_amount(amount)
    if value <= 0:
        raise InvalidAmountError("Amount must be greater than zero")
    return value


class ManageLedgerUseCase:
    """Manual bookkeeping for the income and expense ledgers."""

    def __init__(self, ledger: LedgerRepositoryPort, logger=None) -> None:
        self._ledger = ledger
        self._logger = logger or get_app_logger()

    def add_income(
        self,
        entry_date: date,
        amount: Decimal | str,
        category: IncomeCategory,
        description: str,
        payment_method: PaymentMethod,
        source: str = "",
        is_taxable: bool | None = None,
        client_id: str | None = None,
    ) -> IncomeRecord:
        """Store a manual income entry.

        ``is_taxable`` defaults to the category default when omitted.

        Raises:
            InvalidAmountError: When amount is not positive.
            PersistenceError: When the entry cannot be stored.
        """
        category = IncomeCategory(category)
        income = IncomeRecord(
            id=str(uuid.uuid4()),
            date=entry_date,
            amount=_positive_amount(amount),
            category=category,
            description=description,
            payment_method=PaymentMethod(payment_method),
            source=source,
            is_taxable=(
                category.default_taxable if is_taxable is None else is_taxable
            ),
            client_id=client_id,
        )
        self._ledger.save_income(income)
        self._logger.info(
            f"Added income {income.id} ({category.value}) {income.amount}"
        )
        return income

    def add_expense(
        self,
        entry_date: date,
        amount: Decimal | str,
        category: ExpenseCategory,
        description: str,
        payment_method: PaymentMethod,
        vendor: str = "",
        is_tax_deductible: bool | None = None,
        has_receipt: bool = False,
    ) -> ExpenseRecord:
        """Store a manual expense entry.

        ``is_tax_deductible`` defaults to the category default when omitted.

        Raises:
            InvalidAmountError: When amount is not positive.
            PersistenceError: When the entry cannot be stored.
        """
        category = ExpenseCategory(category)
        expense = ExpenseRecord(
            id=str(uuid.uuid4()),
            date=entry_date,
            amount=_positive_amount(amount),
            category=category,
            description=description,
            payment_method=PaymentMethod(payment_method),
            vendor=vendor,
            is_tax_deductible=(
                category.default_deductible
                if is_tax_deductible is None
                else is_tax_deductible
            ),
            has_receipt=has_receipt,
        )
        self._ledger.save_expense(expense)
        self._logger.info(
            f"Added expense {expense.id} ({category.value}) {expense.amount}"
        )
        if not has_receipt:
            self._logger.warning(f"Expense {expense.id} has no receipt")
        return expense

    def delete_income(self, income_id: str) -> None:
        self._ledger.delete_income(income_id)
        self._logger.info(f"Deleted income {income_id}")

    def delete_expense(self, expense_id: str) -> None:
        self._ledger.delete_expense(expense_id)
        self._logger.info(f"Deleted expense {expense_id}")

    def list_incomes(
        self,
        period: DateRange | None = None,
    ) -> list[IncomeRecord]:
        """Return income entries, newest first, optionally within a period."""
        entries = self._ledger.list_incomes()
        if period is not None:
            entries = filter_by_period(entries, period)
        return sorted(entries, key=lambda entry: entry.date, reverse=True)

    def list_expenses(
        self,
        period: DateRange | None = None,
    ) -> list[ExpenseRecord]:
        """Return expense entries, newest first, optionally within a period."""
        entries = self._ledger.list_expenses()
        if period is not None:
            entries = filter_by_period(entries, period)
        return sorted(entries, key=lambda entry: entry.date, reverse=True)


__all__ = ["ManageLedgerUseCase"]
