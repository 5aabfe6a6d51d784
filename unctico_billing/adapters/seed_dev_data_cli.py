"""Seed the development data store with sample invoices and ledger entries.

Never run this against production data: it goes through the regular use
cases, so every record it creates is indistinguishable from a real one.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal
import os

from unctico_billing.domain.errors import BillingError
from unctico_billing.domain.models import (
    Appointment,
    ExpenseCategory,
    IncomeCategory,
    PaymentMethod,
    ServiceType,
)
from unctico_billing.infrastructure.container import (
    build_generate_invoice_use_case,
    build_manage_ledger_use_case,
    build_record_payment_use_case,
    build_repositories,
)
from unctico_billing.infrastructure.logging.logger import get_app_logger

_CLIENT_SERVICES = (
    ("client-ava", ServiceType.SWEDISH, Decimal("1")),
    ("client-ben", ServiceType.DEEP_TISSUE, Decimal("0.5")),
    ("client-cara", ServiceType.HOT_STONE, Decimal("0")),
    ("client-dev", ServiceType.PRENATAL, Decimal("1")),
)

_EXPENSES = (
    (ExpenseCategory.RENT, "1200.00", "Studio rent", True),
    (ExpenseCategory.MASSAGE_SUPPLIES, "86.40", "Oils and lotions", True),
    (ExpenseCategory.LINENS, "45.00", "Laundry service", False),
    (ExpenseCategory.MARKETING, "60.00", "Local ads", True),
)


def main() -> None:
    """Create invoices, payments and expenses for the current month."""
    logger = get_app_logger()
    tax_rate = Decimal(os.getenv("SEED_TAX_RATE", "0.08"))
    today = date.today()

    try:
        repositories = build_repositories()
        generate_invoice = build_generate_invoice_use_case(repositories)
        record_payment = build_record_payment_use_case(repositories)
        ledger = build_manage_ledger_use_case(repositories)

        for index, (client_id, service, paid_share) in enumerate(
            _CLIENT_SERVICES
        ):
            appointment = Appointment(
                id=f"appt-{client_id}-{today.isoformat()}",
                client_id=client_id,
                service_type=service,
                starts_at=datetime.combine(
                    today - timedelta(days=index),
                    datetime.min.time(),
                ).replace(hour=10),
            )
            invoice = generate_invoice.execute(
                client_id,
                [appointment],
                tax_rate=tax_rate,
                due_in_days=14,
            )
            amount = (invoice.total * paid_share).quantize(Decimal("0.01"))
            if amount > 0:
                record_payment.execute(
                    invoice.id,
                    client_id,
                    amount,
                    PaymentMethod.CARD if index % 2 else PaymentMethod.CASH,
                )
            print(f"Invoice {invoice.invoice_number} for {client_id}")

        ledger.add_income(
            today,
            "40.00",
            IncomeCategory.TIPS,
            "Tips jar",
            PaymentMethod.CASH,
        )
        for category, amount, description, has_receipt in _EXPENSES:
            ledger.add_expense(
                today,
                amount,
                category,
                description,
                PaymentMethod.CARD,
                has_receipt=has_receipt,
            )
    except BillingError as exc:
        logger.error(f"Seeding failed: {exc.message}")
        print(exc.message)
        return

    print("Development data ready!")
    print(
        f"{len(_CLIENT_SERVICES)} invoices, 1 tip entry and "
        f"{len(_EXPENSES)} expenses created."
    )


if __name__ == "__main__":  # pragma: no cover
    main()
