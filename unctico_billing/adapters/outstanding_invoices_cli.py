"""CLI adapter listing invoices that still have a balance due."""

from unctico_billing.domain.errors import BillingError
from unctico_billing.infrastructure.container import (
    build_get_invoices_use_case,
)
from unctico_billing.infrastructure.logging.logger import get_app_logger
from unctico_billing.utils.decimal_utils import format_currency


def main() -> None:
    """Print outstanding invoices, flagging the overdue ones."""
    logger = get_app_logger()
    try:
        use_case = build_get_invoices_use_case()
        invoices = use_case.outstanding()
        total = use_case.total_outstanding()
        overdue_ids = {invoice.id for invoice in use_case.overdue()}
    except BillingError as exc:
        logger.error(f"Could not load invoices: {exc.message}")
        print(exc.message)
        return

    if not invoices:
        print("No outstanding invoices.")
        return

    for invoice in invoices:
        overdue = " OVERDUE" if invoice.id in overdue_ids else ""
        print(
            f"{invoice.invoice_number} client={invoice.client_id} "
            f"due={invoice.due_date} "
            f"balance={format_currency(invoice.balance_remaining)} "
            f"paid={invoice.payment_percentage:.0f}% "
            f"status={invoice.status.value}{overdue}"
        )
    print(
        f"{len(invoices)} outstanding invoices "
        f"({len(overdue_ids)} overdue), total {format_currency(total)}"
    )


if __name__ == "__main__":  # pragma: no cover
    main()
