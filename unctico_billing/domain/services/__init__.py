"""Domain services package."""

from .card_validation import (
    detect_card_brand,
    is_valid_card_number,
    is_valid_cvv,
    is_valid_expiry,
    validate_card,
)
from .invoicing import (
    apply_payment,
    apply_refund,
    build_line_items,
    format_document_number,
    parse_amount,
    parse_decimal,
    price_for_service,
    resolve_status,
    validate_invoice_terms,
    void_invoice,
)
from .periods import (
    current_quarter_range,
    last_quarter_range,
    month_range,
    quarter_of,
    quarter_range,
    year_range,
)
from .reporting import (
    compute_cash_flow,
    compute_profit_and_loss,
    compute_tax_report,
    compute_year_end_summary,
    monthly_totals,
)

__all__ = [
    "detect_card_brand",
    "is_valid_card_number",
    "is_valid_cvv",
    "is_valid_expiry",
    "validate_card",
    "apply_payment",
    "apply_refund",
    "build_line_items",
    "format_document_number",
    "parse_amount",
    "parse_decimal",
    "price_for_service",
    "resolve_status",
    "validate_invoice_terms",
    "void_invoice",
    "current_quarter_range",
    "last_quarter_range",
    "month_range",
    "quarter_of",
    "quarter_range",
    "year_range",
    "compute_cash_flow",
    "compute_profit_and_loss",
    "compute_tax_report",
    "compute_year_end_summary",
    "monthly_totals",
]
