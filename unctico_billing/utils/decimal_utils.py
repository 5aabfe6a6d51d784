"""Helpers for Decimal normalization and money formatting."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")

CURRENCY_SYMBOL = "$"


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from JSON, SQL or callers.

    Returns:
        Decimal: Normalized numeric value.

    Raises:
        ValueError: When the value is not a finite number.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError(f"Not a number: {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    return result


def to_money(value) -> Decimal:
    """Round a numeric value half-up to whole cents.

    Args:
        value: Raw numeric value.

    Returns:
        Decimal: Amount quantized to two decimal places.

    Raises:
        ValueError: When the value is not a finite number.
    """
    return coerce_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_currency(amount) -> str:
    """Render an amount as a USD string such as ``$1,234.56``.

    Args:
        amount: Amount to render.

    Returns:
        str: Formatted amount with two decimal places.
    """
    value = to_money(amount)
    sign = "-" if value < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(value):,.2f}"


def percentage_of(part, whole) -> Decimal:
    """Return ``part / whole * 100``, or zero when ``whole`` is zero."""
    whole_value = coerce_decimal(whole)
    if whole_value == 0:
        return ZERO
    return coerce_decimal(part) / whole_value * HUNDRED


__all__ = [
    "CENT",
    "ZERO",
    "HUNDRED",
    "CURRENCY_SYMBOL",
    "coerce_decimal",
    "to_money",
    "format_currency",
    "percentage_of",
]
