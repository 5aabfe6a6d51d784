"""Card validation helpers.

These checks only gate the call to the payment gateway; they say nothing
about fraud or available funds.
"""

from datetime import date

from unctico_billing.domain.constants import CARD_MAX_DIGITS, CARD_MIN_DIGITS
from unctico_billing.domain.errors import (
    CardExpiredError,
    InvalidCardNumberError,
    InvalidCvvError,
)
from unctico_billing.domain.models import CardBrand, CardDetails


def _is_ascii_digits(value: str) -> bool:
    # str.isdigit also accepts superscripts and other non-ASCII digits.
    return value.isascii() and value.isdecimal()


def is_valid_card_number(number: str) -> bool:
    """Return True when the number passes length and Luhn checks.

    Args:
        number: Card number, optionally grouped with spaces.

    Returns:
        bool: True for 13-19 digits with a valid Luhn checksum.
    """
    cleaned = number.replace(" ", "")
    if not CARD_MIN_DIGITS <= len(cleaned) <= CARD_MAX_DIGITS:
        return False
    if not _is_ascii_digits(cleaned):
        return False

    total = 0
    for index, char in enumerate(reversed(cleaned)):
        digit = int(char)
        if index % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


def is_valid_expiry(month: int, year: int, today: date | None = None) -> bool:
    """Return True when the card has not expired.

    A card is valid through the last day of its expiry month.
    """
    current = today or date.today()
    if not 1 <= month <= 12:
        return False
    if year < current.year:
        return False
    if year == current.year and month < current.month:
        return False
    return True


def is_valid_cvv(cvv: str) -> bool:
    return 3 <= len(cvv) <= 4 and _is_ascii_digits(cvv)


def detect_card_brand(number: str) -> CardBrand:
    """Guess the card network from the leading digits."""
    cleaned = number.replace(" ", "")
    if cleaned.startswith("4"):
        return CardBrand.VISA
    if cleaned[:2] in ("34", "37"):
        return CardBrand.AMEX
    if cleaned[:2] in ("51", "52", "53", "54", "55") or (
        _is_ascii_digits(cleaned[:4]) and 2221 <= int(cleaned[:4]) <= 2720
    ):
        return CardBrand.MASTERCARD
    if cleaned.startswith("6011") or cleaned.startswith("65"):
        return CardBrand.DISCOVER
    return CardBrand.UNKNOWN


def validate_card(card: CardDetails, today: date | None = None) -> None:
    """Raise the first failing check for the card.

    Raises:
        InvalidCardNumberError: When the number fails length or Luhn checks.
        CardExpiredError: When the expiry is in the past or malformed.
        InvalidCvvError: When the CVV is not 3-4 digits.
    """
    if not is_valid_card_number(card.number):
        raise InvalidCardNumberError("Invalid card number")
    if not is_valid_expiry(card.expiry_month, card.expiry_year, today):
        raise CardExpiredError("Card has expired")
    if not is_valid_cvv(card.cvv):
        raise InvalidCvvError("Invalid CVV/CVC code")


__all__ = [
    "is_valid_card_number",
    "is_valid_expiry",
    "is_valid_cvv",
    "detect_card_brand",
    "validate_card",
]
