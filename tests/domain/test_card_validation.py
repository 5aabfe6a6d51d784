"""Tests for card number, expiry and CVV checks."""

from datetime import date

import pytest

from unctico_billing.domain.errors import (
    CardExpiredError,
    InvalidCardNumberError,
    InvalidCvvError,
)
from unctico_billing.domain.models import CardBrand, CardDetails
from unctico_billing.domain.services.card_validation import (
    detect_card_brand,
    is_valid_card_number,
    is_valid_cvv,
    is_valid_expiry,
    validate_card,
)

TODAY = date(2025, 6, 15)


def test_luhn_accepts_valid_number():
    assert is_valid_card_number("4532015112830366") is True
    assert is_valid_card_number("4532 0151 1283 0366") is True


def test_luhn_rejects_changed_check_digit():
    assert is_valid_card_number("4532015112830367") is False


@pytest.mark.parametrize(
    "number",
    [
        "",
        "123456789012",
        "12345678901234567890",
        "4532a15112830366",
        "453201511283036\u00b2",
        "\uff14532015112830366",
    ],
)
def test_card_number_length_and_digits(number):
    assert is_valid_card_number(number) is False


def test_expiry_current_month_is_valid_last_month_is_not():
    assert is_valid_expiry(6, 2025, TODAY) is True
    assert is_valid_expiry(5, 2025, TODAY) is False
    assert is_valid_expiry(1, 2026, TODAY) is True
    assert is_valid_expiry(12, 2024, TODAY) is False


def test_expiry_rejects_bad_month():
    assert is_valid_expiry(13, 2030, TODAY) is False
    assert is_valid_expiry(0, 2030, TODAY) is False


@pytest.mark.parametrize(
    "cvv, expected",
    [("123", True), ("1234", True), ("12", False), ("12a", False),
     ("12345", False), ("12\u00b3", False), ("\u0661\u0662\u0663", False)],
)
def test_cvv_rules(cvv, expected):
    assert is_valid_cvv(cvv) is expected


@pytest.mark.parametrize(
    "number, brand",
    [
        ("4532015112830366", CardBrand.VISA),
        ("5555555555554444", CardBrand.MASTERCARD),
        ("2221000000000009", CardBrand.MASTERCARD),
        ("378282246310005", CardBrand.AMEX),
        ("6011111111111117", CardBrand.DISCOVER),
        ("3530111333300000", CardBrand.UNKNOWN),
    ],
)
def test_detect_card_brand(number, brand):
    assert detect_card_brand(number) == brand


def test_validate_card_reports_first_failure():
    good = CardDetails("4532015112830366", 6, 2025, "123")

    validate_card(good, TODAY)
    with pytest.raises(InvalidCardNumberError):
        validate_card(CardDetails("4532015112830367", 1, 2000, "1"), TODAY)
    with pytest.raises(CardExpiredError):
        validate_card(CardDetails("4532015112830366", 5, 2025, "1"), TODAY)
    with pytest.raises(InvalidCvvError):
        validate_card(CardDetails("4532015112830366", 6, 2025, "1"), TODAY)


def test_validate_card_rejects_non_ascii_digits():
    with pytest.raises(InvalidCardNumberError):
        validate_card(
            CardDetails("453201511283036²", 6, 2025, "123"),
            TODAY,
        )
    with pytest.raises(InvalidCvvError):
        validate_card(
            CardDetails("4532015112830366", 6, 2025, "12³"),
            TODAY,
        )


def test_card_details_masks_number():
    card = CardDetails("4532 0151 1283 0366", 6, 2025, "123")

    assert card.last_four == "0366"
    assert card.masked_number == "**** **** **** 0366"
    assert "4532" not in repr(card)
    assert "cvv" not in repr(card)
