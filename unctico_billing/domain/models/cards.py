"""Card details submitted for card payments."""

from dataclasses import dataclass
from enum import Enum


class CardBrand(str, Enum):
    VISA = "visa"
    MASTERCARD = "mastercard"
    AMEX = "amex"
    DISCOVER = "discover"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class CardDetails:
    """Raw card data as typed by the user.

    The number is never persisted or logged; use ``masked_number`` instead.
    """

    number: str
    expiry_month: int
    expiry_year: int
    cvv: str
    cardholder_name: str = ""

    @property
    def digits(self) -> str:
        return self.number.replace(" ", "")

    @property
    def last_four(self) -> str:
        return self.digits[-4:]

    @property
    def masked_number(self) -> str:
        return f"**** **** **** {self.last_four}"

    def __repr__(self) -> str:
        return (
            f"CardDetails(number='{self.masked_number}', "
            f"expiry_month={self.expiry_month}, "
            f"expiry_year={self.expiry_year})"
        )


__all__ = ["CardBrand", "CardDetails"]
