"""Port for the external card payment processor."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Protocol

from unctico_billing.domain.models import CardBrand, CardDetails


@dataclass(frozen=True)
class Charge:
    """Authorized charge returned by the processor."""

    charge_id: str
    amount: Decimal
    card_last_four: str
    brand: CardBrand
    authorized_at: datetime


class GatewayError(Exception):
    """Raised by gateways when a charge is declined or cannot be made."""


class PaymentGatewayPort(Protocol):
    """Port exposing card authorization."""

    def authorize(self, card: CardDetails, amount: Decimal) -> Charge:
        """Charge the card or raise GatewayError."""


__all__ = ["Charge", "GatewayError", "PaymentGatewayPort"]
