"""Development payment gateway that approves most charges after a delay."""

from collections.abc import Callable
from datetime import datetime
from decimal import Decimal
import random
import time
import uuid

from unctico_billing.application.ports.payment_gateway import (
    Charge,
    GatewayError,
    PaymentGatewayPort,
)
from unctico_billing.domain.models import CardDetails
from unctico_billing.domain.services.card_validation import detect_card_brand
from unctico_billing.infrastructure.logging.logger import get_app_logger

DEFAULT_DELAY_SECONDS = 1.5
DEFAULT_SUCCESS_RATE = 0.95


class SimulatedPaymentGateway(PaymentGatewayPort):
    """Stand-in for a real processor.

    Never use it in production: it moves no money and declines at random.
    """

    def __init__(
        self,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
        success_rate: float = DEFAULT_SUCCESS_RATE,
        sleep: Callable[[float], None] = time.sleep,
        rng: Callable[[], float] = random.random,
        clock: Callable[[], datetime] = datetime.now,
        logger=None,
    ) -> None:
        if not 0 <= success_rate <= 1:
            raise ValueError(
                f"Success rate must be between 0 and 1, got {success_rate}"
            )
        self._delay_seconds = delay_seconds
        self._success_rate = success_rate
        self._sleep = sleep
        self._rng = rng
        self._clock = clock
        self._logger = logger or get_app_logger()

    def authorize(self, card: CardDetails, amount: Decimal) -> Charge:
        """Wait, then approve with the configured probability.

        Raises:
            GatewayError: When the simulated processor declines.
        """
        self._logger.debug(
            f"Simulating authorization of {amount} on {card.masked_number}"
        )
        self._sleep(self._delay_seconds)
        if self._rng() >= self._success_rate:
            raise GatewayError("Card declined by simulated processor")
        return Charge(
            charge_id=f"sim_{uuid.uuid4().hex[:16]}",
            amount=amount,
            card_last_four=card.last_four,
            brand=detect_card_brand(card.number),
            authorized_at=self._clock(),
        )


__all__ = [
    "SimulatedPaymentGateway",
    "DEFAULT_DELAY_SECONDS",
    "DEFAULT_SUCCESS_RATE",
]
