"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
from decimal import Decimal
import os
from pathlib import Path
from typing import Optional

import dotenv

from unctico_billing.infrastructure.logging.logger import get_app_logger
from unctico_billing.infrastructure.simulated_gateway import (
    DEFAULT_DELAY_SECONDS,
    DEFAULT_SUCCESS_RATE,
)
from unctico_billing.utils.decimal_utils import coerce_decimal
from unctico_billing.utils.utils import get_project_root

SUPPORTED_BACKENDS = ("json", "sqlalchemy")


@dataclass(frozen=True)
class BillingSettings:
    """Settings for storage and payment processing.

    Attributes:
        backend: Storage backend identifier (json or sqlalchemy).
        data_dir: Directory holding the JSON collection files.
        encryption_key: Optional url-safe base64 AES key for JSON files.
        default_tax_rate: Tax rate applied when callers pass none.
        gateway_success_rate: Approval probability of the simulated gateway.
        gateway_delay_seconds: Delay of the simulated gateway.
    """

    backend: str = "json"
    data_dir: Path = Path("data")
    encryption_key: Optional[str] = None
    default_tax_rate: Decimal = Decimal("0")
    gateway_success_rate: float = DEFAULT_SUCCESS_RATE
    gateway_delay_seconds: float = DEFAULT_DELAY_SECONDS

    @classmethod
    def from_env(cls) -> "BillingSettings":
        """Build settings from environment variables and ``.env``.

        Returns:
            BillingSettings: Settings sourced from environment variables.

        Raises:
            ValueError: When a variable holds an unusable value.
        """
        dotenv.load_dotenv()
        backend = os.getenv("BILLING_BACKEND", "json").strip().lower()
        if backend not in SUPPORTED_BACKENDS:
            raise ValueError(
                f"Unsupported billing backend: {backend}. "
                "Expected json or sqlalchemy."
            )
        raw_dir = os.getenv("BILLING_DATA_DIR")
        data_dir = (
            Path(raw_dir).expanduser().resolve()
            if raw_dir
            else get_project_root() / "data"
        )
        encryption_key = os.getenv("BILLING_ENCRYPTION_KEY") or None
        if encryption_key is None and backend == "json":
            get_app_logger().warning(
                "BILLING_ENCRYPTION_KEY is not set; billing files are "
                "stored unencrypted"
            )
        return cls(
            backend=backend,
            data_dir=data_dir,
            encryption_key=encryption_key,
            default_tax_rate=cls._decimal_var(
                "BILLING_DEFAULT_TAX_RATE",
                Decimal("0"),
            ),
            gateway_success_rate=cls._float_var(
                "BILLING_GATEWAY_SUCCESS_RATE",
                DEFAULT_SUCCESS_RATE,
            ),
            gateway_delay_seconds=cls._float_var(
                "BILLING_GATEWAY_DELAY_SECONDS",
                DEFAULT_DELAY_SECONDS,
            ),
        )

    @staticmethod
    def _decimal_var(name: str, default: Decimal) -> Decimal:
        raw = os.getenv(name)
        if not raw:
            return default
        try:
            value = coerce_decimal(raw)
        except ValueError as exc:
            raise ValueError(f"{name} must be a decimal, got {raw!r}") from exc
        if value < 0:
            raise ValueError(f"{name} must not be negative, got {raw!r}")
        return value

    @staticmethod
    def _float_var(name: str, default: float) -> float:
        raw = os.getenv(name)
        if not raw:
            return default
        try:
            return float(raw.strip())
        except ValueError as exc:
            raise ValueError(f"{name} must be a number, got {raw!r}") from exc


__all__ = ["BillingSettings", "SUPPORTED_BACKENDS"]
