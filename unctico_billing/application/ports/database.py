"""Database port for the SQL storage backend.

Application code depends on this protocol; infrastructure provides the
SQLAlchemy-backed implementation.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the billing database engine."""

    def get_billing_engine(self) -> Engine:
        """Get the engine for the billing database.

        Returns:
            Engine: SQLAlchemy engine connected to the billing database.
        """


__all__ = ["DatabaseEnginePort"]
