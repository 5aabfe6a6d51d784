"""Database infrastructure for the SQL billing backend.

This module exposes helpers to create and reuse the SQLAlchemy engine
connected to the billing database.
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from unctico_billing.application.ports.database import DatabaseEnginePort


def _get_env_var(name: str) -> str:
    """Return a required setting, loading .env first.

    Raises:
        RuntimeError: When the variable is unset or blank.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    """Create the engine for a billing database URL.

    SQLite URLs keep the dialect default pool; server databases get a
    small QueuePool. Connections are pinged before use in both cases.
    """
    if db_url.startswith("sqlite"):
        return create_engine(db_url, pool_pre_ping=True, future=True)
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_billing_engine: Optional[Engine] = None


def get_billing_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the billing database.

    Returns:
        Engine: Lazily initialized engine built from ``BILLING_DB_URL``.
    """
    global _billing_engine
    if _billing_engine is None:
        db_url = _get_env_var("BILLING_DB_URL")
        _billing_engine = _create_engine(db_url)
    return _billing_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by the module engine."""

    def get_billing_engine(self) -> Engine:
        return get_billing_engine()


__all__ = ["get_billing_engine", "SqlAlchemyDatabaseEngineAdapter"]
