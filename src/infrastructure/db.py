"""Database infrastructure for the settlement engine.

This module exposes concrete helpers to create and reuse a SQLAlchemy engine
connected to the ERP database holding groups, invoices, receipts and bonus
settings. It belongs to the infrastructure layer because it deals with an
external system (PostgreSQL).
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from src.application.ports.database import DatabaseEnginePort


def _get_env_var(name: str) -> str:
    """Read an environment variable or raise a descriptive error.

    Args:
        name: Name of the environment variable to read.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the environment variable is missing or empty.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine for a PostgreSQL database.

    Args:
        db_url: Fully qualified database URL (including driver and credentials)

    Returns:
        Engine: A SQLAlchemy engine instance with a small connection pool and
        health checks enabled.
    """
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_erp_engine: Optional[Engine] = None


def get_erp_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the ERP database.

    Returns:
        Engine: Lazily initialized engine connected to the ERP backend.
    """
    global _erp_engine
    if _erp_engine is None:
        db_url = _get_env_var("ERP_DB_URL")
        _erp_engine = _create_engine(db_url)
    return _erp_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine.

    The adapter hides configuration details (environment variables, pooling)
    behind the port so application use cases can depend only on the protocol.
    """

    def get_erp_engine(self) -> Engine:
        """Get the engine for the ERP database.

        Returns:
            Engine: SQLAlchemy engine connected to the ERP database.
        """
        return get_erp_engine()


__all__ = [
    "get_erp_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
