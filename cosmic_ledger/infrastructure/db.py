"""Database infrastructure for the ledger.

This module exposes concrete helpers to create and reuse the SQLAlchemy
engine connected to the ledger document database. It belongs to the
infrastructure layer because it deals with external systems.
"""

from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from cosmic_ledger.application.ports.database import DatabaseEnginePort
from cosmic_ledger.infrastructure.settings import LedgerSettings


def _get_db_url() -> str:
    """Resolve the ledger database URL or raise a descriptive error.

    Returns:
        str: The configured SQLAlchemy URL.

    Raises:
        RuntimeError: If neither LEDGER_DB_URL nor a data/ folder is
            available.
    """
    dotenv.load_dotenv()
    db_url = LedgerSettings.from_env().db_url
    if not db_url:
        raise RuntimeError("Missing environment variable: LEDGER_DB_URL")
    return db_url


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine for the ledger database.

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


_ledger_engine: Optional[Engine] = None


def get_ledger_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the ledger database.

    Returns:
        Engine: Lazily initialized engine connected to the document store.
    """
    global _ledger_engine
    if _ledger_engine is None:
        _ledger_engine = _create_engine(_get_db_url())
    return _ledger_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine.

    The adapter hides configuration details (environment variables, pooling)
    behind the port so application code can depend only on the protocol.
    """

    def get_ledger_engine(self) -> Engine:
        """Get the engine for the ledger database.

        Returns:
            Engine: SQLAlchemy engine connected to the ledger documents.
        """
        return get_ledger_engine()


__all__ = ["get_ledger_engine", "SqlAlchemyDatabaseEngineAdapter"]
