"""
Database facade over a SQLAlchemy Engine and a StatementRegistry.
"""

import logging
from contextlib import AbstractContextManager
from types import TracebackType
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine

from namedsql.core.config import Settings
from namedsql.core.config import settings as default_settings
from namedsql.registry import StatementRegistry

from .querier import NamedQuerier
from .transaction import Transaction

_log = logging.getLogger(__name__)


class Database(NamedQuerier):
    """
    Named-statement access to a connection pool.

    Each call checks a connection out of the engine, runs inside
    ``engine.begin()`` (commit on success, rollback on error) and returns the
    connection. Use begin() for multi-statement transactions.
    """

    _buffer_results = True

    def __init__(self, engine: Engine, registry: StatementRegistry) -> None:
        super().__init__(registry)
        self._engine = engine

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy Engine, for anything the facade does not cover."""
        return self._engine

    def _connection(self) -> AbstractContextManager[Connection]:
        return self._engine.begin()

    def begin(self) -> Transaction:
        """Check out a connection, start a transaction on it and wrap both."""
        conn = self._engine.connect()
        try:
            trans = conn.begin()
        except BaseException:
            conn.close()
            raise
        _log.debug("Transaction started")
        return Transaction(conn, trans, self._registry)

    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        self._engine.dispose()

    def __enter__(self) -> "Database":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Database(driver={self._engine.dialect.name!r}, namespaces={self._registry.namespaces()!r})"


def open(driver: str, dsn: str, sql_path: str, **engine_options: Any) -> Database:  # noqa: A001
    """
    Load every statement file matching *sql_path*, then create an engine for
    ``{driver}://{dsn}``.

    Statement files are loaded first: a parse or discovery error means no
    engine is ever created. Engine errors (bad URL, missing DBAPI module)
    propagate from SQLAlchemy unchanged.
    """
    registry = StatementRegistry.load(sql_path)
    engine = create_engine(f"{driver}://{dsn}", **engine_options)
    _log.info("Opened %s database with %d namespace(s)", driver, len(registry))
    return Database(engine, registry)


def open_from_settings(settings: Settings | None = None) -> Database:
    s = settings or default_settings
    return open(s.DB_DRIVER, s.DB_DSN, s.SQL_PATH, **s.engine_options())
