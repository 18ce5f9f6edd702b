"""
Transaction-scoped facade: the Querier operations on one connection inside
one transaction, plus commit and rollback.
"""

import logging
from contextlib import AbstractContextManager, nullcontext
from types import TracebackType

from sqlalchemy.engine import Connection, RootTransaction

from namedsql.registry import StatementRegistry

from .querier import NamedQuerier

_log = logging.getLogger(__name__)


class Transaction(NamedQuerier):
    """
    Owns a checked-out connection and its root transaction until commit or
    rollback, after which the connection is returned to the pool. Further
    calls fail inside SQLAlchemy (ResourceClosedError); this class adds no
    extra state checks. Not safe for concurrent use.
    """

    def __init__(
        self,
        connection: Connection,
        transaction: RootTransaction,
        registry: StatementRegistry,
    ) -> None:
        super().__init__(registry)
        self._conn = connection
        self._trans = transaction

    @property
    def connection(self) -> Connection:
        return self._conn

    @property
    def is_active(self) -> bool:
        return self._trans.is_active

    def _connection(self) -> AbstractContextManager[Connection]:
        return nullcontext(self._conn)

    def commit(self) -> None:
        try:
            self._trans.commit()
            _log.debug("Transaction committed")
        finally:
            self._conn.close()

    def rollback(self) -> None:
        try:
            self._trans.rollback()
            _log.debug("Transaction rolled back")
        finally:
            self._conn.close()

    def __enter__(self) -> "Transaction":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if not self._trans.is_active:
            self._conn.close()
            return
        if exc_type is None:
            self.commit()
        else:
            self.rollback()
