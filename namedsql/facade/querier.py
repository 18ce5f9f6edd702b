"""
Shared resolve-then-call logic for Database and Transaction.

Every operation looks the statement name up in the registry first (a miss
raises StatementNotFoundError without touching a connection), then hands the
SQL text and arguments to SQLAlchemy unchanged:

- positional args -> ``Connection.exec_driver_sql`` (driver placeholders: ``?``, ``%s``);
  a single mapping argument is passed through for drivers with named paramstyle;
- named_exec -> ``Connection.execute(text(sql), params)`` (``:name`` placeholders).

Client errors (sqlalchemy.exc.*) propagate unchanged.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from contextlib import AbstractContextManager
from typing import Any, Protocol, TypeVar, runtime_checkable

from sqlalchemy import text
from sqlalchemy.engine import Connection, Result, Row
from sqlalchemy.exc import NoResultFound

from namedsql.registry import StatementRegistry

from .scan import ExecResult, bind_params, exec_result, scan_row, scan_rows

_log = logging.getLogger(__name__)

T = TypeVar("T")


@runtime_checkable
class Querier(Protocol):
    """Operations available on both a Database and a Transaction."""

    def query(self, name: str, *args: Any, execution_options: Mapping[str, Any] | None = None) -> Result[Any]: ...

    def query_row(self, name: str, *args: Any, execution_options: Mapping[str, Any] | None = None) -> Row[Any] | None: ...

    def get(self, row_type: Any, name: str, *args: Any, execution_options: Mapping[str, Any] | None = None) -> Any: ...

    def select(self, row_type: Any, name: str, *args: Any, execution_options: Mapping[str, Any] | None = None) -> list[Any]: ...

    def exec(self, name: str, *args: Any, execution_options: Mapping[str, Any] | None = None) -> ExecResult: ...

    def named_exec(self, name: str, arg: Any, *, execution_options: Mapping[str, Any] | None = None) -> ExecResult: ...


def _driver_params(args: tuple[Any, ...]) -> Any:
    if not args:
        return None
    if len(args) == 1 and isinstance(args[0], Mapping):
        return args[0]
    return args


def _options(execution_options: Mapping[str, Any] | None) -> dict[str, Any]:
    return {"execution_options": execution_options} if execution_options else {}


class NamedQuerier(ABC):
    """
    Base for the two facades. Subclasses provide ``_connection()``: a context
    manager yielding the Connection one call runs on.
    """

    # Plain-handle calls release their connection before returning, so row
    # results must be materialised first.
    _buffer_results = False

    def __init__(self, registry: StatementRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> StatementRegistry:
        return self._registry

    @abstractmethod
    def _connection(self) -> AbstractContextManager[Connection]: ...

    def _run(self, name: str, call: Callable[[Connection, str], T]) -> T:
        sql = self._registry.lookup(name)
        _log.debug("Running statement %s", name)
        with self._connection() as conn:
            return call(conn, sql)

    def _driver_exec(
        self,
        conn: Connection,
        sql: str,
        args: tuple[Any, ...],
        execution_options: Mapping[str, Any] | None,
    ) -> Any:
        return conn.exec_driver_sql(sql, _driver_params(args), **_options(execution_options))

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def query(
        self, name: str, *args: Any, execution_options: Mapping[str, Any] | None = None
    ) -> Result[Any]:
        """
        Run the statement and return its row result.

        A statement without rows (INSERT/UPDATE/DDL) still runs and commits;
        its result is returned as is.
        """

        def call(conn: Connection, sql: str) -> Result[Any]:
            result = self._driver_exec(conn, sql, args, execution_options)
            if self._buffer_results and result.returns_rows:
                return result.freeze()()
            return result

        return self._run(name, call)

    def query_row(
        self, name: str, *args: Any, execution_options: Mapping[str, Any] | None = None
    ) -> Row[Any] | None:
        """First row of the result, or None when there is none (or no rows are returned at all)."""

        def call(conn: Connection, sql: str) -> Row[Any] | None:
            result = self._driver_exec(conn, sql, args, execution_options)
            if not result.returns_rows:
                return None
            return result.first()

        return self._run(name, call)

    def get(
        self, row_type: Any, name: str, *args: Any, execution_options: Mapping[str, Any] | None = None
    ) -> Any:
        """
        Scan the first row into *row_type*.

        Raises sqlalchemy.exc.NoResultFound when the statement returns no rows.
        """

        def call(conn: Connection, sql: str) -> Any:
            row = self._driver_exec(conn, sql, args, execution_options).mappings().first()
            if row is None:
                raise NoResultFound("No row was found when one was required")
            return scan_row(row_type, row)

        return self._run(name, call)

    def select(
        self, row_type: Any, name: str, *args: Any, execution_options: Mapping[str, Any] | None = None
    ) -> list[Any]:
        """Scan every row into a list of *row_type*."""
        return self._run(
            name,
            lambda conn, sql: scan_rows(
                row_type, self._driver_exec(conn, sql, args, execution_options).mappings().all()
            ),
        )

    def exec(
        self, name: str, *args: Any, execution_options: Mapping[str, Any] | None = None
    ) -> ExecResult:
        return self._run(
            name,
            lambda conn, sql: exec_result(self._driver_exec(conn, sql, args, execution_options)),
        )

    def named_exec(
        self, name: str, arg: Any, *, execution_options: Mapping[str, Any] | None = None
    ) -> ExecResult:
        """Execute with ``:name`` placeholders bound from a mapping, model, dataclass or object."""
        return self._run(
            name,
            lambda conn, sql: exec_result(
                conn.execute(text(sql), bind_params(arg), **_options(execution_options))
            ),
        )
