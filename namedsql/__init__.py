"""
Named SQL statements loaded from files, executed through SQLAlchemy.

    db = namedsql.open("postgresql+psycopg", "app:secret@localhost/app", "sql/**/*.sql")
    user = db.get(dict, "users.get_by_id", 42)

    with db.begin() as tx:
        tx.exec("orders.insert", user["id"], 10)
"""

from namedsql.core import (
    NamedSQLError,
    Settings,
    StatementDiscoveryError,
    StatementNameError,
    StatementNotFoundError,
    StatementParseError,
    configure_logging,
)
from namedsql.facade import (
    Database,
    ExecResult,
    Querier,
    Transaction,
    open,
    open_from_settings,
)
from namedsql.registry import StatementRegistry, parse_statement_file, parse_statements

__all__ = [
    "Database",
    "ExecResult",
    "NamedSQLError",
    "Querier",
    "Settings",
    "StatementDiscoveryError",
    "StatementNameError",
    "StatementNotFoundError",
    "StatementParseError",
    "StatementRegistry",
    "Transaction",
    "configure_logging",
    "open",
    "open_from_settings",
    "parse_statement_file",
    "parse_statements",
]
