"""
Exceptions raised by namedsql itself.

Errors from the database client (sqlalchemy.exc.*) are never wrapped; they
reach the caller unchanged.
"""


class NamedSQLError(Exception):
    """Base class for errors raised by this package."""


class StatementNotFoundError(NamedSQLError, LookupError):
    """No statement is registered under the dotted ``namespace.tag`` name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"statement '{name}' not found")


class StatementNameError(StatementNotFoundError):
    """The name is not of the form ``namespace.tag`` (both parts non-empty)."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.args = (f"statement '{name}' not found: expected 'namespace.tag'",)


class StatementParseError(NamedSQLError, ValueError):
    """A statement file is malformed."""

    def __init__(self, message: str, *, source: str = "<string>", line: int | None = None) -> None:
        self.source = source
        self.line = line
        where = f"{source}:{line}" if line is not None else source
        super().__init__(f"{where}: {message}")


class StatementDiscoveryError(NamedSQLError, OSError):
    """The statement file pattern could not be resolved."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"cannot resolve statement files '{pattern}': {reason}")
