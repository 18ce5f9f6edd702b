"""
Read-only ``namespace -> tag -> SQL`` registry with dotted-name lookup.
"""

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from namedsql.core.exceptions import StatementNameError, StatementNotFoundError

from .loader import load_statement_files

_log = logging.getLogger(__name__)


def split_name(name: str) -> tuple[str, str]:
    """Split ``namespace.tag`` on the first dot; both parts must be non-empty."""
    namespace, sep, tag = name.partition(".")
    if not sep or not namespace or not tag:
        raise StatementNameError(name)
    return namespace, tag


class StatementRegistry:
    """
    Named SQL statements grouped by namespace.

    Built once (load / from_mapping) and never mutated afterwards, so it can be
    shared between a database and its transactions and read from any thread.
    """

    __slots__ = ("_stmts",)

    def __init__(self, statements: Mapping[str, Mapping[str, str]]) -> None:
        self._stmts: Mapping[str, Mapping[str, str]] = MappingProxyType(
            {ns: MappingProxyType(dict(tags)) for ns, tags in statements.items()}
        )

    @classmethod
    def load(cls, pattern: str) -> "StatementRegistry":
        """Parse every file matching *pattern*; any parse or discovery error aborts."""
        registry = cls(load_statement_files(pattern))
        _log.info(
            "Loaded %d statement(s) in %d namespace(s) from %s",
            registry.statement_count,
            len(registry),
            pattern,
        )
        return registry

    @classmethod
    def from_mapping(cls, statements: Mapping[str, Mapping[str, str]]) -> "StatementRegistry":
        return cls(statements)

    def lookup(self, name: str) -> str:
        """Return the SQL text for ``namespace.tag`` or raise StatementNotFoundError."""
        namespace, tag = split_name(name)
        tags = self._stmts.get(namespace)
        if tags is None:
            raise StatementNotFoundError(name)
        sql = tags.get(tag)
        if not sql:
            raise StatementNotFoundError(name)
        return sql

    def namespaces(self) -> list[str]:
        return sorted(self._stmts)

    def tags(self, namespace: str) -> Mapping[str, str]:
        """Read-only ``tag -> SQL`` view of one namespace (KeyError if absent)."""
        return self._stmts[namespace]

    def names(self) -> list[str]:
        """Every ``namespace.tag`` in sorted order."""
        return sorted(f"{ns}.{tag}" for ns, tags in self._stmts.items() for tag in tags)

    @property
    def statement_count(self) -> int:
        return sum(len(tags) for tags in self._stmts.values())

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        try:
            self.lookup(name)
        except StatementNotFoundError:
            return False
        return True

    def __iter__(self) -> Iterator[str]:
        return iter(self._stmts)

    def __len__(self) -> int:
        return len(self._stmts)

    def __repr__(self) -> str:
        return f"StatementRegistry(namespaces={self.namespaces()!r})"
