"""
Statement registry: discover .sql files, parse named blocks, look up by ``namespace.tag``.
"""

from .loader import discover, load_statement_files, namespace_for
from .parser import parse_statement_file, parse_statements
from .registry import StatementRegistry, split_name

__all__ = [
    "StatementRegistry",
    "discover",
    "load_statement_files",
    "namespace_for",
    "parse_statement_file",
    "parse_statements",
    "split_name",
]
