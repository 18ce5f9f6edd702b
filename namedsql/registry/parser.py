"""
Parse yesql-style statement files into ``tag -> SQL text``.

Format::

    -- name: get_by_id
    -- optional comment lines are dropped
    SELECT * FROM users WHERE id = ?

    -- name: delete
    DELETE FROM users WHERE id = ?

SQL lines are joined with newlines; blank and comment lines are dropped.
"""

import logging
import re
from pathlib import Path

from namedsql.core.exceptions import StatementParseError

_log = logging.getLogger(__name__)

_TAG_RE = re.compile(r"^\s*--\s*name\s*:\s*(?P<tag>.*?)\s*$", re.IGNORECASE)
_TAG_NAME_RE = re.compile(r"\S+")
_COMMENT_RE = re.compile(r"^\s*--")


def parse_statements(text: str, *, source: str = "<string>") -> dict[str, str]:
    """
    Split *text* into named statements, preserving file order.

    Raises StatementParseError for SQL before the first marker, an empty or
    duplicate tag, or a tag without any SQL.
    """
    statements: dict[str, list[str]] = {}
    tag_lines: dict[str, int] = {}
    current: str | None = None

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.rstrip()
        m = _TAG_RE.match(line)
        if m:
            tag = m.group("tag")
            if not tag:
                raise StatementParseError("marker without a tag name", source=source, line=lineno)
            if not _TAG_NAME_RE.fullmatch(tag):
                raise StatementParseError(f"invalid tag name '{tag}'", source=source, line=lineno)
            if tag in statements:
                raise StatementParseError(
                    f"duplicate tag '{tag}' (first declared on line {tag_lines[tag]})",
                    source=source,
                    line=lineno,
                )
            statements[tag] = []
            tag_lines[tag] = lineno
            current = tag
            continue
        if not line.strip() or _COMMENT_RE.match(line):
            continue
        if current is None:
            raise StatementParseError("SQL before the first '-- name:' marker", source=source, line=lineno)
        statements[current].append(line)

    out: dict[str, str] = {}
    for tag, lines in statements.items():
        if not lines:
            raise StatementParseError(f"tag '{tag}' has no SQL", source=source, line=tag_lines[tag])
        out[tag] = "\n".join(lines).strip()
    return out


def parse_statement_file(path: str | Path) -> dict[str, str]:
    """Read *path* as UTF-8 and parse it with parse_statements."""
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise StatementParseError(f"not valid UTF-8: {e}", source=str(p)) from e
    stmts = parse_statements(text, source=str(p))
    _log.debug("Parsed %d statement(s) from %s", len(stmts), p)
    return stmts
