"""
Statement file discovery and loading.

A glob pattern (``**`` allowed) selects the files; each file's basename up to
the first ``.`` is its namespace. Files are visited in sorted order, so when
two files share a namespace the later one replaces the earlier one.
"""

import glob
import logging
import os
from pathlib import Path, PurePath

from namedsql.core.exceptions import StatementDiscoveryError

from .parser import parse_statement_file

_log = logging.getLogger(__name__)

_MAGIC_CHARS = frozenset("*?[")


def namespace_for(path: str | Path) -> str:
    """``sql/users.pg.sql`` -> ``users``."""
    return os.path.basename(path).split(".")[0]


def _literal_base(pattern: str) -> Path:
    """Leading path components of *pattern* that contain no wildcards."""
    parts = PurePath(pattern).parts
    literal: list[str] = []
    for part in parts[:-1]:
        if _MAGIC_CHARS & set(part):
            break
        literal.append(part)
    return Path(*literal) if literal else Path(".")


def discover(pattern: str) -> list[Path]:
    """
    Resolve *pattern* to a sorted list of files.

    Raises StatementDiscoveryError when the pattern is empty or its literal
    base directory is missing. A pattern that simply matches nothing returns [].
    """
    if not pattern or not pattern.strip():
        raise StatementDiscoveryError(pattern, "empty pattern")
    base = _literal_base(pattern)
    if not base.is_dir():
        raise StatementDiscoveryError(pattern, f"directory '{base}' does not exist")
    try:
        matches = glob.glob(pattern, recursive=True)
    except (OSError, ValueError) as e:
        raise StatementDiscoveryError(pattern, str(e)) from e
    files = sorted(Path(m) for m in matches if os.path.isfile(m))
    if not files:
        _log.warning("No statement files match %s", pattern)
    return files


def load_statement_files(pattern: str) -> dict[str, dict[str, str]]:
    """Discover and parse every file under *pattern* into ``namespace -> tag -> SQL``."""
    stmts: dict[str, dict[str, str]] = {}
    origins: dict[str, Path] = {}
    for path in discover(pattern):
        ns = namespace_for(path)
        try:
            parsed = parse_statement_file(path)
        except OSError as e:
            raise StatementDiscoveryError(pattern, f"cannot read '{path}': {e}") from e
        if ns in stmts:
            _log.warning(
                "Namespace '%s' from %s replaces the one loaded from %s",
                ns,
                path,
                origins[ns],
            )
        stmts[ns] = parsed
        origins[ns] = path
    return stmts
