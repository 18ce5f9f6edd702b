"""
Inspect statement files from the command line.

Usage:
  namedsql list  [PATTERN]
  namedsql show  [PATTERN] NAME
  namedsql check [PATTERN]

PATTERN defaults to NAMEDSQL_SQL_PATH (or sql/**/*.sql).
"""

import argparse
import sys

from namedsql.core.config import settings
from namedsql.core.exceptions import (
    StatementDiscoveryError,
    StatementNotFoundError,
    StatementParseError,
)
from namedsql.core.log import configure_logging
from namedsql.registry import StatementRegistry

EXIT_NOT_FOUND = 1
EXIT_LOAD_FAILED = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="namedsql", description="List, show and check named SQL statement files."
    )
    parser.add_argument("--log-level", default=settings.LOG_LEVEL)
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="print every namespace.tag")
    p_list.add_argument("pattern", nargs="?", default=settings.SQL_PATH)

    p_show = sub.add_parser("show", help="print the SQL of one statement")
    p_show.add_argument("pattern", nargs="?", default=settings.SQL_PATH)
    p_show.add_argument("name")

    p_check = sub.add_parser("check", help="load all files and report errors")
    p_check.add_argument("pattern", nargs="?", default=settings.SQL_PATH)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        registry = StatementRegistry.load(args.pattern)
    except (StatementParseError, StatementDiscoveryError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_LOAD_FAILED

    if args.command == "list":
        for name in registry.names():
            print(name)
    elif args.command == "show":
        try:
            print(registry.lookup(args.name))
        except StatementNotFoundError as e:
            print(f"error: {e}", file=sys.stderr)
            return EXIT_NOT_FOUND
    else:
        print(f"ok: {registry.statement_count} statement(s) in {len(registry)} namespace(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
