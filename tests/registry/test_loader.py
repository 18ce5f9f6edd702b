"""Unit tests for registry.loader: discovery, namespaces, duplicate handling."""

import logging
from pathlib import Path

import pytest

from namedsql import StatementDiscoveryError, StatementParseError
from namedsql.registry import discover, load_statement_files, namespace_for
from tests.utils.statements import ORDERS_SQL, USERS_SQL, write_sample_statements, write_sql


def test_namespace_for_strips_everything_after_first_dot() -> None:
    assert namespace_for("sql/users.sql") == "users"
    assert namespace_for("/a/b/users.pg.sql") == "users"
    assert namespace_for(Path("reports")) == "reports"


def test_discover_recursive_and_sorted(tmp_path: Path) -> None:
    pattern = write_sample_statements(tmp_path)
    write_sql(tmp_path, "sql/a/b/c/deep.sql", "-- name: x\nSELECT 1\n")
    files = discover(pattern)
    assert files == sorted(files)
    assert {p.name for p in files} == {"users.sql", "orders.sql", "deep.sql"}


def test_discover_skips_directories(tmp_path: Path) -> None:
    (tmp_path / "sql" / "looks_like.sql").mkdir(parents=True)
    write_sql(tmp_path, "sql/users.sql", USERS_SQL)
    files = discover(str(tmp_path / "sql" / "*.sql"))
    assert [p.name for p in files] == ["users.sql"]


def test_discover_no_matches_warns(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    (tmp_path / "sql").mkdir()
    with caplog.at_level(logging.WARNING, logger="namedsql"):
        assert discover(str(tmp_path / "sql" / "*.sql")) == []
    assert "No statement files match" in caplog.text


def test_discover_missing_base_directory(tmp_path: Path) -> None:
    pattern = str(tmp_path / "nope" / "**" / "*.sql")
    with pytest.raises(StatementDiscoveryError) as ei:
        discover(pattern)
    assert ei.value.pattern == pattern
    assert "does not exist" in str(ei.value)


def test_discover_empty_pattern() -> None:
    with pytest.raises(StatementDiscoveryError, match="empty pattern"):
        discover("")


def test_discovery_error_is_not_parse_error(tmp_path: Path) -> None:
    with pytest.raises(StatementDiscoveryError) as ei:
        discover(str(tmp_path / "missing" / "*.sql"))
    assert not isinstance(ei.value, StatementParseError)
    assert isinstance(ei.value, OSError)


def test_load_statement_files(tmp_path: Path) -> None:
    stmts = load_statement_files(write_sample_statements(tmp_path))
    assert set(stmts) == {"users", "orders"}
    assert stmts["orders"]["insert"] == "INSERT INTO orders (user_id, amount) VALUES (?, ?)"


def test_load_parse_failure_aborts(tmp_path: Path) -> None:
    pattern = write_sample_statements(tmp_path)
    write_sql(tmp_path, "sql/zz_broken.sql", "DELETE FROM users\n")
    with pytest.raises(StatementParseError) as ei:
        load_statement_files(pattern)
    assert ei.value.source.endswith("zz_broken.sql")


def test_duplicate_namespace_last_file_wins_wholesale(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    # a/orders.sql sorts before b/orders.sql
    write_sql(tmp_path, "sql/a/orders.sql", ORDERS_SQL)
    write_sql(
        tmp_path,
        "sql/b/orders.sql",
        "-- name: insert\nINSERT INTO orders_v2 (user_id) VALUES (?)\n",
    )
    with caplog.at_level(logging.WARNING, logger="namedsql"):
        stmts = load_statement_files(str(tmp_path / "sql" / "**" / "*.sql"))

    assert stmts["orders"] == {"insert": "INSERT INTO orders_v2 (user_id) VALUES (?)"}
    # Tags only present in the earlier file are gone with it.
    assert "total_for_user" not in stmts["orders"]
    assert "Namespace 'orders'" in caplog.text


def test_same_namespace_from_different_extensions(tmp_path: Path) -> None:
    write_sql(tmp_path, "sql/users.mysql.sql", "-- name: now\nSELECT NOW()\n")
    write_sql(tmp_path, "sql/users.sqlite.sql", "-- name: now\nSELECT datetime('now')\n")
    stmts = load_statement_files(str(tmp_path / "sql" / "*.sql"))
    assert stmts == {"users": {"now": "SELECT datetime('now')"}}
