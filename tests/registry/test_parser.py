"""Unit tests for registry.parser: yesql-style statement blocks."""

from pathlib import Path

import pytest

from namedsql import StatementParseError
from namedsql.registry import parse_statement_file, parse_statements
from tests.utils.statements import USERS_SQL, write_sql


class TestParseStatements:
    def test_single_block(self):
        assert parse_statements("-- name: one\nSELECT 1\n") == {"one": "SELECT 1"}

    def test_multiline_sql_joined_with_newlines(self):
        text = "-- name: q\nSELECT a,\n       b\nFROM t\n"
        assert parse_statements(text) == {"q": "SELECT a,\n       b\nFROM t"}

    def test_comments_and_blank_lines_dropped(self):
        text = "-- name: q\n-- explain\n\nSELECT 1\n\n-- trailing\n"
        assert parse_statements(text) == {"q": "SELECT 1"}

    def test_inline_comment_kept(self):
        text = "-- name: q\nSELECT 1 -- one\n"
        assert parse_statements(text) == {"q": "SELECT 1 -- one"}

    def test_marker_spacing_and_case(self):
        text = "--name:a\nSELECT 1\n  --  NAME :  b  \nSELECT 2\n"
        assert parse_statements(text) == {"a": "SELECT 1", "b": "SELECT 2"}

    def test_file_order_preserved(self):
        stmts = parse_statements(USERS_SQL)
        assert list(stmts)[:3] == ["create_table", "get_by_id", "list"]
        assert stmts["get_by_id"] == "SELECT * FROM users WHERE id = ?"

    def test_placeholders_left_verbatim(self):
        text = "-- name: ins\nINSERT INTO t VALUES (:a, %(b)s, ?, $1)\n"
        assert parse_statements(text)["ins"] == "INSERT INTO t VALUES (:a, %(b)s, ?, $1)"

    def test_empty_text(self):
        assert parse_statements("") == {}
        assert parse_statements("-- just a comment\n\n") == {}


class TestParseErrors:
    def test_sql_before_first_marker(self):
        with pytest.raises(StatementParseError, match="before the first") as ei:
            parse_statements("SELECT 1\n-- name: a\nSELECT 2\n", source="x.sql")
        assert ei.value.source == "x.sql"
        assert ei.value.line == 1

    def test_duplicate_tag(self):
        text = "-- name: a\nSELECT 1\n-- name: a\nSELECT 2\n"
        with pytest.raises(StatementParseError, match="duplicate tag 'a'") as ei:
            parse_statements(text)
        assert ei.value.line == 3

    def test_empty_tag(self):
        with pytest.raises(StatementParseError, match="without a tag"):
            parse_statements("-- name:\nSELECT 1\n")

    def test_tag_with_whitespace(self):
        with pytest.raises(StatementParseError, match="invalid tag name"):
            parse_statements("-- name: two words\nSELECT 1\n")

    def test_tag_without_sql(self):
        text = "-- name: a\n-- name: b\nSELECT 2\n"
        with pytest.raises(StatementParseError, match="tag 'a' has no SQL") as ei:
            parse_statements(text)
        assert ei.value.line == 1

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            parse_statements("SELECT 1")


class TestParseStatementFile:
    def test_reads_file(self, tmp_path: Path):
        path = write_sql(tmp_path, "users.sql", USERS_SQL)
        stmts = parse_statement_file(path)
        assert "insert" in stmts
        assert stmts["count"] == "SELECT COUNT(*) AS n FROM users"

    def test_error_names_file(self, tmp_path: Path):
        path = write_sql(tmp_path, "bad.sql", "SELECT 1\n")
        with pytest.raises(StatementParseError) as ei:
            parse_statement_file(path)
        assert ei.value.source == str(path)
        assert str(path) in str(ei.value)

    def test_invalid_utf8(self, tmp_path: Path):
        path = tmp_path / "bin.sql"
        path.write_bytes(b"-- name: a\nSELECT '\xff'\n")
        with pytest.raises(StatementParseError, match="UTF-8"):
            parse_statement_file(path)
