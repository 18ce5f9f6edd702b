from collections.abc import Generator
from pathlib import Path

import pytest

import namedsql
from namedsql import Database
from tests.utils.statements import write_sample_statements


@pytest.fixture
def sql_pattern(tmp_path: Path) -> str:
    return write_sample_statements(tmp_path)


@pytest.fixture
def db(tmp_path: Path, sql_pattern: str) -> Generator[Database, None, None]:
    """File-backed SQLite database with the users and orders tables created."""
    database = namedsql.open("sqlite", f"/{tmp_path / 'app.db'}", sql_pattern)
    database.exec("users.create_table")
    database.exec("orders.create_table")
    yield database
    database.close()
