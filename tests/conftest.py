from __future__ import annotations

import sqlite3
from collections.abc import Generator
from pathlib import Path

import pytest

from sqlstitch.config import get_default_prepared, set_default_prepared
from sqlstitch.dialect import DialectRegistry

here = Path(__file__).parent
root_path = here.parent


@pytest.fixture(autouse=True)
def restore_default_prepared() -> Generator[None, None, None]:
    previous = get_default_prepared()
    yield
    set_default_prepared(previous)


@pytest.fixture
def registry() -> DialectRegistry:
    """A registry holding only the default dialect."""
    return DialectRegistry()


@pytest.fixture
def sqlite_connection() -> Generator[sqlite3.Connection, None, None]:
    connection = sqlite3.connect(":memory:")
    connection.execute(
        "CREATE TABLE users (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT NOT NULL, age INTEGER, active INTEGER)"
    )
    try:
        yield connection
    finally:
        connection.close()
