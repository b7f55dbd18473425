"""Execution of rendered statements over a DB-API 2.0 connection.

Datasets created through :class:`~sqlstitch.database.Database` hand their rendered SQL to
a :class:`QueryExecutor`. Nothing here builds SQL; the executor only runs the text and
parameters it is given and maps cursor results to dictionaries.
"""

import contextlib
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Protocol

from sqlstitch.core.builder import SafeQuery
from sqlstitch.exceptions import QueryError, SQLStitchError
from sqlstitch.utils.logging import get_logger, log_with_context

if TYPE_CHECKING:
    from collections.abc import Generator

    from sqlstitch.core.builder import SQLBuilder
    from sqlstitch.typing import DictRow

__all__ = ("DBCursor", "QueryExecutor", "QueryFactory")

logger = get_logger("executor")


class QueryFactory(Protocol):
    """Creates executors for rendered statements."""

    def from_sql_builder(self, builder: "SQLBuilder") -> "QueryExecutor": ...


class DBCursor:
    """Context manager for DB-API cursor management."""

    def __init__(self, connection: Any) -> None:
        self.connection = connection
        self.cursor: Any = None

    def __enter__(self) -> Any:
        self.cursor = self.connection.cursor()
        return self.cursor

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self.cursor is not None:
            with contextlib.suppress(Exception):
                self.cursor.close()


class QueryExecutor:
    """Runs one rendered statement against a connection.

    A statement that failed to render is never sent to the database: every execution
    method raises the rendering error instead.
    """

    __slots__ = ("_connection", "_log_statements", "_query")

    def __init__(self, connection: Any, query: SafeQuery, log_statements: bool = True) -> None:
        self._connection = connection
        self._query = query
        self._log_statements = log_statements

    def __repr__(self) -> str:
        return f"QueryExecutor(sql={self._query.sql!r}, error={self._query.error!r})"

    def to_sql(self) -> SafeQuery:
        return self._query

    def exec(self) -> int:
        """Execute the statement.

        Returns:
            The number of affected rows as reported by the driver.
        """
        with self._execute() as cursor:
            return int(cursor.rowcount)

    def query(self) -> "list[DictRow]":
        """Execute the statement and return every row as a column to value mapping."""
        with self._execute() as cursor:
            if cursor.description is None:
                return []
            columns = [column[0] for column in cursor.description]
            return [dict(zip(columns, row)) for row in cursor.fetchall()]

    def query_one(self) -> "DictRow | None":
        """Execute the statement and return the first row, or None if there is none."""
        with self._execute() as cursor:
            if cursor.description is None:
                return None
            row = cursor.fetchone()
            if row is None:
                return None
            return dict(zip([column[0] for column in cursor.description], row))

    @contextmanager
    def _execute(self) -> "Generator[Any, None, None]":
        sql, parameters, error = self._query
        if error is not None:
            raise error
        if self._log_statements:
            log_with_context(logger, logging.DEBUG, "executing statement", sql=sql, parameters=len(parameters))
        with DBCursor(self._connection) as cursor, self._handle_database_exceptions():
            cursor.execute(sql, parameters)
            yield cursor

    @contextmanager
    def _handle_database_exceptions(self) -> "Generator[None, None, None]":
        try:
            yield
        except SQLStitchError:
            raise
        except Exception as e:
            msg = f"Database error: {e}"
            raise QueryError(msg) from e
