"""Datasets bound to a DB-API 2.0 connection."""

from dataclasses import replace
from typing import TYPE_CHECKING, Any, TypeVar

from sqlstitch.config import DatabaseConfig
from sqlstitch.dataset import Delete, Insert, Select, Truncate, Update
from sqlstitch.dialect import DialectRegistry, SQLDialect, default_registry
from sqlstitch.executor import QueryExecutor
from sqlstitch.utils.logging import get_logger

if TYPE_CHECKING:
    from sqlstitch.core.builder import SQLBuilder
    from sqlstitch.core.expressions import IdentifierExpression
    from sqlstitch.dataset import Dataset
    from sqlstitch.typing import TableArg

__all__ = ("Database",)

logger = get_logger("database")

DatasetT = TypeVar("DatasetT", bound="Dataset[Any]")


class Database:
    """Creates datasets that can execute themselves through ``connection``.

    Example:
        >>> import sqlite3
        >>> db = Database(sqlite3.connect(":memory:"), dialect="sqlite3")
        >>> db.insert("users").rows({"name": "bob"}).executor().exec()  # doctest: +SKIP
        1
    """

    __slots__ = ("_connection", "_dialect", "config")

    def __init__(
        self,
        connection: Any,
        dialect: "str | None" = None,
        config: "DatabaseConfig | None" = None,
        registry: "DialectRegistry | None" = None,
    ) -> None:
        config = config or DatabaseConfig()
        if dialect is not None:
            config = replace(config, dialect=dialect)
        self.config = config
        self._connection = connection
        self._dialect = (registry or default_registry).get(self.config.dialect)
        logger.debug("database created with dialect %s", self._dialect.name)

    def __repr__(self) -> str:
        return f"Database(dialect={self._dialect.name!r})"

    @property
    def connection(self) -> Any:
        return self._connection

    @property
    def dialect(self) -> SQLDialect:
        return self._dialect

    def insert(self, table: "TableArg") -> Insert:
        return self._bind(Insert(table, dialect=self._dialect, query_factory=self))

    def update(self, table: "TableArg") -> Update:
        return self._bind(Update(table, dialect=self._dialect, query_factory=self))

    def delete(self, table: "str | IdentifierExpression") -> Delete:
        return self._bind(Delete(table, dialect=self._dialect, query_factory=self))

    def truncate(self, *tables: Any) -> Truncate:
        return self._bind(Truncate(*tables, dialect=self._dialect, query_factory=self))

    def from_(self, *tables: Any) -> Select:
        return self._bind(Select(dialect=self._dialect, query_factory=self).from_(*tables))

    def select(self, *columns: Any) -> Select:
        return self._bind(Select(*columns, dialect=self._dialect, query_factory=self))

    def from_sql_builder(self, builder: "SQLBuilder") -> QueryExecutor:
        return QueryExecutor(self._connection, builder.to_sql(), log_statements=self.config.log_statements)

    def _bind(self, dataset: DatasetT) -> DatasetT:
        if self.config.prepared is None:
            return dataset
        return dataset.prepared(self.config.prepared)
