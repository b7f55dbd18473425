"""Immutable statement dataset base.

A dataset pairs a clause record with a dialect, a prepared mode and an optional stored
error. Every mutator returns a new dataset; the receiver is left untouched, so a dataset
can be shared and branched from safely, including across threads.
"""

from abc import abstractmethod
from dataclasses import replace
from typing import TYPE_CHECKING, Any, ClassVar, Generic

from typing_extensions import Self

from sqlstitch.config import DEFAULT_DIALECT, PreparedMode
from sqlstitch.core.builder import SafeQuery, SQLBuilder
from sqlstitch.core.expressions import AppendableExpression, Expression, IdentifierExpression, parse_identifier
from sqlstitch.dialect import DialectRegistry, SQLDialect, default_registry
from sqlstitch.exceptions import DialectMismatchError, ImproperConfigurationError, UnsupportedArgumentError
from sqlstitch.typing import ClausesT

if TYPE_CHECKING:
    from sqlstitch.executor import QueryExecutor, QueryFactory

__all__ = ("Dataset", "parse_table_argument")


def parse_table_argument(table: Any, message: str) -> Expression:
    """Accept a table name or an already built expression.

    Args:
        table: The argument passed by the caller.
        message: Error message used when the argument kind is unsupported.

    Raises:
        UnsupportedArgumentError: If ``table`` is neither a string nor an expression.

    Returns:
        The table expression.
    """
    if isinstance(table, str):
        return parse_identifier(table)
    if isinstance(table, Expression):
        return table
    raise UnsupportedArgumentError(message, table)


class Dataset(AppendableExpression, Generic[ClausesT]):
    """Base of the statement datasets.

    Subclasses provide the public constructor and the statement specific mutators and
    implement :meth:`_render` by delegating to the dialect.
    """

    __slots__ = ("_clauses", "_dialect", "_error", "_prepared", "_query_factory")

    statement_kind: ClassVar[str] = ""

    def _init_dataset(
        self,
        clauses: ClausesT,
        dialect: "str | SQLDialect | None" = None,
        query_factory: "QueryFactory | None" = None,
        registry: "DialectRegistry | None" = None,
    ) -> None:
        self._clauses = clauses
        self._dialect = _resolve_dialect(dialect, registry)
        self._prepared = PreparedMode.DEFAULT
        self._query_factory = query_factory
        self._error: BaseException | None = None

    def _copy(self, clauses: "ClausesT | None" = None) -> Self:
        """Return a sibling dataset sharing everything but ``clauses``."""
        new = object.__new__(type(self))
        new._clauses = self._clauses if clauses is None else clauses
        new._dialect = self._dialect
        new._prepared = self._prepared
        new._query_factory = self._query_factory
        new._error = self._error
        return new

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(dialect={self._dialect.name!r}, prepared={self._prepared.value!r}, "
            f"error={self._error!r})"
        )

    @abstractmethod
    def _render(self, builder: SQLBuilder) -> None:
        """Render the clause record through the dialect into ``builder``."""

    def with_dialect(self, name: str, registry: "DialectRegistry | None" = None) -> Self:
        """Use the registered dialect ``name`` (the default dialect if unknown)."""
        return self.set_dialect((registry or default_registry).get(name))

    def set_dialect(self, dialect: SQLDialect) -> Self:
        """Use ``dialect``; datasets nested as common table expressions follow it."""
        new = self._copy()
        new._dialect = dialect
        common_tables = getattr(new._clauses, "common_tables", ())
        if any(isinstance(cte.sub_query, Dataset) for cte in common_tables):
            new._clauses = replace(
                new._clauses,
                common_tables=tuple(
                    replace(cte, sub_query=cte.sub_query.set_dialect(dialect))
                    if isinstance(cte.sub_query, Dataset)
                    else cte
                    for cte in common_tables
                ),
            )
        return new

    def adopt_dialect(self, dialect: SQLDialect, kind: str = "statement") -> Self:
        """Return this dataset as it renders nested in a ``kind`` statement using ``dialect``.

        A dataset still on the default dialect switches to ``dialect``.

        Raises:
            DialectMismatchError: If the dataset uses another non-default dialect.
        """
        if self._dialect == dialect:
            return self
        if self._dialect.name != DEFAULT_DIALECT:
            raise DialectMismatchError(dialect.name, self._dialect.name, kind, self.statement_kind)
        return self.set_dialect(dialect)

    @property
    def dialect(self) -> SQLDialect:
        return self._dialect

    def prepared(self, prepared: bool) -> Self:
        """Set the parameter interpolation behavior.

        Args:
            prepared: If True values are rendered as placeholders and returned separately,
                otherwise they are interpolated into the SQL text.

        Returns:
            A new dataset.
        """
        new = self._copy()
        new._prepared = PreparedMode.from_bool(prepared)
        return new

    def is_prepared(self) -> bool:
        return self._prepared.resolve()

    @property
    def prepared_mode(self) -> PreparedMode:
        return self._prepared

    def get_clauses(self) -> ClausesT:
        return self._clauses

    @property
    def error(self) -> "BaseException | None":
        return self._error

    def set_error(self, error: BaseException) -> Self:
        """Record ``error`` unless one is already recorded.

        The error is carried by every dataset derived from the result and is returned by
        :meth:`to_sql` instead of SQL.

        Returns:
            A new dataset.
        """
        new = self._copy()
        if new._error is None:
            new._error = error
        return new

    def get_as(self) -> "IdentifierExpression | None":
        return None

    def returns_columns(self) -> bool:
        """Report whether a RETURNING list is set, regardless of dialect support."""
        has_returning = getattr(self._clauses, "has_returning", None)
        return bool(has_returning is not None and has_returning())

    def to_sql(self) -> SafeQuery:
        """Render the statement.

        Returns:
            ``(sql, parameters, error)``; when ``error`` is set the other parts are empty.
        """
        return self._sql_builder().to_sql()

    def must_to_sql(self) -> "tuple[str, list[Any]]":
        """Render the statement, raising the recorded or rendering error if there is one."""
        sql, parameters, error = self.to_sql()
        if error is not None:
            raise error
        return sql, parameters

    def append_sql(self, builder: SQLBuilder) -> None:
        """Write this statement into another statement's builder."""
        if self._error is not None:
            builder.set_error(self._error)
            return
        self._render(builder)

    def executor(self) -> "QueryExecutor":
        """Render the statement into an executor bound to the dataset's database.

        Raises:
            ImproperConfigurationError: If the dataset was not created through a database.
        """
        if self._query_factory is None:
            msg = f"{type(self).__name__} is not bound to a database, create it through Database to execute it"
            raise ImproperConfigurationError(msg)
        return self._query_factory.from_sql_builder(self._sql_builder())

    def _sql_builder(self) -> SQLBuilder:
        builder = SQLBuilder(self.is_prepared())
        if self._error is not None:
            return builder.set_error(self._error)
        self._render(builder)
        return builder


def _resolve_dialect(dialect: "str | SQLDialect | None", registry: "DialectRegistry | None") -> SQLDialect:
    registry = registry or default_registry
    if dialect is None:
        return registry.default
    if isinstance(dialect, SQLDialect):
        return dialect
    if isinstance(dialect, str):
        return registry.get(dialect)
    msg = "unsupported dialect, a dialect name or SQLDialect is required"
    raise UnsupportedArgumentError(msg, dialect)
