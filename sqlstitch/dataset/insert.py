"""INSERT statement dataset."""

from collections.abc import Sequence
from dataclasses import replace
from typing import TYPE_CHECKING, Any, ClassVar

from typing_extensions import Self

from sqlstitch.core.clauses import InsertClauses
from sqlstitch.core.expressions import (
    AppendableExpression,
    ColumnListExpression,
    ConflictExpression,
    IdentifierExpression,
    LiteralExpression,
    T,
)
from sqlstitch.dataset._base import Dataset, parse_table_argument
from sqlstitch.dataset.mixins import CommonTableExpressionMixin, ReturningClauseMixin
from sqlstitch.exceptions import UnsupportedArgumentError
from sqlstitch.utils.type_guards import is_record, is_select_dataset

if TYPE_CHECKING:
    from sqlstitch.core.builder import SQLBuilder
    from sqlstitch.dialect import DialectRegistry, SQLDialect
    from sqlstitch.executor import QueryFactory
    from sqlstitch.typing import TableArg

__all__ = ("Insert",)

_INTO_ERROR = "unsupported table type, a string or identifier expression is required"


class Insert(Dataset[InsertClauses], CommonTableExpressionMixin, ReturningClauseMixin):
    """Builder for ``INSERT`` statements.

    Rows come from exactly one of three sources: explicit values (:meth:`vals`), records
    (:meth:`rows`) or a query (:meth:`from_query`). The source set most recently is the
    one rendered. Without any source ``DEFAULT VALUES`` is inserted.
    """

    __slots__ = ()

    statement_kind: ClassVar[str] = "INSERT"

    def __init__(
        self,
        table: "TableArg | None" = None,
        *,
        dialect: "str | SQLDialect | None" = None,
        query_factory: "QueryFactory | None" = None,
        registry: "DialectRegistry | None" = None,
    ) -> None:
        clauses = InsertClauses()
        if table is not None:
            clauses = clauses.set_into(parse_table_argument(table, _INTO_ERROR))
        self._init_dataset(clauses, dialect, query_factory, registry)

    def _render(self, builder: "SQLBuilder") -> None:
        self._dialect.to_insert_sql(builder, self._clauses)

    def set_dialect(self, dialect: "SQLDialect") -> Self:
        """Use ``dialect``; a nested SELECT row source follows the new dialect."""
        new = super().set_dialect(dialect)
        query = new._clauses.from_query
        if is_select_dataset(query):
            new._clauses = replace(new._clauses, from_query=query.set_dialect(dialect))
        return new

    def into(self, table: "TableArg") -> Self:
        """Set the target table.

        Raises:
            UnsupportedArgumentError: If ``table`` is not a string or expression.
        """
        return self._copy(self._clauses.set_into(parse_table_argument(table, _INTO_ERROR)))

    def cols(self, *cols: Any) -> Self:
        """Replace the column list."""
        column_list = ColumnListExpression.from_values(*cols)
        return self._copy(self._clauses.set_cols(None if column_list.is_empty() else column_list))

    def cols_append(self, *cols: Any) -> Self:
        return self._copy(self._clauses.cols_append(ColumnListExpression.from_values(*cols)))

    def clear_cols(self) -> Self:
        return self._copy(self._clauses.set_cols(None))

    def vals(self, *rows: "Sequence[Any]") -> Self:
        """Append rows of values, each a list or tuple in column order.

        Raises:
            UnsupportedArgumentError: If a row is not a list or tuple.
        """
        for row in rows:
            if not isinstance(row, (list, tuple)):
                msg = "unsupported vals row, a list or tuple of values is required"
                raise UnsupportedArgumentError(msg, row)
        if not rows:
            return self._copy()
        return self._copy(self._clauses.vals_append(tuple(tuple(row) for row in rows)))

    def clear_vals(self) -> Self:
        return self._copy(self._clauses.set_vals(None))

    def rows(self, *records: Any) -> Self:
        """Set the rows to insert from records.

        Records may be mappings, dataclass instances or msgspec structs; a single list
        or tuple argument is treated as the sequence of records. Columns are taken from
        the records, so they cannot be combined with :meth:`cols`.

        Raises:
            UnsupportedArgumentError: If a record is of an unsupported type.
        """
        if len(records) == 1 and isinstance(records[0], (list, tuple)):
            records = tuple(records[0])
        for record in records:
            if not is_record(record):
                msg = "unsupported row type, a mapping, dataclass or msgspec Struct is required"
                raise UnsupportedArgumentError(msg, record)
        return self._copy(self._clauses.set_rows(tuple(records) or None))

    def clear_rows(self) -> Self:
        return self._copy(self._clauses.set_rows(None))

    def from_query(self, query: "AppendableExpression | LiteralExpression | None") -> Self:
        """Insert the rows produced by ``query``.

        A SELECT dataset still on the default dialect adopts this statement's dialect.
        ``None`` removes the query.

        Raises:
            DialectMismatchError: If ``query`` is a SELECT with another non-default dialect.
            UnsupportedArgumentError: If ``query`` is not a dataset or literal expression.
        """
        if query is None:
            return self._copy(self._clauses.set_from(None))
        if is_select_dataset(query):
            query = query.adopt_dialect(self._dialect, self.statement_kind)
        elif not isinstance(query, (AppendableExpression, LiteralExpression)):
            msg = "unsupported insert source, a dataset or literal expression is required"
            raise UnsupportedArgumentError(msg, query)
        return self._copy(self._clauses.set_from(query))

    def on_conflict(self, conflict: "ConflictExpression | None") -> Self:
        """Set the upsert behavior, e.g. ``DoNothing()`` or ``DoUpdate("id", {...})``.

        Raises:
            UnsupportedArgumentError: If ``conflict`` is not a conflict expression.
        """
        if conflict is not None and not isinstance(conflict, ConflictExpression):
            msg = "unsupported conflict expression, DoNothing or DoUpdate is required"
            raise UnsupportedArgumentError(msg, conflict)
        return self._copy(self._clauses.set_on_conflict(conflict))

    def clear_on_conflict(self) -> Self:
        return self._copy(self._clauses.set_on_conflict(None))

    def as_(self, alias: str) -> Self:
        """Alias the inserted row, as in ``INSERT ... AS new ON DUPLICATE KEY UPDATE``."""
        return self._copy(self._clauses.set_alias(T(alias)))

    def get_as(self) -> "IdentifierExpression | None":
        return self._clauses.alias
