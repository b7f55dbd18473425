"""UPDATE statement dataset."""

from typing import TYPE_CHECKING, Any, ClassVar

from typing_extensions import Self

from sqlstitch.core.clauses import UpdateClauses
from sqlstitch.core.expressions import ColumnListExpression
from sqlstitch.dataset._base import Dataset, parse_table_argument
from sqlstitch.dataset.mixins import (
    CommonTableExpressionMixin,
    LimitClauseMixin,
    OrderByClauseMixin,
    ReturningClauseMixin,
    WhereClauseMixin,
)

if TYPE_CHECKING:
    from sqlstitch.core.builder import SQLBuilder
    from sqlstitch.dialect import DialectRegistry, SQLDialect
    from sqlstitch.executor import QueryFactory
    from sqlstitch.typing import TableArg

__all__ = ("Update",)

_TABLE_ERROR = "unsupported table type, a string or identifier expression is required"


class Update(
    Dataset[UpdateClauses],
    CommonTableExpressionMixin,
    WhereClauseMixin,
    OrderByClauseMixin,
    LimitClauseMixin,
    ReturningClauseMixin,
):
    """Builder for ``UPDATE`` statements."""

    __slots__ = ()

    statement_kind: ClassVar[str] = "UPDATE"

    def __init__(
        self,
        table: "TableArg | None" = None,
        *,
        dialect: "str | SQLDialect | None" = None,
        query_factory: "QueryFactory | None" = None,
        registry: "DialectRegistry | None" = None,
    ) -> None:
        clauses = UpdateClauses()
        if table is not None:
            clauses = clauses.set_table(parse_table_argument(table, _TABLE_ERROR))
        self._init_dataset(clauses, dialect, query_factory, registry)

    def _render(self, builder: "SQLBuilder") -> None:
        self._dialect.to_update_sql(builder, self._clauses)

    def table(self, table: "TableArg") -> Self:
        return self._copy(self._clauses.set_table(parse_table_argument(table, _TABLE_ERROR)))

    def set(self, values: Any) -> Self:
        """Set the assignments from a record.

        The record (a mapping, dataclass instance or msgspec struct) is expanded into
        ``"col"=value`` pairs when the statement is rendered; mapping keys are sorted.
        An unsupported or empty record is reported as a rendering error.
        """
        return self._copy(self._clauses.set_set_values(values))

    def from_(self, *tables: Any) -> Self:
        """Set additional tables for a multi-table update; no arguments clears them."""
        column_list = ColumnListExpression.from_values(*tables)
        return self._copy(self._clauses.set_from(None if column_list.is_empty() else column_list))
