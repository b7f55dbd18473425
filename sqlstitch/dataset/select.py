"""A small SELECT dataset.

Enough of SELECT to feed rows into an INSERT, to serve as a common table expression or
sub-query and to read rows back through a database.
"""

from typing import TYPE_CHECKING, Any, ClassVar

from typing_extensions import Self

from sqlstitch.core.clauses import SelectClauses
from sqlstitch.core.expressions import ColumnListExpression, IdentifierExpression, T
from sqlstitch.dataset._base import Dataset
from sqlstitch.dataset.mixins import (
    CommonTableExpressionMixin,
    LimitClauseMixin,
    OrderByClauseMixin,
    WhereClauseMixin,
)
from sqlstitch.exceptions import UnsupportedArgumentError

if TYPE_CHECKING:
    from sqlstitch.core.builder import SQLBuilder
    from sqlstitch.dialect import DialectRegistry, SQLDialect
    from sqlstitch.executor import QueryFactory

__all__ = ("Select",)


class Select(
    Dataset[SelectClauses],
    CommonTableExpressionMixin,
    WhereClauseMixin,
    OrderByClauseMixin,
    LimitClauseMixin,
):
    """Builder for ``SELECT`` statements. Selects ``*`` until columns are given."""

    __slots__ = ()

    statement_kind: ClassVar[str] = "SELECT"

    def __init__(
        self,
        *columns: Any,
        dialect: "str | SQLDialect | None" = None,
        query_factory: "QueryFactory | None" = None,
        registry: "DialectRegistry | None" = None,
    ) -> None:
        clauses = SelectClauses()
        if columns:
            clauses = clauses.set_select(ColumnListExpression.from_values(*columns))
        self._init_dataset(clauses, dialect, query_factory, registry)

    def _render(self, builder: "SQLBuilder") -> None:
        self._dialect.to_select_sql(builder, self._clauses)

    def select(self, *columns: Any) -> Self:
        column_list = ColumnListExpression.from_values(*columns)
        return self._copy(self._clauses.set_select(None if column_list.is_empty() else column_list))

    def from_(self, *tables: Any) -> Self:
        column_list = ColumnListExpression.from_values(*tables)
        return self._copy(self._clauses.set_from(None if column_list.is_empty() else column_list))

    def offset(self, offset: int) -> Self:
        """Set the OFFSET; ``0`` clears it.

        Raises:
            UnsupportedArgumentError: If ``offset`` is not a non-negative integer.
        """
        if isinstance(offset, bool) or not isinstance(offset, int) or offset < 0:
            msg = "unsupported offset, a non-negative integer is required"
            raise UnsupportedArgumentError(msg, offset)
        return self._copy(self._clauses.set_offset(offset or None))

    def as_(self, alias: str) -> Self:
        """Alias the query when it is used as a sub-query."""
        return self._copy(self._clauses.set_alias(T(alias)))

    def get_as(self) -> "IdentifierExpression | None":
        return self._clauses.alias
