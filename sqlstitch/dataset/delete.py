"""DELETE statement dataset."""

from typing import TYPE_CHECKING, Any, ClassVar

from typing_extensions import Self

from sqlstitch.core.clauses import DeleteClauses
from sqlstitch.core.expressions import IdentifierExpression, parse_identifier
from sqlstitch.dataset._base import Dataset
from sqlstitch.dataset.mixins import (
    CommonTableExpressionMixin,
    LimitClauseMixin,
    OrderByClauseMixin,
    ReturningClauseMixin,
    WhereClauseMixin,
)
from sqlstitch.exceptions import UnsupportedArgumentError

if TYPE_CHECKING:
    from sqlstitch.core.builder import SQLBuilder
    from sqlstitch.dialect import DialectRegistry, SQLDialect
    from sqlstitch.executor import QueryFactory

__all__ = ("Delete",)


def _delete_table(table: Any) -> IdentifierExpression:
    if isinstance(table, str):
        return parse_identifier(table)
    if isinstance(table, IdentifierExpression):
        return table
    msg = "unsupported table type, a string or identifier expression is required"
    raise UnsupportedArgumentError(msg, table)


class Delete(
    Dataset[DeleteClauses],
    CommonTableExpressionMixin,
    WhereClauseMixin,
    OrderByClauseMixin,
    LimitClauseMixin,
    ReturningClauseMixin,
):
    """Builder for ``DELETE`` statements.

    Example:
        Delete a single row by id::

            sql, params = Delete("users").where(C("id").eq(5)).limit(1).prepared(True).must_to_sql()
    """

    __slots__ = ()

    statement_kind: ClassVar[str] = "DELETE"

    def __init__(
        self,
        table: "str | IdentifierExpression | None" = None,
        *,
        dialect: "str | SQLDialect | None" = None,
        query_factory: "QueryFactory | None" = None,
        registry: "DialectRegistry | None" = None,
    ) -> None:
        clauses = DeleteClauses()
        if table is not None:
            clauses = clauses.set_from(_delete_table(table))
        self._init_dataset(clauses, dialect, query_factory, registry)

    def _render(self, builder: "SQLBuilder") -> None:
        self._dialect.to_delete_sql(builder, self._clauses)

    def from_(self, table: "str | IdentifierExpression") -> Self:
        """Set the table rows are deleted from.

        Raises:
            UnsupportedArgumentError: If ``table`` is not a string or identifier.
        """
        return self._copy(self._clauses.set_from(_delete_table(table)))
