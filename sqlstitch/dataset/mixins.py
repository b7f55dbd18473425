"""Clause mixins shared by the statement datasets."""

from typing import TYPE_CHECKING, Any

from mypy_extensions import trait
from typing_extensions import Self

from sqlstitch.core.expressions import (
    AppendableExpression,
    ColumnListExpression,
    CommonTableExpression,
    Expression,
    LiteralExpression,
    OrderedExpression,
    _check_predicates,
    parse_identifier,
)
from sqlstitch.exceptions import UnsupportedArgumentError

__all__ = (
    "CommonTableExpressionMixin",
    "LimitClauseMixin",
    "OrderByClauseMixin",
    "ReturningClauseMixin",
    "WhereClauseMixin",
)


@trait
class CommonTableExpressionMixin:
    """Mixin providing ``WITH`` and ``WITH RECURSIVE``."""

    __slots__ = ()

    if TYPE_CHECKING:
        _clauses: Any
        _dialect: Any
        statement_kind: str

        def _copy(self, clauses: Any = None) -> Self: ...

    def with_(self, name: str, subquery: Expression) -> Self:
        """Add a common table expression.

        Args:
            name: Name the statement can select from, optionally with a column list
                such as ``"name(col1, col2)"``. Written verbatim.
            subquery: A dataset or literal expression producing the rows.

        Returns:
            A new dataset.
        """
        return self._copy(self._clauses.common_tables_append(self._common_table(False, name, subquery)))

    def with_recursive(self, name: str, subquery: Expression) -> Self:
        """Add a recursive common table expression.

        The name must carry the column list, ``"name(col1, col2)"``, and the subquery
        usually ends with a UNION referring to the name.
        """
        return self._copy(self._clauses.common_tables_append(self._common_table(True, name, subquery)))

    def _common_table(self, recursive: bool, name: str, subquery: Any) -> CommonTableExpression:
        """Validate a CTE and bind a nested dataset to this statement's dialect.

        Raises:
            UnsupportedArgumentError: If the name or source is of an unsupported type.
            DialectMismatchError: If a nested dataset uses another non-default dialect.
        """
        if not isinstance(name, str):
            msg = "unsupported common table name, a string is required"
            raise UnsupportedArgumentError(msg, name)
        if isinstance(subquery, AppendableExpression):
            subquery = subquery.adopt_dialect(self._dialect, self.statement_kind)
        elif not isinstance(subquery, LiteralExpression):
            msg = "unsupported common table source, a dataset or literal expression is required"
            raise UnsupportedArgumentError(msg, subquery)
        return CommonTableExpression(recursive, name, subquery)


@trait
class WhereClauseMixin:
    """Mixin providing ``WHERE``; repeated calls are ANDed together."""

    __slots__ = ()

    if TYPE_CHECKING:
        _clauses: Any

        def _copy(self, clauses: Any = None) -> Self: ...

    def where(self, *expressions: Any) -> Self:
        """Add filter expressions.

        Args:
            *expressions: Predicates such as ``C("id").eq(5)``; mappings are turned into
                equality comparisons with :func:`~sqlstitch.core.expressions.Ex`.

        Returns:
            A new dataset.
        """
        return self._copy(self._clauses.where_append(*_check_predicates(expressions)))

    def clear_where(self) -> Self:
        return self._copy(self._clauses.clear_where())


@trait
class OrderByClauseMixin:
    """Mixin providing ``ORDER BY``."""

    __slots__ = ()

    if TYPE_CHECKING:
        _clauses: Any

        def _copy(self, clauses: Any = None) -> Self: ...

    def order(self, *order: "OrderedExpression | str") -> Self:
        """Replace the ORDER BY clause. Strings are ordered ascending."""
        return self._copy(self._clauses.set_order(*_ordered(order)))

    def order_append(self, *order: "OrderedExpression | str") -> Self:
        """Add columns after the current ORDER BY columns."""
        return self._copy(self._clauses.order_append(*_ordered(order)))

    def order_prepend(self, *order: "OrderedExpression | str") -> Self:
        """Add columns before the current ORDER BY columns."""
        return self._copy(self._clauses.order_prepend(*_ordered(order)))

    def clear_order(self) -> Self:
        return self._copy(self._clauses.clear_order())


def _ordered(items: "tuple[Any, ...]") -> "tuple[OrderedExpression, ...]":
    ordered: list[OrderedExpression] = []
    for item in items:
        if isinstance(item, str):
            ordered.append(parse_identifier(item).asc())
        elif isinstance(item, OrderedExpression):
            ordered.append(item)
        else:
            msg = "unsupported order expression, a string or ordered expression is required"
            raise UnsupportedArgumentError(msg, item)
    return tuple(ordered)


@trait
class LimitClauseMixin:
    """Mixin providing ``LIMIT``."""

    __slots__ = ()

    if TYPE_CHECKING:
        _clauses: Any

        def _copy(self, clauses: Any = None) -> Self: ...

    def limit(self, limit: int) -> Self:
        """Set the LIMIT; ``0`` clears it.

        Raises:
            UnsupportedArgumentError: If ``limit`` is not a non-negative integer.
        """
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
            msg = "unsupported limit, a non-negative integer is required"
            raise UnsupportedArgumentError(msg, limit)
        if limit == 0:
            return self._copy(self._clauses.clear_limit())
        return self._copy(self._clauses.set_limit(limit))

    def limit_all(self) -> Self:
        return self._copy(self._clauses.set_limit(LiteralExpression("ALL")))

    def clear_limit(self) -> Self:
        return self._copy(self._clauses.clear_limit())


@trait
class ReturningClauseMixin:
    """Mixin providing ``RETURNING`` for dialects that support it."""

    __slots__ = ()

    if TYPE_CHECKING:
        _clauses: Any

        def _copy(self, clauses: Any = None) -> Self: ...

    def returning(self, *columns: Any) -> Self:
        """Set the RETURNING columns; calling it without columns clears the clause."""
        column_list = ColumnListExpression.from_values(*columns)
        return self._copy(self._clauses.set_returning(None if column_list.is_empty() else column_list))
