"""Clause records.

One immutable record per statement kind. Every setter returns a new record built with
:func:`dataclasses.replace`; the receiver is never modified, so records can be shared
between datasets freely. ``None`` means a clause was never set, which is distinct from an
empty value. Records are dialect agnostic: no quoting or ordering happens here.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from typing_extensions import Self

from sqlstitch.core.expressions import (
    AppendableExpression,
    ColumnListExpression,
    CommonTableExpression,
    ConflictExpression,
    Expression,
    ExpressionList,
    IdentifierExpression,
    LiteralExpression,
    OrderedExpression,
)

__all__ = (
    "DeleteClauses",
    "InsertClauses",
    "InsertSource",
    "SelectClauses",
    "TruncateClauses",
    "TruncateOptions",
    "UpdateClauses",
)


class _CommonTablesMixin:
    __slots__ = ()

    common_tables: "tuple[CommonTableExpression, ...]"

    def common_tables_append(self, cte: CommonTableExpression) -> Self:
        return replace(self, common_tables=(*self.common_tables, cte))  # type: ignore[type-var]

    def has_common_tables(self) -> bool:
        return bool(self.common_tables)


class _WhereMixin:
    __slots__ = ()

    where: "ExpressionList | None"

    def where_append(self, *expressions: Expression) -> Self:
        """AND ``expressions`` onto the current filter, creating it if absent."""
        if not expressions:
            return self
        current = self.where or ExpressionList()
        return replace(self, where=current.append(*expressions))  # type: ignore[type-var]

    def clear_where(self) -> Self:
        return replace(self, where=None)  # type: ignore[type-var]

    def has_where(self) -> bool:
        return self.where is not None and not self.where.is_empty()


class _OrderMixin:
    __slots__ = ()

    order: "tuple[OrderedExpression, ...] | None"

    def set_order(self, *order: OrderedExpression) -> Self:
        return replace(self, order=tuple(order) if order else None)  # type: ignore[type-var]

    def order_append(self, *order: OrderedExpression) -> Self:
        if self.order is None:
            return self.set_order(*order)
        return replace(self, order=(*self.order, *order))  # type: ignore[type-var]

    def order_prepend(self, *order: OrderedExpression) -> Self:
        if self.order is None:
            return self.set_order(*order)
        return replace(self, order=(*order, *self.order))  # type: ignore[type-var]

    def clear_order(self) -> Self:
        return replace(self, order=None)  # type: ignore[type-var]

    def has_order(self) -> bool:
        return bool(self.order)


class _LimitMixin:
    __slots__ = ()

    limit: "int | LiteralExpression | None"

    def set_limit(self, limit: "int | LiteralExpression") -> Self:
        return replace(self, limit=limit)  # type: ignore[type-var]

    def clear_limit(self) -> Self:
        return replace(self, limit=None)  # type: ignore[type-var]

    def has_limit(self) -> bool:
        return self.limit is not None


class _ReturningMixin:
    __slots__ = ()

    returning: "ColumnListExpression | None"

    def set_returning(self, returning: "ColumnListExpression | None") -> Self:
        return replace(self, returning=returning)  # type: ignore[type-var]

    def has_returning(self) -> bool:
        return self.returning is not None and not self.returning.is_empty()


class InsertSource(Enum):
    """Which of the alternative row sources of an INSERT was set last."""

    VALS = "vals"
    ROWS = "rows"
    QUERY = "query"


@dataclass(frozen=True)
class InsertClauses(_CommonTablesMixin, _ReturningMixin):
    common_tables: "tuple[CommonTableExpression, ...]" = ()
    into: "Expression | None" = None
    cols: "ColumnListExpression | None" = None
    vals: "tuple[tuple[Any, ...], ...] | None" = None
    rows: "tuple[Any, ...] | None" = None
    from_query: "AppendableExpression | LiteralExpression | None" = None
    returning: "ColumnListExpression | None" = None
    on_conflict: "ConflictExpression | None" = None
    alias: "IdentifierExpression | None" = None
    source: "InsertSource | None" = field(default=None, compare=False)

    def set_into(self, into: Expression) -> "InsertClauses":
        return replace(self, into=into)

    def has_into(self) -> bool:
        return self.into is not None

    def set_cols(self, cols: "ColumnListExpression | None") -> "InsertClauses":
        return replace(self, cols=cols)

    def cols_append(self, cols: ColumnListExpression) -> "InsertClauses":
        if self.cols is None:
            return self.set_cols(cols)
        return replace(self, cols=self.cols.append(cols))

    def has_cols(self) -> bool:
        return self.cols is not None and not self.cols.is_empty()

    def set_vals(self, vals: "tuple[tuple[Any, ...], ...] | None") -> "InsertClauses":
        return self._with_source(InsertSource.VALS, vals=vals)

    def vals_append(self, vals: "tuple[tuple[Any, ...], ...]") -> "InsertClauses":
        return self._with_source(InsertSource.VALS, vals=(*(self.vals or ()), *vals))

    def has_vals(self) -> bool:
        return bool(self.vals)

    def set_rows(self, rows: "tuple[Any, ...] | None") -> "InsertClauses":
        return self._with_source(InsertSource.ROWS, rows=rows)

    def has_rows(self) -> bool:
        return bool(self.rows)

    def set_from(self, from_query: "AppendableExpression | LiteralExpression | None") -> "InsertClauses":
        return self._with_source(InsertSource.QUERY, from_query=from_query)

    def has_from(self) -> bool:
        return self.from_query is not None

    def set_on_conflict(self, conflict: "ConflictExpression | None") -> "InsertClauses":
        return replace(self, on_conflict=conflict)

    def set_alias(self, alias: "IdentifierExpression | None") -> "InsertClauses":
        return replace(self, alias=alias)

    def has_alias(self) -> bool:
        return self.alias is not None

    def row_source(self) -> "InsertSource | None":
        """The row source used for rendering.

        The most recently set source wins. When it has since been cleared, the remaining
        sources are consulted with a query taking precedence over records and records over
        explicit values.
        """
        present = {
            InsertSource.QUERY: self.has_from(),
            InsertSource.ROWS: self.has_rows(),
            InsertSource.VALS: self.has_vals(),
        }
        if self.source is not None and present[self.source]:
            return self.source
        for source in (InsertSource.QUERY, InsertSource.ROWS, InsertSource.VALS):
            if present[source]:
                return source
        return None

    def _with_source(self, source: InsertSource, **changes: Any) -> "InsertClauses":
        value = next(iter(changes.values()))
        if value is None:
            return replace(self, **changes)
        return replace(self, source=source, **changes)


@dataclass(frozen=True)
class UpdateClauses(_CommonTablesMixin, _WhereMixin, _OrderMixin, _LimitMixin, _ReturningMixin):
    common_tables: "tuple[CommonTableExpression, ...]" = ()
    table: "Expression | None" = None
    set_values: Any = None
    from_: "ColumnListExpression | None" = None
    where: "ExpressionList | None" = None
    order: "tuple[OrderedExpression, ...] | None" = None
    limit: "int | LiteralExpression | None" = None
    returning: "ColumnListExpression | None" = None

    def set_table(self, table: Expression) -> "UpdateClauses":
        return replace(self, table=table)

    def has_table(self) -> bool:
        return self.table is not None

    def set_set_values(self, values: Any) -> "UpdateClauses":
        return replace(self, set_values=values)

    def set_from(self, tables: "ColumnListExpression | None") -> "UpdateClauses":
        return replace(self, from_=tables)

    def has_from(self) -> bool:
        return self.from_ is not None and not self.from_.is_empty()


@dataclass(frozen=True)
class DeleteClauses(_CommonTablesMixin, _WhereMixin, _OrderMixin, _LimitMixin, _ReturningMixin):
    common_tables: "tuple[CommonTableExpression, ...]" = ()
    from_: "IdentifierExpression | None" = None
    where: "ExpressionList | None" = None
    order: "tuple[OrderedExpression, ...] | None" = None
    limit: "int | LiteralExpression | None" = None
    returning: "ColumnListExpression | None" = None

    def set_from(self, table: IdentifierExpression) -> "DeleteClauses":
        return replace(self, from_=table)

    def has_from(self) -> bool:
        return self.from_ is not None


@dataclass(frozen=True)
class TruncateOptions:
    cascade: bool = False
    restrict: bool = False
    identity: str = ""


@dataclass(frozen=True)
class TruncateClauses:
    tables: "ColumnListExpression | None" = None
    options: TruncateOptions = field(default_factory=TruncateOptions)

    def set_tables(self, tables: "ColumnListExpression | None") -> "TruncateClauses":
        return replace(self, tables=tables)

    def has_tables(self) -> bool:
        return self.tables is not None and not self.tables.is_empty()

    def set_options(self, options: TruncateOptions) -> "TruncateClauses":
        return replace(self, options=options)


@dataclass(frozen=True)
class SelectClauses(_CommonTablesMixin, _WhereMixin, _OrderMixin, _LimitMixin):
    common_tables: "tuple[CommonTableExpression, ...]" = ()
    select: "ColumnListExpression | None" = None
    from_: "ColumnListExpression | None" = None
    where: "ExpressionList | None" = None
    order: "tuple[OrderedExpression, ...] | None" = None
    limit: "int | LiteralExpression | None" = None
    offset: "int | None" = None
    alias: "IdentifierExpression | None" = None

    def set_select(self, select: "ColumnListExpression | None") -> "SelectClauses":
        return replace(self, select=select)

    def set_from(self, tables: "ColumnListExpression | None") -> "SelectClauses":
        return replace(self, from_=tables)

    def has_from(self) -> bool:
        return self.from_ is not None and not self.from_.is_empty()

    def set_offset(self, offset: "int | None") -> "SelectClauses":
        return replace(self, offset=offset)

    def set_alias(self, alias: "IdentifierExpression | None") -> "SelectClauses":
        return replace(self, alias=alias)
