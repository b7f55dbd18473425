"""Statement rendering for a dialect.

A :class:`SQLDialect` turns a clause record into SQL by writing into a
:class:`~sqlstitch.core.builder.SQLBuilder`. When a record cannot be rendered the error
is recorded on the builder and rendering stops producing output.
"""

from typing import TYPE_CHECKING, Any

from sqlstitch.core.clauses import (
    DeleteClauses,
    InsertClauses,
    InsertSource,
    SelectClauses,
    TruncateClauses,
    UpdateClauses,
)
from sqlstitch.core.expressions import (
    AppendableExpression,
    ColumnListExpression,
    CommonTableExpression,
    ConflictAction,
    ConflictExpression,
    DoUpdate,
    ExpressionList,
    LiteralExpression,
    OrderedExpression,
)
from sqlstitch.dialect.generator import ExpressionSQLGenerator
from sqlstitch.dialect.options import DialectOptions
from sqlstitch.exceptions import SQLGenerationError, UnsupportedFeatureError
from sqlstitch.utils.records import records_to_rows

if TYPE_CHECKING:
    from sqlstitch.core.builder import SQLBuilder

__all__ = ("SQLDialect",)


class SQLDialect:
    """A named rendering strategy for INSERT, UPDATE, DELETE, TRUNCATE and SELECT.

    Dialects hold no state that changes between renders and may be shared freely.
    """

    __slots__ = ("_generator", "name", "options")

    def __init__(self, name: str, options: "DialectOptions | None" = None) -> None:
        self.name = name
        self.options = options or DialectOptions()
        self._generator = ExpressionSQLGenerator(self)

    def __repr__(self) -> str:
        return f"SQLDialect(name={self.name!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SQLDialect):
            return NotImplemented
        return self.name == other.name and self.options == other.options

    def __hash__(self) -> int:
        return hash((self.name, self.options))

    @property
    def generator(self) -> ExpressionSQLGenerator:
        return self._generator

    def supports(self, feature: str) -> bool:
        """Report whether an optional feature such as ``"returning"`` is supported.

        Args:
            feature: Feature name, matching a ``supports_<feature>`` option.

        Returns:
            bool
        """
        return bool(getattr(self.options, f"supports_{feature}", False))

    def supports_returning(self) -> bool:
        return self.options.supports_returning

    def to_insert_sql(self, b: "SQLBuilder", clauses: InsertClauses) -> None:
        if clauses.into is None:
            b.set_error(SQLGenerationError("no source found when generating insert sql"))
            return
        opts = self.options
        self._common_tables_sql(b, clauses.common_tables)
        conflict = clauses.on_conflict
        insert_ignore = (
            conflict is not None and conflict.action is ConflictAction.DO_NOTHING and opts.supports_insert_ignore_syntax
        )
        b.write(opts.insert_ignore_fragment if insert_ignore else opts.insert_fragment, " ")
        self._generator.generate(b, clauses.into)

        source = clauses.row_source()
        if source is InsertSource.QUERY:
            self._insert_from_query_sql(b, clauses)
        elif source is InsertSource.ROWS:
            self._insert_rows_sql(b, clauses)
        elif source is InsertSource.VALS:
            self._insert_vals_sql(b, clauses)
        elif clauses.has_cols():
            b.set_error(SQLGenerationError("no values provided for the insert columns"))
        else:
            b.write(opts.default_values_fragment)

        if clauses.alias is not None:
            b.write(" AS ")
            self._generator.generate(b, clauses.alias)
        if conflict is not None and not insert_ignore:
            self._on_conflict_sql(b, conflict)
        self._returning_sql(b, clauses.returning)

    def to_update_sql(self, b: "SQLBuilder", clauses: UpdateClauses) -> None:
        if clauses.table is None:
            b.set_error(SQLGenerationError("no source found when generating update sql"))
            return
        if clauses.set_values is None:
            b.set_error(SQLGenerationError("no update values provided"))
            return
        opts = self.options
        gen = self._generator
        if clauses.has_from() and not opts.supports_multiple_update_tables:
            b.set_error(UnsupportedFeatureError("multiple tables in UPDATE", self.name))
            return
        self._common_tables_sql(b, clauses.common_tables)
        b.write(opts.update_fragment, " ")
        gen.generate(b, clauses.table)
        if clauses.has_from() and not opts.use_from_clause_for_multiple_update_tables:
            b.write(",")
            gen.comma_separated(b, clauses.from_.columns, separator=",")  # type: ignore[union-attr]
        b.write(" SET ")
        gen.assignments(b, clauses.set_values)
        if clauses.has_from() and opts.use_from_clause_for_multiple_update_tables:
            b.write(" FROM ")
            gen.generate(b, clauses.from_)
        self._where_sql(b, clauses.where)
        if clauses.has_order():
            if not opts.supports_order_by_on_update:
                b.set_error(UnsupportedFeatureError("ORDER BY on UPDATE", self.name))
                return
            self._order_sql(b, clauses.order)
        if clauses.has_limit():
            if not opts.supports_limit_on_update:
                b.set_error(UnsupportedFeatureError("LIMIT on UPDATE", self.name))
                return
            self._limit_sql(b, clauses.limit)
        self._returning_sql(b, clauses.returning)

    def to_delete_sql(self, b: "SQLBuilder", clauses: DeleteClauses) -> None:
        if clauses.from_ is None:
            b.set_error(SQLGenerationError("no source found when generating delete sql"))
            return
        opts = self.options
        self._common_tables_sql(b, clauses.common_tables)
        b.write(opts.delete_fragment, " ")
        self._generator.generate(b, clauses.from_)
        self._where_sql(b, clauses.where)
        if clauses.has_order():
            if not opts.supports_order_by_on_delete:
                b.set_error(UnsupportedFeatureError("ORDER BY on DELETE", self.name))
                return
            self._order_sql(b, clauses.order)
        if clauses.has_limit():
            if not opts.supports_limit_on_delete:
                b.set_error(UnsupportedFeatureError("LIMIT on DELETE", self.name))
                return
            self._limit_sql(b, clauses.limit)
        self._returning_sql(b, clauses.returning)

    def to_truncate_sql(self, b: "SQLBuilder", clauses: TruncateClauses) -> None:
        if not clauses.has_tables():
            b.set_error(SQLGenerationError("no source found when generating truncate sql"))
            return
        opts = self.options
        options = clauses.options
        b.write(opts.truncate_fragment, " ")
        self._generator.generate(b, clauses.tables)
        if options.identity:
            if not opts.supports_truncate_identity:
                b.set_error(UnsupportedFeatureError("TRUNCATE IDENTITY", self.name))
                return
            b.write(" ", options.identity.upper(), " IDENTITY")
        if options.cascade:
            if not opts.supports_truncate_cascade:
                b.set_error(UnsupportedFeatureError("TRUNCATE CASCADE", self.name))
                return
            b.write(" CASCADE")
        elif options.restrict:
            if not opts.supports_truncate_restrict:
                b.set_error(UnsupportedFeatureError("TRUNCATE RESTRICT", self.name))
                return
            b.write(" RESTRICT")

    def to_select_sql(self, b: "SQLBuilder", clauses: SelectClauses) -> None:
        gen = self._generator
        self._common_tables_sql(b, clauses.common_tables)
        b.write("SELECT ")
        if clauses.select is None or clauses.select.is_empty():
            b.write("*")
        else:
            gen.generate(b, clauses.select)
        if clauses.has_from():
            b.write(" FROM ")
            gen.generate(b, clauses.from_)
        self._where_sql(b, clauses.where)
        if clauses.has_order():
            self._order_sql(b, clauses.order)
        if clauses.has_limit():
            self._limit_sql(b, clauses.limit)
        if clauses.offset:
            b.write(f" OFFSET {int(clauses.offset)}")

    def _common_tables_sql(self, b: "SQLBuilder", ctes: "tuple[CommonTableExpression, ...]") -> None:
        if not ctes:
            return
        if not self.options.supports_with_cte:
            b.set_error(UnsupportedFeatureError("CTE WITH clause", self.name))
            return
        recursive = any(cte.recursive for cte in ctes)
        if recursive and not self.options.supports_with_cte_recursive:
            b.set_error(UnsupportedFeatureError("CTE WITH RECURSIVE clause", self.name))
            return
        b.write("WITH RECURSIVE " if recursive else "WITH ")
        self._generator.comma_separated(b, ctes)
        b.write(" ")

    def _insert_from_query_sql(self, b: "SQLBuilder", clauses: InsertClauses) -> None:
        if clauses.cols is not None and not clauses.cols.is_empty():
            b.write(" (")
            self._generator.generate(b, clauses.cols)
            b.write(")")
        b.write(" ")
        query = clauses.from_query
        if isinstance(query, AppendableExpression):
            query.append_sql(b)
        else:
            self._generator.generate(b, query)

    def _insert_rows_sql(self, b: "SQLBuilder", clauses: InsertClauses) -> None:
        if clauses.has_cols():
            b.set_error(SQLGenerationError("cannot set columns when inserting rows, columns come from the rows"))
            return
        try:
            columns, rows = records_to_rows(clauses.rows or ())
        except SQLGenerationError as e:
            b.set_error(e)
            return
        self._columns_and_values_sql(b, ColumnListExpression.from_values(*columns), rows)

    def _insert_vals_sql(self, b: "SQLBuilder", clauses: InsertClauses) -> None:
        rows = list(clauses.vals or ())
        width = len(rows[0])
        for row in rows:
            if len(row) != width:
                b.set_error(SQLGenerationError(f"rows with different value length expected {width} got {len(row)}"))
                return
        cols = clauses.cols if clauses.has_cols() else None
        if cols is not None and len(cols.columns) != width:
            msg = f"vals row and column length do not match, {len(cols.columns)} != {width}"
            b.set_error(SQLGenerationError(msg))
            return
        self._columns_and_values_sql(b, cols, rows)

    def _columns_and_values_sql(
        self, b: "SQLBuilder", cols: "ColumnListExpression | None", rows: "list[tuple[Any, ...]]"
    ) -> None:
        gen = self._generator
        if cols is not None:
            b.write(" (")
            gen.generate(b, cols)
            b.write(")")
        b.write(" VALUES ")
        for index, row in enumerate(rows):
            if index:
                b.write(", ")
            gen.value_list(b, tuple(row))

    def _on_conflict_sql(self, b: "SQLBuilder", conflict: ConflictExpression) -> None:
        opts = self.options
        b.write(opts.conflict_fragment)
        if conflict.target and opts.supports_conflict_target:
            if conflict.target.lower().startswith("on constraint"):
                b.write(" ", conflict.target)
            else:
                b.write(" (", conflict.target, ")")
        if not isinstance(conflict, DoUpdate):
            b.write(opts.conflict_do_nothing_fragment)
            return
        if conflict.update is None:
            b.set_error(SQLGenerationError("no update values provided for the conflict update"))
            return
        b.write(opts.conflict_do_update_fragment)
        self._generator.assignments(b, conflict.update)
        if conflict.where_clause is not None and not conflict.where_clause.is_empty():
            if not opts.supports_conflict_update_where:
                b.set_error(UnsupportedFeatureError("upsert with where clause", self.name))
                return
            self._where_sql(b, conflict.where_clause)

    def _where_sql(self, b: "SQLBuilder", where: "ExpressionList | None") -> None:
        if where is None or where.is_empty():
            return
        b.write(" WHERE ")
        self._generator.generate(b, where)

    def _order_sql(self, b: "SQLBuilder", order: "tuple[OrderedExpression, ...] | None") -> None:
        if not order:
            return
        b.write(" ORDER BY ")
        self._generator.comma_separated(b, order)

    def _limit_sql(self, b: "SQLBuilder", limit: "int | LiteralExpression | None") -> None:
        if limit is None:
            return
        b.write(" LIMIT ")
        if isinstance(limit, LiteralExpression):
            self._generator.generate(b, limit)
        else:
            b.write(str(int(limit)))

    def _returning_sql(self, b: "SQLBuilder", returning: "ColumnListExpression | None") -> None:
        if returning is None or returning.is_empty():
            return
        if not self.options.supports_returning:
            b.set_error(UnsupportedFeatureError("RETURNING clause", self.name))
            return
        b.write(" RETURNING ")
        self._generator.generate(b, returning)
