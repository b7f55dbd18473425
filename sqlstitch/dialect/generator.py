"""Rendering of values and expression nodes into a SQLBuilder."""

import datetime
import math
from decimal import Decimal
from enum import Enum
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from sqlglot import exp

from sqlstitch.core.expressions import (
    AliasedExpression,
    AppendableExpression,
    BooleanExpression,
    BooleanOperation,
    ColumnListExpression,
    CommonTableExpression,
    Expression,
    ExpressionList,
    IdentifierExpression,
    LiteralExpression,
    NullSortType,
    OrderedExpression,
    parse_identifier,
)
from sqlstitch.exceptions import DialectMismatchError, SQLGenerationError, UnsupportedFeatureError
from sqlstitch.utils.records import record_items

if TYPE_CHECKING:
    from sqlstitch.core.builder import SQLBuilder
    from sqlstitch.dialect.base import SQLDialect

__all__ = ("ExpressionSQLGenerator",)

_NULL_OPERATIONS = frozenset({BooleanOperation.IS, BooleanOperation.IS_NOT})
_LIST_OPERATIONS = frozenset({BooleanOperation.IN, BooleanOperation.NOT_IN})
_SCALAR_TYPES = (
    bool,
    int,
    float,
    Decimal,
    str,
    bytes,
    bytearray,
    memoryview,
    datetime.datetime,
    datetime.date,
    datetime.time,
)


def _is_finite(value: "int | float | Decimal") -> bool:
    if isinstance(value, Decimal):
        return value.is_finite()
    return math.isfinite(value)


@lru_cache(maxsize=1024)
def _quote_identifier(name: str, dialect: str) -> str:
    return exp.to_identifier(name, quoted=True).sql(dialect=dialect or None)


@lru_cache(maxsize=1024)
def _quote_string(value: str, dialect: str) -> str:
    return exp.Literal.string(value).sql(dialect=dialect or None)


class ExpressionSQLGenerator:
    """Writes values and expression nodes for one dialect.

    In prepared mode values become placeholders collected by the builder; otherwise they
    are interpolated as escaped literals. ``NULL`` is always written literally.
    """

    __slots__ = ("dialect", "dialect_name", "options")

    def __init__(self, dialect: "SQLDialect") -> None:
        self.dialect = dialect
        self.dialect_name = dialect.name
        self.options = dialect.options

    def quote_identifier(self, name: str) -> str:
        return _quote_identifier(name, self.options.sqlglot_dialect)

    def quote_string(self, value: str) -> str:
        return _quote_string(value, self.options.sqlglot_dialect)

    def generate(self, b: "SQLBuilder", value: Any) -> None:
        """Write ``value`` into ``b``; unsupported values record an error on ``b``."""
        if b.has_error:
            return
        if value is None:
            b.write(self.options.null_fragment)
        elif isinstance(value, AppendableExpression):
            self.sub_query(b, value)
        elif isinstance(value, Expression):
            self.expression(b, value)
        elif isinstance(value, Enum):
            self.generate(b, value.value)
        elif isinstance(value, (list, tuple, set, frozenset)):
            self.slice_value(b, tuple(value))
        elif isinstance(value, _SCALAR_TYPES):
            if b.is_prepared:
                if isinstance(value, (bytearray, memoryview)):
                    value = bytes(value)
                b.write_placeholder(value, self.options.placeholder, self.options.include_placeholder_num)
            else:
                self.literal_value(b, value)
        else:
            b.set_error(SQLGenerationError(f"unsupported value type {type(value).__name__}"))

    def literal_value(self, b: "SQLBuilder", value: Any) -> None:
        """Write a scalar value as an escaped SQL literal."""
        if isinstance(value, bool):
            b.write(self.options.true_fragment if value else self.options.false_fragment)
        elif isinstance(value, (int, float, Decimal)):
            if not _is_finite(value):
                msg = f"non-finite number {value!r} cannot be rendered as a literal, use prepared mode"
                b.set_error(SQLGenerationError(msg))
                return
            b.write(str(value))
        elif isinstance(value, str):
            b.write(self.quote_string(value))
        elif isinstance(value, (bytes, bytearray, memoryview)):
            try:
                text = bytes(value).decode("utf-8")
            except UnicodeDecodeError:
                msg = "binary value is not valid UTF-8 and cannot be rendered as a literal, use prepared mode"
                b.set_error(SQLGenerationError(msg))
                return
            b.write(self.quote_string(text))
        else:
            b.write(self.quote_string(value.isoformat()))

    def slice_value(self, b: "SQLBuilder", values: "tuple[Any, ...]") -> None:
        """Write a list value using the dialect's slice fragments.

        With ``string_slice_quote`` set the elements form an array literal, e.g.
        ``'{"a","b"}'``, otherwise each element is rendered as a value. Dialects with
        ``single_placeholder_for_slice`` bind the whole list to one placeholder.
        """
        opts = self.options
        if b.is_prepared and opts.single_placeholder_for_slice:
            b.write_placeholder(list(values), opts.placeholder, opts.include_placeholder_num)
            return
        b.write(opts.left_slice_fragment)
        for index, value in enumerate(values):
            if index:
                b.write(opts.slice_separator)
            if opts.string_slice_quote:
                self._array_element(b, value)
            else:
                self.generate(b, value)
        b.write(opts.right_slice_fragment)

    def _array_element(self, b: "SQLBuilder", value: Any) -> None:
        quote = self.options.string_slice_quote
        if value is None:
            b.write(self.options.null_fragment)
        elif isinstance(value, str):
            escaped = value.replace("\\", "\\\\").replace(quote, "\\" + quote).replace("'", "''")
            b.write(quote, escaped, quote)
        elif isinstance(value, bool):
            b.write("true" if value else "false")
        elif isinstance(value, (int, float, Decimal)) and _is_finite(value):
            b.write(str(value))
        else:
            b.set_error(SQLGenerationError(f"unsupported array element type {type(value).__name__}"))

    def value_list(self, b: "SQLBuilder", values: "tuple[Any, ...]") -> None:
        b.write("(")
        self.comma_separated(b, values)
        b.write(")")

    def comma_separated(self, b: "SQLBuilder", values: "tuple[Any, ...] | list[Any]", separator: str = ", ") -> None:
        for index, value in enumerate(values):
            if index:
                b.write(separator)
            self.generate(b, value)

    def nested(self, b: "SQLBuilder", statement: AppendableExpression) -> "AppendableExpression | None":
        """Bind a nested statement to this dialect, recording a dialect conflict on ``b``."""
        try:
            return statement.adopt_dialect(self.dialect)
        except DialectMismatchError as e:
            b.set_error(e)
            return None

    def sub_query(self, b: "SQLBuilder", statement: AppendableExpression) -> None:
        nested = self.nested(b, statement)
        if nested is None:
            return
        b.write("(")
        nested.append_sql(b)
        b.write(")")
        alias = nested.get_as()
        if alias is not None:
            b.write(" AS ")
            self.generate(b, alias)

    def expression(self, b: "SQLBuilder", expression: Expression) -> None:  # noqa: C901
        if isinstance(expression, IdentifierExpression):
            self.identifier(b, expression)
        elif isinstance(expression, LiteralExpression):
            self.literal(b, expression)
        elif isinstance(expression, BooleanExpression):
            self.boolean(b, expression)
        elif isinstance(expression, ExpressionList):
            self.expression_list(b, expression)
        elif isinstance(expression, ColumnListExpression):
            self.comma_separated(b, expression.columns)
        elif isinstance(expression, OrderedExpression):
            self.ordered(b, expression)
        elif isinstance(expression, AliasedExpression):
            self.generate(b, expression.expr)
            b.write(" AS ")
            self.generate(b, expression.alias)
        elif isinstance(expression, CommonTableExpression):
            self.common_table(b, expression)
        else:
            b.set_error(SQLGenerationError(f"unsupported expression type {type(expression).__name__}"))

    def identifier(self, b: "SQLBuilder", identifier: IdentifierExpression) -> None:
        if identifier.is_empty():
            b.set_error(SQLGenerationError("an empty identifier was encountered"))
            return
        wrote = False
        for part in (identifier.schema, identifier.table):
            if part:
                if wrote:
                    b.write(".")
                b.write(self.quote_identifier(part))
                wrote = True
        col = identifier.col
        if col is None:
            return
        if wrote:
            b.write(".")
        if col == "*":
            b.write("*")
        elif isinstance(col, str):
            b.write(self.quote_identifier(col))
        elif isinstance(col, LiteralExpression):
            self.literal(b, col)
        else:
            msg = f"unexpected col type must be str or LiteralExpression, got {type(col).__name__}"
            b.set_error(SQLGenerationError(msg))

    def literal(self, b: "SQLBuilder", literal: LiteralExpression) -> None:
        if not literal.args:
            b.write(literal.sql)
            return
        pieces = literal.sql.split("?")
        if len(pieces) - 1 != len(literal.args):
            msg = f"literal {literal.sql!r} expects {len(pieces) - 1} arguments, got {len(literal.args)}"
            b.set_error(SQLGenerationError(msg))
            return
        for index, piece in enumerate(pieces):
            b.write(piece)
            if index < len(literal.args):
                self.generate(b, literal.args[index])

    def boolean(self, b: "SQLBuilder", expression: BooleanExpression) -> None:
        b.write("(")
        self.generate(b, expression.lhs)
        b.write(f" {expression.op.value} ")
        rhs = expression.rhs
        if expression.op in _NULL_OPERATIONS:
            if rhs is None:
                b.write(self.options.null_fragment)
            elif isinstance(rhs, bool):
                b.write(self.options.true_fragment if rhs else self.options.false_fragment)
            else:
                self.generate(b, rhs)
        elif expression.op in _LIST_OPERATIONS and isinstance(rhs, tuple):
            if not rhs:
                b.set_error(SQLGenerationError(f"{expression.op.value} requires at least one value"))
                return
            self.value_list(b, rhs)
        else:
            self.generate(b, rhs)
        b.write(")")

    def expression_list(self, b: "SQLBuilder", expression_list: ExpressionList) -> None:
        expressions = expression_list.expressions
        if not expressions:
            return
        if len(expressions) == 1:
            self.generate(b, expressions[0])
            return
        b.write("(")
        self.comma_separated(b, expressions, separator=f" {expression_list.type.value} ")
        b.write(")")

    def ordered(self, b: "SQLBuilder", ordered: OrderedExpression) -> None:
        self.generate(b, ordered.expr)
        b.write(f" {ordered.direction.value}")
        if ordered.nulls is not NullSortType.NO_NULLS:
            if not self.options.supports_nulls_ordering:
                b.set_error(UnsupportedFeatureError("NULLS FIRST/LAST ordering", self.dialect_name))
                return
            b.write(f" {ordered.nulls.value}")

    def common_table(self, b: "SQLBuilder", cte: CommonTableExpression) -> None:
        b.write(cte.name, " AS (")
        if isinstance(cte.sub_query, AppendableExpression):
            nested = self.nested(b, cte.sub_query)
            if nested is not None:
                nested.append_sql(b)
        else:
            self.generate(b, cte.sub_query)
        b.write(")")

    def assignments(self, b: "SQLBuilder", values: Any) -> None:
        """Write ``"col"=value`` pairs of a record, separated by commas."""
        try:
            items = record_items(values)
        except SQLGenerationError as e:
            b.set_error(e)
            return
        if not items:
            b.set_error(SQLGenerationError("no update values provided"))
            return
        for index, (column, value) in enumerate(items):
            if index:
                b.write(",")
            self.generate(b, parse_identifier(column))
            b.write(self.options.set_operator)
            self.generate(b, value)


