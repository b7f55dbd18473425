"""Expression value hierarchy.

Immutable nodes describing pieces of SQL: identifiers, literal passthrough text, ordered
columns, column lists, aliases, predicates, common table expressions and conflict
(upsert) descriptors. Nodes hold data only; rendering is done by the dialect's
expression generator.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

from sqlstitch.exceptions import UnsupportedArgumentError

if TYPE_CHECKING:
    from sqlstitch.core.builder import SQLBuilder
    from sqlstitch.dialect.base import SQLDialect

__all__ = (
    "AliasedExpression",
    "AppendableExpression",
    "BooleanExpression",
    "BooleanOperation",
    "C",
    "ColumnListExpression",
    "CommonTableExpression",
    "ConflictAction",
    "ConflictExpression",
    "DoNothing",
    "DoUpdate",
    "Ex",
    "Expression",
    "ExpressionList",
    "ExpressionListType",
    "I",
    "IdentifierExpression",
    "L",
    "LiteralExpression",
    "NullSortType",
    "OrderedExpression",
    "S",
    "SortDirection",
    "T",
    "and_",
    "excluded",
    "or_",
    "parse_identifier",
    "star",
)


class Expression:
    """Base class of every node that can be rendered into SQL."""

    __slots__ = ()

    def clone(self) -> "Expression":
        return self


class AppendableExpression(Expression, ABC):
    """An expression that renders itself into a caller supplied SQLBuilder.

    Datasets are appendable so they can be nested as sub-queries, CTE sources and
    INSERT row sources.
    """

    __slots__ = ()

    @abstractmethod
    def append_sql(self, builder: "SQLBuilder") -> None:
        """Write this statement into ``builder``."""

    @abstractmethod
    def get_as(self) -> "IdentifierExpression | None":
        """Alias of the statement when it is used as a value source."""

    def adopt_dialect(self, dialect: "SQLDialect", kind: str = "statement") -> "AppendableExpression":
        """Return this statement as it renders when nested in a statement using ``dialect``."""
        return self


class BooleanOperation(Enum):
    EQ = "="
    NEQ = "!="
    GT = ">"
    GTE = ">="
    LT = "<"
    LTE = "<="
    IN = "IN"
    NOT_IN = "NOT IN"
    IS = "IS"
    IS_NOT = "IS NOT"
    LIKE = "LIKE"
    NOT_LIKE = "NOT LIKE"


class SortDirection(Enum):
    ASC = "ASC"
    DESC = "DESC"


class NullSortType(Enum):
    NO_NULLS = ""
    NULLS_FIRST = "NULLS FIRST"
    NULLS_LAST = "NULLS LAST"


class ExpressionListType(Enum):
    AND = "AND"
    OR = "OR"


class ConflictAction(Enum):
    DO_NOTHING = "nothing"
    DO_UPDATE = "update"


class _Comparable:
    """Comparison, ordering and aliasing helpers shared by identifiers and literals."""

    __slots__ = ()

    def eq(self, value: Any) -> "BooleanExpression":
        if value is None:
            return BooleanExpression(BooleanOperation.IS, self, None)  # type: ignore[arg-type]
        return BooleanExpression(BooleanOperation.EQ, self, value)  # type: ignore[arg-type]

    def neq(self, value: Any) -> "BooleanExpression":
        if value is None:
            return BooleanExpression(BooleanOperation.IS_NOT, self, None)  # type: ignore[arg-type]
        return BooleanExpression(BooleanOperation.NEQ, self, value)  # type: ignore[arg-type]

    def gt(self, value: Any) -> "BooleanExpression":
        return BooleanExpression(BooleanOperation.GT, self, value)  # type: ignore[arg-type]

    def gte(self, value: Any) -> "BooleanExpression":
        return BooleanExpression(BooleanOperation.GTE, self, value)  # type: ignore[arg-type]

    def lt(self, value: Any) -> "BooleanExpression":
        return BooleanExpression(BooleanOperation.LT, self, value)  # type: ignore[arg-type]

    def lte(self, value: Any) -> "BooleanExpression":
        return BooleanExpression(BooleanOperation.LTE, self, value)  # type: ignore[arg-type]

    def in_(self, *values: Any) -> "BooleanExpression":
        """``IN`` against a list of values or a single sub-query."""
        return BooleanExpression(BooleanOperation.IN, self, _in_operand(values))  # type: ignore[arg-type]

    def not_in(self, *values: Any) -> "BooleanExpression":
        return BooleanExpression(BooleanOperation.NOT_IN, self, _in_operand(values))  # type: ignore[arg-type]

    def is_null(self) -> "BooleanExpression":
        return BooleanExpression(BooleanOperation.IS, self, None)  # type: ignore[arg-type]

    def is_not_null(self) -> "BooleanExpression":
        return BooleanExpression(BooleanOperation.IS_NOT, self, None)  # type: ignore[arg-type]

    def like(self, pattern: Any) -> "BooleanExpression":
        return BooleanExpression(BooleanOperation.LIKE, self, pattern)  # type: ignore[arg-type]

    def not_like(self, pattern: Any) -> "BooleanExpression":
        return BooleanExpression(BooleanOperation.NOT_LIKE, self, pattern)  # type: ignore[arg-type]

    def asc(self) -> "OrderedExpression":
        return OrderedExpression(self, SortDirection.ASC)  # type: ignore[arg-type]

    def desc(self) -> "OrderedExpression":
        return OrderedExpression(self, SortDirection.DESC)  # type: ignore[arg-type]

    def as_(self, alias: "str | IdentifierExpression") -> "AliasedExpression":
        if isinstance(alias, str):
            alias = parse_identifier(alias)
        return AliasedExpression(self, alias)  # type: ignore[arg-type]


def _in_operand(values: "tuple[Any, ...]") -> Any:
    if len(values) == 1:
        (value,) = values
        if isinstance(value, AppendableExpression):
            return value
        if isinstance(value, (list, tuple, set, frozenset)):
            return tuple(value)
    return tuple(values)


@dataclass(frozen=True)
class IdentifierExpression(_Comparable, Expression):
    """A possibly schema and table qualified identifier.

    ``col`` is either a name, ``"*"`` or a :class:`LiteralExpression`.
    """

    schema: str = ""
    table: str = ""
    col: Any = None

    def get_schema(self) -> str:
        return self.schema

    def get_table(self) -> str:
        return self.table

    def get_col(self) -> Any:
        return self.col

    def with_schema(self, schema: str) -> "IdentifierExpression":
        return replace(self, schema=schema)

    def with_table(self, table: str) -> "IdentifierExpression":
        return replace(self, table=table)

    def with_col(self, col: Any) -> "IdentifierExpression":
        return replace(self, col=col)

    def is_empty(self) -> bool:
        return not (self.schema or self.table or self.col)

    def is_qualified(self) -> bool:
        return bool(self.schema or self.table) and self.col is not None

    def all(self) -> "IdentifierExpression":
        """The ``*`` column of this table."""
        if self.col is None or self.table:
            return replace(self, col="*")
        return IdentifierExpression(self.schema, str(self.col), "*")


@dataclass(frozen=True)
class LiteralExpression(_Comparable, Expression):
    """Opaque SQL inserted verbatim.

    Each ``?`` in ``sql`` is replaced, in order, by the rendered ``args``.
    """

    sql: str
    args: "tuple[Any, ...]" = ()


@dataclass(frozen=True)
class AliasedExpression(Expression):
    expr: Expression
    alias: IdentifierExpression


@dataclass(frozen=True)
class OrderedExpression(Expression):
    expr: Expression
    direction: SortDirection = SortDirection.ASC
    nulls: NullSortType = NullSortType.NO_NULLS

    def nulls_first(self) -> "OrderedExpression":
        return replace(self, nulls=NullSortType.NULLS_FIRST)

    def nulls_last(self) -> "OrderedExpression":
        return replace(self, nulls=NullSortType.NULLS_LAST)

    def is_asc(self) -> bool:
        return self.direction is SortDirection.ASC


@dataclass(frozen=True)
class BooleanExpression(Expression):
    op: BooleanOperation
    lhs: Expression
    rhs: Any


@dataclass(frozen=True)
class ExpressionList(Expression):
    """Expressions joined by AND or OR."""

    type: ExpressionListType = ExpressionListType.AND
    expressions: "tuple[Expression, ...]" = ()

    def append(self, *expressions: Expression) -> "ExpressionList":
        """Return a new list with ``expressions`` added after the current ones."""
        return replace(self, expressions=(*self.expressions, *_check_predicates(expressions)))

    def is_empty(self) -> bool:
        return not self.expressions


@dataclass(frozen=True)
class ColumnListExpression(Expression):
    columns: "tuple[Expression, ...]" = ()

    @classmethod
    def from_values(cls, *values: Any) -> "ColumnListExpression":
        """Build a column list from names and expressions.

        Strings are parsed into identifiers, nested column lists, lists and tuples are
        flattened and ``None`` entries are skipped.

        Raises:
            UnsupportedArgumentError: If a value is neither a string nor an expression.
        """
        columns: list[Expression] = []
        for value in values:
            if value is None:
                continue
            if isinstance(value, str):
                columns.append(parse_identifier(value))
            elif isinstance(value, ColumnListExpression):
                columns.extend(value.columns)
            elif isinstance(value, (list, tuple)):
                columns.extend(cls.from_values(*value).columns)
            elif isinstance(value, Expression):
                columns.append(value)
            else:
                msg = "cannot create a column expression, a string or expression is required"
                raise UnsupportedArgumentError(msg, value)
        return cls(tuple(columns))

    def append(self, other: "ColumnListExpression") -> "ColumnListExpression":
        return ColumnListExpression((*self.columns, *other.columns))

    def is_empty(self) -> bool:
        return not self.columns


@dataclass(frozen=True)
class CommonTableExpression(Expression):
    """A ``WITH`` entry. ``name`` is written verbatim so it may carry a column list."""

    recursive: bool
    name: str
    sub_query: Expression


@dataclass(frozen=True)
class ConflictExpression(Expression):
    """Base of the upsert descriptors.

    ``target`` is written verbatim inside parentheses, e.g. ``"id"`` or ``"a, b"``.
    """

    target: str = ""

    @property
    def action(self) -> ConflictAction:
        raise NotImplementedError


@dataclass(frozen=True)
class DoNothing(ConflictExpression):
    """``ON CONFLICT DO NOTHING`` (``INSERT IGNORE`` on dialects using that syntax)."""

    @property
    def action(self) -> ConflictAction:
        return ConflictAction.DO_NOTHING


@dataclass(frozen=True)
class DoUpdate(ConflictExpression):
    """``ON CONFLICT (target) DO UPDATE SET ...`` with an optional ``WHERE``."""

    update: Any = None
    where_clause: "ExpressionList | None" = field(default=None)

    @property
    def action(self) -> ConflictAction:
        return ConflictAction.DO_UPDATE

    def where(self, *expressions: Expression) -> "DoUpdate":
        current = self.where_clause or ExpressionList()
        return replace(self, where_clause=current.append(*expressions))


def _check_predicates(expressions: "Iterable[Any]") -> "tuple[Expression, ...]":
    checked: list[Expression] = []
    for expression in expressions:
        if isinstance(expression, Mapping):
            checked.append(Ex(expression))
        elif isinstance(expression, Expression):
            checked.append(expression)
        else:
            msg = "unsupported filter expression, an expression or mapping is required"
            raise UnsupportedArgumentError(msg, expression)
    return tuple(checked)


def parse_identifier(name: str) -> IdentifierExpression:
    """Parse ``"col"``, ``"table.col"`` or ``"schema.table.col"`` into an identifier.

    Args:
        name: The dotted name.

    Returns:
        The identifier expression.
    """
    parts = name.split(".")
    if len(parts) == 2:  # noqa: PLR2004
        return IdentifierExpression("", parts[0], parts[1])
    if len(parts) == 3:  # noqa: PLR2004
        return IdentifierExpression(parts[0], parts[1], parts[2])
    return IdentifierExpression("", "", name)


def I(name: str) -> IdentifierExpression:  # noqa: E743
    """Identifier parsed from a dotted name."""
    return parse_identifier(name)


def T(table: str) -> IdentifierExpression:
    """Table identifier."""
    return IdentifierExpression("", table, None)


def C(col: str) -> IdentifierExpression:
    """Column identifier. The name is not split on dots; use :func:`I` for qualified names."""
    return IdentifierExpression("", "", col)


def S(schema: str) -> IdentifierExpression:
    """Schema identifier."""
    return IdentifierExpression(schema, "", None)


def L(sql: str, *args: Any) -> LiteralExpression:
    """Literal SQL, with ``?`` markers replaced by ``args``."""
    return LiteralExpression(sql, tuple(args))


def star() -> LiteralExpression:
    return LiteralExpression("*")


def excluded(col: str) -> LiteralExpression:
    """The ``EXCLUDED`` pseudo-table column used in upsert assignments."""
    return LiteralExpression("EXCLUDED.?", (C(col),))


def and_(*expressions: Any) -> ExpressionList:
    return ExpressionList(ExpressionListType.AND, _check_predicates(expressions))


def or_(*expressions: Any) -> ExpressionList:
    return ExpressionList(ExpressionListType.OR, _check_predicates(expressions))


def Ex(mapping: "Mapping[str, Any]") -> ExpressionList:  # noqa: N802
    """AND of comparisons built from a mapping.

    ``None`` values compare with ``IS NULL``, sequences with ``IN``, anything else with ``=``.
    Keys are sorted so the rendered predicate is stable.
    """
    comparisons: list[Expression] = []
    for key in sorted(mapping):
        value = mapping[key]
        column = parse_identifier(key)
        if isinstance(value, (list, tuple, set, frozenset)) or isinstance(value, AppendableExpression):
            comparisons.append(column.in_(value))
        else:
            comparisons.append(column.eq(value))
    return ExpressionList(ExpressionListType.AND, tuple(comparisons))
