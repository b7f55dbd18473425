"""TRUNCATE statement dataset."""

from dataclasses import replace
from typing import TYPE_CHECKING, Any, ClassVar

from typing_extensions import Self

from sqlstitch.core.clauses import TruncateClauses
from sqlstitch.core.expressions import ColumnListExpression
from sqlstitch.dataset._base import Dataset
from sqlstitch.exceptions import UnsupportedArgumentError

if TYPE_CHECKING:
    from sqlstitch.core.builder import SQLBuilder
    from sqlstitch.dialect import DialectRegistry, SQLDialect
    from sqlstitch.executor import QueryFactory

__all__ = ("Truncate",)


class Truncate(Dataset[TruncateClauses]):
    """Builder for ``TRUNCATE`` statements.

    Options are always rendered in the order ``IDENTITY`` then ``CASCADE`` or ``RESTRICT``,
    whatever order they were set in. ``CASCADE`` takes precedence when both are set.
    """

    __slots__ = ()

    statement_kind: ClassVar[str] = "TRUNCATE"

    def __init__(
        self,
        *tables: Any,
        dialect: "str | SQLDialect | None" = None,
        query_factory: "QueryFactory | None" = None,
        registry: "DialectRegistry | None" = None,
    ) -> None:
        clauses = TruncateClauses()
        if tables:
            clauses = clauses.set_tables(ColumnListExpression.from_values(*tables))
        self._init_dataset(clauses, dialect, query_factory, registry)

    def _render(self, builder: "SQLBuilder") -> None:
        self._dialect.to_truncate_sql(builder, self._clauses)

    def table(self, *tables: Any) -> Self:
        """Replace the tables to truncate."""
        return self._copy(self._clauses.set_tables(ColumnListExpression.from_values(*tables)))

    def cascade(self) -> Self:
        return self._with_options(cascade=True)

    def no_cascade(self) -> Self:
        return self._with_options(cascade=False)

    def restrict(self) -> Self:
        return self._with_options(restrict=True)

    def no_restrict(self) -> Self:
        return self._with_options(restrict=False)

    def identity(self, identity: str) -> Self:
        """Set the identity option, ``"restart"`` or ``"continue"``; ``""`` clears it.

        Raises:
            UnsupportedArgumentError: If ``identity`` is not a string.
        """
        if not isinstance(identity, str):
            msg = "unsupported identity option, a string is required"
            raise UnsupportedArgumentError(msg, identity)
        return self._with_options(identity=identity)

    def _with_options(self, **changes: Any) -> Self:
        return self._copy(self._clauses.set_options(replace(self._clauses.options, **changes)))
