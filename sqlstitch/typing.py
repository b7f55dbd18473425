from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Union

from typing_extensions import TypeAlias, TypeVar

if TYPE_CHECKING:
    from sqlstitch.core.expressions import Expression

__all__ = (
    "ClausesT",
    "DictRow",
    "Record",
    "StatementParameters",
    "TableArg",
    "Vals",
)

Record: TypeAlias = Mapping[str, Any]
"""A mapping of column name to value, used for INSERT rows and UPDATE assignments."""
Vals: TypeAlias = Sequence[Any]
"""One row of values for an INSERT VALUES list."""
DictRow: TypeAlias = dict[str, Any]
"""A row returned by the query executor."""
StatementParameters: TypeAlias = list[Any]
"""Positional parameters produced by a prepared render."""
TableArg: TypeAlias = Union[str, "Expression"]
"""Accepted table arguments: a name to parse, or an already built expression."""

ClausesT = TypeVar("ClausesT")
