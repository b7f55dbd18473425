"""Type guard functions for runtime type checking in sqlstitch.

These help the type checker narrow argument types at the builder entry points, where
accepted argument kinds are matched exhaustively.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import msgspec

if TYPE_CHECKING:
    from typing_extensions import TypeGuard

    from sqlstitch.core.expressions import AppendableExpression, Expression, IdentifierExpression
    from sqlstitch.dataset.select import Select

__all__ = (
    "is_appendable",
    "is_dataclass_instance",
    "is_expression",
    "is_identifier",
    "is_mapping",
    "is_msgspec_struct",
    "is_record",
    "is_select_dataset",
)


def is_expression(obj: Any) -> "TypeGuard[Expression]":
    """Check if a value is a sqlstitch expression node or dataset.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    from sqlstitch.core.expressions import Expression

    return isinstance(obj, Expression)


def is_identifier(obj: Any) -> "TypeGuard[IdentifierExpression]":
    from sqlstitch.core.expressions import IdentifierExpression

    return isinstance(obj, IdentifierExpression)


def is_appendable(obj: Any) -> "TypeGuard[AppendableExpression]":
    """Check if a value can write itself into a SQLBuilder (datasets do).

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    from sqlstitch.core.expressions import AppendableExpression

    return isinstance(obj, AppendableExpression)


def is_select_dataset(obj: Any) -> "TypeGuard[Select]":
    from sqlstitch.dataset.select import Select

    return isinstance(obj, Select)


def is_dataclass_instance(obj: Any) -> bool:
    """Check if an object is a dataclass instance.

    Args:
        obj: An object to check.

    Returns:
        True if the object is a dataclass instance.
    """
    return not isinstance(obj, type) and hasattr(type(obj), "__dataclass_fields__")


def is_msgspec_struct(obj: Any) -> "TypeGuard[msgspec.Struct]":
    """Check if a value is a msgspec struct.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    return isinstance(obj, msgspec.Struct)


def is_mapping(obj: Any) -> "TypeGuard[Mapping[str, Any]]":
    return isinstance(obj, Mapping)


def is_record(obj: Any) -> bool:
    """Check if a value can be expanded into column/value pairs.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    return is_mapping(obj) or is_dataclass_instance(obj) or is_msgspec_struct(obj)
