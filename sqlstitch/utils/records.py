"""Expansion of record-like values into ordered column/value pairs.

Mappings expose their keys in sorted order so rendered column lists are stable;
dataclasses and msgspec structs keep their declared field order.
"""

from dataclasses import fields
from typing import Any

from sqlstitch.exceptions import SQLGenerationError
from sqlstitch.utils.type_guards import is_dataclass_instance, is_mapping, is_msgspec_struct

__all__ = ("record_items", "records_to_rows")


def record_items(record: Any) -> "tuple[tuple[str, Any], ...]":
    """Return the ``(column, value)`` pairs of a record.

    Args:
        record: A mapping, dataclass instance or msgspec struct.

    Raises:
        SQLGenerationError: If the value is not a supported record type.

    Returns:
        The column/value pairs.
    """
    if is_mapping(record):
        return tuple((str(key), record[key]) for key in sorted(record, key=str))
    if is_dataclass_instance(record):
        return tuple((field.name, getattr(record, field.name)) for field in fields(record))
    if is_msgspec_struct(record):
        return tuple((name, getattr(record, name)) for name in record.__struct_fields__)
    msg = f"unsupported record type {type(record).__name__}, expected a mapping, dataclass or msgspec Struct"
    raise SQLGenerationError(msg)


def records_to_rows(records: "tuple[Any, ...]") -> "tuple[tuple[str, ...], list[tuple[Any, ...]]]":
    """Convert records into a shared column list and one value tuple per record.

    Args:
        records: The records to convert; all must expose the same columns.

    Raises:
        SQLGenerationError: If records are empty or expose different columns.

    Returns:
        The column names and the value rows.
    """
    if not records:
        msg = "no rows provided"
        raise SQLGenerationError(msg)
    columns: tuple[str, ...] = ()
    rows: list[tuple[Any, ...]] = []
    for index, record in enumerate(records):
        items = record_items(record)
        record_columns = tuple(name for name, _ in items)
        if index == 0:
            columns = record_columns
        elif set(record_columns) != set(columns):
            msg = f"rows with different keys, expected {list(columns)} got {list(record_columns)}"
            raise SQLGenerationError(msg)
        values = dict(items)
        rows.append(tuple(values[name] for name in columns))
    return columns, rows
