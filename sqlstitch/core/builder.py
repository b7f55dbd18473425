"""SQL text and parameter accumulator with a sticky error.

A :class:`SQLBuilder` is created for a single render. Dialects write fragments and
placeholder values into it without checking for errors after every call: once an error
is recorded every further write is ignored, and :meth:`SQLBuilder.to_sql` reports that
first error instead of a partial statement.
"""

from typing import Any, NamedTuple

from typing_extensions import Self

from sqlstitch.utils.logging import get_logger

__all__ = ("SQLBuilder", "SafeQuery")

logger = get_logger("core.builder")


class SafeQuery(NamedTuple):
    """Outcome of a render.

    When ``error`` is set, ``sql`` and ``parameters`` are empty and must not be used.
    """

    sql: str
    parameters: "list[Any]"
    error: "BaseException | None" = None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


class SQLBuilder:
    """Append-only SQL buffer, parameter list and placeholder counter."""

    __slots__ = ("_args", "_error", "_fragments", "_placeholder_count", "_prepared")

    def __init__(self, prepared: bool = False) -> None:
        self._prepared = prepared
        self._fragments: list[str] = []
        self._args: list[Any] = []
        self._error: BaseException | None = None
        self._placeholder_count = 0

    def __repr__(self) -> str:
        return f"SQLBuilder(prepared={self._prepared!r}, sql={self.sql!r}, error={self._error!r})"

    @property
    def is_prepared(self) -> bool:
        return self._prepared

    @property
    def error(self) -> "BaseException | None":
        return self._error

    @property
    def has_error(self) -> bool:
        return self._error is not None

    @property
    def sql(self) -> str:
        """Text written so far."""
        return "".join(self._fragments)

    @property
    def parameters(self) -> "list[Any]":
        return list(self._args)

    @property
    def placeholder_count(self) -> int:
        return self._placeholder_count

    def set_error(self, error: BaseException) -> Self:
        """Record ``error`` unless an error was already recorded."""
        if self._error is None:
            self._error = error
            logger.debug("SQL generation failed: %s", error)
        return self

    def write(self, *fragments: str) -> Self:
        """Append raw SQL fragments."""
        if self._error is None:
            self._fragments.extend(fragments)
        return self

    def write_placeholder(self, value: Any, placeholder: str, numbered: bool = False) -> Self:
        """Append a placeholder token and collect ``value`` as a parameter.

        Args:
            value: The parameter value.
            placeholder: The dialect's placeholder fragment (``?``, ``$``, ``%s``).
            numbered: Suffix the placeholder with its 1-based position.

        Returns:
            The builder.
        """
        if self._error is not None:
            return self
        self._placeholder_count += 1
        self._args.append(value)
        if numbered:
            self._fragments.append(f"{placeholder}{self._placeholder_count}")
        else:
            self._fragments.append(placeholder)
        return self

    def to_sql(self) -> SafeQuery:
        """Return the finished statement, or only the error if one was recorded."""
        if self._error is not None:
            return SafeQuery("", [], self._error)
        return SafeQuery(self.sql, list(self._args))
