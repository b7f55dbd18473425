from typing import Any

__all__ = (
    "DialectMismatchError",
    "ImproperConfigurationError",
    "QueryError",
    "SQLBuilderError",
    "SQLGenerationError",
    "SQLStitchError",
    "UnsupportedArgumentError",
    "UnsupportedFeatureError",
)


class SQLStitchError(Exception):
    """Base exception class from which all sqlstitch exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``SQLStitchError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class ImproperConfigurationError(SQLStitchError):
    """Improper Configuration error.

    Raised for invalid dialect registrations and for datasets that are asked for an
    executor without being bound to a database.
    """


class SQLBuilderError(SQLStitchError):
    """Issues Building or Generating SQL statements."""

    def __init__(self, message: str | None = None) -> None:
        if message is None:
            message = "Issues building SQL statement."
        super().__init__(message)


class UnsupportedArgumentError(SQLBuilderError, TypeError):
    """An argument of an unsupported kind was passed to a statement builder.

    This signals misuse of the API and is raised at the call site, it is never
    deferred to the builder's stored error.
    """

    def __init__(self, message: str | None = None, value: Any = None) -> None:
        if message is None:
            message = "Unsupported argument type."
        if value is not None:
            message = f"{message} [got {type(value).__name__}]"
        super().__init__(message)
        self.value = value


class DialectMismatchError(SQLBuilderError, ValueError):
    """A nested statement carries a dialect that conflicts with the outer statement."""

    def __init__(self, outer: str, inner: str, kind: str = "INSERT", inner_kind: str = "SELECT") -> None:
        super().__init__(f"incompatible dialects for {kind} ({outer!r}) and {inner_kind} ({inner!r})")
        self.outer = outer
        self.inner = inner


class SQLGenerationError(SQLBuilderError):
    """A statement could not be rendered to SQL."""


class UnsupportedFeatureError(SQLGenerationError):
    """The dialect cannot express a requested feature."""

    def __init__(self, feature: str, dialect: str) -> None:
        super().__init__(f"dialect does not support {feature} [dialect={dialect}]")
        self.feature = feature
        self.dialect = dialect


class QueryError(SQLStitchError):
    """Base class for errors raised while executing a statement."""
