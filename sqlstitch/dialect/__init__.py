"""Dialect registry.

Dialects are registered once, at import time or during application start-up, and only
looked up afterwards. Registration is not synchronized: register before builders are
used from several threads.
"""

from sqlstitch.config import DEFAULT_DIALECT
from sqlstitch.dialect import mysql, postgres, sqlite3
from sqlstitch.dialect.base import SQLDialect
from sqlstitch.dialect.options import DialectOptions
from sqlstitch.exceptions import ImproperConfigurationError
from sqlstitch.utils.logging import get_logger

__all__ = (
    "DialectOptions",
    "DialectRegistry",
    "SQLDialect",
    "default_registry",
    "get_dialect",
    "mysql",
    "postgres",
    "register_dialect",
    "sqlite3",
)

logger = get_logger("dialect")


class DialectRegistry:
    """Name to :class:`SQLDialect` mapping with a reserved default entry."""

    __slots__ = ("_dialects",)

    def __init__(self) -> None:
        self._dialects: dict[str, SQLDialect] = {DEFAULT_DIALECT: SQLDialect(DEFAULT_DIALECT, DialectOptions())}

    def __contains__(self, name: object) -> bool:
        return name in self._dialects

    def __len__(self) -> int:
        return len(self._dialects)

    @property
    def default(self) -> SQLDialect:
        return self._dialects[DEFAULT_DIALECT]

    def names(self) -> "tuple[str, ...]":
        return tuple(sorted(self._dialects))

    def register(self, name: str, options: DialectOptions, *, replace: bool = False) -> SQLDialect:
        """Register a dialect under ``name``.

        Args:
            name: The dialect name.
            options: Rendering options of the dialect.
            replace: Allow replacing an existing registration.

        Raises:
            ImproperConfigurationError: If ``name`` is the reserved default or already taken.

        Returns:
            The registered dialect.
        """
        name = name.lower()
        if name == DEFAULT_DIALECT:
            msg = f"the {DEFAULT_DIALECT!r} dialect is reserved and cannot be registered"
            raise ImproperConfigurationError(msg)
        if name in self._dialects and not replace:
            msg = f"a dialect named {name!r} is already registered"
            raise ImproperConfigurationError(msg)
        dialect = SQLDialect(name, options)
        self._dialects[name] = dialect
        logger.debug("registered dialect %s", name)
        return dialect

    def get(self, name: str) -> SQLDialect:
        """Look up a dialect, falling back to the default for unknown names."""
        dialect = self._dialects.get(name.lower())
        if dialect is None:
            logger.debug("dialect %s is not registered, using %s", name, DEFAULT_DIALECT)
            return self.default
        return dialect

    def is_default(self, dialect: SQLDialect) -> bool:
        return dialect == self.default


default_registry = DialectRegistry()
"""The process wide registry used by the top level statement constructors."""

for _module in (postgres, mysql, sqlite3):
    default_registry.register(_module.DIALECT_NAME, _module.dialect_options())


def register_dialect(name: str, options: DialectOptions, *, replace: bool = False) -> SQLDialect:
    return default_registry.register(name, options, replace=replace)


def get_dialect(name: str = DEFAULT_DIALECT) -> SQLDialect:
    return default_registry.get(name)

