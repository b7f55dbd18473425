"""Process defaults and database configuration."""

from dataclasses import dataclass
from enum import Enum

from sqlstitch.utils.logging import get_logger

__all__ = (
    "DEFAULT_DIALECT",
    "DatabaseConfig",
    "PreparedMode",
    "get_default_prepared",
    "set_default_prepared",
)

logger = get_logger("config")

DEFAULT_DIALECT = "default"
"""Name of the reserved dialect used when none is selected."""

_default_prepared = False


class PreparedMode(Enum):
    """Parameter interpolation mode of a dataset."""

    DEFAULT = "default"
    PREPARED = "prepared"
    LITERAL = "literal"

    @classmethod
    def from_bool(cls, prepared: bool) -> "PreparedMode":
        return cls.PREPARED if prepared else cls.LITERAL

    def resolve(self) -> bool:
        """Return whether this mode renders placeholders, consulting the process default."""
        if self is PreparedMode.DEFAULT:
            return _default_prepared
        return self is PreparedMode.PREPARED


def set_default_prepared(prepared: bool) -> None:
    """Set the interpolation behavior of datasets that did not choose one.

    Like dialect registration, this is meant to be called once at start-up.

    Args:
        prepared: If True, datasets render placeholders and a parameter list by default.
    """
    global _default_prepared  # noqa: PLW0603
    _default_prepared = prepared
    logger.debug("default prepared mode set to %s", prepared)


def get_default_prepared() -> bool:
    return _default_prepared


@dataclass
class DatabaseConfig:
    """Configuration for a :class:`~sqlstitch.database.Database`.

    Attributes:
        dialect: Name of the registered dialect used for datasets created by the database.
        prepared: Prepared mode of datasets created by the database. ``None`` keeps the
            process default.
        log_statements: Log every executed statement at DEBUG level.
    """

    dialect: str = DEFAULT_DIALECT
    prepared: "bool | None" = None
    log_statements: bool = True

    @property
    def prepared_mode(self) -> PreparedMode:
        if self.prepared is None:
            return PreparedMode.DEFAULT
        return PreparedMode.from_bool(self.prepared)
