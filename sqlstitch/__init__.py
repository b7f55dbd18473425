"""sqlstitch: immutable, dialect aware SQL statement builders."""

from sqlstitch import config, core, dataset, dialect, exceptions, typing, utils
from sqlstitch.__metadata__ import __version__
from sqlstitch.config import DatabaseConfig, PreparedMode, get_default_prepared, set_default_prepared
from sqlstitch.core import SafeQuery, SQLBuilder
from sqlstitch.core.expressions import (
    C,
    DoNothing,
    DoUpdate,
    Ex,
    I,
    L,
    S,
    T,
    and_,
    excluded,
    or_,
    star,
)
from sqlstitch.database import Database
from sqlstitch.dataset import Delete, Insert, Select, Truncate, Update
from sqlstitch.dialect import DialectOptions, DialectRegistry, SQLDialect, get_dialect, register_dialect
from sqlstitch.exceptions import (
    DialectMismatchError,
    ImproperConfigurationError,
    QueryError,
    SQLBuilderError,
    SQLGenerationError,
    SQLStitchError,
    UnsupportedArgumentError,
    UnsupportedFeatureError,
)
from sqlstitch.executor import QueryExecutor

__all__ = (
    "C",
    "Database",
    "DatabaseConfig",
    "Delete",
    "DialectMismatchError",
    "DialectOptions",
    "DialectRegistry",
    "DoNothing",
    "DoUpdate",
    "Ex",
    "I",
    "ImproperConfigurationError",
    "Insert",
    "L",
    "PreparedMode",
    "QueryError",
    "QueryExecutor",
    "S",
    "SQLBuilder",
    "SQLBuilderError",
    "SQLDialect",
    "SQLGenerationError",
    "SQLStitchError",
    "SafeQuery",
    "Select",
    "T",
    "Truncate",
    "UnsupportedArgumentError",
    "UnsupportedFeatureError",
    "Update",
    "__version__",
    "and_",
    "config",
    "core",
    "dataset",
    "dialect",
    "excluded",
    "exceptions",
    "get_default_prepared",
    "get_dialect",
    "or_",
    "register_dialect",
    "set_default_prepared",
    "star",
    "typing",
    "utils",
)
