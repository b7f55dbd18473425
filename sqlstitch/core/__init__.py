"""Expression nodes, clause records and the SQL accumulator."""

from sqlstitch.core import builder, clauses, expressions
from sqlstitch.core.builder import SafeQuery, SQLBuilder
from sqlstitch.core.clauses import (
    DeleteClauses,
    InsertClauses,
    InsertSource,
    SelectClauses,
    TruncateClauses,
    TruncateOptions,
    UpdateClauses,
)

__all__ = (
    "DeleteClauses",
    "InsertClauses",
    "InsertSource",
    "SQLBuilder",
    "SafeQuery",
    "SelectClauses",
    "TruncateClauses",
    "TruncateOptions",
    "UpdateClauses",
    "builder",
    "clauses",
    "expressions",
)
