"""MySQL dialect.

Backtick quoted identifiers, ``INSERT IGNORE`` and ``ON DUPLICATE KEY UPDATE`` upserts,
and multi-table updates written as ``UPDATE a,b SET``.
"""

from sqlstitch.dialect.options import DialectOptions

__all__ = ("DIALECT_NAME", "dialect_options")

DIALECT_NAME = "mysql"


def dialect_options() -> DialectOptions:
    return DialectOptions(
        sqlglot_dialect="mysql",
        true_fragment="1",
        false_fragment="0",
        default_values_fragment=" () VALUES ()",
        conflict_fragment="",
        conflict_do_nothing_fragment="",
        conflict_do_update_fragment=" ON DUPLICATE KEY UPDATE ",
        supports_returning=False,
        supports_conflict_target=False,
        supports_conflict_update_where=False,
        supports_insert_ignore_syntax=True,
        use_from_clause_for_multiple_update_tables=False,
        supports_truncate_cascade=False,
        supports_truncate_restrict=False,
        supports_truncate_identity=False,
        supports_nulls_ordering=False,
    )
