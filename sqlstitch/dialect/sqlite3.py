"""SQLite dialect. SQLite has no TRUNCATE, ``DELETE FROM`` takes its place."""

from sqlstitch.dialect.options import DialectOptions

__all__ = ("DIALECT_NAME", "dialect_options")

DIALECT_NAME = "sqlite3"


def dialect_options() -> DialectOptions:
    return DialectOptions(
        sqlglot_dialect="sqlite",
        true_fragment="1",
        false_fragment="0",
        truncate_fragment="DELETE FROM",
        supports_order_by_on_update=False,
        supports_limit_on_update=False,
        supports_order_by_on_delete=False,
        supports_limit_on_delete=False,
        supports_conflict_update_where=True,
        supports_truncate_cascade=False,
        supports_truncate_restrict=False,
        supports_truncate_identity=False,
    )
