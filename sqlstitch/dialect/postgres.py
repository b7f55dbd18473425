"""PostgreSQL dialect: numbered ``$n`` placeholders and array literals for list values."""

from sqlstitch.dialect.options import DialectOptions

__all__ = ("DIALECT_NAME", "dialect_options")

DIALECT_NAME = "postgres"


def dialect_options() -> DialectOptions:
    return DialectOptions(
        sqlglot_dialect="postgres",
        placeholder="$",
        include_placeholder_num=True,
        left_slice_fragment="'{",
        right_slice_fragment="}'",
        slice_separator=",",
        string_slice_quote='"',
        single_placeholder_for_slice=True,
        supports_order_by_on_update=False,
        supports_limit_on_update=False,
        supports_order_by_on_delete=False,
        supports_limit_on_delete=False,
    )
