"""Per-dialect rendering options."""

from dataclasses import dataclass, replace
from typing import Any

__all__ = ("DialectOptions",)


@dataclass(frozen=True)
class DialectOptions:
    """Fragments and feature flags used by :class:`~sqlstitch.dialect.base.SQLDialect`.

    Identifier quoting and string escaping are delegated to sqlglot using
    ``sqlglot_dialect``; everything else that differs between databases lives here.
    """

    sqlglot_dialect: str = ""

    placeholder: str = "?"
    include_placeholder_num: bool = False

    left_slice_fragment: str = "("
    right_slice_fragment: str = ")"
    slice_separator: str = ", "
    string_slice_quote: str = ""
    single_placeholder_for_slice: bool = False

    null_fragment: str = "NULL"
    true_fragment: str = "TRUE"
    false_fragment: str = "FALSE"
    default_values_fragment: str = " DEFAULT VALUES"

    insert_fragment: str = "INSERT INTO"
    insert_ignore_fragment: str = "INSERT IGNORE INTO"
    update_fragment: str = "UPDATE"
    delete_fragment: str = "DELETE FROM"
    truncate_fragment: str = "TRUNCATE"
    conflict_fragment: str = " ON CONFLICT"
    conflict_do_nothing_fragment: str = " DO NOTHING"
    conflict_do_update_fragment: str = " DO UPDATE SET "
    set_operator: str = "="

    supports_returning: bool = True
    supports_with_cte: bool = True
    supports_with_cte_recursive: bool = True
    supports_conflict_target: bool = True
    supports_conflict_update_where: bool = True
    supports_insert_ignore_syntax: bool = False
    supports_order_by_on_update: bool = True
    supports_limit_on_update: bool = True
    supports_order_by_on_delete: bool = True
    supports_limit_on_delete: bool = True
    supports_multiple_update_tables: bool = True
    use_from_clause_for_multiple_update_tables: bool = True
    supports_truncate_cascade: bool = True
    supports_truncate_restrict: bool = True
    supports_truncate_identity: bool = True
    supports_nulls_ordering: bool = True

    def replace(self, **changes: Any) -> "DialectOptions":
        """Return a copy with ``changes`` applied."""
        return replace(self, **changes)
