"""Unit tests for behavior shared by every statement dataset."""

from collections.abc import Callable
from typing import Any

import pytest

from sqlstitch import Delete, Insert, L, Select, Truncate, Update
from sqlstitch.config import PreparedMode
from sqlstitch.core.builder import SQLBuilder
from sqlstitch.core.clauses import DeleteClauses
from sqlstitch.core.expressions import C
from sqlstitch.dialect import get_dialect
from sqlstitch.exceptions import ImproperConfigurationError, SQLGenerationError, UnsupportedArgumentError

FIRST = SQLGenerationError("first")
SECOND = SQLGenerationError("second")

MUTATORS: "list[tuple[Any, Callable[[Any], Any]]]" = [
    (Insert("users"), lambda ds: ds.rows({"a": 1})),
    (Insert("users"), lambda ds: ds.cols("a").vals([1])),
    (Insert("users"), lambda ds: ds.returning("id")),
    (Insert("users"), lambda ds: ds.with_dialect("postgres")),
    (Update("users"), lambda ds: ds.set({"a": 1})),
    (Update("users"), lambda ds: ds.where(C("id").eq(1))),
    (Update("users"), lambda ds: ds.order("id")),
    (Update("users"), lambda ds: ds.limit(1)),
    (Delete("users"), lambda ds: ds.where(C("id").eq(1))),
    (Delete("users"), lambda ds: ds.prepared(True)),
    (Delete("users"), lambda ds: ds.with_("x", L("SELECT 1"))),
    (Truncate("users"), lambda ds: ds.cascade()),
    (Truncate("users"), lambda ds: ds.identity("restart")),
    (Select(), lambda ds: ds.from_("users")),
]
MUTATOR_IDS = [
    "insert_rows",
    "insert_vals",
    "insert_returning",
    "insert_dialect",
    "update_set",
    "update_where",
    "update_order",
    "update_limit",
    "delete_where",
    "delete_prepared",
    "delete_with",
    "truncate_cascade",
    "truncate_identity",
    "select_from",
]


def snapshot(dataset: Any) -> "tuple[str, list[Any], str]":
    sql, parameters, error = dataset.to_sql()
    return sql, parameters, repr(error)


@pytest.mark.parametrize(("dataset", "mutate"), MUTATORS, ids=MUTATOR_IDS)
def test_mutators_do_not_change_receiver(dataset: Any, mutate: "Callable[[Any], Any]") -> None:
    before = snapshot(dataset)
    clauses = dataset.get_clauses()

    derived = mutate(dataset)

    assert derived is not dataset
    assert snapshot(dataset) == before
    assert dataset.get_clauses() is clauses


@pytest.mark.parametrize(("dataset", "mutate"), MUTATORS, ids=MUTATOR_IDS)
def test_sticky_error_survives_mutators(dataset: Any, mutate: "Callable[[Any], Any]") -> None:
    """A recorded error is carried by every derived dataset and replaces the SQL."""
    broken = dataset.set_error(FIRST)
    derived = mutate(broken)

    assert derived.error is FIRST
    assert derived.to_sql() == ("", [], FIRST)
    with pytest.raises(SQLGenerationError, match="first"):
        derived.must_to_sql()


def test_first_error_wins() -> None:
    delete = Delete("users").set_error(FIRST).set_error(SECOND)
    assert delete.error is FIRST


def test_set_error_returns_a_new_dataset() -> None:
    delete = Delete("users")
    broken = delete.set_error(FIRST)

    assert delete.error is None
    assert broken.error is FIRST


def test_render_error_is_returned_not_raised() -> None:
    sql, parameters, error = Update("users").to_sql()

    assert sql == ""
    assert parameters == []
    assert isinstance(error, SQLGenerationError)


def test_must_to_sql_raises_render_errors() -> None:
    with pytest.raises(SQLGenerationError, match="no update values provided"):
        Update("users").must_to_sql()


def test_nested_sticky_error_propagates() -> None:
    """An error stored on a nested statement surfaces from the outer statement."""
    inner = Select().from_("old").set_error(FIRST)
    delete = Delete("users").with_("old", inner)

    assert delete.error is None
    assert delete.to_sql() == ("", [], FIRST)


def test_nested_render_error_propagates() -> None:
    inner = Select().from_("old").order(C("id").asc().nulls_first())
    _, _, error = Insert("users", dialect="mysql").from_query(inner).to_sql()

    assert isinstance(error, SQLGenerationError)


def test_append_sql_writes_into_builder() -> None:
    b = SQLBuilder(prepared=True)
    Delete("users").where(C("id").eq(1)).append_sql(b)

    assert b.to_sql() == ('DELETE FROM "users" WHERE ("id" = ?)', [1], None)


def test_append_sql_propagates_error() -> None:
    b = SQLBuilder()
    Delete("users").set_error(FIRST).append_sql(b)

    assert b.error is FIRST


def test_dialect_accessors() -> None:
    postgres = get_dialect("postgres")
    delete = Delete("users")

    assert delete.dialect is get_dialect()
    assert delete.set_dialect(postgres).dialect is postgres
    assert delete.with_dialect("postgres").dialect is postgres
    assert Delete("users", dialect=postgres).dialect is postgres
    assert delete.with_dialect("unknown").dialect is get_dialect()


def test_unsupported_dialect_argument() -> None:
    with pytest.raises(UnsupportedArgumentError):
        Delete("users", dialect=1)  # type: ignore[arg-type]


def test_prepared_mode() -> None:
    delete = Delete("users")

    assert delete.prepared_mode is PreparedMode.DEFAULT
    assert not delete.is_prepared()
    assert delete.prepared(True).prepared_mode is PreparedMode.PREPARED
    assert delete.prepared(True).is_prepared()
    assert delete.prepared(True).prepared(False).prepared_mode is PreparedMode.LITERAL


def test_get_clauses() -> None:
    clauses = Delete("users").where(C("id").eq(1)).get_clauses()

    assert isinstance(clauses, DeleteClauses)
    assert clauses.has_where()


def test_repr() -> None:
    assert repr(Delete("users")) == "Delete(dialect='default', prepared='default', error=None)"


def test_executor_requires_a_database() -> None:
    with pytest.raises(ImproperConfigurationError, match="not bound to a database"):
        Delete("users").executor()
