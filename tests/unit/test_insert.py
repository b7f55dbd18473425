"""Unit tests for the INSERT dataset."""

from dataclasses import dataclass

import msgspec
import pytest

from sqlstitch import DoNothing, DoUpdate, Insert, L, Select
from sqlstitch.core.expressions import C, I, T, excluded
from sqlstitch.exceptions import (
    DialectMismatchError,
    SQLGenerationError,
    UnsupportedArgumentError,
    UnsupportedFeatureError,
)


@dataclass
class Person:
    name: str
    age: int


class PersonStruct(msgspec.Struct):
    name: str
    age: int


def test_insert_vals() -> None:
    sql, parameters = Insert("users").cols("name", "age").vals(["bob", 30], ["sally", 31]).must_to_sql()

    assert sql == "INSERT INTO \"users\" (\"name\", \"age\") VALUES ('bob', 30), ('sally', 31)"
    assert parameters == []


def test_insert_vals_prepared() -> None:
    insert = Insert("users").cols("name", "age").vals(["bob", 30], ["sally", None]).prepared(True)

    sql, parameters = insert.must_to_sql()
    assert sql == 'INSERT INTO "users" ("name", "age") VALUES (?, ?), (?, NULL)'
    assert parameters == ["bob", 30, "sally"]


def test_insert_vals_numbered_placeholders() -> None:
    insert = Insert("users", dialect="postgres").cols("name", "age").vals(["bob", 30], ["sally", 31])

    sql, parameters = insert.prepared(True).must_to_sql()
    assert sql == 'INSERT INTO "users" ("name", "age") VALUES ($1, $2), ($3, $4)'
    assert parameters == ["bob", 30, "sally", 31]


def test_insert_vals_append_across_calls() -> None:
    """Value rows appended by separate calls keep their order."""
    sql, _ = Insert("users").cols("id").vals([1], [2]).vals([3]).must_to_sql()
    assert sql == 'INSERT INTO "users" ("id") VALUES (1), (2), (3)'


def test_insert_vals_without_columns() -> None:
    sql, _ = Insert("users").vals([1, "bob"]).must_to_sql()
    assert sql == "INSERT INTO \"users\" VALUES (1, 'bob')"


def test_insert_vals_with_different_lengths() -> None:
    _, _, error = Insert("users").vals([1, 2], [3]).to_sql()

    assert isinstance(error, SQLGenerationError)
    assert "rows with different value length expected 2 got 1" in str(error)


def test_insert_vals_and_columns_length_mismatch() -> None:
    _, _, error = Insert("users").cols("a").vals([1, 2]).to_sql()

    assert isinstance(error, SQLGenerationError)
    assert "vals row and column length do not match" in str(error)


def test_insert_rows_from_mappings() -> None:
    """Mapping keys are sorted to give a stable column list."""
    sql, _ = Insert("users").rows({"name": "bob", "age": 30}, {"age": 31, "name": "sally"}).must_to_sql()
    assert sql == "INSERT INTO \"users\" (\"age\", \"name\") VALUES (30, 'bob'), (31, 'sally')"


def test_insert_rows_from_list() -> None:
    sql, _ = Insert("users").rows([{"id": 1}, {"id": 2}]).must_to_sql()
    assert sql == 'INSERT INTO "users" ("id") VALUES (1), (2)'


@pytest.mark.parametrize("record", [Person("bob", 30), PersonStruct("bob", 30)], ids=["dataclass", "msgspec"])
def test_insert_rows_keep_declared_field_order(record: object) -> None:
    sql, parameters = Insert("users").rows(record).prepared(True).must_to_sql()

    assert sql == 'INSERT INTO "users" ("name", "age") VALUES (?, ?)'
    assert parameters == ["bob", 30]


def test_insert_rows_with_different_keys() -> None:
    _, _, error = Insert("users").rows({"a": 1}, {"b": 2}).to_sql()

    assert isinstance(error, SQLGenerationError)
    assert "rows with different keys" in str(error)


def test_insert_rows_with_columns_is_an_error() -> None:
    _, _, error = Insert("users").cols("a").rows({"a": 1}).to_sql()
    assert isinstance(error, SQLGenerationError)


def test_insert_rows_rejects_unsupported_records() -> None:
    with pytest.raises(UnsupportedArgumentError):
        Insert("users").rows(1)


def test_insert_vals_rejects_non_sequences() -> None:
    with pytest.raises(UnsupportedArgumentError):
        Insert("users").vals("abc")


def test_insert_default_values() -> None:
    assert Insert("users").must_to_sql() == ('INSERT INTO "users" DEFAULT VALUES', [])
    assert Insert("users").with_dialect("mysql").must_to_sql() == ("INSERT INTO `users` () VALUES ()", [])


def test_insert_columns_without_values_is_an_error() -> None:
    _, _, error = Insert("users").cols("a").to_sql()
    assert isinstance(error, SQLGenerationError)


def test_insert_cols_append_and_clear() -> None:
    insert = Insert("users").cols("a").cols_append("b").vals([1, 2])

    assert insert.must_to_sql()[0] == 'INSERT INTO "users" ("a", "b") VALUES (1, 2)'
    assert insert.clear_cols().must_to_sql()[0] == 'INSERT INTO "users" VALUES (1, 2)'


def test_insert_clear_sources() -> None:
    insert = Insert("users").vals([1]).rows({"a": 1})

    assert insert.clear_rows().must_to_sql()[0] == 'INSERT INTO "users" VALUES (1)'
    assert insert.clear_rows().clear_vals().must_to_sql()[0] == 'INSERT INTO "users" DEFAULT VALUES'


def test_insert_into() -> None:
    assert Insert().into("users").vals([1]).must_to_sql()[0] == 'INSERT INTO "users" VALUES (1)'
    assert Insert(T("users").with_schema("app")).vals([1]).must_to_sql()[0] == 'INSERT INTO "app"."users" VALUES (1)'


def test_insert_without_table() -> None:
    _, _, error = Insert().vals([1]).to_sql()

    assert isinstance(error, SQLGenerationError)
    assert "no source found when generating insert sql" in str(error)


@pytest.mark.parametrize("table", [1, 2.5, ["users"]], ids=["int", "float", "list"])
def test_insert_rejects_unsupported_tables(table: object) -> None:
    with pytest.raises(UnsupportedArgumentError, match="unsupported table type"):
        Insert(table)  # type: ignore[arg-type]


def test_insert_from_query() -> None:
    sql, _ = Insert("users").cols("name").from_query(Select("name").from_("people")).must_to_sql()
    assert sql == 'INSERT INTO "users" ("name") SELECT "name" FROM "people"'


def test_insert_from_literal() -> None:
    assert Insert("users").from_query(L("SELECT 1")).must_to_sql()[0] == 'INSERT INTO "users" SELECT 1'


def test_insert_from_query_rejects_strings() -> None:
    with pytest.raises(UnsupportedArgumentError):
        Insert("users").from_query("SELECT 1")  # type: ignore[arg-type]


def test_insert_from_query_adopts_dialect() -> None:
    """A nested query left on the default dialect renders under the outer dialect."""
    query = Select("name").from_("people").where(C("age").gt(18))
    insert = Insert("users", dialect="postgres").from_query(query).prepared(True)

    sql, parameters = insert.must_to_sql()
    assert sql == 'INSERT INTO "users" SELECT "name" FROM "people" WHERE ("age" > $1)'
    assert parameters == [18]
    assert insert.get_clauses().from_query.dialect.name == "postgres"  # type: ignore[union-attr]
    assert query.dialect.name == "default"


def test_insert_from_query_dialect_mismatch() -> None:
    query = Select().from_("people").with_dialect("mysql")

    with pytest.raises(DialectMismatchError) as exc_info:
        Insert("users", dialect="postgres").from_query(query)

    assert exc_info.value.outer == "postgres"
    assert exc_info.value.inner == "mysql"
    assert "incompatible dialects for INSERT ('postgres') and SELECT ('mysql')" in str(exc_info.value)


def test_insert_from_query_with_explicit_dialect_on_default_insert() -> None:
    with pytest.raises(DialectMismatchError):
        Insert("users").from_query(Select().from_("people").with_dialect("mysql"))


def test_insert_from_query_same_dialect() -> None:
    query = Select().from_("people").with_dialect("postgres")
    insert = Insert("users", dialect="postgres").from_query(query)

    assert insert.must_to_sql()[0] == 'INSERT INTO "users" SELECT * FROM "people"'


def test_insert_dialect_change_follows_into_query() -> None:
    insert = Insert("users").from_query(Select().from_("people")).with_dialect("mysql")

    assert insert.must_to_sql()[0] == "INSERT INTO `users` SELECT * FROM `people`"
    assert insert.get_clauses().from_query.dialect.name == "mysql"  # type: ignore[union-attr]


def test_insert_last_row_source_wins() -> None:
    """The most recently set row source is rendered, the other is kept."""
    insert = Insert("users").cols("a").vals([1]).from_query(L("SELECT 2"))
    assert insert.must_to_sql()[0] == 'INSERT INTO "users" ("a") SELECT 2'

    insert = insert.vals([3])
    assert insert.must_to_sql()[0] == 'INSERT INTO "users" ("a") VALUES (1), (3)'
    assert insert.get_clauses().has_from()


def test_insert_returning() -> None:
    insert = Insert("users").rows({"name": "bob"}).returning("id", "name")

    assert insert.returns_columns()
    assert insert.with_dialect("postgres").must_to_sql()[0] == (
        "INSERT INTO \"users\" (\"name\") VALUES ('bob') RETURNING \"id\", \"name\""
    )
    assert not insert.returning().returns_columns()


def test_insert_returning_unsupported() -> None:
    _, _, error = Insert("users").rows({"name": "bob"}).returning("id").with_dialect("mysql").to_sql()
    assert isinstance(error, UnsupportedFeatureError)


@pytest.mark.parametrize(
    ("conflict", "expected"),
    [
        (DoNothing(), " ON CONFLICT DO NOTHING"),
        (DoNothing("id"), " ON CONFLICT (id) DO NOTHING"),
        (DoNothing("ON CONSTRAINT users_pkey"), " ON CONFLICT ON CONSTRAINT users_pkey DO NOTHING"),
        (DoUpdate("id", {"name": excluded("name")}), ' ON CONFLICT (id) DO UPDATE SET "name"=EXCLUDED."name"'),
        (
            DoUpdate("id", {"name": excluded("name")}).where(I("users.active").eq(True)),
            ' ON CONFLICT (id) DO UPDATE SET "name"=EXCLUDED."name" WHERE ("users"."active" = TRUE)',
        ),
    ],
    ids=["do_nothing", "do_nothing_target", "on_constraint", "do_update", "do_update_where"],
)
def test_insert_on_conflict_postgres(conflict: object, expected: str) -> None:
    insert = Insert("users", dialect="postgres").rows({"name": "bob"}).on_conflict(conflict)  # type: ignore[arg-type]

    assert insert.must_to_sql()[0] == "INSERT INTO \"users\" (\"name\") VALUES ('bob')" + expected


def test_insert_on_conflict_mysql() -> None:
    insert = Insert("users", dialect="mysql").rows({"name": "bob"})

    assert insert.on_conflict(DoNothing()).must_to_sql()[0] == "INSERT IGNORE INTO `users` (`name`) VALUES ('bob')"
    assert insert.on_conflict(DoUpdate("id", {"name": L("VALUES(?)", C("name"))})).must_to_sql()[0] == (
        "INSERT INTO `users` (`name`) VALUES ('bob') ON DUPLICATE KEY UPDATE `name`=VALUES(`name`)"
    )


def test_insert_on_conflict_where_unsupported() -> None:
    conflict = DoUpdate("id", {"name": "x"}).where(C("id").gt(1))
    _, _, error = Insert("users", dialect="mysql").rows({"name": "bob"}).on_conflict(conflict).to_sql()

    assert isinstance(error, UnsupportedFeatureError)


def test_insert_on_conflict_update_requires_values() -> None:
    _, _, error = Insert("users").rows({"name": "bob"}).on_conflict(DoUpdate("id")).to_sql()
    assert isinstance(error, SQLGenerationError)


def test_insert_clear_on_conflict() -> None:
    insert = Insert("users").vals([1]).on_conflict(DoNothing()).clear_on_conflict()
    assert insert.must_to_sql()[0] == 'INSERT INTO "users" VALUES (1)'


def test_insert_on_conflict_rejects_other_values() -> None:
    with pytest.raises(UnsupportedArgumentError):
        Insert("users").on_conflict("DO NOTHING")  # type: ignore[arg-type]


def test_insert_alias() -> None:
    insert = (
        Insert("users", dialect="mysql")
        .rows({"name": "bob"})
        .as_("new")
        .on_conflict(DoUpdate("", {"name": L("new.name")}))
    )

    assert insert.get_as() == T("new")
    assert insert.must_to_sql()[0] == (
        "INSERT INTO `users` (`name`) VALUES ('bob') AS `new` ON DUPLICATE KEY UPDATE `name`=new.name"
    )


def test_insert_with_common_table() -> None:
    active = Select().from_("people").where(C("active").eq(True))
    insert = Insert("users").with_("active", active).from_query(Select().from_("active"))

    assert insert.must_to_sql()[0] == (
        'WITH active AS (SELECT * FROM "people" WHERE ("active" = TRUE)) INSERT INTO "users" SELECT * FROM "active"'
    )


def test_insert_is_immutable() -> None:
    base = Insert("users")
    before = base.to_sql()

    base.rows({"a": 1})
    base.vals([1])
    base.returning("id")
    base.prepared(True)

    assert base.to_sql() == before


def test_insert_common_table_and_query_share_placeholders() -> None:
    """Common tables and the row query are numbered as one statement."""
    insert = (
        Insert("t", dialect="postgres")
        .with_("c", Select().from_("y").where(C("b").eq(2)))
        .cols("id")
        .from_query(Select("id").from_("x").where(C("a").eq(1)))
        .prepared(True)
    )

    sql, parameters = insert.must_to_sql()
    assert sql == (
        'WITH c AS (SELECT * FROM "y" WHERE ("b" = $1)) INSERT INTO "t" ("id") SELECT "id" FROM "x" WHERE ("a" = $2)'
    )
    assert parameters == [2, 1]


def test_insert_binary_values_are_bound() -> None:
    insert = Insert("t").cols("b").vals([b"\x89PNG\xff"]).prepared(True)

    sql, parameters = insert.must_to_sql()
    assert sql == 'INSERT INTO "t" ("b") VALUES (?)'
    assert parameters == [b"\x89PNG\xff"]


def test_insert_invalid_binary_literal_is_an_error() -> None:
    _, _, error = Insert("t").cols("b").vals([b"\x89PNG\xff"]).to_sql()
    assert isinstance(error, SQLGenerationError)


def test_insert_postgres_array_value() -> None:
    insert = Insert("t", dialect="postgres").cols("id", "tags").vals([1, ["a", "b"]])

    assert insert.must_to_sql()[0] == 'INSERT INTO "t" ("id", "tags") VALUES (1, \'{"a","b"}\')'

    sql, parameters = insert.prepared(True).must_to_sql()
    assert sql == 'INSERT INTO "t" ("id", "tags") VALUES ($1, $2)'
    assert parameters == [1, ["a", "b"]]
