"""Unit tests for the SELECT dataset."""

import pytest

from sqlstitch import Select
from sqlstitch.core.expressions import C, L
from sqlstitch.exceptions import UnsupportedArgumentError


def test_select_star() -> None:
    assert Select().from_("users").must_to_sql() == ('SELECT * FROM "users"', [])
    assert Select().must_to_sql()[0] == "SELECT *"


def test_select_full() -> None:
    query = Select("id", "name").from_("users").where(C("age").gte(18)).order(C("name").asc()).limit(10).offset(5)

    assert query.must_to_sql()[0] == (
        'SELECT "id", "name" FROM "users" WHERE ("age" >= 18) ORDER BY "name" ASC LIMIT 10 OFFSET 5'
    )


def test_select_replaces_columns() -> None:
    query = Select("id").select("name", L("COUNT(*)")).from_("users")
    assert query.must_to_sql()[0] == 'SELECT "name", COUNT(*) FROM "users"'


def test_select_prepared() -> None:
    sql, parameters = Select().from_("users").where(C("name").eq("bob")).prepared(True).must_to_sql()

    assert sql == 'SELECT * FROM "users" WHERE ("name" = ?)'
    assert parameters == ["bob"]


def test_select_aliased_sub_query() -> None:
    inner = Select("id").from_("users").as_("u")

    assert Select().from_(inner).must_to_sql()[0] == 'SELECT * FROM (SELECT "id" FROM "users") AS "u"'
    assert inner.get_as() is not None


def test_select_offset() -> None:
    query = Select().from_("users").offset(5)

    assert query.offset(0).must_to_sql()[0] == 'SELECT * FROM "users"'
    with pytest.raises(UnsupportedArgumentError):
        query.offset(-1)


def test_select_nulls_ordering() -> None:
    query = Select().from_("users").order(C("age").desc().nulls_last()).with_dialect("postgres")
    assert query.must_to_sql()[0] == 'SELECT * FROM "users" ORDER BY "age" DESC NULLS LAST'
