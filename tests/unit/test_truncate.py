"""Unit tests for the TRUNCATE dataset."""

import pytest

from sqlstitch import Truncate
from sqlstitch.core.expressions import T
from sqlstitch.exceptions import SQLGenerationError, UnsupportedArgumentError, UnsupportedFeatureError


@pytest.mark.parametrize(
    "truncate",
    [
        Truncate("users").cascade().identity("restart"),
        Truncate("users").identity("restart").cascade(),
    ],
    ids=["cascade_first", "identity_first"],
)
def test_truncate_option_order_is_fixed(truncate: Truncate) -> None:
    """Options render in a fixed order whatever order they were set in."""
    sql, parameters = truncate.with_dialect("postgres").must_to_sql()

    assert sql == 'TRUNCATE "users" RESTART IDENTITY CASCADE'
    assert parameters == []


def test_truncate_multiple_tables() -> None:
    assert Truncate("a", T("b").with_schema("app")).must_to_sql()[0] == 'TRUNCATE "a", "app"."b"'


def test_truncate_table_replaces_tables() -> None:
    assert Truncate("a").table("b", "c").must_to_sql()[0] == 'TRUNCATE "b", "c"'


def test_truncate_all_options() -> None:
    truncate = Truncate("users").restrict().cascade().identity("continue")
    assert truncate.must_to_sql()[0] == 'TRUNCATE "users" CONTINUE IDENTITY CASCADE'


def test_truncate_cascade_takes_precedence_over_restrict() -> None:
    truncate = Truncate("users").cascade().restrict()

    assert truncate.must_to_sql()[0] == 'TRUNCATE "users" CASCADE'
    assert truncate.no_cascade().must_to_sql()[0] == 'TRUNCATE "users" RESTRICT'


def test_truncate_options_can_be_cleared() -> None:
    truncate = Truncate("users").cascade().restrict().identity("restart")

    assert truncate.no_cascade().no_restrict().identity("").must_to_sql()[0] == 'TRUNCATE "users"'


def test_truncate_without_tables() -> None:
    _, _, error = Truncate().to_sql()

    assert isinstance(error, SQLGenerationError)
    assert "no source found when generating truncate sql" in str(error)


@pytest.mark.parametrize(
    ("truncate", "feature"),
    [
        (Truncate("users").cascade(), "TRUNCATE CASCADE"),
        (Truncate("users").restrict(), "TRUNCATE RESTRICT"),
        (Truncate("users").identity("restart"), "TRUNCATE IDENTITY"),
    ],
    ids=["cascade", "restrict", "identity"],
)
def test_truncate_options_unsupported(truncate: Truncate, feature: str) -> None:
    _, _, error = truncate.with_dialect("mysql").to_sql()

    assert isinstance(error, UnsupportedFeatureError)
    assert error.feature == feature


def test_truncate_rejects_unsupported_arguments() -> None:
    with pytest.raises(UnsupportedArgumentError):
        Truncate(1)
    with pytest.raises(UnsupportedArgumentError):
        Truncate("users").identity(1)  # type: ignore[arg-type]


def test_truncate_is_immutable() -> None:
    base = Truncate("users")

    base.cascade()
    base.identity("restart")

    assert base.must_to_sql()[0] == 'TRUNCATE "users"'
    assert not base.returns_columns()
