import pytest

from kate.sqlbuilder.delete import DeleteBuilder, new_delete_builder
from kate.sqlbuilder.flavor import Flavor, set_default_flavor


def test_example_delete_builder():
    db = new_delete_builder()
    db.delete_from("demo.user")
    db.where(
        db.greater_than("id", 1234),
        db.like("name", "%Du"),
        db.or_(db.is_null("id_card"), db.in_("status", 1, 2, 5)),
        "modified_at > created_at + " + db.var(86400),
    )
    sql, args = db.build()
    assert sql == (
        "DELETE FROM demo.user WHERE id > ? AND name LIKE ? AND "
        "(id_card IS NULL OR status IN (?, ?, ?)) AND modified_at > created_at + ?"
    )
    assert args == [1234, "%Du", 1, 2, 5, 86400]


def test_without_where():
    sql, args = new_delete_builder().delete_from("user").build()
    assert sql == "DELETE FROM user"
    assert args == []


def test_postgresql_flavor():
    db = new_delete_builder(Flavor.POSTGRESQL)
    db.delete_from("user").where(db.e("id", 7), db.e("name", "x"))
    assert db.build() == ("DELETE FROM user WHERE id = $1 AND name = $2", [7, "x"])


def test_set_flavor_returns_old():
    db = new_delete_builder(Flavor.MYSQL)
    assert db.set_flavor(Flavor.POSTGRESQL) == Flavor.MYSQL
    assert db.set_flavor(Flavor.MYSQL) == Flavor.POSTGRESQL


def test_str_and_table_escape():
    db = new_delete_builder().delete_from("t$x")
    db.where(db.e("id", 1))
    assert str(db) == "DELETE FROM t$x WHERE id = ?"


def test_build_with_flavor_overrides():
    db = new_delete_builder(Flavor.MYSQL).delete_from("t")
    db.where(db.e("a", 1))
    assert db.build_with_flavor(Flavor.POSTGRESQL, "first") == (
        "DELETE FROM t WHERE a = $2",
        ["first", 1],
    )


def test_uses_default_flavor_at_creation():
    old = set_default_flavor(Flavor.POSTGRESQL)
    try:
        db = new_delete_builder().delete_from("t")
        db.where(db.e("a", 1))
        sql, _ = db.build()
    finally:
        set_default_flavor(old)
    assert sql == "DELETE FROM t WHERE a = $1"


def test_plain_builder_has_invalid_flavor():
    db = DeleteBuilder()
    assert db.args.flavor == Flavor.INVALID


@pytest.mark.parametrize("flavor", [Flavor.MYSQL, Flavor.POSTGRESQL])
def test_where_accumulates(flavor):
    db = new_delete_builder(flavor).delete_from("t")
    db.where("a = 1")
    db.where("b = 2")
    assert db.build()[0] == "DELETE FROM t WHERE a = 1 AND b = 2"