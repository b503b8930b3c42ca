import pytest

from kate.sqlbuilder.flavor import Flavor
from kate.sqlbuilder.update import new_update_builder


def test_example_update_builder():
    ub = new_update_builder()
    ub.update("demo.user")
    ub.set(
        ub.assign("type", "sys"),
        ub.incr("credit"),
        "modified_at = UNIX_TIMESTAMP(NOW())",
    )
    ub.where(
        ub.greater_than("id", 1234),
        ub.like("name", "%Du"),
        ub.or_(ub.is_null("id_card"), ub.in_("status", 1, 2, 5)),
        "modified_at > created_at + " + ub.var(86400),
    )
    sql, args = ub.build()
    assert sql == (
        "UPDATE demo.user SET type = ?, credit = credit + 1, "
        "modified_at = UNIX_TIMESTAMP(NOW()) WHERE id > ? AND name LIKE ? AND "
        "(id_card IS NULL OR status IN (?, ?, ?)) AND modified_at > created_at + ?"
    )
    assert args == ["sys", 1234, "%Du", 1, 2, 5, 86400]


@pytest.mark.parametrize(
    "make, expected_expr, expected_args",
    [
        (lambda ub: ub.incr("f"), "f = f + 1", []),
        (lambda ub: ub.decr("f"), "f = f - 1", []),
        (lambda ub: ub.add("f", 123), "f = f + $0", [123]),
        (lambda ub: ub.sub("f", 123), "f = f - $0", [123]),
        (lambda ub: ub.mul("f", 123), "f = f * $0", [123]),
        (lambda ub: ub.div("f", 123), "f = f / $0", [123]),
    ],
)
def test_update_assignments(make, expected_expr, expected_args):
    ub = new_update_builder()
    expr = make(ub)
    ub.set(expr)
    _, args = ub.build()
    assert expr == expected_expr
    assert args == expected_args


def test_set_replaces_assignments():
    ub = new_update_builder().update("t")
    ub.set("a = 1")
    ub.set("b = 2")
    assert str(ub) == "UPDATE t SET b = 2"


def test_postgresql_flavor():
    ub = new_update_builder(Flavor.POSTGRESQL).update("t")
    ub.set(ub.assign("a", "x"))
    ub.where(ub.e("id", 9))
    assert ub.build() == ("UPDATE t SET a = $1 WHERE id = $2", ["x", 9])


def test_escaped_field():
    ub = new_update_builder()
    assert ub.incr("$f") == "$$f = $$f + 1"


def test_set_flavor_returns_old():
    ub = new_update_builder(Flavor.MYSQL)
    assert ub.set_flavor(Flavor.POSTGRESQL) == Flavor.MYSQL