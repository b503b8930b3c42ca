import pytest

from kate.sqlbuilder.flavor import Flavor
from kate.sqlbuilder.modifiers import SqlNamedArg, flatten, sql_named
from kate.sqlbuilder.select import JoinOption, new_select_builder


def test_example_select_builder():
    sb = new_select_builder()
    sb.distinct().select("id", "name", sb.as_("COUNT(*)", "t"))
    sb.from_("demo.user")
    sb.where(
        sb.greater_than("id", 1234),
        sb.like("name", "%Du"),
        sb.or_(sb.is_null("id_card"), sb.in_("status", 1, 2, 5)),
        sb.not_in("id", new_select_builder().select("id").from_("banned")),
        "modified_at > created_at + " + sb.var(86400),
    )
    sb.group_by("status").having(sb.not_in("status", 4, 5))
    sb.order_by("modified_at").asc()
    sb.limit(10).offset(5)
    stmt, args = sb.build()
    assert stmt == (
        "SELECT DISTINCT id, name, COUNT(*) AS t FROM demo.user WHERE id > ? AND "
        "name LIKE ? AND (id_card IS NULL OR status IN (?, ?, ?)) AND id NOT IN "
        "(SELECT id FROM banned) AND modified_at > created_at + ? GROUP BY status "
        "HAVING status NOT IN (?, ?) ORDER BY modified_at ASC LIMIT 10 OFFSET 5"
    )
    assert args == [1234, "%Du", 1, 2, 5, 86400, 4, 5]


def test_example_advanced_usage():
    sb = new_select_builder()
    inner = new_select_builder()
    sb.select("id", "name")
    sb.from_(sb.builder_as(inner, "user"))
    sb.where(
        sb.in_("status", *flatten([1, 2, 3])),
        sb.between(
            "created_at", sql_named("start", 1234567890), sql_named("end", 1234599999)
        ),
    )
    sb.order_by("modified_at").desc()
    inner.select("*")
    inner.from_("banned")
    inner.where(inner.not_in("name", *flatten(["Huan Du", "Charmy Liu"])))
    stmt, args = sb.build()
    assert stmt == (
        "SELECT id, name FROM (SELECT * FROM banned WHERE name NOT IN (?, ?)) AS user "
        "WHERE status IN (?, ?, ?) AND created_at BETWEEN @start AND @end "
        "ORDER BY modified_at DESC"
    )
    assert args == [
        "Huan Du",
        "Charmy Liu",
        1,
        2,
        3,
        SqlNamedArg("start", 1234567890),
        SqlNamedArg("end", 1234599999),
    ]


def test_example_join():
    sb = new_select_builder()
    sb.select("u.id", "u.name", "c.type", "p.nickname")
    sb.from_("user u")
    sb.join("contract c", "u.id = c.user_id", sb.in_("c.status", 1, 2, 5))
    sb.join_with_option(
        JoinOption.RIGHT_OUTER_JOIN,
        "person p",
        "u.id = p.user_id",
        sb.like("p.surname", "%Du"),
    )
    sb.where("u.modified_at > u.created_at + " + sb.var(86400))
    stmt, args = sb.build()
    assert stmt == (
        "SELECT u.id, u.name, c.type, p.nickname FROM user u JOIN contract c ON "
        "u.id = c.user_id AND c.status IN (?, ?, ?) RIGHT OUTER JOIN person p ON "
        "u.id = p.user_id AND p.surname LIKE ? WHERE u.modified_at > u.created_at + ?"
    )
    assert args == [1, 2, 5, "%Du", 86400]


def test_example_flavor_postgresql():
    sb = new_select_builder(Flavor.POSTGRESQL)
    sb.select("name").from_("user").where(sb.e("id", 1234), sb.g("rank", 3))
    assert sb.build() == (
        "SELECT name FROM user WHERE id = $1 AND rank > $2",
        [1234, 3],
    )


def test_join_without_on_and_left_option():
    sb = new_select_builder().select("*").from_("a")
    sb.join_with_option(JoinOption.LEFT_JOIN, "b")
    assert str(sb) == "SELECT * FROM a LEFT JOIN b"


def test_offset_ignored_without_limit():
    sb = new_select_builder().select("*").from_("t").offset(5)
    assert str(sb) == "SELECT * FROM t"


def test_limit_zero_and_for_update():
    sb = new_select_builder().select("*").from_("t").limit(0).for_update()
    assert str(sb) == "SELECT * FROM t LIMIT 0 FOR UPDATE"


def test_having_ignored_without_group_by():
    sb = new_select_builder().select("*").from_("t").having("x > 1")
    assert str(sb) == "SELECT * FROM t"


def test_order_by_without_direction():
    sb = new_select_builder().select("a").from_("t").order_by("a", "b")
    assert str(sb) == "SELECT a FROM t ORDER BY a, b"


def test_select_escapes_columns():
    sb = new_select_builder().select("$a").from_("t")
    assert str(sb) == "SELECT $a FROM t"


def test_set_flavor_returns_old():
    sb = new_select_builder(Flavor.MYSQL)
    assert sb.set_flavor(Flavor.POSTGRESQL) == Flavor.MYSQL
    sb.select("a").from_("t").where(sb.e("a", 1))
    assert sb.build() == ("SELECT a FROM t WHERE a = $1", [1])


@pytest.mark.parametrize(
    "option, keyword",
    [
        (JoinOption.LEFT_JOIN, "LEFT"),
        (JoinOption.LEFT_OUTER_JOIN, "LEFT OUTER"),
        (JoinOption.RIGHT_JOIN, "RIGHT"),
        (JoinOption.RIGHT_OUTER_JOIN, "RIGHT OUTER"),
        (JoinOption.FULL_JOIN, "FULL"),
        (JoinOption.FULL_OUTER_JOIN, "FULL OUTER"),
    ],
)
def test_join_option_keyword(option, keyword):
    sb = new_select_builder().select("*").from_("a")
    sb.join_with_option(option, "b", "a.id = b.id")
    assert str(sb) == f"SELECT * FROM a {keyword} JOIN b ON a.id = b.id"