from kate.sqlbuilder.flavor import Flavor
from kate.sqlbuilder.insert import new_insert_builder
from kate.sqlbuilder.modifiers import raw


def test_example_insert_builder():
    ib = new_insert_builder()
    ib.insert_into("demo.user")
    ib.cols("id", "name", "status", "created_at")
    ib.values(1, "Huan Du", 1, raw("UNIX_TIMESTAMP(NOW())"))
    ib.values(2, "Charmy Liu", 1, 1234567890)
    sql, args = ib.build()
    assert sql == (
        "INSERT INTO demo.user (id, name, status, created_at) VALUES "
        "(?, ?, ?, UNIX_TIMESTAMP(NOW())), (?, ?, ?, ?)"
    )
    assert args == [1, "Huan Du", 1, 2, "Charmy Liu", 1, 1234567890]


def test_without_cols():
    ib = new_insert_builder().insert_into("t").values(1, 2)
    assert ib.build() == ("INSERT INTO t VALUES (?, ?)", [1, 2])


def test_postgresql_numbering():
    ib = new_insert_builder(Flavor.POSTGRESQL).insert_into("t").cols("a", "b")
    ib.values(1, 2).values(3, 4)
    assert ib.build() == (
        "INSERT INTO t (a, b) VALUES ($1, $2), ($3, $4)",
        [1, 2, 3, 4],
    )


def test_cols_escaped_and_str():
    ib = new_insert_builder().insert_into("t").cols("$a").values(5)
    assert str(ib) == "INSERT INTO t ($a) VALUES (?)"


def test_set_flavor_returns_old():
    ib = new_insert_builder(Flavor.POSTGRESQL)
    assert ib.set_flavor(Flavor.MYSQL) == Flavor.POSTGRESQL
    ib.insert_into("t").values(1)
    assert ib.build()[0] == "INSERT INTO t VALUES (?)"


def test_build_with_flavor_initial_args():
    ib = new_insert_builder().insert_into("t").values("x")
    assert ib.build_with_flavor(Flavor.POSTGRESQL, 0, 0) == (
        "INSERT INTO t VALUES ($3)",
        [0, 0, "x"],
    )