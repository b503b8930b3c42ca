# kate

A small toolkit for database-backed services:

- `kate.sqlbuilder` – build SQL statements and their arguments for MySQL or
  PostgreSQL.
- `kate.orm.utils` – string conversion helpers (`StrTo`, `to_str`,
  `to_int64`, `snake_string`) and back-quote column quoting (`quote`,
  `quote_all`).
- `kate.queryparams` – collect filters, ordering and pagination from a
  dataclass instance into a `QueryParams`.
- `kate.result` – the `Result` envelope (`errno`, `errmsg`, `data`) for JSON
  responses; `to_dict()` leaves `data` out when it is `None`.
- `kate.rdb` – set up a process-wide Redis client, standalone or cluster,
  from a `Config`.
- `kate.redsync` – a distributed mutex on Redis following the Redlock
  algorithm.

## Installation

```
pip install .
```

Run the tests with:

```
pip install .[test]
pytest
```

## Building SQL

```python
from kate.sqlbuilder.select import new_select_builder
from kate.sqlbuilder.flavor import Flavor

sb = new_select_builder(Flavor.MYSQL)
sb.distinct().select("id", "name", sb.as_("COUNT(*)", "t"))
sb.from_("demo.user")
sb.where(
    sb.greater_than("id", 1234),
    sb.like("name", "%Du"),
    sb.or_(sb.is_null("id_card"), sb.in_("status", 1, 2, 5)),
)
sb.order_by("modified_at").asc()
sb.limit(10).offset(5)

sql, args = sb.build()
# SELECT DISTINCT id, name, COUNT(*) AS t FROM demo.user WHERE id > ? AND
# name LIKE ? AND (id_card IS NULL OR status IN (?, ?, ?))
# ORDER BY modified_at ASC LIMIT 10 OFFSET 5
# [1234, '%Du', 1, 2, 5]
```

The same style of builder exists for `INSERT` (`kate.sqlbuilder.insert.new_insert_builder`),
`UPDATE` (`kate.sqlbuilder.update.new_update_builder`, with `assign`, `incr`,
`decr`, `add`, `sub`, `mul`, `div`) and `DELETE`
(`kate.sqlbuilder.delete.new_delete_builder`). Pass `Flavor.POSTGRESQL` to get
`$1, $2, ...` placeholders instead of `?`; `set_default_flavor` in
`kate.sqlbuilder.flavor` changes the flavor used when none is given.

Free-form statements use a small format language with
`kate.sqlbuilder.builder.build`:

```python
from kate.sqlbuilder.builder import build
from kate.sqlbuilder.modifiers import raw, named, as_list

sql, args = build(
    "SELECT * FROM $? WHERE state IN (${states}) AND created_at > $?",
    raw("banned"), 1514458225, named("states", as_list([3, 4, 5])),
).build()
# SELECT * FROM banned WHERE state IN (?, ?, ?) AND created_at > ?
# [3, 4, 5, 1514458225]
```

- `$?` takes the next argument, `$0 ... $n` a given one,
- `${name}` a named argument, `$$` is a literal `$`.

`buildf` accepts `%v`/`%s` formats, `build_named` takes a dict of named
values, and `with_flavor` fixes the flavor a builder compiles with. Builders
can be nested as arguments of one another.

`kate.sqlbuilder.struct.Struct` maps a dataclass to columns using `db`,
`fieldtag` and `fieldopt` field metadata and produces builders through
`select_from`, `update`, `insert_into` and `delete_from` (and their
`..._for_tag` variants). `scan`, `scan_for_tag` and `scan_with_cols` store a
fetched row back into a dataclass instance.

## Query parameters

`new_query_params_from_tag(obj)` takes a dataclass instance with `page`,
`per_page` and `sort` fields. Every field whose metadata has a `filter` name
and whose value is not `None` becomes a filter. The result offers
`offset()`, `limit()`, `order_by` and `filters`.

## Distributed locks

```python
from kate import rdb
from kate.redsync.redsync import new_mutex
from kate.redsync.mutex import LockFailedError

rdb.init(rdb.Config(addrs=["localhost:6379"]))

mutex = new_mutex("jobs:nightly")
try:
    mutex.lock()
except LockFailedError:
    ...
else:
    try:
        ...  # critical section
    finally:
        mutex.unlock()
```

A `Mutex` is also a context manager (`with mutex: ...`), and
`mutex.extend()` refreshes the expiry while work is still running. For
several independent Redis nodes, build a `Redsync` from a list of `Pool`
objects and call its `new_mutex`. Durations are in seconds.

## What it does not do

The SQL builders only produce statements and argument lists; the package
has no database connection or query execution of its own. It also has no
HTTP server or router: `Result` is only the response body shape.