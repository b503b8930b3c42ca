"""Builder for INSERT statements."""

from __future__ import annotations

from typing import Any

from kate.sqlbuilder.args import Args
from kate.sqlbuilder.flavor import Flavor, get_default_flavor
from kate.sqlbuilder.modifiers import escape, escape_all


class InsertBuilder:
    """Builds an INSERT statement."""

    def __init__(self) -> None:
        self._args = Args()
        self._table = ""
        self._cols: list[str] = []
        self._rows: list[list[str]] = []

    def insert_into(self, table: str) -> InsertBuilder:
        """Set the table name."""
        self._table = escape(table)
        return self

    def cols(self, *cols: str) -> InsertBuilder:
        """Set the column names."""
        self._cols = escape_all(*cols)
        return self

    def values(self, *values: Any) -> InsertBuilder:
        """Add a row of values."""
        self._rows.append([self._args.add(v) for v in values])
        return self

    def build(self) -> tuple[str, list[Any]]:
        """Return the compiled statement and its arguments."""
        return self.build_with_flavor(self._args.flavor)

    def build_with_flavor(self, flavor: Flavor, *initial: Any) -> tuple[str, list[Any]]:
        """Compile the statement for ``flavor`` with initial arguments."""
        sql = f"INSERT INTO {self._table}"
        if self._cols:
            sql += f" ({', '.join(self._cols)})"
        rows = ", ".join(f"({', '.join(row)})" for row in self._rows)
        sql += f" VALUES {rows}"
        return self._args.compile_with_flavor(sql, flavor, *initial)

    def set_flavor(self, flavor: Flavor) -> Flavor:
        """Set the flavor and return the previous one."""
        old = self._args.flavor
        self._args.flavor = flavor
        return old

    def __str__(self) -> str:
        return self.build()[0]


def new_insert_builder(flavor: Flavor | None = None) -> InsertBuilder:
    """Create an INSERT builder for ``flavor`` or the default flavor."""
    builder = InsertBuilder()
    builder.set_flavor(get_default_flavor() if flavor is None else flavor)
    return builder