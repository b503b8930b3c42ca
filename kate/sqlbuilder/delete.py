"""Builder for DELETE statements."""

from __future__ import annotations

from typing import Any

from kate.sqlbuilder.args import Args
from kate.sqlbuilder.cond import Cond
from kate.sqlbuilder.flavor import Flavor, get_default_flavor
from kate.sqlbuilder.modifiers import escape


class DeleteBuilder(Cond):
    """Builds a DELETE statement."""

    def __init__(self) -> None:
        super().__init__(Args())
        self._table = ""
        self._where_exprs: list[str] = []

    def delete_from(self, table: str) -> DeleteBuilder:
        """Set the table name."""
        self._table = escape(table)
        return self

    def where(self, *exprs: str) -> DeleteBuilder:
        """Add expressions joined with AND to the WHERE clause."""
        self._where_exprs.extend(exprs)
        return self

    def build(self) -> tuple[str, list[Any]]:
        """Return the compiled statement and its arguments."""
        return self.build_with_flavor(self.args.flavor)

    def build_with_flavor(self, flavor: Flavor, *initial: Any) -> tuple[str, list[Any]]:
        """Compile the statement for ``flavor`` with initial arguments."""
        sql = f"DELETE FROM {self._table}"
        if self._where_exprs:
            sql += " WHERE " + " AND ".join(self._where_exprs)
        return self.args.compile_with_flavor(sql, flavor, *initial)

    def set_flavor(self, flavor: Flavor) -> Flavor:
        """Set the flavor and return the previous one."""
        old = self.args.flavor
        self.args.flavor = flavor
        return old

    def __str__(self) -> str:
        return self.build()[0]


def new_delete_builder(flavor: Flavor | None = None) -> DeleteBuilder:
    """Create a DELETE builder for ``flavor`` or the default flavor."""
    builder = DeleteBuilder()
    builder.set_flavor(get_default_flavor() if flavor is None else flavor)
    return builder