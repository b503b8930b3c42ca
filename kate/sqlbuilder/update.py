"""Builder for UPDATE statements."""

from __future__ import annotations

from typing import Any

from kate.sqlbuilder.args import Args
from kate.sqlbuilder.cond import Cond
from kate.sqlbuilder.flavor import Flavor, get_default_flavor
from kate.sqlbuilder.modifiers import escape


class UpdateBuilder(Cond):
    """Builds an UPDATE statement."""

    def __init__(self) -> None:
        super().__init__(Args())
        self._table = ""
        self._assignments: list[str] = []
        self._where_exprs: list[str] = []

    def update(self, table: str) -> UpdateBuilder:
        """Set the table name."""
        self._table = escape(table)
        return self

    def set(self, *assignments: str) -> UpdateBuilder:
        """Replace the assignments of the SET clause."""
        self._assignments = list(assignments)
        return self

    def where(self, *exprs: str) -> UpdateBuilder:
        """Add expressions joined with AND to the WHERE clause."""
        self._where_exprs.extend(exprs)
        return self

    def assign(self, field: str, value: Any) -> str:
        """``field = value``."""
        return f"{escape(field)} = {self.args.add(value)}"

    def incr(self, field: str) -> str:
        """``field = field + 1``."""
        f = escape(field)
        return f"{f} = {f} + 1"

    def decr(self, field: str) -> str:
        """``field = field - 1``."""
        f = escape(field)
        return f"{f} = {f} - 1"

    def _arith(self, field: str, op: str, value: Any) -> str:
        f = escape(field)
        return f"{f} = {f} {op} {self.args.add(value)}"

    def add(self, field: str, value: Any) -> str:
        """``field = field + value``."""
        return self._arith(field, "+", value)

    def sub(self, field: str, value: Any) -> str:
        """``field = field - value``."""
        return self._arith(field, "-", value)

    def mul(self, field: str, value: Any) -> str:
        """``field = field * value``."""
        return self._arith(field, "*", value)

    def div(self, field: str, value: Any) -> str:
        """``field = field / value``."""
        return self._arith(field, "/", value)

    def build(self) -> tuple[str, list[Any]]:
        """Return the compiled statement and its arguments."""
        return self.build_with_flavor(self.args.flavor)

    def build_with_flavor(self, flavor: Flavor, *initial: Any) -> tuple[str, list[Any]]:
        """Compile the statement for ``flavor`` with initial arguments."""
        sql = f"UPDATE {self._table} SET {', '.join(self._assignments)}"
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


def new_update_builder(flavor: Flavor | None = None) -> UpdateBuilder:
    """Create an UPDATE builder for ``flavor`` or the default flavor."""
    builder = UpdateBuilder()
    builder.set_flavor(get_default_flavor() if flavor is None else flavor)
    return builder