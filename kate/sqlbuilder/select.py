"""Builder for SELECT statements."""

from __future__ import annotations

from enum import Enum
from typing import Any

from kate.sqlbuilder.args import Args
from kate.sqlbuilder.cond import Cond
from kate.sqlbuilder.flavor import Flavor, get_default_flavor
from kate.sqlbuilder.modifiers import escape, escape_all


class JoinOption(str, Enum):
    """Options placed before JOIN."""

    LEFT_JOIN = "LEFT"
    LEFT_OUTER_JOIN = "LEFT OUTER"
    RIGHT_JOIN = "RIGHT"
    RIGHT_OUTER_JOIN = "RIGHT OUTER"
    FULL_JOIN = "FULL"
    FULL_OUTER_JOIN = "FULL OUTER"


class SelectBuilder(Cond):
    """Builds a SELECT statement."""

    def __init__(self) -> None:
        super().__init__(Args())
        self._distinct = False
        self._for_update = False
        self._tables: list[str] = []
        self._select_cols: list[str] = []
        self._joins: list[tuple[str, str, tuple[str, ...]]] = []
        self._where_exprs: list[str] = []
        self._having_exprs: list[str] = []
        self._group_by_cols: list[str] = []
        self._order_by_cols: list[str] = []
        self._order = ""
        self._limit = -1
        self._offset = -1

    def distinct(self) -> SelectBuilder:
        """Mark the SELECT as DISTINCT."""
        self._distinct = True
        return self

    def select(self, *cols: str) -> SelectBuilder:
        """Set the selected columns."""
        self._select_cols = escape_all(*cols)
        return self

    def from_(self, *tables: str) -> SelectBuilder:
        """Set the table names."""
        self._tables = list(tables)
        return self

    def join(self, table: str, *on_exprs: str) -> SelectBuilder:
        """Add ``JOIN table ON expr AND ...``."""
        return self.join_with_option("", table, *on_exprs)

    def join_with_option(
        self, option: JoinOption | str | None, table: str, *on_exprs: str
    ) -> SelectBuilder:
        """Add ``option JOIN table ON expr AND ...``."""
        text = option.value if isinstance(option, JoinOption) else (option or "")
        self._joins.append((text, table, on_exprs))
        return self

    def where(self, *exprs: str) -> SelectBuilder:
        """Add expressions joined with AND to the WHERE clause."""
        self._where_exprs.extend(exprs)
        return self

    def having(self, *exprs: str) -> SelectBuilder:
        """Add expressions joined with AND to the HAVING clause."""
        self._having_exprs.extend(exprs)
        return self

    def group_by(self, *cols: str) -> SelectBuilder:
        """Set the GROUP BY columns."""
        self._group_by_cols = escape_all(*cols)
        return self

    def order_by(self, *cols: str) -> SelectBuilder:
        """Set the ORDER BY columns."""
        self._order_by_cols = escape_all(*cols)
        return self

    def asc(self) -> SelectBuilder:
        """Order ascending."""
        self._order = "ASC"
        return self

    def desc(self) -> SelectBuilder:
        """Order descending."""
        self._order = "DESC"
        return self

    def limit(self, limit: int) -> SelectBuilder:
        """Set the LIMIT; a negative value disables it."""
        self._limit = limit
        return self

    def offset(self, offset: int) -> SelectBuilder:
        """Set the OFFSET, used only together with LIMIT."""
        self._offset = offset
        return self

    def for_update(self) -> SelectBuilder:
        """Append FOR UPDATE."""
        self._for_update = True
        return self

    def as_(self, name: str, alias: str) -> str:
        """Return ``name AS alias``."""
        return f"{name} AS {escape(alias)}"

    def builder_as(self, builder: Any, alias: str) -> str:
        """Return ``(nested SQL) AS alias`` for another builder."""
        return f"({self.var(builder)}) AS {escape(alias)}"

    def build(self) -> tuple[str, list[Any]]:
        """Return the compiled statement and its arguments."""
        return self.build_with_flavor(self.args.flavor)

    def build_with_flavor(self, flavor: Flavor, *initial: Any) -> tuple[str, list[Any]]:
        """Compile the statement for ``flavor`` with initial arguments."""
        parts = ["SELECT "]
        if self._distinct:
            parts.append("DISTINCT ")
        parts.append(", ".join(self._select_cols))
        parts.append(" FROM ")
        parts.append(", ".join(self._tables))

        for option, table, exprs in self._joins:
            if option:
                parts.append(f" {option}")
            parts.append(f" JOIN {table}")
            if exprs:
                parts.append(" ON " + " AND ".join(exprs))

        if self._where_exprs:
            parts.append(" WHERE " + " AND ".join(self._where_exprs))

        if self._group_by_cols:
            parts.append(" GROUP BY " + ", ".join(self._group_by_cols))
            if self._having_exprs:
                parts.append(" HAVING " + " AND ".join(self._having_exprs))

        if self._order_by_cols:
            parts.append(" ORDER BY " + ", ".join(self._order_by_cols))
            if self._order:
                parts.append(f" {self._order}")

        if self._limit >= 0:
            parts.append(f" LIMIT {self._limit}")
            if self._offset >= 0:
                parts.append(f" OFFSET {self._offset}")

        if self._for_update:
            parts.append(" FOR UPDATE")

        return self.args.compile_with_flavor("".join(parts), flavor, *initial)

    def set_flavor(self, flavor: Flavor) -> Flavor:
        """Set the flavor and return the previous one."""
        old = self.args.flavor
        self.args.flavor = flavor
        return old

    def __str__(self) -> str:
        return self.build()[0]


def new_select_builder(flavor: Flavor | None = None) -> SelectBuilder:
    """Create a SELECT builder for ``flavor`` or the default flavor."""
    builder = SelectBuilder()
    builder.set_flavor(get_default_flavor() if flavor is None else flavor)
    return builder