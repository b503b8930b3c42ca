"""SQL flavors controlling placeholder style and identifier quoting."""

from __future__ import annotations

from enum import IntEnum


class Flavor(IntEnum):
    """The dialect a compiled SQL statement is written for."""

    INVALID = 0
    MYSQL = 1
    POSTGRESQL = 2

    def __str__(self) -> str:
        if self is Flavor.MYSQL:
            return "MySQL"
        if self is Flavor.POSTGRESQL:
            return "PostgreSQL"
        return "<invalid>"

    def quote(self, name: str) -> str:
        """Quote ``name`` so it can safely be used as a table or column name."""
        if self is Flavor.MYSQL:
            return f"`{name}`"
        if self is Flavor.POSTGRESQL:
            return f'"{name}"'
        return name


_default_flavor = Flavor.MYSQL


def get_default_flavor() -> Flavor:
    """Return the flavor used by builders that have none of their own."""
    return _default_flavor


def set_default_flavor(flavor: Flavor) -> Flavor:
    """Set the default flavor and return the previous one."""
    global _default_flavor
    old = _default_flavor
    _default_flavor = Flavor(flavor)
    return old