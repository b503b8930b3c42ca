"""A flexible tool to build SQL strings and their associated arguments.

This module holds the argument markers and helpers shared by all builders.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def escape(ident: str) -> str:
    """Replace ``$`` with ``$$`` in ``ident``."""
    return ident.replace("$", "$$")


def escape_all(*idents: str) -> list[str]:
    """Escape every identifier in ``idents``."""
    return [escape(ident) for ident in idents]


def _flatten_into(value: Any, out: list[Any]) -> None:
    if isinstance(value, (list, tuple)):
        for item in value:
            _flatten_into(item, out)
    else:
        out.append(value)


def flatten(value: Any) -> list[Any]:
    """Recursively extract the items of nested lists and tuples.

    A value that is not a list or tuple comes back as a one-item list.
    """
    out: list[Any] = []
    _flatten_into(value, out)
    return out


@dataclass(frozen=True)
class RawArg:
    """An expression written verbatim into the SQL, never added to args."""

    expr: str


@dataclass(frozen=True)
class ListArg:
    """A list of values compiled to comma separated placeholders."""

    args: tuple[Any, ...]


@dataclass(frozen=True)
class NamedArg:
    """A named argument referenced in a format as ``${name}``."""

    name: str
    arg: Any


@dataclass(frozen=True)
class SqlNamedArg:
    """A driver-level named parameter, compiled to ``@name``."""

    name: str
    value: Any


def raw(expr: str) -> RawArg:
    """Mark ``expr`` as a raw value which is not added to args."""
    return RawArg(expr)


def as_list(arg: Any) -> ListArg:
    """Mark ``arg`` as a list of values; ``[1, 2, 3]`` compiles to ``?, ?, ?``."""
    return ListArg(tuple(flatten(arg)))


def named(name: str, arg: Any) -> NamedArg:
    """Create a named argument usable with ``${name}``."""
    return NamedArg(name, arg)


def sql_named(name: str, value: Any) -> SqlNamedArg:
    """Create a driver-level named parameter."""
    return SqlNamedArg(name, value)