"""Argument storage and compilation of builder formats into SQL."""

from __future__ import annotations

import re
from typing import Any

from kate.sqlbuilder.flavor import Flavor, get_default_flavor
from kate.sqlbuilder.modifiers import ListArg, NamedArg, RawArg, SqlNamedArg

_FORMAT_PATTERN = re.compile(r"\$(?:(\$)|\{([^}]*)\}|([0-9]+)|(\?))?")


class Args:
    """Stores the arguments associated with a SQL format.

    The format syntax:

    * ``$?`` refers to successive arguments, like ``%v`` in a format string;
    * ``$0`` ... ``$n`` refer to the n-th argument; the next ``$?`` uses n+1;
    * ``${name}`` refers to a named argument created by ``named``;
    * ``$$`` is a literal ``$``.
    """

    def __init__(self, flavor: Flavor = Flavor.INVALID) -> None:
        self.flavor = flavor
        self.only_named = False
        self._args: list[Any] = []
        self._named_args: dict[str, int] = {}
        self._sql_named_args: dict[str, int] = {}

    def add(self, arg: Any) -> str:
        """Add ``arg`` and return its placeholder."""
        return f"${self._add(arg)}"

    def _add(self, arg: Any) -> int:
        idx = len(self._args)
        if isinstance(arg, SqlNamedArg):
            if arg.name in self._sql_named_args:
                arg = self._args[self._sql_named_args[arg.name]]
            else:
                self._sql_named_args[arg.name] = idx
        elif isinstance(arg, NamedArg):
            if arg.name in self._named_args:
                arg = self._args[self._named_args[arg.name]]
            else:
                idx = self._add(arg.arg)
                self._named_args[arg.name] = idx
                return idx
        self._args.append(arg)
        return idx

    def compile(self, fmt: str, *initial: Any) -> tuple[str, list[Any]]:
        """Compile ``fmt`` with this object's flavor."""
        return self.compile_with_flavor(fmt, self.flavor, *initial)

    def compile_with_flavor(
        self, fmt: str, flavor: Flavor, *initial: Any
    ) -> tuple[str, list[Any]]:
        """Compile ``fmt`` to SQL for ``flavor`` and return it with its values."""
        if flavor == Flavor.INVALID:
            flavor = get_default_flavor()

        parts: list[str] = []
        values = list(initial)
        offset = 0
        pos = 0

        for match in _FORMAT_PATTERN.finditer(fmt):
            parts.append(fmt[pos:match.start()])
            pos = match.end()
            dollar, name, digits, successive = match.groups()

            if dollar:
                parts.append("$")
            elif name is not None:
                pointer = self._named_args.get(name)
                if pointer is not None:
                    values, _ = self._compile_successive(parts, flavor, values, pointer)
            elif digits is not None:
                if self.only_named:
                    parts.append(digits)
                else:
                    values, offset = self._compile_successive(
                        parts, flavor, values, int(digits)
                    )
            elif successive:
                if self.only_named:
                    parts.append("?")
                else:
                    values, offset = self._compile_successive(
                        parts, flavor, values, offset
                    )

        parts.append(fmt[pos:])

        for index in sorted(self._sql_named_args.values()):
            values.append(self._args[index])

        return "".join(parts), values

    def _compile_successive(
        self, parts: list[str], flavor: Flavor, values: list[Any], offset: int
    ) -> tuple[list[Any], int]:
        if offset >= len(self._args):
            return values, offset
        values = self._compile_arg(parts, flavor, values, self._args[offset])
        return values, offset + 1

    def _compile_arg(
        self, parts: list[str], flavor: Flavor, values: list[Any], arg: Any
    ) -> list[Any]:
        build = getattr(arg, "build_with_flavor", None)
        if callable(build):
            sql, values = build(flavor, *values)
            parts.append(sql)
        elif isinstance(arg, SqlNamedArg):
            parts.append(f"@{arg.name}")
        elif isinstance(arg, RawArg):
            parts.append(arg.expr)
        elif isinstance(arg, ListArg):
            for position, item in enumerate(arg.args):
                if position:
                    parts.append(", ")
                values = self._compile_arg(parts, flavor, values, item)
        else:
            if flavor == Flavor.MYSQL:
                parts.append("?")
            elif flavor == Flavor.POSTGRESQL:
                parts.append(f"${len(values) + 1}")
            else:
                raise ValueError(
                    f"Args.compile_with_flavor: invalid flavor {flavor!s} ({int(flavor)})"
                )
            values = [*values, arg]
        return values