"""General builders created from format strings."""

from __future__ import annotations

import re
from typing import Any, Protocol

from kate.sqlbuilder.args import Args
from kate.sqlbuilder.flavor import Flavor, get_default_flavor
from kate.sqlbuilder.modifiers import escape, named

_VERB = re.compile(r"%([vs%])")


class Builder(Protocol):
    """Anything that can be compiled to SQL and arguments."""

    def build(self) -> tuple[str, list[Any]]:
        ...

    def build_with_flavor(self, flavor: Flavor, *initial: Any) -> tuple[str, list[Any]]:
        ...


class CompiledBuilder:
    """A builder holding a format and the arguments it refers to."""

    def __init__(self, args: Args, fmt: str) -> None:
        self.args = args
        self.format = fmt

    def build(self) -> tuple[str, list[Any]]:
        """Compile with the builder's own flavor."""
        return self.args.compile(self.format)

    def build_with_flavor(self, flavor: Flavor, *initial: Any) -> tuple[str, list[Any]]:
        """Compile for ``flavor`` with initial arguments."""
        return self.args.compile_with_flavor(self.format, flavor, *initial)


class FlavoredBuilder:
    """Wraps a builder so that ``build`` uses a fixed flavor."""

    def __init__(self, builder: Builder, flavor: Flavor) -> None:
        self.builder = builder
        self.flavor = flavor

    def build(self) -> tuple[str, list[Any]]:
        """Compile with the wrapped flavor."""
        return self.builder.build_with_flavor(self.flavor)

    def build_with_flavor(self, flavor: Flavor, *initial: Any) -> tuple[str, list[Any]]:
        """Compile for an explicit ``flavor``."""
        return self.builder.build_with_flavor(flavor, *initial)


def with_flavor(builder: Builder, flavor: Flavor) -> FlavoredBuilder:
    """Return a builder based on ``builder`` whose default flavor is ``flavor``."""
    return FlavoredBuilder(builder, flavor)


def buildf(fmt: str, *args: Any) -> CompiledBuilder:
    """Create a builder from a format using ``%v`` or ``%s`` for arguments."""
    holder = Args(get_default_flavor())
    placeholders = iter([holder.add(arg) for arg in args])

    def replace(match: re.Match[str]) -> str:
        if match.group(1) == "%":
            return "%"
        return next(placeholders, "%!v(MISSING)")

    text = _VERB.sub(replace, escape(fmt))
    extra = list(placeholders)
    if extra:
        text += "%!(EXTRA " + ", ".join(f"string={p}" for p in extra) + ")"
    return CompiledBuilder(holder, text)


def build(fmt: str, *args: Any) -> CompiledBuilder:
    """Create a builder from a format using the ``$`` argument syntax."""
    holder = Args(get_default_flavor())
    for arg in args:
        holder.add(arg)
    return CompiledBuilder(holder, fmt)


def build_named(fmt: str, named_args: dict[str, Any]) -> CompiledBuilder:
    """Create a builder whose format refers to values as ``${key}``."""
    holder = Args(get_default_flavor())
    holder.only_named = True
    for name, value in named_args.items():
        holder.add(named(name, value))
    return CompiledBuilder(holder, fmt)