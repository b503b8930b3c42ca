"""Build statements from the fields of a dataclass.

Field metadata controls the mapping: ``db`` gives the column name (``"-"``
skips the field), ``fieldtag`` lists tags (comma separated or a sequence) and
``fieldopt`` may hold ``withquote`` to quote the column.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Sequence

from kate.sqlbuilder.delete import DeleteBuilder, new_delete_builder
from kate.sqlbuilder.flavor import Flavor, get_default_flavor
from kate.sqlbuilder.insert import InsertBuilder, new_insert_builder
from kate.sqlbuilder.modifiers import escape_all
from kate.sqlbuilder.select import SelectBuilder, new_select_builder
from kate.sqlbuilder.update import UpdateBuilder, new_update_builder

DB_TAG = "db"
FIELD_TAG = "fieldtag"
FIELD_OPT = "fieldopt"

_FIELD_OPT_WITH_QUOTE = "withquote"


def _split(value: Any) -> list[str]:
    if not value:
        return []
    if isinstance(value, str):
        return value.split(",")
    return list(value)


class Struct:
    """Column mapping of a dataclass type, used to create builders."""

    def __init__(self, struct_type: Any) -> None:
        cls = struct_type if isinstance(struct_type, type) else type(struct_type)
        self.flavor = get_default_flavor()
        self._struct_type: type | None = None
        self._field_alias: dict[str, str] = {}
        self._tagged_fields: dict[str, list[str]] | None = None
        self._quoted_fields: set[str] = set()

        if not dataclasses.is_dataclass(cls):
            return

        self._struct_type = cls
        self._tagged_fields = {}
        self._parse(cls)

    def _parse(self, cls: type) -> None:
        assert self._tagged_fields is not None
        for field in dataclasses.fields(cls):
            meta = field.metadata
            dbtag = meta.get(DB_TAG, "")
            if dbtag == "-":
                continue
            alias = dbtag or field.name
            self._field_alias[alias] = field.name

            for tag in _split(meta.get(FIELD_TAG, "")):
                if tag:
                    self._tagged_fields.setdefault(tag, []).append(alias)
            self._tagged_fields.setdefault("", []).append(alias)

            if _FIELD_OPT_WITH_QUOTE in _split(meta.get(FIELD_OPT, "")):
                self._quoted_fields.add(alias)

    def for_(self, flavor: Flavor) -> Struct:
        """Set the default flavor and return self."""
        self.flavor = flavor
        return self

    def select_from(self, table: str) -> SelectBuilder:
        """SELECT all mapped columns from ``table``."""
        return self.select_from_for_tag(table, "")

    def select_from_for_tag(self, table: str, tag: str) -> SelectBuilder:
        """SELECT the columns tagged with ``tag``, or ``*`` if the tag is unknown."""
        sb = new_select_builder(self.flavor)
        sb.from_(table)
        if self._tagged_fields is None:
            return sb
        fields = self._tagged_fields.get(tag)
        if fields is None:
            sb.select("*")
        else:
            sb.select(*escape_all(*self._quote_fields(fields)))
        return sb

    def update(self, table: str, value: Any) -> UpdateBuilder:
        """UPDATE ``table`` assigning all mapped columns from ``value``."""
        return self.update_for_tag(table, "", value)

    def update_for_tag(self, table: str, tag: str, value: Any) -> UpdateBuilder:
        """UPDATE ``table`` assigning the columns tagged with ``tag``.

        Returns a builder without assignments when the tag is unknown or
        ``value`` is not of the mapped type.
        """
        ub = new_update_builder(self.flavor)
        ub.update(table)
        if self._tagged_fields is None:
            return ub
        fields = self._tagged_fields.get(tag)
        if fields is None or type(value) is not self._struct_type:
            return ub
        quoted = self._quote_fields(fields)
        ub.set(
            *(
                ub.assign(column, getattr(value, self._field_alias[alias]))
                for alias, column in zip(fields, quoted)
            )
        )
        return ub

    def insert_into(self, table: str, *values: Any) -> InsertBuilder:
        """INSERT all mapped columns of ``values`` into ``table``."""
        return self.insert_into_for_tag(table, "", *values)

    def insert_into_for_tag(self, table: str, tag: str, *values: Any) -> InsertBuilder:
        """INSERT the columns tagged with ``tag``; values of another type are skipped."""
        ib = new_insert_builder(self.flavor)
        ib.insert_into(table)
        if self._tagged_fields is None:
            return ib
        fields = self._tagged_fields.get(tag)
        if fields is None:
            return ib
        items = [item for item in values if type(item) is self._struct_type]
        if not items:
            return ib
        ib.cols(*self._quote_fields(fields))
        for item in items:
            ib.values(*(getattr(item, self._field_alias[alias]) for alias in fields))
        return ib

    def delete_from(self, table: str) -> DeleteBuilder:
        """DELETE from ``table``."""
        return new_delete_builder(self.flavor).delete_from(table)

    def scan(self, value: Any, row: Sequence[Any]) -> Any:
        """Store ``row`` into all mapped fields of ``value`` and return it."""
        return self.scan_for_tag("", value, row)

    def scan_for_tag(self, tag: str, value: Any, row: Sequence[Any]) -> Any:
        """Store ``row`` into the fields tagged with ``tag`` and return ``value``."""
        if self._tagged_fields is None or tag not in self._tagged_fields:
            raise ValueError(f"unknown tag {tag!r}")
        return self.scan_with_cols(self._tagged_fields[tag], value, row)

    def scan_with_cols(self, cols: Sequence[str], value: Any, row: Sequence[Any]) -> Any:
        """Store ``row`` into the fields mapped to ``cols`` and return ``value``."""
        if self._struct_type is None or type(value) is not self._struct_type:
            raise TypeError(f"cannot scan into {type(value).__name__}")
        unknown = [c for c in cols if c not in self._field_alias]
        if unknown:
            raise ValueError(f"unknown columns: {', '.join(unknown)}")
        row = list(row)
        if len(row) != len(cols):
            raise ValueError(f"expected {len(cols)} values, got {len(row)}")
        for column, data in zip(cols, row):
            setattr(value, self._field_alias[column], data)
        return value

    def _quote_fields(self, fields: list[str]) -> list[str]:
        if not self._quoted_fields.intersection(fields):
            return list(fields)
        return [
            self.flavor.quote(f) if f in self._quoted_fields else f for f in fields
        ]