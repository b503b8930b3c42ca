"""Filters, ordering and pagination gathered from a request object."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

FILTER_TAG = "filter"


def _sprint(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_sprint(v) for v in value) + "]"
    if isinstance(value, dict):
        items = sorted(value.items(), key=lambda kv: str(kv[0]))
        return "map[" + " ".join(f"{_sprint(k)}:{_sprint(v)}" for k, v in items) + "]"
    return str(value)


@dataclass
class QueryParams:
    """Filters, ordering and pagination for a list query."""

    filters: dict[str, Any] = field(default_factory=dict)
    order_by: list[str] = field(default_factory=list)
    page: int = 0
    per_page: int = 0

    def set_filter(self, name: str, value: Any) -> None:
        """Add a filter condition."""
        self.filters[name] = value

    def set_order_by(self, order_by: list[str]) -> None:
        """Set the order by expressions."""
        self.order_by = list(order_by)

    def set_pagination(self, page: int, per_page: int) -> None:
        """Set the page number (from 1) and page size."""
        self.page = page
        self.per_page = per_page

    def offset(self) -> int:
        """Return the SQL offset."""
        return (self.page - 1) * self.per_page

    def limit(self) -> int:
        """Return the SQL limit."""
        return self.per_page

    def __str__(self) -> str:
        filters = ",".join(f"{k}={_sprint(v)}" for k, v in self.filters.items())
        orders = ",".join(self.order_by)
        return (
            f"Filters:[{filters}];OrderBy:[{orders}]"
            f";Page:{self.page};PerPage:{self.per_page}"
        )


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_str_list(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value)


_REQUIRED = {
    "page": ("int", _is_int),
    "per_page": ("int", _is_int),
    "sort": ("list[str]", _is_str_list),
}


def new_query_params_from_tag(obj: Any) -> QueryParams:
    """Build query params from a dataclass instance.

    The instance needs ``page``, ``per_page`` and ``sort`` fields. Every field
    whose metadata holds a ``filter`` name and whose value is not ``None``
    becomes a filter.
    """
    if isinstance(obj, type) or not dataclasses.is_dataclass(obj):
        raise TypeError(
            f"new_query_params_from_tag: only allow dataclass instances, "
            f"not `{type(obj).__name__}`"
        )

    names = {f.name for f in dataclasses.fields(obj)}
    for name, (type_name, check) in _REQUIRED.items():
        if name not in names or not check(getattr(obj, name)):
            raise TypeError(f"`{name}` field should be defined as `{type_name}`")

    params = QueryParams()

    sort = obj.sort
    if sort:
        params.set_order_by(list(sort))

    if obj.page and obj.per_page:
        params.set_pagination(obj.page, obj.per_page)

    for f in dataclasses.fields(obj):
        value = getattr(obj, f.name)
        if value is None:
            continue
        name = f.metadata.get(FILTER_TAG, "")
        if not name:
            continue
        params.set_filter(name, value)

    return params