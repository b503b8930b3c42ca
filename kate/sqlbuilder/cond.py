"""Helpers that build condition expressions and register their values."""

from __future__ import annotations

from typing import Any

from kate.sqlbuilder.args import Args
from kate.sqlbuilder.modifiers import escape


class Cond:
    """Builds condition expressions whose values are stored in ``args``."""

    def __init__(self, args: Args) -> None:
        self.args = args

    def _binary(self, field: str, op: str, value: Any) -> str:
        return f"{escape(field)} {op} {self.args.add(value)}"

    def equal(self, field: str, value: Any) -> str:
        """``field = value``."""
        return self._binary(field, "=", value)

    def e(self, field: str, value: Any) -> str:
        """Alias of ``equal``."""
        return self.equal(field, value)

    def not_equal(self, field: str, value: Any) -> str:
        """``field <> value``."""
        return self._binary(field, "<>", value)

    def ne(self, field: str, value: Any) -> str:
        """Alias of ``not_equal``."""
        return self.not_equal(field, value)

    def greater_than(self, field: str, value: Any) -> str:
        """``field > value``."""
        return self._binary(field, ">", value)

    def g(self, field: str, value: Any) -> str:
        """Alias of ``greater_than``."""
        return self.greater_than(field, value)

    def greater_equal_than(self, field: str, value: Any) -> str:
        """``field >= value``."""
        return self._binary(field, ">=", value)

    def ge(self, field: str, value: Any) -> str:
        """Alias of ``greater_equal_than``."""
        return self.greater_equal_than(field, value)

    def less_than(self, field: str, value: Any) -> str:
        """``field < value``."""
        return self._binary(field, "<", value)

    def l(self, field: str, value: Any) -> str:  # noqa: E743
        """Alias of ``less_than``."""
        return self.less_than(field, value)

    def less_equal_than(self, field: str, value: Any) -> str:
        """``field <= value``."""
        return self._binary(field, "<=", value)

    def le(self, field: str, value: Any) -> str:
        """Alias of ``less_equal_than``."""
        return self.less_equal_than(field, value)

    def in_(self, field: str, *values: Any) -> str:
        """``field IN (value, ...)``."""
        placeholders = ", ".join(self.args.add(v) for v in values)
        return f"{escape(field)} IN ({placeholders})"

    def not_in(self, field: str, *values: Any) -> str:
        """``field NOT IN (value, ...)``."""
        placeholders = ", ".join(self.args.add(v) for v in values)
        return f"{escape(field)} NOT IN ({placeholders})"

    def like(self, field: str, value: Any) -> str:
        """``field LIKE value``."""
        return self._binary(field, "LIKE", value)

    def like_binary(self, field: str, value: Any) -> str:
        """``field LIKE BINARY value``."""
        return self._binary(field, "LIKE BINARY", value)

    def not_like(self, field: str, value: Any) -> str:
        """``field NOT LIKE value``."""
        return self._binary(field, "NOT LIKE", value)

    def not_like_binary(self, field: str, value: Any) -> str:
        """``field NOT LIKE BINARY value``."""
        return self._binary(field, "NOT LIKE BINARY", value)

    def is_null(self, field: str) -> str:
        """``field IS NULL``."""
        return f"{escape(field)} IS NULL"

    def is_not_null(self, field: str) -> str:
        """``field IS NOT NULL``."""
        return f"{escape(field)} IS NOT NULL"

    def between(self, field: str, lower: Any, upper: Any) -> str:
        """``field BETWEEN lower AND upper``."""
        return f"{escape(field)} BETWEEN {self.args.add(lower)} AND {self.args.add(upper)}"

    def not_between(self, field: str, lower: Any, upper: Any) -> str:
        """``field NOT BETWEEN lower AND upper``."""
        return (
            f"{escape(field)} NOT BETWEEN {self.args.add(lower)} AND {self.args.add(upper)}"
        )

    def or_(self, *exprs: str) -> str:
        """``(expr1 OR expr2 ...)``."""
        return f"({' OR '.join(exprs)})"

    def and_(self, *exprs: str) -> str:
        """``(expr1 AND expr2 ...)``."""
        return f"({' AND '.join(exprs)})"

    def var(self, value: Any) -> str:
        """Return a placeholder for ``value``."""
        return self.args.add(value)