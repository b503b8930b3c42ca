"""String conversion helpers and identifier quoting for the ORM."""

from __future__ import annotations

import math
import re
import struct
from decimal import Decimal
from typing import Any

_CLEARED = "\x1e"
_SIGNED = re.compile(r"[+-]?[0-9]+", re.ASCII)
_UNSIGNED = re.compile(r"[0-9]+", re.ASCII)
_INF_WORDS = {"inf", "+inf", "-inf", "infinity", "+infinity", "-infinity"}
_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}
_INT_BITS = (8, 16, 32, 64)
_FLOAT_BITS = (32, 64)


def _wrap_signed64(text: str) -> int:
    """Keep the low 64 bits of the magnitude, then apply the sign, as int64."""
    negative = text.startswith("-")
    magnitude = abs(int(text)) % (1 << 64)
    value = magnitude - (1 << 64) if magnitude >= (1 << 63) else magnitude
    if negative:
        value = -value
    if value >= (1 << 63):
        value -= 1 << 64
    return value


class StrTo:
    """A string that can be converted to other scalar types.

    A cleared value is marked by the record separator character and reads
    back as the empty string.
    """

    def __init__(self, value: str = "") -> None:
        self._value = value

    def set(self, value: str) -> None:
        """Store ``value``; an empty string clears the value."""
        if value != "":
            self._value = value
        else:
            self.clear()

    def clear(self) -> None:
        """Mark the value as absent."""
        self._value = _CLEARED

    def exist(self) -> bool:
        """Return whether a value is present."""
        return self._value != _CLEARED

    def __str__(self) -> str:
        return self._value if self.exist() else ""

    def __repr__(self) -> str:
        return f"StrTo({str(self)!r})"

    def to_bool(self) -> bool:
        """Parse the value as a boolean."""
        text = str(self)
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise ValueError(f"invalid boolean syntax: {text!r}")

    def to_float(self, bits: int = 64) -> float:
        """Parse the value as a float of ``bits`` precision (32 or 64)."""
        if bits not in _FLOAT_BITS:
            raise ValueError(f"invalid bit size {bits}")
        text = str(self)
        if not text or text != text.strip() or "_" in text:
            raise ValueError(f"invalid float syntax: {text!r}")
        try:
            if "0x" in text.lower():
                value = float.fromhex(text)
            else:
                value = float(text)
        except ValueError as exc:
            raise ValueError(f"invalid float syntax: {text!r}") from exc
        if math.isinf(value) and text.lower() not in _INF_WORDS:
            raise ValueError(f"value out of range: {text!r}")
        if bits == 32:
            try:
                (value,) = struct.unpack("f", struct.pack("f", value))
            except OverflowError as exc:
                raise ValueError(f"value out of range: {text!r}") from exc
        return value

    def to_int(self, bits: int = 64) -> int:
        """Parse the value as a signed decimal integer of ``bits`` width.

        At 64 bits a value that does not fit wraps around instead of failing.
        """
        if bits not in _INT_BITS:
            raise ValueError(f"invalid bit size {bits}")
        text = str(self)
        if not _SIGNED.fullmatch(text):
            raise ValueError(f"invalid integer syntax: {text!r}")
        value = int(text)
        if -(1 << (bits - 1)) <= value < (1 << (bits - 1)):
            return value
        if bits == 64:
            return _wrap_signed64(text)
        raise ValueError(f"value out of range: {text!r}")

    def to_uint(self, bits: int = 64) -> int:
        """Parse the value as an unsigned decimal integer of ``bits`` width.

        At 64 bits a signed or oversized decimal is reduced to the low 64
        bits of its magnitude instead of failing.
        """
        if bits not in _INT_BITS:
            raise ValueError(f"invalid bit size {bits}")
        text = str(self)
        if _UNSIGNED.fullmatch(text):
            value = int(text)
            if value < (1 << bits):
                return value
            if bits == 64:
                return value % (1 << 64)
            raise ValueError(f"value out of range: {text!r}")
        if bits == 64 and _SIGNED.fullmatch(text):
            return abs(int(text)) % (1 << 64)
        raise ValueError(f"invalid integer syntax: {text!r}")


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return format(Decimal(repr(value)).normalize(), "f")


def _sprint(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_sprint(v) for v in value) + "]"
    return str(value)


def to_str(value: Any, *args: int) -> str:
    """Convert ``value`` to its string form.

    Floats use the shortest decimal form without exponent and integers base
    10; extra arguments are accepted and have no effect.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return _sprint(value)


def to_int64(value: Any) -> int:
    """Return an integer value unchanged; anything else is an error."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise TypeError(f"ToInt64 need numeric not `{type(value).__name__}`")


def snake_string(s: str) -> str:
    """Convert ``XxYy`` to ``xx_yy``."""
    out: list[str] = []
    seen_word = False
    for i, ch in enumerate(s):
        if i > 0 and "A" <= ch <= "Z" and seen_word:
            out.append("_")
        if ch != "_":
            seen_word = True
        out.append(ch)
    return "".join(out).lower()


def quote(field: str) -> str:
    """Quote a column name with back quotes."""
    return f"`{field}`"


def quote_all(fields: list[str]) -> list[str]:
    """Quote every column name in ``fields``."""
    return [quote(field) for field in fields]