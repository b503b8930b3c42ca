"""The result body returned for an HTTP request."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class Result:
    """The outcome of handling a request: error number, message and data."""

    errno: int = 0
    errmsg: str = ""
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form; ``data`` is left out when it is None."""
        body: dict[str, Any] = {"errno": self.errno, "errmsg": self.errmsg}
        if self.data is not None:
            body["data"] = self.data
        return body