"""Sources of Redis clients for distributed locks."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from kate import rdb


class Pool(ABC):
    """Hands out a Redis client for one lock node."""

    @abstractmethod
    def get(self) -> Any:
        """Return a Redis client."""


class DefaultPool(Pool):
    """Uses the process-wide client of :mod:`kate.rdb`."""

    def get(self) -> Any:
        """Return the process-wide Redis client."""
        return rdb.get()