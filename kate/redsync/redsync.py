"""Factory for distributed mutexes over several Redis pools."""

from __future__ import annotations

from typing import Sequence

from kate.redsync.mutex import Mutex
from kate.redsync.pool import DefaultPool, Pool


class Redsync:
    """Creates mutexes shared across a fixed set of Redis pools."""

    def __init__(self, pools: Sequence[Pool]) -> None:
        self.pools = list(pools)

    def new_mutex(
        self,
        name: str,
        expiry: float = 8.0,
        tries: int = 32,
        retry_delay: tuple[float, float] = (0.05, 0.5),
        drift_factor: float = 0.01,
        token: str = "",
    ) -> Mutex:
        """Return a mutex named ``name``; durations are in seconds."""
        delay_min, delay_max = retry_delay
        return Mutex(
            name,
            self.pools,
            expiry=expiry,
            tries=tries,
            delay_min=delay_min,
            delay_max=delay_max,
            drift_factor=drift_factor,
            token=token,
        )


_default_redsync = Redsync([DefaultPool()])


def new_mutex(
    name: str,
    expiry: float = 8.0,
    tries: int = 32,
    retry_delay: tuple[float, float] = (0.05, 0.5),
    drift_factor: float = 0.01,
    token: str = "",
) -> Mutex:
    """Return a mutex backed by the process-wide Redis client."""
    return _default_redsync.new_mutex(
        name,
        expiry=expiry,
        tries=tries,
        retry_delay=retry_delay,
        drift_factor=drift_factor,
        token=token,
    )