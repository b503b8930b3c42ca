"""A Redis-based distributed mutual exclusion lock (the Redlock algorithm)."""

from __future__ import annotations

import random
import secrets
import socket
import threading
import time
from typing import Any, Sequence

import redis

from kate.redsync.pool import Pool

DELETE_SCRIPT = """
	if redis.call("GET", KEYS[1]) == ARGV[1] then
		return redis.call("DEL", KEYS[1])
	else
		return 0
	end
"""

TOUCH_SCRIPT = """
	if redis.call("GET", KEYS[1]) == ARGV[1] then
		return redis.call("PEXPIRE", KEYS[1], ARGV[2])
	else
		local rv = redis.call("SET", KEYS[1], ARGV[1], "NX", "PX", ARGV[2])
		if type(rv) == "table" then
			return 1
		else
			return 0
		end
	end
"""


class LockFailedError(Exception):
    """The lock could not be acquired."""

    def __init__(self, message: str = "redsync: failed to acquire lock") -> None:
        super().__init__(message)


def _is_one(result: Any) -> bool:
    try:
        return int(result) == 1
    except (TypeError, ValueError):
        return False


class Mutex:
    """A lock held on a quorum of independent Redis nodes.

    Durations are in seconds. A mutex can also be used as a context manager.
    """

    def __init__(
        self,
        name: str,
        pools: Sequence[Pool],
        *,
        expiry: float = 8.0,
        tries: int = 32,
        delay_min: float = 0.05,
        delay_max: float = 0.5,
        drift_factor: float = 0.01,
        token: str = "",
    ) -> None:
        self.name = name
        self.pools = list(pools)
        self.expiry = expiry
        self.tries = tries
        self.delay_min = delay_min
        self.delay_max = delay_max
        self.drift_factor = drift_factor
        self.quorum = len(self.pools) // 2 + 1
        self._token = token
        self._until = 0.0
        self._guard = threading.Lock()

    @property
    def token(self) -> str:
        """The value stored under the lock key by this mutex."""
        return self._token

    def lock(self) -> None:
        """Acquire the lock, retrying; raise LockFailedError if it never succeeds."""
        with self._guard:
            if not self._token:
                self._token = self._gen_token()

            for _ in range(self.tries):
                start = time.monotonic()
                acquired = sum(1 for pool in self.pools if self._acquire(pool))
                now = time.monotonic()
                until = (
                    now
                    + self.expiry
                    - (now - start)
                    - self.expiry * self.drift_factor
                    + 0.002
                )
                if acquired >= self.quorum and time.monotonic() < until:
                    self._until = until
                    return
                for pool in self.pools:
                    self._release(pool)
                time.sleep(self._delay())

        raise LockFailedError()

    def unlock(self) -> bool:
        """Release the lock; return whether a quorum of nodes released it."""
        with self._guard:
            released = sum(1 for pool in self.pools if self._release(pool))
            return released >= self.quorum

    def extend(self) -> bool:
        """Reset the lock's expiry; on failure release it and return False."""
        with self._guard:
            touched = sum(1 for pool in self.pools if self._touch(pool))
            if touched >= self.quorum:
                return True
            for pool in self.pools:
                self._release(pool)
            return False

    def __enter__(self) -> Mutex:
        self.lock()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.unlock()

    @staticmethod
    def _gen_token() -> str:
        return f"{socket.gethostname()}_{secrets.token_hex(32)}"

    def _delay(self) -> float:
        return self.delay_min + random.random() * (self.delay_max - self.delay_min)

    def _expiry_ms(self) -> int:
        return int(self.expiry * 1000)

    def _acquire(self, pool: Pool) -> bool:
        try:
            result = pool.get().set(self.name, self._token, nx=True, px=self._expiry_ms())
        except redis.RedisError:
            return False
        return bool(result)

    def _release(self, pool: Pool) -> bool:
        try:
            result = pool.get().eval(DELETE_SCRIPT, 1, self.name, self._token)
        except redis.RedisError:
            return False
        return _is_one(result)

    def _touch(self, pool: Pool) -> bool:
        try:
            result = pool.get().eval(
                TOUCH_SCRIPT, 1, self.name, self._token, self._expiry_ms()
            )
        except redis.RedisError:
            return False
        return _is_one(result)