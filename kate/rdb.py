"""Process-wide Redis client, standalone or cluster, built from a config."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import redis
import redis.cluster
from redis.backoff import ExponentialBackoff
from redis.retry import Retry

_DEFAULT_PORT = 6379
_DEFAULT_MAX_RETRIES = 3
_DEFAULT_MIN_BACKOFF = 0.008
_DEFAULT_MAX_BACKOFF = 0.512
_DEFAULT_BLOCKING_POOL_SIZE = 50


class RouteMode(str, Enum):
    """How read-only commands are routed in cluster mode."""

    MASTER_ONLY = "master_only"
    MASTER_SLAVE_RANDOM = "master_slave_random"
    MASTER_SLAVE_LATENCY = "master_slave_latency"


@dataclass
class Config:
    """Redis connection settings; durations are in seconds.

    Zero or ``None`` leaves a setting at the client library's default.
    """

    addrs: list[str] = field(default_factory=list)
    db: int = 0
    password: str = ""
    cluster_enabled: bool = False
    read_only: bool = False
    route_mode: str = ""
    max_redirects: int = 0
    max_retries: int = 0
    min_retry_backoff: float = 0.0
    max_retry_backoff: float = 0.0
    connect_timeout: float | None = None
    read_timeout: float | None = None
    write_timeout: float | None = None
    pool_size: int = 0
    pool_timeout: float | None = None
    min_idle_conns: int = 0
    max_idle_conns: int = 0
    max_active_conns: int = 0
    conn_max_idle_time: float | None = None
    conn_max_lifetime: float | None = None


_client: Any = None


def _split_addr(addr: str) -> tuple[str, int]:
    host, sep, port = addr.rpartition(":")
    if not sep:
        return addr, _DEFAULT_PORT
    return host or "localhost", int(port)


def _retry(conf: Config) -> Retry:
    if conf.max_retries == 0:
        retries = _DEFAULT_MAX_RETRIES
    else:
        retries = max(conf.max_retries, 0)
    backoff = ExponentialBackoff(
        cap=conf.max_retry_backoff or _DEFAULT_MAX_BACKOFF,
        base=conf.min_retry_backoff or _DEFAULT_MIN_BACKOFF,
    )
    return Retry(backoff, retries)


def _socket_timeout(conf: Config) -> float | None:
    timeouts = [t for t in (conf.read_timeout, conf.write_timeout) if t]
    return max(timeouts) if timeouts else None


def new_client(conf: Config) -> redis.Redis:
    """Create a standalone client for the first address in ``conf``."""
    if not conf.addrs:
        raise ValueError("redis config has no addresses")
    host, port = _split_addr(conf.addrs[0])
    kwargs: dict[str, Any] = {
        "host": host,
        "port": port,
        "db": conf.db,
        "password": conf.password or None,
        "socket_timeout": _socket_timeout(conf),
        "socket_connect_timeout": conf.connect_timeout or None,
        "retry": _retry(conf),
        "retry_on_error": [redis.exceptions.ConnectionError, redis.exceptions.TimeoutError],
    }
    if conf.pool_timeout:
        pool = redis.BlockingConnectionPool(
            max_connections=conf.pool_size or _DEFAULT_BLOCKING_POOL_SIZE,
            timeout=conf.pool_timeout,
            **kwargs,
        )
        return redis.Redis(connection_pool=pool)
    return redis.Redis(max_connections=conf.pool_size or None, **kwargs)


def new_cluster_client(conf: Config) -> Any:
    """Create a cluster client for all addresses in ``conf``."""
    if not conf.addrs:
        raise ValueError("redis config has no addresses")
    nodes = [redis.cluster.ClusterNode(*_split_addr(addr)) for addr in conf.addrs]
    read_from_replicas = conf.route_mode in (
        RouteMode.MASTER_SLAVE_RANDOM.value,
        RouteMode.MASTER_SLAVE_LATENCY.value,
    )
    kwargs: dict[str, Any] = {
        "startup_nodes": nodes,
        "password": conf.password or None,
        "socket_timeout": _socket_timeout(conf),
        "socket_connect_timeout": conf.connect_timeout or None,
        "read_from_replicas": read_from_replicas,
        "retry": _retry(conf),
    }
    if conf.pool_size:
        kwargs["max_connections"] = conf.pool_size
    if conf.max_redirects > 0:
        kwargs["cluster_error_retry_attempts"] = conf.max_redirects
    return redis.cluster.RedisCluster(**kwargs)


def init(conf: Config) -> None:
    """Create the process-wide client from ``conf``."""
    global _client
    _client = new_cluster_client(conf) if conf.cluster_enabled else new_client(conf)


def uninit() -> None:
    """Close and forget the process-wide client."""
    global _client
    if _client is not None:
        try:
            _client.close()
        finally:
            _client = None


def get() -> Any:
    """Return the process-wide client."""
    if _client is None:
        raise RuntimeError("redis client is not initialized")
    return _client