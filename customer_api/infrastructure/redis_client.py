"""Shared Redis client for the customer directory."""
import logging
from typing import Optional
from urllib.parse import urlsplit, urlunsplit
import redis
from redis.connection import ConnectionPool

from customer_api.config.settings import Config

SUPPORTED_SCHEMES = ("redis", "rediss", "unix")


class RedisClientFactory:
    """
    Process-wide Redis client over one connection pool.

    Each gunicorn worker builds its own client on first use and releases it
    through ``close()`` from the ``worker_exit`` hook.
    """

    _client: Optional[redis.Redis] = None

    @staticmethod
    def redact(url: str) -> str:
        """Return ``url`` with any password replaced by ``***``."""
        parts = urlsplit(url)
        if parts.password is None:
            return url
        host = parts.hostname or ""
        if parts.port:
            host = f"{host}:{parts.port}"
        user = parts.username or ""
        return urlunsplit(parts._replace(netloc=f"{user}:***@{host}"))

    @classmethod
    def get_client(cls, url: Optional[str] = None) -> redis.Redis:
        """
        Return the shared client, building it on first call.

        Connections open lazily, so an unreachable server surfaces on first
        command (and through `/health/ready`), not here.

        Raises:
            ValueError: If no URL is configured or its scheme is not supported
        """
        if cls._client is not None:
            return cls._client

        redis_url = url or Config.REDIS_URL
        if not redis_url:
            raise ValueError("REDIS_URL not configured")
        if urlsplit(redis_url).scheme not in SUPPORTED_SCHEMES:
            raise ValueError(f"Unsupported Redis URL scheme; expected one of {', '.join(SUPPORTED_SCHEMES)}")

        logging.info(f"Connecting customer directory to Redis at {cls.redact(redis_url)}")
        pool = ConnectionPool.from_url(
            redis_url,
            max_connections=Config.REDIS_MAX_CONNECTIONS,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            health_check_interval=30,
        )
        cls._client = redis.Redis(connection_pool=pool)
        return cls._client

    @classmethod
    def close(cls) -> None:
        """Disconnect the pool and forget the client; the next ``get_client`` starts fresh."""
        if cls._client is None:
            return
        client, cls._client = cls._client, None
        client.close()
        client.connection_pool.disconnect()
        logging.info("Closed Redis connection pool")
