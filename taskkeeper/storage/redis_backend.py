"""
Redis Storage Backend.

Keeps each slot under a prefixed Redis string key. Requires the optional
``redis`` package (``pip install taskkeeper[redis]``).

Copyright (c) 2025 TaskKeeper
"""

import logging
from typing import Optional

from taskkeeper.errors import PersistenceError
from .base import StorageBackend

logger = logging.getLogger(__name__)

DEFAULT_REDIS_URL = "redis://localhost:6379/0"


class RedisStorage(StorageBackend):
    """Redis-backed storage for deployments sharing one task slot."""

    def __init__(self, url: str = None, prefix: str = "taskkeeper:", client=None):
        self._url = url or DEFAULT_REDIS_URL
        self._prefix = prefix
        self._client = client if client is not None else self._connect()

    def _connect(self):
        """Connect to Redis."""
        try:
            import redis
        except ImportError as e:
            raise PersistenceError(
                "Redis storage requires the 'redis' package: pip install taskkeeper[redis]"
            ) from e
        try:
            client = redis.from_url(self._url, decode_responses=True)
            client.ping()
        except Exception as e:
            logger.error(f"Redis connection failed: {e}")
            raise PersistenceError(f"Redis connection to {self._url} failed: {e}") from e
        logger.info("Redis storage connected")
        return client

    def _key(self, key: str) -> str:
        """Get prefixed key."""
        return f"{self._prefix}{key}"

    def get(self, key: str) -> Optional[str]:
        """Read a slot."""
        try:
            value = self._client.get(self._key(key))
        except Exception as e:
            logger.error(f"Redis get error: {e}")
            raise PersistenceError(f"Redis read of '{key}' failed: {e}") from e
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    def set(self, key: str, value: str) -> None:
        """Overwrite a slot with a single SET."""
        try:
            self._client.set(self._key(key), value)
        except Exception as e:
            logger.error(f"Redis set error: {e}")
            raise PersistenceError(f"Redis write of '{key}' failed: {e}") from e

    def delete(self, key: str) -> bool:
        """Delete a slot."""
        try:
            return self._client.delete(self._key(key)) > 0
        except Exception as e:
            logger.error(f"Redis delete error: {e}")
            raise PersistenceError(f"Redis delete of '{key}' failed: {e}") from e

    def exists(self, key: str) -> bool:
        """Check if a slot is present."""
        try:
            return self._client.exists(self._key(key)) > 0
        except Exception as e:
            logger.error(f"Redis exists error: {e}")
            raise PersistenceError(f"Redis exists check of '{key}' failed: {e}") from e
