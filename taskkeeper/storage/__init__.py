"""
TaskKeeper Storage.

Provides the key-value storage used to persist task collections:
- In-memory storage for tests and ephemeral use
- File storage with atomic replace for local persistence
- Redis storage for shared deployments

Copyright (c) 2025 TaskKeeper
"""

from .base import StorageBackend
from .memory_backend import MemoryStorage
from .file_backend import FileStorage
from .redis_backend import RedisStorage


def get_storage(config=None) -> StorageBackend:
    """Get the storage backend selected by configuration."""
    if config is None:
        from taskkeeper.config import get_config
        config = get_config()

    storage = config.storage
    if storage.backend == "memory":
        return MemoryStorage(quota_bytes=storage.quota_bytes or None)
    if storage.backend == "file":
        return FileStorage(storage.data_dir)
    if storage.backend == "redis":
        return RedisStorage(url=storage.redis_connection_url, prefix=storage.redis_prefix)
    raise ValueError(f"Unknown storage backend: {storage.backend}")


__all__ = [
    'StorageBackend',
    'MemoryStorage',
    'FileStorage',
    'RedisStorage',
    'get_storage',
]
