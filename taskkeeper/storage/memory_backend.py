"""
In-Memory Storage Backend.

Used for tests and for callers that do not need durability.

Copyright (c) 2025 TaskKeeper
"""

import logging
from threading import Lock
from typing import Dict, Optional

from taskkeeper.errors import PersistenceError
from .base import StorageBackend

logger = logging.getLogger(__name__)


class MemoryStorage(StorageBackend):
    """
    Dict-backed storage.

    An optional quota caps the total size of stored values (in UTF-8 bytes),
    the way browser local storage refuses writes past its limit.
    """

    def __init__(self, quota_bytes: Optional[int] = None):
        self._data: Dict[str, str] = {}
        self._quota = quota_bytes or None
        self._lock = Lock()

    def get(self, key: str) -> Optional[str]:
        """Read a slot."""
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        """Overwrite a slot, enforcing the quota."""
        with self._lock:
            if self._quota is not None:
                used = sum(
                    len(v.encode("utf-8")) for k, v in self._data.items() if k != key
                )
                needed = used + len(value.encode("utf-8"))
                if needed > self._quota:
                    logger.warning(f"Storage quota exceeded: {needed} > {self._quota} bytes")
                    raise PersistenceError(
                        f"Storage quota exceeded writing '{key}': {needed} > {self._quota} bytes"
                    )
            self._data[key] = value

    def delete(self, key: str) -> bool:
        """Delete a slot."""
        with self._lock:
            if key in self._data:
                del self._data[key]
                return True
            return False

    def clear(self) -> int:
        """Remove all slots."""
        with self._lock:
            count = len(self._data)
            self._data.clear()
            return count

    def size(self) -> int:
        """Number of stored slots."""
        with self._lock:
            return len(self._data)
