"""
Base Storage Interface.

Copyright (c) 2025 TaskKeeper
"""

from abc import ABC, abstractmethod
from typing import Optional


class StorageBackend(ABC):
    """Key-value storage for serialized task collections."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read a slot.

        Args:
            key: Slot name

        Returns:
            Stored string, or None if the slot is absent

        Raises:
            PersistenceError: If the medium cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Overwrite a slot in a single write.

        Raises:
            PersistenceError: If the write fails
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete a slot. Returns True if it existed."""
        pass

    def exists(self, key: str) -> bool:
        """Check if a slot is present."""
        return self.get(key) is not None
