"""
TaskKeeper error taxonomy.

Copyright (c) 2025 TaskKeeper
"""

from typing import Optional


class TaskKeeperError(Exception):
    """Base class for all TaskKeeper errors."""
    pass


class ValidationError(TaskKeeperError):
    """Task text is empty or whitespace-only."""
    pass


class NotFoundError(TaskKeeperError):
    """Operation referenced a task id that is not in the collection."""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}")


class PersistenceError(TaskKeeperError):
    """Storage read or write failed."""
    pass


class CorruptStateError(TaskKeeperError):
    """Stored data is not a well-formed sequence of task records."""

    def __init__(self, message: str, key: Optional[str] = None):
        self.key = key
        super().__init__(message)
