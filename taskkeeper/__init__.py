"""
TaskKeeper - to-do list state management.

Provides:
- TaskStore: task collection with write-through persistence
- project / FilterMode: filtered views of the collection
- Pluggable storage (memory, file, Redis)

Copyright (c) 2025 TaskKeeper
"""

__version__ = "0.1.0"

from .errors import (
    TaskKeeperError,
    ValidationError,
    NotFoundError,
    PersistenceError,
    CorruptStateError,
)
from .tasks import (
    Task,
    TaskStats,
    TaskStore,
    FilterMode,
    project,
    compute_stats,
    create_task_store,
)

__all__ = [
    'TaskKeeperError',
    'ValidationError',
    'NotFoundError',
    'PersistenceError',
    'CorruptStateError',
    'Task',
    'TaskStats',
    'TaskStore',
    'FilterMode',
    'project',
    'compute_stats',
    'create_task_store',
]
