"""
TaskKeeper Tasks.

The task collection, its filter projection and statistics.

Copyright (c) 2025 TaskKeeper
"""

from .models import Task, TaskStats
from .projector import FilterMode, compute_stats, project
from .store import TaskStore


def create_task_store(config=None) -> TaskStore:
    """
    Build a new TaskStore on the configured storage backend.

    Each call returns a fresh, unloaded store; call load() before use.
    """
    from taskkeeper.config import get_config
    from taskkeeper.storage import get_storage

    if config is None:
        config = get_config()
    return TaskStore(get_storage(config), key=config.storage.key)


__all__ = [
    'Task',
    'TaskStats',
    'TaskStore',
    'FilterMode',
    'project',
    'compute_stats',
    'create_task_store',
]
