"""
Filter projection over a task collection.

Pure functions: the collection passed in is never modified.

Copyright (c) 2025 TaskKeeper
"""

from enum import Enum
from typing import Iterable, List, Union

from .models import Task, TaskStats


class FilterMode(str, Enum):
    """View selection for a task list."""
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


def project(tasks: Iterable[Task], mode: Union[FilterMode, str] = FilterMode.ALL) -> List[Task]:
    """
    Select the tasks to display for a filter mode.

    Args:
        tasks: Collection in stored order
        mode: FilterMode or its string value

    Returns:
        New list in the same relative order; empty if nothing matches

    Raises:
        ValueError: If mode is not a known filter
    """
    mode = FilterMode(mode)
    if mode is FilterMode.ACTIVE:
        return [task for task in tasks if not task.completed]
    if mode is FilterMode.COMPLETED:
        return [task for task in tasks if task.completed]
    return list(tasks)


def compute_stats(tasks: Iterable[Task]) -> TaskStats:
    """Count total and completed tasks."""
    total = 0
    completed = 0
    for task in tasks:
        total += 1
        if task.completed:
            completed += 1
    return TaskStats(total=total, completed=completed)
