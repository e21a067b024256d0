"""
TaskKeeper Task Store.

Owns the in-memory task collection and its persistence:
- Load from a storage slot, seeding sample tasks on first run
- Add, toggle, edit and delete tasks
- Persist the whole collection after every successful mutation
- Report statistics

Copyright (c) 2025 TaskKeeper
"""

import json
from datetime import datetime
from threading import Lock
from typing import Callable, List, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from taskkeeper.errors import CorruptStateError, NotFoundError, PersistenceError, ValidationError
from taskkeeper.storage.base import StorageBackend
from taskkeeper.utils import now_ms, utc_now
from .models import Task, TaskStats
from .projector import compute_stats

logger = structlog.get_logger(__name__)


class TaskStore:
    """
    Task collection with write-through persistence.

    The caller constructs the store with a storage backend and owns it;
    nothing is kept in module globals.

    Example usage:
        store = TaskStore(FileStorage("data"))
        store.load()
        task = store.add("Buy milk")
        store.toggle_completion(task.id)
        project(store.tasks, FilterMode.COMPLETED)

    Every successful mutation overwrites the slot with the full collection.
    If that write fails the in-memory change stays in place and the
    PersistenceError reaches the caller.
    """

    DEFAULT_STORAGE_KEY = "todos"

    SEED_TASKS = [
        {"id": 1, "text": "Learn JavaScript fundamentals", "completed": True},
        {"id": 2, "text": "Build a To-Do List app", "completed": False},
        {"id": 3, "text": "Explore DOM manipulation", "completed": False},
        {"id": 4, "text": "Practice CSS styling", "completed": False},
    ]

    def __init__(
        self,
        storage: StorageBackend,
        key: str = DEFAULT_STORAGE_KEY,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the store.

        Args:
            storage: Backend holding the serialized collection
            key: Storage slot name
            clock: Returns the current time (defaults to utc_now)
        """
        self._storage = storage
        self._key = key
        self._clock = clock or utc_now
        self._tasks: List[Task] = []
        self._last_id = 0
        self._lock = Lock()

    @property
    def key(self) -> str:
        return self._key

    @property
    def tasks(self) -> List[Task]:
        """Snapshot of the collection in stored order."""
        return list(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    # ============== Persistence ==============

    def load(self) -> List[Task]:
        """
        Load the collection from storage.

        An absent slot or an empty array is replaced by the sample tasks,
        which are persisted immediately.

        Returns:
            The loaded collection

        Raises:
            CorruptStateError: If stored data is not a valid task sequence
            PersistenceError: If storage cannot be read or the seed written
        """
        with self._lock:
            raw = self._storage.get(self._key)

            if raw is None or not raw.strip():
                return self._seed()

            tasks = self._deserialize(raw)
            if not tasks:
                return self._seed()

            self._tasks = tasks
            self._last_id = max([self._last_id] + [task.id for task in tasks])
            logger.info("tasks_loaded", key=self._key, count=len(tasks))
            return list(self._tasks)

    def _seed(self) -> List[Task]:
        created_at = self._clock()
        self._tasks = [
            Task(created_at=created_at, **record) for record in self.SEED_TASKS
        ]
        self._last_id = max([self._last_id] + [task.id for task in self._tasks])
        logger.info("tasks_seeded", key=self._key, count=len(self._tasks))
        self._persist()
        return list(self._tasks)

    def _deserialize(self, raw: str) -> List[Task]:
        try:
            data = json.loads(raw)
        except ValueError as e:
            raise self._corrupt(f"Stored tasks are not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise self._corrupt(f"Stored tasks must be a JSON array, got {type(data).__name__}")

        tasks: List[Task] = []
        seen = set()
        for index, record in enumerate(data):
            if not isinstance(record, dict):
                raise self._corrupt(f"Record {index} is not an object: {record!r}")
            try:
                task = Task.from_record(record)
            except PydanticValidationError as e:
                raise self._corrupt(f"Record {index} is not a valid task: {e}") from e
            if task.id in seen:
                raise self._corrupt(f"Duplicate task id {task.id} at record {index}")
            seen.add(task.id)
            tasks.append(task)
        return tasks

    def _corrupt(self, message: str) -> CorruptStateError:
        logger.error("state_corrupt", key=self._key, error=message)
        return CorruptStateError(message, key=self._key)

    def _persist(self) -> None:
        payload = json.dumps([task.to_record() for task in self._tasks])
        try:
            self._storage.set(self._key, payload)
        except PersistenceError as e:
            logger.error("persist_failed", key=self._key, count=len(self._tasks), error=str(e))
            raise

    # ============== Queries ==============

    def _index_of(self, task_id: int) -> int:
        if isinstance(task_id, bool) or not isinstance(task_id, int):
            logger.warning("task_not_found", task_id=repr(task_id))
            raise NotFoundError(task_id)
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        logger.warning("task_not_found", task_id=task_id)
        raise NotFoundError(task_id)

    def get_task(self, task_id: int) -> Task:
        """Get a task by ID. Raises NotFoundError if absent."""
        return self._tasks[self._index_of(task_id)]

    def list_tasks(self) -> List[Task]:
        """All tasks in stored order."""
        return list(self._tasks)

    def stats(self) -> TaskStats:
        """Total and completed counts."""
        return compute_stats(self._tasks)

    # ============== Mutations ==============

    def _next_id(self, now: datetime) -> int:
        # Millisecond timestamp, bumped past every id issued so far so that
        # adds within the same millisecond stay unique.
        candidate = now_ms(now)
        highest = max([self._last_id] + [task.id for task in self._tasks])
        if candidate <= highest:
            candidate = highest + 1
        self._last_id = candidate
        return candidate

    def add(self, text: str) -> Task:
        """
        Append a new task.

        Args:
            text: Task text; surrounding whitespace is removed

        Returns:
            The created task

        Raises:
            ValidationError: If text is not a string or is empty
            PersistenceError: If the write fails (task stays in memory)
        """
        if not isinstance(text, str):
            logger.warning("task_rejected", reason="text is not a string")
            raise ValidationError(f"Task text must be a string, got {type(text).__name__}")
        text = text.strip()
        if not text:
            logger.warning("task_rejected", reason="empty text")
            raise ValidationError("Please enter a task")

        with self._lock:
            now = self._clock()
            task = Task(id=self._next_id(now), text=text, completed=False, created_at=now)
            self._tasks.append(task)
            logger.info("task_added", task_id=task.id, count=len(self._tasks))
            self._persist()
        return task

    def toggle_completion(self, task_id: int) -> Task:
        """
        Flip a task between active and completed.

        Raises:
            NotFoundError: If no task has this id
        """
        with self._lock:
            task = self._tasks[self._index_of(task_id)]
            task.completed = not task.completed
            logger.info("task_toggled", task_id=task_id, completed=task.completed)
            self._persist()
        return task

    def edit(self, task_id: int, new_text: Optional[str]) -> Optional[Task]:
        """
        Replace a task's text.

        Blank or missing text (a cancelled edit) and text identical to the
        current text leave the collection and storage untouched.

        Returns:
            The updated task, or None when nothing changed

        Raises:
            NotFoundError: If no task has this id
            ValidationError: If new_text is neither a string nor None
        """
        with self._lock:
            task = self._tasks[self._index_of(task_id)]

            if new_text is not None and not isinstance(new_text, str):
                raise ValidationError(f"Task text must be a string, got {type(new_text).__name__}")
            text = (new_text or "").strip()
            if not text:
                logger.debug("task_edit_discarded", task_id=task_id, reason="empty text")
                return None
            if text == task.text:
                logger.debug("task_edit_discarded", task_id=task_id, reason="unchanged")
                return None

            task.text = text
            logger.info("task_edited", task_id=task_id)
            self._persist()
        return task

    def delete(self, task_id: int) -> Task:
        """
        Remove a task.

        Returns:
            The removed task, so the caller can show its text

        Raises:
            NotFoundError: If no task has this id
        """
        with self._lock:
            task = self._tasks.pop(self._index_of(task_id))
            logger.info("task_deleted", task_id=task_id, count=len(self._tasks))
            self._persist()
        return task

    def clear(self) -> int:
        """
        Remove every task and persist the empty collection.

        A later load() of the empty slot seeds the sample tasks again.

        Returns:
            Number of tasks removed
        """
        with self._lock:
            count = len(self._tasks)
            self._tasks = []
            logger.info("tasks_cleared", key=self._key, removed=count)
            self._persist()
        return count
