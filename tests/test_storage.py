"""
Tests for TaskKeeper storage backends.

Copyright (c) 2025 TaskKeeper
"""

import os
import shutil
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from taskkeeper.config import TaskKeeperConfig, get_config
from taskkeeper.errors import PersistenceError
from taskkeeper.storage import FileStorage, MemoryStorage, RedisStorage, StorageBackend, get_storage


@pytest.fixture
def temp_dir():
    """Create a temporary directory."""
    directory = tempfile.mkdtemp()
    yield directory
    shutil.rmtree(directory, ignore_errors=True)


class TestMemoryStorage:
    """Test in-memory storage."""

    def test_get_missing(self):
        assert MemoryStorage().get("todos") is None

    def test_set_get_overwrite(self):
        """Test set overwrites instead of appending."""
        storage = MemoryStorage()
        storage.set("todos", "[1]")
        storage.set("todos", "[2]")
        assert storage.get("todos") == "[2]"
        assert storage.size() == 1

    def test_delete_and_exists(self):
        storage = MemoryStorage()
        storage.set("todos", "[]")
        assert storage.exists("todos")
        assert storage.delete("todos") is True
        assert storage.delete("todos") is False
        assert not storage.exists("todos")

    def test_quota_exceeded(self):
        """Test writes beyond the quota fail and keep the old value."""
        storage = MemoryStorage(quota_bytes=8)
        storage.set("todos", "[]")

        with pytest.raises(PersistenceError, match="quota"):
            storage.set("todos", "[1, 2, 3, 4]")

        assert storage.get("todos") == "[]"

    def test_quota_counts_other_slots(self):
        """Test the quota covers all slots but not the slot being replaced."""
        storage = MemoryStorage(quota_bytes=10)
        storage.set("a", "12345")
        storage.set("b", "12345")
        storage.set("b", "1234")
        with pytest.raises(PersistenceError):
            storage.set("c", "12")

    def test_clear(self):
        storage = MemoryStorage()
        storage.set("a", "1")
        storage.set("b", "2")
        assert storage.clear() == 2
        assert storage.size() == 0


class TestFileStorage:
    """Test file-backed storage."""

    def test_get_missing_returns_none(self, temp_dir):
        assert FileStorage(temp_dir).get("todos") is None

    def test_set_creates_directory(self, temp_dir):
        """Test the directory is created on first write."""
        directory = Path(temp_dir) / "nested" / "data"
        storage = FileStorage(directory)

        storage.set("todos", '[{"id": 1}]')

        assert (directory / "todos.json").read_text(encoding="utf-8") == '[{"id": 1}]'
        assert storage.get("todos") == '[{"id": 1}]'

    def test_overwrite_leaves_no_temp_files(self, temp_dir):
        """Test atomic replace cleans up after itself."""
        storage = FileStorage(temp_dir)
        storage.set("todos", "[1]")
        storage.set("todos", "[2]")

        assert os.listdir(temp_dir) == ["todos.json"]
        assert storage.get("todos") == "[2]"

    def test_unicode_round_trip(self, temp_dir):
        storage = FileStorage(temp_dir)
        storage.set("todos", '["café ✓"]')
        assert storage.get("todos") == '["café ✓"]'

    def test_delete_and_exists(self, temp_dir):
        storage = FileStorage(temp_dir)
        storage.set("todos", "[]")
        assert storage.exists("todos")
        assert storage.delete("todos") is True
        assert storage.delete("todos") is False
        assert not storage.exists("todos")

    @pytest.mark.parametrize("key", ["", ".", "..", "../escape", "a/b", "a\\b"])
    def test_invalid_keys_rejected(self, temp_dir, key):
        """Test keys cannot escape the directory."""
        with pytest.raises(ValueError):
            FileStorage(temp_dir).get(key)

    def test_write_failure_raises(self, temp_dir):
        """Test an unusable directory raises PersistenceError."""
        blocker = Path(temp_dir) / "not_a_dir"
        blocker.write_text("x")
        storage = FileStorage(blocker)

        with pytest.raises(PersistenceError):
            storage.set("todos", "[]")

    def test_read_failure_raises(self, temp_dir):
        """Test unreadable slots raise PersistenceError."""
        (Path(temp_dir) / "todos.json").mkdir()
        with pytest.raises(PersistenceError):
            FileStorage(temp_dir).get("todos")

    def test_failed_replace_keeps_old_value(self, temp_dir):
        """Test a failed write leaves the previous content and no temp file."""
        storage = FileStorage(temp_dir)
        storage.set("todos", "[1]")

        with patch("taskkeeper.storage.file_backend.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(PersistenceError):
                storage.set("todos", "[2]")

        assert storage.get("todos") == "[1]"
        assert os.listdir(temp_dir) == ["todos.json"]


class TestRedisStorage:
    """Test Redis storage with a mocked client."""

    def test_get_set_use_prefix(self):
        client = MagicMock()
        client.get.return_value = "[]"
        storage = RedisStorage(prefix="tk:", client=client)

        storage.set("todos", "[1]")
        assert storage.get("todos") == "[]"

        client.set.assert_called_once_with("tk:todos", "[1]")
        client.get.assert_called_once_with("tk:todos")

    def test_get_missing(self):
        client = MagicMock()
        client.get.return_value = None
        assert RedisStorage(client=client).get("todos") is None

    def test_bytes_decoded(self):
        client = MagicMock()
        client.get.return_value = b"[1]"
        assert RedisStorage(client=client).get("todos") == "[1]"

    def test_delete_and_exists(self):
        client = MagicMock()
        client.delete.return_value = 1
        client.exists.return_value = 0
        storage = RedisStorage(client=client)

        assert storage.delete("todos") is True
        assert storage.exists("todos") is False

    def test_client_errors_become_persistence_errors(self):
        client = MagicMock()
        client.set.side_effect = ConnectionError("connection reset")
        client.get.side_effect = ConnectionError("connection reset")
        storage = RedisStorage(client=client)

        with pytest.raises(PersistenceError):
            storage.set("todos", "[]")
        with pytest.raises(PersistenceError):
            storage.get("todos")

    def test_unreachable_server_raises(self):
        """Test connecting to a closed port fails with PersistenceError."""
        with pytest.raises(PersistenceError):
            RedisStorage(url="redis://127.0.0.1:1/0")


class TestGetStorage:
    """Test backend selection from configuration."""

    def setup_method(self):
        TaskKeeperConfig.reset()

    def teardown_method(self):
        TaskKeeperConfig.reset()

    def test_memory_backend(self):
        with patch.dict(os.environ, {"TASKS_STORAGE_BACKEND": "memory", "TASKS_STORAGE_QUOTA": "100"}):
            storage = get_storage(get_config())
        assert isinstance(storage, MemoryStorage)
        with pytest.raises(PersistenceError):
            storage.set("todos", "x" * 101)

    def test_file_backend(self, temp_dir):
        with patch.dict(os.environ, {"TASKS_STORAGE_BACKEND": "file", "TASKS_DATA_DIR": temp_dir}):
            storage = get_storage()
        assert isinstance(storage, FileStorage)
        assert storage.directory == Path(temp_dir)

    def test_redis_backend(self):
        with patch.dict(os.environ, {"TASKS_STORAGE_BACKEND": "redis", "REDIS_URL": "redis://x:1/0"}):
            config = get_config()
        with patch("taskkeeper.storage.RedisStorage") as redis_cls:
            get_storage(config)
        redis_cls.assert_called_once_with(url="redis://x:1/0", prefix="taskkeeper:")

    def test_unknown_backend(self):
        with patch.dict(os.environ, {"TASKS_STORAGE_BACKEND": "floppy"}):
            config = get_config()
        with pytest.raises(ValueError):
            get_storage(config)

    def test_backends_share_interface(self, temp_dir):
        assert isinstance(MemoryStorage(), StorageBackend)
        assert isinstance(FileStorage(temp_dir), StorageBackend)
