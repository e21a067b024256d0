"""
TaskKeeper Configuration Module.

Provides centralized configuration management with typed access to all settings.
Loads configuration from environment variables with sensible defaults.

Copyright (c) 2025 TaskKeeper
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

STORAGE_BACKENDS = ("memory", "file", "redis")


def _get_bool(key: str, default: bool = False) -> bool:
    """Get boolean value from environment variable."""
    value = os.getenv(key, str(default)).lower()
    return value in ("true", "1", "yes", "on")


def _get_int(key: str, default: int) -> int:
    """Get integer value from environment variable."""
    try:
        return int(os.getenv(key, str(default)))
    except ValueError:
        return default


@dataclass
class StorageConfig:
    """Storage backend settings."""
    backend: str = "file"
    key: str = "todos"
    data_dir: str = "data"
    redis_url: str = ""
    redis_prefix: str = "taskkeeper:"
    quota_bytes: int = 0  # 0 = unlimited

    @property
    def redis_connection_url(self) -> str:
        """Get the Redis connection URL."""
        return self.redis_url or "redis://localhost:6379/0"


@dataclass
class LoggingConfig:
    """Logging settings."""
    log_level: str = "INFO"
    json_logs: bool = False


class TaskKeeperConfig:
    """
    Centralized configuration for TaskKeeper.

    Loads all settings from environment variables with sensible defaults.
    Provides typed access to configuration values.
    """

    _instance: Optional['TaskKeeperConfig'] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return
        self._initialized = True
        self._load_config()

    def _load_config(self):
        """Load configuration from environment variables."""
        self.storage = StorageConfig(
            backend=os.getenv("TASKS_STORAGE_BACKEND", "file").strip().lower(),
            key=os.getenv("TASKS_STORAGE_KEY", "todos"),
            data_dir=os.getenv("TASKS_DATA_DIR", "data"),
            redis_url=os.getenv("REDIS_URL", ""),
            redis_prefix=os.getenv("REDIS_PREFIX", "taskkeeper:"),
            quota_bytes=_get_int("TASKS_STORAGE_QUOTA", 0),
        )

        self.logging = LoggingConfig(
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            json_logs=_get_bool("LOG_JSON", False),
        )

        logger.info(f"Configuration loaded: storage={self.storage.backend}, key={self.storage.key}")

    def reload(self):
        """Reload configuration from environment variables."""
        self._initialized = False
        self.__init__()

    @classmethod
    def reset(cls):
        """Reset singleton instance (for testing)."""
        cls._instance = None


def get_config() -> TaskKeeperConfig:
    """Get the singleton configuration instance."""
    return TaskKeeperConfig()
