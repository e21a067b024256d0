"""
Configuration validation for TaskKeeper.

Validates configuration at startup and provides helpful error messages.
"""

import os
import logging
from pathlib import Path
from typing import List, Tuple
from dataclasses import dataclass

from . import STORAGE_BACKENDS

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ValidationResult:
    """Result of configuration validation."""
    valid: bool
    errors: List[str]
    warnings: List[str]
    info: List[str]


class ConfigValidator:
    """Validates TaskKeeper configuration at startup."""

    def __init__(self, config):
        """Initialize validator with config object."""
        self.config = config

    def validate_all(self) -> ValidationResult:
        """
        Validate all configuration sections.

        Returns:
            ValidationResult with errors, warnings, and info messages
        """
        errors = []
        warnings = []
        info = []

        storage_errors, storage_warnings, storage_info = self._validate_storage()
        errors.extend(storage_errors)
        warnings.extend(storage_warnings)
        info.extend(storage_info)

        errors.extend(self._validate_logging())

        result = ValidationResult(
            valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
            info=info
        )
        for error in errors:
            logger.error(f"Config error: {error}")
        for warning in warnings:
            logger.warning(f"Config warning: {warning}")
        return result

    def _validate_storage(self) -> Tuple[List[str], List[str], List[str]]:
        """Validate storage backend settings."""
        errors = []
        warnings = []
        info = []
        storage = self.config.storage

        if storage.backend not in STORAGE_BACKENDS:
            errors.append(
                f"Unknown storage backend '{storage.backend}'. "
                f"Expected one of: {', '.join(STORAGE_BACKENDS)}"
            )

        if not storage.key or not storage.key.strip():
            errors.append("Storage key must not be empty")

        if storage.quota_bytes < 0:
            errors.append(f"Storage quota must be >= 0, got {storage.quota_bytes}")

        if storage.backend == "file":
            path_errors, path_warnings = self._validate_data_dir(Path(storage.data_dir))
            errors.extend(path_errors)
            warnings.extend(path_warnings)
            info.append(f"File storage at: {storage.data_dir}")

        if storage.backend == "redis":
            if not storage.redis_url:
                warnings.append(
                    f"REDIS_URL not set. Using default {storage.redis_connection_url}"
                )
            info.append(f"Redis storage prefix: {storage.redis_prefix}")

        if storage.backend == "memory":
            warnings.append("Memory storage selected. Tasks will not survive a restart.")

        return errors, warnings, info

    def _validate_data_dir(self, dir_path: Path) -> Tuple[List[str], List[str]]:
        """Check the data directory exists (creating it) and is writable."""
        errors = []
        warnings = []

        if not dir_path.exists():
            try:
                dir_path.mkdir(parents=True, exist_ok=True)
                warnings.append(f"Created data_dir: {dir_path}")
            except OSError as e:
                errors.append(f"Cannot create data_dir {dir_path}: {e}")
                return errors, warnings

        if not dir_path.is_dir():
            errors.append(f"data_dir is not a directory: {dir_path}")
        elif not os.access(dir_path, os.W_OK):
            errors.append(f"data_dir is not writable: {dir_path}")

        return errors, warnings

    def _validate_logging(self) -> List[str]:
        """Validate logging settings."""
        errors = []

        if self.config.logging.log_level not in LOG_LEVELS:
            errors.append(
                f"Invalid LOG_LEVEL '{self.config.logging.log_level}'. "
                f"Expected one of: {', '.join(LOG_LEVELS)}"
            )

        return errors
