"""
File Storage Backend.

Stores each slot as ``<directory>/<key>.json``. Writes go to a temporary
file in the same directory which then replaces the target, so readers see
either the old or the new content.

Copyright (c) 2025 TaskKeeper
"""

import os
import logging
import tempfile
from pathlib import Path
from typing import Optional, Union

from taskkeeper.errors import PersistenceError
from .base import StorageBackend

logger = logging.getLogger(__name__)


class FileStorage(StorageBackend):
    """JSON-file-per-slot storage in a directory."""

    SUFFIX = ".json"

    def __init__(self, directory: Union[str, Path]):
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        """Resolve the file holding a slot."""
        if not key or key in (".", "..") or "/" in key or "\\" in key or os.sep in key:
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._directory / f"{key}{self.SUFFIX}"

    def get(self, key: str) -> Optional[str]:
        """Read a slot; None if the file does not exist."""
        path = self.path_for(key)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return f.read()
        except FileNotFoundError:
            logger.debug(f"No storage file at {path}")
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {path}: {e}")
            raise PersistenceError(f"Failed to read '{key}' from {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        """Atomically overwrite a slot."""
        path = self.path_for(key)
        tmp_name = None
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{key}.", suffix=".tmp", dir=str(self._directory)
            )
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
            logger.debug(f"Wrote {len(value)} chars to {path}")
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            raise PersistenceError(f"Failed to write '{key}' to {path}: {e}") from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.debug(f"Could not remove temp file {tmp_name}")

    def delete(self, key: str) -> bool:
        """Remove a slot file."""
        path = self.path_for(key)
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise PersistenceError(f"Failed to delete '{key}' at {path}: {e}") from e

    def exists(self, key: str) -> bool:
        return self.path_for(key).is_file()
