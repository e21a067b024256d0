"""
Task Data Models.

Copyright (c) 2025 TaskKeeper
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, field_validator


class Task(BaseModel):
    """A single to-do record.

    Serialized with the ``createdAt`` key; records stored without it
    (older saves) load with ``created_at=None``.
    """
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    id: StrictInt = Field(frozen=True)
    text: StrictStr
    completed: StrictBool = False
    created_at: Optional[datetime] = Field(default=None, alias="createdAt", frozen=True)

    @field_validator("text")
    @classmethod
    def _text_trimmed(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("text must not be empty")
        if value != value.strip():
            raise ValueError("text must not have surrounding whitespace")
        return value

    @field_validator("created_at", mode="before")
    @classmethod
    def _created_at_iso(cls, value: Any) -> datetime:
        # Only ISO-8601 strings; numbers would be read as Unix seconds.
        if isinstance(value, datetime):
            return value
        if not isinstance(value, str):
            raise ValueError("createdAt must be an ISO-8601 string")
        text = value[:-1] + "+00:00" if value.endswith(("Z", "z")) else value
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            raise ValueError(f"createdAt is not ISO-8601: {value!r}") from None

    def to_record(self) -> Dict[str, Any]:
        """Convert task to its JSON storage record."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_record(cls, data: Dict[str, Any]) -> "Task":
        """Create task from a storage record."""
        return cls.model_validate(data)


class TaskStats(BaseModel):
    """Counts shown alongside a task list."""
    total: int = 0
    completed: int = 0

    @property
    def active(self) -> int:
        return self.total - self.completed
