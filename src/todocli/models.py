from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import DecodeError


# PUBLIC_INTERFACE
class Priority(str, Enum):
    """
    Priority classes used for ordering and coloring.

    Stored priorities are free-form strings; anything other than the three
    known values classifies as OTHER and ranks last.
    """

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    OTHER = "other"

    @classmethod
    def classify(cls, raw: str) -> "Priority":
        for member in (cls.HIGH, cls.MEDIUM, cls.LOW):
            if raw == member.value:
                return member
        return cls.OTHER

    @classmethod
    def known(cls) -> tuple[str, ...]:
        return (cls.HIGH.value, cls.MEDIUM.value, cls.LOW.value)

    @property
    def rank(self) -> int:
        return _RANKS[self]


_RANKS = {Priority.HIGH: 1, Priority.MEDIUM: 2, Priority.LOW: 3, Priority.OTHER: 4}

DEFAULT_PRIORITY = Priority.MEDIUM.value


# PUBLIC_INTERFACE
class Todo(BaseModel):
    """
    A todo item as stored in the ``todos`` table.

    Validation is strict: a row whose columns do not have exactly the expected
    types is rejected rather than coerced.

    Fields:
    - id: store-assigned integer identifier
    - text: non-empty task text
    - priority: free-form priority string (see Priority)
    - completed: completion flag, stored as 0/1
    - created_at: ISO8601 creation timestamp
    - completed_at: ISO8601 completion timestamp, None while pending
    """

    model_config = ConfigDict(strict=True, frozen=True, extra="forbid")

    id: int
    text: str = Field(..., min_length=1)
    priority: str
    completed: bool
    created_at: str = Field(..., min_length=1)
    completed_at: Optional[str]

    @field_validator("completed", mode="before")
    @classmethod
    def parse_completed(cls, v: Any) -> bool:
        """
        Accept the 0/1 integers sqlite stores for booleans.
        """
        if isinstance(v, bool):
            return v
        if isinstance(v, int) and v in (0, 1):
            return bool(v)
        raise ValueError(f"completed must be 0 or 1, got {v!r}")

    @model_validator(mode="after")
    def check_completion_timestamp(self) -> "Todo":
        if self.completed != (self.completed_at is not None):
            raise ValueError("completed_at must be set if and only if completed is true")
        return self

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Todo":
        """Decode a database row, raising DecodeError on any mismatch."""
        try:
            return cls.model_validate(dict(row))
        except ValidationError as e:
            row_id = dict(row).get("id", "?")
            raise DecodeError(f"Failed to parse todo row {row_id}: {e}") from e

    @property
    def priority_class(self) -> Priority:
        return Priority.classify(self.priority)
