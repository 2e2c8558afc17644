from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .models import DEFAULT_PRIORITY, Todo


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Input for creating a new Todo item.
    """

    text: str = Field(..., description="Text of the todo item")
    priority: str = Field(default=DEFAULT_PRIORITY, description="Priority: high, medium, or low")

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        """
        Require at least one non-whitespace character. The text is stored as given.
        """
        if not v.strip():
            raise ValueError("text must not be empty")
        return v

    @field_validator("priority", mode="before")
    @classmethod
    def default_blank_priority(cls, v: Optional[str]) -> str:
        """
        Missing or blank priorities fall back to 'medium'. Other strings are kept as given.
        """
        if v is None:
            return DEFAULT_PRIORITY
        s = str(v).strip()
        return s or DEFAULT_PRIORITY


# PUBLIC_INTERFACE
class TodoRecord(BaseModel):
    """
    JSON output shape for a Todo item. ``completed`` is rendered as 0/1 and
    ``completed_at`` is an explicit null while pending.
    """

    id: int = Field(..., description="Unique identifier of the todo item")
    text: str = Field(..., description="Text of the todo item")
    priority: str = Field(..., description="Priority string")
    completed: int = Field(..., ge=0, le=1, description="1 when completed, otherwise 0")
    created_at: str = Field(..., description="Creation timestamp")
    completed_at: Optional[str] = Field(default=None, description="Completion timestamp or null")

    @classmethod
    def from_todo(cls, todo: Todo) -> "TodoRecord":
        return cls(
            id=todo.id,
            text=todo.text,
            priority=todo.priority,
            completed=1 if todo.completed else 0,
            created_at=todo.created_at,
            completed_at=todo.completed_at,
        )


# PUBLIC_INTERFACE
class VersionInfo(BaseModel):
    """Static build metadata reported by the version command."""

    name: str
    version: str
    description: str
