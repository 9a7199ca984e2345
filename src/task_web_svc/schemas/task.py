"""Pydantic schemas for task-related operations.

Request bodies are deliberately permissive: every field is untyped and
optional, so a missing title is reported as a 400 and a value of the wrong
type as the operation's 500, both by the handlers rather than by request
validation.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TaskCreate(BaseModel):
    """Input schema for creating a task."""
    title: Any = Field(None, description="Task title (required, trimmed)")
    color: Any = Field(None, description="Color label, defaults to 'blue'")

    @classmethod
    def from_body(cls, body: Any) -> "TaskCreate":
        """Build the payload from a decoded JSON body; non-objects count as empty."""
        return cls.model_validate(body if isinstance(body, dict) else {})


class TaskUpdate(TaskCreate):
    """Input schema for updating a task or toggling its completion.

    ``toggle`` only selects the toggle branch when it is a literal JSON
    ``true``; strings or numbers fall through to a regular update.
    """
    toggle: Any = Field(None, description="When exactly true, flip completion and ignore other fields")
    completed: Any = Field(None, description="Completion flag, false when omitted")

    @property
    def is_toggle(self) -> bool:
        return self.toggle is True

    @property
    def completed_or_default(self) -> Any:
        """The given completed value, even null, or False when the key is absent."""
        return self.completed if "completed" in self.model_fields_set else False


class TaskResponse(BaseModel):
    """Output schema for a serialized task."""
    id: int = Field(..., description="Task identifier assigned by the datastore")
    title: str = Field(..., description="Task title")
    color: str = Field(..., description="Color label")
    completed: bool = Field(..., description="Completion flag")
    createdAt: str = Field(..., description="Creation timestamp (ISO-8601)")
    updatedAt: str = Field(..., description="Last update timestamp (ISO-8601)")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Buy milk",
                "color": "blue",
                "completed": False,
                "createdAt": "2025-01-01T00:00:00.000Z",
                "updatedAt": "2025-01-01T00:00:00.000Z"
            }
        }
    )


class TaskDeleteResponse(BaseModel):
    """Output schema for task deletion."""
    message: str = Field(..., description="Deletion confirmation message")


class ErrorResponse(BaseModel):
    """Body returned for every handled error."""
    error: str = Field(..., description="Human readable error message")
