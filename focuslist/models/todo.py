"""Todo data model for focuslist."""

from datetime import datetime
from typing import List, Optional
from enum import Enum
from pydantic import BaseModel, Field


class TodoPriority(str, Enum):
    """Todo priority enumeration."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Todo(BaseModel):
    """Canonical Todo model.

    `completed_at` is set if and only if `completed` is true.
    """

    id: str = Field(..., description="Unique todo identifier (UUID v4)")
    user_id: str = Field(..., description="User ID who owns this todo")
    text: str = Field(..., description="Todo text")
    completed: bool = Field(False, description="Whether the todo is done")
    priority: Optional[TodoPriority] = Field(None, description="Optional priority")
    due_date: Optional[datetime] = Field(None, description="Optional due instant")
    tags: Optional[List[str]] = Field(None, description="Optional normalized tags")
    created_at: datetime = Field(..., description="Todo creation timestamp")
    updated_at: datetime = Field(..., description="Todo last update timestamp")
    completed_at: Optional[datetime] = Field(None, description="Completion timestamp (null while active)")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class TodoStats(BaseModel):
    """Owner-scoped todo counts."""

    total: int
    active: int
    completed: int
