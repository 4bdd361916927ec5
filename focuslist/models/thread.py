"""Assistant thread and message data models for focuslist."""

from datetime import datetime
from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field


class ThreadStatus(str, Enum):
    """Thread status enumeration."""
    ACTIVE = "active"
    ARCHIVED = "archived"


class MessageRole(str, Enum):
    """Who authored a message."""
    USER = "user"
    ASSISTANT = "assistant"


class Thread(BaseModel):
    """A conversation thread with the assistant."""

    id: str = Field(..., description="Unique thread identifier (UUID v4)")
    user_id: str = Field(..., description="User ID who owns this thread")
    title: Optional[str] = Field(None, description="Optional thread title")
    status: ThreadStatus = Field(ThreadStatus.ACTIVE, description="Thread status")
    created_at: datetime = Field(..., description="Thread creation timestamp")
    updated_at: datetime = Field(..., description="Thread last update timestamp")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class Message(BaseModel):
    """A single message in a thread. Immutable once stored."""

    id: str = Field(..., description="Unique message identifier (UUID v4)")
    thread_id: str = Field(..., description="Parent thread ID")
    user_id: str = Field(..., description="Owning user ID (denormalized from the thread)")
    role: MessageRole = Field(..., description="Message author role")
    content: str = Field(..., description="Message text")
    created_at: datetime = Field(..., description="Message creation timestamp")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
