"""UserPreferences data model for focuslist."""

from datetime import datetime
from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field


class Theme(str, Enum):
    """Display theme."""
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class DefaultView(str, Enum):
    """Which todos the list shows first."""
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


class UserPreferences(BaseModel):
    """Per-user settings. Exactly one record per user."""

    id: str = Field(..., description="Unique preferences identifier (UUID v4)")
    user_id: str = Field(..., description="Owning user ID")
    email_notifications_enabled: bool = Field(True, description="Whether reminder/summary emails are sent")
    reminder_time: Optional[str] = Field(None, description="Time of day for reminders (HH:MM)")
    theme: Theme = Field(Theme.SYSTEM, description="Display theme")
    default_view: DefaultView = Field(DefaultView.ALL, description="Default todo list filter")
    ai_assistant_enabled: bool = Field(True, description="Whether the assistant may be used")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
