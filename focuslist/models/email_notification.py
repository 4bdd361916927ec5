"""EmailNotification data model for focuslist."""

from datetime import datetime
from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field


class NotificationType(str, Enum):
    """Kind of transactional email."""
    WELCOME = "welcome"
    TODO_REMINDER = "todo_reminder"
    WEEKLY_SUMMARY = "weekly_summary"


class NotificationStatus(str, Enum):
    """Delivery status. Moves pending -> sent or pending -> failed, never back."""
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"


class EmailNotification(BaseModel):
    """Audit record for one email delivery attempt."""

    id: str = Field(..., description="Unique notification identifier (UUID v4)")
    user_id: str = Field(..., description="User ID the email was sent for")
    type: NotificationType = Field(..., description="Notification type")
    recipient: str = Field(..., description="Recipient email address")
    subject: str = Field(..., description="Email subject line")
    status: NotificationStatus = Field(NotificationStatus.PENDING, description="Delivery status")
    sent_at: Optional[datetime] = Field(None, description="When delivery succeeded")
    error: Optional[str] = Field(None, description="Delivery error text, if failed")
    created_at: datetime = Field(..., description="Record creation timestamp")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
