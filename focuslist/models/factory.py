"""Record construction helpers for focuslist.

This module centralizes how new records get their id, owner and timestamps
so every entity starts life with consistent defaults.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from focuslist.models.todo import Todo
from focuslist.models.thread import Thread, ThreadStatus, Message
from focuslist.models.email_notification import EmailNotification, NotificationStatus
from focuslist.models.user_preferences import UserPreferences
from focuslist.models.constants import (
    DEFAULT_EMAIL_NOTIFICATIONS_ENABLED,
    DEFAULT_AI_ASSISTANT_ENABLED,
    DEFAULT_THEME,
    DEFAULT_VIEW,
)


def _new_id() -> str:
    return str(uuid.uuid4())


def new_todo(
    user_id: str,
    text: str,
    priority: Optional[str] = None,
    due_date: Optional[datetime] = None,
    tags: Optional[List[str]] = None,
    now: Optional[datetime] = None,
) -> Todo:
    """Build an active todo owned by `user_id`."""
    now = now or datetime.utcnow()
    return Todo(
        id=_new_id(),
        user_id=user_id,
        text=text,
        completed=False,
        priority=priority,
        due_date=due_date,
        tags=tags,
        created_at=now,
        updated_at=now,
        completed_at=None,
    )


def new_thread(user_id: str, title: Optional[str] = None, now: Optional[datetime] = None) -> Thread:
    """Build an active thread owned by `user_id`."""
    now = now or datetime.utcnow()
    return Thread(
        id=_new_id(),
        user_id=user_id,
        title=title,
        status=ThreadStatus.ACTIVE,
        created_at=now,
        updated_at=now,
    )


def new_message(
    thread_id: str,
    user_id: str,
    role: str,
    content: str,
    now: Optional[datetime] = None,
) -> Message:
    return Message(
        id=_new_id(),
        thread_id=thread_id,
        user_id=user_id,
        role=role,
        content=content,
        created_at=now or datetime.utcnow(),
    )


def new_email_notification(
    user_id: str,
    type: str,
    recipient: str,
    subject: str,
    now: Optional[datetime] = None,
) -> EmailNotification:
    """Build a pending notification record."""
    return EmailNotification(
        id=_new_id(),
        user_id=user_id,
        type=type,
        recipient=recipient,
        subject=subject,
        status=NotificationStatus.PENDING,
        created_at=now or datetime.utcnow(),
    )


def new_user_preferences(user_id: str, now: Optional[datetime] = None) -> UserPreferences:
    """Build the default preferences for a user."""
    now = now or datetime.utcnow()
    return UserPreferences(
        id=_new_id(),
        user_id=user_id,
        email_notifications_enabled=DEFAULT_EMAIL_NOTIFICATIONS_ENABLED,
        reminder_time=None,
        theme=DEFAULT_THEME,
        default_view=DEFAULT_VIEW,
        ai_assistant_enabled=DEFAULT_AI_ASSISTANT_ENABLED,
        created_at=now,
        updated_at=now,
    )
