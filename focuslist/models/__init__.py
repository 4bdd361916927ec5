"""Data models for focuslist."""

from focuslist.models.todo import Todo, TodoPriority, TodoStats
from focuslist.models.thread import Thread, ThreadStatus, Message, MessageRole
from focuslist.models.email_notification import EmailNotification, NotificationType, NotificationStatus
from focuslist.models.user_preferences import UserPreferences, Theme, DefaultView
from focuslist.models.user import User

__all__ = [
    "Todo",
    "TodoPriority",
    "TodoStats",
    "Thread",
    "ThreadStatus",
    "Message",
    "MessageRole",
    "EmailNotification",
    "NotificationType",
    "NotificationStatus",
    "UserPreferences",
    "Theme",
    "DefaultView",
    "User",
]
