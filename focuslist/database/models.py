"""SQLAlchemy database models for focuslist."""

from datetime import datetime
import uuid
from sqlalchemy import Column, String, Float, Boolean, DateTime, JSON, ForeignKey, Index, UniqueConstraint

from typing import Optional, Union, TypeVar, Type
from focuslist.database.database import Base
from focuslist.models.todo import TodoPriority
from focuslist.models.thread import ThreadStatus, MessageRole
from focuslist.models.email_notification import NotificationType, NotificationStatus
from focuslist.models.user_preferences import Theme, DefaultView

T = TypeVar('T')


def enum_to_value(enum_obj: Union[str, T, None]) -> Optional[str]:
    """Convert enum to string value (handles both enum and string).

    Args:
        enum_obj: Enum instance, string value, or None

    Returns:
        String value of the enum, the string itself, or None
    """
    if enum_obj is None:
        return None
    if hasattr(enum_obj, 'value'):
        return enum_obj.value
    return str(enum_obj)


def value_to_enum(value: Optional[str], enum_class: Type[T], default: Optional[T]) -> Optional[T]:
    """Convert string to enum with fallback to default.

    Args:
        value: String value to convert
        enum_class: Enum class to convert to
        default: Default enum value if conversion fails

    Returns:
        Enum instance, or default if conversion fails
    """
    if not value:
        return default
    try:
        return enum_class(value.lower())
    except (ValueError, AttributeError):
        return default


class TodoDB(Base):
    """Database model for Todo."""

    __tablename__ = "todos"
    __table_args__ = (
        Index("ix_todos_user_id_completed", "user_id", "completed"),
        Index("ix_todos_user_id_created_at", "user_id", "created_at"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    text = Column(String, nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    priority = Column(String, nullable=True)
    due_date = Column(DateTime, nullable=True)

    # Tags (stored as JSON array)
    tags = Column(JSON, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    completed_at = Column(DateTime, nullable=True)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from focuslist.models.todo import Todo
        return Todo(
            id=self.id,
            user_id=self.user_id,
            text=self.text,
            completed=self.completed,
            priority=value_to_enum(self.priority, TodoPriority, None),
            due_date=self.due_date,
            tags=list(self.tags) if self.tags is not None else None,
            created_at=self.created_at,
            updated_at=self.updated_at,
            completed_at=self.completed_at,
        )

    @classmethod
    def from_pydantic(cls, todo):
        """Create database model from Pydantic model."""
        return cls(
            id=todo.id,
            user_id=todo.user_id,
            text=todo.text,
            completed=todo.completed,
            priority=enum_to_value(todo.priority),
            due_date=todo.due_date,
            tags=todo.tags,
            created_at=todo.created_at,
            updated_at=todo.updated_at,
            completed_at=todo.completed_at,
        )


class ThreadDB(Base):
    """Database model for an assistant Thread."""

    __tablename__ = "threads"
    __table_args__ = (
        Index("ix_threads_user_id_status", "user_id", "status"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String, nullable=True)
    status = Column(String, nullable=False, default=ThreadStatus.ACTIVE.value)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from focuslist.models.thread import Thread
        return Thread(
            id=self.id,
            user_id=self.user_id,
            title=self.title,
            status=value_to_enum(self.status, ThreadStatus, ThreadStatus.ACTIVE),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_pydantic(cls, thread):
        """Create database model from Pydantic model."""
        return cls(
            id=thread.id,
            user_id=thread.user_id,
            title=thread.title,
            status=enum_to_value(thread.status),
            created_at=thread.created_at,
            updated_at=thread.updated_at,
        )


class MessageDB(Base):
    """Database model for a thread Message."""

    __tablename__ = "messages"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    # No ON DELETE CASCADE: messages are removed explicitly before their thread.
    thread_id = Column(String, ForeignKey("threads.id"), nullable=False, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    role = Column(String, nullable=False)
    content = Column(String, nullable=False)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from focuslist.models.thread import Message
        return Message(
            id=self.id,
            thread_id=self.thread_id,
            user_id=self.user_id,
            role=value_to_enum(self.role, MessageRole, MessageRole.USER),
            content=self.content,
            created_at=self.created_at,
        )

    @classmethod
    def from_pydantic(cls, message):
        """Create database model from Pydantic model."""
        return cls(
            id=message.id,
            thread_id=message.thread_id,
            user_id=message.user_id,
            role=enum_to_value(message.role),
            content=message.content,
            created_at=message.created_at,
        )


class EmailNotificationDB(Base):
    """Database model for EmailNotification."""

    __tablename__ = "email_notifications"
    __table_args__ = (
        Index("ix_email_notifications_user_id_status", "user_id", "status"),
        Index("ix_email_notifications_status_created_at", "status", "created_at"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    type = Column(String, nullable=False)
    recipient = Column(String, nullable=False)
    subject = Column(String, nullable=False)
    status = Column(String, nullable=False, default=NotificationStatus.PENDING.value)
    sent_at = Column(DateTime, nullable=True)
    error = Column(String, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from focuslist.models.email_notification import EmailNotification
        return EmailNotification(
            id=self.id,
            user_id=self.user_id,
            type=value_to_enum(self.type, NotificationType, NotificationType.WELCOME),
            recipient=self.recipient,
            subject=self.subject,
            status=value_to_enum(self.status, NotificationStatus, NotificationStatus.PENDING),
            sent_at=self.sent_at,
            error=self.error,
            created_at=self.created_at,
        )

    @classmethod
    def from_pydantic(cls, notification):
        """Create database model from Pydantic model."""
        return cls(
            id=notification.id,
            user_id=notification.user_id,
            type=enum_to_value(notification.type),
            recipient=notification.recipient,
            subject=notification.subject,
            status=enum_to_value(notification.status),
            sent_at=notification.sent_at,
            error=notification.error,
            created_at=notification.created_at,
        )


class UserPreferencesDB(Base):
    """Database model for UserPreferences (one row per user)."""

    __tablename__ = "user_preferences"
    __table_args__ = (
        UniqueConstraint("user_id", name="uq_user_preferences_user_id"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    email_notifications_enabled = Column(Boolean, nullable=False, default=True)
    reminder_time = Column(String, nullable=True)
    theme = Column(String, nullable=False, default=Theme.SYSTEM.value)
    default_view = Column(String, nullable=False, default=DefaultView.ALL.value)
    ai_assistant_enabled = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from focuslist.models.user_preferences import UserPreferences
        return UserPreferences(
            id=self.id,
            user_id=self.user_id,
            email_notifications_enabled=self.email_notifications_enabled,
            reminder_time=self.reminder_time,
            theme=value_to_enum(self.theme, Theme, Theme.SYSTEM),
            default_view=value_to_enum(self.default_view, DefaultView, DefaultView.ALL),
            ai_assistant_enabled=self.ai_assistant_enabled,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_pydantic(cls, preferences):
        """Create database model from Pydantic model."""
        return cls(
            id=preferences.id,
            user_id=preferences.user_id,
            email_notifications_enabled=preferences.email_notifications_enabled,
            reminder_time=preferences.reminder_time,
            theme=enum_to_value(preferences.theme),
            default_view=enum_to_value(preferences.default_view),
            ai_assistant_enabled=preferences.ai_assistant_enabled,
            created_at=preferences.created_at,
            updated_at=preferences.updated_at,
        )


class UserDB(Base):
    """Database model for User."""

    __tablename__ = "users"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    # User profile
    email = Column(String, nullable=False, unique=True)
    name = Column(String, nullable=True)

    # PBKDF2 "salt$digest" hex string; never the raw password
    password_hash = Column(String, nullable=False)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from focuslist.models.user import User
        return User(
            id=self.id,
            email=self.email,
            name=self.name,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class RateLimitDB(Base):
    """Rate limiter state: one row per (operation name, key)."""

    __tablename__ = "rate_limits"

    name = Column(String, primary_key=True)
    key = Column(String, primary_key=True)

    # Tokens left (token bucket) or requests left in the window (fixed window)
    value = Column(Float, nullable=False)
    # Last refill instant (token bucket) or window start (fixed window), epoch ms
    ts = Column(Float, nullable=False)
