"""Email notification operations for focuslist.

Every delivery is two-phase: a pending EmailNotification record is written
first, then the email is handed to the sender, then the record is marked sent.
If the sender raises, the record is marked failed with the error text before
DeliveryFailure is raised, so every attempt leaves an audit trail.
"""

import logging
from typing import List, Optional

from pydantic import BaseModel
from sqlalchemy.orm import Session

from focuslist.models.email_notification import EmailNotification, NotificationType
from focuslist.models.factory import new_email_notification
from focuslist.models.constants import (
    EMAIL_SUBJECT_WELCOME,
    EMAIL_SUBJECT_TODO_REMINDER,
    EMAIL_SUBJECT_WEEKLY_SUMMARY,
)
from focuslist.database.email_notification_repository import EmailNotificationRepository
from focuslist.database.user_preferences_repository import UserPreferencesRepository
from focuslist.database.todo_repository import TodoRepository
from focuslist.integrations.email_client import default_sender
from focuslist.integrations.email_templates import (
    welcome_email_html,
    todo_reminder_email_html,
    weekly_summary_email_html,
)
from focuslist.endpoints.common import RequestContext, require_user, enforce_rate_limit
from focuslist.endpoints.errors import DeliveryFailure

logger = logging.getLogger(__name__)

REASON_DISABLED = "Email notifications disabled"
REASON_NO_ACTIVE_TODOS = "No active todos"


class NotificationResult(BaseModel):
    success: bool
    reason: Optional[str] = None
    notification_id: Optional[str] = None


def _notifications_enabled(db: Session, user_id: str) -> bool:
    preferences = UserPreferencesRepository(db).get_by_user_id(user_id)
    return bool(preferences and preferences.email_notifications_enabled)


def _deliver(
    db: Session,
    email_sender,
    user_id: str,
    notification_type: NotificationType,
    recipient: str,
    subject: str,
    html: str,
) -> NotificationResult:
    repo = EmailNotificationRepository(db)
    record = repo.create(new_email_notification(user_id, notification_type, recipient, subject))

    try:
        email_sender.send_email(from_=default_sender(), to=recipient, subject=subject, html=html)
    except Exception as e:
        logger.warning(f"Delivery of {record.type} notification {record.id} failed: {type(e).__name__}: {e}")
        repo.mark_failed(record.id, str(e))
        raise DeliveryFailure(f"Failed to send email: {e}", notification_id=record.id) from e

    repo.mark_sent(record.id)
    logger.info(f"Sent {record.type} email {record.id} to user {user_id}")
    return NotificationResult(success=True, notification_id=record.id)


def send_welcome_email(
    db: Session, email_sender, user_id: str, email: str, name: Optional[str] = None
) -> NotificationResult:
    """Welcome a new user. Sent regardless of preferences."""
    return _deliver(
        db,
        email_sender,
        user_id,
        NotificationType.WELCOME,
        email,
        EMAIL_SUBJECT_WELCOME,
        welcome_email_html(name),
    )


def send_todo_reminder(db: Session, email_sender, user_id: str, email: str) -> NotificationResult:
    """Remind a user of their active todos, unless disabled or there is nothing to do."""
    if not _notifications_enabled(db, user_id):
        return NotificationResult(success=False, reason=REASON_DISABLED)

    active_todos = TodoRepository(db).get_active_by_user(user_id)
    if not active_todos:
        return NotificationResult(success=False, reason=REASON_NO_ACTIVE_TODOS)

    return _deliver(
        db,
        email_sender,
        user_id,
        NotificationType.TODO_REMINDER,
        email,
        EMAIL_SUBJECT_TODO_REMINDER,
        todo_reminder_email_html(len(active_todos), active_todos),
    )


def send_weekly_summary(db: Session, email_sender, user_id: str, email: str) -> NotificationResult:
    """Summarize the user's todos: all created, all completed, still active."""
    if not _notifications_enabled(db, user_id):
        return NotificationResult(success=False, reason=REASON_DISABLED)

    todo_repo = TodoRepository(db)
    created = todo_repo.count_by_user(user_id)
    completed = todo_repo.count_completed_by_user(user_id)
    active = todo_repo.count_active_by_user(user_id)

    return _deliver(
        db,
        email_sender,
        user_id,
        NotificationType.WEEKLY_SUMMARY,
        email,
        EMAIL_SUBJECT_WEEKLY_SUMMARY,
        weekly_summary_email_html(created, completed, active),
    )


# Caller-facing operations

def list_notifications(ctx: RequestContext) -> List[EmailNotification]:
    user = require_user(ctx)
    return EmailNotificationRepository(ctx.db).get_by_user(user.id)


def trigger_reminder(ctx: RequestContext, email_sender) -> NotificationResult:
    """Send the caller a reminder email now."""
    user = require_user(ctx)
    enforce_rate_limit(ctx, "sendEmail", user)
    return send_todo_reminder(ctx.db, email_sender, user.id, user.email)


def trigger_weekly_summary(ctx: RequestContext, email_sender) -> NotificationResult:
    """Send the caller their weekly summary now."""
    user = require_user(ctx)
    enforce_rate_limit(ctx, "sendEmail", user)
    return send_weekly_summary(ctx.db, email_sender, user.id, user.email)
