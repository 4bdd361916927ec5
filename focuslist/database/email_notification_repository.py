"""Repository for EmailNotification database operations."""

import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import asc, desc

from focuslist.models.email_notification import EmailNotification, NotificationStatus
from focuslist.database.models import EmailNotificationDB, enum_to_value

logger = logging.getLogger(__name__)


class EmailNotificationRepository:
    """Repository for EmailNotification database operations."""

    def __init__(self, db: Session):
        self.db = db

    def _finish(self, notification_id: str, **fields) -> EmailNotification:
        """Move a pending notification into a terminal state."""
        notification_db = self.db.query(EmailNotificationDB).filter(
            EmailNotificationDB.id == notification_id,
        ).first()
        if not notification_db:
            raise ValueError(f"Email notification {notification_id} not found")
        if notification_db.status != NotificationStatus.PENDING.value:
            raise ValueError(
                f"Email notification {notification_id} is already {notification_db.status}"
            )

        for name, value in fields.items():
            setattr(notification_db, name, value)

        try:
            self.db.commit()
            self.db.refresh(notification_db)
            logger.debug(f"Email notification {notification_id} -> {notification_db.status}")
            return notification_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update email notification {notification_id}: {type(e).__name__}: {str(e)}")
            raise

    def create(self, notification: EmailNotification) -> EmailNotification:
        """Create a notification record (normally pending)."""
        try:
            notification_db = EmailNotificationDB.from_pydantic(notification)
            self.db.add(notification_db)
            self.db.commit()
            self.db.refresh(notification_db)
            logger.debug(f"Created {notification.type} notification {notification.id} for user {notification.user_id}")
            return notification_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create email notification {notification.id}: {type(e).__name__}: {str(e)}")
            raise

    def get_by_id(self, notification_id: str) -> Optional[EmailNotification]:
        notification_db = self.db.query(EmailNotificationDB).filter(
            EmailNotificationDB.id == notification_id,
        ).first()
        return notification_db.to_pydantic() if notification_db else None

    def get_by_user(self, user_id: str) -> List[EmailNotification]:
        """Get all notifications for a user (newest first)."""
        rows = self.db.query(EmailNotificationDB).filter(
            EmailNotificationDB.user_id == user_id,
        ).order_by(desc(EmailNotificationDB.created_at)).all()
        return [row.to_pydantic() for row in rows]

    def get_by_user_and_status(self, user_id: str, status: NotificationStatus) -> List[EmailNotification]:
        rows = self.db.query(EmailNotificationDB).filter(
            EmailNotificationDB.user_id == user_id,
            EmailNotificationDB.status == enum_to_value(status),
        ).order_by(desc(EmailNotificationDB.created_at)).all()
        return [row.to_pydantic() for row in rows]

    def get_pending(self) -> List[EmailNotification]:
        """Get pending notifications across users, oldest first."""
        rows = self.db.query(EmailNotificationDB).filter(
            EmailNotificationDB.status == NotificationStatus.PENDING.value,
        ).order_by(asc(EmailNotificationDB.created_at)).all()
        return [row.to_pydantic() for row in rows]

    def get_failed(self) -> List[EmailNotification]:
        """Get failed notifications across users, newest first."""
        rows = self.db.query(EmailNotificationDB).filter(
            EmailNotificationDB.status == NotificationStatus.FAILED.value,
        ).order_by(desc(EmailNotificationDB.created_at)).all()
        return [row.to_pydantic() for row in rows]

    def count_by_user(self, user_id: str) -> int:
        return len(self.get_by_user(user_id))

    def mark_sent(self, notification_id: str) -> EmailNotification:
        return self._finish(
            notification_id,
            status=NotificationStatus.SENT.value,
            sent_at=datetime.utcnow(),
        )

    def mark_failed(self, notification_id: str, error: str) -> EmailNotification:
        return self._finish(
            notification_id,
            status=NotificationStatus.FAILED.value,
            error=error,
        )

    def delete(self, notification_id: str) -> bool:
        notification_db = self.db.query(EmailNotificationDB).filter(
            EmailNotificationDB.id == notification_id,
        ).first()
        if not notification_db:
            return False

        try:
            self.db.delete(notification_db)
            self.db.commit()
            logger.debug(f"Deleted email notification {notification_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete email notification {notification_id}: {type(e).__name__}: {str(e)}")
            raise
