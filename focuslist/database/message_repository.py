"""Repository for thread Message database operations.

Messages are immutable: there is no update method.
"""

import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import asc, desc

from focuslist.models.thread import Message
from focuslist.models.constants import RECENT_MESSAGES_LIMIT
from focuslist.database.models import MessageDB

logger = logging.getLogger(__name__)


class MessageRepository:
    """Repository for Message database operations."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, message: Message) -> Message:
        """Store a new message."""
        try:
            message_db = MessageDB.from_pydantic(message)
            self.db.add(message_db)
            self.db.commit()
            self.db.refresh(message_db)
            logger.debug(f"Created {message.role} message {message.id} in thread {message.thread_id}")
            return message_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create message {message.id}: {type(e).__name__}: {str(e)}")
            raise

    def get_by_id(self, message_id: str) -> Optional[Message]:
        message_db = self.db.query(MessageDB).filter(MessageDB.id == message_id).first()
        return message_db.to_pydantic() if message_db else None

    def get_by_thread(self, thread_id: str) -> List[Message]:
        """Get all messages in a thread in chronological order."""
        messages_db = self.db.query(MessageDB).filter(
            MessageDB.thread_id == thread_id,
        ).order_by(asc(MessageDB.created_at)).all()
        return [message_db.to_pydantic() for message_db in messages_db]

    def get_by_user(self, user_id: str) -> List[Message]:
        """Get all messages for a user (newest first)."""
        messages_db = self.db.query(MessageDB).filter(
            MessageDB.user_id == user_id,
        ).order_by(desc(MessageDB.created_at)).all()
        return [message_db.to_pydantic() for message_db in messages_db]

    def get_recent_by_thread(self, thread_id: str, limit: int = RECENT_MESSAGES_LIMIT) -> List[Message]:
        """Get the last `limit` messages of a thread, oldest first."""
        messages_db = self.db.query(MessageDB).filter(
            MessageDB.thread_id == thread_id,
        ).order_by(desc(MessageDB.created_at)).limit(limit).all()
        return [message_db.to_pydantic() for message_db in reversed(messages_db)]

    def count_by_user(self, user_id: str) -> int:
        return len(self.get_by_user(user_id))

    def delete(self, message_id: str) -> bool:
        message_db = self.db.query(MessageDB).filter(MessageDB.id == message_id).first()
        if not message_db:
            return False

        try:
            self.db.delete(message_db)
            self.db.commit()
            logger.debug(f"Deleted message {message_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete message {message_id}: {type(e).__name__}: {str(e)}")
            raise

    def delete_by_thread(self, thread_id: str) -> int:
        """Delete every message in a thread and return how many were removed."""
        messages_db = self.db.query(MessageDB).filter(MessageDB.thread_id == thread_id).all()
        if not messages_db:
            return 0

        try:
            for message_db in messages_db:
                self.db.delete(message_db)
            self.db.commit()
            logger.debug(f"Deleted {len(messages_db)} messages from thread {thread_id}")
            return len(messages_db)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete messages for thread {thread_id}: {type(e).__name__}: {str(e)}")
            raise
