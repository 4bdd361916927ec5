"""Repository for assistant Thread database operations."""

import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import desc

from focuslist.models.thread import Thread, ThreadStatus
from focuslist.database.models import ThreadDB, enum_to_value

logger = logging.getLogger(__name__)


class ThreadRepository:
    """Repository for Thread database operations."""

    def __init__(self, db: Session):
        self.db = db

    def _patch(self, thread_id: str, **fields) -> Thread:
        thread_db = self.db.query(ThreadDB).filter(ThreadDB.id == thread_id).first()
        if not thread_db:
            raise ValueError(f"Thread {thread_id} not found")

        for name, value in fields.items():
            setattr(thread_db, name, value)
        thread_db.updated_at = datetime.utcnow()

        try:
            self.db.commit()
            self.db.refresh(thread_db)
            logger.debug(f"Patched thread {thread_id}: {sorted(fields)}")
            return thread_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to patch thread {thread_id}: {type(e).__name__}: {str(e)}")
            raise

    def create(self, thread: Thread) -> Thread:
        """Create a new thread."""
        try:
            thread_db = ThreadDB.from_pydantic(thread)
            self.db.add(thread_db)
            self.db.commit()
            self.db.refresh(thread_db)
            logger.debug(f"Created thread {thread.id} for user {thread.user_id}")
            return thread_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create thread {thread.id}: {type(e).__name__}: {str(e)}")
            raise

    def get_by_id(self, thread_id: str) -> Optional[Thread]:
        thread_db = self.db.query(ThreadDB).filter(ThreadDB.id == thread_id).first()
        return thread_db.to_pydantic() if thread_db else None

    def get_by_user(self, user_id: str) -> List[Thread]:
        """Get all threads for a user (newest first)."""
        threads_db = self.db.query(ThreadDB).filter(
            ThreadDB.user_id == user_id,
        ).order_by(desc(ThreadDB.created_at)).all()
        return [thread_db.to_pydantic() for thread_db in threads_db]

    def get_by_user_and_status(self, user_id: str, status: ThreadStatus) -> List[Thread]:
        """Get a user's threads with the given status (newest first)."""
        threads_db = self.db.query(ThreadDB).filter(
            ThreadDB.user_id == user_id,
            ThreadDB.status == enum_to_value(status),
        ).order_by(desc(ThreadDB.created_at)).all()
        return [thread_db.to_pydantic() for thread_db in threads_db]

    def get_active_by_user(self, user_id: str) -> List[Thread]:
        return self.get_by_user_and_status(user_id, ThreadStatus.ACTIVE)

    def get_archived_by_user(self, user_id: str) -> List[Thread]:
        return self.get_by_user_and_status(user_id, ThreadStatus.ARCHIVED)

    def count_by_user(self, user_id: str) -> int:
        return len(self.get_by_user(user_id))

    def update_title(self, thread_id: str, title: str) -> Thread:
        return self._patch(thread_id, title=title)

    def archive(self, thread_id: str) -> Thread:
        return self._patch(thread_id, status=ThreadStatus.ARCHIVED.value)

    def unarchive(self, thread_id: str) -> Thread:
        return self._patch(thread_id, status=ThreadStatus.ACTIVE.value)

    def delete(self, thread_id: str) -> bool:
        """Delete a thread. Its messages must already be gone."""
        thread_db = self.db.query(ThreadDB).filter(ThreadDB.id == thread_id).first()
        if not thread_db:
            return False

        try:
            self.db.delete(thread_db)
            self.db.commit()
            logger.debug(f"Deleted thread {thread_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete thread {thread_id}: {type(e).__name__}: {str(e)}")
            raise
