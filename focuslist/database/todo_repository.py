"""Repository layer for todo database operations.

This is the only module that reads or writes the `todos` table.
"""

import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import desc

from focuslist.models.todo import Todo
from focuslist.database.models import TodoDB, enum_to_value

logger = logging.getLogger(__name__)


class TodoRepository:
    """Repository for Todo database operations."""

    def __init__(self, db: Session):
        self.db = db

    def _get_row(self, todo_id: str) -> Optional[TodoDB]:
        return self.db.query(TodoDB).filter(TodoDB.id == todo_id).first()

    def _patch(self, todo_id: str, **fields) -> Todo:
        """Apply `fields` to a single todo as one update and return the patched record."""
        todo_db = self._get_row(todo_id)
        if not todo_db:
            raise ValueError(f"Todo {todo_id} not found")

        for name, value in fields.items():
            setattr(todo_db, name, value)
        todo_db.updated_at = fields.get("updated_at") or datetime.utcnow()

        try:
            self.db.commit()
            self.db.refresh(todo_db)
            logger.debug(f"Patched todo {todo_id}: {sorted(fields)}")
            return todo_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to patch todo {todo_id}: {type(e).__name__}: {str(e)}")
            raise

    # Create

    def create(self, todo: Todo) -> Todo:
        """Create a new todo."""
        try:
            todo_db = TodoDB.from_pydantic(todo)
            self.db.add(todo_db)
            self.db.commit()
            self.db.refresh(todo_db)
            logger.debug(f"Created todo {todo.id}: {todo.text[:50]}")
            return todo_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create todo {todo.id}: {type(e).__name__}: {str(e)}")
            raise

    # Read

    def get_by_id(self, todo_id: str) -> Optional[Todo]:
        """Get a todo by ID regardless of owner (callers check ownership)."""
        todo_db = self._get_row(todo_id)
        return todo_db.to_pydantic() if todo_db else None

    def get_by_user(self, user_id: str) -> List[Todo]:
        """Get all todos for a user sorted by creation date (newest first)."""
        todos_db = self.db.query(TodoDB).filter(
            TodoDB.user_id == user_id,
        ).order_by(desc(TodoDB.created_at)).all()
        return [todo_db.to_pydantic() for todo_db in todos_db]

    def get_by_user_and_completed(self, user_id: str, completed: bool) -> List[Todo]:
        """Get a user's todos with the given completion flag (newest first)."""
        todos_db = self.db.query(TodoDB).filter(
            TodoDB.user_id == user_id,
            TodoDB.completed == completed,
        ).order_by(desc(TodoDB.created_at)).all()
        return [todo_db.to_pydantic() for todo_db in todos_db]

    def get_active_by_user(self, user_id: str) -> List[Todo]:
        """Get active (incomplete) todos for a user."""
        return self.get_by_user_and_completed(user_id, False)

    def get_completed_by_user(self, user_id: str) -> List[Todo]:
        """Get completed todos for a user."""
        return self.get_by_user_and_completed(user_id, True)

    def count_by_user(self, user_id: str) -> int:
        return len(self.get_by_user(user_id))

    def count_active_by_user(self, user_id: str) -> int:
        return len(self.get_active_by_user(user_id))

    def count_completed_by_user(self, user_id: str) -> int:
        return len(self.get_completed_by_user(user_id))

    # Update

    def update_text(self, todo_id: str, text: str) -> Todo:
        return self._patch(todo_id, text=text)

    def toggle_completed(self, todo_id: str) -> Todo:
        """Flip `completed` and set or clear `completed_at` in the same update."""
        todo_db = self._get_row(todo_id)
        if not todo_db:
            raise ValueError(f"Todo {todo_id} not found")

        now = datetime.utcnow()
        completed = not todo_db.completed
        return self._patch(
            todo_id,
            completed=completed,
            completed_at=now if completed else None,
            updated_at=now,
        )

    def complete(self, todo_id: str) -> Todo:
        """Mark a todo as completed."""
        now = datetime.utcnow()
        return self._patch(todo_id, completed=True, completed_at=now, updated_at=now)

    def incomplete(self, todo_id: str) -> Todo:
        """Mark a todo as not completed."""
        return self._patch(todo_id, completed=False, completed_at=None)

    def update_priority(self, todo_id: str, priority: Optional[str]) -> Todo:
        return self._patch(todo_id, priority=enum_to_value(priority))

    def update_due_date(self, todo_id: str, due_date: Optional[datetime]) -> Todo:
        return self._patch(todo_id, due_date=due_date)

    def update_tags(self, todo_id: str, tags: Optional[List[str]]) -> Todo:
        return self._patch(todo_id, tags=tags)

    # Delete

    def delete(self, todo_id: str) -> bool:
        """Delete a todo by ID. Returns False if it does not exist."""
        todo_db = self._get_row(todo_id)
        if not todo_db:
            return False

        try:
            self.db.delete(todo_db)
            self.db.commit()
            logger.debug(f"Deleted todo {todo_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete todo {todo_id}: {type(e).__name__}: {str(e)}")
            raise

    def delete_completed(self, user_id: str) -> int:
        """Delete every completed todo for a user and return how many were removed."""
        completed_db = self.db.query(TodoDB).filter(
            TodoDB.user_id == user_id,
            TodoDB.completed.is_(True),
        ).all()
        if not completed_db:
            return 0

        try:
            for todo_db in completed_db:
                self.db.delete(todo_db)
            self.db.commit()
            logger.debug(f"Deleted {len(completed_db)} completed todos for user {user_id}")
            return len(completed_db)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete completed todos for user {user_id}: {type(e).__name__}: {str(e)}")
            raise
