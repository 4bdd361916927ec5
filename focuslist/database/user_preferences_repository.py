"""Repository for UserPreferences database operations."""

import logging
from datetime import datetime
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from focuslist.models.user_preferences import UserPreferences
from focuslist.models.factory import new_user_preferences
from focuslist.database.models import UserPreferencesDB, enum_to_value

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "email_notifications_enabled",
    "reminder_time",
    "theme",
    "default_view",
    "ai_assistant_enabled",
)


class UserPreferencesRepository:
    """Repository for UserPreferences database operations."""

    def __init__(self, db: Session):
        self.db = db

    def _get_row(self, user_id: str) -> Optional[UserPreferencesDB]:
        return self.db.query(UserPreferencesDB).filter(UserPreferencesDB.user_id == user_id).first()

    def create(self, user_id: str) -> UserPreferences:
        """Create default preferences for a user.

        Raises:
            IntegrityError: If the user already has a preferences row
        """
        preferences = new_user_preferences(user_id)
        try:
            row = UserPreferencesDB.from_pydantic(preferences)
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            logger.debug(f"Created preferences {preferences.id} for user {user_id}")
            return row.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create preferences for user {user_id}: {type(e).__name__}: {str(e)}")
            raise

    def get_by_id(self, preferences_id: str) -> Optional[UserPreferences]:
        row = self.db.query(UserPreferencesDB).filter(UserPreferencesDB.id == preferences_id).first()
        return row.to_pydantic() if row else None

    def get_by_user_id(self, user_id: str) -> Optional[UserPreferences]:
        row = self._get_row(user_id)
        return row.to_pydantic() if row else None

    def get_or_create(self, user_id: str) -> UserPreferences:
        """Return the user's preferences, creating the defaults on first use.

        The unique constraint on `user_id` makes the insert the arbiter: if a
        concurrent request inserted first, our insert fails and we read theirs.
        """
        existing = self.get_by_user_id(user_id)
        if existing:
            return existing

        try:
            return self.create(user_id)
        except IntegrityError:
            logger.info(f"Preferences for user {user_id} were created concurrently; re-reading")
            existing = self.get_by_user_id(user_id)
            if not existing:
                raise
            return existing

    def update(self, user_id: str, updates: Dict[str, Any]) -> UserPreferences:
        """Apply a partial update. Keys outside UPDATABLE_FIELDS are rejected."""
        unknown = set(updates) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown preference fields: {sorted(unknown)}")

        row = self._get_row(user_id)
        if not row:
            raise ValueError(f"Preferences for user {user_id} not found")

        for name, value in updates.items():
            if name in ("theme", "default_view"):
                value = enum_to_value(value)
            setattr(row, name, value)
        row.updated_at = datetime.utcnow()

        try:
            self.db.commit()
            self.db.refresh(row)
            logger.debug(f"Updated preferences for user {user_id}: {sorted(updates)}")
            return row.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update preferences for user {user_id}: {type(e).__name__}: {str(e)}")
            raise

    def toggle_email_notifications(self, user_id: str) -> UserPreferences:
        row = self._get_row(user_id)
        if not row:
            raise ValueError(f"Preferences for user {user_id} not found")
        return self.update(user_id, {"email_notifications_enabled": not row.email_notifications_enabled})

    def toggle_ai_assistant(self, user_id: str) -> UserPreferences:
        row = self._get_row(user_id)
        if not row:
            raise ValueError(f"Preferences for user {user_id} not found")
        return self.update(user_id, {"ai_assistant_enabled": not row.ai_assistant_enabled})

    def delete(self, user_id: str) -> bool:
        row = self._get_row(user_id)
        if not row:
            return False

        try:
            self.db.delete(row)
            self.db.commit()
            logger.debug(f"Deleted preferences for user {user_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete preferences for user {user_id}: {type(e).__name__}: {str(e)}")
            raise
