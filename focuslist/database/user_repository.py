"""Repository for User database operations."""

import logging
import uuid
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session

from focuslist.models.user import User
from focuslist.database.models import UserDB

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        user_db = self.db.query(UserDB).filter(UserDB.id == user_id).first()
        return user_db.to_pydantic() if user_db else None

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        user_db = self.db.query(UserDB).filter(UserDB.email == email).first()
        return user_db.to_pydantic() if user_db else None

    def get_password_hash(self, email: str) -> Optional[str]:
        """Get the stored password hash for an email, if the user exists."""
        user_db = self.db.query(UserDB).filter(UserDB.email == email).first()
        return user_db.password_hash if user_db else None

    def create(self, email: str, password_hash: str, name: Optional[str] = None) -> User:
        """Create a new user.

        Args:
            email: Normalized email address (must be unique)
            password_hash: Output of `hash_password`
            name: Optional display name

        Returns:
            Created User object
        """
        now = datetime.utcnow()
        try:
            user_db = UserDB(
                id=str(uuid.uuid4()),
                email=email,
                name=name,
                password_hash=password_hash,
                created_at=now,
                updated_at=now,
            )
            self.db.add(user_db)
            self.db.commit()
            self.db.refresh(user_db)
            logger.debug(f"Created user {user_db.id}: {email}")
            return user_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create user {email}: {type(e).__name__}: {str(e)}")
            raise
