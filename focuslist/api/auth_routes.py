"""Authentication routes, mounted under /auth."""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from focuslist.api.schemas import SignUpRequest, SignInRequest, AuthResponse, SessionResponse
from focuslist.auth.dependencies import get_auth_user, get_email_sender
from focuslist.auth.jwt import create_access_token
from focuslist.auth.passwords import hash_password, verify_password
from focuslist.database.database import get_db
from focuslist.database.user_repository import UserRepository
from focuslist.database.user_preferences_repository import UserPreferencesRepository
from focuslist.engine.validation import is_valid_email
from focuslist.endpoints.errors import DeliveryFailure
from focuslist.endpoints.notifications import send_welcome_email
from focuslist.integrations.email_client import ResendEmailClient
from focuslist.models.user import User

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/sign-up", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def sign_up(
    request: SignUpRequest,
    db: Session = Depends(get_db),
    email_sender: Optional[ResendEmailClient] = Depends(get_email_sender),
):
    """Register a user, create their default preferences and send the welcome email."""
    email = request.email.strip().lower()
    if not is_valid_email(email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid email address")
    if len(request.password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
        )

    users = UserRepository(db)
    if users.get_by_email(email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")

    user = users.create(email=email, password_hash=hash_password(request.password), name=request.name)
    UserPreferencesRepository(db).get_or_create(user.id)

    if email_sender is None:
        logger.info(f"Email delivery not configured; skipping welcome email for user {user.id}")
    else:
        try:
            send_welcome_email(db, email_sender, user.id, user.email, user.name)
        except DeliveryFailure as e:
            # Sign-up stands; the failed attempt is recorded on the notification.
            logger.warning(f"Welcome email for user {user.id} failed: {e.message}")

    return AuthResponse(access_token=create_access_token(user.id), user=user)


@router.post("/sign-in", response_model=AuthResponse)
def sign_in(request: SignInRequest, db: Session = Depends(get_db)):
    email = request.email.strip().lower()
    users = UserRepository(db)
    stored = users.get_password_hash(email)
    if not stored or not verify_password(request.password, stored):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = users.get_by_email(email)
    return AuthResponse(access_token=create_access_token(user.id), user=user)


@router.get("/session", response_model=SessionResponse)
def session(user: Optional[User] = Depends(get_auth_user)):
    """Return the user behind the bearer token."""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return SessionResponse(user=user)
