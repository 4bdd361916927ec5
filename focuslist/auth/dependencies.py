"""FastAPI dependencies for authentication, request context and collaborators."""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from focuslist.database.database import get_db
from focuslist.database.user_repository import UserRepository
from focuslist.auth.jwt import get_user_id_from_token
from focuslist.models.user import User
from focuslist.engine.rate_limiter import RateLimiter
from focuslist.endpoints.common import RequestContext
from focuslist.integrations.email_client import ResendEmailClient

# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)

_rate_limiter = RateLimiter()


def get_auth_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Resolve the caller from a bearer token.

    Returns None instead of raising: operations decide whether a caller is
    required (they raise Unauthenticated themselves).
    """
    if not credentials:
        return None

    user_id = get_user_id_from_token(credentials.credentials)
    if not user_id:
        return None

    return UserRepository(db).get(user_id)


def get_rate_limiter() -> RateLimiter:
    return _rate_limiter


def get_request_context(
    db: Session = Depends(get_db),
    user: Optional[User] = Depends(get_auth_user),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
) -> RequestContext:
    """Bundle session, caller and rate limiter for an operation call."""
    return RequestContext(db=db, user=user, rate_limiter=rate_limiter)


def get_email_sender() -> Optional[ResendEmailClient]:
    """The configured email client, or None when RESEND_API_KEY is unset."""
    try:
        return ResendEmailClient()
    except ValueError:
        return None
