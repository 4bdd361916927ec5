"""Request plumbing shared by every focuslist operation.

Each operation receives a RequestContext and runs the same steps:
resolve the caller, apply the rate limit (mutations only), validate input,
check ownership of any addressed record, then call the repositories.
"""

import logging
from typing import Optional, TypeVar
from sqlalchemy.orm import Session

from focuslist.models.user import User
from focuslist.engine.rate_limiter import RateLimiter
from focuslist.endpoints.errors import Unauthenticated, RateLimited, NotFound, NotAuthorized

logger = logging.getLogger(__name__)

R = TypeVar("R")


class RequestContext:
    """Everything an operation needs from the request that triggered it."""

    def __init__(self, db: Session, user: Optional[User], rate_limiter: RateLimiter):
        self.db = db
        self.user = user
        self.rate_limiter = rate_limiter


def require_user(ctx: RequestContext) -> User:
    """Return the authenticated caller or fail with Unauthenticated."""
    if ctx.user is None:
        raise Unauthenticated()
    return ctx.user


def enforce_rate_limit(ctx: RequestContext, operation: str, user: User) -> None:
    """Consult the limiter keyed by (operation, caller)."""
    status = ctx.rate_limiter.limit(ctx.db, operation, key=user.id)
    if not status.ok:
        raise RateLimited(status.retry_after_ms)


def ensure_owned(record: Optional[R], user: User, kind: str, action: str) -> R:
    """Fail with NotFound if the record is absent, NotAuthorized if someone else owns it.

    Args:
        record: Loaded record (anything with a `user_id`), or None
        user: The caller
        kind: Entity name used in messages, e.g. "todo"
        action: Verb used in the NotAuthorized message, e.g. "update"
    """
    if record is None:
        raise NotFound(f"{kind.capitalize()} not found")
    if record.user_id != user.id:
        logger.warning(f"User {user.id} tried to {action} {kind} owned by another user")
        raise NotAuthorized(f"Not authorized to {action} this {kind}")
    return record
