"""Per-user rate limiting for focuslist.

State lives in the `rate_limits` table, one row per (operation name, key), so
limits hold across processes that share the database.

Two algorithms are supported:
- token bucket: `capacity` tokens, refilled continuously at `rate` per `period`
- fixed window: `rate` requests per `period`, window aligned to the first request

Usage:
    limiter = RateLimiter()
    status = limiter.limit(db, "createTodo", key=user.id)
    if not status.ok:
        # status.retry_after_ms tells the caller when to come back
"""

import logging
import math
import time
from typing import Callable, Dict, Optional
from sqlalchemy.orm import Session

from focuslist.database.models import RateLimitDB
from focuslist.models.constants import RATE_LIMITS

logger = logging.getLogger(__name__)

TOKEN_BUCKET = "token bucket"
FIXED_WINDOW = "fixed window"


class RateLimitStatus:
    """Outcome of a rate limit check."""

    def __init__(self, ok: bool, retry_after_ms: Optional[float] = None):
        self.ok = ok
        self.retry_after_ms = retry_after_ms

    def __repr__(self) -> str:
        return f"RateLimitStatus(ok={self.ok}, retry_after_ms={self.retry_after_ms})"


def _now_ms() -> float:
    return time.time() * 1000


class RateLimiter:
    """Database-backed token bucket / fixed window rate limiter."""

    def __init__(self, limits: Optional[Dict[str, dict]] = None, clock: Callable[[], float] = _now_ms):
        """
        Args:
            limits: Operation name -> config dict (defaults to RATE_LIMITS)
            clock: Returns the current time in epoch milliseconds
        """
        self.limits = limits if limits is not None else RATE_LIMITS
        self.clock = clock
        for name, config in self.limits.items():
            if config.get("kind") not in (TOKEN_BUCKET, FIXED_WINDOW):
                raise ValueError(f"Unknown rate limit kind for {name}: {config.get('kind')}")

    def _config(self, name: str) -> dict:
        config = self.limits.get(name)
        if config is None:
            raise ValueError(f"Rate limit {name} is not configured")
        return config

    def limit(self, db: Session, name: str, key: str, count: int = 1) -> RateLimitStatus:
        """Consume `count` units for (name, key).

        Returns a status with ok=False and a retry-after hint when the limit is
        exhausted; in that case no units are consumed.
        """
        config = self._config(name)
        now = self.clock()
        rate = config["rate"]
        period = config["period"]

        row = db.query(RateLimitDB).filter(RateLimitDB.name == name, RateLimitDB.key == key).first()

        if config["kind"] == TOKEN_BUCKET:
            capacity = config.get("capacity", rate)
            if row is None:
                value, ts = capacity, now
            else:
                elapsed = max(0.0, now - row.ts)
                value, ts = min(capacity, row.value + elapsed * rate / period), now
            value -= count
            retry_after = -value * period / rate if value < 0 else None
        else:
            if row is None:
                value, ts = rate, now
            else:
                windows = math.floor(max(0.0, now - row.ts) / period)
                value = min(rate, row.value + rate * windows)
                ts = row.ts + windows * period
            value -= count
            retry_after = ts + period - now if value < 0 else None

        if retry_after is not None:
            logger.warning(f"Rate limit {name} exceeded for {key}; retry after {retry_after:.0f}ms")
            return RateLimitStatus(ok=False, retry_after_ms=retry_after)

        try:
            if row is None:
                db.add(RateLimitDB(name=name, key=key, value=value, ts=ts))
            else:
                row.value = value
                row.ts = ts
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to record rate limit {name} for {key}: {type(e).__name__}: {str(e)}")
            raise
        return RateLimitStatus(ok=True)

    def reset(self, db: Session, name: str, key: str) -> None:
        """Forget the state for (name, key)."""
        db.query(RateLimitDB).filter(RateLimitDB.name == name, RateLimitDB.key == key).delete(
            synchronize_session=False
        )
        db.commit()
