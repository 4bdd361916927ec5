"""Input validation for focuslist.

Pure functions only: no database access, no request context. Every validator
is total and answers with a boolean; callers decide how to reject input.
"""

import re
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from focuslist.models.todo import TodoPriority
from focuslist.models.constants import (
    MAX_TODO_TEXT_LENGTH,
    MAX_TAGS,
    MAX_TAG_LENGTH,
    MAX_THREAD_TITLE_LENGTH,
    MAX_MESSAGE_LENGTH,
)

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_REMINDER_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")
_WHITESPACE_RUN = re.compile(r"\s+")

_PRIORITIES = {p.value for p in TodoPriority}


def sanitize_text(text: str) -> str:
    """Trim and collapse internal whitespace runs to single spaces."""
    return _WHITESPACE_RUN.sub(" ", text.strip())


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_PATTERN.match(email or ""))


def is_valid_todo_text(text: str) -> bool:
    """Non-empty after trimming and at most 500 characters."""
    return len(text.strip()) > 0 and len(text) <= MAX_TODO_TEXT_LENGTH


def is_valid_thread_title(title: Optional[str] = None) -> bool:
    if not title:
        return True
    return len(title) <= MAX_THREAD_TITLE_LENGTH


def is_valid_message_content(content: str) -> bool:
    """Non-empty after trimming and at most 5000 characters."""
    return len(content.strip()) > 0 and len(content) <= MAX_MESSAGE_LENGTH


def is_valid_reminder_time(time: Optional[str] = None) -> bool:
    """Optional; when present must be HH:MM with HH 00-23 and MM 00-59."""
    if not time:
        return True
    return bool(_REMINDER_TIME_PATTERN.match(time))


def is_valid_priority(priority: Optional[str] = None) -> bool:
    if not priority:
        return True
    value = priority.value if isinstance(priority, TodoPriority) else priority
    return value in _PRIORITIES


def to_utc_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values are assumed UTC already."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def is_valid_due_date(due_date: Optional[datetime] = None, now: Optional[datetime] = None) -> bool:
    """Optional; when present must be strictly in the future."""
    if due_date is None:
        return True
    return to_utc_naive(due_date) > (now or datetime.utcnow())


def sanitize_tags(tags: Optional[Iterable[str]] = None) -> Optional[List[str]]:
    """Trim and lowercase each tag, drop empties, and de-duplicate.

    Returns None when no tags were given.
    """
    if not tags:
        return None

    sanitized: List[str] = []
    seen = set()
    for tag in tags:
        normalized = tag.strip().lower()
        if normalized and normalized not in seen:
            seen.add(normalized)
            sanitized.append(normalized)
    return sanitized


def is_valid_tags(tags: Optional[List[str]] = None) -> bool:
    """Optional; when present at most 10 tags, each 1-30 characters."""
    if tags is None:
        return True
    if len(tags) > MAX_TAGS:
        return False
    return all(0 < len(tag) <= MAX_TAG_LENGTH for tag in tags)
