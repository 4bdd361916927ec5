"""Validation and admission control for focuslist."""

from focuslist.engine.validation import (
    sanitize_text,
    sanitize_tags,
    is_valid_email,
    is_valid_todo_text,
    is_valid_thread_title,
    is_valid_message_content,
    is_valid_reminder_time,
    is_valid_priority,
    is_valid_due_date,
    is_valid_tags,
)
from focuslist.engine.rate_limiter import RateLimiter, RateLimitStatus

__all__ = [
    "sanitize_text",
    "sanitize_tags",
    "is_valid_email",
    "is_valid_todo_text",
    "is_valid_thread_title",
    "is_valid_message_content",
    "is_valid_reminder_time",
    "is_valid_priority",
    "is_valid_due_date",
    "is_valid_tags",
    "RateLimiter",
    "RateLimitStatus",
]
