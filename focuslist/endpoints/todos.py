"""Todo operations for focuslist.

Composes validation and TodoRepository calls behind the shared request steps.
"""

from datetime import datetime
from typing import List, Optional

from focuslist.models.todo import Todo, TodoStats
from focuslist.models.factory import new_todo
from focuslist.database.todo_repository import TodoRepository
from focuslist.engine.validation import (
    sanitize_text,
    sanitize_tags,
    is_valid_todo_text,
    is_valid_priority,
    is_valid_due_date,
    is_valid_tags,
    to_utc_naive,
)
from focuslist.endpoints.common import RequestContext, require_user, enforce_rate_limit, ensure_owned
from focuslist.endpoints.errors import InvalidInput

INVALID_TEXT = "Invalid todo text. Must be non-empty and under 500 characters."
INVALID_PRIORITY = "Invalid priority. Must be 'low', 'medium', or 'high'."
INVALID_DUE_DATE = "Invalid due date. Must be in the future."
INVALID_TAGS = "Invalid tags. Maximum 10 tags, each under 30 characters."


def _clean_text(text: str) -> str:
    sanitized = sanitize_text(text)
    if not is_valid_todo_text(sanitized):
        raise InvalidInput("text", INVALID_TEXT)
    return sanitized


def _clean_priority(priority: Optional[str]) -> Optional[str]:
    if not is_valid_priority(priority):
        raise InvalidInput("priority", INVALID_PRIORITY)
    return priority or None


def _clean_due_date(due_date: Optional[datetime]) -> Optional[datetime]:
    if not is_valid_due_date(due_date):
        raise InvalidInput("due_date", INVALID_DUE_DATE)
    return to_utc_naive(due_date) if due_date is not None else None


def _clean_tags(tags: Optional[List[str]]) -> Optional[List[str]]:
    sanitized = sanitize_tags(tags)
    if sanitized and not is_valid_tags(sanitized):
        raise InvalidInput("tags", INVALID_TAGS)
    return sanitized or None


def _load_owned(ctx: RequestContext, todo_id: str, action: str) -> Todo:
    user = require_user(ctx)
    return ensure_owned(TodoRepository(ctx.db).get_by_id(todo_id), user, "todo", action)


# Queries

def list_todos(ctx: RequestContext) -> List[Todo]:
    """All of the caller's todos, newest first."""
    user = require_user(ctx)
    return TodoRepository(ctx.db).get_by_user(user.id)


def list_active(ctx: RequestContext) -> List[Todo]:
    user = require_user(ctx)
    return TodoRepository(ctx.db).get_active_by_user(user.id)


def list_completed(ctx: RequestContext) -> List[Todo]:
    user = require_user(ctx)
    return TodoRepository(ctx.db).get_completed_by_user(user.id)


def stats(ctx: RequestContext) -> TodoStats:
    """Total, active and completed counts for the caller."""
    user = require_user(ctx)
    repo = TodoRepository(ctx.db)
    return TodoStats(
        total=repo.count_by_user(user.id),
        active=repo.count_active_by_user(user.id),
        completed=repo.count_completed_by_user(user.id),
    )


# Mutations

def create_todo(
    ctx: RequestContext,
    text: str,
    priority: Optional[str] = None,
    due_date: Optional[datetime] = None,
    tags: Optional[List[str]] = None,
) -> str:
    """Create a todo for the caller and return its id."""
    user = require_user(ctx)
    enforce_rate_limit(ctx, "createTodo", user)

    todo = new_todo(
        user_id=user.id,
        text=_clean_text(text),
        priority=_clean_priority(priority),
        due_date=_clean_due_date(due_date),
        tags=_clean_tags(tags),
    )
    return TodoRepository(ctx.db).create(todo).id


def update_text(ctx: RequestContext, todo_id: str, text: str) -> Todo:
    user = require_user(ctx)
    enforce_rate_limit(ctx, "updateTodo", user)
    sanitized = _clean_text(text)
    _load_owned(ctx, todo_id, "update")
    return TodoRepository(ctx.db).update_text(todo_id, sanitized)


def toggle(ctx: RequestContext, todo_id: str) -> Todo:
    """Flip the completion state of one of the caller's todos."""
    user = require_user(ctx)
    enforce_rate_limit(ctx, "updateTodo", user)
    _load_owned(ctx, todo_id, "update")
    return TodoRepository(ctx.db).toggle_completed(todo_id)


def update_priority(ctx: RequestContext, todo_id: str, priority: Optional[str]) -> Todo:
    user = require_user(ctx)
    enforce_rate_limit(ctx, "updateTodo", user)
    cleaned = _clean_priority(priority)
    _load_owned(ctx, todo_id, "update")
    return TodoRepository(ctx.db).update_priority(todo_id, cleaned)


def update_due_date(ctx: RequestContext, todo_id: str, due_date: Optional[datetime]) -> Todo:
    user = require_user(ctx)
    enforce_rate_limit(ctx, "updateTodo", user)
    cleaned = _clean_due_date(due_date)
    _load_owned(ctx, todo_id, "update")
    return TodoRepository(ctx.db).update_due_date(todo_id, cleaned)


def update_tags(ctx: RequestContext, todo_id: str, tags: Optional[List[str]]) -> Todo:
    user = require_user(ctx)
    enforce_rate_limit(ctx, "updateTodo", user)
    cleaned = _clean_tags(tags)
    _load_owned(ctx, todo_id, "update")
    return TodoRepository(ctx.db).update_tags(todo_id, cleaned)


def remove(ctx: RequestContext, todo_id: str) -> None:
    user = require_user(ctx)
    enforce_rate_limit(ctx, "deleteTodo", user)
    _load_owned(ctx, todo_id, "delete")
    TodoRepository(ctx.db).delete(todo_id)


def clear_completed(ctx: RequestContext) -> int:
    """Delete all of the caller's completed todos and return the count."""
    user = require_user(ctx)
    enforce_rate_limit(ctx, "deleteTodo", user)
    return TodoRepository(ctx.db).delete_completed(user.id)
