"""Dashboard read models for focuslist: summary counts, recent todos and analytics."""

import math
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field

from focuslist.models.todo import Todo, TodoPriority
from focuslist.models.constants import RECENT_TODOS_LIMIT, ANALYTICS_WINDOW_MS
from focuslist.database.todo_repository import TodoRepository
from focuslist.database.thread_repository import ThreadRepository
from focuslist.database.message_repository import MessageRepository
from focuslist.database.email_notification_repository import EmailNotificationRepository
from focuslist.database.user_preferences_repository import UserPreferencesRepository
from focuslist.endpoints.common import RequestContext, require_user


class DashboardSummary(BaseModel):
    total_todos: int
    active_todos: int
    completed_todos: int
    completion_rate: int = Field(..., description="Percent of todos completed, 0 when there are none")
    last_updated: datetime


class WeeklyActivity(BaseModel):
    created: int
    completed: int


class DashboardAnalytics(BaseModel):
    by_priority: Dict[str, int] = Field(..., description="Active todos per priority (high/medium/low/none)")
    this_week: WeeklyActivity


class LoadSummary(BaseModel):
    per_table: Dict[str, int]
    total_records: int
    user_id: str


class EntityKind(str, Enum):
    """Every entity a user owns."""
    TODOS = "todos"
    THREADS = "threads"
    MESSAGES = "messages"
    EMAIL_NOTIFICATIONS = "email_notifications"
    USER_PREFERENCES = "user_preferences"


def completion_rate(total: int, completed: int) -> int:
    """round(100 * completed / total), rounding halves up; 0 when total is 0."""
    if total <= 0:
        return 0
    return int(math.floor(100 * completed / total + 0.5))


def summary(ctx: RequestContext) -> DashboardSummary:
    user = require_user(ctx)
    repo = TodoRepository(ctx.db)
    total = repo.count_by_user(user.id)
    active = repo.count_active_by_user(user.id)
    completed = repo.count_completed_by_user(user.id)
    return DashboardSummary(
        total_todos=total,
        active_todos=active,
        completed_todos=completed,
        completion_rate=completion_rate(total, completed),
        last_updated=datetime.utcnow(),
    )


def recent(ctx: RequestContext) -> List[Todo]:
    """The caller's 20 most recently created todos."""
    user = require_user(ctx)
    return TodoRepository(ctx.db).get_by_user(user.id)[:RECENT_TODOS_LIMIT]


def analytics(ctx: RequestContext) -> DashboardAnalytics:
    """Active todos by priority, plus todos created/completed in the trailing week."""
    user = require_user(ctx)
    todos = TodoRepository(ctx.db).get_by_user(user.id)

    by_priority = {"high": 0, "medium": 0, "low": 0, "none": 0}
    for todo in todos:
        if todo.completed:
            continue
        if todo.priority == TodoPriority.HIGH:
            by_priority["high"] += 1
        elif todo.priority == TodoPriority.MEDIUM:
            by_priority["medium"] += 1
        elif todo.priority == TodoPriority.LOW:
            by_priority["low"] += 1
        else:
            by_priority["none"] += 1

    week_ago = datetime.utcnow() - timedelta(milliseconds=ANALYTICS_WINDOW_MS)
    created = sum(1 for todo in todos if todo.created_at > week_ago)
    completed = sum(1 for todo in todos if todo.completed_at and todo.completed_at > week_ago)

    return DashboardAnalytics(
        by_priority=by_priority,
        this_week=WeeklyActivity(created=created, completed=completed),
    )


def count_owned(ctx: RequestContext, kind: EntityKind, user_id: str) -> int:
    """Owner-scoped record count for one entity kind."""
    if kind == EntityKind.TODOS:
        return TodoRepository(ctx.db).count_by_user(user_id)
    elif kind == EntityKind.THREADS:
        return ThreadRepository(ctx.db).count_by_user(user_id)
    elif kind == EntityKind.MESSAGES:
        return MessageRepository(ctx.db).count_by_user(user_id)
    elif kind == EntityKind.EMAIL_NOTIFICATIONS:
        return EmailNotificationRepository(ctx.db).count_by_user(user_id)
    elif kind == EntityKind.USER_PREFERENCES:
        return 1 if UserPreferencesRepository(ctx.db).get_by_user_id(user_id) else 0
    raise ValueError(f"Unknown entity kind: {kind}")


def load_summary(ctx: RequestContext) -> LoadSummary:
    """Per-entity record counts for the caller (debug view)."""
    user = require_user(ctx)
    per_table = {kind.value: count_owned(ctx, kind, user.id) for kind in EntityKind}
    return LoadSummary(
        per_table=per_table,
        total_records=sum(per_table.values()),
        user_id=user.id,
    )
