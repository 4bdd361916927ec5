"""Assistant operations for focuslist: threads, messages and the reply stub.

`send_message` stores the user's message, gathers the caller's todos as
context, and stores a canned assistant reply. No model is called; the reply
is produced by `generate_reply`, which is where a real model call would go.
"""

import logging
from typing import List, Optional

from focuslist.models.thread import Thread, Message, MessageRole
from focuslist.models.todo import Todo
from focuslist.models.factory import new_thread, new_message
from focuslist.models.constants import AGENT_CONTEXT_TODO_LIMIT
from focuslist.database.thread_repository import ThreadRepository
from focuslist.database.message_repository import MessageRepository
from focuslist.database.todo_repository import TodoRepository
from focuslist.database.user_preferences_repository import UserPreferencesRepository
from focuslist.engine.validation import sanitize_text, is_valid_thread_title, is_valid_message_content
from focuslist.endpoints.common import RequestContext, require_user, enforce_rate_limit, ensure_owned
from focuslist.endpoints.errors import InvalidInput, NotAuthorized

logger = logging.getLogger(__name__)

INVALID_TITLE = "Invalid thread title. Must be under 200 characters."
INVALID_CONTENT = "Invalid message content. Must be non-empty and under 5000 characters."


class TodoContext:
    """Snapshot of the caller's todos handed to the assistant."""

    def __init__(self, active_todos: List[Todo], total: int, active: int, completed: int):
        self.active_todos = active_todos
        self.total = total
        self.active = active
        self.completed = completed


def _clean_title(title: Optional[str]) -> Optional[str]:
    if not title:
        return None
    sanitized = sanitize_text(title)
    if not is_valid_thread_title(sanitized):
        raise InvalidInput("title", INVALID_TITLE)
    return sanitized or None


def _load_owned(ctx: RequestContext, thread_id: str, action: str) -> Thread:
    user = require_user(ctx)
    return ensure_owned(ThreadRepository(ctx.db).get_by_id(thread_id), user, "thread", action)


def get_todo_context(ctx: RequestContext, user_id: str) -> TodoContext:
    """Collect up to 10 active todos plus the caller's todo counts."""
    repo = TodoRepository(ctx.db)
    active_todos = repo.get_active_by_user(user_id)
    return TodoContext(
        active_todos=active_todos[:AGENT_CONTEXT_TODO_LIMIT],
        total=repo.count_by_user(user_id),
        active=len(active_todos),
        completed=repo.count_completed_by_user(user_id),
    )


def build_prompt(todo_context: TodoContext, question: str) -> str:
    """Render the context block a language model would receive."""
    lines = [
        f"User has {todo_context.total} total todos "
        f"({todo_context.active} active, {todo_context.completed} completed).",
        "",
        "Active todos:",
    ]
    for i, todo in enumerate(todo_context.active_todos, start=1):
        suffix = f" [{todo.priority}]" if todo.priority else ""
        lines.append(f"{i}. {todo.text}{suffix}")
    lines.extend(["", f"User's question: {question}"])
    return "\n".join(lines)


def generate_reply(todo_context: TodoContext, question: str) -> str:
    """Produce the assistant's reply. Canned: references the active todo count."""
    logger.debug(f"Assistant prompt:\n{build_prompt(todo_context, question)}")
    return (
        f"I understand you have {todo_context.active} active todos. "
        "How can I help you manage them better?"
    )


# Queries

def list_threads(ctx: RequestContext) -> List[Thread]:
    user = require_user(ctx)
    return ThreadRepository(ctx.db).get_by_user(user.id)


def get_messages(ctx: RequestContext, thread_id: str) -> List[Message]:
    """Messages of one of the caller's threads, oldest first."""
    _load_owned(ctx, thread_id, "view")
    return MessageRepository(ctx.db).get_by_thread(thread_id)


# Mutations

def create_thread(ctx: RequestContext, title: Optional[str] = None) -> str:
    """Start a thread for the caller and return its id."""
    user = require_user(ctx)
    enforce_rate_limit(ctx, "createThread", user)
    cleaned = _clean_title(title)

    preferences = UserPreferencesRepository(ctx.db).get_by_user_id(user.id)
    if preferences and not preferences.ai_assistant_enabled:
        raise NotAuthorized("AI assistant is disabled in your preferences")

    return ThreadRepository(ctx.db).create(new_thread(user.id, cleaned)).id


def rename_thread(ctx: RequestContext, thread_id: str, title: str) -> Thread:
    user = require_user(ctx)
    enforce_rate_limit(ctx, "updateThread", user)
    cleaned = _clean_title(title)
    if cleaned is None:
        raise InvalidInput("title", INVALID_TITLE)
    _load_owned(ctx, thread_id, "update")
    return ThreadRepository(ctx.db).update_title(thread_id, cleaned)


def archive_thread(ctx: RequestContext, thread_id: str) -> Thread:
    user = require_user(ctx)
    enforce_rate_limit(ctx, "updateThread", user)
    _load_owned(ctx, thread_id, "archive")
    return ThreadRepository(ctx.db).archive(thread_id)


def unarchive_thread(ctx: RequestContext, thread_id: str) -> Thread:
    user = require_user(ctx)
    enforce_rate_limit(ctx, "updateThread", user)
    _load_owned(ctx, thread_id, "unarchive")
    return ThreadRepository(ctx.db).unarchive(thread_id)


def delete_thread(ctx: RequestContext, thread_id: str) -> int:
    """Delete a thread after all of its messages. Returns the number of messages removed."""
    user = require_user(ctx)
    enforce_rate_limit(ctx, "deleteThread", user)
    _load_owned(ctx, thread_id, "delete")

    removed = MessageRepository(ctx.db).delete_by_thread(thread_id)
    ThreadRepository(ctx.db).delete(thread_id)
    return removed


def send_message(ctx: RequestContext, thread_id: str, content: str) -> str:
    """Store the caller's message and the assistant's reply; return the reply text."""
    user = require_user(ctx)
    enforce_rate_limit(ctx, "sendMessage", user)

    sanitized = sanitize_text(content)
    if not is_valid_message_content(sanitized):
        raise InvalidInput("content", INVALID_CONTENT)

    _load_owned(ctx, thread_id, "message")

    messages = MessageRepository(ctx.db)
    messages.create(new_message(thread_id, user.id, MessageRole.USER, sanitized))

    reply = generate_reply(get_todo_context(ctx, user.id), sanitized)

    messages.create(new_message(thread_id, user.id, MessageRole.ASSISTANT, reply))
    return reply
