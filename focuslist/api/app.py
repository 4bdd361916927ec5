"""FastAPI web application for focuslist."""

import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse, Response

from focuslist.api.auth_routes import router as auth_router
from focuslist.api.schemas import (
    CreateTodoRequest,
    UpdateTextRequest,
    UpdatePriorityRequest,
    UpdateDueDateRequest,
    UpdateTagsRequest,
    TodoListResponse,
    CreatedResponse,
    CountResponse,
    CreateThreadRequest,
    RenameThreadRequest,
    SendMessageRequest,
    AssistantReply,
    UpdatePreferencesRequest,
)
from focuslist.auth.dependencies import get_request_context, get_email_sender
from focuslist.database.database import init_db
from focuslist.endpoints import todos, agent, preferences, dashboard, notifications
from focuslist.endpoints.common import RequestContext
from focuslist.endpoints.errors import EndpointError, RateLimited, InvalidInput, DeliveryFailure
from focuslist.integrations.email_client import ResendEmailClient
from focuslist.models.todo import Todo, TodoStats
from focuslist.models.thread import Thread, Message
from focuslist.models.user_preferences import UserPreferences
from focuslist.models.email_notification import EmailNotification

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


# Initialize FastAPI app
app = FastAPI(
    title="focuslist API",
    description="Todos, an assistant that knows about them, and email nudges",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(auth_router)


@app.exception_handler(EndpointError)
async def endpoint_error_handler(request: Request, exc: EndpointError):
    """Map operation failures onto HTTP responses."""
    content = {"detail": exc.message}
    headers = None
    if isinstance(exc, RateLimited):
        headers = {"Retry-After": str(exc.retry_after_seconds)}
    elif isinstance(exc, InvalidInput):
        content["field"] = exc.field
    elif isinstance(exc, DeliveryFailure):
        content["notification_id"] = exc.notification_id
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


def require_email_sender(
    email_sender: Optional[ResendEmailClient] = Depends(get_email_sender),
) -> ResendEmailClient:
    if email_sender is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Email delivery is not configured",
        )
    return email_sender


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


# Todos

@app.get("/todos", response_model=TodoListResponse)
def list_todos(view: str = "all", ctx: RequestContext = Depends(get_request_context)):
    """List the caller's todos, newest first. `view` is all, active or completed."""
    if view == "active":
        items = todos.list_active(ctx)
    elif view == "completed":
        items = todos.list_completed(ctx)
    elif view == "all":
        items = todos.list_todos(ctx)
    else:
        raise InvalidInput("view", "Invalid view. Must be 'all', 'active', or 'completed'.")
    return TodoListResponse(todos=items, count=len(items))


@app.get("/todos/stats", response_model=TodoStats)
def todo_stats(ctx: RequestContext = Depends(get_request_context)):
    return todos.stats(ctx)


@app.post("/todos", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_todo(request: CreateTodoRequest, ctx: RequestContext = Depends(get_request_context)):
    todo_id = todos.create_todo(
        ctx,
        request.text,
        priority=request.priority,
        due_date=request.due_date,
        tags=request.tags,
    )
    return CreatedResponse(id=todo_id)


@app.post("/todos/clear-completed", response_model=CountResponse)
def clear_completed(ctx: RequestContext = Depends(get_request_context)):
    return CountResponse(deleted=todos.clear_completed(ctx))


@app.patch("/todos/{todo_id}/text", response_model=Todo)
def update_todo_text(todo_id: str, request: UpdateTextRequest, ctx: RequestContext = Depends(get_request_context)):
    return todos.update_text(ctx, todo_id, request.text)


@app.post("/todos/{todo_id}/toggle", response_model=Todo)
def toggle_todo(todo_id: str, ctx: RequestContext = Depends(get_request_context)):
    return todos.toggle(ctx, todo_id)


@app.patch("/todos/{todo_id}/priority", response_model=Todo)
def update_todo_priority(
    todo_id: str, request: UpdatePriorityRequest, ctx: RequestContext = Depends(get_request_context)
):
    return todos.update_priority(ctx, todo_id, request.priority)


@app.patch("/todos/{todo_id}/due-date", response_model=Todo)
def update_todo_due_date(
    todo_id: str, request: UpdateDueDateRequest, ctx: RequestContext = Depends(get_request_context)
):
    return todos.update_due_date(ctx, todo_id, request.due_date)


@app.patch("/todos/{todo_id}/tags", response_model=Todo)
def update_todo_tags(todo_id: str, request: UpdateTagsRequest, ctx: RequestContext = Depends(get_request_context)):
    return todos.update_tags(ctx, todo_id, request.tags)


@app.delete("/todos/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_todo(todo_id: str, ctx: RequestContext = Depends(get_request_context)):
    todos.remove(ctx, todo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Assistant threads

@app.get("/threads", response_model=List[Thread])
def list_threads(ctx: RequestContext = Depends(get_request_context)):
    return agent.list_threads(ctx)


@app.post("/threads", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_thread(request: CreateThreadRequest, ctx: RequestContext = Depends(get_request_context)):
    return CreatedResponse(id=agent.create_thread(ctx, request.title))


@app.get("/threads/{thread_id}/messages", response_model=List[Message])
def get_messages(thread_id: str, ctx: RequestContext = Depends(get_request_context)):
    return agent.get_messages(ctx, thread_id)


@app.post("/threads/{thread_id}/messages", response_model=AssistantReply)
def send_message(thread_id: str, request: SendMessageRequest, ctx: RequestContext = Depends(get_request_context)):
    """Post a user message and return the assistant's reply."""
    return AssistantReply(message=agent.send_message(ctx, thread_id, request.content))


@app.patch("/threads/{thread_id}", response_model=Thread)
def rename_thread(thread_id: str, request: RenameThreadRequest, ctx: RequestContext = Depends(get_request_context)):
    return agent.rename_thread(ctx, thread_id, request.title)


@app.post("/threads/{thread_id}/archive", response_model=Thread)
def archive_thread(thread_id: str, ctx: RequestContext = Depends(get_request_context)):
    return agent.archive_thread(ctx, thread_id)


@app.post("/threads/{thread_id}/unarchive", response_model=Thread)
def unarchive_thread(thread_id: str, ctx: RequestContext = Depends(get_request_context)):
    return agent.unarchive_thread(ctx, thread_id)


@app.delete("/threads/{thread_id}", response_model=CountResponse)
def delete_thread(thread_id: str, ctx: RequestContext = Depends(get_request_context)):
    """Delete a thread; `deleted` counts the messages removed with it."""
    return CountResponse(deleted=agent.delete_thread(ctx, thread_id))


# Preferences

@app.get("/preferences", response_model=Optional[UserPreferences])
def get_preferences(ctx: RequestContext = Depends(get_request_context)):
    return preferences.get_preferences(ctx)


@app.post("/preferences/initialize", response_model=CreatedResponse)
def initialize_preferences(ctx: RequestContext = Depends(get_request_context)):
    return CreatedResponse(id=preferences.initialize_preferences(ctx))


@app.patch("/preferences", response_model=UserPreferences)
def update_preferences(request: UpdatePreferencesRequest, ctx: RequestContext = Depends(get_request_context)):
    return preferences.update_preferences(
        ctx,
        email_notifications_enabled=request.email_notifications_enabled,
        reminder_time=request.reminder_time,
        theme=request.theme,
        default_view=request.default_view,
        ai_assistant_enabled=request.ai_assistant_enabled,
    )


@app.post("/preferences/toggle-email-notifications", response_model=UserPreferences)
def toggle_email_notifications(ctx: RequestContext = Depends(get_request_context)):
    return preferences.toggle_email_notifications(ctx)


@app.post("/preferences/toggle-ai-assistant", response_model=UserPreferences)
def toggle_ai_assistant(ctx: RequestContext = Depends(get_request_context)):
    return preferences.toggle_ai_assistant(ctx)


# Dashboard

@app.get("/dashboard/summary", response_model=dashboard.DashboardSummary)
def dashboard_summary(ctx: RequestContext = Depends(get_request_context)):
    return dashboard.summary(ctx)


@app.get("/dashboard/recent", response_model=List[Todo])
def dashboard_recent(ctx: RequestContext = Depends(get_request_context)):
    return dashboard.recent(ctx)


@app.get("/dashboard/analytics", response_model=dashboard.DashboardAnalytics)
def dashboard_analytics(ctx: RequestContext = Depends(get_request_context)):
    return dashboard.analytics(ctx)


@app.get("/dashboard/load-summary", response_model=dashboard.LoadSummary)
def dashboard_load_summary(ctx: RequestContext = Depends(get_request_context)):
    return dashboard.load_summary(ctx)


# Email notifications

@app.get("/notifications", response_model=List[EmailNotification])
def list_notifications(ctx: RequestContext = Depends(get_request_context)):
    return notifications.list_notifications(ctx)


@app.post("/notifications/reminder", response_model=notifications.NotificationResult)
def send_reminder(
    ctx: RequestContext = Depends(get_request_context),
    email_sender: ResendEmailClient = Depends(require_email_sender),
):
    return notifications.trigger_reminder(ctx, email_sender)


@app.post("/notifications/weekly-summary", response_model=notifications.NotificationResult)
def send_weekly_summary(
    ctx: RequestContext = Depends(get_request_context),
    email_sender: ResendEmailClient = Depends(require_email_sender),
):
    return notifications.trigger_weekly_summary(ctx, email_sender)
