"""Request/response models for the focuslist HTTP API."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from focuslist.models.todo import Todo
from focuslist.models.user import User


# Auth

class SignUpRequest(BaseModel):
    email: str = Field(..., description="Email address (unique)")
    password: str = Field(..., description="Password, at least 8 characters")
    name: Optional[str] = Field(None, description="Display name")


class SignInRequest(BaseModel):
    email: str
    password: str


class AuthResponse(BaseModel):
    """Response model for authentication."""
    access_token: str
    token_type: str = "bearer"
    user: User


class SessionResponse(BaseModel):
    user: User


# Todos

class CreateTodoRequest(BaseModel):
    text: str
    priority: Optional[str] = Field(None, description="low, medium or high")
    due_date: Optional[datetime] = Field(None, description="Must be in the future")
    tags: Optional[List[str]] = Field(None, description="At most 10 tags, each at most 30 characters")


class UpdateTextRequest(BaseModel):
    text: str


class UpdatePriorityRequest(BaseModel):
    priority: Optional[str] = Field(None, description="low, medium, high, or null to clear")


class UpdateDueDateRequest(BaseModel):
    due_date: Optional[datetime] = Field(None, description="Future instant, or null to clear")


class UpdateTagsRequest(BaseModel):
    tags: Optional[List[str]] = Field(None, description="Replacement tags, or null to clear")


class TodoListResponse(BaseModel):
    todos: List[Todo]
    count: int


class CreatedResponse(BaseModel):
    id: str


class CountResponse(BaseModel):
    deleted: int


# Assistant

class CreateThreadRequest(BaseModel):
    title: Optional[str] = None


class RenameThreadRequest(BaseModel):
    title: str


class SendMessageRequest(BaseModel):
    content: str


class AssistantReply(BaseModel):
    message: str


# Preferences

class UpdatePreferencesRequest(BaseModel):
    email_notifications_enabled: Optional[bool] = None
    reminder_time: Optional[str] = Field(None, description="HH:MM")
    theme: Optional[str] = Field(None, description="light, dark or system")
    default_view: Optional[str] = Field(None, description="all, active or completed")
    ai_assistant_enabled: Optional[bool] = None
