"""User preference operations for focuslist."""

from typing import Optional

from focuslist.models.user_preferences import UserPreferences, Theme, DefaultView
from focuslist.database.user_preferences_repository import UserPreferencesRepository
from focuslist.engine.validation import is_valid_reminder_time
from focuslist.endpoints.common import RequestContext, require_user, enforce_rate_limit
from focuslist.endpoints.errors import InvalidInput

_THEMES = {t.value for t in Theme}
_VIEWS = {v.value for v in DefaultView}


def get_preferences(ctx: RequestContext) -> Optional[UserPreferences]:
    """The caller's preferences, or None if they were never initialized."""
    user = require_user(ctx)
    return UserPreferencesRepository(ctx.db).get_by_user_id(user.id)


def initialize_preferences(ctx: RequestContext) -> str:
    """Ensure the caller has preferences (called after sign-up); return their id."""
    user = require_user(ctx)
    enforce_rate_limit(ctx, "updatePreferences", user)
    return UserPreferencesRepository(ctx.db).get_or_create(user.id).id


def update_preferences(
    ctx: RequestContext,
    email_notifications_enabled: Optional[bool] = None,
    reminder_time: Optional[str] = None,
    theme: Optional[str] = None,
    default_view: Optional[str] = None,
    ai_assistant_enabled: Optional[bool] = None,
) -> UserPreferences:
    """Apply the given (non-None) fields to the caller's preferences.

    An empty reminder_time clears the stored reminder time.
    """
    user = require_user(ctx)
    enforce_rate_limit(ctx, "updatePreferences", user)

    if reminder_time and not is_valid_reminder_time(reminder_time):
        raise InvalidInput("reminder_time", "Invalid reminder time. Must be in HH:MM format.")
    theme_value = getattr(theme, "value", theme)
    if theme_value is not None and theme_value not in _THEMES:
        raise InvalidInput("theme", "Invalid theme. Must be 'light', 'dark', or 'system'.")
    view_value = getattr(default_view, "value", default_view)
    if view_value is not None and view_value not in _VIEWS:
        raise InvalidInput("default_view", "Invalid default view. Must be 'all', 'active', or 'completed'.")

    updates = {
        "email_notifications_enabled": email_notifications_enabled,
        "reminder_time": reminder_time,
        "theme": theme_value,
        "default_view": view_value,
        "ai_assistant_enabled": ai_assistant_enabled,
    }
    updates = {name: value for name, value in updates.items() if value is not None}
    if reminder_time == "":
        updates["reminder_time"] = None

    repo = UserPreferencesRepository(ctx.db)
    repo.get_or_create(user.id)
    return repo.update(user.id, updates)


def toggle_email_notifications(ctx: RequestContext) -> UserPreferences:
    user = require_user(ctx)
    enforce_rate_limit(ctx, "updatePreferences", user)
    repo = UserPreferencesRepository(ctx.db)
    repo.get_or_create(user.id)
    return repo.toggle_email_notifications(user.id)


def toggle_ai_assistant(ctx: RequestContext) -> UserPreferences:
    user = require_user(ctx)
    enforce_rate_limit(ctx, "updatePreferences", user)
    repo = UserPreferencesRepository(ctx.db)
    repo.get_or_create(user.id)
    return repo.toggle_ai_assistant(user.id)
