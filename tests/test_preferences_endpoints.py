"""Tests for preference operations."""

import pytest

from focuslist.endpoints import preferences
from focuslist.endpoints.errors import Unauthenticated, InvalidInput


def test_get_before_initialize_is_none(ctx):
    assert preferences.get_preferences(ctx) is None


def test_initialize_is_idempotent(ctx):
    first = preferences.initialize_preferences(ctx)
    assert preferences.initialize_preferences(ctx) == first
    assert preferences.get_preferences(ctx).id == first


def test_update_creates_when_missing(ctx):
    updated = preferences.update_preferences(ctx, theme="dark", reminder_time="07:45")
    assert updated.theme == "dark"
    assert updated.reminder_time == "07:45"
    assert updated.email_notifications_enabled is True


def test_update_only_touches_given_fields(ctx):
    preferences.update_preferences(ctx, default_view="completed")
    updated = preferences.update_preferences(ctx, email_notifications_enabled=False)
    assert updated.default_view == "completed"
    assert updated.email_notifications_enabled is False


def test_empty_reminder_time_clears_it(ctx):
    preferences.update_preferences(ctx, reminder_time="08:30", theme="dark")
    updated = preferences.update_preferences(ctx, reminder_time="")
    assert updated.reminder_time is None
    assert updated.theme == "dark"


@pytest.mark.parametrize(
    "kwargs, field",
    [
        ({"reminder_time": "25:00"}, "reminder_time"),
        ({"theme": "neon"}, "theme"),
        ({"default_view": "someday"}, "default_view"),
    ],
)
def test_update_rejects_invalid_values(ctx, kwargs, field):
    with pytest.raises(InvalidInput) as exc_info:
        preferences.update_preferences(ctx, **kwargs)
    assert exc_info.value.field == field
    assert preferences.get_preferences(ctx) is None


def test_toggles(ctx):
    assert preferences.toggle_email_notifications(ctx).email_notifications_enabled is False
    assert preferences.toggle_ai_assistant(ctx).ai_assistant_enabled is False
    assert preferences.toggle_ai_assistant(ctx).ai_assistant_enabled is True


def test_requires_user(anon_ctx):
    with pytest.raises(Unauthenticated):
        preferences.get_preferences(anon_ctx)
    with pytest.raises(Unauthenticated):
        preferences.update_preferences(anon_ctx, theme="dark")
