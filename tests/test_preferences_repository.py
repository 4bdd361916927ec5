"""Tests for UserPreferencesRepository."""

import pytest
from sqlalchemy.exc import IntegrityError

from focuslist.database.user_preferences_repository import UserPreferencesRepository


@pytest.fixture
def preferences(db_session):
    return UserPreferencesRepository(db_session)


def test_create_has_defaults(preferences, test_user_id):
    prefs = preferences.create(test_user_id)
    assert prefs.email_notifications_enabled is True
    assert prefs.ai_assistant_enabled is True
    assert prefs.theme == "system"
    assert prefs.default_view == "all"
    assert prefs.reminder_time is None


def test_second_create_violates_unique_user(preferences, test_user_id):
    preferences.create(test_user_id)
    with pytest.raises(IntegrityError):
        preferences.create(test_user_id)


def test_get_or_create_is_idempotent(preferences, test_user_id):
    first = preferences.get_or_create(test_user_id)
    second = preferences.get_or_create(test_user_id)
    assert first.id == second.id


def test_get_or_create_recovers_when_insert_loses_race(preferences, test_user_id, monkeypatch):
    existing = preferences.create(test_user_id)

    # Simulate a reader that saw no row before a concurrent insert landed.
    real_get = preferences.get_by_user_id
    calls = {"n": 0}

    def first_miss(user_id):
        calls["n"] += 1
        if calls["n"] == 1:
            return None
        return real_get(user_id)

    monkeypatch.setattr(preferences, "get_by_user_id", first_miss)
    result = preferences.get_or_create(test_user_id)
    assert result.id == existing.id


def test_update_partial(preferences, test_user_id):
    preferences.create(test_user_id)
    updated = preferences.update(test_user_id, {"theme": "dark", "reminder_time": "08:15"})
    assert updated.theme == "dark"
    assert updated.reminder_time == "08:15"
    assert updated.default_view == "all"


def test_update_rejects_unknown_fields(preferences, test_user_id):
    preferences.create(test_user_id)
    with pytest.raises(ValueError):
        preferences.update(test_user_id, {"user_id": "someone-else"})


def test_update_missing_record_raises(preferences, test_user_id):
    with pytest.raises(ValueError):
        preferences.update(test_user_id, {"theme": "dark"})


def test_toggles(preferences, test_user_id):
    preferences.create(test_user_id)
    assert preferences.toggle_email_notifications(test_user_id).email_notifications_enabled is False
    assert preferences.toggle_email_notifications(test_user_id).email_notifications_enabled is True
    assert preferences.toggle_ai_assistant(test_user_id).ai_assistant_enabled is False
