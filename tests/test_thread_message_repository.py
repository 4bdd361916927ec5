"""Tests for ThreadRepository and MessageRepository."""

import pytest
from datetime import datetime, timedelta

from focuslist.database.thread_repository import ThreadRepository
from focuslist.database.message_repository import MessageRepository
from focuslist.models.factory import new_thread, new_message
from focuslist.models.thread import MessageRole


@pytest.fixture
def threads(db_session):
    return ThreadRepository(db_session)


@pytest.fixture
def messages(db_session):
    return MessageRepository(db_session)


class TestThreadRepository:
    def test_create_defaults_to_active(self, threads, test_user_id):
        thread = threads.create(new_thread(test_user_id, "Planning"))
        assert thread.status == "active"
        assert threads.get_by_id(thread.id).title == "Planning"

    def test_archive_unarchive_partition(self, threads, test_user_id):
        a = threads.create(new_thread(test_user_id, "a"))
        threads.create(new_thread(test_user_id, "b"))

        archived = threads.archive(a.id)
        assert archived.status == "archived"
        assert [t.title for t in threads.get_archived_by_user(test_user_id)] == ["a"]
        assert [t.title for t in threads.get_active_by_user(test_user_id)] == ["b"]

        assert threads.unarchive(a.id).status == "active"
        assert threads.get_archived_by_user(test_user_id) == []

    def test_get_by_user_is_scoped(self, threads, test_user_id, other_user_id):
        threads.create(new_thread(test_user_id, "mine"))
        threads.create(new_thread(other_user_id, "theirs"))
        assert [t.title for t in threads.get_by_user(test_user_id)] == ["mine"]
        assert threads.count_by_user(other_user_id) == 1

    def test_update_title_missing_raises(self, threads):
        with pytest.raises(ValueError):
            threads.update_title("missing", "title")


class TestMessageRepository:
    def test_thread_messages_oldest_first(self, threads, messages, test_user_id):
        thread = threads.create(new_thread(test_user_id))
        base = datetime.utcnow()
        messages.create(new_message(thread.id, test_user_id, MessageRole.USER, "first", now=base))
        messages.create(new_message(thread.id, test_user_id, MessageRole.ASSISTANT, "second", now=base + timedelta(seconds=1)))

        result = messages.get_by_thread(thread.id)
        assert [m.content for m in result] == ["first", "second"]
        assert result[1].role == "assistant"

    def test_recent_returns_last_n_chronologically(self, threads, messages, test_user_id):
        thread = threads.create(new_thread(test_user_id))
        base = datetime.utcnow()
        for i in range(5):
            messages.create(new_message(thread.id, test_user_id, MessageRole.USER, f"m{i}", now=base + timedelta(seconds=i)))

        recent = messages.get_recent_by_thread(thread.id, limit=3)
        assert [m.content for m in recent] == ["m2", "m3", "m4"]

    def test_delete_by_thread_then_thread(self, threads, messages, test_user_id):
        thread = threads.create(new_thread(test_user_id))
        messages.create(new_message(thread.id, test_user_id, MessageRole.USER, "hi"))
        messages.create(new_message(thread.id, test_user_id, MessageRole.ASSISTANT, "hello"))

        assert messages.count_by_user(test_user_id) == 2
        assert messages.delete_by_thread(thread.id) == 2
        assert threads.delete(thread.id) is True
        assert messages.get_by_thread(thread.id) == []
        assert threads.get_by_id(thread.id) is None
