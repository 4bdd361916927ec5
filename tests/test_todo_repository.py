"""Tests for TodoRepository."""

import pytest
from datetime import datetime, timedelta

from focuslist.models.factory import new_todo


class TestTodoRepositoryCreate:
    def test_create_and_get(self, todo_repository, test_user_id):
        todo = new_todo(test_user_id, "Write report", priority="high", tags=["work"])
        created = todo_repository.create(todo)

        assert created.id == todo.id
        assert created.text == "Write report"
        assert created.completed is False
        assert created.completed_at is None
        assert created.priority == "high"
        assert created.tags == ["work"]

        fetched = todo_repository.get_by_id(todo.id)
        assert fetched is not None
        assert fetched.user_id == test_user_id

    def test_get_missing_returns_none(self, todo_repository):
        assert todo_repository.get_by_id("nope") is None


class TestTodoRepositoryQueries:
    def test_get_by_user_newest_first_and_scoped(self, todo_repository, test_user_id, other_user_id):
        base = datetime.utcnow()
        todo_repository.create(new_todo(test_user_id, "old", now=base - timedelta(minutes=2)))
        todo_repository.create(new_todo(test_user_id, "new", now=base))
        todo_repository.create(new_todo(other_user_id, "theirs", now=base))

        todos = todo_repository.get_by_user(test_user_id)
        assert [t.text for t in todos] == ["new", "old"]
        assert todo_repository.count_by_user(other_user_id) == 1

    def test_active_and_completed_partition(self, todo_repository, test_user_id):
        a = todo_repository.create(new_todo(test_user_id, "a"))
        todo_repository.create(new_todo(test_user_id, "b"))
        todo_repository.complete(a.id)

        assert [t.text for t in todo_repository.get_completed_by_user(test_user_id)] == ["a"]
        assert [t.text for t in todo_repository.get_active_by_user(test_user_id)] == ["b"]
        assert todo_repository.count_active_by_user(test_user_id) == 1
        assert todo_repository.count_completed_by_user(test_user_id) == 1


class TestTodoRepositoryUpdates:
    def test_toggle_sets_and_clears_completed_at(self, todo_repository, test_user_id):
        todo = todo_repository.create(new_todo(test_user_id, "toggle me"))

        done = todo_repository.toggle_completed(todo.id)
        assert done.completed is True
        assert done.completed_at is not None

        undone = todo_repository.toggle_completed(todo.id)
        assert undone.completed is False
        assert undone.completed_at is None

    def test_update_fields(self, todo_repository, test_user_id):
        todo = todo_repository.create(new_todo(test_user_id, "draft", now=datetime.utcnow() - timedelta(minutes=1)))
        due = datetime.utcnow() + timedelta(days=3)

        assert todo_repository.update_text(todo.id, "final").text == "final"
        assert todo_repository.update_priority(todo.id, "low").priority == "low"
        assert todo_repository.update_priority(todo.id, None).priority is None
        assert todo_repository.update_due_date(todo.id, due).due_date == due
        updated = todo_repository.update_tags(todo.id, ["a", "b"])
        assert updated.tags == ["a", "b"]
        assert updated.updated_at > todo.updated_at

    def test_update_missing_raises(self, todo_repository):
        with pytest.raises(ValueError):
            todo_repository.update_text("missing", "x")


class TestTodoRepositoryDelete:
    def test_delete(self, todo_repository, test_user_id):
        todo = todo_repository.create(new_todo(test_user_id, "bye"))
        assert todo_repository.delete(todo.id) is True
        assert todo_repository.get_by_id(todo.id) is None
        assert todo_repository.delete(todo.id) is False

    def test_delete_completed_only_touches_owner_completed(self, todo_repository, test_user_id, other_user_id):
        done = todo_repository.create(new_todo(test_user_id, "done"))
        todo_repository.complete(done.id)
        todo_repository.create(new_todo(test_user_id, "open"))
        theirs = todo_repository.create(new_todo(other_user_id, "theirs"))
        todo_repository.complete(theirs.id)

        assert todo_repository.delete_completed(test_user_id) == 1
        assert [t.text for t in todo_repository.get_by_user(test_user_id)] == ["open"]
        assert todo_repository.count_completed_by_user(other_user_id) == 1
        assert todo_repository.delete_completed(test_user_id) == 0
