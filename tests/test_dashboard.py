"""Tests for dashboard read models."""

import pytest
from datetime import datetime, timedelta

from focuslist.endpoints import dashboard, todos, agent, preferences
from focuslist.endpoints.dashboard import completion_rate, EntityKind
from focuslist.endpoints.errors import Unauthenticated
from focuslist.database.models import TodoDB


class TestCompletionRate:
    def test_zero_total(self):
        assert completion_rate(0, 0) == 0

    def test_rounds_half_up(self):
        # 1/8 = 12.5%
        assert completion_rate(8, 1) == 13
        assert completion_rate(3, 1) == 33
        assert completion_rate(3, 2) == 67

    def test_all_done(self):
        assert completion_rate(4, 4) == 100


class TestSummary:
    def test_counts_and_rate(self, ctx):
        ids = [todos.create_todo(ctx, f"t{i}") for i in range(3)]
        todos.toggle(ctx, ids[0])

        result = dashboard.summary(ctx)
        assert result.total_todos == 3
        assert result.active_todos == 2
        assert result.completed_todos == 1
        assert result.completion_rate == 33

    def test_empty(self, ctx):
        result = dashboard.summary(ctx)
        assert result.total_todos == 0
        assert result.completion_rate == 0

    def test_requires_user(self, anon_ctx):
        with pytest.raises(Unauthenticated):
            dashboard.summary(anon_ctx)


class TestRecent:
    def test_caps_at_twenty_newest_first(self, ctx, db_session, test_user_id):
        base = datetime.utcnow()
        for i in range(25):
            db_session.add(TodoDB(
                id=f"todo-{i}",
                user_id=test_user_id,
                text=f"t{i}",
                completed=False,
                created_at=base + timedelta(seconds=i),
                updated_at=base + timedelta(seconds=i),
            ))
        db_session.commit()

        result = dashboard.recent(ctx)
        assert len(result) == 20
        assert result[0].text == "t24"
        assert result[-1].text == "t5"


class TestAnalytics:
    def test_active_by_priority(self, ctx):
        todos.create_todo(ctx, "a", priority="high")
        todos.create_todo(ctx, "b", priority="high")
        todos.create_todo(ctx, "c", priority="low")
        todos.create_todo(ctx, "d")
        done = todos.create_todo(ctx, "e", priority="medium")
        todos.toggle(ctx, done)

        result = dashboard.analytics(ctx)
        assert result.by_priority == {"high": 2, "medium": 0, "low": 1, "none": 1}

    def test_this_week_window(self, ctx, db_session, test_user_id):
        now = datetime.utcnow()
        old = now - timedelta(days=10)
        db_session.add(TodoDB(
            id="old-done-recently",
            user_id=test_user_id,
            text="old",
            completed=True,
            created_at=old,
            updated_at=now,
            completed_at=now - timedelta(days=1),
        ))
        db_session.add(TodoDB(
            id="old-done-long-ago",
            user_id=test_user_id,
            text="older",
            completed=True,
            created_at=old,
            updated_at=old,
            completed_at=old,
        ))
        db_session.commit()
        todos.create_todo(ctx, "fresh")

        result = dashboard.analytics(ctx)
        assert result.this_week.created == 1
        assert result.this_week.completed == 1


class TestLoadSummary:
    def test_counts_every_owned_entity(self, ctx, other_ctx):
        todos.create_todo(ctx, "a")
        todos.create_todo(ctx, "b")
        thread_id = agent.create_thread(ctx)
        agent.send_message(ctx, thread_id, "hi")
        preferences.initialize_preferences(ctx)
        todos.create_todo(other_ctx, "not mine")

        result = dashboard.load_summary(ctx)
        assert result.user_id == ctx.user.id
        assert result.per_table == {
            "todos": 2,
            "threads": 1,
            "messages": 2,
            "email_notifications": 0,
            "user_preferences": 1,
        }
        assert result.total_records == 6

    def test_count_owned_single_kind(self, ctx):
        todos.create_todo(ctx, "a")
        assert dashboard.count_owned(ctx, EntityKind.TODOS, ctx.user.id) == 1
        assert dashboard.count_owned(ctx, EntityKind.THREADS, ctx.user.id) == 0
