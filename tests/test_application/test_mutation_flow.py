"""
Tests for the mutation cycle: validate -> write -> invalidate -> notify
"""
from unittest.mock import Mock

import pytest

from app.application import queries as q
from app.application.goals import GoalController, GoalsView, GoalValidationError
from app.application.invalidation import INVALIDATES, prefixes_for, invalidate_for
from app.application.mutations import MutationValidationError
from app.application.notifications import CollectingNotifier
from app.infrastructure.store.base import StoreError, RecordNotFound
from app.infrastructure.db.models import TABLES


GOAL = {"title": "Run a marathon", "category": "Health"}


class TestInvalidationTable:
    def test_every_table_has_a_rule(self):
        """Каждая таблица store имеет правило инвалидации"""
        assert set(TABLES) == set(INVALIDATES)

    def test_planner_events_fan_out(self):
        assert set(prefixes_for("planner_events")) == {
            q.PLANNER_EVENTS, q.WEEK_EVENTS, q.TODAY_EVENTS,
        }

    def test_business_invalidates_departments(self):
        assert q.DEPARTMENTS in prefixes_for("businesses")

    def test_unknown_table(self):
        with pytest.raises(KeyError):
            prefixes_for("wallets")

    def test_scoped_to_user(self, cache):
        cache.fetch((q.GOALS, 1), lambda: ["mine"])
        cache.fetch((q.GOALS, 2), lambda: ["theirs"])

        assert invalidate_for(cache, "goals", 1) == 1
        assert cache.peek((q.GOALS, 1)).is_stale is True
        assert cache.peek((q.GOALS, 2)).is_stale is False


class TestValidation:
    def test_rejected_before_store(self, make_ctx, user):
        """Ошибка валидации: store не вызывается, есть error-уведомление"""
        store = Mock()
        notifier = CollectingNotifier()
        ctx = make_ctx(user, notifier)
        ctx.store.store = store

        with pytest.raises(GoalValidationError, match="Title and category are required"):
            GoalController(ctx).create({"title": "   ", "category": "Health"})

        store.insert.assert_not_called()
        assert notifier.last.level == "error"
        assert notifier.last.message == "Title and category are required"

    def test_validation_error_is_mutation_validation_error(self, ctx):
        with pytest.raises(MutationValidationError):
            GoalController(ctx).create({"title": "x", "category": "Health", "priority": "urgent"})

    def test_empty_update_rejected(self, ctx):
        with pytest.raises(GoalValidationError, match="Nothing to update"):
            GoalController(ctx).update("some-id", {})


class TestWrite:
    def test_success_notifies_and_returns_row(self, ctx, notifier):
        result = GoalController(ctx).create(GOAL)

        assert result.ok is True
        assert result.row["title"] == "Run a marathon"
        assert result.row["user_id"] == 1
        assert notifier.last.level == "success"
        assert notifier.last.message == "Goal created"

    def test_success_invalidates_cached_list(self, ctx):
        with GoalsView(ctx) as view:
            assert view.render()["goals"] == []
            GoalController(ctx).create(GOAL)
            assert [g["title"] for g in view.render()["goals"]] == ["Run a marathon"]

    def test_unmounted_view_sees_write_on_next_mount(self, ctx):
        with GoalsView(ctx) as view:
            view.render()
        GoalController(ctx).create(GOAL)

        with GoalsView(ctx) as view:
            assert len(view.render()["goals"]) == 1

    def test_delete_twice(self, ctx, notifier):
        """Повторное удаление -> ошибка not found, без исключения"""
        controller = GoalController(ctx)
        goal_id = controller.create(GOAL).row["id"]

        assert controller.delete(goal_id).ok is True
        assert notifier.last.message == "Goal deleted"

        second = controller.delete(goal_id)
        assert second.ok is False
        assert second.not_found is True
        assert notifier.last.level == "error"
        assert notifier.last.message == "Failed to delete goal"

    def test_store_failure_keeps_cache(self, make_ctx, user, cache):
        """Сбой store: уведомление об ошибке, кэш не трогается"""
        cache.fetch((q.GOALS, user.id), lambda: [{"id": "g1", "title": "Cached"}])

        notifier = CollectingNotifier()
        ctx = make_ctx(user, notifier)
        failing = Mock()
        failing.insert.side_effect = StoreError("connection refused")
        ctx.store.store = failing

        result = GoalController(ctx).create(GOAL)

        assert result.ok is False
        assert result.not_found is False
        assert isinstance(result.error, StoreError)
        assert notifier.last.message == "Failed to create goal"
        cached = cache.peek((q.GOALS, user.id))
        assert cached.data == [{"id": "g1", "title": "Cached"}]
        assert cached.is_stale is False


class TestIsolation:
    def test_other_user_sees_nothing(self, ctx, other_ctx):
        GoalController(ctx).create(GOAL)

        with GoalsView(other_ctx) as view:
            page = view.render()
        assert page["goals"] == []
        assert page["counts"]["total"] == 0

    def test_other_user_cannot_delete(self, ctx, other_ctx):
        goal_id = GoalController(ctx).create(GOAL).row["id"]

        result = GoalController(other_ctx).delete(goal_id)
        assert result.ok is False
        assert isinstance(result.error, RecordNotFound)

        with GoalsView(ctx) as view:
            assert len(view.render()["goals"]) == 1

    def test_other_user_cannot_update(self, ctx, other_ctx):
        goal_id = GoalController(ctx).create(GOAL).row["id"]

        result = GoalController(other_ctx).update(goal_id, {"title": "Hijacked"})
        assert result.not_found is True

        with GoalsView(ctx) as view:
            assert view.render()["goals"][0]["title"] == "Run a marathon"
