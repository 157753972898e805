"""
Tests for PlannerEventController / PlannerView / DashboardView today block
"""
from datetime import date, time, timedelta

import pytest

from app.application.context import UserContext
from app.application.dashboard import DashboardView
from app.application.planner import (
    PlannerEventController, PlannerView, PlannerValidationError, event_item,
)
from app.application.notifications import CollectingNotifier
from app.infrastructure.cache.query_cache import QueryCache


def _event(**overrides):
    fields = {"title": "Standup", "date": "2025-01-15", "type": "meeting"}
    fields.update(overrides)
    return fields


class TestPlannerEventController:
    def test_create(self, ctx, notifier):
        result = PlannerEventController(ctx).create(_event(start_time="09:30"))

        assert result.ok
        assert result.row["start_time"] == time(9, 30)
        assert result.row["completed"] is False
        assert result.row["priority"] == "medium"
        assert notifier.last.message == "Event added"

    def test_date_defaults_to_today(self, ctx, today):
        result = PlannerEventController(ctx).create({"title": "Call bank"})
        assert result.row["date"] == today
        assert result.row["type"] == "task"

    def test_title_required(self, ctx):
        with pytest.raises(PlannerValidationError, match="Title is required"):
            PlannerEventController(ctx).create(_event(title=" "))

    def test_invalid_time(self, ctx):
        with pytest.raises(PlannerValidationError, match="Invalid time"):
            PlannerEventController(ctx).create(_event(start_time="25:99"))

    def test_invalid_type(self, ctx):
        with pytest.raises(PlannerValidationError):
            PlannerEventController(ctx).create(_event(type="party"))

    def test_toggle_flips_without_toast(self, ctx, notifier):
        controller = PlannerEventController(ctx)
        event = controller.create(_event()).row
        notifications = len(notifier.items)

        result = controller.toggle_complete(event["id"], False)

        assert result.ok
        assert result.row["completed"] is True
        assert len(notifier.items) == notifications

        assert controller.toggle_complete(event["id"], "true").row["completed"] is False

    def test_toggle_missing_event(self, ctx, notifier):
        result = PlannerEventController(ctx).toggle_complete("missing", False)
        assert result.not_found
        assert notifier.last.message == "Failed to update event"


class TestPlannerView:
    def test_day_and_week(self, ctx):
        controller = PlannerEventController(ctx)
        controller.create(_event(title="Late", start_time="17:00"))
        controller.create(_event(title="Early", start_time="08:00", end_time="08:30"))
        controller.create(_event(title="Monday", date="2025-01-13"))
        controller.create(_event(title="Sunday", date="2025-01-19"))
        controller.create(_event(title="Next week", date="2025-01-20"))

        with PlannerView(ctx, day=date(2025, 1, 15)) as view:
            page = view.render()

        assert page["is_today"] is True
        assert [e["title"] for e in page["events"]] == ["Early", "Late"]
        assert page["events"][0]["time_display"] == "08:00 - 08:30"
        assert page["events"][1]["time_display"] == "17:00 - No end"
        assert (page["completed"], page["total"]) == (0, 2)

        week = page["week"]
        assert [d["date"] for d in week][0] == date(2025, 1, 13)
        assert [d["date"] for d in week][-1] == date(2025, 1, 19)
        counts = {d["date"]: d["count"] for d in week}
        assert counts[date(2025, 1, 13)] == 1
        assert counts[date(2025, 1, 15)] == 2
        assert counts[date(2025, 1, 19)] == 1
        assert [d["date"] for d in week if d["selected"]] == [date(2025, 1, 15)]

    def test_other_day(self, ctx):
        with PlannerView(ctx, day=date(2025, 1, 16)) as view:
            page = view.render()
        assert page["is_today"] is False
        assert page["events"] == []

    def test_toggle_updates_planner_and_dashboard(self, ctx):
        """Toggle при смонтированных view: 0/1 -> 1/1 в обоих"""
        controller = PlannerEventController(ctx)
        event = controller.create(_event()).row

        planner = PlannerView(ctx).mount()
        dashboard = DashboardView(ctx).mount()
        try:
            assert (planner.render()["completed"], planner.render()["total"]) == (0, 1)
            assert (dashboard.render()["today_completed"], dashboard.render()["today_total"]) == (0, 1)

            assert controller.toggle_complete(event["id"], False).ok

            assert (planner.render()["completed"], planner.render()["total"]) == (1, 1)
            assert (dashboard.render()["today_completed"], dashboard.render()["today_total"]) == (1, 1)
        finally:
            planner.unmount()
            dashboard.unmount()

    def test_unmounted_view_ignores_late_results(self, ctx):
        controller = PlannerEventController(ctx)
        controller.create(_event())

        view = PlannerView(ctx).mount()
        assert view.render()["total"] == 1
        view.unmount()

        controller.create(_event(title="Retro"))
        assert view.render()["total"] == 1


class TestEventItem:
    def test_no_start_time(self):
        assert event_item({"title": "x", "start_time": None})["time_display"] is None

    def test_string_times(self):
        item = event_item({"start_time": "09:00:00", "end_time": "10:15:00"})
        assert item["time_display"] == "09:00 - 10:15"


class TestPlannerCacheFootprint:
    def test_walking_dates_keeps_cache_bounded(self, store, user):
        """Перебор дат /planner?date= не раздувает кэш"""
        cache = QueryCache(max_entries=20)
        ctx = UserContext.build(user, store, cache, CollectingNotifier(), date(2025, 1, 15))

        for offset in range(500):
            with PlannerView(ctx, day=date(2024, 1, 1) + timedelta(days=offset)) as view:
                view.render()

        assert len(cache) <= 20

    def test_mounted_view_survives_eviction(self, store, user):
        cache = QueryCache(max_entries=4)
        ctx = UserContext.build(user, store, cache, CollectingNotifier(), date(2025, 1, 15))
        controller = PlannerEventController(ctx)
        event = controller.create(_event()).row

        with PlannerView(ctx) as mounted:
            for offset in range(1, 30):
                with PlannerView(ctx, day=date(2025, 2, 1) + timedelta(days=offset)):
                    pass
            controller.toggle_complete(event["id"], False)
            assert mounted.render()["completed"] == 1
