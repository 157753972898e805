"""
Day planner use cases - events per day, week strip, completion toggle
"""
from datetime import date

from app.application import queries as q
from app.application.mutations import (
    MutationController, MutationValidationError, MutationResult,
    required_text, optional_text, choice, provided,
)
from app.application.views import BaseView
from app.domain.planner_event import PlannerEvent, EVENT_TYPES, EVENT_PRIORITIES
from app.infrastructure.store.base import eq
from app.readmodels import metrics
from app.utils.dates import week_days
from app.utils.validation import parse_date, parse_time


class PlannerValidationError(MutationValidationError):
    """Ошибка валидации события планировщика"""
    pass


def _bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "on", "yes")
    return bool(value)


class PlannerEventController(MutationController):
    table = "planner_events"
    validation_error = PlannerValidationError
    messages = {
        "create": ("Event added", "Failed to add event"),
        "update": ("Event updated", "Failed to update event"),
        "delete": ("Event deleted", "Failed to delete event"),
        "toggle": (None, "Failed to update event"),
    }

    def validate(self, fields, partial=False):
        changes = {}
        if provided(fields, "title", partial):
            changes["title"] = required_text(fields.get("title"), "Title is required")
        if "description" in fields:
            changes["description"] = optional_text(fields.get("description"))
        if "type" in fields:
            changes["type"] = choice(fields.get("type") or "task", EVENT_TYPES, "event type")
        if "priority" in fields:
            changes["priority"] = choice(fields.get("priority") or "medium", EVENT_PRIORITIES, "priority")
        if provided(fields, "date", partial):
            changes["date"] = parse_date(fields.get("date")) or self.ctx.today
        if "start_time" in fields:
            changes["start_time"] = parse_time(fields.get("start_time"))
        if "end_time" in fields:
            changes["end_time"] = parse_time(fields.get("end_time"))
        if "completed" in fields:
            changes["completed"] = _bool(fields.get("completed"))

        if partial:
            return PlannerEvent.update(**changes)
        return PlannerEvent.create(**changes)

    def toggle_complete(self, event_id: str, completed) -> MutationResult:
        """Переключить completed (передаётся текущее значение)"""
        row = PlannerEvent.toggle(_bool(completed))
        return self._write(
            "toggle", lambda: self.ctx.store.update(self.table, row, [eq("id", event_id)])
        )


def _time_display(value) -> str | None:
    if value is None:
        return None
    return str(value)[:5]


def event_item(event: dict) -> dict:
    start = _time_display(event.get("start_time"))
    end = _time_display(event.get("end_time"))
    return {
        **event,
        "time_display": f"{start} - {end or 'No end'}" if start else None,
    }


class PlannerView(BaseView):
    """/planner?date=YYYY-MM-DD: день + неделя (Пн-Вс)"""

    def __init__(self, ctx, day: date | None = None):
        super().__init__(ctx)
        self.day = day or ctx.today

    def queries(self):
        uid = self.ctx.user.id
        return [q.day_events(uid, self.day), q.week_events(uid, self.day)]

    def render(self) -> dict:
        uid = self.ctx.user.id
        events = self.rows(q.day_events(uid, self.day))
        week = self.rows(q.week_events(uid, self.day))
        completed, total = metrics.completion_counter(events)
        per_day = metrics.events_per_day(week)

        return {
            "date": self.day,
            "is_today": self.day == self.ctx.today,
            "events": [event_item(e) for e in events],
            "completed": completed,
            "total": total,
            "week": [
                {"date": d, "count": per_day.get(d, 0), "selected": d == self.day}
                for d in week_days(self.day)
            ],
            "types": EVENT_TYPES,
            "priorities": EVENT_PRIORITIES,
            "errors": self.errors(),
        }
