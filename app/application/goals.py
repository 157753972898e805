"""
Goal use cases - goals with progress slider and derived status
"""
from app.application import queries as q
from app.application.mutations import (
    MutationController, MutationValidationError, MutationResult,
    required_text, optional_text, choice, provided,
)
from app.application.views import BaseView
from app.domain.goal import (
    Goal, GOAL_CATEGORIES, GOAL_PRIORITIES, GOAL_STATUSES, clamp_progress,
)
from app.infrastructure.store.base import eq
from app.readmodels import metrics
from app.utils.validation import parse_date


class GoalValidationError(MutationValidationError):
    """Ошибка валидации цели"""
    pass


def _progress(value) -> int:
    try:
        return clamp_progress(value if value not in (None, "") else 0)
    except (TypeError, ValueError, OverflowError):
        raise GoalValidationError(f"Invalid progress: {value!r}")


class GoalController(MutationController):
    table = "goals"
    validation_error = GoalValidationError
    messages = {
        "create": ("Goal created", "Failed to create goal"),
        "update": ("Goal updated", "Failed to update goal"),
        "delete": ("Goal deleted", "Failed to delete goal"),
        # слайдер прогресса - без toast при успехе
        "progress": (None, "Failed to update progress"),
    }

    def validate(self, fields, partial=False):
        changes = {}
        if provided(fields, "title", partial):
            changes["title"] = required_text(fields.get("title"), "Title and category are required")
        if provided(fields, "category", partial):
            changes["category"] = required_text(fields.get("category"), "Title and category are required")
        if "description" in fields:
            changes["description"] = optional_text(fields.get("description"))
        if "priority" in fields:
            changes["priority"] = choice(fields.get("priority") or "medium", GOAL_PRIORITIES, "priority")
        if "status" in fields:
            changes["status"] = choice(fields.get("status") or "not_started", GOAL_STATUSES, "status")
        if "progress" in fields:
            changes["progress"] = _progress(fields.get("progress"))
        if "target_date" in fields:
            changes["target_date"] = parse_date(fields.get("target_date"))

        if partial:
            return Goal.update(**changes)
        return Goal.create(**changes)

    def update_progress(self, goal_id: str, progress) -> MutationResult:
        """
        Slider update: progress and derived status in one write

        status = derive_status(progress) is computed before the write, so the
        cache never sees a goal at 100% that is not completed.
        """
        try:
            row = Goal.set_progress(_progress(progress))
        except GoalValidationError as e:
            self.ctx.notifier.error(str(e))
            raise
        return self._write(
            "progress", lambda: self.ctx.store.update(self.table, row, [eq("id", goal_id)])
        )


class GoalsView(BaseView):

    def queries(self):
        return [q.goals(self.ctx.user.id)]

    def render(self) -> dict:
        goals = self.rows(q.goals(self.ctx.user.id))
        return {
            "counts": metrics.goal_counts(goals),
            "goals": [
                {**g, "status_label": str(g.get("status") or "").replace("_", " ")}
                for g in goals
            ],
            "categories": GOAL_CATEGORIES,
            "priorities": GOAL_PRIORITIES,
            "statuses": GOAL_STATUSES,
            "errors": self.errors(),
        }
