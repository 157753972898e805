"""
Business use cases - businesses and their departments
"""
from decimal import Decimal

from app.application import queries as q
from app.application.mutations import (
    MutationController, MutationValidationError, MutationResult,
    required_text, optional_text, choice, provided,
)
from app.application.views import BaseView
from app.domain.business import Business, Department, BUSINESS_STATUSES, INDUSTRIES
from app.infrastructure.store.base import StoreError, eq
from app.readmodels import metrics
from app.utils.money import format_money
from app.utils.validation import parse_amount


class BusinessValidationError(MutationValidationError):
    """Ошибка валидации бизнеса"""
    pass


class DepartmentValidationError(MutationValidationError):
    pass


class BusinessController(MutationController):
    table = "businesses"
    validation_error = BusinessValidationError
    messages = {
        "create": ("Business created successfully", "Failed to create business"),
        "update": ("Business updated successfully", "Failed to update business"),
        "delete": ("Business deleted successfully", "Failed to delete business"),
    }

    def validate(self, fields, partial=False):
        changes = {}
        if provided(fields, "name", partial):
            changes["name"] = required_text(fields.get("name"), "Business name is required")
        if "description" in fields:
            changes["description"] = optional_text(fields.get("description"))
        if "industry" in fields:
            changes["industry"] = optional_text(fields.get("industry"))
        if "revenue" in fields:
            # пустая выручка -> 0
            changes["revenue"] = parse_amount(fields.get("revenue")) or Decimal("0")
        if "status" in fields:
            changes["status"] = choice(fields.get("status") or "active", BUSINESS_STATUSES, "status")

        if partial:
            return Business.update(**changes)
        return Business.create(**changes)


class DepartmentController(MutationController):
    table = "departments"
    validation_error = DepartmentValidationError
    messages = {
        "create": ("Department added", "Failed to add department"),
        "update": ("Department updated", "Failed to update department"),
        "delete": ("Department deleted", "Failed to delete department"),
    }

    def validate(self, fields, partial=False):
        changes = {}
        if not partial:
            changes["business_id"] = required_text(fields.get("business_id"), "Business is required")
        if provided(fields, "name", partial):
            changes["name"] = required_text(fields.get("name"), "Department name is required")
        if "description" in fields:
            changes["description"] = optional_text(fields.get("description"))

        if partial:
            return Department.update(**changes)
        return Department.create(**changes)

    def create(self, fields):
        row = self._validated(fields, partial=False)
        # business_id должен принадлежать текущему пользователю (scoped select)
        try:
            owned = self.ctx.store.select("businesses", [eq("id", row["business_id"])], limit=1)
        except StoreError as e:
            failure = self.messages["create"][1]
            self.ctx.notifier.error(failure)
            return MutationResult(ok=False, error=e, message=failure)
        if not owned:
            self._reject("Business not found")
        return self._write("create", lambda: self.ctx.store.insert(self.table, row))


class BusinessesView(BaseView):
    """/businesses: cards per business + summary"""

    def queries(self):
        uid = self.ctx.user.id
        return [q.businesses(uid), q.departments(uid)]

    def render(self) -> dict:
        uid = self.ctx.user.id
        businesses = self.rows(q.businesses(uid))
        departments = self.rows(q.departments(uid))
        dept_counts = metrics.department_counts(departments)
        symbol = self.ctx.currency_symbol

        return {
            "summary": metrics.business_summary(businesses, departments),
            "total_revenue_display": format_money(metrics.total_revenue(businesses), symbol),
            "businesses": [
                {
                    **b,
                    "revenue_display": format_money(b.get("revenue"), symbol),
                    "department_count": dept_counts.get(b.get("id"), 0),
                    "departments": [d for d in departments if d.get("business_id") == b.get("id")],
                }
                for b in businesses
            ],
            "statuses": BUSINESS_STATUSES,
            "industries": INDUSTRIES,
            "errors": self.errors(),
        }
