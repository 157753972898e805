"""
Savings targets and investments use cases
"""
from decimal import Decimal

from app.application.mutations import (
    MutationController, MutationValidationError,
    required_text, optional_text, choice, provided,
)
from app.domain.savings import SavingsTarget, Investment, SAVINGS_STATUSES
from app.utils.validation import parse_amount, parse_date


class SavingsValidationError(MutationValidationError):
    """Ошибка валидации цели накопления"""
    pass


class InvestmentValidationError(MutationValidationError):
    pass


class SavingsTargetController(MutationController):
    table = "savings_targets"
    validation_error = SavingsValidationError
    messages = {
        "create": ("Savings goal created", "Failed to create savings goal"),
        "update": ("Savings goal updated", "Failed to update savings goal"),
        "delete": ("Savings goal deleted", "Failed to delete savings goal"),
    }

    def validate(self, fields, partial=False):
        changes = {}
        if provided(fields, "name", partial):
            changes["name"] = required_text(fields.get("name"), "Name and target amount are required")
        if provided(fields, "target_amount", partial):
            target = parse_amount(fields.get("target_amount"))
            # target = 0 отклоняется на вводе, на отображении не бросаем
            if not target:
                raise SavingsValidationError("Target amount must be greater than zero")
            changes["target_amount"] = target
        if "current_amount" in fields:
            changes["current_amount"] = parse_amount(fields.get("current_amount")) or Decimal("0")
        if "deadline" in fields:
            changes["deadline"] = parse_date(fields.get("deadline"))
        if "status" in fields:
            changes["status"] = choice(fields.get("status") or "active", SAVINGS_STATUSES, "status")

        if partial:
            return SavingsTarget.update(**changes)
        return SavingsTarget.create(**changes)


class InvestmentController(MutationController):
    table = "investments"
    validation_error = InvestmentValidationError
    messages = {
        "create": ("Investment added", "Failed to add investment"),
        "update": ("Investment updated", "Failed to update investment"),
        "delete": ("Investment deleted", "Failed to delete investment"),
    }

    def validate(self, fields, partial=False):
        changes = {}
        if provided(fields, "name", partial):
            changes["name"] = required_text(fields.get("name"), "Name and type are required")
        if provided(fields, "type", partial):
            changes["type"] = required_text(fields.get("type"), "Name and type are required")
        if provided(fields, "amount", partial):
            changes["amount"] = parse_amount(fields.get("amount")) or Decimal("0")
        # пустая оценка при создании -> current_value = amount
        current_value = parse_amount(fields.get("current_value"))
        if current_value is not None:
            changes["current_value"] = current_value
        if "notes" in fields:
            changes["notes"] = optional_text(fields.get("notes"))

        if partial:
            return Investment.update(**changes)
        return Investment.create(**changes)
