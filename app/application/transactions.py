"""
Transaction use cases - income / expense ledger
"""
from app.application.mutations import (
    MutationController, MutationValidationError,
    required_text, optional_text, choice, provided,
)
from app.domain.transaction import Transaction, TRANSACTION_TYPES
from app.utils.validation import parse_amount, parse_date


class TransactionValidationError(MutationValidationError):
    """Ошибка валидации транзакции"""
    pass


class TransactionController(MutationController):
    table = "transactions"
    validation_error = TransactionValidationError
    messages = {
        "create": ("Transaction added", "Failed to add transaction"),
        "update": ("Transaction updated", "Failed to update transaction"),
        "delete": ("Transaction deleted", "Failed to delete transaction"),
    }

    def validate(self, fields, partial=False):
        changes = {}
        if provided(fields, "type", partial):
            changes["type"] = choice(fields.get("type") or "income", TRANSACTION_TYPES, "transaction type")
        if provided(fields, "amount", partial):
            amount = parse_amount(fields.get("amount"))
            # сумма обязательна и > 0, направление задаётся type
            if not amount:
                raise TransactionValidationError("Amount and category are required")
            changes["amount"] = amount
        if provided(fields, "category", partial):
            changes["category"] = required_text(fields.get("category"), "Amount and category are required")
        if "description" in fields:
            changes["description"] = optional_text(fields.get("description"))
        if provided(fields, "date", partial):
            changes["date"] = parse_date(fields.get("date")) or self.ctx.today

        if partial:
            return Transaction.update(**changes)
        return Transaction.create(**changes)
