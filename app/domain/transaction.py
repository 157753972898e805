"""
Transaction domain entity - ledger rows (income / expense)
"""
from datetime import date
from decimal import Decimal
from dataclasses import dataclass
from typing import Dict, Any, Optional

TRANSACTION_TYPES = ("income", "expense")

INCOME_CATEGORIES = ("Salary", "Business", "Investment", "Freelance", "Other Income")
EXPENSE_CATEGORIES = (
    "Food", "Transport", "Utilities", "Entertainment", "Shopping", "Health", "Other Expense",
)
TRANSACTION_CATEGORIES = INCOME_CATEGORIES + EXPENSE_CATEGORIES


@dataclass
class Transaction:
    """
    Transaction entity

    amount всегда >= 0: направление задаётся полем type, знак не хранится.
    - income: доход
    - expense: расход
    """
    id: str
    user_id: int
    type: str
    amount: Decimal
    category: str
    date: date
    description: Optional[str] = None

    @staticmethod
    def create(
        type: str,
        amount: Decimal,
        category: str,
        date: date,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        return {
            "type": type,
            "amount": amount,
            "category": category,
            "description": description,
            "date": date,
        }

    @staticmethod
    def update(**changes: Any) -> Dict[str, Any]:
        allowed = ("type", "amount", "category", "description", "date")
        return {k: v for k, v in changes.items() if k in allowed}


def signed_amount(row: Dict[str, Any]) -> Decimal:
    """Сумма со знаком для отображения: expense -> отрицательная"""
    amount = Decimal(str(row.get("amount") or 0))
    return -amount if row.get("type") == "expense" else amount
