"""
Savings target / Investment domain entities
"""
from datetime import date
from decimal import Decimal
from dataclasses import dataclass
from typing import Dict, Any, Optional

SAVINGS_STATUSES = ("active", "completed")

INVESTMENT_TYPES = ("Stocks", "Bonds", "Real Estate", "Crypto", "Mutual Funds", "Other")


@dataclass
class SavingsTarget:
    """
    Savings target: progress = current / target, clamped for display
    """
    id: str
    user_id: int
    name: str
    target_amount: Decimal
    current_amount: Decimal
    deadline: Optional[date] = None
    status: str = "active"

    @staticmethod
    def create(
        name: str,
        target_amount: Decimal,
        current_amount: Decimal = Decimal("0"),
        deadline: Optional[date] = None,
        status: str = "active",
    ) -> Dict[str, Any]:
        return {
            "name": name,
            "target_amount": target_amount,
            "current_amount": current_amount,
            "deadline": deadline,
            "status": status,
        }

    @staticmethod
    def update(**changes: Any) -> Dict[str, Any]:
        allowed = ("name", "target_amount", "current_amount", "deadline", "status")
        return {k: v for k, v in changes.items() if k in allowed}


@dataclass
class Investment:
    """
    Investment: gain = current_value - amount
    """
    id: str
    user_id: int
    name: str
    type: str
    amount: Decimal
    current_value: Decimal
    notes: Optional[str] = None

    @staticmethod
    def create(
        name: str,
        type: str,
        amount: Decimal,
        current_value: Optional[Decimal] = None,
        notes: Optional[str] = None,
    ) -> Dict[str, Any]:
        return {
            "name": name,
            "type": type,
            "amount": amount,
            # Без текущей оценки считаем, что стоимость равна вложенной сумме
            "current_value": amount if current_value is None else current_value,
            "notes": notes,
        }

    @staticmethod
    def update(**changes: Any) -> Dict[str, Any]:
        allowed = ("name", "type", "amount", "current_value", "notes")
        return {k: v for k, v in changes.items() if k in allowed}
