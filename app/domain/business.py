"""
Business / Department domain entities - build row payloads for the record store
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Any, Optional

BUSINESS_STATUSES = ("active", "inactive", "pending")
INDUSTRIES = (
    "Technology", "Finance", "Healthcare", "Retail", "Manufacturing",
    "Real Estate", "Consulting", "Education", "Entertainment", "Other",
)


@dataclass
class Business:
    """
    Business entity

    Не персистится напрямую - формирует payload строки для record store.
    revenue по умолчанию 0.
    """
    id: str
    user_id: int
    name: str
    industry: Optional[str]
    revenue: Decimal
    status: str
    description: Optional[str] = None

    @staticmethod
    def create(
        name: str,
        industry: Optional[str] = None,
        revenue: Decimal = Decimal("0"),
        status: str = "active",
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        return {
            "name": name,
            "description": description,
            "industry": industry,
            "revenue": revenue,
            "status": status,
        }

    @staticmethod
    def update(**changes: Any) -> Dict[str, Any]:
        allowed = ("name", "description", "industry", "revenue", "status")
        return {k: v for k, v in changes.items() if k in allowed}


@dataclass
class Department:
    """Department: many-to-one to Business"""
    id: str
    user_id: int
    business_id: str
    name: str
    description: Optional[str] = None

    @staticmethod
    def create(business_id: str, name: str, description: Optional[str] = None) -> Dict[str, Any]:
        return {
            "business_id": business_id,
            "name": name,
            "description": description,
        }

    @staticmethod
    def update(**changes: Any) -> Dict[str, Any]:
        # business_id не меняется после создания
        allowed = ("name", "description")
        return {k: v for k, v in changes.items() if k in allowed}
