"""
Goal domain entity + progress -> status transition
"""
import math
from datetime import date
from dataclasses import dataclass
from typing import Dict, Any, Optional

GOAL_PRIORITIES = ("low", "medium", "high")
GOAL_STATUSES = ("not_started", "in_progress", "completed", "on_hold")
GOAL_CATEGORIES = ("Personal", "Career", "Financial", "Health", "Education", "Relationship", "Other")

PROGRESS_MIN = 0
PROGRESS_MAX = 100


def clamp_progress(value) -> int:
    """
    Привести progress к целому в диапазоне [0, 100]

    Raises:
        ValueError: не число, inf или nan
    """
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"Progress must be a finite number: {value!r}")
    progress = int(round(number))
    return max(PROGRESS_MIN, min(PROGRESS_MAX, progress))


def derive_status(progress) -> str:
    """
    Status as a pure function of progress (slider updates):

        0      -> not_started
        1..99  -> in_progress
        100    -> completed
    """
    progress = clamp_progress(progress)
    if progress >= PROGRESS_MAX:
        return "completed"
    if progress > PROGRESS_MIN:
        return "in_progress"
    return "not_started"


@dataclass
class Goal:
    id: str
    user_id: int
    title: str
    category: str
    priority: str
    status: str
    progress: int
    description: Optional[str] = None
    target_date: Optional[date] = None

    @staticmethod
    def create(
        title: str,
        category: str,
        priority: str = "medium",
        status: str = "not_started",
        progress: int = 0,
        description: Optional[str] = None,
        target_date: Optional[date] = None,
    ) -> Dict[str, Any]:
        return {
            "title": title,
            "description": description,
            "category": category,
            "priority": priority,
            "status": status,
            "progress": clamp_progress(progress),
            "target_date": target_date,
        }

    @staticmethod
    def update(**changes: Any) -> Dict[str, Any]:
        allowed = ("title", "description", "category", "priority", "status", "progress", "target_date")
        payload = {k: v for k, v in changes.items() if k in allowed}
        if "progress" in payload:
            payload["progress"] = clamp_progress(payload["progress"])
        return payload

    @staticmethod
    def set_progress(progress) -> Dict[str, Any]:
        """Одна запись progress + status, без промежуточного состояния"""
        progress = clamp_progress(progress)
        return {"progress": progress, "status": derive_status(progress)}
