"""
Planner event domain entity (day planner: tasks, events, meetings, reminders)
"""
from datetime import date, time
from dataclasses import dataclass
from typing import Dict, Any, Optional

EVENT_TYPES = ("task", "event", "meeting", "reminder")
EVENT_PRIORITIES = ("low", "medium", "high")


@dataclass
class PlannerEvent:
    id: str
    user_id: int
    title: str
    type: str
    priority: str
    date: date
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    completed: bool = False
    description: Optional[str] = None

    @staticmethod
    def create(
        title: str,
        date: date,
        type: str = "task",
        priority: str = "medium",
        start_time: Optional[time] = None,
        end_time: Optional[time] = None,
        description: Optional[str] = None,
        completed: bool = False,
    ) -> Dict[str, Any]:
        return {
            "title": title,
            "description": description,
            "type": type,
            "priority": priority,
            "date": date,
            "start_time": start_time,
            "end_time": end_time,
            "completed": completed,
        }

    @staticmethod
    def update(**changes: Any) -> Dict[str, Any]:
        allowed = (
            "title", "description", "type", "priority",
            "date", "start_time", "end_time", "completed",
        )
        return {k: v for k, v in changes.items() if k in allowed}

    @staticmethod
    def toggle(completed: bool) -> Dict[str, Any]:
        return {"completed": not completed}
