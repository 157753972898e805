"""
Date helpers: "today" in the configured timezone, Monday-start weeks
"""
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from app.config import get_settings


def local_today(tz_name: str | None = None) -> date:
    tz = ZoneInfo(tz_name or get_settings().TIMEZONE)
    return datetime.now(tz).date()


def week_bounds(day: date) -> tuple[date, date]:
    """(понедельник, воскресенье) недели, содержащей day"""
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


def week_days(day: date) -> list[date]:
    start, _ = week_bounds(day)
    return [start + timedelta(days=i) for i in range(7)]
