"""
Scoped read queries - one definition per cached read

Query key = (prefix, user_id, *scope). Prefixes are the units of
invalidation (see app/application/invalidation.py).
"""
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Tuple

from app.infrastructure.store.base import Filter, Order, RecordStore, eq, gte, lte
from app.utils.dates import week_bounds

BUSINESSES = "businesses"
DEPARTMENTS = "departments"
TRANSACTIONS = "transactions"
SAVINGS = "savings"
INVESTMENTS = "investments"
GOALS = "goals"
PLANNER_EVENTS = "planner-events"
WEEK_EVENTS = "week-events"
TODAY_EVENTS = "today-events"
PROFILE = "profile"


@dataclass(frozen=True)
class Query:
    key: Tuple[Any, ...]
    table: str
    filters: Tuple[Filter, ...] = ()
    order: Optional[Order] = None
    limit: Optional[int] = None
    single: bool = False

    def fetcher(self, store: RecordStore):
        """Функция загрузки для QueryCache (store уже привязан к пользователю)"""
        def _fetch():
            rows = store.select(self.table, self.filters, order=self.order, limit=self.limit)
            if self.single:
                return rows[0] if rows else None
            return rows
        return _fetch


def businesses(user_id: int) -> Query:
    return Query((BUSINESSES, user_id), "businesses", order=Order("created_at", descending=True))


def departments(user_id: int) -> Query:
    return Query((DEPARTMENTS, user_id), "departments", order=Order("name"))


def transactions(user_id: int) -> Query:
    return Query((TRANSACTIONS, user_id), "transactions", order=Order("date", descending=True))


def savings(user_id: int) -> Query:
    return Query((SAVINGS, user_id), "savings_targets", order=Order("created_at", descending=True))


def investments(user_id: int) -> Query:
    return Query((INVESTMENTS, user_id), "investments", order=Order("created_at", descending=True))


def goals(user_id: int) -> Query:
    return Query((GOALS, user_id), "goals", order=Order("created_at", descending=True))


def day_events(user_id: int, day: date) -> Query:
    return Query(
        (PLANNER_EVENTS, user_id, day.isoformat()),
        "planner_events",
        filters=(eq("date", day),),
        order=Order("start_time"),
    )


def week_events(user_id: int, day: date) -> Query:
    start, end = week_bounds(day)
    return Query(
        (WEEK_EVENTS, user_id, start.isoformat()),
        "planner_events",
        filters=(gte("date", start), lte("date", end)),
        order=Order("date"),
    )


def today_events(user_id: int, today: date) -> Query:
    return Query(
        (TODAY_EVENTS, user_id, today.isoformat()),
        "planner_events",
        filters=(eq("date", today),),
        order=Order("start_time"),
    )


def profile(user_id: int) -> Query:
    return Query((PROFILE, user_id), "profiles", limit=1, single=True)
