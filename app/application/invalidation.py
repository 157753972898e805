"""
Cache invalidation fan-out

One static table: table mutated -> query prefixes to invalidate.
Keep every cross-entity dependency here, controllers never call
cache.invalidate() with ad hoc keys.
"""
import logging
from typing import Dict, Tuple

from app.application import queries as q
from app.infrastructure.cache.query_cache import QueryCache

logger = logging.getLogger(__name__)

INVALIDATES: Dict[str, Tuple[str, ...]] = {
    # departments cascade-delete with their business
    "businesses": (q.BUSINESSES, q.DEPARTMENTS),
    "departments": (q.DEPARTMENTS,),
    "transactions": (q.TRANSACTIONS,),
    "savings_targets": (q.SAVINGS,),
    "investments": (q.INVESTMENTS,),
    "goals": (q.GOALS,),
    # day view, week strip and the dashboard "today" widget
    "planner_events": (q.PLANNER_EVENTS, q.WEEK_EVENTS, q.TODAY_EVENTS),
    "profiles": (q.PROFILE,),
}


def prefixes_for(table: str) -> Tuple[str, ...]:
    try:
        return INVALIDATES[table]
    except KeyError:
        raise KeyError(f"No invalidation rule for table {table!r}")


def invalidate_for(cache: QueryCache, table: str, user_id: int) -> int:
    """
    Инвалидировать все запросы пользователя, зависящие от таблицы

    Returns:
        количество инвалидированных ключей
    """
    total = 0
    for prefix in prefixes_for(table):
        total += cache.invalidate((prefix, user_id))
    logger.debug("mutation of %s invalidated %d key(s) for user %s", table, total, user_id)
    return total
