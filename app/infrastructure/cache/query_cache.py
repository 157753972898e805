"""
Query cache - client-side cache of record store reads

Key: tuple (entity, user_id, *scope), e.g. ("planner-events", 7, "2025-01-10").

- Entries stay fresh until explicitly invalidated (no TTL).
- One in-flight fetch per key; concurrent callers wait on it.
- invalidate(prefix) marks entries stale; entries with mounted
  subscribers are refetched right away, others on next fetch().
- A fetch that raced with an invalidation is stored as stale.
- StoreError on fetch: previous data kept, error recorded, entry not fresh.
- At most max_entries keys are kept: the least recently used entry with no
  subscribers and no fetch in flight is evicted first. Mounted and in-flight
  entries are never evicted.
"""
import logging
import threading
from collections import OrderedDict
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from app.infrastructure.store.base import StoreError

logger = logging.getLogger(__name__)

QueryKey = Tuple[Any, ...]
Fetcher = Callable[[], Any]

DEFAULT_MAX_ENTRIES = 1024


@dataclass(frozen=True)
class QueryResult:
    data: Any = None
    is_loading: bool = False
    error: Optional[StoreError] = None
    is_stale: bool = False

    @property
    def is_success(self) -> bool:
        return self.error is None and not self.is_loading


@dataclass
class _Entry:
    data: Any = None
    error: Optional[StoreError] = None
    fresh: bool = False
    has_data: bool = False
    generation: int = 0
    inflight: Optional[Future] = None
    fetcher: Optional[Fetcher] = None
    subscribers: List["Subscription"] = field(default_factory=list)

    def snapshot(self) -> QueryResult:
        return QueryResult(
            data=self.data,
            is_loading=self.inflight is not None,
            error=self.error,
            is_stale=self.has_data and not self.fresh,
        )


class Subscription:
    """Mounted consumer of one key; close() = unmount"""

    def __init__(self, cache: "QueryCache", key: QueryKey, callback: Callable[[QueryKey, QueryResult], None]):
        self.cache = cache
        self.key = key
        self.callback = callback
        self.active = True

    def deliver(self, result: QueryResult) -> None:
        # Поздний результат после unmount не применяется
        if self.active:
            self.callback(self.key, result)

    def close(self) -> None:
        if self.active:
            self.active = False
            self.cache._unsubscribe(self)


def key_matches(key: QueryKey, prefix: QueryKey) -> bool:
    return tuple(key[:len(prefix)]) == tuple(prefix)


class QueryCache:

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        if max_entries < 1:
            raise ValueError("max_entries must be positive")
        self.max_entries = max_entries
        self._lock = threading.Lock()
        self._entries: "OrderedDict[QueryKey, _Entry]" = OrderedDict()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _entry(self, key: QueryKey) -> _Entry:
        """Entry по ключу (под lock), отмечается как недавно использованный"""
        entry = self._entries.get(key)
        if entry is None:
            entry = self._entries[key] = _Entry()
            self._evict(keep=key)
        else:
            self._entries.move_to_end(key)
        return entry

    def _evict(self, keep: QueryKey) -> None:
        """LRU: удалить самые старые простаивающие ключи сверх max_entries"""
        excess = len(self._entries) - self.max_entries
        if excess <= 0:
            return
        idle = [
            k for k, e in self._entries.items()
            if k != keep and not e.subscribers and e.inflight is None
        ]
        evicted = idle[:excess]
        for key in evicted:
            del self._entries[key]
        if evicted:
            logger.debug("query cache evicted %d idle key(s)", len(evicted))

    def peek(self, key: QueryKey) -> QueryResult:
        """Текущее состояние без запуска запроса"""
        key = tuple(key)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return QueryResult()
            return entry.snapshot()

    def fetch(self, key: QueryKey, fetcher: Fetcher) -> QueryResult:
        """
        Вернуть свежий результат или выполнить запрос

        Concurrent callers for the same key share one fetcher call.
        """
        key = tuple(key)
        with self._lock:
            entry = self._entry(key)
            if entry.fresh:
                logger.debug("query cache hit %s", key)
                return entry.snapshot()
            future = entry.inflight
            owner = future is None
            if owner:
                future = entry.inflight = Future()
                generation = entry.generation

        if not owner:
            future.result()
            with self._lock:
                return entry.snapshot()

        return self._run(key, entry, fetcher, future, generation)

    def _run(self, key, entry: _Entry, fetcher: Fetcher, future: Future, generation: int) -> QueryResult:
        try:
            data = fetcher()
        except StoreError as e:
            logger.warning("query %s failed: %s", key, e)
            with self._lock:
                entry.error = e
                entry.fresh = False
                entry.inflight = None
                result = entry.snapshot()
            future.set_result(None)
            return result
        except BaseException as e:
            with self._lock:
                entry.inflight = None
            future.set_exception(e)
            raise

        with self._lock:
            entry.data = data
            entry.has_data = True
            entry.error = None
            # Инвалидация во время запроса -> результат уже устарел
            entry.fresh = entry.generation == generation
            entry.inflight = None
            result = entry.snapshot()
        future.set_result(None)
        return result

    def subscribe(
        self,
        key: QueryKey,
        fetcher: Fetcher,
        callback: Callable[[QueryKey, QueryResult], None],
    ) -> Subscription:
        key = tuple(key)
        subscription = Subscription(self, key, callback)
        with self._lock:
            entry = self._entry(key)
            entry.fetcher = fetcher
            entry.subscribers.append(subscription)
        return subscription

    def _unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            entry = self._entries.get(subscription.key)
            if entry and subscription in entry.subscribers:
                entry.subscribers.remove(subscription)
                if not entry.subscribers:
                    # fetcher держит scoped store, без подписчиков он не нужен
                    entry.fetcher = None

    def invalidate(self, prefix: QueryKey) -> int:
        """
        Пометить устаревшими все ключи с данным префиксом

        Returns:
            количество затронутых ключей
        """
        prefix = tuple(prefix)
        to_refetch = []
        with self._lock:
            matched = [(k, e) for k, e in self._entries.items() if key_matches(k, prefix)]
            for key, entry in matched:
                entry.fresh = False
                entry.generation += 1
                if entry.subscribers and entry.fetcher is not None:
                    to_refetch.append((key, entry, entry.fetcher))

        if matched:
            logger.info("invalidated %d cached quer%s for %s", len(matched), "y" if len(matched) == 1 else "ies", prefix)

        for key, entry, fetcher in to_refetch:
            result = self.fetch(key, fetcher)
            with self._lock:
                subscribers = list(entry.subscribers)
            for subscription in subscribers:
                subscription.deliver(result)

        return len(matched)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
