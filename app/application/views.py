"""
View composition base - a page mounted on the query cache

    with FinanceView(ctx) as view:
        page = view.render()

mount() subscribes to every query of the page and resolves it through the
cache (shared entries, single flight). While mounted, invalidations push
refetched results into the view. unmount() closes the subscriptions: a
result arriving after that is dropped.
"""
from typing import Dict, List

from app.application.context import UserContext
from app.application.queries import Query
from app.infrastructure.cache.query_cache import QueryResult, Subscription


class BaseView:

    def __init__(self, ctx: UserContext):
        self.ctx = ctx
        self.mounted = False
        self._subscriptions: List[Subscription] = []
        self._results: Dict[tuple, QueryResult] = {}

    def queries(self) -> List[Query]:
        raise NotImplementedError

    def render(self) -> dict:
        raise NotImplementedError

    # === Lifecycle ===

    def mount(self) -> "BaseView":
        if self.mounted:
            return self
        self.mounted = True
        for query in self.queries():
            fetcher = query.fetcher(self.ctx.store)
            self._subscriptions.append(
                self.ctx.cache.subscribe(query.key, fetcher, self._on_result)
            )
            self._results[query.key] = self.ctx.cache.fetch(query.key, fetcher)
        return self

    def unmount(self) -> None:
        self.mounted = False
        for subscription in self._subscriptions:
            subscription.close()
        self._subscriptions = []

    def __enter__(self):
        return self.mount()

    def __exit__(self, exc_type, exc, tb):
        self.unmount()
        return False

    def _on_result(self, key: tuple, result: QueryResult) -> None:
        if not self.mounted:
            return
        self._results[key] = result

    # === Reads ===

    def result(self, query: Query) -> QueryResult:
        return self._results.get(query.key) or self.ctx.cache.peek(query.key)

    def rows(self, query: Query) -> list:
        """Строки запроса; не загружено / ошибка -> пустой список"""
        data = self.result(query).data
        if data is None:
            return []
        return list(data) if isinstance(data, list) else [data]

    def one(self, query: Query):
        data = self.result(query).data
        return data if isinstance(data, dict) else None

    def errors(self) -> Dict[str, str]:
        """Ошибки загрузки по запросам (изолированы по ключу)"""
        return {
            str(key[0]): str(result.error)
            for key, result in self._results.items()
            if result.error is not None
        }

    def is_loading(self) -> bool:
        return any(r.is_loading for r in self._results.values())
