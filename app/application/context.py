"""
Per-request user context, injected at the composition root (API deps)

Holds everything a controller or a view needs: the authenticated user,
a record store already scoped to that user, the shared query cache
and the notifier. No module-level session state in the core.
"""
from dataclasses import dataclass
from datetime import date

from app.application.notifications import Notifier
from app.infrastructure.cache.query_cache import QueryCache
from app.infrastructure.store.base import RecordStore, UserScopedStore


@dataclass(frozen=True)
class CurrentUser:
    id: int
    email: str


@dataclass
class UserContext:
    user: CurrentUser
    store: RecordStore
    cache: QueryCache
    notifier: Notifier
    today: date
    currency_symbol: str = "$"

    @classmethod
    def build(
        cls,
        user: CurrentUser,
        store: RecordStore,
        cache: QueryCache,
        notifier: Notifier,
        today: date,
        currency_symbol: str = "$",
    ) -> "UserContext":
        """Оборачивает store в UserScopedStore текущего пользователя"""
        if not isinstance(store, UserScopedStore) or store.user_id != user.id:
            store = UserScopedStore(store, user.id)
        return cls(
            user=user,
            store=store,
            cache=cache,
            notifier=notifier,
            today=today,
            currency_symbol=currency_symbol,
        )
