"""
Record store boundary - the only sanctioned way to reach persisted rows

Four operations mirror the hosted database API:
    select(table, filters, order, limit)
    insert(table, row)
    update(table, row, filters)
    delete(table, filters)

Rows travel as plain dicts. Implementations raise StoreError
(RecordNotFound when an update/delete matched nothing).
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence


class StoreError(Exception):
    """Ошибка record store (сеть, права, БД)"""
    pass


class RecordNotFound(StoreError):
    """update/delete не нашёл ни одной строки"""
    pass


OPERATORS = ("eq", "gte", "lte")


@dataclass(frozen=True)
class Filter:
    column: str
    op: str
    value: Any

    def __post_init__(self):
        if self.op not in OPERATORS:
            raise ValueError(f"Unsupported filter operator: {self.op}")


@dataclass(frozen=True)
class Order:
    column: str
    descending: bool = False


def eq(column: str, value: Any) -> Filter:
    return Filter(column, "eq", value)


def gte(column: str, value: Any) -> Filter:
    return Filter(column, "gte", value)


def lte(column: str, value: Any) -> Filter:
    return Filter(column, "lte", value)


Row = Dict[str, Any]


class RecordStore(ABC):
    """Abstract record store"""

    @abstractmethod
    def select(
        self,
        table: str,
        filters: Sequence[Filter] = (),
        order: Optional[Order] = None,
        limit: Optional[int] = None,
    ) -> List[Row]:
        """Выборка строк (пустой список - валидный результат)"""

    @abstractmethod
    def insert(self, table: str, row: Row) -> Row:
        """Вставить одну строку, вернуть сохранённое представление"""

    @abstractmethod
    def update(self, table: str, row: Row, filters: Sequence[Filter]) -> Row:
        """Обновить строку; RecordNotFound если фильтр ничего не нашёл"""

    @abstractmethod
    def delete(self, table: str, filters: Sequence[Filter]) -> None:
        """Удалить строку; RecordNotFound если фильтр ничего не нашёл"""


class UserScopedStore(RecordStore):
    """
    Record store bound to one authenticated user

    Every read/update/delete is filtered by user_id, every insert is stamped
    with it. A user_id (or id) coming with the payload is dropped, so rows
    can never be written for, or moved to, another user.
    """

    PROTECTED = ("id", "user_id")

    def __init__(self, store: RecordStore, user_id: int):
        if user_id is None:
            raise ValueError("UserScopedStore requires an authenticated user id")
        self.store = store
        self.user_id = user_id

    def _scope(self, filters: Sequence[Filter]) -> List[Filter]:
        scoped = [f for f in filters if f.column != "user_id"]
        scoped.append(eq("user_id", self.user_id))
        return scoped

    def _clean(self, row: Row) -> Row:
        return {k: v for k, v in row.items() if k not in self.PROTECTED}

    def select(self, table, filters=(), order=None, limit=None):
        return self.store.select(table, self._scope(filters), order=order, limit=limit)

    def insert(self, table, row):
        payload = self._clean(row)
        payload["user_id"] = self.user_id
        return self.store.insert(table, payload)

    def update(self, table, row, filters):
        return self.store.update(table, self._clean(row), self._scope(filters))

    def delete(self, table, filters):
        self.store.delete(table, self._scope(filters))
