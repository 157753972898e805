"""
Pytest fixtures for testing
"""
from datetime import date

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.application.context import CurrentUser, UserContext
from app.application.notifications import CollectingNotifier
from app.infrastructure.cache.query_cache import QueryCache
from app.infrastructure.db import models  # noqa: F401  (таблицы в Base.metadata)
from app.infrastructure.db.session import Base
from app.infrastructure.store.sql import SqlRecordStore

TODAY = date(2025, 1, 15)  # среда


@pytest.fixture
def db_engine():
    """
    In-memory SQLite, одно соединение на все сессии (StaticPool):
    record store открывает короткую session на каждый вызов
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(bind=db_engine, autoflush=False, autocommit=False)


@pytest.fixture
def store(session_factory):
    """Unscoped SQL record store"""
    return SqlRecordStore(session_factory)


@pytest.fixture
def cache():
    return QueryCache()


@pytest.fixture
def notifier():
    return CollectingNotifier()


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def user():
    return CurrentUser(id=1, email="owner@example.com")


@pytest.fixture
def other_user():
    return CurrentUser(id=2, email="other@example.com")


@pytest.fixture
def make_ctx(store, cache):
    """Фабрика UserContext: общий store и cache, свой notifier"""
    def _make(user, notifier=None, today=TODAY):
        return UserContext.build(user, store, cache, notifier or CollectingNotifier(), today)
    return _make


@pytest.fixture
def ctx(make_ctx, user, notifier):
    return make_ctx(user, notifier)


@pytest.fixture
def other_ctx(make_ctx, other_user):
    return make_ctx(other_user)
