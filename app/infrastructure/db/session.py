"""
SQLAlchemy engine and sessions for the own-PostgreSQL backend

Кто открывает session:
- get_db (app/api/deps.py): одна session на request, только users/profiles
  для auth и загрузки текущего пользователя
- SqlRecordStore: open_session() на каждый select/insert/update/delete,
  commit внутри вызова, между вызовами ничего не держит
- /ready: check_db_connection()

create_app(session_factory=...) и тесты подставляют свой sessionmaker
(in-memory SQLite), тогда singleton ниже не создаётся вовсе.
"""
import psycopg
from sqlalchemy import create_engine, text
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Session

from app.config import get_settings


class Base(DeclarativeBase):
    """Declarative base: users, profiles и таблицы record store (models.TABLES)"""
    pass


# Singleton engine and session factory (DATABASE_URL)
_engine = None
_SessionLocal = None


def get_engine():
    """Engine из DATABASE_URL, pool_pre_ping для долгоживущего процесса"""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_engine(settings.get_sqlalchemy_url(), pool_pre_ping=True)
    return _engine


def get_session_factory() -> sessionmaker:
    """
    Process-wide sessionmaker, используется когда фабрику не передали явно

    autoflush выключен: store пишет одну строку и сам делает commit
    """
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(bind=get_engine(), autoflush=False, autocommit=False)
    return _SessionLocal


def open_session(session_factory=None) -> Session:
    """
    Короткоживущая session: одна операция record store

    Usage:
        with open_session(self.session_factory) as db:
            db.add(obj)
            db.commit()
    """
    factory = session_factory or get_session_factory()
    return factory()


def check_db_connection(session_factory=None) -> None:
    """
    Readiness: SELECT 1 через переданную фабрику, иначе raw psycopg по DATABASE_URL

    Raises:
        sqlalchemy.exc.SQLAlchemyError / psycopg.OperationalError: если БД недоступна
    """
    if session_factory is not None:
        with open_session(session_factory) as db:
            db.execute(text("SELECT 1"))
        return

    settings = get_settings()
    with psycopg.connect(settings.DATABASE_URL, connect_timeout=3) as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT 1;")
            cur.fetchone()
