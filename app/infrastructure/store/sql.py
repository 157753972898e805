"""
SQL record store - SQLAlchemy ORM over the dashboard tables

Each call opens its own short-lived session, so a store instance (and the
cached fetchers built on it) can be used from any worker thread.
"""
import logging
from typing import List, Optional, Sequence

from sqlalchemy import select as sa_select, delete as sa_delete, inspect
from sqlalchemy.exc import SQLAlchemyError

from app.infrastructure.db.models import TABLES
from app.infrastructure.db.session import get_session_factory, open_session
from app.infrastructure.store.base import (
    RecordStore, StoreError, RecordNotFound, Filter, Order, Row,
)

logger = logging.getLogger(__name__)


def _model_for(table: str):
    model = TABLES.get(table)
    if model is None:
        raise StoreError(f"Unknown table: {table}")
    return model


def _to_row(obj) -> Row:
    mapper = inspect(obj).mapper
    return {attr.key: getattr(obj, attr.key) for attr in mapper.column_attrs}


def _where(model, filters: Sequence[Filter]):
    clauses = []
    for f in filters:
        column = getattr(model, f.column, None)
        if column is None:
            raise StoreError(f"Unknown column {model.__tablename__}.{f.column}")
        if f.op == "eq":
            clauses.append(column.is_(None) if f.value is None else column == f.value)
        elif f.op == "gte":
            clauses.append(column >= f.value)
        elif f.op == "lte":
            clauses.append(column <= f.value)
    return clauses


class SqlRecordStore(RecordStore):

    def __init__(self, session_factory=None):
        self.session_factory = session_factory or get_session_factory()

    def select(
        self,
        table: str,
        filters: Sequence[Filter] = (),
        order: Optional[Order] = None,
        limit: Optional[int] = None,
    ) -> List[Row]:
        model = _model_for(table)
        stmt = sa_select(model).where(*_where(model, filters))
        if order is not None:
            column = getattr(model, order.column)
            # Как в PostgREST: NULL в конце при любом направлении
            stmt = stmt.order_by(column.desc().nulls_last() if order.descending else column.asc().nulls_last())
        if limit is not None:
            stmt = stmt.limit(limit)

        try:
            with open_session(self.session_factory) as db:
                return [_to_row(obj) for obj in db.scalars(stmt).all()]
        except SQLAlchemyError as e:
            logger.exception("select from %s failed", table)
            raise StoreError(f"Failed to load {table}") from e

    def insert(self, table: str, row: Row) -> Row:
        model = _model_for(table)
        try:
            with open_session(self.session_factory) as db:
                obj = model(**row)
                db.add(obj)
                db.commit()
                db.refresh(obj)
                return _to_row(obj)
        except (SQLAlchemyError, TypeError) as e:
            logger.exception("insert into %s failed", table)
            raise StoreError(f"Failed to insert into {table}") from e

    def update(self, table: str, row: Row, filters: Sequence[Filter]) -> Row:
        model = _model_for(table)
        clauses = _where(model, filters)
        columns = {attr.key for attr in inspect(model).column_attrs}
        unknown = set(row) - columns
        if unknown:
            raise StoreError(f"Unknown columns for {table}: {', '.join(sorted(unknown))}")

        try:
            with open_session(self.session_factory) as db:
                obj = db.scalars(sa_select(model).where(*clauses).limit(1)).first()
                if obj is None:
                    raise RecordNotFound(f"No matching row in {table}")
                for key, value in row.items():
                    setattr(obj, key, value)
                db.commit()
                db.refresh(obj)
                return _to_row(obj)
        except SQLAlchemyError as e:
            logger.exception("update of %s failed", table)
            raise StoreError(f"Failed to update {table}") from e

    def delete(self, table: str, filters: Sequence[Filter]) -> None:
        model = _model_for(table)
        try:
            with open_session(self.session_factory) as db:
                result = db.execute(sa_delete(model).where(*_where(model, filters)))
                deleted = result.rowcount
                db.commit()
        except SQLAlchemyError as e:
            logger.exception("delete from %s failed", table)
            raise StoreError(f"Failed to delete from {table}") from e

        if deleted == 0:
            raise RecordNotFound(f"No matching row in {table}")
