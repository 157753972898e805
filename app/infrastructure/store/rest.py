"""
REST record store - hosted database-as-a-service (PostgREST dialect)

    GET    /rest/v1/{table}?user_id=eq.7&order=date.desc&limit=10
    POST   /rest/v1/{table}                  (Prefer: return=representation)
    PATCH  /rest/v1/{table}?id=eq.<id>&user_id=eq.7
    DELETE /rest/v1/{table}?id=eq.<id>&user_id=eq.7

The service applies its own row-level policies on top of the filters we send.
"""
import logging
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

import requests

from app.infrastructure.store.base import (
    RecordStore, StoreError, RecordNotFound, Filter, Order, Row,
)

logger = logging.getLogger(__name__)


def _encode(value: Any) -> Any:
    """Decimal/date/time -> JSON-совместимые значения"""
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return value


def _query_params(
    filters: Sequence[Filter],
    order: Optional[Order] = None,
    limit: Optional[int] = None,
) -> List[tuple]:
    params = []
    for f in filters:
        if f.op == "eq" and f.value is None:
            params.append((f.column, "is.null"))
        else:
            params.append((f.column, f"{f.op}.{_encode(f.value)}"))
    if order is not None:
        direction = "desc" if order.descending else "asc"
        params.append(("order", f"{order.column}.{direction}.nullslast"))
    if limit is not None:
        params.append(("limit", str(limit)))
    return params


class RestRecordStore(RecordStore):

    def __init__(
        self,
        base_url: str,
        api_key: str,
        access_token: Optional[str] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        if not base_url:
            raise ValueError("REST_URL is not configured")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = session or requests.Session()
        self.headers: Dict[str, str] = {
            "apikey": api_key,
            "Authorization": f"Bearer {access_token or api_key}",
            "Content-Type": "application/json",
        }

    def _url(self, table: str) -> str:
        return f"{self.base_url}/rest/v1/{table}"

    def _request(self, method: str, table: str, params=None, payload=None, prefer=None) -> Any:
        headers = dict(self.headers)
        if prefer:
            headers["Prefer"] = prefer
        try:
            resp = self.http.request(
                method,
                self._url(table),
                params=params,
                json=payload,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.exception("%s %s failed", method, table)
            raise StoreError(f"Record store unreachable: {e}") from e

        if resp.status_code >= 400:
            try:
                body = resp.json()
            except ValueError:
                body = None
            message = (body.get("message") if isinstance(body, dict) else None) or resp.text
            logger.error("%s %s -> HTTP %d: %s", method, table, resp.status_code, message)
            raise StoreError(f"Record store error (HTTP {resp.status_code}): {message}")

        if not resp.content:
            return None
        return resp.json()

    def select(self, table, filters=(), order=None, limit=None) -> List[Row]:
        data = self._request("GET", table, params=_query_params(filters, order, limit))
        return list(data or [])

    def insert(self, table, row) -> Row:
        payload = {k: _encode(v) for k, v in row.items()}
        data = self._request("POST", table, payload=payload, prefer="return=representation")
        if not data:
            raise StoreError(f"Insert into {table} returned no row")
        return data[0]

    def update(self, table, row, filters) -> Row:
        payload = {k: _encode(v) for k, v in row.items()}
        data = self._request(
            "PATCH", table,
            params=_query_params(filters),
            payload=payload,
            prefer="return=representation",
        )
        if not data:
            raise RecordNotFound(f"No matching row in {table}")
        return data[0]

    def delete(self, table, filters) -> None:
        data = self._request(
            "DELETE", table,
            params=_query_params(filters),
            prefer="return=representation",
        )
        if not data:
            raise RecordNotFound(f"No matching row in {table}")
