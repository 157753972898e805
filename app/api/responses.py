"""
JSON helpers for the API routers: view-models and mutation results -> responses
"""
from decimal import Decimal

from fastapi import HTTPException
from fastapi.encoders import jsonable_encoder

from app.application.mutations import MutationResult
from app.infrastructure.store.base import StoreError, RecordNotFound


def to_json(data):
    """Decimal как строка (деньги без потери точности)"""
    return jsonable_encoder(data, custom_encoder={Decimal: str})


def store_error_status(error: StoreError | None) -> int:
    return 404 if isinstance(error, RecordNotFound) else 502


def mutation_response(result: MutationResult):
    """
    ok -> {"ok", "message", "data"}
    store failure -> HTTPException(404 RecordNotFound / 502 остальное)
    """
    if not result.ok:
        raise HTTPException(status_code=store_error_status(result.error), detail=result.message)
    return {"ok": True, "message": result.message, "data": to_json(result.row)}


def view_response(view) -> dict:
    with view:
        return to_json(view.render())
