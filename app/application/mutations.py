"""
Mutation controllers - validate -> write -> invalidate -> notify

Base class for the per-entity controllers. One call writes exactly one row
through the user-scoped record store.

- Validation failure: error notification + *ValidationError raised,
  the record store is not contacted.
- Store failure: error notification, MutationResult(ok=False); cache untouched,
  previously cached data stays as it was.
- Success: every query prefix from the invalidation table is invalidated,
  then the success notification is emitted.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from app.application.context import UserContext
from app.application.invalidation import invalidate_for
from app.infrastructure.store.base import StoreError, RecordNotFound, eq

logger = logging.getLogger(__name__)


class MutationValidationError(ValueError):
    """Ошибка валидации входных полей (до обращения к record store)"""
    pass


@dataclass(frozen=True)
class MutationResult:
    ok: bool
    row: Optional[Dict[str, Any]] = None
    error: Optional[StoreError] = None
    message: Optional[str] = None

    @property
    def not_found(self) -> bool:
        return isinstance(self.error, RecordNotFound)


# === Field helpers ===

def required_text(value, message: str) -> str:
    text = str(value).strip() if value is not None else ""
    if not text:
        raise ValueError(message)
    return text


def optional_text(value) -> str | None:
    if value is None:
        return None
    return str(value).strip() or None


def choice(value, allowed: Tuple[str, ...], label: str) -> str:
    if value not in allowed:
        raise ValueError(f"Invalid {label}: {value!r}")
    return value


def provided(fields: Mapping, key: str, partial: bool) -> bool:
    """Поле надо валидировать: при create - всегда, при update - если передано"""
    return not partial or key in fields


class MutationController:
    """
    Per-entity create / update / delete

    Subclasses set table, messages and validation_error, and implement validate().
    messages: action -> (success message | None, failure message)
    """

    table: str = ""
    messages: Dict[str, Tuple[Optional[str], str]] = {}
    validation_error = MutationValidationError

    def __init__(self, ctx: UserContext):
        self.ctx = ctx

    def validate(self, fields: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
        """Вернуть нормализованный payload строки или бросить ValueError"""
        raise NotImplementedError

    # === Operations ===

    def create(self, fields: Mapping[str, Any]) -> MutationResult:
        row = self._validated(fields, partial=False)
        return self._write("create", lambda: self.ctx.store.insert(self.table, row))

    def update(self, record_id: str, fields: Mapping[str, Any]) -> MutationResult:
        row = self._validated(fields, partial=True)
        if not row:
            self._reject("Nothing to update")
        return self._write(
            "update", lambda: self.ctx.store.update(self.table, row, [eq("id", record_id)])
        )

    def delete(self, record_id: str) -> MutationResult:
        return self._write("delete", lambda: self.ctx.store.delete(self.table, [eq("id", record_id)]))

    # === Internals ===

    def _reject(self, message: str):
        self.ctx.notifier.error(message)
        raise self.validation_error(message)

    def _validated(self, fields: Mapping[str, Any] | None, partial: bool) -> Dict[str, Any]:
        try:
            return self.validate(dict(fields or {}), partial=partial)
        except ValueError as e:
            self.ctx.notifier.error(str(e))
            if isinstance(e, self.validation_error):
                raise
            raise self.validation_error(str(e)) from e

    def _write(self, action: str, op: Callable[[], Any]) -> MutationResult:
        success, failure = self.messages[action]
        try:
            row = op()
        except StoreError as e:
            logger.warning("%s on %s failed for user %s: %s", action, self.table, self.ctx.user.id, e)
            self.ctx.notifier.error(failure)
            return MutationResult(ok=False, error=e, message=failure)

        invalidate_for(self.ctx.cache, self.table, self.ctx.user.id)
        logger.info("%s on %s succeeded for user %s", action, self.table, self.ctx.user.id)
        if success:
            self.ctx.notifier.success(success)
        return MutationResult(ok=True, row=row, message=success)
