"""
Notification boundary - the core emits notify(level, message),
the surrounding UI decides how to show it (flash message, log, JSON field).
"""
import logging
from dataclasses import dataclass, asdict
from typing import List, MutableMapping

logger = logging.getLogger(__name__)

SUCCESS = "success"
ERROR = "error"
LEVELS = (SUCCESS, ERROR)

FLASH_SESSION_KEY = "flash"


@dataclass(frozen=True)
class Notification:
    level: str
    message: str


class Notifier:
    """Base notifier: only logs"""

    def notify(self, level: str, message: str) -> None:
        if level not in LEVELS:
            raise ValueError(f"Unknown notification level: {level}")
        if level == ERROR:
            logger.warning("notify[%s]: %s", level, message)
        else:
            logger.info("notify[%s]: %s", level, message)
        self.emit(Notification(level, message))

    def emit(self, notification: Notification) -> None:
        pass

    def success(self, message: str) -> None:
        self.notify(SUCCESS, message)

    def error(self, message: str) -> None:
        self.notify(ERROR, message)


LoggingNotifier = Notifier


class CollectingNotifier(Notifier):
    """Копит уведомления в памяти (JSON API, тесты)"""

    def __init__(self):
        self.items: List[Notification] = []

    def emit(self, notification: Notification) -> None:
        self.items.append(notification)

    @property
    def last(self) -> Notification | None:
        return self.items[-1] if self.items else None


class SessionNotifier(CollectingNotifier):
    """
    Flash messages: stored in the signed session cookie and shown
    on the next rendered page (see pop_flash)
    """

    def __init__(self, session: MutableMapping):
        super().__init__()
        self.session = session

    def emit(self, notification: Notification) -> None:
        super().emit(notification)
        flashes = list(self.session.get(FLASH_SESSION_KEY, []))
        flashes.append(asdict(notification))
        self.session[FLASH_SESSION_KEY] = flashes


def pop_flash(session: MutableMapping) -> list[dict]:
    """Забрать flash-сообщения (показываются один раз)"""
    return session.pop(FLASH_SESSION_KEY, None) or []
