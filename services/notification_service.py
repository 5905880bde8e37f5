"""
User-facing notifications for bulk operations.

Services report progress and outcomes through a Notifier. The default
implementation logs each message and keeps it so the HTTP response can hand
the same messages back to the user.
"""

from typing import Protocol
import structlog

from models.imports import NotificationMessage

logger = structlog.get_logger(__name__)


class Notifier(Protocol):
    """Fire-and-forget message sink."""

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class CollectingNotifier:
    """Notifier that logs and records messages in order."""

    def __init__(self, **context):
        self.messages: list[NotificationMessage] = []
        self._log = logger.bind(**context)

    def info(self, message: str) -> None:
        self._log.info("notify", level="info", text=message)
        self.messages.append(NotificationMessage(level="info", message=message))

    def success(self, message: str) -> None:
        self._log.info("notify", level="success", text=message)
        self.messages.append(NotificationMessage(level="success", message=message))

    def error(self, message: str) -> None:
        self._log.warning("notify", level="error", text=message)
        self.messages.append(NotificationMessage(level="error", message=message))
