"""Non-blocking user notifications and error surfacing."""

import logging
from enum import Enum
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "An unexpected error occurred"


class NotificationLevel(str, Enum):
    """Severity of a toast notification."""

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    INFO = "info"


class Notifier(Protocol):
    """Anything able to show a short, auto-dismissing message."""

    def notify(self, message: str, level: NotificationLevel = NotificationLevel.SUCCESS) -> None:
        ...


def handle_error(error: Exception, notifier: Notifier) -> str:
    """
    Log an error and show it as an error notification.

    Returns the message that was shown.
    """
    logger.error("API error: %s", error)
    message = getattr(error, "message", None) or str(error) or DEFAULT_ERROR_MESSAGE
    notifier.notify(message, NotificationLevel.ERROR)
    return message
