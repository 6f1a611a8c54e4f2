"""
Notification channel for transient user-facing notices (toasts)
"""

from typing import Callable, List
from pydantic import BaseModel
import enum
import logging

logger = logging.getLogger(__name__)

class NoticeKind(str, enum.Enum):
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"

class Notice(BaseModel):
    message: str
    kind: NoticeKind = NoticeKind.INFO

NoticeHandler = Callable[[Notice], None]

class NotificationChannel:
    """
    Minimal publish/subscribe bus. Any component may emit a notice without
    holding store internals; views subscribe to present them.
    """

    def __init__(self):
        self._handlers: List[NoticeHandler] = []

    def subscribe(self, handler: NoticeHandler) -> Callable[[], None]:
        """Register a handler; returns a function that removes it again"""
        self._handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    def notify(self, message: str, kind: NoticeKind = NoticeKind.INFO) -> None:
        """Deliver a notice to every current subscriber"""
        notice = Notice(message=message, kind=kind)
        for handler in list(self._handlers):
            try:
                handler(notice)
            except Exception:
                logger.exception(f"Notification handler failed for notice: {message}")

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)
