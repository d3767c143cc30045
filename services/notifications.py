"""
services/notifications.py – Transient user-facing notifications.

The gateway and the controller post here; the window subscribes and shows
each message in its status bar and log area.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, List, Literal

logger = logging.getLogger(__name__)

NotificationLevel = Literal["info", "success", "warning", "error"]

# How many past notifications are kept for inspection.
HISTORY_SIZE: int = 100


@dataclass(frozen=True)
class Notification:
    message: str
    level: NotificationLevel = "info"


Subscriber = Callable[[Notification], None]


class NotificationCenter:
    """Fan-out of notifications to subscribers, with a bounded history."""

    def __init__(self) -> None:
        self._subscribers: List[Subscriber] = []
        self._history: Deque[Notification] = deque(maxlen=HISTORY_SIZE)

    def subscribe(self, callback: Subscriber) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def notify(self, message: str, level: NotificationLevel = "info") -> Notification:
        notification = Notification(message=message, level=level)
        self._history.append(notification)
        logger.debug("Notification [%s]: %s", level, message)
        for callback in list(self._subscribers):
            callback(notification)
        return notification

    @property
    def history(self) -> List[Notification]:
        return list(self._history)
