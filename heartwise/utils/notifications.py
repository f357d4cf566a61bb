from collections import deque
from typing import Callable, List

from heartwise.utils.models import Notification

Subscriber = Callable[[Notification], None]


class NotificationChannel:
    """Explicit outlet for user-facing notices; keeps the most recent ones until drained."""

    def __init__(self, maxlen: int = 50):
        self._buffer = deque(maxlen=maxlen)
        self._subscribers: List[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> None:
        self._subscribers.append(callback)

    def emit(self, notification: Notification) -> None:
        self._buffer.append(notification)
        for callback in self._subscribers:
            callback(notification)

    def pending(self) -> List[Notification]:
        return list(self._buffer)

    def drain(self) -> List[Notification]:
        items = list(self._buffer)
        self._buffer.clear()
        return items
