"""
Transient user notifications (toasts).

The Notifier keeps a bounded in-memory queue; the UI drains it on each
render. An optional listener is called for every new notification.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Deque, List, Optional

from src.common.config import Config

logger = logging.getLogger(__name__)

SUCCESS = "success"
ERROR = "error"
INFO = "info"


@dataclass(frozen=True)
class Notification:
    level: str
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return {
            "level": self.level,
            "message": self.message,
            "created_at": self.created_at.isoformat(),
        }


class Notifier:
    """Bounded queue of notifications; the oldest is dropped when full."""

    def __init__(
        self,
        max_size: Optional[int] = None,
        listener: Optional[Callable[[Notification], None]] = None,
    ):
        self.max_size = max_size or Config.NOTIFICATION_QUEUE_SIZE
        self.listener = listener
        self._queue: Deque[Notification] = deque(maxlen=self.max_size)

    def __len__(self) -> int:
        return len(self._queue)

    def notify(self, level: str, message: str) -> Notification:
        notification = Notification(level=level, message=message)
        self._queue.append(notification)
        if self.listener is not None:
            self.listener(notification)
        return notification

    def success(self, message: str) -> Notification:
        return self.notify(SUCCESS, message)

    def error(self, message: str) -> Notification:
        logger.debug(f"Error notification: {message}")
        return self.notify(ERROR, message)

    def info(self, message: str) -> Notification:
        return self.notify(INFO, message)

    def pending(self) -> List[Notification]:
        """Queued notifications, oldest first, without removing them."""
        return list(self._queue)

    def drain(self) -> List[Notification]:
        """Remove and return all queued notifications, oldest first."""
        drained = list(self._queue)
        self._queue.clear()
        return drained
