"""Message sinks for user-facing survival messages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Protocol


class MessageSink(Protocol):
    def add(self, message: str) -> None:
        ...


@dataclass
class Notification:
    message: str
    minute: int


class MessageLog:
    """Collects messages with the simulated minute they were raised at.

    ``owner_name`` replaces a ``{target}`` placeholder in incoming messages.
    """

    def __init__(self, owner_name: str = "You", limit: Optional[int] = None) -> None:
        self.owner_name = owner_name
        self.limit = limit
        self.minute = 0
        self.notifications: List[Notification] = []

    def __len__(self) -> int:
        return len(self.notifications)

    def add(self, message: str) -> None:
        text = message.replace("{target}", self.owner_name)
        self.notifications.append(Notification(text, self.minute))
        if self.limit is not None and len(self.notifications) > self.limit:
            del self.notifications[: len(self.notifications) - self.limit]

    def advance(self, minutes: int) -> None:
        self.minute += max(0, minutes)

    def messages(self) -> List[str]:
        return [notification.message for notification in self.notifications]

    def latest(self, count: int = 6) -> List[str]:
        return [notification.message for notification in self.notifications[-count:]]

    def clear(self) -> None:
        self.notifications.clear()


def publish(sink: Optional[MessageSink], messages: Iterable[str]) -> None:
    """Forward ``messages`` to ``sink`` when one was supplied."""
    if sink is None:
        return
    for message in messages:
        sink.add(message)


__all__ = [
    "MessageLog",
    "MessageSink",
    "Notification",
    "publish",
]
