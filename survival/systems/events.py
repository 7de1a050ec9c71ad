"""Synchronous event dispatch between survival systems."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, List, Type, TypeVar

if TYPE_CHECKING:
    from ..body.body import Body
    from ..effects.registry import EffectRegistry

logger = logging.getLogger("survival.events")


@dataclass
class SurvivalEvent:
    owner_name: str
    body: "Body"
    effects: "EffectRegistry"


@dataclass
class StarvingEvent(SurvivalEvent):
    """Raised every tick the body needed more calories than it had stored."""

    calorie_deficit: float = 0.0
    minutes: float = 1.0
    is_new: bool = True


@dataclass
class StoppedStarvingEvent(SurvivalEvent):
    pass


E = TypeVar("E", bound=SurvivalEvent)
Handler = Callable[[SurvivalEvent], None]


class EventDispatcher:
    """Per-actor publish/subscribe hub. Handlers run in subscription order."""

    def __init__(self) -> None:
        self._handlers: Dict[Type[SurvivalEvent], List[Handler]] = {}

    def subscribe(self, event_type: Type[E], handler: Callable[[E], None]) -> None:
        self._handlers.setdefault(event_type, []).append(handler)  # type: ignore[arg-type]

    def unsubscribe(self, event_type: Type[E], handler: Callable[[E], None]) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)  # type: ignore[arg-type]

    def publish(self, event: SurvivalEvent) -> int:
        """Deliver ``event`` to its handlers; returns how many ran."""
        handlers = list(self._handlers.get(type(event), []))
        if not handlers:
            logger.debug("No handlers for %s", type(event).__name__)
        for handler in handlers:
            handler(event)
        return len(handlers)


__all__ = [
    "EventDispatcher",
    "StarvingEvent",
    "StoppedStarvingEvent",
    "SurvivalEvent",
]
