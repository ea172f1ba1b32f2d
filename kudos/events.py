"""Typed events emitted while a message is applied.

Events are collected in emission order on the message's :class:`EventManager`.
Indexers and UIs subscribe to observe them; the ledger never reads them back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Event:
    type: str
    attributes: tuple[tuple[str, str], ...] = ()

    def attribute(self, key: str) -> str | None:
        for name, value in self.attributes:
            if name == key:
                return value
        return None

    def as_dict(self) -> dict[str, str]:
        return dict(self.attributes)


EventSubscriber = Callable[[Event], None]


@dataclass
class EventManager:
    _events: list[Event] = field(default_factory=list)
    _subscribers: list[EventSubscriber] = field(default_factory=list)

    @property
    def events(self) -> tuple[Event, ...]:
        return tuple(self._events)

    def subscribe(self, subscriber: EventSubscriber) -> None:
        self._subscribers.append(subscriber)

    def emit(self, event: Event) -> None:
        self._events.append(event)
        logger.debug("Emitted event %s %s", event.type, event.as_dict())
        for subscriber in self._subscribers:
            subscriber(event)

    def emit_all(self, events: tuple[Event, ...] | list[Event]) -> None:
        for event in events:
            self.emit(event)


__all__ = ["Event", "EventManager", "EventSubscriber"]
