"""A small publish/subscribe bus with filter-based matching."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable


class Event:
    """Base class for events that can travel over an :class:`EventBus`."""

    def subscribed(self) -> None:
        """Hook called when this event is used as a subscription filter."""


@dataclass
class Subscription:
    """A filter event and the callback to run for matching events."""

    filter: Any
    callback: Callable[[Any], None]


class EventBus:
    """Dispatches published events to subscribers of the same event type.

    A subscriber receives an event only when its filter compares equal to it.
    """

    def __init__(self) -> None:
        self._subscribers: dict[type, list[Subscription]] = {}

    def subscribe(self, filter: Any, callback: Callable[[Any], None]) -> None:
        """Register ``callback`` for events of ``type(filter)`` equal to ``filter``."""
        filter.subscribed()
        self._subscribers.setdefault(type(filter), []).append(
            Subscription(filter, callback)
        )

    def publish(self, event: Any) -> None:
        """Deliver ``event`` to every matching subscriber, in subscription order."""
        for subscription in tuple(self._subscribers.get(type(event), ())):
            if subscription.filter == event:
                subscription.callback(event)