"""Topic-addressed event bus for decoupled component communication.

Usage:
    bus = EventBus()

    def on_created(ingredient):
        print(f"Created: {ingredient.name}")

    subscription = bus.subscribe("dataHub", "Ingredient", "create", on_created)

    # Delivered synchronously, in registration order
    bus.publish("dataHub", "Ingredient", "create", ingredient)

    subscription.cancel()
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
import logging
from typing import Any

LOGGER = logging.getLogger(__name__)

DEFAULT_CHANNEL = "dataHub"

Handler = Callable[[Any], None]


@dataclass(frozen=True)
class Topic:
    """Exact address of a published event."""

    channel: str
    kind: str
    action: str

    def __str__(self) -> str:
        return f"{self.channel}/{self.kind}/{self.action}"


@dataclass(eq=False)
class Subscription:
    """Handle returned by :meth:`EventBus.subscribe`."""

    bus: EventBus
    topic: Topic
    handler: Handler
    active: bool = field(default=True)

    def cancel(self) -> None:
        """Stop delivery to this handler. Calling twice is a no-op."""
        self.bus.unsubscribe(self)


class EventBus:
    """Synchronous publish/subscribe bus keyed by (channel, kind, action).

    Handlers receive only the payload. Subscribers are stored per topic in
    registration order; publish iterates over a snapshot so handlers may
    subscribe or unsubscribe while an event is being delivered.
    """

    def __init__(self) -> None:
        self._subscribers: dict[Topic, list[Subscription]] = {}

    def subscribe(
        self, channel: str, kind: str, action: str, handler: Handler
    ) -> Subscription:
        """Register ``handler`` for one exact topic.

        Args:
            channel: Bus channel (e.g., "dataHub")
            kind: Entity kind (e.g., "Ingredient")
            action: Action name (e.g., "update")
            handler: Callable invoked with the event payload
        """
        topic = Topic(channel, kind, action)
        subscription = Subscription(self, topic, handler)
        self._subscribers.setdefault(topic, []).append(subscription)
        LOGGER.debug(
            "bus.subscribed", extra={"event": "bus.subscribed", "topic": str(topic)}
        )
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscription if it is still registered."""
        if not subscription.active:
            return
        subscription.active = False
        subscribers = self._subscribers.get(subscription.topic)
        if not subscribers:
            return
        try:
            subscribers.remove(subscription)
        except ValueError:
            return
        if not subscribers:
            del self._subscribers[subscription.topic]
        LOGGER.debug(
            "bus.unsubscribed",
            extra={"event": "bus.unsubscribed", "topic": str(subscription.topic)},
        )

    def publish(self, channel: str, kind: str, action: str, payload: Any) -> int:
        """Deliver ``payload`` to every subscriber of the topic.

        A handler that raises is logged and skipped; the remaining handlers
        still receive the event and the publisher never sees the error.

        Returns:
            Number of handlers invoked.
        """
        topic = Topic(channel, kind, action)
        subscribers = list(self._subscribers.get(topic, []))
        if not subscribers:
            LOGGER.debug(
                "bus.no_subscribers",
                extra={"event": "bus.no_subscribers", "topic": str(topic)},
            )
            return 0

        delivered = 0
        for subscription in subscribers:
            if not subscription.active:
                continue
            delivered += 1
            try:
                subscription.handler(payload)
            except Exception:
                LOGGER.exception(
                    "bus.handler.failed",
                    extra={"event": "bus.handler.failed", "topic": str(topic)},
                )
        return delivered

    def subscriber_count(
        self,
        channel: str | None = None,
        kind: str | None = None,
        action: str | None = None,
    ) -> int:
        """Count live subscriptions, optionally filtered by topic parts."""
        total = 0
        for topic, subscribers in self._subscribers.items():
            if channel is not None and topic.channel != channel:
                continue
            if kind is not None and topic.kind != kind:
                continue
            if action is not None and topic.action != action:
                continue
            total += len(subscribers)
        return total

    def clear(self) -> None:
        """Drop every subscription."""
        for subscribers in self._subscribers.values():
            for subscription in subscribers:
                subscription.active = False
        self._subscribers.clear()


class SubscriptionGroup:
    """Subscriptions owned by one component, released together.

    Widgets open a group when mounted and close it when unmounted::

        self._subscriptions = SubscriptionGroup(bus)
        self._subscriptions.subscribe(channel, "Ingredient", "update", handler)
        ...
        self._subscriptions.close()
    """

    def __init__(self, bus: EventBus) -> None:
        self.bus = bus
        self._subscriptions: list[Subscription] = []

    def __len__(self) -> int:
        return len(self._subscriptions)

    def __enter__(self) -> SubscriptionGroup:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    def subscribe(
        self, channel: str, kind: str, action: str, handler: Handler
    ) -> Subscription:
        subscription = self.bus.subscribe(channel, kind, action, handler)
        self._subscriptions.append(subscription)
        return subscription

    def close(self) -> None:
        """Cancel every subscription in the group."""
        while self._subscriptions:
            self._subscriptions.pop().cancel()


# Process-wide bus used by the application unless another one is injected
data_hub = EventBus()
