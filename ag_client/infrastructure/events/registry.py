# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Per-entity-type observer registries.

Every entity type has exactly one ObserverRegistry per AutograderClient.
Observers are plain objects implementing any subset of the entity type's
``on_<prefix>_<kind>`` methods.

Dispatch is synchronous and in subscription order, so by the time an
entity operation returns to its caller every observer subscribed at
dispatch time has already seen the event.

Example:
    registry = ObserverRegistry("course")

    class Sidebar:
        def on_course_created(self, course):
            ...

    sidebar = Sidebar()
    registry.subscribe(sidebar)
    registry.notify(EventKinds.CREATED, course)
"""

import logging
from typing import Any

from ag_client.infrastructure.events.types import handler_name

logger = logging.getLogger(__name__)


class ObserverRegistry:
    """Ordered set of observers for one entity type.

    Membership is by object identity, so subscribing the same observer
    twice has no additional effect and unhashable observers are accepted.

    Attributes:
        prefix: Event prefix used to build observer method names.
        _observers: Observers keyed by id(), in subscription order.
    """

    def __init__(self, prefix: str) -> None:
        """Initialize an empty registry.

        Args:
            prefix: Entity type event prefix (e.g. "course").
        """
        self.prefix = prefix
        self._observers: dict[int, Any] = {}
        self._event_count = 0

    def subscribe(self, observer: Any) -> None:
        """Add an observer. Idempotent."""
        if id(observer) in self._observers:
            return
        self._observers[id(observer)] = observer
        logger.debug("Subscribed %s observer: %r", self.prefix, observer)

    def unsubscribe(self, observer: Any) -> bool:
        """Remove an observer. Idempotent.

        Returns:
            True if the observer was subscribed, False otherwise.
        """
        removed = self._observers.pop(id(observer), None) is not None
        if removed:
            logger.debug("Unsubscribed %s observer: %r", self.prefix, observer)
        return removed

    def is_subscribed(self, observer: Any) -> bool:
        """Check whether an observer is currently subscribed."""
        return id(observer) in self._observers

    def __len__(self) -> int:
        return len(self._observers)

    def notify(self, kind: str, *args: Any) -> int:
        """Deliver an event to every current observer.

        Observers are called in subscription order. An observer removed by
        an earlier observer during the same dispatch is skipped. Observers
        that do not implement the event's method are skipped. Errors raised
        by one observer are logged and do not stop delivery to the rest.

        Args:
            kind: Event kind (see EventKinds).
            *args: Arguments passed to each observer method.

        Returns:
            Number of observers whose handler completed without raising.
        """
        method_name = handler_name(self.prefix, kind)
        self._event_count += 1

        delivered = 0
        for key, observer in list(self._observers.items()):
            if key not in self._observers:
                continue

            handler = getattr(observer, method_name, None)
            if handler is None:
                continue

            try:
                handler(*args)
            except Exception as e:
                logger.error(
                    "Observer error for %s: %s",
                    method_name,
                    str(e),
                    exc_info=True,
                )
            else:
                delivered += 1

        logger.debug("Dispatched %s to %d observers", method_name, delivered)
        return delivered

    def clear(self) -> None:
        """Remove all observers."""
        self._observers.clear()

    def get_stats(self) -> dict[str, Any]:
        """Get registry statistics."""
        return {
            "prefix": self.prefix,
            "observers": len(self._observers),
            "events_dispatched": self._event_count,
        }


class ObserverRegistries:
    """One ObserverRegistry per entity type, created on first use.

    Owned by an AutograderClient: created when the client is created and
    cleared when it is closed.
    """

    def __init__(self) -> None:
        self._registries: dict[type, ObserverRegistry] = {}

    def for_type(self, entity_type: type) -> ObserverRegistry:
        """Get the registry for an entity type.

        Args:
            entity_type: Entity class exposing an EVENT_PREFIX attribute.

        Returns:
            The registry for that type.
        """
        registry = self._registries.get(entity_type)
        if registry is None:
            registry = ObserverRegistry(entity_type.EVENT_PREFIX)
            self._registries[entity_type] = registry
        return registry

    def clear(self) -> None:
        """Remove every observer from every registry."""
        for registry in self._registries.values():
            registry.clear()
        self._registries.clear()
        logger.debug("Observer registries cleared")
