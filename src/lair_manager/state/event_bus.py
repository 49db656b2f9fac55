"""
Event bus for lair state changes.

Lets dashboards and audit trails react to rule outcomes without the
systems knowing who is listening.

Usage:
    bus = EventBus()
    bus.on(EventType.MINION_MOOD_CHANGED, my_handler)

    # Emitted by MinionSystem when a mood label flips
    bus.emit(EventType.MINION_MOOD_CHANGED, minion_id=3, before="Happy", after="Grumpy")

    def my_handler(event: LairEvent):
        print(f"Minion {event.data['minion_id']} is now {event.data['after']}")
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Lair events that can be published."""

    # Minion events
    MINION_RECRUITED = "minion.recruited"
    MINION_LOYALTY_CHANGED = "minion.loyalty_changed"
    MINION_MOOD_CHANGED = "minion.mood_changed"

    # Equipment events
    EQUIPMENT_DEGRADED = "equipment.degraded"
    EQUIPMENT_MAINTAINED = "equipment.maintained"

    # Scheme events
    SCHEME_SUCCESS_UPDATED = "scheme.success_updated"

    # Generic lifecycle
    ENTITY_CREATED = "entity.created"
    ENTITY_DELETED = "entity.deleted"


@dataclass
class LairEvent:
    """
    Event payload for the event bus.

    Attributes:
        type: The event type (from EventType enum)
        data: Event-specific payload as dict
        timestamp: When the event was emitted
    """

    type: EventType
    data: dict = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"[{self.type.value}] {self.data}"


EventHandler = Callable[[LairEvent], None]


class EventBus:
    """
    Synchronous event bus.

    Listeners are called immediately on emit(), on the emitting thread.
    One bad listener is logged and skipped so the rest still run.
    """

    def __init__(self, history_limit: int = 100):
        self._listeners: dict[EventType, list[EventHandler]] = {}
        self._history: list[LairEvent] = []
        self._history_limit = history_limit
        self._lock = threading.Lock()

    def on(self, event_type: EventType, handler: EventHandler) -> None:
        """Subscribe to an event type."""
        with self._lock:
            handlers = self._listeners.setdefault(event_type, [])
            if handler not in handlers:
                handlers.append(handler)

    def off(self, event_type: EventType, handler: EventHandler) -> None:
        """Unsubscribe from an event type."""
        with self._lock:
            if handler in self._listeners.get(event_type, []):
                self._listeners[event_type].remove(handler)

    def emit(self, event_type: EventType, **data) -> LairEvent:
        """
        Emit an event to all subscribers.

        Returns:
            The emitted LairEvent (for chaining/testing)
        """
        event = LairEvent(type=event_type, data=data)

        with self._lock:
            self._history.append(event)
            if len(self._history) > self._history_limit:
                self._history = self._history[-self._history_limit :]
            handlers = list(self._listeners.get(event_type, []))

        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception(f"Error in handler for {event_type.value}")

        return event

    def clear(self) -> None:
        """Clear all listeners and history. Useful for testing."""
        with self._lock:
            self._listeners.clear()
            self._history.clear()

    def get_history(self, event_type: EventType | None = None) -> list[LairEvent]:
        """Recent events, optionally filtered by type."""
        with self._lock:
            if event_type is None:
                return list(self._history)
            return [e for e in self._history if e.type == event_type]

    def listener_count(self, event_type: EventType) -> int:
        return len(self._listeners.get(event_type, []))
