"""Drill events for the event system."""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable


class EventType(Enum):
    """Types of drill events."""

    # Strategy drill events
    SCENARIO_DEALT = auto()
    ANSWER_JUDGED = auto()
    VARIANT_CHANGED = auto()

    # Counting drill events
    CARD_DEALT = auto()
    GUESS_JUDGED = auto()
    SHOE_RESHUFFLED = auto()

    # Shared events
    SESSION_RESET = auto()

    # Timed drill events
    TIMED_DRILL_STARTED = auto()
    TIMED_DRILL_TICK = auto()
    TIMED_DRILL_COMPLETED = auto()
    TIMED_DRILL_CANCELLED = auto()


@dataclass(frozen=True)
class DrillEvent:
    """
    Immutable drill event.

    Events are the primary communication mechanism between the drill
    sessions and the presentation layer. They are emitted only once a
    transition has been fully applied.
    """

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


# Type alias for event handlers
EventHandler = Callable[[DrillEvent], None]


class EventEmitter:
    """
    Simple event emitter for drill events.

    Allows subscribing to specific event types or all events.
    """

    def __init__(self, history_limit: int = 500) -> None:
        """Initialize the event emitter."""
        self._handlers: dict[EventType | None, list[EventHandler]] = {}
        self._event_history: deque[DrillEvent] = deque(maxlen=history_limit)

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """
        Subscribe to events.

        Args:
            handler: Function to call when event occurs
            event_type: Specific event type to subscribe to, or None for all events
        """
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """Unsubscribe a handler; unknown handlers are ignored."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: DrillEvent) -> None:
        """
        Emit an event to all subscribers.

        Args:
            event: The event to emit
        """
        self._event_history.append(event)

        # Call type-specific handlers
        for handler in list(self._handlers.get(event.event_type, [])):
            handler(event)

        # Call catch-all handlers
        for handler in list(self._handlers.get(None, [])):
            handler(event)

    def emit_new(
        self,
        event_type: EventType,
        **data: Any,
    ) -> DrillEvent:
        """
        Create and emit a new event.

        Args:
            event_type: Type of event
            **data: Event data

        Returns:
            The created event
        """
        event = DrillEvent(event_type=event_type, data=data)
        self.emit(event)
        return event

    @property
    def history(self) -> list[DrillEvent]:
        """Return the event history."""
        return list(self._event_history)

    def clear_history(self) -> None:
        """Clear the event history."""
        self._event_history.clear()
