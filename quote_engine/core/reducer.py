"""
Reducer: pure state transition functions.

The reducer must be:
- Pure (no I/O besides logging, never mutates its input state)
- Deterministic (same input -> same output)
"""

from typing import Callable, Dict, Optional
from .events import Event
from .state import ApplicationState
from .errors import UnknownEventType

# Handler signature: (current_state, event) -> new_state
Handler = Callable[[ApplicationState, Event], ApplicationState]


class Reducer:
    """
    Registry of event handlers for state transitions.

    Usage:
        reducer = Reducer()
        reducer.register("ZoneDefined", on_zone_defined)
        new_state = reducer.apply(state, event)
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, Handler] = {}

    def register(self, event_type: str, handler: Handler) -> None:
        """
        Register event handler.

        Args:
            event_type: Event tag string
            handler: Pure function (state, event) -> new_state
        """
        self._handlers[event_type] = handler

    def handles(self, event_type: str) -> bool:
        return event_type in self._handlers

    def apply(self, state: ApplicationState, event: Event) -> ApplicationState:
        """
        Apply event to state using registered handler.

        Raises:
            UnknownEventType: If no handler registered for event type
        """
        handler: Optional[Handler] = self._handlers.get(event.type)
        if handler is None:
            raise UnknownEventType(event.type)
        return handler(state, event)
