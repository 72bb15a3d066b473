"""
Change notifications for the UI - platform independent.
The controller emits these after each mutation so views can refresh.
"""


class Event:
    """Event type constants for session changes."""

    NOTES_CHANGED = "notes_changed"
    ROOT_CHANGED = "root_changed"
    TUNING_CHANGED = "tuning_changed"
    PITCH_CHANGED = "pitch_changed"
    TRANSPOSE_CHANGED = "transpose_changed"
    TIMBRE_CHANGED = "timbre_changed"
    OCTAVE_CHANGED = "octave_changed"
    HOLD_CHANGED = "hold_changed"


class EventBus:
    """Minimal synchronous publish/subscribe hub."""

    def __init__(self):
        self._subscribers = {}

    def subscribe(self, event_type, callback):
        """
        Subscribe to an event type.

        Args:
            event_type: Event type constant from Event class
            callback: Function to call when event occurs, receives data dict
        """
        if event_type not in self._subscribers:
            self._subscribers[event_type] = []
        self._subscribers[event_type].append(callback)

    def unsubscribe(self, event_type, callback):
        """Remove a callback from an event type."""
        if event_type in self._subscribers:
            try:
                self._subscribers[event_type].remove(callback)
            except ValueError:
                pass

    def emit(self, event_type, data=None):
        """Emit an event to all subscribers."""
        for callback in list(self._subscribers.get(event_type, ())):
            callback(data)
