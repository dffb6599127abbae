"""Events — append-only лог settlement-событий."""

from .sink import EventSink, InMemoryEventSink

__all__ = [
    "EventSink",
    "InMemoryEventSink",
]
