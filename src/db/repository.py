"""Protocol repository for the pool of historical events (SQLAlchemy version in sql_repository.py)"""

from typing import Iterable, Protocol

from src.trivia.events import SAMPLE_EVENTS, HistoricalEvent


class EventRepository(Protocol):
    """Source of the events a game draws its rounds from"""

    def list_events(self) -> list[HistoricalEvent]:
        """All available events, newest first."""
        ...

    def get_event(self, event_id: str) -> HistoricalEvent | None:
        """Get event by ID, if record exists."""
        ...

    def add_event(self, event: HistoricalEvent) -> HistoricalEvent:
        """Store a new event in the pool."""
        ...


class InMemoryEventRepository:
    """Events kept in a dictionary. Defaults to the bundled sample pool."""

    def __init__(self, events: Iterable[HistoricalEvent] = SAMPLE_EVENTS) -> None:
        self._events: dict[str, HistoricalEvent] = {event.id: event for event in events}

    def list_events(self) -> list[HistoricalEvent]:
        # insertion order, newest last -> reverse
        return list(reversed(self._events.values()))

    def get_event(self, event_id: str) -> HistoricalEvent | None:
        return self._events.get(event_id)

    def add_event(self, event: HistoricalEvent) -> HistoricalEvent:
        self._events[event.id] = event
        return event
