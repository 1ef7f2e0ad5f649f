"""Implementation of (Event)Repository using SQLAlchemy"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.db.schema import DBHistoricalEvent
from src.trivia.events import HistoricalEvent


class SQLEventRepository:
    """Events stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def list_events(self) -> list[HistoricalEvent]:
        """All available events, newest first."""
        query = select(DBHistoricalEvent).order_by(
            DBHistoricalEvent.created_at.desc(), DBHistoricalEvent.id
        )
        return [self._to_event(event_db) for event_db in self.db.scalars(query)]

    def get_event(self, event_id: str) -> HistoricalEvent | None:
        """Get event by ID, if record exists."""
        event_db = self._fetch_event(event_id)
        if event_db:
            return self._to_event(event_db)
        return None

    def add_event(self, event: HistoricalEvent) -> HistoricalEvent:
        """Store a new event in the pool."""
        event_db = DBHistoricalEvent(**event.to_record())
        self.db.add(event_db)
        self.db.commit()
        self.db.refresh(event_db)
        return self._to_event(event_db)

    def _fetch_event(self, event_id: str) -> DBHistoricalEvent | None:
        query = select(DBHistoricalEvent).where(DBHistoricalEvent.id == event_id)
        return self.db.scalar(query)

    def _to_event(self, event_db: DBHistoricalEvent) -> HistoricalEvent:
        """Convert SQLAlchemy model to domain event."""
        return HistoricalEvent.from_record(
            {
                "id": event_db.id,
                "year": event_db.year,
                "description": event_db.description,
                "image_url": event_db.image_url,
                "location_name": event_db.location_name,
                "latitude": event_db.latitude,
                "longitude": event_db.longitude,
            }
        )
