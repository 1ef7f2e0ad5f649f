"""Generate database session"""

from typing import Generator, Iterable

from sqlalchemy import Engine, create_engine, func, select
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import AppConfig
from src.db.schema import Base, DBHistoricalEvent
from src.trivia.events import SAMPLE_EVENTS, HistoricalEvent


def build_engine(config: AppConfig) -> Engine:
    engine = create_engine(config.database_url, echo=config.sql_echo)
    # Ensure all tables are created
    Base.metadata.create_all(bind=engine)
    return engine


def build_session_factory(config: AppConfig) -> sessionmaker[Session]:
    return sessionmaker(bind=build_engine(config))


def get_db(
    session_factory: sessionmaker[Session],
) -> Generator[Session, None, None]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


def seed_events(db: Session, events: Iterable[HistoricalEvent] = SAMPLE_EVENTS) -> int:
    """Fill an empty events table. Returns the number of inserted events."""
    if db.scalar(select(func.count()).select_from(DBHistoricalEvent)):
        return 0
    records = [DBHistoricalEvent(**event.to_record()) for event in events]
    db.add_all(records)
    db.commit()
    return len(records)
