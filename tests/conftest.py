"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from datetime import date
from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.db.schema import Base
from src.trivia.events import HistoricalEvent, Location

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)

# Fixed "today" so year validation and daily seeds do not depend on the calendar
TODAY = date(2024, 6, 15)


@pytest.fixture
def today() -> date:
    return TODAY


class FakeClock:
    """Wall clock that only moves when a test moves it."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


def make_event(
    event_id: str, year: int = 1962, lat: float = 0.0, lng: float = 0.0
) -> HistoricalEvent:
    return HistoricalEvent(
        id=event_id,
        year=year,
        description=f"Photograph of {event_id}",
        image_url=f"/images/{event_id}.jpg",
        location=Location(name=f"Place of {event_id}", lat=lat, lng=lng),
    )


@pytest.fixture(name="make_event")
def make_event_fixture():
    """Factory for events, for tests that need a specific year or place."""
    return make_event


@pytest.fixture
def event_pool() -> list[HistoricalEvent]:
    """Seven events, all in different years and places."""
    return [
        make_event("paris", year=1944, lat=48.8566, lng=2.3522),
        make_event("dallas", year=1963, lat=32.7767, lng=-96.7970),
        make_event("berlin", year=1989, lat=52.5200, lng=13.4050),
        make_event("tokyo", year=1964, lat=35.6762, lng=139.6503),
        make_event("havana", year=1962, lat=23.1136, lng=-82.3666),
        make_event("cape-town", year=1990, lat=-33.9249, lng=18.4241),
        make_event("sydney", year=1973, lat=-33.8568, lng=151.2153),
    ]
