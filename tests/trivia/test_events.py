"""Unit tests for src/trivia/events.py"""

from decimal import Decimal

import pytest

from src.core.exceptions import InvalidEventError
from src.trivia.events import SAMPLE_EVENTS, HistoricalEvent, Location
from src.trivia.settings import TOTAL_ROUNDS


def test_from_record_converts_storage_columns() -> None:
    """Rows come with flat column names and loosely typed numbers."""
    record = {
        "id": 42,
        "year": "1969",
        "description": "Moon landing",
        "image_url": "https://example.org/moon.jpg",
        "location_name": "Houston",
        "latitude": Decimal("29.7604"),
        "longitude": "-95.3698",
    }
    event = HistoricalEvent.from_record(record)

    assert event == HistoricalEvent(
        id="42",
        year=1969,
        description="Moon landing",
        image_url="https://example.org/moon.jpg",
        location=Location(name="Houston", lat=29.7604, lng=-95.3698),
    )


def test_record_roundtrip() -> None:
    event = SAMPLE_EVENTS[0]
    assert HistoricalEvent.from_record(event.to_record()) == event


@pytest.mark.parametrize(
    "broken_field, value",
    [
        ("latitude", None),  # missing coordinate
        ("year", "nineteen sixty"),
    ],
)
def test_from_record_rejects_broken_rows(broken_field: str, value: object) -> None:
    record = SAMPLE_EVENTS[0].to_record()
    record[broken_field] = value
    with pytest.raises(InvalidEventError):
        _ = HistoricalEvent.from_record(record)


def test_from_record_missing_column() -> None:
    record = SAMPLE_EVENTS[0].to_record()
    del record["image_url"]
    with pytest.raises(InvalidEventError):
        _ = HistoricalEvent.from_record(record)


def test_events_are_immutable() -> None:
    event = SAMPLE_EVENTS[0]
    with pytest.raises(AttributeError):
        event.year = 2000  # type: ignore[misc]


def test_sample_pool_is_playable() -> None:
    """Enough distinct events, all with coordinates on the map."""
    assert len(SAMPLE_EVENTS) >= TOTAL_ROUNDS
    assert len({event.id for event in SAMPLE_EVENTS}) == len(SAMPLE_EVENTS)
    assert all(event.location.coordinates.is_within_bounds() for event in SAMPLE_EVENTS)
