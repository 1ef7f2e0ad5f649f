"""
Historical events: the photographs a player has to place in space and time.

Events are supplied by the data source (see src/db) and never mutated by the game.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Self

from src.core.exceptions import InvalidEventError
from src.trivia.geo import Coordinates


@dataclass(frozen=True)
class Location:
    name: str
    lat: float
    lng: float

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(self.lat, self.lng)


@dataclass(frozen=True)
class HistoricalEvent:
    id: str
    year: int
    description: str
    image_url: str
    location: Location

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Self:
        """
        Convert a storage row into an event.

        Rows use flat column names (image_url, location_name, latitude, longitude).
        Numeric columns may arrive as strings or decimals, so they are coerced here.
        """
        try:
            return cls(
                id=str(record["id"]),
                year=int(record["year"]),
                description=str(record["description"]),
                image_url=str(record["image_url"]),
                location=Location(
                    name=str(record["location_name"]),
                    lat=float(record["latitude"]),
                    lng=float(record["longitude"]),
                ),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidEventError(
                f"Cannot convert record {record.get('id')!r} into a HistoricalEvent: {exc}"
            ) from exc

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "year": self.year,
            "description": self.description,
            "image_url": self.image_url,
            "location_name": self.location.name,
            "latitude": self.location.lat,
            "longitude": self.location.lng,
        }


# Default pool, used when no database is configured.
SAMPLE_EVENTS: tuple[HistoricalEvent, ...] = (
    HistoricalEvent(
        id="moon-landing-broadcast",
        year=1969,
        description="Crowds watch the Apollo 11 moon landing on television screens.",
        image_url="/images/events/moon-landing-broadcast.jpg",
        location=Location(name="New York City, USA", lat=40.7580, lng=-73.9855),
    ),
    HistoricalEvent(
        id="berlin-wall-fall",
        year=1989,
        description="People climb onto the Berlin Wall at the Brandenburg Gate.",
        image_url="/images/events/berlin-wall-fall.jpg",
        location=Location(name="Berlin, Germany", lat=52.5163, lng=13.3777),
    ),
    HistoricalEvent(
        id="march-on-washington",
        year=1963,
        description="Marchers gather at the Lincoln Memorial for the March on Washington.",
        image_url="/images/events/march-on-washington.jpg",
        location=Location(name="Washington, D.C., USA", lat=38.8893, lng=-77.0502),
    ),
    HistoricalEvent(
        id="tokyo-olympics-opening",
        year=1964,
        description="The Olympic flame is lit at the opening ceremony of the Summer Games.",
        image_url="/images/events/tokyo-olympics-opening.jpg",
        location=Location(name="Tokyo, Japan", lat=35.6778, lng=139.7145),
    ),
    HistoricalEvent(
        id="cuban-missile-crisis",
        year=1962,
        description="Reconnaissance photograph of missile sites during the Cuban Missile Crisis.",
        image_url="/images/events/cuban-missile-crisis.jpg",
        location=Location(name="San Cristobal, Cuba", lat=22.7167, lng=-83.05),
    ),
    HistoricalEvent(
        id="mandela-release",
        year=1990,
        description="Nelson Mandela walks out of prison after 27 years.",
        image_url="/images/events/mandela-release.jpg",
        location=Location(name="Paarl, South Africa", lat=-33.7342, lng=18.9621),
    ),
    HistoricalEvent(
        id="sydney-opera-house-opening",
        year=1973,
        description="Queen Elizabeth II opens the Sydney Opera House.",
        image_url="/images/events/sydney-opera-house-opening.jpg",
        location=Location(name="Sydney, Australia", lat=-33.8568, lng=151.2153),
    ),
    HistoricalEvent(
        id="hindenburg-disaster",
        year=1937,
        description="The airship Hindenburg catches fire while docking.",
        image_url="/images/events/hindenburg-disaster.jpg",
        location=Location(name="Lakehurst, New Jersey, USA", lat=40.0307, lng=-74.3254),
    ),
)
