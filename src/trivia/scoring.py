"""
Scoring of a single round.

A round is worth at most 10 000 points: 5 000 for the location and 5 000 for the year.

- Location score decays exponentially with the great-circle distance between the guess and the event.
  Full marks at distance 0, approaching 0 for guesses on the other side of the globe.
- Time score: 5000 - 400 * year_error^0.9, floored at 0. Being off by 10 years still gives 1823 points,
  being off by 17 years or more gives nothing.

No side effects in this module: the same event and guess always produce the same result.
"""

import math
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Iterable, Optional

from src.core.shared_types import DistanceUnit
from src.trivia.events import HistoricalEvent
from src.trivia.geo import Coordinates, convert_km, haversine_km
from src.trivia.settings import DEFAULT_GUESS_YEAR

MAX_LOCATION_SCORE = 5000
MAX_TIME_SCORE = 5000

# Distance (km) at which the location score dropped to 1/e of the maximum.
LOCATION_DECAY_KM = 2000.0

# Fixed constants of the time score curve.
TIME_PENALTY_COEFFICIENT = 400
TIME_PENALTY_EXPONENT = 0.9


@dataclass
class PlayerGuess:
    location: Optional[Coordinates] = None
    year: int = DEFAULT_GUESS_YEAR


@dataclass(frozen=True)
class RoundResult:
    event: HistoricalEvent
    guess: PlayerGuess
    distance_error: float  # km, inf when no location was guessed
    year_error: int
    location_score: int
    time_score: int
    total_score: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "total_score", self.location_score + self.time_score)

    @property
    def has_location(self) -> bool:
        return self.guess.location is not None

    def distance_in(self, unit: DistanceUnit) -> float:
        return convert_km(self.distance_error, unit)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def location_score(distance_km: float) -> int:
    """Points for a guess ``distance_km`` away from the event. Infinity (no guess) scores 0."""
    if math.isinf(distance_km):
        return 0
    decay = math.exp(-distance_km / LOCATION_DECAY_KM)
    points = _round_half_up(MAX_LOCATION_SCORE * decay)
    return max(0, min(MAX_LOCATION_SCORE, points))


def time_score(year_error: int) -> int:
    penalty = min(
        MAX_TIME_SCORE, TIME_PENALTY_COEFFICIENT * year_error**TIME_PENALTY_EXPONENT
    )
    return max(0, _round_half_up(MAX_TIME_SCORE - penalty))


def score(event: HistoricalEvent, guess: PlayerGuess) -> RoundResult:
    """
    Compute the result of one round.

    A guess without a location is scored on the year only (distance error is +inf, location score 0).
    """
    if guess.location is None:
        distance_error = math.inf
    else:
        distance_error = haversine_km(guess.location, event.location.coordinates)

    year_error = abs(event.year - guess.year)
    return RoundResult(
        event=event,
        # results are immutable, the guess object keeps living in the session
        guess=deepcopy(guess),
        distance_error=distance_error,
        year_error=year_error,
        location_score=location_score(distance_error),
        time_score=time_score(year_error),
    )


def cumulative_score(results: Iterable[RoundResult]) -> int:
    return sum(result.total_score for result in results)
