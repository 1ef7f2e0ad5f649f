"""Requests and Response models"""

from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import DistanceUnit, GameMode, GameStatus
from src.trivia.settings import MIN_YEAR, max_year


def _validate_timer_duration(value: Optional[int]) -> Optional[int]:
    if value is not None and value < 1:
        raise InvalidRequestError(
            f"Timer duration must be at least 1 minute, got {value}."
        )
    return value


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    game_mode: GameMode = GameMode.CLASSIC
    # Anything left out falls back to the preset of the game mode
    distance_unit: Optional[DistanceUnit] = None
    timer_enabled: Optional[bool] = None
    timer_duration: Optional[int] = None
    seed: Optional[int] = None

    @field_validator("timer_duration")
    @classmethod
    def validate_timer_duration(cls, value: Optional[int]) -> Optional[int]:
        return _validate_timer_duration(value)


class GetGameRequest(BaseModel):
    game_id: UUID


class GuessLocationRequest(BaseModel):
    game_id: UUID
    lat: float
    lng: float

    @field_validator("lat")
    @classmethod
    def validate_lat(cls, value: float) -> float:
        if not -90.0 <= value <= 90.0:
            raise InvalidRequestError(f"Latitude {value} not in range -90..90.")
        return value

    @field_validator("lng")
    @classmethod
    def validate_lng(cls, value: float) -> float:
        if not -180.0 <= value <= 180.0:
            raise InvalidRequestError(f"Longitude {value} not in range -180..180.")
        return value


class GuessYearRequest(BaseModel):
    game_id: UUID
    year: int

    @field_validator("year")
    @classmethod
    def validate_year(cls, value: int) -> int:
        latest = max_year(date.today())
        if not MIN_YEAR <= value <= latest:
            raise InvalidRequestError(
                f"Year {value} not in the playable range {MIN_YEAR}-{latest}."
            )
        return value


class SubmitGuessRequest(BaseModel):
    game_id: UUID


class NextRoundRequest(BaseModel):
    game_id: UUID


class UpdateSettingsRequest(BaseModel):
    game_id: UUID
    game_mode: Optional[GameMode] = None
    distance_unit: Optional[DistanceUnit] = None
    timer_enabled: Optional[bool] = None
    timer_duration: Optional[int] = None

    @field_validator("timer_duration")
    @classmethod
    def validate_timer_duration(cls, value: Optional[int]) -> Optional[int]:
        return _validate_timer_duration(value)


class RestartGameRequest(BaseModel):
    game_id: UUID


class ReturnHomeRequest(BaseModel):
    game_id: UUID


class EndGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class SettingsResponse(BaseModel):
    game_mode: GameMode
    distance_unit: DistanceUnit
    timer_enabled: bool
    timer_duration: int


class EventResponse(BaseModel):
    """Answer fields (year, location) stay empty while the round is being guessed."""

    id: str
    description: str
    image_url: str
    year: Optional[int] = None
    location_name: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None


class GuessResponse(BaseModel):
    lat: Optional[float]
    lng: Optional[float]
    year: int


class RoundResultResponse(BaseModel):
    round: int
    event: EventResponse
    guess: GuessResponse
    distance_error: Optional[float]  # None when no location was guessed
    distance_unit: DistanceUnit
    year_error: int
    location_score: int
    time_score: int
    total_score: int


class GameResponse(BaseModel):
    game_id: UUID
    status: GameStatus
    settings: SettingsResponse
    current_round: int
    total_rounds: int
    current_event: Optional[EventResponse]
    current_guess: Optional[GuessResponse]
    round_results: list[RoundResultResponse]
    cumulative_score: int
    timer_remaining: Optional[int]
    warnings: list[str]
