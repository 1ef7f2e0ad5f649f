"""
Game settings and the presets offered per game mode.
"""

from dataclasses import dataclass, replace
from datetime import date
from typing import Optional, Self

from src.core.exceptions import InvalidSettingsError
from src.core.shared_types import DistanceUnit, GameMode

TOTAL_ROUNDS = 5

# Year slider bounds. The upper bound moves with the calendar.
MIN_YEAR = 1900
DEFAULT_GUESS_YEAR = 1962


def max_year(today: Optional[date] = None) -> int:
    return (today or date.today()).year


@dataclass(frozen=True)
class GameSettings:
    game_mode: GameMode = GameMode.CLASSIC
    distance_unit: DistanceUnit = DistanceUnit.KM
    timer_enabled: bool = False
    timer_duration: int = 5  # minutes

    def __post_init__(self) -> None:
        if self.timer_duration < 1:
            raise InvalidSettingsError(
                f"Timer duration must be at least 1 minute, got {self.timer_duration}."
            )

    @property
    def timer_seconds(self) -> Optional[int]:
        """Round time limit in seconds, None when the timer is switched off."""
        if not self.timer_enabled:
            return None
        return self.timer_duration * 60

    @classmethod
    def for_mode(cls, mode: GameMode) -> Self:
        """Settings a new game of the given mode starts with."""
        return cls(**MODE_PRESETS[GameMode(mode)])

    def with_changes(self, **changes) -> Self:
        return replace(self, **changes)


MODE_PRESETS: dict[GameMode, dict] = {
    GameMode.CLASSIC: dict(
        game_mode=GameMode.CLASSIC,
        distance_unit=DistanceUnit.KM,
        timer_enabled=False,
        timer_duration=5,
    ),
    GameMode.TIMED: dict(
        game_mode=GameMode.TIMED,
        distance_unit=DistanceUnit.KM,
        timer_enabled=True,
        timer_duration=5,
    ),
    GameMode.DAILY: dict(
        game_mode=GameMode.DAILY,
        distance_unit=DistanceUnit.KM,
        timer_enabled=False,
        timer_duration=5,
    ),
    GameMode.FRIENDS: dict(
        game_mode=GameMode.FRIENDS,
        distance_unit=DistanceUnit.KM,
        timer_enabled=False,
        timer_duration=5,
    ),
}


def daily_seed(day: date) -> int:
    """Everybody playing the daily competition on the same day gets the same events."""
    return day.year * 10_000 + day.month * 100 + day.day
