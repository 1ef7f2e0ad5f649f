"""
Type definitions used across layers
"""

from enum import StrEnum


class GameMode(StrEnum):
    CLASSIC = "classic"
    TIMED = "timed"
    DAILY = "daily"
    FRIENDS = "friends"


class DistanceUnit(StrEnum):
    KM = "km"
    MI = "mi"


class GameStatus(StrEnum):
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    ROUND_RESULT = "round-result"
    GAME_OVER = "game-over"
