"""
The GameSession is the entrypoint into the domain layer for the service layer.

It owns the GameState of one player's game and is the only thing allowed to change it.
Lifecycle of a game:

    not-started -> in-progress -> round-result -> in-progress -> ... -> round-result -> game-over

- start() / restart() (re-)initialise the game from any status
- return_home() goes back to not-started from any status, throwing away the current game
- an operation called from a status that does not allow it raises InvalidTransitionError and changes nothing

In timed games a RoundTimer runs while the player is guessing. When it runs out the current guess is
submitted automatically. Every transition away from in-progress cancels the timer.
The timer follows the wall clock: queries and guessing operations first catch up on the time that
passed, so a session nobody ticks still expires on time.
"""

import asyncio
import logging
import random
import time
from copy import deepcopy
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional, Sequence

from src.core.exceptions import (
    InvalidGuessError,
    InvalidTransitionError,
    NotEnoughEventsError,
)
from src.core.shared_types import GameMode, GameStatus
from src.trivia.events import HistoricalEvent
from src.trivia.geo import Coordinates
from src.trivia.scoring import PlayerGuess, RoundResult, cumulative_score, score
from src.trivia.settings import (
    DEFAULT_GUESS_YEAR,
    MIN_YEAR,
    TOTAL_ROUNDS,
    GameSettings,
    daily_seed,
    max_year,
)
from src.trivia.timer import RoundTimer

logger = logging.getLogger(__name__)

EventSource = Callable[[], Sequence[HistoricalEvent]]

NO_LOCATION_WARNING = "No location selected: only the year guess will be scored."
MISSING_GUESS_WARNING = "Missing guess: please select a location and a year."
TIME_UP_WARNING = "Time's up! Your guess has been submitted automatically."


@dataclass
class GameState:
    settings: GameSettings
    events: tuple[HistoricalEvent, ...] = ()
    current_round: int = 1
    total_rounds: int = TOTAL_ROUNDS
    round_results: list[RoundResult] = field(default_factory=list)
    game_status: GameStatus = GameStatus.NOT_STARTED
    current_guess: Optional[PlayerGuess] = None
    timer_start_time: Optional[float] = None
    timer_remaining: Optional[int] = None  # seconds


def _fresh_guess() -> PlayerGuess:
    return PlayerGuess(location=None, year=DEFAULT_GUESS_YEAR)


def _event_loop_running() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


class GameSession:
    """One game, owned by one presentation context."""

    def __init__(
        self,
        event_source: EventSource,
        settings: Optional[GameSettings] = None,
        clock: Callable[[], float] = time.time,
        today: Callable[[], date] = date.today,
        auto_schedule: bool = False,
        tick_seconds: float = 1.0,
    ) -> None:
        self._event_source = event_source
        self._clock = clock
        self._today = today
        self._auto_schedule = auto_schedule
        self._tick_seconds = tick_seconds
        self._state = GameState(settings=settings or GameSettings())
        self._timer: Optional[RoundTimer] = None
        self._warnings: list[str] = []

    # --- QUERIES ---
    @property
    def state(self) -> GameState:
        """Snapshot of the current state. Changing it has no effect on the session."""
        self._catch_up()
        return deepcopy(self._state)

    @property
    def status(self) -> GameStatus:
        self._catch_up()
        return self._state.game_status

    @property
    def settings(self) -> GameSettings:
        return self._state.settings

    @property
    def current_round(self) -> int:
        return self._state.current_round

    @property
    def timer(self) -> Optional[RoundTimer]:
        return self._timer

    @property
    def current_event(self) -> Optional[HistoricalEvent]:
        self._catch_up()
        if self._state.game_status == GameStatus.NOT_STARTED:
            return None
        return self._state.events[self._state.current_round - 1]

    @property
    def is_last_round(self) -> bool:
        return self._state.current_round == self._state.total_rounds

    @property
    def last_result(self) -> Optional[RoundResult]:
        self._catch_up()
        return self._state.round_results[-1] if self._state.round_results else None

    def cumulative_score(self) -> int:
        self._catch_up()
        return cumulative_score(self._state.round_results)

    def drain_warnings(self) -> list[str]:
        """User-facing warnings raised since the last call. Reading them clears them."""
        self._catch_up()
        warnings = self._warnings.copy()
        self._warnings.clear()
        return warnings

    # --- LIFECYCLE ---
    def start(
        self, settings: Optional[GameSettings] = None, seed: Optional[int] = None
    ) -> None:
        """
        Start a new game. Allowed from any status: a running game is discarded.

        The events are drawn once, without replacement, and keep their order for the whole game.
        Daily games are seeded with the date, so all players of a day get the same events.
        """
        settings = settings or self._state.settings
        if seed is None and settings.game_mode == GameMode.DAILY:
            seed = daily_seed(self._today())

        pool = list(self._event_source())
        if len(pool) < TOTAL_ROUNDS:
            raise NotEnoughEventsError(
                f"Need at least {TOTAL_ROUNDS} events to start a game, the event source supplied {len(pool)}."
            )
        events = tuple(random.Random(seed).sample(pool, TOTAL_ROUNDS))

        self._disarm_timer()
        self._warnings.clear()
        self._state = GameState(
            settings=settings,
            events=events,
            current_round=1,
            total_rounds=TOTAL_ROUNDS,
            round_results=[],
            game_status=GameStatus.IN_PROGRESS,
            current_guess=_fresh_guess(),
        )
        self._arm_timer()
        logger.info(
            "Game started: mode=%s events=%s",
            settings.game_mode,
            [event.id for event in events],
        )

    def restart(self) -> None:
        self.start(self._state.settings)

    def return_home(self) -> None:
        """Abandon the current game. Confirming this with the player is the caller's job."""
        self._disarm_timer()
        self._warnings.clear()
        self._state = GameState(settings=self._state.settings)
        logger.info("Returned home, game discarded")

    def update_settings(self, settings: GameSettings) -> None:
        """Replace the settings at any moment. Round progress is kept, the timer restarts with the new duration."""
        self._catch_up()
        self._state.settings = settings
        if self._state.game_status == GameStatus.IN_PROGRESS:
            self._disarm_timer()
            self._arm_timer()
        else:
            self._state.timer_remaining = settings.timer_seconds
        logger.info("Settings updated: %s", settings)

    # --- GUESSING ---
    def set_guess_location(self, lat: float, lng: float) -> None:
        self._catch_up()
        self._require(GameStatus.IN_PROGRESS, "set the guessed location")
        location = Coordinates.checked(lat, lng)
        guess = self._state.current_guess or _fresh_guess()
        guess.location = location
        self._state.current_guess = guess

    def set_guess_year(self, year: int) -> None:
        self._catch_up()
        self._require(GameStatus.IN_PROGRESS, "set the guessed year")
        latest = max_year(self._today())
        if not MIN_YEAR <= year <= latest:
            raise InvalidGuessError(
                f"Year {year} outside of the playable range {MIN_YEAR}-{latest}."
            )
        guess = self._state.current_guess or _fresh_guess()
        guess.year = int(year)
        self._state.current_guess = guess

    def submit_guess(self) -> Optional[RoundResult]:
        """The player locks in the current guess."""
        self._catch_up()
        self._require(GameStatus.IN_PROGRESS, "submit a guess")
        return self._finish_round(forced=False)

    def force_submit(self) -> Optional[RoundResult]:
        """The timer locks in the current guess. Same result as a manual submit of the same guess."""
        self._require(GameStatus.IN_PROGRESS, "force a submission")
        return self._finish_round(forced=True)

    def next_round(self) -> None:
        self._require(GameStatus.ROUND_RESULT, "go to the next round")
        if self.is_last_round:
            self._state.game_status = GameStatus.GAME_OVER
            logger.info("Game over, final score %d", self.cumulative_score())
            return

        self._state.current_round += 1
        self._state.current_guess = _fresh_guess()
        self._state.game_status = GameStatus.IN_PROGRESS
        self._arm_timer()
        logger.info("Round %d started", self._state.current_round)

    def tick(self) -> None:
        """Advance the round timer by one tick (for callers that do not let it run on an event loop)."""
        if self._timer is None:
            return
        self._timer.tick()
        self._sync_timer_remaining()

    # --- INTERNAL HELPERS ---
    def _require(self, status: GameStatus, action: str) -> None:
        if self._state.game_status != status:
            raise InvalidTransitionError(
                f"Cannot {action} while the game is {self._state.game_status}, it must be {status}."
            )

    def _finish_round(self, forced: bool) -> Optional[RoundResult]:
        guess = self._state.current_guess
        if guess is None or guess.year is None:
            self._warnings.append(MISSING_GUESS_WARNING)
            return None

        # one result per round, whatever fires first
        if len(self._state.round_results) >= self._state.current_round:
            raise InvalidTransitionError(
                f"Round {self._state.current_round} already has a result."
            )

        self._sync_timer_remaining()
        self._disarm_timer()

        result = score(self._state.events[self._state.current_round - 1], guess)
        self._state.round_results.append(result)
        self._state.game_status = GameStatus.ROUND_RESULT

        if forced:
            self._warnings.append(TIME_UP_WARNING)
        elif guess.location is None:
            self._warnings.append(NO_LOCATION_WARNING)

        logger.info(
            "Round %d %s: %d points (distance=%.1f km, year error=%d)",
            self._state.current_round,
            "forced" if forced else "submitted",
            result.total_score,
            result.distance_error,
            result.year_error,
        )
        return result

    def _arm_timer(self) -> None:
        seconds = self._state.settings.timer_seconds
        if seconds is None:
            self._state.timer_start_time = None
            self._state.timer_remaining = None
            return

        self._timer = RoundTimer(
            duration_seconds=seconds,
            on_expire=self._on_timer_expired,
            round_number=self._state.current_round,
            clock=self._clock,
        )
        self._state.timer_start_time = self._timer.started_at
        self._state.timer_remaining = seconds
        if not self._auto_schedule:
            return
        if _event_loop_running():
            self._timer.schedule(self._tick_seconds)
        else:
            logger.debug(
                "No running event loop, round %d timer follows the clock only",
                self._state.current_round,
            )

    def _disarm_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None

    def _catch_up(self) -> None:
        if self._timer is not None:
            # may expire the round, which disarms the timer
            self._timer.catch_up()
        self._sync_timer_remaining()

    def _sync_timer_remaining(self) -> None:
        if self._timer is not None:
            self._state.timer_remaining = self._timer.remaining_seconds

    def _on_timer_expired(self, round_number: int) -> None:
        stale = (
            self._state.game_status != GameStatus.IN_PROGRESS
            or round_number != self._state.current_round
            or len(self._state.round_results) >= round_number
        )
        if stale:
            logger.debug("Ignoring timer expiry for round %d", round_number)
            return
        self.force_submit()
