"""Orchestration of communication from API router to game sessions and the event repository (and the reverse direction)."""

import logging
import time
from typing import Callable, Optional
from uuid import UUID, uuid4

from src.api.models import (
    CreateGameRequest,
    EndGameRequest,
    EventResponse,
    GameResponse,
    GetGameRequest,
    GuessLocationRequest,
    GuessResponse,
    GuessYearRequest,
    NextRoundRequest,
    RestartGameRequest,
    ReturnHomeRequest,
    RoundResultResponse,
    SettingsResponse,
    SubmitGuessRequest,
    UpdateSettingsRequest,
)
from src.core.config import AppConfig
from src.core.exceptions import SessionNotFoundError
from src.core.shared_types import DistanceUnit, GameStatus
from src.db.repository import EventRepository
from src.trivia.events import HistoricalEvent
from src.trivia.scoring import PlayerGuess, RoundResult
from src.trivia.session import GameSession
from src.trivia.settings import GameSettings

logger = logging.getLogger(__name__)


class TriviaService:
    """
    Orchestration of layers for the trivia game. Keeps one GameSession per game id, in memory.
    ----
    Sessions are only dropped by end_game(). A finished game stays available for restart_game(),
    so the caller is expected to end games the player left (closed tab, idle timeout).
    """

    def __init__(
        self,
        repository: EventRepository,
        config: Optional[AppConfig] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.repo = repository
        self.config = config or AppConfig()
        self._clock = clock
        self._sessions: dict[UUID, GameSession] = {}

    # -- API routes logic ---
    def create_game(self, request: CreateGameRequest) -> GameResponse:
        """Player picked a game mode on the home screen."""

        # Start from the preset of the mode, then apply the explicit choices of the request
        settings = self._apply_overrides(
            GameSettings.for_mode(request.game_mode),
            distance_unit=request.distance_unit,
            timer_enabled=request.timer_enabled,
            timer_duration=request.timer_duration,
        )

        session = GameSession(
            event_source=self.repo.list_events,
            settings=settings,
            clock=self._clock,
            auto_schedule=self.config.auto_schedule_timers,
            tick_seconds=self.config.timer_tick_seconds,
        )
        session.start(settings, seed=request.seed)

        game_id = uuid4()
        self._sessions[game_id] = session
        logger.info("Created game %s (%s)", game_id, settings.game_mode)
        return self._create_game_response(game_id, session)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Polled by the frontend, e.g. to show the countdown of a timed round.
        A round whose time ran out since the last call is submitted before the state is returned.
        """
        session = self._fetch_session(request.game_id)
        return self._create_game_response(request.game_id, session)

    def set_guess_location(self, request: GuessLocationRequest) -> GameResponse:
        session = self._fetch_session(request.game_id)
        session.set_guess_location(request.lat, request.lng)
        return self._create_game_response(request.game_id, session)

    def set_guess_year(self, request: GuessYearRequest) -> GameResponse:
        session = self._fetch_session(request.game_id)
        session.set_guess_year(request.year)
        return self._create_game_response(request.game_id, session)

    def submit_guess(self, request: SubmitGuessRequest) -> GameResponse:
        session = self._fetch_session(request.game_id)
        session.submit_guess()
        return self._create_game_response(request.game_id, session)

    def next_round(self, request: NextRoundRequest) -> GameResponse:
        session = self._fetch_session(request.game_id)
        session.next_round()
        return self._create_game_response(request.game_id, session)

    def update_settings(self, request: UpdateSettingsRequest) -> GameResponse:
        session = self._fetch_session(request.game_id)
        settings = self._apply_overrides(
            session.settings,
            game_mode=request.game_mode,
            distance_unit=request.distance_unit,
            timer_enabled=request.timer_enabled,
            timer_duration=request.timer_duration,
        )
        session.update_settings(settings)
        return self._create_game_response(request.game_id, session)

    def restart_game(self, request: RestartGameRequest) -> GameResponse:
        """Play again with the same settings (new events)."""
        session = self._fetch_session(request.game_id)
        session.restart()
        return self._create_game_response(request.game_id, session)

    def return_home(self, request: ReturnHomeRequest) -> GameResponse:
        session = self._fetch_session(request.game_id)
        session.return_home()
        return self._create_game_response(request.game_id, session)

    def end_game(self, request: EndGameRequest) -> None:
        """Forget a game altogether (player closed the app)."""
        session = self._sessions.pop(request.game_id, None)
        if session is not None:
            session.return_home()

    # -- Internal helpers --
    def _fetch_session(self, game_id: UUID) -> GameSession:
        """Attempt to find the session and raise error if it fails."""
        session = self._sessions.get(game_id)
        if session is None:
            raise SessionNotFoundError(f"Game with {game_id=} not found.")
        return session

    @staticmethod
    def _apply_overrides(settings: GameSettings, **overrides) -> GameSettings:
        changes = {key: value for key, value in overrides.items() if value is not None}
        return settings.with_changes(**changes) if changes else settings

    def _create_game_response(
        self, game_id: UUID, session: GameSession
    ) -> GameResponse:
        """Convert the state of a GameSession to a GameResponse (for game with given ID.)"""
        state = session.state
        unit = state.settings.distance_unit

        current_event = None
        if state.game_status != GameStatus.NOT_STARTED:
            event = state.events[state.current_round - 1]
            # The answer is only revealed once the round has a result
            current_event = _event_response(
                event, reveal=state.game_status != GameStatus.IN_PROGRESS
            )

        return GameResponse(
            game_id=game_id,
            status=state.game_status,
            settings=_settings_response(state.settings),
            current_round=state.current_round,
            total_rounds=state.total_rounds,
            current_event=current_event,
            current_guess=(
                _guess_response(state.current_guess)
                if state.current_guess is not None
                else None
            ),
            round_results=[
                _round_result_response(index, result, unit)
                for index, result in enumerate(state.round_results, start=1)
            ],
            cumulative_score=session.cumulative_score(),
            timer_remaining=state.timer_remaining,
            warnings=session.drain_warnings(),
        )


def _settings_response(settings: GameSettings) -> SettingsResponse:
    return SettingsResponse(
        game_mode=settings.game_mode,
        distance_unit=settings.distance_unit,
        timer_enabled=settings.timer_enabled,
        timer_duration=settings.timer_duration,
    )


def _event_response(event: HistoricalEvent, reveal: bool) -> EventResponse:
    if not reveal:
        return EventResponse(
            id=event.id, description=event.description, image_url=event.image_url
        )
    return EventResponse(
        id=event.id,
        description=event.description,
        image_url=event.image_url,
        year=event.year,
        location_name=event.location.name,
        lat=event.location.lat,
        lng=event.location.lng,
    )


def _guess_response(guess: PlayerGuess) -> GuessResponse:
    return GuessResponse(
        lat=guess.location.lat if guess.location else None,
        lng=guess.location.lng if guess.location else None,
        year=guess.year,
    )


def _round_result_response(
    round_number: int, result: RoundResult, unit: DistanceUnit
) -> RoundResultResponse:
    return RoundResultResponse(
        round=round_number,
        event=_event_response(result.event, reveal=True),
        guess=_guess_response(result.guess),
        distance_error=result.distance_in(unit) if result.has_location else None,
        distance_unit=unit,
        year_error=result.year_error,
        location_score=result.location_score,
        time_score=result.time_score,
        total_score=result.total_score,
    )
